"""Contract identifier parsing for proxy-upgrades library."""

from .constants import ARTIFACT_SUFFIX, SOURCE_SUFFIX
from .exceptions import ParseError
from .types import ContractIdentifier, ContractInfo


def parse_identifier(identifier: str) -> ContractIdentifier:
    """
    Parse a contract name into its canonical form.

    Accepted forms, checked in order:
    - "MyContract.sol": short name is the file name without ".sol"
    - "MyContract.sol:MyContract": split at the single ":"
    - "out/MyContract.sol/MyContract.json": the last two path segments give
      the source file name and the short name

    Args:
        identifier: Contract name as given by the user

    Returns:
        ContractIdentifier with file_name (artifact store lookup key) and short_name

    Raises:
        ParseError: If the name matches none of the accepted forms
    """
    separators = identifier.count(":")

    if separators == 0 and identifier.endswith(SOURCE_SUFFIX):
        # Artifacts are keyed by source file name only, never by its directory
        file_name = identifier.rsplit("/", 1)[-1]
        short_name = file_name[: -len(SOURCE_SUFFIX)]
        if short_name:
            return ContractIdentifier(file_name=file_name, short_name=short_name)

    elif separators == 1:
        file_name, short_name = identifier.split(":")
        if file_name.endswith(SOURCE_SUFFIX) and len(file_name) > len(SOURCE_SUFFIX) and short_name:
            return ContractIdentifier(file_name=file_name, short_name=short_name)

    elif separators == 0 and identifier.endswith(ARTIFACT_SUFFIX) and "/" in identifier:
        segments = identifier.split("/")
        file_name = segments[-2]
        short_name = segments[-1][: -len(ARTIFACT_SUFFIX)]
        if file_name and short_name:
            return ContractIdentifier(file_name=file_name, short_name=short_name)

    raise ParseError(identifier)


def fully_qualified_name(info: ContractInfo) -> str:
    """Return "<source path>:<short name>" for a resolved contract."""
    return info.fully_qualified_name
