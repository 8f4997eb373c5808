"""Compiled artifact readers for proxy-upgrades library."""

import json
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from .constants import UPGRADES_FROM_TAG
from .exceptions import NotFoundError
from .identifiers import parse_identifier
from .log import get_logger
from .paths import get_artifact_path, get_out_dir
from .types import ContractIdentifier, ContractInfo

logger = get_logger(__name__)


def _load_artifact(identifier: ContractIdentifier, out_dir: Union[Path, str]) -> Dict[str, Any]:
    artifact_path = get_artifact_path(identifier.file_name, identifier.short_name, out_dir)
    try:
        with open(artifact_path) as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise NotFoundError(
            f"Could not find artifact for contract '{identifier.short_name}' at {artifact_path}. "
            "Make sure the project has been compiled."
        ) from e
    except json.JSONDecodeError as e:
        raise NotFoundError(
            f"Artifact for contract '{identifier.short_name}' at {artifact_path} is not valid JSON"
        ) from e

    if not isinstance(data, dict):
        raise NotFoundError(
            f"Artifact for contract '{identifier.short_name}' at {artifact_path} is not an object"
        )
    return data


def read_artifact(identifier: ContractIdentifier, out_dir: Union[Path, str]) -> ContractInfo:
    """
    Read the compiled artifact for a contract.

    Args:
        identifier: Parsed contract identifier
        out_dir: Compiler output directory

    Returns:
        ContractInfo with source path, short name, bytecode and license

    Raises:
        NotFoundError: If the artifact file is missing or a required field is absent
    """
    data = _load_artifact(identifier, out_dir)

    ast = data.get("ast")
    bytecode = data.get("bytecode")
    if not isinstance(ast, dict) or not isinstance(bytecode, dict):
        raise NotFoundError(
            f"Artifact for contract '{identifier.short_name}' is missing 'ast' or 'bytecode'"
        )

    contract_path = ast.get("absolutePath")
    bytecode_object = bytecode.get("object")
    if not isinstance(contract_path, str) or not isinstance(bytecode_object, str):
        raise NotFoundError(
            f"Artifact for contract '{identifier.short_name}' is missing "
            "'ast.absolutePath' or 'bytecode.object'"
        )

    # The compiler writes null when the source has no SPDX identifier
    if "license" not in ast:
        raise NotFoundError(
            f"Artifact for contract '{identifier.short_name}' is missing 'ast.license'"
        )
    spdx_license = ast["license"]
    if spdx_license is not None and not isinstance(spdx_license, str):
        raise NotFoundError(
            f"Artifact for contract '{identifier.short_name}' has an invalid 'ast.license'"
        )

    return ContractInfo(
        contract_path=contract_path,
        short_name=identifier.short_name,
        bytecode=bytecode_object,
        license=spdx_license,
    )


def get_contract_info(
    contract_name: str, out_dir: Optional[Union[Path, str]] = None
) -> ContractInfo:
    """
    Parse a contract name and read its artifact.

    Args:
        contract_name: e.g. "Greeter.sol", "Greeter.sol:Greeter" or
                       "out/Greeter.sol/Greeter.json"
        out_dir: Compiler output directory (defaults to $FOUNDRY_OUT, then ./out)

    Raises:
        ParseError: If the contract name is malformed
        NotFoundError: If the artifact cannot be read
    """
    identifier = parse_identifier(contract_name)
    info = read_artifact(identifier, get_out_dir(out_dir))
    logger.debug("artifact_read", contract=contract_name, path=info.contract_path)
    return info


def _iter_nodes(node: Any) -> Iterator[Dict[str, Any]]:
    if isinstance(node, dict):
        yield node
        for value in node.values():
            yield from _iter_nodes(value)
    elif isinstance(node, list):
        for item in node:
            yield from _iter_nodes(item)


def find_upgrades_from_annotation(
    identifier: ContractIdentifier, out_dir: Union[Path, str]
) -> Optional[str]:
    """
    Find the reference contract declared by an "@custom:oz-upgrades-from" tag.

    Looks at the NatSpec documentation of the contract's definition in the
    artifact AST.

    Returns:
        Reference contract name as written in the tag, or None if not annotated

    Raises:
        NotFoundError: If the artifact cannot be read
    """
    data = _load_artifact(identifier, out_dir)

    for node in _iter_nodes(data.get("ast", {})):
        if node.get("nodeType") != "ContractDefinition":
            continue
        if node.get("name") != identifier.short_name:
            continue

        documentation = node.get("documentation")
        if isinstance(documentation, dict):
            documentation = documentation.get("text")
        if not isinstance(documentation, str):
            return None

        for line in documentation.splitlines():
            _, tag, rest = line.partition(UPGRADES_FROM_TAG)
            if tag and rest.split():
                return rest.split()[0]
        return None

    return None
