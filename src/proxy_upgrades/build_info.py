"""Build-info lookup for proxy-upgrades library."""

import shlex
from pathlib import Path
from typing import Optional, Union

from .artifacts import get_contract_info
from .constants import ARTIFACT_SUFFIX
from .exceptions import AmbiguousBuildInfoError, NotFoundError
from .log import get_logger
from .paths import get_build_info_dir, get_out_dir
from .process import Runner, run_shell
from .types import BuildInfoReference

logger = get_logger(__name__)


def _search_command(needle: str, directory: Path) -> list[str]:
    # grep exits 1 when nothing matches; map that to success so an empty
    # result reads as "no match" instead of a failed invocation
    return [
        "grep",
        "-rlF",
        "--",
        shlex.quote(needle),
        shlex.quote(str(directory)),
        "||",
        "test",
        "$?",
        "-eq",
        "1",
    ]


def locate_build_info(
    bytecode: str,
    contract_name: str,
    out_dir: Union[Path, str],
    runner: Runner = run_shell,
) -> BuildInfoReference:
    """
    Find the build-info file that contains a contract's bytecode.

    Args:
        bytecode: Contract creation bytecode, with or without 0x prefix
        contract_name: Contract name, used in error messages
        out_dir: Compiler output directory
        runner: Shell runner (defaults to process.run_shell)

    Returns:
        BuildInfoReference to the single matching file

    Raises:
        NotFoundError: If no build-info file contains the bytecode
        AmbiguousBuildInfoError: If more than one build-info file contains it
        ToolInvocationError: If the search could not be run
    """
    needle = bytecode[2:] if bytecode.startswith("0x") else bytecode
    if not needle:
        raise NotFoundError(
            f"Could not find build-info file for contract '{contract_name}': bytecode is empty"
        )

    build_info_dir = get_build_info_dir(out_dir)
    result = runner(_search_command(needle, build_info_dir))

    matches = [
        line.strip()
        for line in result.stdout_text.splitlines()
        if line.strip().endswith(ARTIFACT_SUFFIX)
    ]

    if not matches:
        raise NotFoundError(
            f"Could not find build-info file with matching bytecode for contract "
            f"'{contract_name}' in {build_info_dir}. Make sure the project has been "
            "compiled with build info enabled."
        )

    if len(matches) > 1:
        raise AmbiguousBuildInfoError(
            f"Found {len(matches)} build-info files containing the bytecode of contract "
            f"'{contract_name}': {', '.join(sorted(matches))}. Remove stale build-info "
            "files and recompile.",
            candidates=sorted(matches),
        )

    logger.debug("build_info_located", contract=contract_name, path=matches[0])
    return BuildInfoReference(path=Path(matches[0]))


def get_build_info_file(
    contract_name: str, out_dir: Optional[Union[Path, str]] = None
) -> BuildInfoReference:
    """
    Find the build-info file for a contract given by name.

    Args:
        contract_name: e.g. "Greeter.sol" or "Greeter.sol:Greeter"
        out_dir: Compiler output directory (defaults to $FOUNDRY_OUT, then ./out)
    """
    resolved_out_dir = get_out_dir(out_dir)
    info = get_contract_info(contract_name, resolved_out_dir)
    return locate_build_info(info.bytecode, contract_name, resolved_out_dir)
