"""Upgrade safety validation for proxy-upgrades library."""

import shlex
from pathlib import Path
from typing import List, Optional, Union

from .constants import UPGRADES_CORE_PACKAGE
from .exceptions import ValidationError
from .log import get_logger
from .paths import get_build_info_dir
from .process import Runner, run_shell
from .types import ContractInfo, DeploymentOptions

logger = get_logger(__name__)


def build_validate_command(
    contract: ContractInfo,
    out_dir: Union[Path, str],
    options: DeploymentOptions,
    reference: Optional[str] = None,
    require_reference: bool = False,
) -> List[str]:
    """
    Build the command line for the upgrades-core validator.

    Args:
        contract: New implementation
        out_dir: Compiler output directory
        options: Deployment options (unsafe_* flags are forwarded)
        reference: Fully qualified name of the contract being upgraded from
        require_reference: Fail validation if no reference can be determined
    """
    command = [
        "npx",
        UPGRADES_CORE_PACKAGE,
        "validate",
        shlex.quote(str(get_build_info_dir(out_dir))),
        "--contract",
        shlex.quote(contract.fully_qualified_name),
    ]

    if reference is not None:
        command += ["--reference", shlex.quote(reference)]
    if require_reference:
        command.append("--requireReference")
    if options.unsafe_allow:
        command += ["--unsafeAllow", shlex.quote(",".join(options.unsafe_allow))]
    if options.unsafe_allow_renames:
        command.append("--unsafeAllowRenames")
    if options.unsafe_skip_storage_check:
        command.append("--unsafeSkipStorageCheck")

    return command


class SafetyValidator:
    """Runs the upgrades-core validator against compiled contracts."""

    def __init__(self, out_dir: Union[Path, str], runner: Runner = run_shell):
        self.out_dir = out_dir
        self.runner = runner

    def validate(
        self,
        contract: ContractInfo,
        options: DeploymentOptions,
        reference: Optional[str] = None,
        require_reference: bool = False,
    ) -> None:
        """
        Validate that a contract is safe to use as an implementation.

        Raises:
            ValidationError: If the validator reports the contract as unsafe
            ToolInvocationError: If the validator could not be run
        """
        command = build_validate_command(
            contract, self.out_dir, options, reference, require_reference
        )
        result = self.runner(command)

        if result.exit_code != 0:
            output = result.stdout_text or result.stderr_text
            raise ValidationError(
                f"Upgrade safety validation failed for {contract.fully_qualified_name}:\n{output}",
                output=output,
            )

        logger.info(
            "validation_passed",
            contract=contract.fully_qualified_name,
            reference=reference,
        )
