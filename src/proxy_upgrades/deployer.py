"""External deployer and upgrade-approval client for proxy-upgrades library."""

import re
import shlex
from pathlib import Path
from typing import List, Optional

from .constants import DEPLOY_CLIENT_PACKAGE, ZERO_ADDRESS
from .exceptions import ExternalServiceError
from .licenses import resolve_license_type
from .log import get_logger
from .process import Runner, run_shell
from .types import (
    BuildInfoReference,
    ContractInfo,
    ExternalDeployerOptions,
    ExternalProcessResult,
    ProposalResult,
)

logger = get_logger(__name__)

DEPLOYED_ADDRESS_PREFIX = "Deployed to address:"
PROPOSAL_ID_PREFIX = "Proposal ID:"
PROPOSAL_URL_PREFIX = "Proposal URL:"
FLAG_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9]*")


def _find_value(output: str, prefix: str) -> Optional[str]:
    for line in output.splitlines():
        line = line.strip()
        if line.startswith(prefix):
            value = line[len(prefix):].strip()
            return value or None
    return None


def parse_deployed_address(output: str) -> Optional[str]:
    """Extract the address from a "Deployed to address: 0x..." line."""
    return _find_value(output, DEPLOYED_ADDRESS_PREFIX)


def parse_proposal(output: str) -> Optional[ProposalResult]:
    """Extract proposal ID and URL from upgrade proposal output."""
    proposal_id = _find_value(output, PROPOSAL_ID_PREFIX)
    url = _find_value(output, PROPOSAL_URL_PREFIX)
    if proposal_id is None or url is None:
        return None
    return ProposalResult(proposal_id=proposal_id, url=url)


def _extra_flags(options: ExternalDeployerOptions) -> List[str]:
    flags: List[str] = []
    for key, value in sorted(options.extra.items()):
        if not FLAG_NAME_PATTERN.fullmatch(key):
            raise ValueError(f"Invalid deployer option name: {key!r}")
        flags += [f"--{key}", shlex.quote(str(value))]
    return flags


class ExternalDeployer:
    """Deploys contracts and proposes upgrades through the deploy-client CLI."""

    def __init__(self, runner: Runner = run_shell):
        self.runner = runner

    def _run(self, command: List[str], action: str) -> str:
        result: ExternalProcessResult = self.runner(command)
        output = result.stdout_text
        if result.exit_code != 0:
            raise ExternalServiceError(
                f"Failed to {action}: {output or result.stderr_text}",
                output=output or result.stderr_text,
            )
        return output

    def build_deploy_command(
        self,
        contract: ContractInfo,
        build_info: BuildInfoReference,
        chain_id: int,
        constructor_data: bytes,
        options: ExternalDeployerOptions,
    ) -> List[str]:
        command = [
            "npx",
            DEPLOY_CLIENT_PACKAGE,
            "deploy",
            "--contractName",
            shlex.quote(contract.short_name),
            "--contractPath",
            shlex.quote(contract.contract_path),
            "--chainId",
            str(chain_id),
            "--buildInfoFile",
            shlex.quote(str(build_info.path)),
        ]

        license_type = resolve_license_type(contract, options)
        if license_type is not None:
            command += ["--licenseType", shlex.quote(license_type)]
        if constructor_data:
            command += ["--constructorBytecode", "0x" + constructor_data.hex()]
        if not options.verify_source_code:
            command += ["--verifySourceCode", "false"]
        if options.relayer_id is not None:
            command += ["--relayerId", shlex.quote(options.relayer_id)]
        if options.salt is not None:
            command += ["--salt", shlex.quote(options.salt)]

        return command + _extra_flags(options)

    def deploy(
        self,
        contract: ContractInfo,
        build_info: BuildInfoReference,
        chain_id: int,
        constructor_data: bytes = b"",
        options: Optional[ExternalDeployerOptions] = None,
    ) -> str:
        """
        Deploy a contract through the external deployer.

        Args:
            contract: Contract to deploy
            build_info: Build-info file containing the contract's compilation
            chain_id: Target chain ID
            constructor_data: ABI-encoded constructor arguments
            options: Deployer options

        Returns:
            Address reported by the deployer, verbatim

        Raises:
            ExternalServiceError: If the deployment fails or reports no address
        """
        if options is None:
            options = ExternalDeployerOptions(use_external_deployer=True)

        command = self.build_deploy_command(
            contract, build_info, chain_id, constructor_data, options
        )
        output = self._run(command, f"deploy contract {contract.fully_qualified_name}")

        address = parse_deployed_address(output)
        if address is None:
            raise ExternalServiceError(
                f"Deployer did not report an address for {contract.fully_qualified_name}: {output}",
                output=output,
            )
        return address

    def build_propose_upgrade_command(
        self,
        proxy_address: str,
        proxy_admin_address: Optional[str],
        new_implementation_address: str,
        artifact_path: Path,
        chain_id: int,
        options: ExternalDeployerOptions,
    ) -> List[str]:
        command = [
            "npx",
            DEPLOY_CLIENT_PACKAGE,
            "proposeUpgrade",
            "--proxyAddress",
            shlex.quote(proxy_address),
            "--newImplementationAddress",
            shlex.quote(new_implementation_address),
            "--chainId",
            str(chain_id),
            "--contractArtifactFile",
            shlex.quote(str(artifact_path)),
        ]

        # UUPS proxies have no admin
        if proxy_admin_address is not None and proxy_admin_address.lower() != ZERO_ADDRESS:
            command += ["--proxyAdminAddress", shlex.quote(proxy_admin_address)]
        if options.upgrade_approval_process_id is not None:
            command += ["--approvalProcessId", shlex.quote(options.upgrade_approval_process_id)]

        return command + _extra_flags(options)

    def propose_upgrade(
        self,
        proxy_address: str,
        proxy_admin_address: Optional[str],
        new_implementation_address: str,
        artifact_path: Path,
        chain_id: int,
        options: Optional[ExternalDeployerOptions] = None,
    ) -> ProposalResult:
        """
        Submit an upgrade proposal to the approval service.

        Raises:
            ExternalServiceError: If the proposal fails or its result cannot be read
        """
        if options is None:
            options = ExternalDeployerOptions(use_external_deployer=True)

        command = self.build_propose_upgrade_command(
            proxy_address,
            proxy_admin_address,
            new_implementation_address,
            artifact_path,
            chain_id,
            options,
        )
        output = self._run(command, f"propose upgrade for proxy {proxy_address}")

        proposal = parse_proposal(output)
        if proposal is None:
            raise ExternalServiceError(
                f"Approval service did not report a proposal for proxy {proxy_address}: {output}",
                output=output,
            )
        return proposal
