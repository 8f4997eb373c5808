"""Main API for proxy-upgrades library."""

import os
from pathlib import Path
from typing import Optional, Union

from .artifacts import find_upgrades_from_annotation, get_contract_info, read_artifact
from .build_info import locate_build_info
from .constants import RPC_URL_ENV
from .deployer import ExternalDeployer
from .exceptions import ValidationError
from .identifiers import fully_qualified_name, parse_identifier
from .log import get_logger
from .paths import get_artifact_path, get_out_dir
from .proxy_state import ProxyStateInspector
from .types import DeploymentOptions, ProposalResult
from .validation import SafetyValidator

logger = get_logger(__name__)


class UpgradeManager:
    """Deploys implementations and proposes proxy upgrades."""

    def __init__(
        self,
        inspector: ProxyStateInspector,
        validator: SafetyValidator,
        deployer: ExternalDeployer,
        out_dir: Optional[Union[Path, str]] = None,
    ):
        """
        Initialize the upgrade manager.

        Args:
            inspector: Reads proxy admin/implementation/beacon slots and chain ID
            validator: Upgrade safety validator
            deployer: External deployer and upgrade-approval client
            out_dir: Compiler output directory (defaults to $FOUNDRY_OUT, then ./out)
        """
        self.inspector = inspector
        self.validator = validator
        self.deployer = deployer
        self.out_dir = get_out_dir(out_dir)

    @classmethod
    def from_environment(
        cls,
        rpc_url: Optional[str] = None,
        out_dir: Optional[Union[Path, str]] = None,
    ) -> "UpgradeManager":
        """
        Create a manager wired to the real external services.

        Args:
            rpc_url: JSON-RPC endpoint (defaults to $ETH_RPC_URL)
            out_dir: Compiler output directory (defaults to $FOUNDRY_OUT, then ./out)

        Raises:
            ValueError: If no RPC URL is configured
        """
        if rpc_url is None:
            rpc_url = os.environ.get(RPC_URL_ENV)
        if rpc_url is None:
            raise ValueError(
                f"RPC URL required: set ${RPC_URL_ENV} environment variable or pass rpc_url"
            )

        resolved_out_dir = get_out_dir(out_dir)
        return cls(
            inspector=ProxyStateInspector(rpc_url),
            validator=SafetyValidator(resolved_out_dir),
            deployer=ExternalDeployer(),
            out_dir=resolved_out_dir,
        )

    def validate_implementation(
        self,
        contract_name: str,
        opts: Optional[DeploymentOptions] = None,
        require_reference: bool = True,
    ) -> None:
        """
        Run upgrade safety checks on a new implementation.

        The reference is the reference_contract option if set; otherwise the
        validator looks for an "@custom:oz-upgrades-from" annotation.

        Raises:
            ParseError: If a contract name is malformed
            NotFoundError: If an artifact cannot be read
            ValidationError: If the implementation is unsafe or has no reference
        """
        if opts is None:
            opts = DeploymentOptions()

        identifier = parse_identifier(contract_name)
        contract = read_artifact(identifier, self.out_dir)

        reference = None
        if opts.reference_contract is not None:
            reference = fully_qualified_name(
                get_contract_info(opts.reference_contract, self.out_dir)
            )
        elif require_reference:
            annotation = find_upgrades_from_annotation(identifier, self.out_dir)
            if annotation is None:
                raise ValidationError(
                    f"No reference contract for {contract.fully_qualified_name}. Set the "
                    "reference_contract option or annotate the contract with "
                    "@custom:oz-upgrades-from <reference>"
                )
            logger.info("reference_from_annotation", contract=contract_name, reference=annotation)

        self.validator.validate(contract, opts, reference, require_reference)

    def _deploy(
        self,
        contract_name: str,
        constructor_data: bytes,
        opts: DeploymentOptions,
        chain_id: int,
    ) -> str:
        identifier = parse_identifier(contract_name)
        contract = read_artifact(identifier, self.out_dir)
        build_info = locate_build_info(contract.bytecode, contract_name, self.out_dir)
        return self.deployer.deploy(
            contract, build_info, chain_id, constructor_data, opts.deployer
        )

    def deploy_contract(
        self,
        contract_name: str,
        constructor_data: bytes = b"",
        opts: Optional[DeploymentOptions] = None,
    ) -> str:
        """
        Deploy a contract through the external deployer.

        The external deployer is always used, whatever opts says. No upgrade
        safety validation is done; validate upgradeable contracts with
        validate_implementation first.

        Args:
            contract_name: e.g. "Greeter.sol" or "Greeter.sol:Greeter"
            constructor_data: ABI-encoded constructor arguments
            opts: Deployment options

        Returns:
            Deployed address as reported by the deployer
        """
        opts = (opts or DeploymentOptions()).with_external_deployer()
        chain_id = self.inspector.get_chain_id()
        address = self._deploy(contract_name, constructor_data, opts, chain_id)
        logger.info("contract_deployed", contract=contract_name, address=address)
        return address

    def deploy_implementation(
        self,
        contract_name: str,
        opts: Optional[DeploymentOptions] = None,
    ) -> str:
        """
        Validate and deploy a new implementation contract.

        Validation is skipped only when unsafe_skip_all_checks is set. A
        reference contract is used when one is given or annotated but is not
        required, so first versions of upgradeable contracts can be deployed.
        The deployed implementation is not wired to any proxy.

        Returns:
            Address of the deployed implementation
        """
        opts = (opts or DeploymentOptions()).with_external_deployer()
        chain_id = self.inspector.get_chain_id()
        return self._deploy_implementation(contract_name, opts, chain_id, require_reference=False)

    def _deploy_implementation(
        self,
        contract_name: str,
        opts: DeploymentOptions,
        chain_id: int,
        require_reference: bool,
    ) -> str:
        if opts.unsafe_skip_all_checks:
            logger.warning("validation_skipped", contract=contract_name)
        else:
            self.validate_implementation(contract_name, opts, require_reference)

        address = self._deploy(contract_name, b"", opts, chain_id)
        logger.info("implementation_deployed", contract=contract_name, implementation=address)
        return address

    def propose_upgrade(
        self,
        proxy_address: str,
        contract_name: str,
        opts: Optional[DeploymentOptions] = None,
    ) -> ProposalResult:
        """
        Deploy a new implementation and propose upgrading a proxy to it.

        The proxy itself is never changed here; the upgrade happens once the
        proposal is approved through the external approval workflow.

        Args:
            proxy_address: Address of the proxy to upgrade
            contract_name: New implementation, e.g. "GreeterV2.sol"
            opts: Deployment options; the external deployer is always used

        Returns:
            ProposalResult with proposal ID and URL

        Raises:
            ValidationError: If the new implementation is unsafe
            ExternalServiceError: If deployment or the proposal fails
        """
        opts = (opts or DeploymentOptions()).with_external_deployer()

        admin_address = self.inspector.get_admin_address(proxy_address)
        logger.info("proxy_admin_resolved", proxy_address=proxy_address, admin=admin_address)

        chain_id = self.inspector.get_chain_id()
        implementation = self._deploy_implementation(
            contract_name, opts, chain_id, require_reference=True
        )

        identifier = parse_identifier(contract_name)
        artifact_path = get_artifact_path(identifier.file_name, identifier.short_name, self.out_dir)

        proposal = self.deployer.propose_upgrade(
            proxy_address,
            admin_address,
            implementation,
            artifact_path,
            chain_id,
            opts.deployer,
        )
        logger.info(
            "upgrade_proposed",
            proxy_address=proxy_address,
            implementation=implementation,
            proposal_id=proposal.proposal_id,
            url=proposal.url,
        )
        return proposal

    def get_implementation_address(self, proxy_address: str) -> str:
        """Get the current implementation address of a proxy."""
        return self.inspector.get_implementation_address(proxy_address)

    def get_beacon_address(self, proxy_address: str) -> str:
        """Get the beacon address of a beacon proxy."""
        return self.inspector.get_beacon_address(proxy_address)
