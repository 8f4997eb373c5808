"""Data types and dataclasses for proxy-upgrades library."""

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class ContractIdentifier:
    """Canonical form of a user-supplied contract name."""

    file_name: str  # Lookup key into the artifact store, e.g. "Greeter.sol"
    short_name: str  # e.g. "Greeter"


@dataclass(frozen=True)
class ContractInfo:
    """Information read from a compiled contract artifact."""

    contract_path: str  # Source path as recorded by the compiler, e.g. "src/Greeter.sol"
    short_name: str
    bytecode: str  # 0x-prefixed creation bytecode
    license: Optional[str]  # SPDX identifier, None if the source declares none

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.contract_path}:{self.short_name}"


@dataclass(frozen=True)
class BuildInfoReference:
    """A build-info file known to contain a contract's bytecode."""

    path: Path


@dataclass(frozen=True)
class ProposalResult:
    """Result of submitting an upgrade proposal."""

    proposal_id: str
    url: str


@dataclass(frozen=True)
class ExternalProcessResult:
    """Exit code and captured output of an external command."""

    exit_code: int
    stdout: bytes
    stderr: bytes

    @property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace").strip()

    @property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace").strip()


@dataclass(frozen=True)
class ExternalDeployerOptions:
    """Options for the external deployer and upgrade-approval service."""

    use_external_deployer: bool = False
    license_type: Optional[str] = None  # Overrides the license read from the artifact
    skip_license_type: bool = False
    salt: Optional[str] = None
    verify_source_code: bool = True
    relayer_id: Optional[str] = None
    upgrade_approval_process_id: Optional[str] = None
    extra: Dict[str, str] = field(default_factory=dict)  # Provider-specific flags


@dataclass(frozen=True)
class DeploymentOptions:
    """Options for deploying and upgrading implementations."""

    reference_contract: Optional[str] = None
    unsafe_skip_all_checks: bool = False
    unsafe_allow: Tuple[str, ...] = ()  # Validation error kinds to allow, e.g. "constructor"
    unsafe_allow_renames: bool = False
    unsafe_skip_storage_check: bool = False
    deployer: ExternalDeployerOptions = field(default_factory=ExternalDeployerOptions)

    def with_external_deployer(self) -> "DeploymentOptions":
        """
        Return a copy with the external deployer switched on.

        The caller's options are left untouched.
        """
        return replace(self, deployer=replace(self.deployer, use_external_deployer=True))
