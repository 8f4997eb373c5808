"""Shared pytest fixtures for proxy-upgrades tests."""

import shutil
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from proxy_upgrades.types import (
    BuildInfoReference,
    ContractInfo,
    DeploymentOptions,
    ExternalDeployerOptions,
    ExternalProcessResult,
    ProposalResult,
)

SENTINEL_IMPLEMENTATION = "0x5e771ae15e771ae15e771ae15e771ae15e771ae1"
ADMIN_ADDRESS = "0x2222222222222222222222222222222222222222"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fixture_out_dir(fixtures_dir: Path) -> Path:
    """Return the read-only sample compiler output directory."""
    return fixtures_dir / "out"


@pytest.fixture
def temp_out_dir(tmp_path: Path, fixture_out_dir: Path) -> Path:
    """Copy the sample compiler output directory somewhere writable."""
    out_dir = tmp_path / "out"
    shutil.copytree(fixture_out_dir, out_dir)
    return out_dir


class RecordingRunner:
    """Command runner that records commands and replays a canned result."""

    def __init__(self, stdout: str = "", exit_code: int = 0, stderr: str = ""):
        self.commands: List[List[str]] = []
        self.result = ExternalProcessResult(
            exit_code=exit_code,
            stdout=stdout.encode(),
            stderr=stderr.encode(),
        )

    def __call__(self, argv) -> ExternalProcessResult:
        self.commands.append(list(argv))
        return self.result


class StubInspector:
    """Proxy-state inspector returning fixed addresses."""

    def __init__(
        self,
        admin: str = ADMIN_ADDRESS,
        chain_id: int = 11155111,
        call_log: Optional[List[str]] = None,
    ):
        self.admin = admin
        self.chain_id = chain_id
        self.calls: List[str] = [] if call_log is None else call_log

    def get_admin_address(self, proxy_address: str) -> str:
        self.calls.append("get_admin_address")
        return self.admin

    def get_implementation_address(self, proxy_address: str) -> str:
        self.calls.append("get_implementation_address")
        return "0x3333333333333333333333333333333333333333"

    def get_beacon_address(self, proxy_address: str) -> str:
        self.calls.append("get_beacon_address")
        return "0x4444444444444444444444444444444444444444"

    def get_chain_id(self) -> int:
        self.calls.append("get_chain_id")
        return self.chain_id


class StubValidator:
    """Safety validator that records invocations."""

    def __init__(self, error: Optional[Exception] = None, call_log: Optional[List[str]] = None):
        self.error = error
        self.call_log = call_log
        self.invocations: List[Dict[str, Any]] = []

    def validate(
        self,
        contract: ContractInfo,
        options: DeploymentOptions,
        reference: Optional[str] = None,
        require_reference: bool = False,
    ) -> None:
        if self.call_log is not None:
            self.call_log.append("validate")
        self.invocations.append(
            {
                "contract": contract,
                "options": options,
                "reference": reference,
                "require_reference": require_reference,
            }
        )
        if self.error is not None:
            raise self.error


class StubDeployer:
    """External deployer that returns a sentinel address and records proposals."""

    def __init__(
        self,
        address: str = SENTINEL_IMPLEMENTATION,
        proposal: Optional[ProposalResult] = None,
        deploy_error: Optional[Exception] = None,
        call_log: Optional[List[str]] = None,
    ):
        self.address = address
        self.call_log = call_log
        self.proposal = proposal or ProposalResult(
            proposal_id="prop-1", url="https://approvals.example.com/prop-1"
        )
        self.deploy_error = deploy_error
        self.deployments: List[Dict[str, Any]] = []
        self.proposals: List[Dict[str, Any]] = []

    def deploy(
        self,
        contract: ContractInfo,
        build_info: BuildInfoReference,
        chain_id: int,
        constructor_data: bytes = b"",
        options: Optional[ExternalDeployerOptions] = None,
    ) -> str:
        if self.call_log is not None:
            self.call_log.append("deploy")
        self.deployments.append(
            {
                "contract": contract,
                "build_info": build_info,
                "chain_id": chain_id,
                "constructor_data": constructor_data,
                "options": options,
            }
        )
        if self.deploy_error is not None:
            raise self.deploy_error
        return self.address

    def propose_upgrade(
        self,
        proxy_address: str,
        proxy_admin_address: Optional[str],
        new_implementation_address: str,
        artifact_path: Path,
        chain_id: int,
        options: Optional[ExternalDeployerOptions] = None,
    ) -> ProposalResult:
        if self.call_log is not None:
            self.call_log.append("propose_upgrade")
        self.proposals.append(
            {
                "proxy_address": proxy_address,
                "proxy_admin_address": proxy_admin_address,
                "new_implementation_address": new_implementation_address,
                "artifact_path": artifact_path,
                "chain_id": chain_id,
                "options": options,
            }
        )
        return self.proposal


@pytest.fixture
def call_log() -> List[str]:
    """Return the call log shared by the stub services."""
    return []


@pytest.fixture
def stub_inspector(call_log: List[str]) -> StubInspector:
    return StubInspector(call_log=call_log)


@pytest.fixture
def stub_validator(call_log: List[str]) -> StubValidator:
    return StubValidator(call_log=call_log)


@pytest.fixture
def stub_deployer(call_log: List[str]) -> StubDeployer:
    return StubDeployer(call_log=call_log)


@pytest.fixture
def recording_runner():
    """Return a factory for command runners with a canned result."""
    return RecordingRunner
