"""
proxy-upgrades: Python library for deploying and upgrading proxied smart contract implementations
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import get_contract_info, read_artifact
from .build_info import get_build_info_file, locate_build_info
from .exceptions import (
    AmbiguousBuildInfoError,
    ExternalServiceError,
    NotFoundError,
    ParseError,
    ToolInvocationError,
    UpgradesError,
    ValidationError,
)
from .identifiers import parse_identifier
from .types import (
    BuildInfoReference,
    ContractIdentifier,
    ContractInfo,
    DeploymentOptions,
    ExternalDeployerOptions,
    ExternalProcessResult,
    ProposalResult,
)
from .upgrades import UpgradeManager

try:
    __version__ = version("proxy-upgrades")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "UpgradeManager",
    "parse_identifier",
    "read_artifact",
    "get_contract_info",
    "locate_build_info",
    "get_build_info_file",
    "ContractIdentifier",
    "ContractInfo",
    "BuildInfoReference",
    "DeploymentOptions",
    "ExternalDeployerOptions",
    "ExternalProcessResult",
    "ProposalResult",
    "UpgradesError",
    "ParseError",
    "NotFoundError",
    "AmbiguousBuildInfoError",
    "ToolInvocationError",
    "ValidationError",
    "ExternalServiceError",
]
