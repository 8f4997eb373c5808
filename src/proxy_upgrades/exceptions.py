"""Custom exception classes for proxy-upgrades library."""

from typing import List, Optional

ACCEPTED_FORMATS = (
    "MyContract.sol:MyContract or MyContract.sol or out/MyContract.sol/MyContract.json"
)


class UpgradesError(Exception):
    """Base exception for deployment and upgrade errors."""

    pass


class ParseError(UpgradesError, ValueError):
    """Raised when a contract identifier is malformed."""

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(
            f"Contract name '{identifier}' must be in the format {ACCEPTED_FORMATS}"
        )


class NotFoundError(UpgradesError, LookupError):
    """Raised when an artifact, artifact field or build-info file cannot be located."""

    pass


class AmbiguousBuildInfoError(NotFoundError):
    """Raised when more than one build-info file contains the same bytecode."""

    def __init__(self, message: str, candidates: Optional[List[str]] = None):
        self.candidates = candidates or []
        super().__init__(message)


class ToolInvocationError(UpgradesError, RuntimeError):
    """Raised when an external command could not be run at all."""

    pass


class ValidationError(UpgradesError, ValueError):
    """Raised when the safety validator rejects an implementation."""

    def __init__(self, message: str, output: str = ""):
        self.output = output
        super().__init__(message)


class ExternalServiceError(UpgradesError, RuntimeError):
    """Raised when the deployer, approval service or RPC node reports a failure."""

    def __init__(self, message: str, output: str = ""):
        self.output = output
        super().__init__(message)
