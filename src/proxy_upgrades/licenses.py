"""License type resolution for proxy-upgrades library."""

from typing import Optional

from .constants import SPDX_TO_LICENSE_TYPE
from .log import get_logger
from .types import ContractInfo, ExternalDeployerOptions

logger = get_logger(__name__)


def to_license_type(spdx_identifier: Optional[str]) -> Optional[str]:
    """
    Convert an SPDX license identifier to the external deployer's license type.

    Args:
        spdx_identifier: SPDX identifier from the artifact, e.g. "MIT"

    Returns:
        License type name, or None if the identifier has no known mapping
    """
    if spdx_identifier is None:
        return None
    return SPDX_TO_LICENSE_TYPE.get(spdx_identifier.strip())


def resolve_license_type(
    info: ContractInfo, options: ExternalDeployerOptions
) -> Optional[str]:
    """
    Choose the license type sent with a deployment.

    An explicit license_type option wins; skip_license_type sends none;
    otherwise the artifact's SPDX identifier is mapped.
    """
    if options.license_type is not None:
        return options.license_type
    if options.skip_license_type:
        return None

    license_type = to_license_type(info.license)
    if license_type is None:
        logger.warning(
            "license_type_unresolved",
            contract=info.short_name,
            spdx=info.license,
            hint="set the license_type option or skip_license_type",
        )
    return license_type
