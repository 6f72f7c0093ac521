"""Platform detection for F5OS devices.

F5OS has no endpoint reporting what kind of system it runs on.  The type
is inferred from which configuration subtrees exist:

1. The platform component description exists only on rSeries appliances.
2. The VLAN list exists on Velos partitions.  A Velos controller answers
   it with 404 and the error message ``"uri keypath not found"``.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from napalm_f5os.client.errors import (
    F5OSRequestError,
    RestconfErrorEntry,
    parse_restconf_errors,
)
from napalm_f5os.vendor.f5os.endpoints import PLATFORM_DESCRIPTION, VLANS

if TYPE_CHECKING:
    from napalm_f5os.client.session import F5OSSession

logger = logging.getLogger(__name__)

KEYPATH_NOT_FOUND: str = "uri keypath not found"

_OK: int = 200
_NO_CONTENT: int = 204
_NOT_FOUND: int = 404


class PlatformType(str, Enum):
    """Device personalities distinguished by :func:`detect_platform`."""

    RSERIES = "rSeries Platform"
    VELOS_PARTITION = "Velos Partition"
    VELOS_CONTROLLER = "Velos Controller"


def is_keypath_not_found(errors: list[RestconfErrorEntry]) -> bool:
    """True if the first error entry is the controller's missing-keypath message."""
    return bool(errors) and errors[0].error_message == KEYPATH_NOT_FOUND


def detect_platform(session: F5OSSession) -> PlatformType | None:
    """Run the probe cascade and return the platform type.

    Returns ``None`` when the probes are inconclusive or fail; transport
    errors are logged, not raised.
    """
    try:
        resp = session.probe(PLATFORM_DESCRIPTION)
    except F5OSRequestError as exc:
        session.log.debug("Platform probe failed: %s", exc)
        return None
    if resp.status_code == _OK:
        return PlatformType.RSERIES
    if resp.status_code != _NOT_FOUND:
        session.log.debug("Platform probe returned HTTP %d", resp.status_code)
        return None

    try:
        resp = session.probe(VLANS)
    except F5OSRequestError as exc:
        session.log.debug("VLAN probe failed: %s", exc)
        return None
    if resp.status_code in (_OK, _NO_CONTENT):
        return PlatformType.VELOS_PARTITION
    if resp.status_code == _NOT_FOUND:
        if is_keypath_not_found(parse_restconf_errors(resp.content)):
            return PlatformType.VELOS_CONTROLLER
        return None
    session.log.debug("VLAN probe returned HTTP %d", resp.status_code)
    return None


def classify(session: F5OSSession) -> None:
    """Detect the platform and store it on ``session.platform_type``."""
    session.platform_type = detect_platform(session)
    if session.platform_type is None:
        session.log.warning("Could not determine platform type of %s", session.host)
    else:
        session.log.info("Platform type of %s: %s", session.host, session.platform_type.value)
