"""Interface read and update operations for F5OS devices.

Updating an interface's switched-VLAN config is a three-step sequence:

    1. GET   .../interface=<name>/.../switched-vlan       (current snapshot)
    2. DELETE .../openconfig-vlan:native-vlan              (if it changes)
       DELETE .../openconfig-vlan:trunk-vlans=<id>         (per removed VLAN)
    3. PATCH /openconfig-interfaces:interfaces             (new config)

Step 2 exists because PATCH only ever adds trunk VLANs.  The sequence is
not transactional; see :class:`~napalm_f5os.client.errors.F5OSInterfaceUpdateError`.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from napalm_f5os.client.errors import ERRORS_KEY, F5OSError, F5OSInterfaceUpdateError
from napalm_f5os.client.session import F5OSSession
from napalm_f5os.model.interface import InterfaceUpdateResult, iter_interface_vlan_requests
from napalm_f5os.model.vlan import SwitchedVlanChangeSet, SwitchedVlanConfig
from napalm_f5os.utils.vlan_diff import plan_switched_vlan_changes
from napalm_f5os.vendor.f5os import endpoints

logger = logging.getLogger(__name__)


def get_interfaces(session: F5OSSession) -> dict[str, Any]:
    """Return the decoded interfaces collection (``{}`` if absent)."""
    return _decode(session.get(endpoints.INTERFACES))


def get_interface(session: F5OSSession, name: str) -> dict[str, Any]:
    """Return the decoded document of interface *name* (``{}`` if absent)."""
    data = _decode(session.get(endpoints.interface(name)))
    session.log.debug("Interface %s: %s", name, data)
    return data


def get_switched_vlans(session: F5OSSession, name: str) -> SwitchedVlanConfig:
    """Read the current native and trunk VLANs of interface *name*.

    An interface without switched-VLAN config (404) yields an empty snapshot.

    Raises:
        F5OSRequestError: If the device cannot be reached.
        F5OSAPIError: If the device rejects the request.
    """
    vlans = SwitchedVlanConfig.from_json(session.get(endpoints.switched_vlan(name)))
    session.log.debug("Switched VLANs of %s: %s", name, vlans)
    return vlans


def remove_native_vlan(session: F5OSSession, name: str) -> None:
    """Delete the native-VLAN leaf of interface *name*."""
    session.delete(endpoints.native_vlan(name))


def remove_trunk_vlan(session: F5OSSession, name: str, vlan_id: int) -> None:
    """Delete trunk VLAN *vlan_id* from interface *name*."""
    session.delete(endpoints.trunk_vlan(name, vlan_id))


def plan_interface_update(
    session: F5OSSession,
    name: str,
    body: dict[str, Any],
) -> SwitchedVlanChangeSet:
    """Read the current snapshot and return the deletes *body* requires.

    Nothing is changed on the device.
    """
    return _plan(get_switched_vlans(session, name), body)


def update_interface(
    session: F5OSSession,
    name: str,
    body: dict[str, Any],
) -> InterfaceUpdateResult:
    """Apply *body* to interface *name*, removing VLANs it no longer lists.

    Args:
        session: Active authenticated session.
        name: Interface whose current VLANs are read and pruned.
        body: ``openconfig-interfaces:interfaces`` document to PATCH.

    Returns:
        An :class:`InterfaceUpdateResult` with the deletes issued and the
        PATCH response body.

    Raises:
        F5OSRequestError: If the snapshot cannot be read (nothing changed).
        F5OSAPIError: If the device rejects the snapshot read (nothing changed).
        F5OSInterfaceUpdateError: If a delete or the PATCH fails; carries
            the deletes already applied.
    """
    change_set = plan_interface_update(session, name, body)
    result = InterfaceUpdateResult(interface=name)

    try:
        if change_set.remove_native:
            remove_native_vlan(session, name)
            result.removed_native_vlan = True
        for vlan_id in change_set.remove_trunk:
            remove_trunk_vlan(session, name, vlan_id)
            result.removed_trunk_vlans.append(vlan_id)
        session.log.debug("Update body for %s: %s", name, body)
        result.response = session.patch(endpoints.INTERFACES, body)
    except F5OSError as exc:
        raise F5OSInterfaceUpdateError(
            interface=name, cause=exc, completed=result.completed
        ) from exc

    session.log.info(
        "Updated interface %s (native removed=%s, trunk removed=%s)",
        name,
        result.removed_native_vlan,
        result.removed_trunk_vlans,
    )
    return result


def _plan(current: SwitchedVlanConfig, body: dict[str, Any]) -> SwitchedVlanChangeSet:
    """Merge the per-entry change sets of *body* against one snapshot."""
    merged = SwitchedVlanChangeSet()
    for request in iter_interface_vlan_requests(body):
        cs = plan_switched_vlan_changes(current, request.vlans)
        merged.remove_native = merged.remove_native or cs.remove_native
        merged.remove_trunk = sorted(set(merged.remove_trunk) | set(cs.remove_trunk))
    return merged


def _decode(raw: bytes) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        logger.debug("Response is not JSON: %r", raw[:200])
        return {}
    # 404 bodies carry an error envelope instead of data
    if not isinstance(data, dict) or ERRORS_KEY in data:
        return {}
    return data
