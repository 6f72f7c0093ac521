"""Typed helpers around ``openconfig-interfaces`` documents.

The interface payloads themselves stay plain JSON-able dicts; these
helpers only read and build the parts the client acts on.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from napalm_f5os.model.vlan import SWITCHED_VLAN_KEY, SwitchedVlanConfig

INTERFACES_KEY: str = "openconfig-interfaces:interfaces"
ETHERNET_KEY: str = "openconfig-if-ethernet:ethernet"


@dataclass
class InterfaceVlanRequest:
    """Requested switched-VLAN settings of one entry of an update body.

    Attributes:
        name: Interface name as given in the body (may be empty).
        vlans: Requested native and trunk VLANs.
    """

    name: str
    vlans: SwitchedVlanConfig = field(default_factory=SwitchedVlanConfig)


@dataclass
class InterfaceState:
    """Summary of one interface from the interfaces collection.

    Attributes:
        name: Interface name (e.g. ``"1.0"``).
        enabled: Administrative state.
        oper_up: ``True`` if ``oper-status`` is ``UP``.
        description: Configured description.
        mtu: MTU from state, ``0`` if not reported.
    """

    name: str
    enabled: bool = False
    oper_up: bool = False
    description: str = ""
    mtu: int = 0

    @classmethod
    def from_json(cls, entry: dict[str, Any]) -> InterfaceState:
        config = entry.get("config") or {}
        state = entry.get("state") or {}
        return cls(
            name=str(entry.get("name", "")),
            enabled=bool(state.get("enabled", config.get("enabled", False))),
            oper_up=str(state.get("oper-status", "")).upper() == "UP",
            description=str(config.get("description", state.get("description", ""))),
            mtu=int(state.get("mtu", config.get("mtu", 0)) or 0),
        )


@dataclass
class InterfaceUpdateResult:
    """Outcome of :func:`~napalm_f5os.client.interface_ops.update_interface`.

    Attributes:
        interface: Interface the snapshot and deletes were applied to.
        removed_native_vlan: Whether the native-VLAN leaf was deleted.
        removed_trunk_vlans: Trunk VLAN IDs deleted, in request order.
        response: Raw body of the final PATCH.
    """

    interface: str
    removed_native_vlan: bool = False
    removed_trunk_vlans: list[int] = field(default_factory=list)
    response: bytes = b""

    @property
    def completed(self) -> list[str]:
        """Labels of the deletes applied so far."""
        steps = ["delete native-vlan"] if self.removed_native_vlan else []
        steps.extend(f"delete trunk-vlan={vid}" for vid in self.removed_trunk_vlans)
        return steps


def interface_entries(body: dict[str, Any]) -> list[dict[str, Any]]:
    """Return the ``interface`` list of an interfaces document ([] if absent)."""
    container = body.get(INTERFACES_KEY) or {}
    entries = container.get("interface") or []
    return [e for e in entries if isinstance(e, dict)]


def iter_interface_vlan_requests(body: dict[str, Any]) -> Iterator[InterfaceVlanRequest]:
    """Yield the switched-VLAN settings requested by each body entry.

    Entries without a switched-VLAN container request no native VLAN and
    no trunk VLANs.
    """
    for entry in interface_entries(body):
        ethernet = entry.get(ETHERNET_KEY) or {}
        switched = ethernet.get(SWITCHED_VLAN_KEY) or {}
        yield InterfaceVlanRequest(
            name=str(entry.get("name", "")),
            vlans=SwitchedVlanConfig.from_config(switched.get("config")),
        )


def build_interface_body(
    name: str,
    *,
    native_vlan: int | None = None,
    trunk_vlans: Iterable[int] = (),
    description: str | None = None,
    enabled: bool | None = None,
) -> dict[str, Any]:
    """Build an ``openconfig-interfaces:interfaces`` update body for one interface.

    Args:
        name: Interface name (e.g. ``"1.0"``).
        native_vlan: Native VLAN ID; omitted when ``None`` or ``0``.
        trunk_vlans: Trunk VLAN IDs; deduplicated and sorted.
        description: Optional description.
        enabled: Optional administrative state.

    Returns:
        A JSON-serialisable dict ready for
        :func:`~napalm_f5os.client.interface_ops.update_interface`.
    """
    config: dict[str, Any] = {"name": name}
    if description is not None:
        config["description"] = description
    if enabled is not None:
        config["enabled"] = enabled

    vlan_config: dict[str, Any] = {}
    if native_vlan:
        vlan_config["native-vlan"] = native_vlan
    trunks = sorted(set(trunk_vlans))
    if trunks:
        vlan_config["trunk-vlans"] = trunks

    entry: dict[str, Any] = {"name": name, "config": config}
    if vlan_config:
        entry[ETHERNET_KEY] = {SWITCHED_VLAN_KEY: {"config": vlan_config}}
    return {INTERFACES_KEY: {"interface": [entry]}}
