"""Typed model for switched-VLAN data."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

SWITCHED_VLAN_KEY: str = "openconfig-vlan:switched-vlan"


@dataclass
class SwitchedVlanConfig:
    """Switched-VLAN settings of one interface.

    Attributes:
        native_vlan: Untagged VLAN ID; ``0`` means unset.
        trunk_vlans: Tagged VLAN IDs allowed on the interface.
    """

    native_vlan: int = 0
    trunk_vlans: list[int] = field(default_factory=list)

    @classmethod
    def from_config(cls, config: dict[str, Any] | None) -> SwitchedVlanConfig:
        """Build from a switched-VLAN ``config`` container."""
        if not isinstance(config, dict):
            return cls()
        native = config.get("native-vlan") or 0
        return cls(
            native_vlan=int(native),
            trunk_vlans=_vlan_ids(config.get("trunk-vlans")),
        )

    @classmethod
    def from_json(cls, data: bytes | str | dict[str, Any] | None) -> SwitchedVlanConfig:
        """Decode the ``openconfig-vlan:switched-vlan`` document.

        An empty body, a non-JSON body or a 404 error envelope all decode
        to an empty snapshot (no native VLAN, no trunk VLANs).
        """
        if not isinstance(data, dict):
            if not data:
                return cls()
            try:
                data = json.loads(data)
            except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
                logger.debug("Switched-VLAN body is not JSON: %r", data[:200])
                return cls()
        if not isinstance(data, dict):
            return cls()
        switched = data.get(SWITCHED_VLAN_KEY)
        if not isinstance(switched, dict):
            return cls()
        return cls.from_config(switched.get("config"))


@dataclass
class SwitchedVlanChangeSet:
    """Deletes required before a new switched-VLAN config can be applied.

    Attributes:
        remove_native: Whether the native-VLAN leaf must be deleted.
        remove_trunk: Trunk VLAN IDs to delete, ascending.
    """

    remove_native: bool = False
    remove_trunk: list[int] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.remove_native and not self.remove_trunk


def _vlan_ids(value: Any) -> list[int]:
    """Coerce a ``trunk-vlans`` leaf-list into integers."""
    if value is None:
        return []
    if not isinstance(value, list):
        value = [value]
    ids: list[int] = []
    for item in value:
        if isinstance(item, int):
            ids.append(item)
        elif isinstance(item, str) and item.isdigit():
            ids.append(int(item))
        else:
            logger.warning("Skipping unsupported trunk-vlans entry %r", item)
    return ids
