"""Switched-VLAN change planner.

The F5OS trunk-VLAN list is additive under PATCH: VLANs missing from the
new config are not removed.  The planner works out which leaves must be
deleted explicitly before the new config is applied.
"""

from __future__ import annotations

from collections.abc import Iterable

from napalm_f5os.model.vlan import SwitchedVlanChangeSet, SwitchedVlanConfig


def trunk_vlan_difference(current: Iterable[int], desired: Iterable[int]) -> list[int]:
    """Return the VLAN IDs in *current* but not in *desired*, ascending.

    A true set difference: order and duplicates in either input do not
    affect the result.
    """
    return sorted(set(current) - set(desired))


def needs_native_vlan_removal(current: int, requested: int | None) -> bool:
    """True if a set native VLAN must be deleted before applying *requested*.

    Args:
        current: Native VLAN on the device (``0`` = unset).
        requested: Native VLAN in the new config (``None``/``0`` = unset).
    """
    return current != 0 and (requested or 0) != current


def plan_switched_vlan_changes(
    current: SwitchedVlanConfig,
    desired: SwitchedVlanConfig,
) -> SwitchedVlanChangeSet:
    """Compute the deletes needed to move from *current* to *desired*.

    Returns:
        A :class:`SwitchedVlanChangeSet`; empty when the current snapshot
        has no native VLAN and no trunk VLANs.
    """
    return SwitchedVlanChangeSet(
        remove_native=needs_native_vlan_removal(current.native_vlan, desired.native_vlan),
        remove_trunk=trunk_vlan_difference(current.trunk_vlans, desired.trunk_vlans),
    )
