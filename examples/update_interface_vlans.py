#!/usr/bin/env python3
"""Example: set the native and trunk VLANs of one F5OS interface.

Trunk VLANs currently on the interface but not listed in ``TRUNK_VLANS``
are deleted before the new configuration is applied.

Usage (dry run, default):

    F5OS_HOST=192.0.2.10 python examples/update_interface_vlans.py

Usage (live apply):

    APPLY=1 F5OS_HOST=192.0.2.10 python examples/update_interface_vlans.py

Environment variables:
    F5OS_HOST        System IP or hostname (required).
    F5OS_USERNAME    Login username (default: admin).
    F5OS_PASSWORD    Login password (default: admin).
    F5OS_PORT        HTTPS port (default: 8888).
    APPLY            Set to "1" to actually apply changes (default: dry-run).
"""

from __future__ import annotations

import os
import sys

from napalm_f5os.driver import F5OSDriver
from napalm_f5os.model.interface import build_interface_body

INTERFACE: str = "1.0"
NATIVE_VLAN: int = 200
TRUNK_VLANS: list[int] = [20, 30]

host = os.environ.get("F5OS_HOST", "")
if not host:
    print("ERROR: F5OS_HOST environment variable is required.", file=sys.stderr)
    sys.exit(1)

username = os.environ.get("F5OS_USERNAME", "admin")
password = os.environ.get("F5OS_PASSWORD", "admin")
port = int(os.environ.get("F5OS_PORT", "8888"))
apply_changes = os.environ.get("APPLY", "0") == "1"

print(f"Target system : {host}")
print(f"Apply changes : {apply_changes}")
print()

body = build_interface_body(INTERFACE, native_vlan=NATIVE_VLAN, trunk_vlans=TRUNK_VLANS)
driver = F5OSDriver(
    hostname=host,
    username=username,
    password=password,
    optional_args={"port": port},
)

try:
    driver.open()
    print(f"Platform      : {driver.platform_type or 'unknown'}")

    plan = driver.update_interface(INTERFACE, body, dry_run=True)
    print("=== DRY RUN ===")
    print(f"  Remove native VLAN : {plan['remove_native_vlan']}")
    print(f"  Remove trunk VLANs : {plan['remove_trunk_vlans']}")
    print()

    if not apply_changes:
        print("Dry-run only -- set APPLY=1 to apply changes.")
        sys.exit(0)

    print("=== APPLYING ===")
    result = driver.update_interface(INTERFACE, body)
    print(f"  Removed native VLAN : {result['remove_native_vlan']}")
    print(f"  Removed trunk VLANs : {result['remove_trunk_vlans']}")
    print("Done.")

except Exception as exc:  # noqa: BLE001
    print(f"ERROR: {exc}", file=sys.stderr)
    sys.exit(1)
finally:
    driver.close()
