#!/usr/bin/python3
# Copyright: (c) 2024, napalm-f5os contributors
# SPDX-License-Identifier: Apache-2.0
"""Ansible module: f5os_interface — switched-VLAN configuration of F5OS interfaces."""

from __future__ import annotations

DOCUMENTATION = r"""
---
module: f5os_interface
short_description: Configure switched VLANs of an F5OS interface
description:
  - Sets the native VLAN and trunk VLANs of one interface on rSeries or Velos systems.
  - Native and trunk VLANs not listed are removed from the interface first.
  - Wraps napalm-f5os C(update_interface()).
  - Supports Ansible check mode (reports the deletes that would be issued).
options:
  host:
    description: IP address or hostname of the F5OS system.
    required: true
    type: str
  username:
    description: Login username.
    required: true
    type: str
  password:
    description: Login password.
    required: true
    type: str
    no_log: true
  port:
    description: HTTPS port appended to I(host) when it carries none.
    type: int
    default: 8888
  timeout:
    description: Per-request timeout in seconds.
    type: int
    default: 60
  name:
    description: Interface name, for example C(1.0).
    required: true
    type: str
  native_vlan:
    description: Native (untagged) VLAN ID. Omit to leave the interface without one.
    type: int
  trunk_vlans:
    description: Tagged VLAN IDs allowed on the interface.
    type: list
    elements: int
    default: []
  description:
    description: Interface description.
    type: str
  enabled:
    description: Administrative state.
    type: bool
notes:
  - Run this module on the Ansible controller (C(connection: local)).
  - The delete-then-patch sequence is not transactional.
requirements:
  - napalm-f5os
author:
  - napalm-f5os contributors
"""

EXAMPLES = r"""
- name: Trunk VLANs 20 and 30 with native VLAN 200 on 1.0
  f5os_interface:
    host: 192.0.2.10
    username: admin
    password: admin
    name: "1.0"
    native_vlan: 200
    trunk_vlans: [20, 30]
"""

RETURN = r"""
changed:
  description: Whether the interface was (or would be in check mode) updated.
  type: bool
  returned: always
remove_native_vlan:
  description: Whether the native VLAN was (or would be) deleted first.
  type: bool
  returned: always
remove_trunk_vlans:
  description: Trunk VLAN IDs deleted (or to be deleted) before the update.
  type: list
  elements: int
  returned: always
"""

from ansible.module_utils.basic import AnsibleModule  # noqa: E402


def run_module() -> None:
    argument_spec = dict(
        host=dict(type="str", required=True),
        username=dict(type="str", required=True),
        password=dict(type="str", required=True, no_log=True),
        port=dict(type="int", default=8888),
        timeout=dict(type="int", default=60),
        name=dict(type="str", required=True),
        native_vlan=dict(type="int"),
        trunk_vlans=dict(type="list", elements="int", default=[]),
        description=dict(type="str"),
        enabled=dict(type="bool"),
    )
    module = AnsibleModule(argument_spec=argument_spec, supports_check_mode=True)
    p = module.params

    try:
        from napalm_f5os.client.errors import F5OSError
        from napalm_f5os.driver import F5OSDriver
        from napalm_f5os.model.interface import build_interface_body
    except ImportError as exc:
        module.fail_json(msg=f"napalm-f5os is not installed: {exc}")
        return

    body = build_interface_body(
        p["name"],
        native_vlan=p["native_vlan"],
        trunk_vlans=p["trunk_vlans"],
        description=p["description"],
        enabled=p["enabled"],
    )
    driver = F5OSDriver(
        hostname=p["host"],
        username=p["username"],
        password=p["password"],
        timeout=p["timeout"],
        optional_args={"port": p["port"], "user_agent": "ansible-f5os_interface"},
    )
    try:
        driver.open()
        result = driver.update_interface(p["name"], body, dry_run=module.check_mode)
    except F5OSError as exc:
        module.fail_json(msg=str(exc))
        return
    finally:
        driver.close()

    module.exit_json(
        changed=True,
        remove_native_vlan=result["remove_native_vlan"],
        remove_trunk_vlans=result["remove_trunk_vlans"],
    )


def main() -> None:
    run_module()


if __name__ == "__main__":
    main()
