#!/usr/bin/env python3
"""Smoke-test script: retrieve device facts from an F5OS system.

Usage::

    export F5OS_HOST="192.0.2.10"
    export F5OS_USERNAME="admin"
    export F5OS_PASSWORD="your-password"
    export F5OS_PORT="8888"            # optional
    export TF_LOG="DEBUG"              # optional log level
    python examples/get_facts.py

Exit codes:
    0 — facts retrieved and printed successfully.
    1 — missing environment variable or driver error.
"""

from __future__ import annotations

import json
import logging
import os
import sys


def _env(name: str, default: str | None = None) -> str:
    value = os.environ.get(name, default)
    if value is None:
        print(f"ERROR: required environment variable {name!r} is not set.", file=sys.stderr)
        sys.exit(1)
    return value


def main() -> None:
    host = _env("F5OS_HOST")
    username = _env("F5OS_USERNAME")
    password = _env("F5OS_PASSWORD")
    port = int(_env("F5OS_PORT", "0"))

    # Import here so import errors surface after env var check.
    from napalm_f5os.driver import F5OSDriver
    from napalm_f5os.log import configure_logging

    logging.basicConfig(stream=sys.stderr)
    configure_logging()

    driver = F5OSDriver(
        hostname=host,
        username=username,
        password=password,
        optional_args={"port": port},
    )

    try:
        driver.open()
        facts = driver.get_facts()
    except Exception as exc:  # noqa: BLE001
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)
    finally:
        driver.close()

    print(json.dumps(facts, indent=2))


if __name__ == "__main__":
    main()
