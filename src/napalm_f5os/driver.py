"""F5OS NAPALM driver — top-level NetworkDriver implementation."""

from __future__ import annotations

import logging
from typing import Any

from napalm.base.base import NetworkDriver

from napalm_f5os.client.errors import F5OSError
from napalm_f5os.client.interface_ops import (
    get_interfaces,
    plan_interface_update,
    update_interface,
)
from napalm_f5os.client.session import F5OSConfig, F5OSSession, new_session
from napalm_f5os.model.interface import (
    InterfaceState,
    InterfaceUpdateResult,
    interface_entries,
)
from napalm_f5os.model.vlan import SwitchedVlanChangeSet

logger = logging.getLogger(__name__)

_VENDOR: str = "F5"


class F5OSDriver(NetworkDriver):  # type: ignore[misc]
    """NAPALM driver for F5OS systems (rSeries, Velos partitions and controllers).

    Communicates with the device through its RESTCONF/OpenConfig API.

    Args:
        hostname: IP address or hostname, optionally with scheme and port.
        username: Login username.
        password: Login password.
        timeout: Per-request timeout in seconds.
        optional_args: Optional driver configuration overrides.
            Supported keys:

            - ``port`` (int): HTTPS port appended when *hostname* has none.
            - ``user_agent`` (str): Caller tag added to the ``User-Agent``.
            - ``teem`` (bool): Feature-telemetry flag (default ``False``).
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        timeout: int = 60,
        optional_args: dict[str, Any] | None = None,
    ) -> None:
        self.hostname = hostname
        self.username = username
        self.password = password
        self.timeout = timeout
        self.optional_args: dict[str, Any] = optional_args or {}
        self._session: F5OSSession | None = None

        logger.debug(
            "F5OSDriver initialised: host=%s user=%s", self.hostname, self.username
        )

    # ------------------------------------------------------------------
    # Connection lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Log in and detect the platform type.

        Raises:
            F5OSAuthError: If the device rejects the credentials.
            F5OSRequestError: If the device cannot be reached.
        """
        config = F5OSConfig(
            host=self.hostname,
            username=self.username,
            password=self.password,
            port=int(self.optional_args.get("port", 0)),
            user_agent=self.optional_args.get("user_agent"),
            teem=bool(self.optional_args.get("teem", False)),
            timeout_s=float(self.timeout),
        )
        logger.info("Opening connection to %s", self.hostname)
        self._session = new_session(config)

    def close(self) -> None:
        """Drop the session.  F5OS has no logout call; the token simply expires."""
        if self._session is not None:
            logger.info("Closing connection to %s", self.hostname)
            self._session.http.close()
            self._session = None

    def is_alive(self) -> dict[str, bool]:
        """Return liveness status of the session."""
        return {"is_alive": self._session is not None and bool(self._session.token)}

    @property
    def platform_type(self) -> str | None:
        """Detected platform label, or ``None`` if unknown or not connected."""
        if self._session is None or self._session.platform_type is None:
            return None
        return self._session.platform_type.value

    # ------------------------------------------------------------------
    # NAPALM getters
    # ------------------------------------------------------------------

    def get_facts(self) -> dict[str, Any]:
        """Return general device facts conforming to the NAPALM schema.

        F5OS exposes no single facts endpoint; ``model`` is the detected
        platform type and ``interface_list`` comes from the interfaces
        collection.
        """
        session = self._require_session()
        states = self._interface_states(session)
        return {
            "hostname": self.hostname,
            "fqdn": self.hostname,
            "vendor": _VENDOR,
            "model": self.platform_type or "unknown",
            "serial_number": "",
            "os_version": "",
            "uptime": -1.0,
            "interface_list": [s.name for s in states],
        }

    def get_interfaces(self) -> dict[str, Any]:
        """Return interface information conforming to the NAPALM schema."""
        session = self._require_session()
        result: dict[str, Any] = {}
        for state in self._interface_states(session):
            result[state.name] = {
                "is_up": state.oper_up,
                "is_enabled": state.enabled,
                "description": state.description,
                "last_flapped": -1.0,
                "speed": 0.0,
                "mtu": state.mtu,
                "mac_address": "",
            }
        return result

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def update_interface(
        self,
        name: str,
        body: dict[str, Any],
        *,
        dry_run: bool = False,
    ) -> dict[str, Any]:
        """Apply an ``openconfig-interfaces`` document to interface *name*.

        Native and trunk VLANs absent from *body* are deleted first.

        Args:
            name: Interface to update (e.g. ``"1.0"``).
            body: Update document, see
                :func:`~napalm_f5os.model.interface.build_interface_body`.
            dry_run: If ``True``, only report the deletes that would be issued.

        Returns:
            A dict with keys:

            - ``"remove_native_vlan"`` – whether the native VLAN is (or would be) deleted.
            - ``"remove_trunk_vlans"`` – trunk VLAN IDs (to be) deleted.
            - ``"response"`` – decoded PATCH response text (``""`` on dry run).

        Raises:
            F5OSError: If the session is not open.
            F5OSInterfaceUpdateError: If a delete or the PATCH fails.
        """
        session = self._require_session()
        if dry_run:
            plan: SwitchedVlanChangeSet = plan_interface_update(session, name, body)
            return {
                "remove_native_vlan": plan.remove_native,
                "remove_trunk_vlans": plan.remove_trunk,
                "response": "",
            }
        result: InterfaceUpdateResult = update_interface(session, name, body)
        return {
            "remove_native_vlan": result.removed_native_vlan,
            "remove_trunk_vlans": result.removed_trunk_vlans,
            "response": result.response.decode("utf-8", "replace"),
        }

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _interface_states(session: F5OSSession) -> list[InterfaceState]:
        return [InterfaceState.from_json(e) for e in interface_entries(get_interfaces(session))]

    def _require_session(self) -> F5OSSession:
        """Return the active session or raise :exc:`.F5OSError`."""
        if self._session is None:
            raise F5OSError("Session not open — call open() first.")
        return self._session
