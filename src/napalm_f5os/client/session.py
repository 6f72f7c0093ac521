"""Authenticated RESTCONF session for F5OS devices."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any

import requests

from napalm_f5os.client.errors import F5OSAuthError
from napalm_f5os.client.http import F5OSHTTP, normalise_base_url
from napalm_f5os.client.platform import PlatformType, classify
from napalm_f5os.log import TRACE
from napalm_f5os.vendor.f5os.endpoints import AUTH_TOKEN_HEADER, LOGIN, URI_ROOT

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S: float = 60.0

_UNAUTHORIZED: int = 401


@dataclass
class F5OSConfig:
    """Connection settings for :func:`new_session`.

    Args:
        host: Device address, with or without scheme and port.
        username: Login username.
        password: Login password.
        port: Port appended to *host* when it carries none (0 = leave as is).
        transport: Pre-built :class:`requests.Session` used as connection pool.
        user_agent: Optional tag identifying the caller.
        teem: Feature-telemetry opt-in flag, carried for callers that report it.
        timeout_s: Per-request timeout in seconds.
    """

    host: str
    username: str
    password: str
    port: int = 0
    transport: requests.Session | None = None
    user_agent: str | None = None
    teem: bool = False
    timeout_s: float = DEFAULT_TIMEOUT_S


class F5OSSession:
    """Token-authenticated session bound to one F5OS device.

    Built by :func:`new_session`; the token is fixed for the lifetime of
    the object.  There is no logout and no re-login: once the token
    expires every call fails and a new session must be created.

    Args:
        host: Normalised base URL.
        http: Executor carrying the token and connection pool.
        config: The settings the session was built from.
        log: Logger to use instead of the module logger.
    """

    def __init__(
        self,
        host: str,
        http: F5OSHTTP,
        config: F5OSConfig,
        log: logging.Logger | None = None,
    ) -> None:
        self.host: str = host
        self.http: F5OSHTTP = http
        self.config: F5OSConfig = config
        self.platform_type: PlatformType | None = None
        self._log: logging.Logger = log or logger

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def token(self) -> str:
        """Session token returned by the login call (may be empty)."""
        return self.http.token

    @property
    def log(self) -> logging.Logger:
        return self._log

    # ------------------------------------------------------------------
    # Public request methods
    # ------------------------------------------------------------------

    def url(self, path: str) -> str:
        """Absolute URL of *path* under the RESTCONF data root."""
        return f"{self.host}{URI_ROOT}{path}"

    def get(self, path: str) -> bytes:
        url = self.url(path)
        self._log.info("GET %s", url)
        return self.http.execute("GET", url)

    def put(self, path: str, body: Any) -> bytes:
        url = self.url(path)
        self._log.debug("PUT %s", url)
        return self.http.execute("PUT", url, _encode(body))

    def patch(self, path: str, body: Any) -> bytes:
        url = self.url(path)
        self._log.debug("PATCH %s", url)
        return self.http.execute("PATCH", url, _encode(body))

    def post(self, path: str, body: Any) -> bytes:
        url = self.url(path)
        self._log.debug("POST %s", url)
        return self.http.execute("POST", url, _encode(body))

    def delete(self, path: str) -> None:
        """DELETE *path*; any response body is only logged."""
        url = self.url(path)
        self._log.debug("DELETE %s", url)
        resp = self.http.execute("DELETE", url)
        if resp:
            self._log.log(TRACE, "DELETE %s response: %s", url, resp.decode("utf-8", "replace"))

    def probe(self, path: str) -> requests.Response:
        """GET *path* and return the raw response without status handling."""
        return self.http.send("GET", self.url(path))

    def upload_image(self, path: str, data: Any, headers: dict[str, str]) -> bytes:
        """Multipart POST used for image/file uploads.

        Args:
            path: Upload path under the data root.
            data: Multipart body (bytes or file-like object).
            headers: Must provide ``File-Upload-Id`` and ``Content-Type``.

        Returns:
            Raw response body, whatever the status code.
        """
        return self.http.upload(self.url(path), data, headers)


def new_session(config: F5OSConfig, log: logging.Logger | None = None) -> F5OSSession:
    """Log in to an F5OS device and return a classified session.

    Performs a basic-auth GET against the login endpoint, keeps the
    ``X-Auth-Token`` response header as the session token, then detects
    the platform type before returning.

    Args:
        config: Connection settings.
        log: Logger injected into the session and its executor.

    Returns:
        An authenticated :class:`F5OSSession`.

    Raises:
        F5OSAuthError: If the device answers the login with HTTP 401.
        F5OSRequestError: On any transport-level failure.
    """
    log = log or logger
    log.info("Session creation starts")
    host = normalise_base_url(config.host, config.port)
    log.info("Connecting to %s", host)

    http = F5OSHTTP(
        timeout_s=config.timeout_s,
        session=config.transport,
        user_agent=config.user_agent,
        log=log,
    )
    resp = http.send("GET", host + LOGIN, auth=(config.username, config.password))
    if resp.status_code == _UNAUTHORIZED:
        raise F5OSAuthError(resp.status_code, resp.reason, resp.text)

    token = resp.headers.get(AUTH_TOKEN_HEADER, "")
    if not token:
        log.warning("Login to %s returned no %s header", host, AUTH_TOKEN_HEADER)
    http.token = token

    session = F5OSSession(host, http, config, log=log)
    classify(session)
    log.info("Session creation success (platform=%s)", session.platform_type)
    return session


def _encode(body: Any) -> bytes | None:
    if body is None or isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode()
    return json.dumps(body).encode()
