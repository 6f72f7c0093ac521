"""Low-level HTTP request executor for F5OS RESTCONF endpoints."""

from __future__ import annotations

import importlib.metadata
import logging
from collections.abc import Mapping
from typing import Any

import requests
import urllib3

from napalm_f5os.client.errors import F5OSAPIError, F5OSRequestError
from napalm_f5os.log import TRACE
from napalm_f5os.vendor.f5os.endpoints import AUTH_TOKEN_HEADER, CONTENT_TYPE

logger = logging.getLogger(__name__)

# Certificate verification is always off for F5OS management endpoints.
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

try:
    _VERSION: str = importlib.metadata.version("napalm-f5os")
except importlib.metadata.PackageNotFoundError:
    _VERSION = "0.0.0"

_USER_AGENT: str = f"napalm-f5os/{_VERSION}"

_OK_STATUSES: frozenset[int] = frozenset({200, 201})
_NOT_FOUND: int = 404


def normalise_base_url(host: str, port: int = 0) -> str:
    """Turn a bare host into an absolute base URL.

    ``https://`` is prefixed unless the host already starts with ``http``.
    When *port* is non-zero and the host carries no port, ``:port`` is
    appended once.
    """
    url = host.rstrip("/")
    if not url.startswith("http"):
        url = "https://" + url
    if port and urllib3.util.parse_url(url).port is None:
        url = f"{url}:{port}"
    return url


def _user_agent(tag: str | None) -> str:
    return f"{_USER_AGENT} {tag}" if tag else _USER_AGENT


class F5OSHTTP:
    """Request executor around a shared :class:`requests.Session`.

    Sets the ``X-Auth-Token`` and ``Content-Type`` headers on every
    request, applies the per-call timeout, and classifies responses by
    status code (see :meth:`execute`).

    Args:
        timeout_s: Per-request timeout in seconds.
        session: Pre-built :class:`requests.Session` to reuse as the
            connection pool; a new one is created when omitted.
        user_agent: Optional caller tag appended to the ``User-Agent``.
        log: Logger to use instead of the module logger.
    """

    def __init__(
        self,
        timeout_s: float = 60.0,
        session: requests.Session | None = None,
        user_agent: str | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.timeout_s: float = timeout_s
        self.token: str = ""
        self._session: requests.Session = session or requests.Session()
        self._session.headers.update({"User-Agent": _user_agent(user_agent)})
        self._log: logging.Logger = log or logger

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def send(
        self,
        method: str,
        url: str,
        body: Any = None,
        headers: Mapping[str, str] | None = None,
        auth: tuple[str, str] | None = None,
    ) -> requests.Response:
        """Send one request and return the raw response, unclassified.

        Args:
            method: HTTP verb.
            url: Absolute URL.
            body: Optional request body.
            headers: Headers overriding the defaults.
            auth: Basic-auth credentials (login only).

        Raises:
            F5OSRequestError: On any transport-level failure.
        """
        request_headers: dict[str, str] = {"Content-Type": CONTENT_TYPE}
        if self.token:
            request_headers[AUTH_TOKEN_HEADER] = self.token
        if headers:
            request_headers.update(headers)

        self._log.log(TRACE, "%s %s", method, url)
        if isinstance(body, (bytes, str)) and body:
            self._log.log(TRACE, "Request body: %s", _preview(body))
        try:
            resp = self._session.request(
                method,
                url,
                data=body,
                headers=request_headers,
                auth=auth,
                timeout=self.timeout_s,
                verify=False,
            )
        except requests.exceptions.RequestException as exc:
            raise F5OSRequestError(url, exc) from exc
        self._log.debug("%s %s -> %d", method, url, resp.status_code)
        return resp

    def execute(self, method: str, url: str, body: bytes | None = None) -> bytes:
        """Send a request and apply the F5OS status policy.

        - 200 / 201: the raw body is returned.
        - 404: the raw (possibly empty) body is returned without error so
          callers can tell an absent resource from a malformed request.
        - other >= 400: :exc:`F5OSAPIError` built from the first
          ``ietf-restconf:errors`` entry.
        - anything else (204, 3xx, ...): ``b""``.

        Raises:
            F5OSRequestError: On any transport-level failure.
            F5OSAPIError: On a failing status other than 404.
        """
        resp = self.send(method, url, body)
        status = resp.status_code
        if status in _OK_STATUSES or status == _NOT_FOUND:
            return resp.content
        if status >= 400:
            raise F5OSAPIError.from_response(status, url, resp.content)
        self._log.debug("No content returned for %s %s (HTTP %d)", method, url, status)
        return b""

    def upload(self, url: str, data: Any, headers: Mapping[str, str]) -> bytes:
        """POST a multipart upload and return the raw body for any status.

        Only ``File-Upload-Id`` and ``Content-Type`` are taken from
        *headers*; the token header is added automatically.

        Raises:
            F5OSRequestError: On any transport-level failure.
        """
        upload_headers = {
            "File-Upload-Id": headers.get("File-Upload-Id", ""),
            "Content-Type": headers.get("Content-Type", ""),
        }
        self._log.log(TRACE, "POST %s (upload id=%s)", url, upload_headers["File-Upload-Id"])
        resp = self.send("POST", url, data, headers=upload_headers)
        return resp.content

    def close(self) -> None:
        """Close the underlying :class:`requests.Session`."""
        self._session.close()


def _preview(body: bytes | str) -> str:
    text = body.decode("utf-8", "replace") if isinstance(body, bytes) else body
    return text[:2000]
