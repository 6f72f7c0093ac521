"""Custom exceptions and RESTCONF error decoding for the napalm-f5os client."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

ERRORS_KEY: str = "ietf-restconf:errors"


@dataclass(frozen=True)
class RestconfErrorEntry:
    """One entry of an ``ietf-restconf:errors`` envelope.

    Attributes:
        error_type: ``error-type`` leaf (e.g. ``"application"``).
        error_tag: ``error-tag`` leaf (e.g. ``"invalid-value"``).
        error_path: ``error-path`` leaf, empty when the device omits it.
        error_message: ``error-message`` leaf, empty when the device omits it.
    """

    error_type: str = ""
    error_tag: str = ""
    error_path: str = ""
    error_message: str = ""

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> RestconfErrorEntry:
        return cls(
            error_type=str(data.get("error-type", "")),
            error_tag=str(data.get("error-tag", "")),
            error_path=str(data.get("error-path", "")),
            error_message=str(data.get("error-message", "")),
        )


def parse_restconf_errors(body: bytes | str | None) -> list[RestconfErrorEntry]:
    """Decode an ``ietf-restconf:errors`` envelope into typed entries.

    Anything that is not a well-formed envelope (empty body, non-JSON text,
    missing keys, wrong types) yields an empty list.

    Args:
        body: Raw response body.

    Returns:
        Entries in the order the device reported them.
    """
    if not body:
        return []
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
        logger.debug("Error body is not JSON: %r", body[:200])
        return []
    if not isinstance(document, dict):
        return []
    envelope = document.get(ERRORS_KEY)
    if not isinstance(envelope, dict):
        return []
    entries = envelope.get("error")
    if not isinstance(entries, list):
        return []
    return [RestconfErrorEntry.from_json(e) for e in entries if isinstance(e, dict)]


class F5OSError(Exception):
    """Base exception for all napalm-f5os errors."""


class F5OSRequestError(F5OSError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class F5OSAuthError(F5OSError):
    """Raised when the login endpoint rejects the credentials (HTTP 401)."""

    def __init__(self, status_code: int, reason: str, body: str) -> None:
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"{status_code} {reason} with error:{body}")


class F5OSAPIError(F5OSError):
    """Raised when the device answers an operational call with a failing status.

    The message is the ``error-message`` of the first envelope entry.  When
    the envelope is empty or missing the message falls back to
    ``HTTP <status>``.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        url: str,
        errors: list[RestconfErrorEntry] | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        self.errors: list[RestconfErrorEntry] = errors or []
        super().__init__(message)

    @classmethod
    def from_response(cls, status_code: int, url: str, body: bytes) -> F5OSAPIError:
        errors = parse_restconf_errors(body)
        if errors:
            message = errors[0].error_message
        else:
            message = f"HTTP {status_code}"
        return cls(message, status_code=status_code, url=url, errors=errors)


@dataclass
class F5OSInterfaceUpdateError(F5OSError):
    """Raised when a step of an interface update fails part-way.

    The sequence is not transactional: deletes listed in :attr:`completed`
    have already been applied on the device and are not rolled back.

    Attributes:
        interface: Name of the interface being updated.
        completed: Human-readable labels of the steps that succeeded,
            e.g. ``["delete native-vlan", "delete trunk-vlan=10"]``.
        cause: The exception that stopped the sequence.
    """

    interface: str
    cause: Exception
    completed: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        done = ", ".join(self.completed) or "none"
        super().__init__(
            f"Update of interface {self.interface!r} failed: {self.cause} "
            f"(completed steps: {done})"
        )
