"""Environment-driven logging configuration for napalm-f5os.

Nothing here runs at import time except registering the ``TRACE`` level
name; callers opt in with :func:`configure_logging` or pass their own
:class:`logging.Logger` into the client classes.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

TRACE: int = 5
logging.addLevelName(TRACE, "TRACE")

# Checked in order; the first one that is set wins.
LOG_ENV_VARS: tuple[str, ...] = ("TF_LOG", "TF_LOG_PROVIDER_F5OS")

DEFAULT_LEVEL_NAME: str = "INFO"

_LEVELS: dict[str, int] = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

_OFF: str = "OFF"


def level_name_from_env(environ: Mapping[str, str] | None = None) -> str:
    """Return the upper-cased level name selected by the environment."""
    env = os.environ if environ is None else environ
    for name in LOG_ENV_VARS:
        if name in env:
            return env[name].strip().upper()
    return DEFAULT_LEVEL_NAME


def configure_logging(
    environ: Mapping[str, str] | None = None,
    logger: logging.Logger | None = None,
) -> logging.Logger:
    """Set the level of *logger* from ``TF_LOG`` / ``TF_LOG_PROVIDER_F5OS``.

    ``OFF`` disables the logger.  Unknown level names fall back to ``INFO``.

    Args:
        environ: Environment mapping (default :data:`os.environ`).
        logger: Logger to configure (default: the ``napalm_f5os`` logger).

    Returns:
        The configured logger.
    """
    target = logger or logging.getLogger("napalm_f5os")
    name = level_name_from_env(environ)
    if name == _OFF:
        target.disabled = True
        return target
    target.disabled = False
    target.setLevel(_LEVELS.get(name, logging.INFO))
    return target
