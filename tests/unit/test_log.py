"""Unit tests for napalm_f5os.log."""

from __future__ import annotations

import logging

from napalm_f5os.client.http import F5OSHTTP
from napalm_f5os.log import TRACE, configure_logging, level_name_from_env


def _logger(name: str) -> logging.Logger:
    logger = logging.getLogger(f"napalm_f5os.tests.{name}")
    logger.disabled = False
    logger.setLevel(logging.NOTSET)
    return logger


def test_default_level_is_info() -> None:
    assert level_name_from_env({}) == "INFO"


def test_generic_variable_wins() -> None:
    env = {"TF_LOG": "debug", "TF_LOG_PROVIDER_F5OS": "ERROR"}
    assert level_name_from_env(env) == "DEBUG"


def test_provider_variable_used_when_generic_absent() -> None:
    assert level_name_from_env({"TF_LOG_PROVIDER_F5OS": "warn"}) == "WARN"


def test_configure_sets_level() -> None:
    logger = configure_logging({"TF_LOG": "ERROR"}, _logger("error"))
    assert logger.level == logging.ERROR


def test_trace_level_registered() -> None:
    logger = configure_logging({"TF_LOG": "TRACE"}, _logger("trace"))
    assert logger.level == TRACE
    assert logging.getLevelName(TRACE) == "TRACE"


def test_warn_alias() -> None:
    logger = configure_logging({"TF_LOG": "WARN"}, _logger("warn"))
    assert logger.level == logging.WARNING


def test_unknown_level_falls_back_to_info() -> None:
    logger = configure_logging({"TF_LOG": "chatty"}, _logger("unknown"))
    assert logger.level == logging.INFO


def test_off_disables_logger() -> None:
    logger = configure_logging({"TF_LOG": "OFF"}, _logger("off"))
    assert logger.disabled is True


def test_injected_logger_used_by_executor() -> None:
    logger = _logger("injected")
    http = F5OSHTTP(log=logger)
    assert http._log is logger
