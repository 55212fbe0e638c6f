"""Tests for the environment-driven log level."""

import pytest

from bumpall.utils.constants import ENV_LOG_LEVEL
from bumpall.utils.logging import resolve_log_level


def test_default_level_is_warning():
    assert resolve_log_level({}) == "WARNING"


def test_empty_value_uses_default():
    assert resolve_log_level({ENV_LOG_LEVEL: ""}) == "WARNING"


@pytest.mark.parametrize("value,expected", [("debug", "DEBUG"), ("Info", "INFO"), ("ERROR", "ERROR")])
def test_level_from_environment(value, expected):
    assert resolve_log_level({ENV_LOG_LEVEL: value}) == expected


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    assert resolve_log_level() == "DEBUG"
