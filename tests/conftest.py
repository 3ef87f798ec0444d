"""Shared pytest fixtures for all test modules."""

import logging
from typing import Any, Callable, Dict

import pytest

from phaserconf.parameters import ParameterSet


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast tests without subprocesses or files")


@pytest.fixture
def required_values() -> Dict[str, Any]:
    """Minimal user-supplied values that pass validation."""
    return {
        "input": "target.bcf",
        "region": "chr20",
        "output": "phased.bcf",
    }


@pytest.fixture
def make_params(required_values) -> Callable[..., ParameterSet]:
    """Build a ParameterSet from the required values plus overrides.

    Keyword arguments use long option names with underscores for dashes;
    a value of None removes the option.
    """

    def _make(**overrides) -> ParameterSet:
        values = dict(required_values)
        for key, value in overrides.items():
            name = key.replace("_", "-")
            if name == "use-ps":
                name = "use-PS"
            if value is None:
                values.pop(name, None)
            else:
                values[name] = value
        return ParameterSet.from_values(values)

    return _make


@pytest.fixture
def phaser_logger() -> logging.Logger:
    """Package logger, propagating to caplog."""
    logger = logging.getLogger("phaserconf")
    logger.setLevel(logging.DEBUG)
    return logger
