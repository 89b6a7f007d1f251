from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import pytest

from .config import CollectorSettings, load_settings
from .testing import TestingWarningCollector


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("querywarnings")
    group.addoption(
        "--querywarnings-max-warnings",
        action="store",
        dest="querywarnings_max_warnings",
        type=int,
        default=None,
        help="Capacity of the warning_collector fixture.",
    )
    group.addoption(
        "--querywarnings-add-warnings",
        action="store_true",
        dest="querywarnings_add_warnings",
        default=None,
        help="Make warning_collector add a synthetic warning on every read.",
    )
    group.addoption(
        "--querywarnings-preloaded-warnings",
        action="store",
        dest="querywarnings_preloaded_warnings",
        type=int,
        default=None,
        help="Number of synthetic warnings the warning_collector fixture starts with.",
    )
    group.addoption(
        "--querywarnings-config",
        action="store",
        dest="querywarnings_config",
        default=None,
        help="TOML file with [warning_collector] / [testing_warning_collector] tables.",
    )


def _option_overrides(config: pytest.Config) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    max_warnings = config.getoption("querywarnings_max_warnings")
    if max_warnings is not None:
        overrides.setdefault("warning_collector", {})["max_warnings"] = max_warnings
    add_warnings = config.getoption("querywarnings_add_warnings")
    if add_warnings is not None:
        overrides.setdefault("testing_warning_collector", {})["add_warnings"] = add_warnings
    preloaded = config.getoption("querywarnings_preloaded_warnings")
    if preloaded is not None:
        overrides.setdefault("testing_warning_collector", {})["preloaded_warnings"] = preloaded
    return overrides


@pytest.fixture(scope="session")
def warning_collector_settings(pytestconfig: pytest.Config) -> CollectorSettings:
    raw_path = pytestconfig.getoption("querywarnings_config")
    config_path = Path(raw_path) if raw_path else None
    return load_settings(config_path=config_path, overrides=_option_overrides(pytestconfig))


@pytest.fixture
def warning_collector(warning_collector_settings: CollectorSettings) -> TestingWarningCollector:
    return TestingWarningCollector(
        warning_collector_settings.warning_collector,
        warning_collector_settings.testing_warning_collector,
    )


__all__ = ["warning_collector", "warning_collector_settings"]
