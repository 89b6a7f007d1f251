from __future__ import annotations

import logging

import pytest

from querywarnings import (
    NOOP_WARNING_COLLECTOR,
    DefaultWarningCollector,
    DefaultWarningCollectorFactory,
    InvalidArgument,
    NullConfiguration,
    WarningCollector,
    WarningCollectorConfig,
    create_test_warning,
)


def test_default_collector_bounds_and_dedups() -> None:
    collector = DefaultWarningCollector(WarningCollectorConfig(max_warnings=2))
    collector.add(create_test_warning(4))
    collector.add(create_test_warning(4))
    collector.add(create_test_warning(8))
    collector.add(create_test_warning(9))

    assert [w.code for w in collector.get_warnings()] == [4, 8]


def test_default_collector_never_injects() -> None:
    collector = DefaultWarningCollector(WarningCollectorConfig())
    assert collector.get_warnings() == ()
    assert collector.get_warnings() == ()
    assert collector.capacity == 2**31 - 1


def test_default_collector_requires_config() -> None:
    with pytest.raises(NullConfiguration):
        DefaultWarningCollector(None)


def test_first_drop_is_logged_once(caplog) -> None:
    collector = DefaultWarningCollector(WarningCollectorConfig(max_warnings=1))
    with caplog.at_level(logging.DEBUG, logger="querywarnings.collector"):
        for code in range(1, 5):
            collector.add(create_test_warning(code))

    drops = [r for r in caplog.records if "capacity 1 reached" in r.getMessage()]
    assert len(drops) == 1
    assert "code=2" in drops[0].getMessage()


def test_noop_collector_discards_everything() -> None:
    NOOP_WARNING_COLLECTOR.add(create_test_warning(1))
    assert NOOP_WARNING_COLLECTOR.get_warnings() == ()
    assert isinstance(NOOP_WARNING_COLLECTOR, WarningCollector)
    with pytest.raises(InvalidArgument):
        NOOP_WARNING_COLLECTOR.add(None)  # type: ignore[arg-type]


def test_default_factory_returns_fresh_collectors() -> None:
    factory = DefaultWarningCollectorFactory(WarningCollectorConfig(max_warnings=3))
    first = factory.create()
    first.add(create_test_warning(1))

    assert factory.create().get_warnings() == ()
    assert [w.code for w in first.get_warnings()] == [1]
