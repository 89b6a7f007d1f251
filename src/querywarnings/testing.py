from __future__ import annotations

import logging
from typing import Optional, Tuple

from .collector import DefaultWarningCollector, WarningCollector, _require_config
from .config import TestingWarningCollectorConfig, WarningCollectorConfig
from .errors import InvalidArgument, InvalidConfiguration, NullConfiguration
from .models import QueryWarning, WarningCode

logger = logging.getLogger(__name__)

# SQLSTATE class 01 is "warning"; subclasses starting with 5 are vendor defined.
TEST_WARNING_SQL_STATE_PREFIX = "015"


def create_test_warning(code: int) -> QueryWarning:
    if isinstance(code, bool) or not isinstance(code, int) or code <= 0:
        raise InvalidArgument(f"code must be a positive int, got {code!r}")
    return QueryWarning(
        WarningCode(code, f"{TEST_WARNING_SQL_STATE_PREFIX}{code % 100:02d}"),
        f"Test warning {code}",
    )


def _require_testing_config(
    testing_config: Optional[TestingWarningCollectorConfig],
) -> TestingWarningCollectorConfig:
    if testing_config is None:
        raise NullConfiguration("testing_config is None")
    if testing_config.preloaded_warnings < 0:
        raise InvalidConfiguration(
            f"preloaded_warnings must be non-negative, got {testing_config.preloaded_warnings}"
        )
    return testing_config


class TestingWarningCollector(DefaultWarningCollector):
    """Warning collector for tests.

    Starts with ``preloaded_warnings`` synthetic warnings (codes ``1..N``).
    With ``add_warnings`` enabled every :meth:`get_warnings` call first adds
    one more synthetic warning with the next code, so callers see the list
    grow until the collector is full.
    """

    __test__ = False

    def __init__(
        self,
        config: Optional[WarningCollectorConfig],
        testing_config: Optional[TestingWarningCollectorConfig],
    ) -> None:
        super().__init__(config)
        testing_config = _require_testing_config(testing_config)
        self._add_warnings = testing_config.add_warnings
        for code in range(1, testing_config.preloaded_warnings + 1):
            self.add(create_test_warning(code))
        self._next_code = testing_config.preloaded_warnings
        logger.debug(
            "TestingWarningCollector: capacity=%d add_warnings=%s preloaded=%d",
            self.capacity,
            self._add_warnings,
            testing_config.preloaded_warnings,
        )

    @classmethod
    def from_values(
        cls,
        capacity: int,
        *,
        injection_enabled: bool = False,
        preload_count: int = 0,
    ) -> "TestingWarningCollector":
        return cls(
            WarningCollectorConfig(max_warnings=capacity),
            TestingWarningCollectorConfig(
                add_warnings=injection_enabled,
                preloaded_warnings=preload_count,
            ),
        )

    @property
    def injection_enabled(self) -> bool:
        return self._add_warnings

    def get_warnings(self) -> Tuple[QueryWarning, ...]:
        with self._lock:
            if self._add_warnings:
                self._next_code += 1
                self._add_locked(create_test_warning(self._next_code))
            return tuple(self._warnings.values())


class TestingWarningCollectorFactory:
    __test__ = False

    def __init__(
        self,
        config: Optional[WarningCollectorConfig],
        testing_config: Optional[TestingWarningCollectorConfig],
    ) -> None:
        self.config = _require_config(config)
        self.testing_config = _require_testing_config(testing_config)

    def create(self) -> WarningCollector:
        return TestingWarningCollector(self.config, self.testing_config)


__all__ = [
    "TEST_WARNING_SQL_STATE_PREFIX",
    "create_test_warning",
    "TestingWarningCollector",
    "TestingWarningCollectorFactory",
]
