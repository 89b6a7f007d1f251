from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Protocol, Tuple, runtime_checkable

from .config import WarningCollectorConfig
from .errors import InvalidArgument, InvalidConfiguration, NullConfiguration
from .models import QueryWarning

logger = logging.getLogger(__name__)


@runtime_checkable
class WarningCollector(Protocol):
    def add(self, warning: QueryWarning) -> None: ...

    def get_warnings(self) -> Tuple[QueryWarning, ...]: ...


class WarningCollectorFactory(Protocol):
    def create(self) -> WarningCollector: ...


def _require_config(config: Optional[WarningCollectorConfig]) -> WarningCollectorConfig:
    if config is None:
        raise NullConfiguration("config is None")
    if config.max_warnings < 0:
        raise InvalidConfiguration(f"max_warnings must be non-negative, got {config.max_warnings}")
    return config


class NoOpWarningCollector:
    def add(self, warning: QueryWarning) -> None:
        if warning is None:
            raise InvalidArgument("warning is None")

    def get_warnings(self) -> Tuple[QueryWarning, ...]:
        return ()


NOOP_WARNING_COLLECTOR = NoOpWarningCollector()


class DefaultWarningCollector:
    """Thread-safe, bounded store of warnings keyed by code.

    The first warning seen for a code wins; later ones with the same code are
    ignored. Once ``max_warnings`` distinct codes are held, further warnings
    are dropped without error.
    """

    def __init__(self, config: Optional[WarningCollectorConfig]) -> None:
        self._max_warnings = _require_config(config).max_warnings
        self._lock = threading.Lock()
        self._warnings: Dict[int, QueryWarning] = {}
        self._dropped = False

    @property
    def capacity(self) -> int:
        return self._max_warnings

    def add(self, warning: QueryWarning) -> None:
        if warning is None:
            raise InvalidArgument("warning is None")
        with self._lock:
            self._add_locked(warning)

    def get_warnings(self) -> Tuple[QueryWarning, ...]:
        with self._lock:
            return tuple(self._warnings.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._warnings)

    def _add_locked(self, warning: QueryWarning) -> None:
        # caller holds self._lock
        if len(self._warnings) < self._max_warnings:
            self._warnings.setdefault(warning.code, warning)
        elif not self._dropped:
            self._dropped = True
            logger.debug(
                "%s: capacity %d reached, dropping warning code=%d",
                type(self).__name__,
                self._max_warnings,
                warning.code,
            )


class DefaultWarningCollectorFactory:
    def __init__(self, config: Optional[WarningCollectorConfig]) -> None:
        self.config = _require_config(config)

    def create(self) -> WarningCollector:
        return DefaultWarningCollector(self.config)


__all__ = [
    "WarningCollector",
    "WarningCollectorFactory",
    "NoOpWarningCollector",
    "NOOP_WARNING_COLLECTOR",
    "DefaultWarningCollector",
    "DefaultWarningCollectorFactory",
]
