from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidConfiguration

DEFAULT_MAX_WARNINGS = 2**31 - 1
ENV_PREFIX = "QUERYWARNINGS_"
ENV_DELIMITER = "__"


class _CollectorConfigModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidConfiguration(f"invalid {type(self).__name__}: {exc}") from exc


class WarningCollectorConfig(_CollectorConfigModel):
    max_warnings: int = Field(default=DEFAULT_MAX_WARNINGS, ge=0, alias="maxWarnings")


class TestingWarningCollectorConfig(_CollectorConfigModel):
    __test__ = False

    add_warnings: bool = Field(default=False, alias="addWarnings")
    preloaded_warnings: int = Field(default=0, ge=0, alias="preloadedWarnings")


class CollectorSettings(_CollectorConfigModel):
    warning_collector: WarningCollectorConfig = WarningCollectorConfig()
    testing_warning_collector: TestingWarningCollectorConfig = TestingWarningCollectorConfig()


def _merge(target: Dict[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    for key, value in updates.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _merge(current, value)
        elif isinstance(value, Mapping):
            target[key] = _merge({}, value)
        else:
            target[key] = value
    return target


def _read_toml(path: Path | None) -> Dict[str, Any]:
    if path is None:
        return {}
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise InvalidConfiguration(f"cannot parse {path}: {exc}") from exc


def _read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    sections: Dict[str, Any] = {}
    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        *parents, leaf = key[len(ENV_PREFIX) :].lower().split(ENV_DELIMITER)
        node = sections
        for part in parents:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise InvalidConfiguration(
                    f"{ENV_PREFIX}{part.upper()} is set but {key} expects a section"
                )
            node = child
        if isinstance(node.get(leaf), dict):
            raise InvalidConfiguration(f"{key} must be a section, not a value")
        node[leaf] = value
    return sections


def load_settings(
    *,
    config_path: Path | None = None,
    overrides: Dict[str, Any] | None = None,
) -> CollectorSettings:
    """Build collector settings from a TOML file, the environment and overrides.

    Later sources win: TOML, then ``QUERYWARNINGS_*`` variables, then
    ``overrides``. The merged result is validated as a whole, so a malformed
    section in any source raises :class:`InvalidConfiguration`.
    """
    if config_path is not None and not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    merged: Dict[str, Any] = {}
    for source in (_read_toml(config_path), _read_env(os.environ), overrides or {}):
        _merge(merged, source)
    return CollectorSettings(**merged)


__all__ = [
    "DEFAULT_MAX_WARNINGS",
    "ENV_PREFIX",
    "WarningCollectorConfig",
    "TestingWarningCollectorConfig",
    "CollectorSettings",
    "load_settings",
]
