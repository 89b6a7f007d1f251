from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidArgument


@dataclass(frozen=True)
class WarningCode:
    code: int
    name: str

    def __post_init__(self) -> None:
        if not isinstance(self.code, int) or isinstance(self.code, bool):
            raise InvalidArgument("code must be an int")
        if self.code < 0:
            raise InvalidArgument(f"code must be non-negative, got {self.code}")
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgument("name must be a non-empty string")


@dataclass(frozen=True)
class QueryWarning:
    """A diagnostic event raised while a query runs.

    Collectors key warnings by ``code`` only; ``sql_state`` and ``message``
    are carried along untouched.
    """

    warning_code: WarningCode
    message: str

    def __post_init__(self) -> None:
        if not isinstance(self.warning_code, WarningCode):
            raise InvalidArgument("warning_code must be a WarningCode")
        if not isinstance(self.message, str):
            raise InvalidArgument("message must be a string")

    @property
    def code(self) -> int:
        return self.warning_code.code

    @property
    def sql_state(self) -> str:
        return self.warning_code.name


__all__ = ["WarningCode", "QueryWarning"]
