from __future__ import annotations


class WarningCollectorError(Exception):
    """Base class for collector precondition failures."""


class NullConfiguration(WarningCollectorError, TypeError):
    pass


class InvalidConfiguration(WarningCollectorError, ValueError):
    pass


class InvalidArgument(WarningCollectorError, ValueError):
    pass


__all__ = [
    "WarningCollectorError",
    "NullConfiguration",
    "InvalidConfiguration",
    "InvalidArgument",
]
