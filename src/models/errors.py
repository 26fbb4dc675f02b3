"""
Error and warning types for spring configuration and animation
"""

from dataclasses import dataclass
from typing import Any


class SpringError(Exception):
    """Base class for all spring animation errors"""


class InvalidParameterError(SpringError, ValueError):
    """
    A spring parameter is outside its valid range.

    Raised at config construction time, before any session starts.
    """

    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}={value!r}: {reason}")


class UnknownStrategyError(SpringError, KeyError):
    """Solver strategy lookup failed"""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Unknown solver strategy: {name!r}")

    def __str__(self) -> str:
        return self.args[0]


@dataclass(frozen=True)
class ConfigurationWarning:
    """
    Recoverable configuration problem.

    The offending field falls back to its default (or the preset is ignored)
    and resolution continues.

    Attributes:
        field: Field or attribute the problem refers to
        value: Raw value that was rejected
        reason: Human readable explanation
    """
    field: str
    value: Any
    reason: str

    def __str__(self) -> str:
        return f"{self.field}={self.value!r}: {self.reason}"
