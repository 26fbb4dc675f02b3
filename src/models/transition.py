"""
Transition Models

Cubic-Bezier timing curves and the transition declaration handed to the
external rendering/transition collaborator.

A declaration pairs every animated property with the spring duration and the
timing curve, e.g.:

    transform 0.5s cubic-bezier(0.42, 1.75, 0.58, 1)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Tuple


_CSS_PATTERN = re.compile(
    r"^\s*cubic-bezier\(\s*([-+0-9.eE]+)\s*,\s*([-+0-9.eE]+)\s*,"
    r"\s*([-+0-9.eE]+)\s*,\s*([-+0-9.eE]+)\s*\)\s*$"
)

# Newton iterations before switching to bisection
_NEWTON_ITERATIONS = 8
_BISECTION_ITERATIONS = 40
_EPSILON = 1e-7


def _format_number(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class BezierCurve:
    """
    Cubic-Bezier timing function with implicit end points (0, 0) and (1, 1).

    Attributes:
        x1, y1: First control point (x1 in [0, 1])
        x2, y2: Second control point (x2 in [0, 1])

    Example:
        curve = BezierCurve(0.42, 1.75, 0.58, 1.0)
        curve.to_css()      # 'cubic-bezier(0.42, 1.75, 0.58, 1)'
        curve.sample(0.5)   # eased progress at half time
    """

    x1: float
    y1: float
    x2: float
    y2: float

    def __post_init__(self):
        if not (0.0 <= self.x1 <= 1.0 and 0.0 <= self.x2 <= 1.0):
            raise ValueError(f"x control values must be in [0, 1], got x1={self.x1}, x2={self.x2}")

    def control_points(self) -> Tuple[float, float, float, float]:
        return (self.x1, self.y1, self.x2, self.y2)

    def to_css(self) -> str:
        return "cubic-bezier({})".format(", ".join(_format_number(v) for v in self.control_points()))

    @classmethod
    def from_css(cls, text: str) -> "BezierCurve":
        """
        Parse a 'cubic-bezier(x1, y1, x2, y2)' string.

        Raises:
            ValueError: If text is not a cubic-bezier() expression
        """
        match = _CSS_PATTERN.match(text or "")
        if not match:
            raise ValueError(f"Not a cubic-bezier expression: {text!r}")
        return cls(*(float(group) for group in match.groups()))

    # ------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------

    @staticmethod
    def _component(s: float, p1: float, p2: float) -> float:
        # B(s) = 3(1-s)²s P1 + 3(1-s)s² P2 + s³
        inv = 1.0 - s
        return 3 * inv * inv * s * p1 + 3 * inv * s * s * p2 + s ** 3

    @staticmethod
    def _component_derivative(s: float, p1: float, p2: float) -> float:
        inv = 1.0 - s
        return 3 * inv * inv * p1 + 6 * inv * s * (p2 - p1) + 3 * s * s * (1.0 - p2)

    def _solve_parameter(self, x: float) -> float:
        """Find s such that x(s) == x"""
        s = x
        for _ in range(_NEWTON_ITERATIONS):
            error = self._component(s, self.x1, self.x2) - x
            if abs(error) < _EPSILON:
                return s
            slope = self._component_derivative(s, self.x1, self.x2)
            if abs(slope) < 1e-6:
                break
            s -= error / slope

        # Bisection fallback: x(s) is monotonic because x1, x2 are in [0, 1]
        low, high = 0.0, 1.0
        s = x
        for _ in range(_BISECTION_ITERATIONS):
            current = self._component(s, self.x1, self.x2)
            if abs(current - x) < _EPSILON:
                break
            if current < x:
                low = s
            else:
                high = s
            s = (low + high) / 2
        return s

    def sample(self, progress: float) -> float:
        """
        Eased output for a time progress value.

        Args:
            progress: Elapsed fraction of the transition, clamped to [0, 1]

        Returns:
            Curve output (may exceed 1 for overshooting curves)
        """
        progress = max(0.0, min(1.0, progress))
        if progress in (0.0, 1.0):
            return progress
        s = self._solve_parameter(progress)
        return self._component(s, self.y1, self.y2)


@dataclass(frozen=True)
class TransitionEntry:
    """One property of a transition declaration"""
    property: str
    duration: float
    curve: BezierCurve

    def to_css(self) -> str:
        return f"{self.property} {_format_number(self.duration)}s {self.curve.to_css()}"


@dataclass(frozen=True)
class TransitionDeclaration:
    """
    Transition description for the rendering collaborator.

    Entries keep property order, duplicates included, since order decides
    the declaration order in the emitted string.
    """
    entries: Tuple[TransitionEntry, ...] = field(default_factory=tuple)

    @property
    def properties(self) -> List[str]:
        return [entry.property for entry in self.entries]

    def to_css(self) -> str:
        return ", ".join(entry.to_css() for entry in self.entries)

    def __str__(self) -> str:
        return self.to_css()
