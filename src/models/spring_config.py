"""
Spring configuration models

SpringConfig is the single canonical, immutable parameter bundle consumed by
the solver, the Bezier approximator and the session driver. It is validated
once at construction time so the per-frame path never has to check for a
zero stiffness or an empty property list.

Presets are named partial overlays applied on top of the defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace, asdict
from typing import Any, Dict, Optional, Tuple

from models.enums import SolverStrategy
from models.errors import InvalidParameterError
from utils.enum_helper import EnumHelper


# === Built-in defaults (used when no YAML config can be loaded) ===

DEFAULT_DURATION = 0.5
DEFAULT_BOUNCE = 0.2
DEFAULT_MASS = 1.0
DEFAULT_STIFFNESS = 100.0
DEFAULT_DAMPING = 10.0
DEFAULT_PERCEPTUAL_DURATION = 1.0
DEFAULT_PROPERTIES: Tuple[str, ...] = ("transform",)
DEFAULT_SOLVER = SolverStrategy.EXPONENTIAL

NUMERIC_FIELDS = ("duration", "bounce", "mass", "stiffness", "damping", "perceptual_duration")


@dataclass(frozen=True)
class SpringConfig:
    """
    Canonical spring parameters.

    Attributes:
        duration: Animation length in seconds (> 0)
        bounce: Regime selector in [-1, 1] (> 0 oscillates)
        mass: Mass (> 0), carried for completeness
        stiffness: Oscillation rate coefficient (> 0)
        damping: Decay rate coefficient (>= 0)
        perceptual_duration: Perceived settle time in seconds (> 0)
        properties: Ordered property identifiers, duplicates allowed
        solver: Which closed-form formula the solver uses
    """

    duration: float = DEFAULT_DURATION
    bounce: float = DEFAULT_BOUNCE
    mass: float = DEFAULT_MASS
    stiffness: float = DEFAULT_STIFFNESS
    damping: float = DEFAULT_DAMPING
    perceptual_duration: float = DEFAULT_PERCEPTUAL_DURATION
    properties: Tuple[str, ...] = field(default=DEFAULT_PROPERTIES)
    solver: SolverStrategy = DEFAULT_SOLVER

    def __post_init__(self):
        # Lists are accepted for convenience but stored as tuples
        if not isinstance(self.properties, tuple):
            object.__setattr__(self, "properties", tuple(self.properties))

        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameterError(name, value, "must be a number")
            if not math.isfinite(value):
                raise InvalidParameterError(name, value, "must be finite")

        if self.duration <= 0:
            raise InvalidParameterError("duration", self.duration, "must be > 0")
        if not -1.0 <= self.bounce <= 1.0:
            raise InvalidParameterError("bounce", self.bounce, "must be within [-1, 1]")
        if self.mass <= 0:
            raise InvalidParameterError("mass", self.mass, "must be > 0")
        if self.stiffness <= 0:
            raise InvalidParameterError("stiffness", self.stiffness, "must be > 0")
        if self.damping < 0:
            raise InvalidParameterError("damping", self.damping, "must be >= 0")
        if self.perceptual_duration <= 0:
            raise InvalidParameterError("perceptual_duration", self.perceptual_duration, "must be > 0")
        if not self.properties:
            raise InvalidParameterError("properties", self.properties, "must not be empty")
        for prop in self.properties:
            if not isinstance(prop, str) or not prop.strip():
                raise InvalidParameterError("properties", self.properties, "property names must be non-blank strings")
        if not isinstance(self.solver, SolverStrategy):
            raise InvalidParameterError("solver", self.solver, "must be a SolverStrategy")

    def with_overrides(self, **overrides: Any) -> "SpringConfig":
        """Return a new validated config with the given fields replaced"""
        return replace(self, **overrides)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["properties"] = list(self.properties)
        data["solver"] = EnumHelper.to_string(self.solver, lowercase=True)
        return data


@dataclass(frozen=True)
class Preset:
    """
    Named partial overlay of spring parameters.

    Only fields that are not None are applied. The canonical table sets
    bounce/stiffness/damping; duration is optional.
    """

    name: str
    bounce: Optional[float] = None
    stiffness: Optional[float] = None
    damping: Optional[float] = None
    duration: Optional[float] = None

    def overrides(self) -> Dict[str, float]:
        values = {
            "bounce": self.bounce,
            "stiffness": self.stiffness,
            "damping": self.damping,
            "duration": self.duration,
        }
        return {k: v for k, v in values.items() if v is not None}


BUILTIN_PRESETS: Dict[str, Preset] = {
    "bouncy": Preset("bouncy", bounce=0.4, stiffness=200.0, damping=5.0),
    "smooth": Preset("smooth", bounce=0.0, stiffness=100.0, damping=8.0),
    "flattened": Preset("flattened", bounce=-0.4, stiffness=80.0, damping=15.0),
}
