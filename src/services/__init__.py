"""Services layer"""

from .parameter_resolver import ParameterResolver, parse_shorthand, resolve
from .subject_discovery import apply_spring_animations, discover

__all__ = [
    "ParameterResolver",
    "parse_shorthand",
    "resolve",
    "apply_spring_animations",
    "discover",
]
