"""
Models package - Data models for the spring animation system
"""

from .enums import SolverStrategy, Regime, BounceSign, SessionState, LogLevel, LogCategory
from .errors import SpringError, InvalidParameterError, UnknownStrategyError, ConfigurationWarning
from .spring_config import SpringConfig, Preset, BUILTIN_PRESETS
from .transition import BezierCurve, TransitionEntry, TransitionDeclaration
from .subject import AnimatedSubject, HeadlessSubject
from .session import AnimationSession

__all__ = [
    'SolverStrategy',
    'Regime',
    'BounceSign',
    'SessionState',
    'LogLevel',
    'LogCategory',
    'SpringError',
    'InvalidParameterError',
    'UnknownStrategyError',
    'ConfigurationWarning',
    'SpringConfig',
    'Preset',
    'BUILTIN_PRESETS',
    'BezierCurve',
    'TransitionEntry',
    'TransitionDeclaration',
    'AnimatedSubject',
    'HeadlessSubject',
    'AnimationSession',
]
