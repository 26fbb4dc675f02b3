"""
Enums for the spring animation system
"""

from enum import Enum, auto


class SolverStrategy(Enum):
    """
    Closed-form solver formulas

    EXPONENTIAL: decaying exponential pair, regime chosen by sign of bounce
    DAMPED_COSINE: damping-ratio / natural-frequency form for bounce > 0
    """
    EXPONENTIAL = auto()
    DAMPED_COSINE = auto()


class Regime(Enum):
    """Qualitative motion regime selected by the sign of bounce"""
    OSCILLATORY = auto()       # bounce > 0
    NON_OSCILLATORY = auto()   # bounce <= 0


class BounceSign(Enum):
    """Bucket used by the Bezier approximation table"""
    POSITIVE = auto()
    NEGATIVE = auto()
    ZERO = auto()


class SessionState(Enum):
    """
    Per-subject animation session lifecycle

    IDLE -> RUNNING -> (INTERRUPTED -> RUNNING)* -> SETTLED
    Any non-terminal state may go to CANCELLED.
    """
    IDLE = auto()
    RUNNING = auto()
    INTERRUPTED = auto()
    SETTLED = auto()
    CANCELLED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.SETTLED, SessionState.CANCELLED)


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for filtering and colouring"""
    CONFIG = auto()       # Defaults, presets, attribute resolution
    SOLVER = auto()       # Spring formula evaluation
    BEZIER = auto()       # Timing curve approximation
    TRACKER = auto()      # External geometry / transform changes
    SESSION = auto()      # Session driver lifecycle
    CLOCK = auto()        # Frame clock scheduling
    DISCOVERY = auto()    # Subject discovery
    SYSTEM = auto()       # Entry point, general
