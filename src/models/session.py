"""
AnimationSession: per-subject runtime state (not persisted).

Owned and mutated by the session driver once per frame. The interruption
tracker reads and updates the observed baselines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from models.enums import SessionState
from models.spring_config import SpringConfig
from models.subject import AnimatedSubject
from models.transition import TransitionDeclaration


@dataclass
class AnimationSession:
    """
    Runtime state for one (subject, slot) animation.

    Attributes:
        subject: The animated subject
        slot: Logical animation slot on that subject
        config: Resolved spring parameters
        start_values: Solver initial value per property
        target_values: Solver target value per property
        state: Lifecycle state
        start_clock_time: Frame timestamp (ms) that t is measured from
        current_values: Last value written per property
        velocity: Finite-difference velocity estimate per property
        last_observed_area: Baseline bounding area
        last_observed_transform: Baseline transform signature
        last_elapsed: Elapsed seconds used on the latest frame
        frame_count: Frames handled
        interruptions: Number of detected external changes
        transition_applied: Whether the transition declaration is in place
        declaration: Transition declaration last applied to the subject
        frame_handle: Pending frame request handle (at most one)
        cancelled: Invalidation token checked by every frame callback
        on_settled: Optional completion callback
    """

    subject: AnimatedSubject
    slot: str
    config: SpringConfig
    start_values: Dict[str, float]
    target_values: Dict[str, float]

    state: SessionState = SessionState.IDLE
    start_clock_time: Optional[float] = None
    current_values: Dict[str, float] = field(default_factory=dict)
    velocity: Dict[str, float] = field(default_factory=dict)
    last_observed_area: Optional[float] = None
    last_observed_transform: Optional[str] = None
    last_elapsed: float = 0.0
    frame_count: int = 0
    interruptions: int = 0
    transition_applied: bool = False
    declaration: Optional[TransitionDeclaration] = None
    frame_handle: Optional[int] = None
    cancelled: bool = False
    on_settled: Optional[Callable[["AnimationSession"], None]] = field(default=None, repr=False)

    @property
    def key(self):
        return (self.subject.subject_id, self.slot)

    @property
    def is_active(self) -> bool:
        return not self.cancelled and not self.state.is_terminal

    def elapsed_seconds(self, now_ms: float) -> float:
        if self.start_clock_time is None:
            return 0.0
        return (now_ms - self.start_clock_time) / 1000

    def __repr__(self) -> str:
        return (
            f"AnimationSession({self.subject.subject_id}/{self.slot}, "
            f"state={self.state.name}, frames={self.frame_count}, "
            f"interruptions={self.interruptions})"
        )
