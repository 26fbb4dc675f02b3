"""
Session Driver

Owns per-subject spring sessions and runs them from an external frame clock.

Per frame, in order:
  1. drop the frame if the session was invalidated
  2. settle silently if the subject is gone
  3. run the interruption tracker (retarget on external change)
  4. apply the transition declaration if not yet applied
  5. settle on t >= duration (exact targets), otherwise evaluate the solver
     for every property and write the results
  6. re-baseline the tracker (for every session on the subject, so one
     slot's writes are not an external change for another) and request
     the next frame

At most one frame request is pending per (subject, slot): starting a new
session on a busy slot cancels the old request first.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

from engine import spring_solver
from engine.bezier import build_declaration, curve_for_subject
from engine.frame_clock import FrameClock
from engine.interruption_tracker import InterruptionTracker, estimate_velocity
from models.enums import LogCategory, SessionState
from models.errors import InvalidParameterError
from models.session import AnimationSession
from models.spring_config import SpringConfig
from models.subject import AnimatedSubject
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.SESSION)

DEFAULT_SLOT = "default"

ValueSpec = Union[float, Mapping[str, float]]
SessionKey = Tuple[str, str]


class SessionDriver:
    """
    Frame-driven spring animation driver.

    Example:
        clock = AsyncioFrameClock(fps=60)
        driver = SessionDriver(clock)

        driver.animate(card, config, target=0.0, start=120.0)
        await driver.wait_settled(card)
    """

    def __init__(self, clock: FrameClock, tracker: Optional[InterruptionTracker] = None):
        self.clock = clock
        self.tracker = tracker or InterruptionTracker()

        # active sessions: (subject_id, slot) → session
        self.sessions: Dict[SessionKey, AnimationSession] = {}

    # ============================================================
    # Control
    # ============================================================

    def animate(
        self,
        subject: AnimatedSubject,
        config: SpringConfig,
        target: ValueSpec,
        start: Optional[ValueSpec] = None,
        slot: str = DEFAULT_SLOT,
        on_settled: Optional[Callable[[AnimationSession], None]] = None,
    ) -> AnimationSession:
        """
        Start a spring session on subject, replacing any session on the same slot.

        Args:
            subject: Subject whose properties are written
            config: Resolved spring parameters
            target: Target value, one for all properties or per property
            start: Start value(s); properties without one are read from the subject
            slot: Logical animation slot on the subject
            on_settled: Called once when the session settles or is abandoned

        Raises:
            InvalidParameterError: If a per-property target is missing
        """
        key = (subject.subject_id, slot)
        properties = list(dict.fromkeys(config.properties))
        targets = self._expand(target, properties, "target")
        starts = self._expand(start, properties, "start", fallback=subject.read_property)

        if key in self.sessions:
            log.debug(f"Subject {subject.subject_id} already animating on '{slot}', cancelling old session")
            self.cancel(subject, slot)

        session = AnimationSession(
            subject=subject,
            slot=slot,
            config=config,
            start_values=starts,
            target_values=targets,
            on_settled=on_settled,
        )
        self.sessions[key] = session
        self._schedule(session)
        if session.cancelled:
            return session

        get_logger().spring_started(
            subject.subject_id,
            slot,
            properties=", ".join(config.properties),
            duration=f"{config.duration}s",
        )
        return session

    def cancel(self, subject: AnimatedSubject, slot: str = DEFAULT_SLOT) -> bool:
        """Invalidate the session on (subject, slot). Returns False if none was active."""
        session = self.sessions.pop((subject.subject_id, slot), None)
        if session is None:
            return False
        self._invalidate(session)
        session.state = SessionState.CANCELLED
        log.debug(f"Cancelled session {subject.subject_id}/{slot}")
        return True

    def cancel_all(self) -> int:
        """Cancel every active session"""
        sessions = list(self.sessions.values())
        for session in sessions:
            self.cancel(session.subject, session.slot)
        return len(sessions)

    def get_session(self, subject: AnimatedSubject, slot: str = DEFAULT_SLOT) -> Optional[AnimationSession]:
        return self.sessions.get((subject.subject_id, slot))

    def is_active(self, subject: AnimatedSubject, slot: str = DEFAULT_SLOT) -> bool:
        return (subject.subject_id, slot) in self.sessions

    @property
    def active_count(self) -> int:
        return len(self.sessions)

    async def wait_settled(self, subject: AnimatedSubject, slot: str = DEFAULT_SLOT, poll: float = 0.01):
        """Wait until the session on (subject, slot) is no longer active"""
        while self.is_active(subject, slot):
            await asyncio.sleep(poll)

    async def wait_all(self, poll: float = 0.01):
        """Wait until every session is finished"""
        while self.sessions:
            await asyncio.sleep(poll)

    # ============================================================
    # Frame handling
    # ============================================================

    def _schedule(self, session: AnimationSession) -> None:
        try:
            session.frame_handle = self.clock.request_frame(lambda now: self._on_frame(session, now))
        except Exception as e:
            log.error(f"Frame request failed for {session.subject.subject_id}: {e}", slot=session.slot)
            self._abandon(session)

    def _peers(self, session: AnimationSession) -> List[AnimationSession]:
        """Other active sessions on the same subject (other slots)"""
        subject_id = session.subject.subject_id
        return [
            other for other in self.sessions.values()
            if other is not session and other.subject.subject_id == subject_id
        ]

    def _invalidate(self, session: AnimationSession) -> None:
        session.cancelled = True
        if session.frame_handle is not None:
            self.clock.cancel_frame(session.frame_handle)
            session.frame_handle = None

    def _on_frame(self, session: AnimationSession, now: float) -> None:
        session.frame_handle = None
        if not session.is_active:
            return

        subject = session.subject
        try:
            attached = subject.is_attached()
        except Exception as e:
            log.debug(f"Subject probe failed for {subject.subject_id}: {e}")
            attached = False
        if not attached:
            self._abandon(session)
            return

        if session.start_clock_time is None:
            session.start_clock_time = now
            session.state = SessionState.RUNNING

        t = session.elapsed_seconds(now)

        try:
            report = self.tracker.detect(subject, session)
        except Exception as e:
            log.debug(f"Geometry probe failed for {subject.subject_id}: {e}")
            self._abandon(session)
            return

        if report.changed:
            self._retarget(session, now, t)
            t = 0.0

        session.last_elapsed = t
        session.frame_count += 1

        if not session.transition_applied:
            self._apply_transition(session)

        if t >= session.config.duration:
            self._settle(session)
            return

        for prop in session.target_values:
            try:
                value = spring_solver.evaluate(
                    session.config,
                    session.start_values[prop],
                    session.target_values[prop],
                    t,
                )
                subject.write_property(prop, value)
                session.current_values[prop] = value
            except Exception as e:
                log.error(f"Frame update failed for {subject.subject_id}.{prop}: {e}", t=f"{t:.3f}")

        try:
            self.tracker.rebaseline(subject, session, self._peers(session))
        except Exception as e:
            log.debug(f"Geometry probe failed for {subject.subject_id}: {e}")
            self._abandon(session)
            return

        self._schedule(session)

    def _retarget(self, session: AnimationSession, now: float, elapsed: float) -> None:
        """Restart the solver clock from the subject's observed values"""
        session.state = SessionState.INTERRUPTED
        session.interruptions += 1

        for prop in session.target_values:
            try:
                observed = session.subject.read_property(prop)
            except Exception as e:
                log.error(f"Could not read {session.subject.subject_id}.{prop}: {e}")
                continue
            estimate_velocity(session, prop, observed, elapsed)
            session.start_values[prop] = observed

        session.start_clock_time = now
        session.transition_applied = False
        session.state = SessionState.RUNNING

        log.debug(
            f"Retargeted {session.subject.subject_id}",
            elapsed=f"{elapsed:.3f}s",
            interruptions=session.interruptions,
        )

    def _apply_transition(self, session: AnimationSession) -> None:
        try:
            curve = curve_for_subject(session.subject, session.config)
            declaration = build_declaration(session.config, curve)
            session.subject.set_transition(declaration.to_css())
            session.declaration = declaration
        except Exception as e:
            log.error(f"Could not apply transition to {session.subject.subject_id}: {e}")
        # Not retried every frame on failure
        session.transition_applied = True

    def _settle(self, session: AnimationSession) -> None:
        """Write exact targets and stop requesting frames"""
        subject = session.subject
        for prop, target in session.target_values.items():
            try:
                subject.write_property(prop, target)
                session.current_values[prop] = target
            except Exception as e:
                log.error(f"Final write failed for {subject.subject_id}.{prop}: {e}")

        try:
            self.tracker.rebaseline(subject, session, self._peers(session))
        except Exception as e:
            log.debug(f"Geometry probe failed for {subject.subject_id}: {e}")

        session.state = SessionState.SETTLED
        self._finish(session)
        get_logger().spring_settled(subject.subject_id, session.slot, frames=session.frame_count)

    def _abandon(self, session: AnimationSession) -> None:
        """Subject unavailable: stop without further writes"""
        session.state = SessionState.CANCELLED
        session.cancelled = True
        self._finish(session)
        log.debug(f"Subject {session.subject.subject_id} unavailable, session dropped")

    def _finish(self, session: AnimationSession) -> None:
        if self.sessions.get(session.key) is session:
            del self.sessions[session.key]
        if session.on_settled is not None:
            try:
                session.on_settled(session)
            except Exception as e:
                log.error(f"on_settled callback failed for {session.subject.subject_id}: {e}")

    # ============================================================
    # Helpers
    # ============================================================

    @staticmethod
    def _expand(
        value: Optional[ValueSpec],
        properties: List[str],
        name: str,
        fallback: Optional[Callable[[str], float]] = None,
    ) -> Dict[str, float]:
        """Turn a scalar or mapping into one float per property"""
        result: Dict[str, float] = {}
        for prop in properties:
            if isinstance(value, Mapping):
                if prop in value:
                    result[prop] = float(value[prop])
                    continue
            elif value is not None:
                result[prop] = float(value)
                continue

            if fallback is None:
                raise InvalidParameterError(name, value, f"no {name} value for property '{prop}'")
            result[prop] = float(fallback(prop))
        return result
