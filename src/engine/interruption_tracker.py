"""
Interruption Tracker: detects external geometry/transform changes.

Called once per frame, strictly before the solver, so a change made by a
competing layout pass or a second animation is folded into the same frame.

Baselines are overwritten on every detect() call, so each distinct change is
reported exactly once. The driver calls rebaseline() right after its own
writes so that those writes are never mistaken for an external change, by
the writing session or by any other session animating the same subject.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from models.enums import LogCategory
from models.session import AnimationSession
from models.subject import AnimatedSubject
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.TRACKER)


@dataclass(frozen=True)
class ChangeReport:
    resized: bool = False
    moved: bool = False

    @property
    def changed(self) -> bool:
        return self.resized or self.moved


class InterruptionTracker:
    """Compares the subject's area and transform against the session baseline"""

    def detect(self, subject: AnimatedSubject, session: AnimationSession) -> ChangeReport:
        area = subject.bounding_area()
        transform = subject.transform_signature()

        # No baseline yet means nothing to compare against
        resized = session.last_observed_area is not None and area != session.last_observed_area
        moved = session.last_observed_transform is not None and transform != session.last_observed_transform

        session.last_observed_area = area
        session.last_observed_transform = transform

        if resized or moved:
            log.debug(
                "External change detected",
                subject=subject.subject_id,
                resized=resized,
                moved=moved,
            )
        return ChangeReport(resized=resized, moved=moved)

    def rebaseline(
        self,
        subject: AnimatedSubject,
        session: AnimationSession,
        peers: Iterable[AnimationSession] = (),
    ) -> None:
        """
        Record current geometry without reporting a change.

        peers are the other sessions on the same subject. A peer whose
        baseline matched this session's before the write is moved forward
        with it; a peer that has not yet seen an earlier external change
        keeps its old baseline and still reports that change.
        """
        previous = (session.last_observed_area, session.last_observed_transform)
        area = subject.bounding_area()
        transform = subject.transform_signature()

        for peer in peers:
            if peer is session:
                continue
            if (peer.last_observed_area, peer.last_observed_transform) == previous:
                peer.last_observed_area = area
                peer.last_observed_transform = transform

        session.last_observed_area = area
        session.last_observed_transform = transform


def estimate_velocity(session: AnimationSession, prop: str, observed: float, elapsed: float) -> float:
    """
    Finite-difference velocity heuristic used on retarget.

    velocity = (observed - previous estimate) / elapsed since last reset

    The solver formulas take no initial velocity, so this only aids
    continuity; it is not an exact physical restart. With no elapsed time
    the previous estimate is kept.
    """
    previous = session.velocity.get(prop, 0.0)
    if elapsed <= 0:
        session.velocity[prop] = previous
        return previous
    velocity = (observed - previous) / elapsed
    session.velocity[prop] = velocity
    return velocity
