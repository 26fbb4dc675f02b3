"""
Bezier Approximator

Maps a SpringConfig to a fixed cubic-Bezier timing curve so a declarative
transition engine can reproduce the spring's shape without per-frame
evaluation. Only the sign of bounce matters; overshoot (y1 > 1) is reserved
for the oscillatory regime.

The curve is tagged onto the subject's dataset once computed and reused on
later reads.
"""

from __future__ import annotations

from typing import Dict

from models.enums import BounceSign, LogCategory
from models.spring_config import SpringConfig
from models.subject import AnimatedSubject
from models.transition import BezierCurve, TransitionDeclaration, TransitionEntry
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.BEZIER)

DATASET_CURVE_KEY = "bezierCurve"
DATASET_SIGN_KEY = "bezierSign"

BEZIER_TABLE: Dict[BounceSign, BezierCurve] = {
    BounceSign.POSITIVE: BezierCurve(0.42, 1.75, 0.58, 1.0),
    BounceSign.NEGATIVE: BezierCurve(0.30, 0.60, 0.70, 1.0),
    BounceSign.ZERO: BezierCurve(0.25, 0.10, 0.75, 1.0),
}


def bounce_sign(bounce: float) -> BounceSign:
    if bounce > 0:
        return BounceSign.POSITIVE
    if bounce < 0:
        return BounceSign.NEGATIVE
    return BounceSign.ZERO


def approximate(config: SpringConfig) -> BezierCurve:
    """Timing curve for the config's bounce bucket"""
    return BEZIER_TABLE[bounce_sign(config.bounce)]


def curve_for_subject(subject: AnimatedSubject, config: SpringConfig) -> BezierCurve:
    """
    Cached timing curve for a subject.

    Reuses the curve tagged on the subject when it was computed for the same
    bounce bucket, otherwise computes and tags it.
    """
    sign = bounce_sign(config.bounce)
    cached = subject.dataset.get(DATASET_CURVE_KEY)
    if cached and subject.dataset.get(DATASET_SIGN_KEY) == sign.name:
        try:
            return BezierCurve.from_css(cached)
        except ValueError:
            log.warn("Discarding malformed cached curve", subject=subject.subject_id, cached=cached)

    curve = BEZIER_TABLE[sign]
    subject.dataset[DATASET_CURVE_KEY] = curve.to_css()
    subject.dataset[DATASET_SIGN_KEY] = sign.name
    log.debug("Tagged timing curve", subject=subject.subject_id, curve=curve.to_css())
    return curve


def build_declaration(config: SpringConfig, curve: BezierCurve) -> TransitionDeclaration:
    """Pair every configured property with the duration and timing curve"""
    return TransitionDeclaration(
        entries=tuple(TransitionEntry(prop, config.duration, curve) for prop in config.properties)
    )
