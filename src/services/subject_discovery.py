"""
Subject discovery

Finds subjects carrying data-spring* attributes and starts a spring session
for each. Discovery is lazy over whatever iterable the host provides; the
core never queries a document itself.
"""

from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from engine.session_driver import SessionDriver, ValueSpec
from models.enums import LogCategory
from models.errors import ConfigurationWarning, InvalidParameterError
from models.session import AnimationSession
from models.subject import AnimatedSubject
from services.parameter_resolver import ParameterResolver
from utils.logger import get_category_logger

log = get_category_logger(LogCategory.DISCOVERY)

ATTRIBUTE_PREFIX = "data-spring"


def has_spring_attributes(attributes: Mapping[str, str]) -> bool:
    return any(name.startswith(ATTRIBUTE_PREFIX) for name in attributes)


def discover(candidates: Iterable[AnimatedSubject]) -> Iterator[Tuple[AnimatedSubject, Mapping[str, str]]]:
    """Yield (subject, attributes) for every candidate with spring attributes"""
    for subject in candidates:
        attributes = getattr(subject, "attributes", None) or {}
        if has_spring_attributes(attributes):
            yield subject, attributes


def apply_spring_animations(
    driver: SessionDriver,
    resolver: ParameterResolver,
    candidates: Iterable[AnimatedSubject],
    target: ValueSpec = 1.0,
    start: Optional[ValueSpec] = 0.0,
) -> List[AnimationSession]:
    """
    Resolve every discovered subject's config and start its session.

    Subjects whose attributes resolve to an invalid config are logged and
    skipped; the rest still start.
    """
    sessions: List[AnimationSession] = []
    for subject, attributes in discover(candidates):
        warnings: List[ConfigurationWarning] = []
        try:
            config = resolver.from_attributes(attributes, warnings)
        except InvalidParameterError as e:
            log.error(f"Skipping {subject.subject_id}: {e}", field=e.field)
            continue

        if warnings:
            log.debug(f"{subject.subject_id} resolved with {len(warnings)} warning(s)")

        sessions.append(driver.animate(subject, config, target=target, start=start))

    log.info(f"Started {len(sessions)} spring animation(s)")
    return sessions
