#!/usr/bin/env python3
"""
Spring Motion - Headless demo entry point

Builds a few in-memory subjects carrying spring attributes, animates them on
the asyncio frame clock and prints the resulting transition declarations.

Subjects:
    - card:   preset "bouncy" with an explicit duration override
    - drawer: shorthand "duration:0.8, bounce:-0.3, properties:transform|opacity"
    - toast:  unknown preset (falls back to defaults with a warning)
    - badge:  invalid stiffness (skipped)
"""

import asyncio

from engine.frame_clock import AsyncioFrameClock
from engine.session_driver import SessionDriver
from managers.config_manager import ConfigManager
from models.enums import LogCategory, LogLevel
from models.subject import HeadlessSubject
from services.parameter_resolver import ParameterResolver
from services.subject_discovery import apply_spring_animations
from utils.logger import configure_logger, get_category_logger

log = get_category_logger(LogCategory.SYSTEM)


def build_subjects():
    return [
        HeadlessSubject("card", attributes={"data-spring-preset": "bouncy", "data-spring-duration": "0.6"}),
        HeadlessSubject("drawer", attributes={"data-spring": "duration:0.8, bounce:-0.3, properties:transform|opacity"}),
        HeadlessSubject("toast", attributes={"data-spring-preset": "wobbly"}),
        HeadlessSubject("badge", attributes={"data-spring-stiffness": "0"}),
        HeadlessSubject("plain"),
    ]


async def main():
    print("=" * 60)
    print("Spring Motion")
    print("=" * 60)
    print()

    configure_logger(min_level=LogLevel.INFO)

    config = ConfigManager()
    config.load()
    resolver = ParameterResolver(config)

    clock = AsyncioFrameClock(fps=60)
    driver = SessionDriver(clock)

    subjects = build_subjects()
    sessions = apply_spring_animations(driver, resolver, subjects, target=0.0, start=120.0)

    try:
        await driver.wait_all()
    except (KeyboardInterrupt, asyncio.CancelledError):
        driver.cancel_all()
    finally:
        clock.close()

    print()
    for session in sessions:
        subject = session.subject
        print(f"{subject.subject_id}:")
        print(f"  state:      {session.state.name}")
        print(f"  frames:     {session.frame_count}")
        print(f"  transition: {subject.transition}")
        print(f"  values:     {subject.values}")
    print()
    log.info("Done", sessions=len(sessions), frames=clock.frames_delivered)


if __name__ == "__main__":
    asyncio.run(main())
