"""
Tests for attribute-driven subject discovery.
"""

from models.enums import SessionState
from models.subject import HeadlessSubject
from services.parameter_resolver import ParameterResolver
from services.subject_discovery import apply_spring_animations, discover, has_spring_attributes


def _subjects():
    return [
        HeadlessSubject("card", attributes={"data-spring-preset": "bouncy", "data-spring-duration": "0.6"}),
        HeadlessSubject("drawer", attributes={"data-spring": "duration:0.3, bounce:-0.2"}),
        HeadlessSubject("plain", attributes={"class": "static"}),
    ]


def test_has_spring_attributes():
    assert has_spring_attributes({"data-spring": ""})
    assert has_spring_attributes({"data-spring-bounce": "0.1"})
    assert not has_spring_attributes({"data-other": "1"})
    assert not has_spring_attributes({})


def test_discover_yields_only_spring_subjects():
    found = [subject.subject_id for subject, _ in discover(_subjects())]
    assert found == ["card", "drawer"]


def test_apply_starts_one_session_per_subject(driver, clock):
    subjects = _subjects()
    sessions = apply_spring_animations(driver, ParameterResolver(), subjects, target=100.0, start=0.0)

    assert [s.subject.subject_id for s in sessions] == ["card", "drawer"]
    assert sessions[0].config.duration == 0.6
    assert sessions[0].config.bounce == 0.4
    assert sessions[1].config.duration == 0.3
    assert driver.active_count == 2

    clock.run_until_idle()
    assert all(s.state is SessionState.SETTLED for s in sessions)
    assert subjects[0].values["transform"] == 100.0
    assert subjects[2].writes == []


def test_invalid_subject_is_skipped(driver):
    subjects = [
        HeadlessSubject("badge", attributes={"data-spring-stiffness": "0"}),
        HeadlessSubject("toast", attributes={"data-spring-preset": "wobbly"}),
    ]
    sessions = apply_spring_animations(driver, ParameterResolver(), subjects)

    assert [s.subject.subject_id for s in sessions] == ["toast"]
    assert not driver.is_active(subjects[0])
