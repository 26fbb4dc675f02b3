"""
Tests for InterruptionTracker change detection and the velocity heuristic.
"""

import pytest

from engine.interruption_tracker import ChangeReport, InterruptionTracker, estimate_velocity
from models.session import AnimationSession
from models.spring_config import SpringConfig
from models.subject import HeadlessSubject


@pytest.fixture
def tracker():
    return InterruptionTracker()


@pytest.fixture
def session(subject):
    return AnimationSession(
        subject=subject,
        slot="default",
        config=SpringConfig(),
        start_values={"transform": 0.0},
        target_values={"transform": 100.0},
    )


class TestDetection:

    def test_first_observation_reports_nothing(self, tracker, subject, session):
        """No baseline means no change, even for a transformed subject."""
        subject.move("translateY(10px)")
        report = tracker.detect(subject, session)

        assert report == ChangeReport(resized=False, moved=False)
        assert session.last_observed_area == 5000
        assert session.last_observed_transform == "translateY(10px)"

    def test_resize_detected_once(self, tracker, subject, session):
        tracker.detect(subject, session)
        subject.resize(200, 50)

        first = tracker.detect(subject, session)
        second = tracker.detect(subject, session)

        assert first.resized and not first.moved
        assert first.changed
        assert not second.changed

    def test_move_detected(self, tracker, subject, session):
        tracker.detect(subject, session)
        subject.move("translateY(25px)")

        report = tracker.detect(subject, session)
        assert report.moved and not report.resized

    def test_transform_removed_counts_as_move(self, tracker, subject, session):
        subject.move("translateY(25px)")
        tracker.detect(subject, session)
        subject.move(None)

        assert tracker.detect(subject, session).moved

    def test_same_area_different_shape_is_not_resize(self, tracker, subject, session):
        """Only the area is compared."""
        tracker.detect(subject, session)
        subject.resize(50, 100)
        assert not tracker.detect(subject, session).resized

    def test_rebaseline_hides_own_writes(self, tracker, subject, session):
        tracker.detect(subject, session)
        subject.write_property("transform", 12.5)
        tracker.rebaseline(subject, session)

        assert not tracker.detect(subject, session).changed


class TestVelocityEstimate:

    def test_finite_difference(self, session):
        """(observed − previous estimate) / elapsed"""
        assert estimate_velocity(session, "transform", 40.0, 0.1) == pytest.approx(400.0)
        assert estimate_velocity(session, "transform", 60.0, 0.2) == pytest.approx((60.0 - 400.0) / 0.2)
        assert session.velocity["transform"] == pytest.approx(-1700.0)

    def test_zero_elapsed_keeps_previous(self, session):
        session.velocity["transform"] = 12.0
        assert estimate_velocity(session, "transform", 99.0, 0.0) == 12.0
        assert session.velocity["transform"] == 12.0


class TestPeerBaselines:

    @pytest.fixture
    def peer(self, subject):
        return AnimationSession(
            subject=subject,
            slot="fade",
            config=SpringConfig(properties=("opacity",)),
            start_values={"opacity": 0.0},
            target_values={"opacity": 1.0},
        )

    def test_write_by_one_session_is_not_a_change_for_its_peer(self, tracker, subject, session, peer):
        tracker.detect(subject, session)
        tracker.detect(subject, peer)

        subject.write_property("transform", 12.5)
        tracker.rebaseline(subject, session, [peer])

        assert not tracker.detect(subject, peer).changed

    def test_peer_keeps_unseen_external_change(self, tracker, subject, session, peer):
        tracker.detect(subject, session)
        tracker.detect(subject, peer)

        subject.resize(10, 10)
        assert tracker.detect(subject, session).resized
        subject.write_property("transform", 3.0)
        tracker.rebaseline(subject, session, [peer])

        assert tracker.detect(subject, peer).resized

    def test_peer_without_baseline_untouched(self, tracker, subject, session, peer):
        tracker.detect(subject, session)
        tracker.rebaseline(subject, session, [peer, session])

        assert peer.last_observed_area is None
        assert peer.last_observed_transform is None
