"""
Tests for BezierCurve and TransitionDeclaration.
"""

import pytest

from models.transition import BezierCurve, TransitionDeclaration, TransitionEntry


class TestBezierCurveFormatting:

    def test_to_css_uses_short_numbers(self):
        curve = BezierCurve(0.42, 1.75, 0.58, 1.0)
        assert curve.to_css() == "cubic-bezier(0.42, 1.75, 0.58, 1)"

    def test_from_css_parses_expression(self):
        curve = BezierCurve.from_css("cubic-bezier(0.3, 0.6, 0.7, 1)")
        assert curve.control_points() == (0.3, 0.6, 0.7, 1.0)

    def test_from_css_tolerates_whitespace(self):
        curve = BezierCurve.from_css("  cubic-bezier( 0.25 ,0.1,  0.75 , 1.0 ) ")
        assert curve == BezierCurve(0.25, 0.1, 0.75, 1.0)

    @pytest.mark.parametrize("text", ["", "ease-in", "cubic-bezier(0.1, 0.2, 0.3)", "cubic-bezier(a, b, c, d)"])
    def test_from_css_rejects_other_text(self, text):
        with pytest.raises(ValueError):
            BezierCurve.from_css(text)

    @pytest.mark.parametrize("x1,x2", [(-0.1, 0.5), (0.5, 1.2)])
    def test_x_values_must_be_in_unit_range(self, x1, x2):
        with pytest.raises(ValueError):
            BezierCurve(x1, 0.0, x2, 1.0)


class TestBezierCurveSampling:

    def test_endpoints(self):
        curve = BezierCurve(0.42, 1.75, 0.58, 1.0)
        assert curve.sample(0.0) == 0.0
        assert curve.sample(1.0) == 1.0

    def test_progress_is_clamped(self):
        curve = BezierCurve(0.25, 0.1, 0.75, 1.0)
        assert curve.sample(-0.5) == 0.0
        assert curve.sample(2.0) == 1.0

    def test_symmetric_curve_midpoint(self):
        """x(0.5) == 0.5 for symmetric x control values, so y(0.5) is returned."""
        curve = BezierCurve(0.25, 0.1, 0.75, 1.0)
        assert curve.sample(0.5) == pytest.approx(0.5375, abs=1e-6)

    def test_overshooting_curve_exceeds_one(self):
        """The oscillatory curve overshoots its end value mid-way."""
        curve = BezierCurve(0.42, 1.75, 0.58, 1.0)
        assert curve.sample(0.5) == pytest.approx(1.15625, abs=1e-4)

    def test_non_overshooting_curve_is_monotonic(self):
        curve = BezierCurve(0.3, 0.6, 0.7, 1.0)
        values = [curve.sample(i / 50) for i in range(51)]
        assert all(b >= a - 1e-6 for a, b in zip(values, values[1:]))
        assert max(values) <= 1.0 + 1e-6


class TestTransitionDeclaration:

    def test_declaration_keeps_order_and_duplicates(self):
        curve = BezierCurve(0.25, 0.1, 0.75, 1.0)
        declaration = TransitionDeclaration(entries=(
            TransitionEntry("opacity", 0.5, curve),
            TransitionEntry("transform", 0.5, curve),
            TransitionEntry("opacity", 0.5, curve),
        ))

        assert declaration.properties == ["opacity", "transform", "opacity"]
        assert declaration.to_css() == (
            "opacity 0.5s cubic-bezier(0.25, 0.1, 0.75, 1), "
            "transform 0.5s cubic-bezier(0.25, 0.1, 0.75, 1), "
            "opacity 0.5s cubic-bezier(0.25, 0.1, 0.75, 1)"
        )
        assert str(declaration) == declaration.to_css()

    def test_empty_declaration(self):
        assert TransitionDeclaration().to_css() == ""
