"""Tests for vector helpers."""

import math

import pytest

from orbit_rtx.vector import Vec3, clamp, reflect, refract, to_rgb


class TestVec3:
    """Basic arithmetic."""

    def test_dot_and_cross(self):
        """Cross product of x and y is z."""
        x, y = Vec3(1, 0, 0), Vec3(0, 1, 0)
        assert x.dot(y) == 0
        assert x.cross(y).is_close(Vec3(0, 0, 1))

    def test_norm_has_unit_length(self):
        """Normalized vectors have length one."""
        assert Vec3(3, 4, 12).norm().mag() == pytest.approx(1.0)

    def test_norm_of_zero_vector(self):
        """A zero vector normalizes to zero instead of dividing by zero."""
        assert Vec3(0, 0, 0).norm().is_close(Vec3(0, 0, 0))

    def test_mult_is_component_wise(self):
        assert tuple(Vec3(1, 2, 3).mult(Vec3(2, 0.5, 0))) == (2, 1, 0)


class TestReflect:
    """Mirror reflection."""

    @pytest.mark.parametrize("d", [
        Vec3(1, -1, 0).norm(),
        Vec3(0.3, -0.2, 0.9).norm(),
        Vec3(0, -1, 0),
        Vec3(-0.5, 0.5, 0.7).norm(),
    ])
    def test_preserves_magnitude(self, d):
        """Reflection does not change the length of a unit vector."""
        n = Vec3(0, 1, 0)
        assert reflect(d, n).mag() == pytest.approx(d.mag())

    def test_flips_normal_component(self):
        r = reflect(Vec3(1, -1, 0), Vec3(0, 1, 0))
        assert r.is_close(Vec3(1, 1, 0))


class TestRefract:
    """Snell's law."""

    def test_normal_incidence_passes_straight(self):
        """A ray along the normal is not bent."""
        d = Vec3(0, 0, -1)
        assert refract(d, Vec3(0, 0, 1), 1.5).is_close(d)

    def test_entering_bends_towards_normal(self):
        d = Vec3(1, -1, 0).norm()
        t = refract(d, Vec3(0, 1, 0), 1.5)
        sin_in = abs(d.x)
        sin_out = abs(t.norm().x)
        assert sin_out == pytest.approx(sin_in / 1.5)
        assert t.y < 0

    def test_total_internal_reflection_returns_reflection(self):
        """Beyond the critical angle the mirror direction is used."""
        normal = Vec3(0, 1, 0)
        # Leaving glass (d.n > 0) at 60 degrees, critical angle is about 41.8
        angle = math.radians(60)
        d = Vec3(math.sin(angle), math.cos(angle), 0)
        t = refract(d, normal, 1.5)
        assert t.is_close(reflect(d, normal))

    def test_exiting_below_critical_angle_refracts(self):
        normal = Vec3(0, 1, 0)
        angle = math.radians(20)
        d = Vec3(math.sin(angle), math.cos(angle), 0)
        t = refract(d, normal, 1.5)
        assert t.y > 0
        assert abs(t.norm().x) == pytest.approx(math.sin(angle) * 1.5)


class TestPixelConversion:
    """Clamping happens when building pixels."""

    def test_clamp(self):
        assert clamp(-0.5) == 0
        assert clamp(0.0) == 0
        assert clamp(1.0) == 255
        assert clamp(3.0) == 255
        assert clamp(float("nan")) == 0

    def test_to_rgb(self):
        assert to_rgb(Vec3(1.2, 0.5, -1)) == (255, 128, 0)
