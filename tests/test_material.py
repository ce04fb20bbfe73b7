"""Tests for material and scene validation."""

import logging
import math

import pytest

from orbit_rtx.errors import InvalidMaterialError, SceneValidationError
from orbit_rtx.material import Material
from orbit_rtx.shading import cast_ray
from orbit_rtx.shapes import Ray, Sphere
from orbit_rtx.texture import CpuTexture
from orbit_rtx.vector import Vec3
from orbit_rtx.world import Light, World, build_from_layers


class TestMaterial:
    """Material construction."""

    @pytest.mark.parametrize("index", [0.0, -1.5])
    def test_non_positive_refractive_index(self, index):
        with pytest.raises(InvalidMaterialError):
            Material(Vec3(1, 1, 1), 10, (0, 0, 0, 1), index)

    def test_negative_albedo(self):
        with pytest.raises(InvalidMaterialError):
            Material(Vec3(1, 1, 1), 10, (0.5, -0.1, 0, 0))

    def test_negative_specular_exponent(self):
        with pytest.raises(InvalidMaterialError):
            Material(Vec3(1, 1, 1), -2, (0.5, 0.5, 0, 0))

    def test_zero_specular_exponent_shades_back_face(self, background):
        """Exponent 0 is allowed and a point facing away from the light still shades."""
        flat = Material(Vec3(1, 1, 1), 0, (0.5, 0.5, 0, 0))
        world = World([Sphere(Vec3(0, 0, 0), 1, flat)], background=background)
        light = Light(Vec3(0, 0, -10), Vec3(1, 1, 1))
        color = cast_ray(Ray(Vec3(0, 0, 5), Vec3(0, 0, -1)), world, light)
        assert all(math.isfinite(c) for c in color)

    def test_albedo_needs_four_weights(self):
        with pytest.raises(InvalidMaterialError):
            Material(Vec3(1, 1, 1), 10, (0.5, 0.5))

    def test_invalid_material_is_a_value_error(self):
        with pytest.raises(ValueError):
            Material(Vec3(1, 1, 1), 10, (1, 0, 0, 0), 0)

    def test_bright_albedo_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="orbit_rtx.material"):
            Material(Vec3(1, 1, 1), 10, (0.9, 0.5, 0.5, 0))
        assert "sums to" in caplog.text

    def test_defaults(self):
        m = Material(Vec3(1, 1, 1), 10, (1, 0, 0, 0))
        assert m.refractive_index == 1.0
        assert m.texture is None
        assert not m.is_emissive


class TestWorldValidation:
    """Checks run before a render starts."""

    def test_missing_texture(self):
        m = Material(Vec3(1, 1, 1), 10, (1, 0, 0, 0), texture="missing.png")
        world = World([Sphere(Vec3(0, 0, 0), 1, m)])
        with pytest.raises(SceneValidationError):
            world.validate()

    def test_missing_normal_map(self):
        m = Material(Vec3(1, 1, 1), 10, (1, 0, 0, 0), normal_map="bumps.png")
        world = World([Sphere(Vec3(0, 0, 0), 1, m)])
        with pytest.raises(SceneValidationError):
            world.validate()

    def test_registered_texture_passes(self):
        m = Material(Vec3(1, 1, 1), 10, (1, 0, 0, 0), texture="checker.png")
        world = World([Sphere(Vec3(0, 0, 0), 1, m)])
        world.textures.add_texture("checker.png", CpuTexture(1, 1, [Vec3(1, 0, 0)]))
        world.validate()

    def test_non_body_is_rejected(self):
        with pytest.raises(SceneValidationError):
            World(["not a body"]).validate()


class TestBuildFromLayers:
    """Letter-grid block scenes."""

    def test_positions(self, red_material, white_material):
        palette = {"R": red_material, "W": white_material}
        cubes = build_from_layers([["WW", "WW"], ["R ", "  "]], palette, size=0.5, spacing=1.0)
        assert len(cubes) == 5
        top = [c for c in cubes if c.m is red_material]
        assert len(top) == 1
        assert top[0].c.is_close(Vec3(-0.5, 1.0, -0.5))
        assert all(c.size == 0.5 for c in cubes)

    def test_unknown_letters_are_gaps(self, red_material):
        assert build_from_layers([["x?  "]], {"R": red_material}) == []
