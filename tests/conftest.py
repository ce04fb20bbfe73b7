"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from orbit_rtx.camera import Camera  # noqa: E402
from orbit_rtx.material import Material  # noqa: E402
from orbit_rtx.shapes import Sphere  # noqa: E402
from orbit_rtx.vector import Vec3  # noqa: E402
from orbit_rtx.world import Light, World  # noqa: E402


@pytest.fixture
def red_material():
    """Diffuse-only pure red."""
    return Material(Vec3(1, 0, 0), 10, (1.0, 0.0, 0.0, 0.0))


@pytest.fixture
def white_material():
    """Diffuse-only white."""
    return Material(Vec3(1, 1, 1), 10, (1.0, 0.0, 0.0, 0.0))


@pytest.fixture
def background():
    return Vec3(0.1, 0.2, 0.3)


@pytest.fixture
def red_world(red_material, background):
    """A unit red sphere at the origin."""
    return World([Sphere(Vec3(0, 0, 0), 1, red_material)], background=background)


@pytest.fixture
def white_light():
    return Light(Vec3(5, 5, 5), Vec3(1, 1, 1))


@pytest.fixture
def camera():
    """Camera at (0, 0, 5) looking at the origin."""
    return Camera(Vec3(0, 0, 5), Vec3(0, 0, 0), Vec3(0, 1, 0))
