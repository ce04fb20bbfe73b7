"""Orbit camera that turns pixel coordinates into world-space rays."""

import logging
import math

from orbit_rtx.constants import EPSILON, MAX_PITCH, MIN_RADIUS
from orbit_rtx.errors import DegenerateBasisError
from orbit_rtx.shapes import Ray
from orbit_rtx.vector import Vec3

logger = logging.getLogger(__name__)

# Substitute world-up axes used when the view direction is parallel to ``up``
_FALLBACK_UPS = (Vec3(0.0, 0.0, -1.0), Vec3(1.0, 0.0, 0.0))


class Camera:
    """Pin-hole camera orbiting around a focus point.

    The camera keeps ``eye``, ``center`` and the world ``up`` reference and
    derives a right-handed orthonormal basis (``right``, ``up_basis``,
    ``forward``) from them whenever a ray is generated.
    """

    def __init__(self, eye: Vec3, center: Vec3, up: Vec3) -> None:
        if eye.sub(center).mag() < EPSILON:
            raise DegenerateBasisError("camera eye and center coincide")
        self.eye = eye
        self.center = center
        self.up = up
        # Set when the camera moved since the last rendered frame
        self.changed = True

    def basis(self) -> tuple[Vec3, Vec3, Vec3]:
        """Return ``(right, up_basis, forward)``."""
        forward = self.center.sub(self.eye).norm()
        right = forward.cross(self.up)
        if right.mag() < 1e-6:
            for fallback in _FALLBACK_UPS:
                right = forward.cross(fallback)
                if right.mag() >= 1e-6:
                    break
            logger.debug("view direction parallel to world up, using %r", right)
        right = right.norm()
        up_basis = right.cross(forward)
        return right, up_basis, forward

    def basis_change(self, vector: Vec3) -> Vec3:
        """Map a camera-space vector into world space."""
        right, up_basis, forward = self.basis()
        return (right.s_mult(vector.x)
                .add(up_basis.s_mult(vector.y))
                .add(forward.s_mult(vector.z)))

    def get_ray(self, pixel_x: float, pixel_y: float, screen_width: int,
                screen_height: int, fov: float) -> Ray:
        """Return the primary ray through a pixel.

        Args:
            pixel_x: Column, 0 is the left edge.
            pixel_y: Row, 0 is the top edge.
            screen_width: Image width in pixels.
            screen_height: Image height in pixels.
            fov: Vertical field of view in radians.
        """
        aspect_ratio = screen_width / screen_height
        perspective_scale = math.tan(fov * 0.5)

        screen_x = (2.0 * pixel_x) / screen_width - 1.0
        screen_y = 1.0 - (2.0 * pixel_y) / screen_height

        direction = Vec3(screen_x * aspect_ratio * perspective_scale,
                         screen_y * perspective_scale,
                         1.0)
        return Ray(self.eye, self.basis_change(direction).norm())

    @property
    def radius(self) -> float:
        return self.eye.sub(self.center).mag()

    def orbit(self, delta_yaw: float, delta_pitch: float) -> None:
        """Rotate the eye around ``center`` keeping its distance."""
        relative = self.eye.sub(self.center)
        radius = relative.mag()

        yaw = math.atan2(relative.x, relative.z)
        pitch = math.asin(max(-1.0, min(1.0, relative.y / radius)))

        yaw += delta_yaw
        pitch = max(-MAX_PITCH, min(MAX_PITCH, pitch + delta_pitch))

        self.eye = self.center.add(Vec3(
            radius * math.cos(pitch) * math.sin(yaw),
            radius * math.sin(pitch),
            radius * math.cos(pitch) * math.cos(yaw),
        ))
        self.changed = True

    def zoom(self, delta: float) -> None:
        """Move the eye ``delta`` units towards the center."""
        relative = self.eye.sub(self.center)
        radius = max(MIN_RADIUS, relative.mag() - delta)
        self.eye = self.center.add(relative.norm().s_mult(radius))
        self.changed = True
