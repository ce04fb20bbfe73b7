"""Vector math used by every part of the tracer.

``Vec3`` doubles as a point, a direction and an RGB color with channels in
``[0, 1]``. Colors are only clamped when they are turned into pixels.
"""

import math

from orbit_rtx.constants import EPSILON


class Vec3:
    """Simple 3D vector with basic arithmetic helpers."""

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float, y: float, z: float) -> None:
        """Create a new vector from components."""
        self.x = x
        self.y = y
        self.z = z

    def __repr__(self) -> str:
        return f"Vec3({self.x:.4f}, {self.y:.4f}, {self.z:.4f})"

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    @classmethod
    def zero(cls) -> "Vec3":
        return cls(0.0, 0.0, 0.0)

    def dot(self, other: "Vec3") -> float:
        """Return the dot product with another vector."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec3") -> "Vec3":
        """Return the cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def sqMag(self) -> float:
        """Return the squared magnitude of the vector."""
        return self.x**2 + self.y**2 + self.z**2

    def mag(self) -> float:
        """Return the magnitude of the vector."""
        return self.sqMag()**0.5

    def norm(self) -> "Vec3":
        """Return a normalized copy of the vector.

        A vector too short to have a direction normalizes to the zero vector,
        so callers can drop the term it belongs to.
        """
        m = self.mag()
        if m < EPSILON:
            return Vec3.zero()
        return Vec3(self.x / m, self.y / m, self.z / m)

    def s_mult(self, other: float) -> "Vec3":
        """Return the vector scaled by *other*."""
        return Vec3(self.x * other, self.y * other, self.z * other)

    def mult(self, other: "Vec3") -> "Vec3":
        """Return the component-wise product, used to tint colors."""
        return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)

    def add(self, other: "Vec3") -> "Vec3":
        """Return the sum of this vector and *other*."""
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def sub(self, other: "Vec3") -> "Vec3":
        """Return the difference between this vector and *other*."""
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def neg(self) -> "Vec3":
        """Return the negated vector."""
        return Vec3(-self.x, -self.y, -self.z)

    def is_close(self, other: "Vec3", tol: float = 1e-9) -> bool:
        return (abs(self.x - other.x) <= tol
                and abs(self.y - other.y) <= tol
                and abs(self.z - other.z) <= tol)


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Mirror *incident* about *normal* (``I - 2N(I.N)``)."""
    return incident.sub(normal.s_mult(2 * incident.dot(normal)))


def refract(incident: Vec3, normal: Vec3, refractive_index: float) -> Vec3:
    """Bend *incident* through a surface with Snell's law.

    *normal* is the outward normal. A ray leaving the medium (``I.N > 0``)
    uses the flipped normal and the inverted index ratio. When the ray is
    totally internally reflected the mirror direction is returned instead.
    """
    cosi = max(-1.0, min(1.0, incident.dot(normal)))
    etai, etat = 1.0, refractive_index
    n = normal

    if cosi > 0:
        etai, etat = etat, etai
        n = normal.neg()
    else:
        cosi = -cosi

    eta = etai / etat
    k = 1 - eta * eta * (1 - cosi * cosi)

    if k < 0:
        return reflect(incident, normal)
    return incident.s_mult(eta).add(n.s_mult(eta * cosi - math.sqrt(k)))


def clamp(c: float) -> int:
    """Clamp a color channel in ``[0, 1]`` to the 0-255 range."""
    if c != c:  # NaN
        return 0
    c = round(c * 255)
    if c > 255:
        c = 255
    elif c < 0:
        c = 0
    return int(c)


def to_rgb(color: Vec3) -> tuple[int, int, int]:
    """Convert a color to a displayable pixel."""
    return clamp(color.x), clamp(color.y), clamp(color.z)
