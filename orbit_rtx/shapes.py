"""Rays and the bodies they can hit."""

import abc
import math
from typing import Optional

from orbit_rtx.constants import EPSILON, T_MIN
from orbit_rtx.material import Material
from orbit_rtx.vector import Vec3


class Ray:
    """Ray with origin ``o`` and normalized direction ``d``."""

    __slots__ = ("o", "d")

    def __init__(self, o: Vec3, d: Vec3) -> None:
        self.o = o
        self.d = d

    def at(self, t: float) -> Vec3:
        """Return the point ``t`` units along the ray."""
        return self.o.add(self.d.s_mult(t))


class Intersection:
    """Stores ray intersection information."""

    def __init__(self, body: "Body", t: float, poi: Vec3, n: Vec3,
                 u: float = 0.0, v: float = 0.0) -> None:
        self.body = body
        self.t = t
        self.poi = poi
        self.n = n
        self.u = u
        self.v = v

    @property
    def material(self) -> Material:
        return self.body.m


class Body(abc.ABC):
    """Something a ray can hit."""

    m: Material

    @abc.abstractmethod
    def intersect(self, ray: Ray) -> Optional[Intersection]:
        """Return the nearest hit in front of the ray origin, or ``None``."""

    @abc.abstractmethod
    def get_uv(self, point: Vec3, normal: Vec3) -> tuple[float, float]:
        """Return texture coordinates in ``[0, 1]`` for a surface point."""


class Sphere(Body):
    """Simple sphere primitive."""

    def __init__(self, c: Vec3, r: float, m: Material) -> None:
        """Create a sphere.

        Args:
            c: Centre of the sphere.
            r: Radius of the sphere.
            m: Material applied to the surface.
        """
        if r <= 0:
            raise ValueError(f"sphere radius must be positive: {r}")
        self.c = c
        self.r = r
        self.m = m

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        """Return the intersection of *ray* with this sphere.

        Roots closer than ``T_MIN`` are ignored so a ray leaving the surface
        does not hit its own origin. From inside the sphere the far root is
        returned.
        """
        oc = ray.o.sub(self.c)
        k = ray.d.dot(oc)
        dis = (k**2) - (oc.sqMag() - (self.r**2))
        if dis < 0:
            return None

        root = dis**0.5
        t = -k - root
        if t <= T_MIN:
            t = -k + root
            if t <= T_MIN:
                return None

        poi = ray.at(t)
        n = poi.sub(self.c).s_mult(1.0 / self.r)
        u, v = self.get_uv(poi, n)
        return Intersection(self, t, poi, n, u, v)

    def get_uv(self, point: Vec3, normal: Vec3) -> tuple[float, float]:
        p = point.sub(self.c).norm()
        u = 0.5 + math.atan2(p.x, p.z) / (2 * math.pi)
        v = 0.5 - math.asin(max(-1.0, min(1.0, p.y))) / math.pi
        return u, v


class Cube(Body):
    """Axis-aligned cube given by its center and edge length."""

    def __init__(self, c: Vec3, size: float, m: Material) -> None:
        if size <= 0:
            raise ValueError(f"cube size must be positive: {size}")
        self.c = c
        self.size = size
        self.m = m

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        """Slab test against the three pairs of faces."""
        half = self.size / 2.0
        t_near, t_far = -math.inf, math.inf

        for o, d, c in zip(ray.o, ray.d, self.c):
            lo, hi = c - half, c + half
            if abs(d) < EPSILON:
                # Parallel to this slab, must already lie between its faces
                if o < lo or o > hi:
                    return None
                continue
            t1 = (lo - o) / d
            t2 = (hi - o) / d
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)

        if t_near > t_far or t_far <= T_MIN:
            return None

        # Origin inside the cube: use the exit face
        t = t_near if t_near > T_MIN else t_far

        poi = ray.at(t)
        n = self._face_normal(poi)
        u, v = self.get_uv(poi, n)
        return Intersection(self, t, poi, n, u, v)

    def _face_normal(self, point: Vec3) -> Vec3:
        local = point.sub(self.c)
        ax, ay, az = abs(local.x), abs(local.y), abs(local.z)
        if ax >= ay and ax >= az:
            return Vec3(math.copysign(1.0, local.x), 0.0, 0.0)
        if ay >= az:
            return Vec3(0.0, math.copysign(1.0, local.y), 0.0)
        return Vec3(0.0, 0.0, math.copysign(1.0, local.z))

    def get_uv(self, point: Vec3, normal: Vec3) -> tuple[float, float]:
        local = point.sub(self.c)
        half = self.size / 2.0

        def to_unit(value):
            return (value / half + 1.0) / 2.0

        if abs(normal.x) > 0.5:
            return to_unit(local.z), to_unit(local.y)
        if abs(normal.y) > 0.5:
            return to_unit(local.x), to_unit(local.z)
        return to_unit(local.x), to_unit(local.y)
