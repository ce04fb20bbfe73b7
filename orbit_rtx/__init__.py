"""Small recursive ray tracer with an orbit camera.

Spheres and cubes are shaded with Phong lighting, hard shadows, mirror
reflection, refraction and texture mapping, and written as PNG images with
Pillow.
"""

from orbit_rtx.camera import Camera
from orbit_rtx.material import Material
from orbit_rtx.render import Framebuffer, render
from orbit_rtx.shading import cast_ray
from orbit_rtx.shapes import Body, Cube, Intersection, Ray, Sphere
from orbit_rtx.texture import CpuTexture, TextureManager, sample
from orbit_rtx.vector import Vec3, reflect, refract
from orbit_rtx.world import Light, World, build_from_layers

__version__ = "0.1.0"

__all__ = [
    "Body",
    "Camera",
    "CpuTexture",
    "Cube",
    "Framebuffer",
    "Intersection",
    "Light",
    "Material",
    "Ray",
    "Sphere",
    "TextureManager",
    "Vec3",
    "World",
    "build_from_layers",
    "cast_ray",
    "reflect",
    "refract",
    "render",
    "sample",
]
