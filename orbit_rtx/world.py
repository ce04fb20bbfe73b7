"""Scene container, the light and a helper to build block scenes."""

import logging
from typing import Iterable, Mapping, Optional

from orbit_rtx.constants import SKYBOX_COLOR
from orbit_rtx.errors import SceneValidationError
from orbit_rtx.material import Material
from orbit_rtx.shapes import Body, Cube, Intersection, Ray
from orbit_rtx.texture import TextureManager
from orbit_rtx.vector import Vec3

logger = logging.getLogger(__name__)


class Light:
    """Point light source."""

    def __init__(self, p: Vec3, color: Vec3, intensity: float = 1.0) -> None:
        self.p = p
        self.color = color
        self.intensity = intensity


class World:
    """Container for scene objects."""

    background_color = Vec3(*SKYBOX_COLOR)

    def __init__(self, bodies: Optional[Iterable[Body]] = None,
                 background: Optional[Vec3] = None,
                 textures: Optional[TextureManager] = None) -> None:
        self.bodies = list(bodies) if bodies else []
        if background is not None:
            self.background_color = background
        self.textures = textures if textures is not None else TextureManager()

    def add(self, body: Body) -> None:
        self.bodies.append(body)

    def intersect(self, ray: Ray) -> Optional[Intersection]:
        """Return the closest intersection of ``ray`` with any body."""
        nearest = None
        for body in self.bodies:
            i = body.intersect(ray)
            if i is not None and (nearest is None or i.t < nearest.t):
                nearest = i
        return nearest

    def validate(self) -> None:
        """Check that everything the bodies refer to is available.

        Raises:
            SceneValidationError: If a body is not a ``Body`` or a material
                uses a texture or normal map that was never loaded.
        """
        for body in self.bodies:
            if not isinstance(body, Body):
                raise SceneValidationError(f"not a renderable body: {body!r}")
            for path in (body.m.texture, body.m.normal_map):
                if path is not None and path not in self.textures:
                    raise SceneValidationError(f"texture {path} used by {body!r} is not loaded")
        logger.debug("validated world with %d bodies and %d textures",
                     len(self.bodies), len(self.textures))


def build_from_layers(layers: Iterable[Iterable[str]], palette: Mapping[str, Material],
                      size: float = 0.5, spacing: float = 0.5) -> list[Cube]:
    """Stack cubes from letter grids.

    Each layer is a list of rows, each row a string whose characters are looked
    up in *palette*. Layer ``i`` sits at height ``i * spacing``; the grid is
    centered on the origin in x and z. Unknown characters (spaces) are gaps.
    """
    layers = [list(layer) for layer in layers]
    columns = max((len(row) for layer in layers for row in layer), default=0)
    rows = max((len(layer) for layer in layers), default=0)
    offset_x = (columns - 1) * spacing / 2.0
    offset_z = (rows - 1) * spacing / 2.0

    cubes = []
    for level, layer in enumerate(layers):
        for gz, row in enumerate(layer):
            for gx, letter in enumerate(row):
                material = palette.get(letter)
                if material is None:
                    continue
                center = Vec3(gx * spacing - offset_x, level * spacing, gz * spacing - offset_z)
                cubes.append(Cube(center, size, material))
    return cubes
