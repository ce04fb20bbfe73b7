"""Surface description shared by every body."""

import logging
from typing import Optional

from orbit_rtx.errors import InvalidMaterialError
from orbit_rtx.vector import Vec3

logger = logging.getLogger(__name__)


class Material:
    """Surface properties for a renderable object."""

    def __init__(self, color: Vec3, spec: float, albedo, refractive_index: float = 1.0,
                 texture: Optional[str] = None, normal_map: Optional[str] = None,
                 emission: Optional[Vec3] = None, emission_strength: float = 0.0) -> None:
        """Initialize a material.

        Args:
            color: Diffuse color with channels in ``[0, 1]``.
            spec: Specular exponent.
            albedo: Weights ``(diffuse, specular, reflect, refract)``.
            refractive_index: Index of refraction of the body's interior.
            texture: Path of a texture replacing ``color``.
            normal_map: Path of a tangent-space normal map.
            emission: Color the surface adds regardless of lighting.
            emission_strength: Multiplier for ``emission``.

        Raises:
            InvalidMaterialError: For a negative specular exponent, a
                non-positive refractive index or a negative or malformed albedo.
        """
        albedo = tuple(float(a) for a in albedo)
        if len(albedo) != 4:
            raise InvalidMaterialError(f"albedo needs 4 weights, got {len(albedo)}")
        if any(a < 0 for a in albedo):
            raise InvalidMaterialError(f"albedo weights must not be negative: {albedo}")
        if spec < 0:
            raise InvalidMaterialError(f"specular exponent must not be negative: {spec}")
        if refractive_index <= 0:
            raise InvalidMaterialError(f"refractive index must be positive: {refractive_index}")
        if emission_strength < 0:
            raise InvalidMaterialError(f"emission strength must not be negative: {emission_strength}")
        if sum(albedo) > 1.0 + 1e-9:
            logger.warning("albedo %s sums to %.3f, surface reflects more light than it receives",
                           albedo, sum(albedo))

        self.color = color
        self.spec = spec
        self.albedo = albedo
        self.refractive_index = refractive_index
        self.texture = texture
        self.normal_map = normal_map
        self.emission = emission if emission is not None else Vec3.zero()
        self.emission_strength = emission_strength

    @property
    def is_emissive(self) -> bool:
        return self.emission_strength > 0
