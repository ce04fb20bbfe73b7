"""Decoded textures and the lookups the shader performs on them.

Images are decoded with Pillow once, before rendering, and stored in a
``TextureManager`` keyed by their path. Every material referring to the same
path shares one read-only ``CpuTexture``.
"""

import logging
import math
from pathlib import Path
from typing import Sequence

from PIL import Image

from orbit_rtx.errors import TextureNotFoundError
from orbit_rtx.vector import Vec3

logger = logging.getLogger(__name__)


class CpuTexture:
    """Texture kept in memory as row-major normalized colors."""

    def __init__(self, width: int, height: int, pixels: Sequence[Vec3]) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"texture size must be positive: {width}x{height}")
        if len(pixels) != width * height:
            raise ValueError(f"expected {width * height} pixels, got {len(pixels)}")
        self.width = width
        self.height = height
        self.pixels = tuple(pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> "CpuTexture":
        """Build a texture from a Pillow image."""
        rgb = image.convert("RGB")
        data = rgb.tobytes()
        pixels = [Vec3(data[i] / 255, data[i + 1] / 255, data[i + 2] / 255)
                  for i in range(0, len(data), 3)]
        return cls(rgb.width, rgb.height, pixels)

    def pixel(self, tx: int, ty: int) -> Vec3:
        return self.pixels[ty * self.width + tx]


def sample(texture: CpuTexture, u: float, v: float) -> Vec3:
    """Return the texel at ``(u, v)``, clamping coordinates to the edges."""
    u = min(max(u, 0.0), 1.0)
    v = min(max(v, 0.0), 1.0)
    tx = min(max(math.floor(u * texture.width), 0), texture.width - 1)
    ty = min(max(math.floor(v * texture.height), 0), texture.height - 1)
    return texture.pixel(tx, ty)


class TextureManager:
    """Arena of decoded textures keyed by path."""

    def __init__(self) -> None:
        self.textures: dict[str, CpuTexture] = {}

    def __contains__(self, path) -> bool:
        return str(path) in self.textures

    def __len__(self) -> int:
        return len(self.textures)

    def load_texture(self, path) -> CpuTexture:
        """Decode the image at *path* unless it was already loaded."""
        key = str(path)
        if key in self.textures:
            return self.textures[key]

        with Image.open(Path(path)) as image:
            texture = CpuTexture.from_image(image)
        logger.debug("loaded texture %s (%dx%d)", key, texture.width, texture.height)

        self.textures[key] = texture
        return texture

    def add_texture(self, path, texture: CpuTexture) -> None:
        """Register an already decoded texture under *path*."""
        self.textures[str(path)] = texture

    def get_texture(self, path) -> CpuTexture:
        try:
            return self.textures[str(path)]
        except KeyError:
            raise TextureNotFoundError(f"texture not loaded: {path}") from None

    def get_pixel_color(self, path, u: float, v: float) -> Vec3:
        return sample(self.get_texture(path), u, v)

    def get_normal_from_map(self, path, u: float, v: float) -> Vec3:
        """Decode a tangent-space normal stored as a color."""
        color = self.get_pixel_color(path, u, v)
        return Vec3(color.x * 2 - 1, color.y * 2 - 1, color.z * 2 - 1).norm()
