"""Per-pixel render loop and the frame buffer it fills."""

import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Optional

from PIL import Image

from orbit_rtx.camera import Camera
from orbit_rtx.shading import cast_ray
from orbit_rtx.vector import Vec3, to_rgb
from orbit_rtx.world import Light, World

logger = logging.getLogger(__name__)


class Framebuffer:
    """RGB pixel buffer written as a PNG with Pillow."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"frame size must be positive: {width}x{height}")
        self.width = width
        self.height = height
        self.pixels: list[tuple[int, int, int]] = [(0, 0, 0)] * (width * height)

    def set_pixel(self, x: int, y: int, color: Vec3) -> None:
        """Store *color*, clamped to displayable channels."""
        self.pixels[y * self.width + x] = to_rgb(color)

    def set_row(self, y: int, row: list[tuple[int, int, int]]) -> None:
        start = y * self.width
        self.pixels[start:start + self.width] = row

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int]:
        return self.pixels[y * self.width + x]

    def to_image(self) -> Image.Image:
        im = Image.new("RGB", (self.width, self.height))
        im.putdata(self.pixels)
        return im

    def save(self, name) -> Path:
        """Write the buffer to ``name`` (``.png`` is added when missing)."""
        path = Path(name)
        if path.suffix.lower() != ".png":
            path = path.with_name(path.name + ".png")
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_image().save(path)
        logger.info("wrote %s", path)
        return path


# Render state of a worker process, set once by the pool initializer
_worker_context = None


def _init_worker(context) -> None:
    global _worker_context
    _worker_context = context


def _trace_rows(context, rows):
    """Trace every pixel of *rows*, returning the pixel rows and failure count.

    A pixel whose shading raises an arithmetic or value error gets the
    background color and is counted instead of aborting the frame.
    """
    world, camera, light, width, height, fov = context
    background = to_rgb(world.background_color)
    failures = 0
    result = []
    for y in rows:
        row = []
        for x in range(width):
            try:
                ray = camera.get_ray(x, y, width, height, fov)
                row.append(to_rgb(cast_ray(ray, world, light)))
            except (ArithmeticError, ValueError):
                logger.debug("pixel %d,%d failed", x, y, exc_info=True)
                row.append(background)
                failures += 1
        result.append((y, row))
    return result, failures


def _render_band(rows):
    return _trace_rows(_worker_context, rows)


def render(framebuffer: Framebuffer, world: World, camera: Camera, light: Light,
           fov: float, workers: Optional[int] = 1) -> int:
    """Render one frame into *framebuffer*.

    Args:
        framebuffer: Destination buffer, its size sets the image size.
        world: Scene to trace, validated before the first ray.
        camera: Camera producing the primary rays; not modified while tracing.
        light: The single light source.
        fov: Vertical field of view in radians.
        workers: Number of processes; 1 or ``None`` traces in this process.

    Returns:
        The number of pixels that failed and were filled with the background.
    """
    world.validate()

    width, height = framebuffer.width, framebuffer.height
    context = (world, camera, light, width, height, fov)
    start = time.perf_counter()

    if not workers or workers <= 1:
        bands = [_trace_rows(context, range(height))]
    else:
        band_size = max(1, math.ceil(height / (workers * 4)))
        row_bands = [range(y, min(y + band_size, height)) for y in range(0, height, band_size)]
        with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                 initargs=(context,)) as executor:
            bands = list(executor.map(_render_band, row_bands))

    failures = 0
    for rows, band_failures in bands:
        for y, row in rows:
            framebuffer.set_row(y, row)
        failures += band_failures

    camera.changed = False

    logger.debug("rendered %dx%d in %.2fs", width, height, time.perf_counter() - start)
    if failures:
        logger.warning("%d of %d pixels failed and were filled with the background",
                       failures, width * height)
    return failures
