"""Command line driver rendering the demo scenes."""

import argparse
import logging
import math
from pathlib import Path

from orbit_rtx import config
from orbit_rtx.camera import Camera
from orbit_rtx.errors import RayTracerError
from orbit_rtx.logging_config import setup_logging
from orbit_rtx.material import Material
from orbit_rtx.render import Framebuffer, render
from orbit_rtx.shapes import Sphere
from orbit_rtx.vector import Vec3
from orbit_rtx.world import Light, World, build_from_layers

logger = logging.getLogger(__name__)

BLOCK_LAYERS = [
    [
        "WWWWWWWWW",
        "WWWWWWWWW",
        "WWWWWWWWW",
        "WWWWWWWWW",
        "WWWWWWWWW",
    ],
    [
        "         ",
        " BBBBBBB ",
        " GRCIYPG ",
        "         ",
        "         ",
    ],
    [
        "         ",
        "  BBBBB  ",
        "   K Y   ",
        "         ",
        "         ",
    ],
    [
        "         ",
        "   BBB   ",
        "         ",
        "         ",
        "         ",
    ],
]


def block_palette() -> dict[str, Material]:
    return {
        "R": Material(Vec3(0.8, 0.2, 0.2), 10, (0.9, 0.1, 0.0, 0.0)),
        "B": Material(Vec3(0.8, 0.4, 0.2), 20, (0.8, 0.2, 0.0, 0.0)),
        "I": Material(Vec3(0.4, 0.4, 0.3), 50, (0.6, 0.3, 0.1, 0.0)),
        "G": Material(Vec3(0.5, 0.8, 1.0), 125, (0.0, 0.2, 0.1, 0.7), 1.5),
        "Y": Material(Vec3(0.9, 0.9, 0.2), 30, (0.7, 0.3, 0.0, 0.0),
                      emission=Vec3(1.0, 0.95, 0.3), emission_strength=0.6),
        "P": Material(Vec3(0.8, 0.2, 0.8), 15, (0.8, 0.2, 0.0, 0.0)),
        "C": Material(Vec3(0.2, 0.8, 0.8), 25, (0.7, 0.3, 0.0, 0.0)),
        "W": Material(Vec3(0.9, 0.9, 0.9), 40, (0.6, 0.4, 0.0, 0.0)),
        "K": Material(Vec3(0.1, 0.1, 0.1), 5, (0.9, 0.1, 0.0, 0.0)),
    }


def sphere_scene(texture=None):
    """Return ``(world, camera, light)`` for the sphere demo."""
    world = World()
    if texture is not None:
        world.textures.load_texture(texture)
        texture = str(texture)

    floor = Material(Vec3(0.6, 0.6, 0.6), 10, (0.8, 0.1, 0.1, 0.0))
    red = Material(Vec3(0.9, 0.1, 0.1), 50, (0.9, 0.1, 0.0, 0.0), texture=texture)
    mirror = Material(Vec3(0.9, 0.9, 0.9), 1000, (0.1, 0.3, 0.6, 0.0))
    glass = Material(Vec3(0.6, 0.7, 0.8), 125, (0.0, 0.2, 0.1, 0.7), 1.5)
    glow = Material(Vec3(0.9, 0.9, 0.2), 30, (0.7, 0.3, 0.0, 0.0),
                    emission=Vec3(1.0, 0.95, 0.3), emission_strength=0.4)

    world.add(Sphere(Vec3(0, -1001, 0), 1000, floor))
    world.add(Sphere(Vec3(-2.2, 0, 0), 1, red))
    world.add(Sphere(Vec3(0, 0, -1.5), 1, mirror))
    world.add(Sphere(Vec3(2.2, 0, 0), 1, glass))
    world.add(Sphere(Vec3(0.8, -0.6, 1.2), 0.4, glow))

    camera = Camera(Vec3(0, 1, 7), Vec3(0, 0, 0), Vec3(0, 1, 0))
    light = Light(Vec3(5, 5, 5), Vec3(1, 1, 1))
    return world, camera, light


def block_scene():
    """Return ``(world, camera, light)`` for the stacked block demo."""
    world = World(build_from_layers(BLOCK_LAYERS, block_palette()))
    camera = Camera(Vec3(0, 2, 5), Vec3(0, 0.5, 0), Vec3(0, 1, 0))
    light = Light(Vec3(2, 5, 5), Vec3(1, 1, 1), 1.2)
    return world, camera, light


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    width, height = config.RESOLUTION
    parser = argparse.ArgumentParser(prog="orbit-rtx", description=__doc__)
    parser.add_argument("--width", type=positive_int, default=width)
    parser.add_argument("--height", type=positive_int, default=height)
    parser.add_argument("--fov", type=float, default=config.FOV, help="vertical field of view in degrees")
    parser.add_argument("--scene", choices=("spheres", "blocks"), default="spheres")
    parser.add_argument("--texture", type=Path, help="image mapped onto the red sphere")
    parser.add_argument("--frames", type=positive_int, default=1)
    parser.add_argument("--yaw-step", type=float, default=0.0, help="degrees of yaw per frame")
    parser.add_argument("--pitch-step", type=float, default=0.0, help="degrees of pitch per frame")
    parser.add_argument("--zoom-step", type=float, default=0.0, help="units towards the center per frame")
    parser.add_argument("--workers", type=positive_int, default=config.WORKERS)
    parser.add_argument("--output", default=str(config.OUTPUT_DIR / "render"))
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    parser.add_argument("--log-file", type=Path, default=config.LOG_FILE, help="also log to this rotating file")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Entry point used when running this package as a script."""
    args = parse_args(argv)
    setup_logging("orbit_rtx", args.log_level, args.log_file)

    try:
        if args.scene == "blocks":
            world, camera, light = block_scene()
        else:
            world, camera, light = sphere_scene(args.texture)

        framebuffer = Framebuffer(args.width, args.height)
        fov = math.radians(args.fov)

        for frame in range(args.frames):
            if camera.changed:
                render(framebuffer, world, camera, light, fov, args.workers)
            name = args.output if args.frames == 1 else f"{args.output}_{frame:04d}"
            framebuffer.save(name)

            if args.yaw_step or args.pitch_step:
                camera.orbit(math.radians(args.yaw_step), math.radians(args.pitch_step))
            if args.zoom_step:
                camera.zoom(args.zoom_step)
    except (RayTracerError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0
