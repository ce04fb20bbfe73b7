"""Fixed values shared by the tracer."""

import math

# Recursion limit for reflection and refraction rays
MAX_DEPTH = 3

# Offset applied to secondary ray origins along the surface normal
ORIGIN_BIAS = 1e-4

# Smallest accepted hit distance
T_MIN = 1e-4

# Lengths below this are treated as zero
EPSILON = 1e-9

# Orbit limits
MAX_PITCH = math.radians(89)
MIN_RADIUS = 0.1

SKYBOX_COLOR = (0.26, 0.55, 0.89)

__all__ = [
    "MAX_DEPTH",
    "ORIGIN_BIAS",
    "T_MIN",
    "EPSILON",
    "MAX_PITCH",
    "MIN_RADIUS",
    "SKYBOX_COLOR",
]
