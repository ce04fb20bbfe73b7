"""Exceptions raised by the ray tracer."""


class RayTracerError(Exception):
    """Base class for all tracer errors."""


class DegenerateBasisError(RayTracerError):
    """The camera has no usable look direction."""


class InvalidMaterialError(RayTracerError, ValueError):
    """A material was built with out-of-range parameters."""


class TextureNotFoundError(RayTracerError, KeyError):
    """A texture path was requested that was never loaded."""

    def __str__(self) -> str:
        return Exception.__str__(self)


class SceneValidationError(RayTracerError):
    """The scene cannot be rendered as described."""
