"""Recursive shading: Phong lighting, hard shadows, reflection and refraction."""

from orbit_rtx.constants import MAX_DEPTH, ORIGIN_BIAS
from orbit_rtx.shapes import Intersection, Ray
from orbit_rtx.vector import Vec3, reflect, refract
from orbit_rtx.world import Light, World


def offset_origin(intersection: Intersection, direction: Vec3) -> Vec3:
    """Push the hit point off the surface, to the side *direction* leaves from."""
    offset = intersection.n.s_mult(ORIGIN_BIAS)
    if direction.dot(intersection.n) < 0:
        return intersection.poi.sub(offset)
    return intersection.poi.add(offset)


def shadow_factor(intersection: Intersection, world: World, light: Light) -> float:
    """Return 1.0 when the light reaches the hit point and 0.0 when it is blocked."""
    to_light = light.p.sub(intersection.poi)
    light_distance = to_light.mag()
    light_dir = to_light.norm()

    shadow_ray = Ray(offset_origin(intersection, light_dir), light_dir)
    for body in world.bodies:
        hit = body.intersect(shadow_ray)
        if hit is not None and hit.t < light_distance:
            return 0.0
    return 1.0


def _surface_normal(intersection: Intersection, world: World) -> Vec3:
    """Return the shading normal, perturbed by the material's normal map."""
    normal = intersection.n
    normal_map = intersection.material.normal_map
    if normal_map is None:
        return normal

    tex_normal = world.textures.get_normal_from_map(normal_map, intersection.u, intersection.v)
    tangent = Vec3(normal.y, -normal.x, 0.0).norm()
    if tangent.sqMag() == 0:
        tangent = Vec3(1.0, 0.0, 0.0)
    bitangent = normal.cross(tangent)

    perturbed = (tangent.s_mult(tex_normal.x)
                 .add(bitangent.s_mult(tex_normal.y))
                 .add(normal.s_mult(tex_normal.z))
                 .norm())
    return perturbed if perturbed.sqMag() > 0 else normal


def _diffuse_color(intersection: Intersection, world: World) -> Vec3:
    material = intersection.material
    if material.texture is not None:
        return world.textures.get_pixel_color(material.texture, intersection.u, intersection.v)
    return material.color


def cast_ray(ray: Ray, world: World, light: Light, depth: int = 0) -> Vec3:
    """Return the color seen along *ray*.

    The local color is ``diffuse * albedo[0] + specular * albedo[1]`` (there is
    no ambient term). Reflected and refracted rays are traced recursively with
    ``depth + 1`` and added with weights ``albedo[2]`` and ``albedo[3]``. At
    ``MAX_DEPTH`` and on a miss the world background is returned. The result
    is not clamped.
    """
    if depth >= MAX_DEPTH:
        return world.background_color

    intersection = world.intersect(ray)
    if intersection is None:
        return world.background_color

    material = intersection.material
    albedo = material.albedo
    normal = _surface_normal(intersection, world)

    light_dir = light.p.sub(intersection.poi).norm()
    view_dir = ray.o.sub(intersection.poi).norm()

    light_intensity = light.intensity * shadow_factor(intersection, world, light)

    diffuse_intensity = max(0.0, normal.dot(light_dir)) * light_intensity
    diffuse = _diffuse_color(intersection, world).mult(light.color).s_mult(diffuse_intensity)

    reflect_dir = reflect(light_dir.neg(), normal).norm()
    specular_intensity = max(0.0, view_dir.dot(reflect_dir)) ** material.spec * light_intensity
    specular = light.color.s_mult(specular_intensity)

    color = diffuse.s_mult(albedo[0]).add(specular.s_mult(albedo[1]))

    if material.is_emissive:
        color = color.add(material.emission.s_mult(material.emission_strength))

    if albedo[2] > 0:
        direction = reflect(ray.d, normal).norm()
        reflected = Ray(offset_origin(intersection, direction), direction)
        color = color.add(cast_ray(reflected, world, light, depth + 1).s_mult(albedo[2]))

    if albedo[3] > 0:
        direction = refract(ray.d, normal, material.refractive_index).norm()
        refracted = Ray(offset_origin(intersection, direction), direction)
        color = color.add(cast_ray(refracted, world, light, depth + 1).s_mult(albedo[3]))

    return color
