# renderer/cpu_kernels.py

import math
import numpy as np
from numba import njit, prange

# Layout of the packed shading parameters
AMBIENT = 0
DIFFUSE_ON = 1
DIFFUSE_WEIGHT = 2
SHADOWS_ON = 3
SHADOW_FACTOR = 4
SPECULAR_ON = 5
SPECULAR_WEIGHT = 6
SHININESS = 7
SHADOW_BIAS = 8
PARAM_COUNT = 9

def pack_shading(shading) -> np.ndarray:
    """Flattens a ShadingModel into the float array the kernel reads."""
    params = np.zeros(PARAM_COUNT, dtype=np.float64)
    params[AMBIENT] = shading.ambient
    params[DIFFUSE_ON] = 1.0 if shading.diffuse else 0.0
    params[DIFFUSE_WEIGHT] = shading.diffuse_weight
    params[SHADOWS_ON] = 1.0 if shading.shadows else 0.0
    params[SHADOW_FACTOR] = shading.shadow_factor
    params[SPECULAR_ON] = 1.0 if shading.specular else 0.0
    params[SPECULAR_WEIGHT] = shading.specular_weight
    params[SHININESS] = shading.shininess
    params[SHADOW_BIAS] = shading.shadow_bias
    return params

def pack_vectors(*vectors) -> np.ndarray:
    return np.array([[v.x, v.y, v.z] for v in vectors], dtype=np.float64)

@njit(cache=True)
def ray_sphere_intersect(ox, oy, oz, dx, dy, dz, cx, cy, cz, radius):
    """Front-face-only ray-sphere test for a unit direction; -1.0 on miss."""
    ocx = ox - cx
    ocy = oy - cy
    ocz = oz - cz
    b = ocx * dx + ocy * dy + ocz * dz
    c = (ocx * ocx + ocy * ocy + ocz * ocz) - radius * radius
    discriminant = b * b - c
    if discriminant <= 0.0:
        return -1.0
    sqrtd = math.sqrt(discriminant)
    t1 = -b - sqrtd
    if t1 > 0.0:
        return t1
    t2 = -b + sqrtd
    if t2 > 0.0:
        return t2
    return -1.0

@njit(cache=True)
def closest_sphere(ox, oy, oz, dx, dy, dz, centers, radii):
    closest_t = np.inf
    closest = -1
    for k in range(radii.shape[0]):
        t = ray_sphere_intersect(ox, oy, oz, dx, dy, dz,
                                 centers[k, 0], centers[k, 1], centers[k, 2], radii[k])
        if t > 0.0 and t < closest_t:
            closest_t = t
            closest = k
    return closest, closest_t

@njit(cache=True)
def any_sphere(ox, oy, oz, dx, dy, dz, centers, radii, exclude):
    for k in range(radii.shape[0]):
        if k == exclude:
            continue
        t = ray_sphere_intersect(ox, oy, oz, dx, dy, dz,
                                 centers[k, 0], centers[k, 1], centers[k, 2], radii[k])
        if t > 0.0:
            return True
    return False

@njit(cache=True)
def normalize3(x, y, z):
    l = math.sqrt(x * x + y * y + z * z)
    if l == 0.0:
        return 0.0, 0.0, 0.0
    return x / l, y / l, z / l

@njit(cache=True)
def ndc(index, size):
    if size <= 1:
        return 0.5
    return index / (size - 1)

@njit(parallel=True, cache=True)
def render_kernel(width, height, camera, centers, radii, albedos, light, background, params, out, hits):
    """
    Shades every pixel into out[i, j] (linear, clamped colors) and flags
    sphere hits in hits[i, j].

    camera:     rows origin, horizontal, vertical, w
    light:      rows direction, to_light, color
    background: rows sky_color, horizon_color
    """
    ambient = params[AMBIENT]
    diffuse_on = params[DIFFUSE_ON] > 0.5
    diffuse_weight = params[DIFFUSE_WEIGHT]
    shadows_on = params[SHADOWS_ON] > 0.5
    shadow_factor = params[SHADOW_FACTOR]
    specular_on = params[SPECULAR_ON] > 0.5
    specular_weight = params[SPECULAR_WEIGHT]
    shininess = params[SHININESS]
    shadow_bias = params[SHADOW_BIAS]

    ox = camera[0, 0]
    oy = camera[0, 1]
    oz = camera[0, 2]
    # shadow rays renormalize to_light; the diffuse term uses it as stored
    sx, sy, sz = normalize3(light[1, 0], light[1, 1], light[1, 2])
    lx = light[1, 0]
    ly = light[1, 1]
    lz = light[1, 2]

    for i in prange(width):
        for j in range(height):
            u = ndc(i, width) * 2 - 1
            v = (1 - ndc(j, height)) * 2 - 1
            u *= width / height

            dx, dy, dz = normalize3(
                (camera[1, 0] * u + camera[2, 0] * v) - camera[3, 0],
                (camera[1, 1] * u + camera[2, 1] * v) - camera[3, 1],
                (camera[1, 2] * u + camera[2, 2] * v) - camera[3, 2],
            )

            k, t = closest_sphere(ox, oy, oz, dx, dy, dz, centers, radii)
            if k == -1:
                bt = 0.5 * (dy + 1.0)
                for c in range(3):
                    out[i, j, c] = background[1, c] + (background[0, c] - background[1, c]) * bt
                hits[i, j] = False
                continue

            hits[i, j] = True
            px = ox + dx * t
            py = oy + dy * t
            pz = oz + dz * t
            nx, ny, nz = normalize3(px - centers[k, 0], py - centers[k, 1], pz - centers[k, 2])

            visibility = 1.0
            if shadows_on and (diffuse_on or specular_on):
                if any_sphere(px + nx * shadow_bias, py + ny * shadow_bias, pz + nz * shadow_bias,
                              sx, sy, sz, centers, radii, k):
                    visibility = shadow_factor

            diffuse = 0.0
            if diffuse_on:
                diffuse = max(nx * lx + ny * ly + nz * lz, 0.0) * diffuse_weight * visibility

            highlight = 0.0
            if specular_on:
                # reflect the light's travel direction about the normal
                ddot = 2 * (light[0, 0] * nx + light[0, 1] * ny + light[0, 2] * nz)
                rx, ry, rz = normalize3(light[0, 0] - nx * ddot,
                                        light[0, 1] - ny * ddot,
                                        light[0, 2] - nz * ddot)
                highlight = max(rx * -dx + ry * -dy + rz * -dz, 0.0) ** shininess
                highlight = highlight * specular_weight * visibility

            for c in range(3):
                value = albedos[k, c] * (light[2, c] * (ambient + diffuse))
                if specular_on:
                    value = value + light[2, c] * highlight
                out[i, j, c] = min(max(value, 0.0), 1.0)
