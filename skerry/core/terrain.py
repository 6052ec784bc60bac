"""Terrain generation module for procedural island landmasses.

Build an island land mask and heightfield from seeded fractal value noise.
Every function is a pure, elementwise map over world (x, z) coordinates, so
the same calls serve mesh displacement, minimap sampling and point queries.
Land mask values are in range [0, 1], where 0 is open water and 1 is land.
"""

import jax.numpy as jnp

from .config import NoiseConfig, TerrainConfig
from .primitives import (
    FLOAT_DTYPE,
    Field,
    FloatScalar,
    Matrix,
    clamp,
    lerp,
    safe_divide,
    smoothstep,
)

# Sine hash constants
_HASH_X = 127.1
_HASH_Z = 311.7
_HASH_SEED = 74.7
_HASH_SCALE = 43758.5453

# Seed spacing between fbm octaves
_OCTAVE_SEED_STRIDE = 13.0


def hash_2d(x: Field, z: Field, seed: Field) -> Field:
    """
    Deterministic pseudo-random value from a lattice point and seed.

    Parameters
    ----------
    x : Field
        X coordinate (usually integer lattice).
    z : Field
        Z coordinate (usually integer lattice).
    seed : Field
        Seed selecting an independent field.

    Returns
    -------
    Field
        Value in [0, 1), the fractional part of a scaled sine.
    """
    s = jnp.sin(x * _HASH_X + z * _HASH_Z + seed * _HASH_SEED) * _HASH_SCALE
    return s - jnp.floor(s)


def value_noise_2d(x: Field, z: Field, seed: Field) -> Field:
    """
    Smooth value noise by bilinear blending of lattice hashes.

    Parameters
    ----------
    x : Field
        X coordinates to sample noise at.
    z : Field
        Z coordinates to sample noise at.
    seed : Field
        Noise seed.

    Returns
    -------
    Field
        Noise values in [0, 1).
    """
    x = jnp.asarray(x, dtype=FLOAT_DTYPE)
    z = jnp.asarray(z, dtype=FLOAT_DTYPE)

    x0 = jnp.floor(x)
    z0 = jnp.floor(z)
    x1 = x0 + 1.0
    z1 = z0 + 1.0

    # Eased fractional offsets inside the cell
    sx = smoothstep(x - x0)
    sz = smoothstep(z - z0)

    n00 = hash_2d(x0, z0, seed)
    n10 = hash_2d(x1, z0, seed)
    n01 = hash_2d(x0, z1, seed)
    n11 = hash_2d(x1, z1, seed)

    ix0 = lerp(n00, n10, sx)
    ix1 = lerp(n01, n11, sx)
    return lerp(ix0, ix1, sz)


def fbm_noise(
    x: Field,
    z: Field,
    seed: Field,
    octaves: int,
    lacunarity: Field,
    gain: Field,
) -> Field:
    """
    Fractal Brownian motion built from value noise octaves.

    Parameters
    ----------
    x : Field
        X coordinates to sample noise at.
    z : Field
        Z coordinates to sample noise at.
    seed : Field
        Seed of the first octave, octave i uses seed + 13 * i.
    octaves : int
        Number of noise layers to combine.
    lacunarity : Field
        Frequency increase factor for each octave.
    gain : Field
        Amplitude reduction factor for each octave.

    Returns
    -------
    Field
        Noise values in [0, 1).

    Notes
    -----
    The sum is normalised by the amplitudes actually accumulated, so the
    output range does not drift with the octave count.
    """
    amplitude = jnp.asarray(1.0, dtype=FLOAT_DTYPE)
    frequency = jnp.asarray(1.0, dtype=FLOAT_DTYPE)
    total = jnp.zeros_like(jnp.asarray(x, dtype=FLOAT_DTYPE))
    normalization = jnp.asarray(0.0, dtype=FLOAT_DTYPE)

    for octave_idx in range(octaves):
        layer = value_noise_2d(
            x * frequency,
            z * frequency,
            seed + octave_idx * _OCTAVE_SEED_STRIDE,
        )
        total = total + layer * amplitude
        normalization = normalization + amplitude
        amplitude = amplitude * gain
        frequency = frequency * lacunarity

    return total / normalization


def _layer_noise(
    x: Field,
    z: Field,
    scale: FloatScalar,
    layer: NoiseConfig,
    config: TerrainConfig,
) -> Field:
    return fbm_noise(
        safe_divide(x + config.seed_offset, scale),
        safe_divide(z + config.seed_offset, scale),
        config.seed + layer.seed_shift,
        layer.octaves,
        layer.lacunarity,
        layer.gain,
    )


def _ramp(value: Field, start: FloatScalar, width: FloatScalar) -> Field:
    return smoothstep(clamp(safe_divide(value - start, width), 0.0, 1.0))


def radial_falloff(x: Field, z: Field, size: FloatScalar, metric: str = "square") -> Field:
    """
    Edge fade that reaches 0 at half the patch size.

    Parameters
    ----------
    x : Field
        World X coordinates [m].
    z : Field
        World Z coordinates [m].
    size : FloatScalar
        Patch width [m], non-positive sizes give 0 everywhere.
    metric : str
        "square" for Chebyshev distance, "circle" for Euclidean distance.

    Returns
    -------
    Field
        Falloff in [0, 1], 1 at the origin.
    """
    half_size = jnp.maximum(size * 0.5, 0.0)
    if metric == "circle":
        distance = jnp.hypot(x, z)
    else:
        distance = jnp.maximum(jnp.abs(x), jnp.abs(z))
    ratio = safe_divide(half_size - distance, half_size)
    return smoothstep(clamp(ratio, 0.0, 1.0))


def center_land(x: Field, z: Field, radius: FloatScalar, shoulder: FloatScalar) -> Field:
    """
    Solid land disc at the origin with a smooth shoulder.

    Parameters
    ----------
    x : Field
        World X coordinates [m].
    z : Field
        World Z coordinates [m].
    radius : FloatScalar
        Disc radius [m], 0 disables the disc.
    shoulder : FloatScalar
        Fade width beyond the disc as a fraction of `radius`.

    Returns
    -------
    Field
        1 inside the disc, fading to 0 at radius * (1 + shoulder).
    """
    distance = jnp.hypot(x, z)
    width = radius * shoulder
    fade = smoothstep(clamp(safe_divide(radius + width - distance, width), 0.0, 1.0))
    inside = jnp.where(distance <= radius, 1.0, fade)
    return jnp.where(radius > 0.0, inside, 0.0)


def land_mask(x: Field, z: Field, config: TerrainConfig) -> Field:
    """
    Fractional landness of world coordinates.

    Parameters
    ----------
    x : Field
        World X coordinates [m].
    z : Field
        World Z coordinates [m].
    config : TerrainConfig
        Terrain configuration.

    Returns
    -------
    Field
        Land mask in [0, 1]: 0 open water, 1 solid land, between is shoreline.

    Notes
    -----
    Large islands and weighted small islets are merged with a max, then
    ragged coastlines are carved out with a third noise field. The result is
    faded to water toward the patch edge. The guaranteed-land disc is applied
    last, so every point within `center_radius` of the origin is land.
    """
    x = jnp.asarray(x, dtype=FLOAT_DTYPE)
    z = jnp.asarray(z, dtype=FLOAT_DTYPE)

    radial = radial_falloff(x, z, config.size, config.radial_metric)

    large_noise = _layer_noise(x, z, config.island_scale_large, config.large_noise, config)
    small_noise = _layer_noise(x, z, config.island_scale_small, config.small_noise, config)
    large_mask = _ramp(large_noise, config.large_threshold, config.large_falloff)
    small_mask = _ramp(small_noise, config.small_threshold, config.small_falloff)

    island = jnp.maximum(large_mask, small_mask * config.small_weight)

    coast_noise = _layer_noise(x, z, config.coast_scale, config.coast_noise, config)
    coast_mask = _ramp(coast_noise, config.coast_threshold, config.coast_falloff)
    island = clamp(island - (1.0 - coast_mask) * config.coast_cut, 0.0, 1.0)

    center = center_land(x, z, config.center_radius, config.center_shoulder)
    return clamp(jnp.maximum(island * radial, center), 0.0, 1.0)


def sample_land_mask(x: Field, z: Field, config: TerrainConfig) -> Field:
    """Land mask query for minimaps and spawn searches, see `land_mask`."""
    return land_mask(x, z, config)


def shore_blend(mask: Field, config: TerrainConfig) -> Field:
    """
    Re-ease a land mask across the beach band.

    Parameters
    ----------
    mask : Field
        Land mask values in [0, 1].
    config : TerrainConfig
        Terrain configuration providing `shore_start` and `shore_width`.

    Returns
    -------
    Field
        Blend in [0, 1] from sea floor (0) to land elevation (1).
    """
    return _ramp(mask, config.shore_start, config.shore_width)


def landmass_height(x: Field, z: Field, config: TerrainConfig) -> tuple[Field, Field]:
    """
    Terrain elevation and shore blend at world coordinates.

    Parameters
    ----------
    x : Field
        World X coordinates [m].
    z : Field
        World Z coordinates [m].
    config : TerrainConfig
        Terrain configuration.

    Returns
    -------
    height : Field
        Terrain elevation [m].
    blend : Field
        Shore blend in [0, 1].
    """
    x = jnp.asarray(x, dtype=FLOAT_DTYPE)
    z = jnp.asarray(z, dtype=FLOAT_DTYPE)

    # Zero-mean rolling hills
    hill_noise = _layer_noise(x, z, config.hill_scale, config.hill_noise, config)
    relief = (hill_noise - 0.5) * config.hill_height

    # Squared ridges give sharp peaks above the threshold
    mountain_noise = _layer_noise(
        x, z, config.mountain_scale, config.mountain_noise, config
    )
    ridge = jnp.maximum(0.0, mountain_noise - config.ridge_threshold)
    relief = relief + ridge * ridge * config.mountain_height

    blend = shore_blend(land_mask(x, z, config), config)

    # Keep the spawn area flat
    radius = config.flatten_center_radius
    flat = clamp(1.0 - safe_divide(jnp.hypot(x, z), radius), 0.0, 1.0)
    relief = jnp.where(radius > 0.0, relief * (1.0 - smoothstep(flat)), relief)

    height = lerp(config.sea_floor_height, config.base_height + relief, blend)
    return height, blend


def terrain_height_at(x: Field, z: Field, config: TerrainConfig) -> Field:
    """Terrain elevation at world coordinates [m]."""
    height, _ = landmass_height(x, z, config)
    return height


def generate_heightfield(vertices: Matrix, config: TerrainConfig) -> tuple[Field, Field]:
    """
    Heights and shore blends for a set of ground vertices.

    Parameters
    ----------
    vertices : (N, 2) Matrix
        Vertex world coordinates as [x, z] rows [m].
    config : TerrainConfig
        Terrain configuration.

    Returns
    -------
    heights : (N,) Field
        Vertex elevations [m].
    shore_blends : (N,) Field
        Vertex shore blends in [0, 1].
    """
    vertices = jnp.asarray(vertices, dtype=FLOAT_DTYPE)
    return landmass_height(vertices[:, 0], vertices[:, 1], config)


def apply_landmass_terrain(positions: Matrix, config: TerrainConfig) -> tuple[Matrix, Matrix]:
    """
    Displace a ground vertex buffer and derive its vertex colours.

    Parameters
    ----------
    positions : (N, 3) Matrix
        Vertex positions [x, y, z] of a flat ground mesh [m].
    config : TerrainConfig
        Terrain configuration.

    Returns
    -------
    positions : (N, 3) Matrix
        Copy of the input with y replaced by terrain elevation [m].
    colors : (N, 4) Matrix
        RGBA vertex colours, land coloured with alpha equal to the shore blend.
    """
    positions = jnp.asarray(positions, dtype=FLOAT_DTYPE)
    heights, blends = landmass_height(positions[:, 0], positions[:, 2], config)

    displaced = positions.at[:, 1].set(heights)
    rgb = jnp.broadcast_to(
        jnp.asarray(config.land_color, dtype=FLOAT_DTYPE), (positions.shape[0], 3)
    )
    colors = jnp.concatenate([rgb, blends[:, None]], axis=1)
    return displaced, colors


def ground_grid(size: FloatScalar, subdivisions: int) -> Matrix:
    """
    Flat square ground patch centred at the origin.

    Parameters
    ----------
    size : FloatScalar
        Width and length of the patch [m].
    subdivisions : int
        Number of cells per side.

    Returns
    -------
    (N, 3) Matrix
        Vertex positions with y = 0, N = (subdivisions + 1)^2, rows of
        increasing z each holding vertices of increasing x.
    """
    half = 0.5 * jnp.asarray(size, dtype=FLOAT_DTYPE)
    steps = jnp.linspace(0.0, 1.0, subdivisions + 1, dtype=FLOAT_DTYPE)
    coords = -half + 2.0 * half * steps
    grid_z, grid_x = jnp.meshgrid(coords, coords, indexing="ij")
    return jnp.stack(
        [grid_x.ravel(), jnp.zeros_like(grid_x).ravel(), grid_z.ravel()], axis=1
    )


def sample_minimap(config: TerrainConfig) -> Matrix:
    """
    Shore blend sampled on a regular grid covering the terrain patch.

    Parameters
    ----------
    config : TerrainConfig
        Terrain configuration, `minimap_samples` sets the grid resolution.

    Returns
    -------
    (S, S) Matrix
        Shore blend, row i is world z = (i / (S - 1) - 0.5) * size and
        column j is world x = (j / (S - 1) - 0.5) * size.
    """
    samples = config.minimap_samples
    offsets = jnp.arange(samples, dtype=FLOAT_DTYPE) / (samples - 1) - 0.5
    coords = offsets * config.size
    grid_z, grid_x = jnp.meshgrid(coords, coords, indexing="ij")
    return shore_blend(land_mask(grid_x, grid_z, config), config)
