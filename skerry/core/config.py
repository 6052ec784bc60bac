"""Configuration Dataclasses for terrain, aircraft and physics parameters."""

import math
from dataclasses import dataclass, fields
from functools import partial

import jax


@partial(
    jax.tree_util.register_dataclass,
    data_fields=("lacunarity", "gain", "seed_shift"),
    meta_fields=("octaves",),
)
@dataclass(frozen=True)
class NoiseConfig:
    """Configuration for one fractal Brownian motion noise layer."""

    octaves: int = 3
    """Number of value noise layers summed."""

    lacunarity: float = 2.0
    """Frequency growth per octave."""

    gain: float = 0.5
    """Amplitude reduction per octave."""

    seed_shift: float = 0.0
    """Added to the terrain seed so each layer samples an independent field."""


@partial(
    jax.tree_util.register_dataclass,
    data_fields=(
        "size",
        "seed",
        "seed_offset",
        "island_scale_large",
        "island_scale_small",
        "large_threshold",
        "large_falloff",
        "small_threshold",
        "small_falloff",
        "small_weight",
        "coast_scale",
        "coast_threshold",
        "coast_falloff",
        "coast_cut",
        "center_radius",
        "center_shoulder",
        "hill_scale",
        "hill_height",
        "mountain_scale",
        "mountain_height",
        "ridge_threshold",
        "base_height",
        "sea_floor_height",
        "flatten_center_radius",
        "shore_start",
        "shore_width",
        "large_noise",
        "small_noise",
        "coast_noise",
        "hill_noise",
        "mountain_noise",
    ),
    meta_fields=(
        "radial_metric",
        "subdivisions",
        "minimap_samples",
        "land_color",
    ),
)
@dataclass(frozen=True)
class TerrainConfig:
    """Configuration for island land mask and heightfield generation."""

    size: float = 5000.0
    """Width/length of the square terrain patch centred at the origin [m]."""

    seed: float = 53.0
    """Noise phase seed, identical seeds give identical terrain."""

    seed_offset: float = 16.8
    """World-space shift applied to every noise lookup [m]."""

    island_scale_large: float = 800.0
    """Feature size of the large island noise [m]."""

    island_scale_small: float = 350.0
    """Feature size of the small islet noise [m]."""

    large_threshold: float = 0.5
    """Noise level at which large islands begin."""

    large_falloff: float = 0.2
    """Noise range over which large islands ramp to full land."""

    small_threshold: float = 0.58
    """Noise level at which small islets begin."""

    small_falloff: float = 0.22
    """Noise range over which small islets ramp to full land."""

    small_weight: float = 0.7
    """Maximum contribution of small islets to the land mask."""

    coast_scale: float = 225.0
    """Feature size of the coastline carving noise [m]."""

    coast_threshold: float = 0.45
    """Noise level below which coastline carving starts."""

    coast_falloff: float = 0.35
    """Noise range of the coastline carving ramp."""

    coast_cut: float = 0.35
    """Maximum amount of land removed by coastline carving."""

    center_radius: float = 550.0
    """Radius of the guaranteed-land disc at the origin, 0 disables it [m]."""

    center_shoulder: float = 0.5
    """Fade width outside the guaranteed-land disc, as a fraction of its radius."""

    hill_scale: float = 150.0
    """Feature size of rolling hills [m]."""

    hill_height: float = 8.0
    """Peak-to-peak height of rolling hills [m]."""

    mountain_scale: float = 450.0
    """Feature size of ridged mountains [m]."""

    mountain_height: float = 80.0
    """Height gain applied to squared mountain ridges [m]."""

    ridge_threshold: float = 0.48
    """Noise level above which mountain ridges rise."""

    base_height: float = 2.0
    """Land elevation before hills and mountains [m]."""

    sea_floor_height: float = -6.0
    """Elevation of open water terrain [m]."""

    flatten_center_radius: float = 350.0
    """Radius around the origin kept flat for spawn areas, 0 disables it [m]."""

    shore_start: float = 0.3
    """Land mask value where the beach transition begins."""

    shore_width: float = 0.14
    """Land mask range of the beach transition."""

    large_noise: NoiseConfig = NoiseConfig(3, 2.0, 0.5, 201.0)
    """Noise layer for large islands."""

    small_noise: NoiseConfig = NoiseConfig(2, 2.1, 0.55, 401.0)
    """Noise layer for small islets."""

    coast_noise: NoiseConfig = NoiseConfig(3, 2.2, 0.5, 701.0)
    """Noise layer for coastline carving."""

    hill_noise: NoiseConfig = NoiseConfig(4, 2.1, 0.5, 0.0)
    """Noise layer for rolling hills."""

    mountain_noise: NoiseConfig = NoiseConfig(4, 2.2, 0.55, 101.0)
    """Noise layer for ridged mountains."""

    radial_metric: str = "square"
    """Edge falloff distance, "square" (Chebyshev) or "circle" (Euclidean)."""

    subdivisions: int = 200
    """Ground grid subdivisions per side (vertices per side = subdivisions + 1)."""

    minimap_samples: int = 64
    """Minimap grid resolution per side."""

    land_color: tuple[float, float, float] = (0.18, 0.56, 0.22)
    """RGB vertex colour of land, alpha carries the shore blend."""


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class PhysicsConfig:
    """Configuration for physical constants and ground contact."""

    gravity: float = 9.8
    """Gravitational acceleration [m/s^2]."""

    ground_tolerance: float = 0.01
    """Height above the floor still counted as grounded [m]."""

    ground_support_height: float = 1.5
    """Height above the floor below which the ground cancels gravity [m]."""


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class AircraftConfig:
    """Configuration for aircraft tuning constants."""

    max_thrust: float = 40.0
    """Acceleration at full throttle [m/s^2]."""

    drag_coeff: float = 0.05
    """Quadratic drag coefficient [1/m]."""

    turn_drag: float = 0.08
    """Extra quadratic drag per unit of stick deflection [1/m]."""

    lift_coeff: float = 0.02
    """Lift coefficient, lift acceleration = coeff * speed^2 [1/m]."""

    pitch_rate: float = 1.6
    """Pitch rate at full stick [rad/s]."""

    roll_rate: float = 2.2
    """Roll rate at full stick [rad/s]."""

    yaw_rate: float = 1.0
    """Yaw rate at full pedal [rad/s]."""

    angular_damping: float = 6.0
    """Exponential rate at which angular velocity tracks its target [1/s]."""

    auto_level_strength: float = 0.8
    """Corrective rate per radian of attitude error when auto-level is on [1/s]."""

    auto_level_deadzone: float = 0.01
    """Stick magnitude below which an axis counts as released."""

    stall_speed: float = 12.0
    """Speed giving full control authority and lift [m/s]."""

    takeoff_speed: float = 22.0
    """Speed below which no lift is produced [m/s]."""

    throttle_rate: float = 0.6
    """Throttle change per second while a throttle key is held [1/s]."""

    max_speed: float = 120.0
    """Hard speed limit [m/s]."""

    min_altitude: float = 2.0
    """Default floor height the aircraft cannot sink below [m]."""

    world_limit: float = 950.0
    """Half-width of the square flyable area [m]."""

    launch_speed: float = 20.0
    """Forward speed given to a freshly spawned aircraft [m/s]."""


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class SimulationConfig:
    """Configuration for simulation."""

    aircraft: AircraftConfig = AircraftConfig()
    """Config for simulation aircraft."""

    physics: PhysicsConfig = PhysicsConfig()
    """Config for simulation physics."""

    terrain: TerrainConfig = TerrainConfig()
    """Config for island terrain."""

    max_dt: float = 0.05
    """Largest frame time the host should pass to the integrator [s]."""


def _check_finite(config: object) -> None:
    for item in fields(config):
        value = getattr(config, item.name)
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError(
                f"{type(config).__name__}.{item.name} must be finite, got {value!r}"
            )


def validate_terrain_config(config: TerrainConfig) -> TerrainConfig:
    """
    Check a terrain configuration before generation.

    Parameters
    ----------
    config : TerrainConfig
        Configuration holding concrete (untraced) values.

    Returns
    -------
    TerrainConfig
        The same configuration, for chaining.

    Raises
    ------
    ValueError
        If a value is non-finite or a scale, falloff or size is not positive.
    """
    _check_finite(config)
    positive = (
        "size",
        "island_scale_large",
        "island_scale_small",
        "large_falloff",
        "small_falloff",
        "coast_scale",
        "coast_falloff",
        "hill_scale",
        "mountain_scale",
        "shore_width",
    )
    for name in positive:
        value = getattr(config, name)
        if value <= 0.0:
            raise ValueError(f"TerrainConfig.{name} must be positive, got {value!r}")

    for name in ("center_radius", "center_shoulder", "flatten_center_radius"):
        value = getattr(config, name)
        if value < 0.0:
            raise ValueError(f"TerrainConfig.{name} must not be negative, got {value!r}")

    if config.radial_metric not in ("square", "circle"):
        raise ValueError(
            f"TerrainConfig.radial_metric must be 'square' or 'circle', "
            f"got {config.radial_metric!r}"
        )
    if config.subdivisions < 1 or config.minimap_samples < 2:
        raise ValueError("TerrainConfig grid resolutions are too small")

    for layer in (
        config.large_noise,
        config.small_noise,
        config.coast_noise,
        config.hill_noise,
        config.mountain_noise,
    ):
        _check_finite(layer)
        if layer.octaves < 1:
            raise ValueError(f"NoiseConfig.octaves must be >= 1, got {layer.octaves!r}")
    return config


def validate_aircraft_config(config: AircraftConfig) -> AircraftConfig:
    """
    Check aircraft tuning constants before building a controller.

    Raises
    ------
    ValueError
        If a value is non-finite or a rate, speed or limit is out of range.
    """
    _check_finite(config)
    for name in ("stall_speed", "max_speed", "throttle_rate"):
        value = getattr(config, name)
        if value <= 0.0:
            raise ValueError(f"AircraftConfig.{name} must be positive, got {value!r}")
    for name in ("world_limit", "angular_damping", "max_thrust"):
        value = getattr(config, name)
        if value < 0.0:
            raise ValueError(f"AircraftConfig.{name} must not be negative, got {value!r}")
    return config
