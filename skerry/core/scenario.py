"""Scenario presets and landmass generation for world start-up."""

import logging
from dataclasses import dataclass, replace

import jax
import jax.numpy as jnp

from .config import (
    AircraftConfig,
    SimulationConfig,
    TerrainConfig,
    validate_aircraft_config,
    validate_terrain_config,
)
from .primitives import Matrix
from .terrain import apply_landmass_terrain, ground_grid, sample_minimap

logger = logging.getLogger(__name__)

# Runway used by the basic world, the aircraft spawns near its threshold
RUNWAY_LENGTH = 260.0


@dataclass(frozen=True)
class ScenarioConfig:
    name: str
    """Preset identifier."""

    description: str
    """One-line summary shown in scenario pickers."""

    simulation: SimulationConfig
    """Terrain, aircraft and physics configuration."""

    spawn_position: tuple[float, float, float]
    """Aircraft spawn position [m]."""

    spawn_heading: float = 0.0
    """Aircraft spawn heading, radians to the right of +Z."""

    ocean_size: float = 2200.0
    """Width of the flat ocean plane [m]."""

    ocean_color: tuple[float, float, float] = (0.1, 0.3, 0.6)
    """RGB colour of the ocean plane."""

    deck_clearance: float = 0.3
    """Gap kept between a sampled deck and the aircraft origin [m]."""


@dataclass(frozen=True)
class Landmass:
    positions: Matrix
    """(N, 3) displaced ground vertex positions [m]."""

    colors: Matrix
    """(N, 4) RGBA vertex colours, alpha is the shore blend."""

    minimap: Matrix
    """(S, S) shore blend grid for minimap drawing."""

    ocean_height: float
    """Height of the ocean plane, just above the sea floor [m]."""


_apply_landmass_terrain = jax.jit(apply_landmass_terrain)


def _runway_start() -> tuple[float, float, float]:
    return (0.0, AircraftConfig().min_altitude, -RUNWAY_LENGTH / 2.0 + 6.0)


def basic() -> ScenarioConfig:
    return ScenarioConfig(
        name="basic",
        description="Classic runway island with rolling hills.",
        simulation=SimulationConfig(),
        spawn_position=_runway_start(),
    )


def airport() -> ScenarioConfig:
    terrain = replace(
        TerrainConfig(),
        hill_height=4.0,
        mountain_height=45.0,
        flatten_center_radius=1000.0,
        center_radius=1400.0,
        large_threshold=0.54,
        small_threshold=0.6,
        coast_cut=0.25,
        shore_start=0.26,
        shore_width=0.18,
    )
    return ScenarioConfig(
        name="airport",
        description="Detailed airport on a flatter island.",
        simulation=SimulationConfig(terrain=terrain),
        spawn_position=_runway_start(),
    )


def carrier() -> ScenarioConfig:
    terrain = replace(
        TerrainConfig(),
        size=6000.0,
        hill_height=3.0,
        mountain_height=22.0,
        flatten_center_radius=0.0,
        island_scale_large=1500.0,
        island_scale_small=800.0,
        large_threshold=0.64,
        large_falloff=0.18,
        small_threshold=0.72,
        small_falloff=0.2,
        small_weight=0.35,
        coast_scale=320.0,
        coast_threshold=0.52,
        coast_falloff=0.25,
        coast_cut=0.55,
        center_radius=0.0,
        shore_start=0.22,
        shore_width=0.1,
        base_height=1.2,
        sea_floor_height=-1.8,
    )
    return ScenarioConfig(
        name="carrier",
        description="Sparse green seas with an anchored aircraft carrier.",
        simulation=SimulationConfig(terrain=terrain),
        spawn_position=(0.0, AircraftConfig().min_altitude, 0.0),
        ocean_size=6000.0,
        ocean_color=(0.08, 0.4, 0.28),
    )


SCENARIOS = {
    "basic": basic,
    "airport": airport,
    "carrier": carrier,
}


def get_scenario(name: str) -> ScenarioConfig:
    """
    Look up a scenario preset by name.

    Parameters
    ----------
    name : str
        One of "basic", "airport" or "carrier".

    Returns
    -------
    ScenarioConfig
        Validated preset.

    Raises
    ------
    ValueError
        If the name is unknown.
    """
    try:
        factory = SCENARIOS[name]
    except KeyError:
        raise ValueError(
            f"Unknown scenario {name!r}, expected one of {sorted(SCENARIOS)}"
        ) from None

    scenario = factory()
    validate_terrain_config(scenario.simulation.terrain)
    validate_aircraft_config(scenario.simulation.aircraft)
    logger.info("Selected scenario %s", scenario.name)
    return scenario


def generate_landmass(config: TerrainConfig | ScenarioConfig) -> Landmass:
    """
    Build the displaced island ground mesh data and minimap.

    Parameters
    ----------
    config : TerrainConfig | ScenarioConfig
        Terrain configuration, or a scenario whose terrain is used.

    Returns
    -------
    Landmass
        Vertex positions and colours for the mesh collaborator, plus the
        minimap grid and ocean plane height.
    """
    if isinstance(config, ScenarioConfig):
        config = config.simulation.terrain
    validate_terrain_config(config)

    grid = ground_grid(config.size, config.subdivisions)
    positions, colors = _apply_landmass_terrain(grid, config)
    minimap = sample_minimap(config)

    logger.debug(
        "Generated landmass: %d vertices, heights [%.2f, %.2f], land fraction %.3f",
        positions.shape[0],
        float(jnp.min(positions[:, 1])),
        float(jnp.max(positions[:, 1])),
        float(jnp.mean(minimap > 0.5)),
    )

    return Landmass(
        positions=positions,
        colors=colors,
        minimap=minimap,
        ocean_height=float(config.sea_floor_height) + 0.2,
    )
