"""Skerry - JAX-based island terrain and arcade flight framework."""

from dataclasses import replace

from skerry.controller import FlightController
from skerry.core.config import (
    AircraftConfig,
    NoiseConfig,
    PhysicsConfig,
    SimulationConfig,
    TerrainConfig,
    validate_aircraft_config,
    validate_terrain_config,
)
from skerry.core.scenario import (
    Landmass,
    ScenarioConfig,
    generate_landmass,
    get_scenario,
)
from skerry.core.simulation import (
    clamp_dt,
    reset_aircraft,
    rollout,
    spawn_aircraft,
    step_aircraft,
)
from skerry.core.state import Aircraft, ControlInput
from skerry.core.terrain import (
    apply_landmass_terrain,
    generate_heightfield,
    sample_land_mask,
    terrain_height_at,
)


# Convenience functions
def quick_landmass(scenario: str = "basic", subdivisions: int | None = None) -> Landmass:
    """Generate the landmass of a named scenario, optionally at a coarser grid."""
    config = get_scenario(scenario).simulation.terrain
    if subdivisions is not None:
        config = replace(config, subdivisions=subdivisions)
    return generate_landmass(config)


def quick_controller(scenario: str = "basic") -> FlightController:
    """Create a flight controller at the spawn point of a named scenario."""
    preset = get_scenario(scenario)
    return FlightController(
        preset.spawn_position,
        config=preset.simulation,
        heading=preset.spawn_heading,
    )


__all__ = [
    # Configuration classes
    "AircraftConfig",
    "NoiseConfig",
    "PhysicsConfig",
    "SimulationConfig",
    "TerrainConfig",
    "validate_aircraft_config",
    "validate_terrain_config",
    # Scenarios
    "Landmass",
    "ScenarioConfig",
    "generate_landmass",
    "get_scenario",
    # Core simulation
    "step_aircraft",
    "reset_aircraft",
    "spawn_aircraft",
    "rollout",
    "clamp_dt",
    "FlightController",
    # State classes
    "Aircraft",
    "ControlInput",
    # Terrain
    "apply_landmass_terrain",
    "generate_heightfield",
    "sample_land_mask",
    "terrain_height_at",
    # Convenience functions
    "quick_landmass",
    "quick_controller",
]
