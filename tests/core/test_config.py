"""Tests for config module."""

from dataclasses import replace

import jax
import pytest

from skerry.core.config import (
    AircraftConfig,
    NoiseConfig,
    SimulationConfig,
    TerrainConfig,
    validate_aircraft_config,
    validate_terrain_config,
)


def test_defaults() -> None:
    """Test default configuration values."""
    terrain = TerrainConfig()
    assert terrain.seed == 53.0
    assert terrain.seed_offset == pytest.approx(16.8)
    assert terrain.size == 5000.0
    assert terrain.large_noise == NoiseConfig(3, 2.0, 0.5, 201.0)
    assert terrain.mountain_noise.octaves == 4

    aircraft = AircraftConfig()
    assert aircraft.max_speed == 120.0
    assert aircraft.stall_speed == 12.0
    assert aircraft.takeoff_speed == 22.0
    assert aircraft.world_limit == 950.0

    assert SimulationConfig().max_dt == 0.05


def test_pytree_registration() -> None:
    """Test that static fields stay out of the pytree leaves."""
    leaves, treedef = jax.tree.flatten(TerrainConfig())
    assert all(not isinstance(leaf, str) for leaf in leaves)
    assert jax.tree.unflatten(treedef, leaves) == TerrainConfig()

    noise_leaves = jax.tree.leaves(NoiseConfig())
    assert len(noise_leaves) == 3


def test_validate_terrain_config() -> None:
    """Test terrain configuration checks."""
    # Standard case 1 - defaults are valid and returned
    config = TerrainConfig()
    assert validate_terrain_config(config) is config

    # Edge case 1 - non-positive size
    with pytest.raises(ValueError, match="TerrainConfig.size"):
        validate_terrain_config(replace(config, size=0.0))

    # Edge case 2 - non-finite value
    with pytest.raises(ValueError, match="seed_offset"):
        validate_terrain_config(replace(config, seed_offset=float("nan")))

    # Edge case 3 - zero falloff
    with pytest.raises(ValueError, match="coast_falloff"):
        validate_terrain_config(replace(config, coast_falloff=0.0))

    # Edge case 4 - negative centre radius
    with pytest.raises(ValueError, match="center_radius"):
        validate_terrain_config(replace(config, center_radius=-1.0))

    # Edge case 5 - unknown radial metric
    with pytest.raises(ValueError, match="radial_metric"):
        validate_terrain_config(replace(config, radial_metric="hexagon"))

    # Edge case 6 - empty noise layer
    with pytest.raises(ValueError, match="octaves"):
        validate_terrain_config(replace(config, hill_noise=NoiseConfig(octaves=0)))


def test_validate_aircraft_config() -> None:
    """Test aircraft configuration checks."""
    config = AircraftConfig()
    assert validate_aircraft_config(config) is config

    with pytest.raises(ValueError, match="stall_speed"):
        validate_aircraft_config(replace(config, stall_speed=0.0))

    with pytest.raises(ValueError, match="max_speed"):
        validate_aircraft_config(replace(config, max_speed=-5.0))

    with pytest.raises(ValueError, match="world_limit"):
        validate_aircraft_config(replace(config, world_limit=-1.0))

    with pytest.raises(ValueError, match="drag_coeff"):
        validate_aircraft_config(replace(config, drag_coeff=float("inf")))
