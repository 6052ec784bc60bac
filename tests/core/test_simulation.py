"""Tests for simulation module."""

from dataclasses import replace

import jax
import jax.numpy as jnp

from skerry.core.config import AircraftConfig, SimulationConfig
from skerry.core.primitives import EPS, FLOAT_DTYPE
from skerry.core.quaternion import forward, from_heading, identity
from skerry.core.simulation import (
    clamp_dt,
    integrate_orientation,
    raise_to_deck,
    reset_aircraft,
    rollout,
    set_heading,
    spawn_aircraft,
    step_aircraft,
)
from skerry.core.state import ControlInput

pi = jnp.array(jnp.pi, dtype=FLOAT_DTYPE)
dt = jnp.array(1.0 / 60.0, dtype=FLOAT_DTYPE)
no_brake = jnp.array(False)
no_auto_level = jnp.array(False)


def test_spawn_aircraft(jit_mode: str) -> None:
    """Test aircraft spawning."""
    config = AircraftConfig()

    # Standard case 1 - default heading launches along +Z
    aircraft = spawn_aircraft(jnp.array([0.0, 2.0, -124.0], dtype=FLOAT_DTYPE), config)
    assert jnp.allclose(aircraft.velocity, jnp.array([0.0, 0.0, 20.0]), atol=EPS)
    assert jnp.allclose(aircraft.orientation, identity(), atol=EPS)
    assert jnp.isclose(aircraft.throttle, 0.0, atol=EPS)
    assert jnp.isclose(aircraft.min_altitude, 2.0, atol=EPS)
    assert jnp.allclose(aircraft.spawn_position, aircraft.position, atol=EPS)

    # Standard case 2 - heading turns the launch velocity
    turned = spawn_aircraft(jnp.zeros(3, dtype=FLOAT_DTYPE), config, pi / 2)
    assert jnp.allclose(turned.velocity, jnp.array([20.0, 0.0, 0.0]), atol=1e-9)


def test_integrate_orientation(jit_mode: str) -> None:
    """Test body rate integration."""
    # Standard case 1 - zero rates keep the orientation
    result_1 = integrate_orientation(identity(), jnp.zeros(3, dtype=FLOAT_DTYPE), dt)
    assert jnp.allclose(result_1, identity(), atol=EPS)

    # Standard case 2 - pitch rate raises the nose by rate * dt
    result_2 = integrate_orientation(
        identity(), jnp.array([0.6, 0.0, 0.0], dtype=FLOAT_DTYPE), jnp.array(0.5)
    )
    assert jnp.isclose(forward(result_2)[1], jnp.sin(0.3), atol=EPS)

    # Edge case 1 - result stays unit length
    result_3 = integrate_orientation(
        identity(), jnp.array([1.0, -2.0, 3.0], dtype=FLOAT_DTYPE), jnp.array(0.05)
    )
    assert jnp.isclose(jnp.linalg.norm(result_3), 1.0, atol=EPS)


def test_step_aircraft_invariants(jit_mode: str) -> None:
    """Test post-step throttle, speed, floor and world-bound invariants."""
    config = SimulationConfig()
    aircraft = spawn_aircraft(jnp.array([940.0, 2.5, -945.0], dtype=FLOAT_DTYPE), config.aircraft)
    aircraft = replace(
        aircraft,
        velocity=jnp.array([60.0, -40.0, -60.0], dtype=FLOAT_DTYPE),
        throttle=jnp.array(0.99, dtype=FLOAT_DTYPE),
    )
    controls = ControlInput.create(pitch=-1.0, roll=0.7, yaw=0.3, throttle_up=True)

    for _ in range(30):
        aircraft = step_aircraft(aircraft, controls, no_brake, no_auto_level, config, dt)
        assert 0.0 <= aircraft.throttle <= 1.0
        assert jnp.linalg.norm(aircraft.velocity) <= config.aircraft.max_speed + 1e-9
        assert aircraft.position[1] >= aircraft.min_altitude
        assert jnp.abs(aircraft.position[0]) <= config.aircraft.world_limit
        assert jnp.abs(aircraft.position[2]) <= config.aircraft.world_limit


def test_step_aircraft_speed_clamp(jit_mode: str) -> None:
    """Test the hard speed limit under full thrust without drag."""
    config = SimulationConfig(aircraft=replace(AircraftConfig(), drag_coeff=0.0))
    aircraft = spawn_aircraft(jnp.array([0.0, 500.0, -900.0], dtype=FLOAT_DTYPE), config.aircraft)
    aircraft = replace(aircraft, throttle=jnp.array(1.0, dtype=FLOAT_DTYPE))

    final, history = rollout(
        aircraft,
        ControlInput.create(throttle_up=True),
        no_brake,
        no_auto_level,
        config,
        dt,
        300,
    )
    assert history.shape == (300, 5)
    assert jnp.all(history[:, 3] <= 120.0 + 1e-9)
    assert jnp.isclose(history[-1, 3], 120.0, atol=1e-6)
    assert jnp.isclose(jnp.linalg.norm(final.velocity), 120.0, atol=1e-6)


def test_step_aircraft_floor(jit_mode: str) -> None:
    """Test that a diving aircraft never sinks below the floor."""
    config = SimulationConfig(aircraft=replace(AircraftConfig(), lift_coeff=0.0))
    aircraft = spawn_aircraft(jnp.array([0.0, 30.0, 0.0], dtype=FLOAT_DTYPE), config.aircraft)
    aircraft = replace(aircraft, velocity=jnp.array([0.0, -40.0, 30.0], dtype=FLOAT_DTYPE))

    _, history = rollout(
        aircraft,
        ControlInput.create(pitch=-1.0),
        no_brake,
        no_auto_level,
        config,
        dt,
        240,
    )
    assert jnp.all(history[:, 1] >= config.aircraft.min_altitude)
    assert jnp.isclose(jnp.min(history[:, 1]), config.aircraft.min_altitude, atol=EPS)


def test_step_aircraft_brake(jit_mode: str) -> None:
    """Test braking on the ground."""
    config = SimulationConfig()
    aircraft = spawn_aircraft(jnp.array([0.0, 2.0, 0.0], dtype=FLOAT_DTYPE), config.aircraft)
    aircraft = replace(aircraft, throttle=jnp.array(0.7, dtype=FLOAT_DTYPE))

    result = step_aircraft(
        aircraft, ControlInput.create(throttle_up=True), jnp.array(True), no_auto_level, config, dt
    )
    assert jnp.isclose(result.throttle, 0.0, atol=EPS)
    assert jnp.isclose(result.velocity[0], 0.0, atol=EPS)
    assert jnp.isclose(result.velocity[2], 0.0, atol=EPS)
    assert jnp.isclose(result.position[1], 2.0, atol=EPS)


def test_step_aircraft_takeoff(jit_mode: str) -> None:
    """Test take-off roll and rotation."""
    config = SimulationConfig()
    aircraft = spawn_aircraft(jnp.array([0.0, 2.0, -800.0], dtype=FLOAT_DTYPE), config.aircraft)

    # Standard case 1 - full throttle with neutral stick stays on the ground
    rolled, history_1 = rollout(
        aircraft,
        ControlInput.create(throttle_up=True),
        no_brake,
        no_auto_level,
        config,
        dt,
        360,
    )
    assert jnp.allclose(history_1[:, 1], 2.0, atol=EPS)
    assert jnp.isclose(rolled.throttle, 1.0, atol=EPS)
    assert history_1[-1, 3] > config.aircraft.takeoff_speed

    # Standard case 2 - nose-up stick above take-off speed lifts off
    _, history_2 = rollout(
        rolled,
        ControlInput.create(pitch=0.15, throttle_up=True),
        no_brake,
        no_auto_level,
        config,
        dt,
        180,
    )
    assert jnp.max(history_2[:, 1]) > config.aircraft.min_altitude + 5.0


def test_step_aircraft_zero_dt(jit_mode: str) -> None:
    """Test that a zero time step leaves position and throttle unchanged."""
    config = SimulationConfig()
    aircraft = spawn_aircraft(jnp.array([10.0, 40.0, 5.0], dtype=FLOAT_DTYPE), config.aircraft)
    result = step_aircraft(
        aircraft,
        ControlInput.create(pitch=1.0, throttle_up=True),
        no_brake,
        no_auto_level,
        config,
        jnp.array(0.0, dtype=FLOAT_DTYPE),
    )
    assert jnp.allclose(result.position, aircraft.position, atol=EPS)
    assert jnp.isclose(result.throttle, aircraft.throttle, atol=EPS)
    assert jnp.allclose(result.orientation, aircraft.orientation, atol=EPS)


def test_reset_aircraft(jit_mode: str) -> None:
    """Test reset to the spawn pose."""
    config = SimulationConfig()
    spawn = jnp.array([0.0, 2.0, -124.0], dtype=FLOAT_DTYPE)
    aircraft = spawn_aircraft(spawn, config.aircraft)
    aircraft = raise_to_deck(aircraft, jnp.array(4.0), jnp.array(0.3))

    flown, _ = rollout(
        aircraft,
        ControlInput.create(pitch=0.4, roll=0.2, throttle_up=True),
        no_brake,
        no_auto_level,
        config,
        dt,
        120,
    )

    # Standard case 1 - pose and motion restored, floor kept
    result_1 = reset_aircraft(flown)
    assert jnp.allclose(result_1.position, spawn, atol=EPS)
    assert jnp.allclose(result_1.orientation, identity(), atol=EPS)
    assert jnp.allclose(result_1.velocity, 0.0, atol=EPS)
    assert jnp.allclose(result_1.angular_velocity, 0.0, atol=EPS)
    assert jnp.isclose(result_1.throttle, 0.0, atol=EPS)
    assert jnp.isclose(result_1.min_altitude, 4.3, atol=EPS)

    # Standard case 2 - idempotent
    result_2 = reset_aircraft(result_1)
    for a, b in zip(jax.tree.leaves(result_1), jax.tree.leaves(result_2)):
        assert jnp.array_equal(a, b)

    # Standard case 3 - heading becomes the spawn orientation
    headed = set_heading(flown, pi / 2)
    result_3 = reset_aircraft(headed)
    assert jnp.allclose(result_3.orientation, from_heading(pi / 2), atol=EPS)


def test_clamp_dt() -> None:
    """Test host-side frame time clamp."""
    assert clamp_dt(0.016, 0.05) == 0.016
    assert clamp_dt(0.2, 0.05) == 0.05
    assert clamp_dt(-0.01, 0.05) == 0.0
