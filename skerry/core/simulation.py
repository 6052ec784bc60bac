"""Flight simulation stepping and numerical integration routines."""

from dataclasses import replace

import jax
import jax.numpy as jnp

from . import logic, quaternion
from .config import AircraftConfig, SimulationConfig
from .interface import calculate_acceleration, calculate_angular_velocity
from .physics import clamp_speed
from .primitives import FLOAT_DTYPE, BoolScalar, FloatScalar, Quaternion, Vector3, norm_3
from .spatial import (
    apply_brake,
    apply_deck_floor,
    apply_floor,
    apply_world_bounds,
    is_grounded,
)
from .state import Aircraft, ControlInput


def spawn_aircraft(
    position: Vector3,
    aircraft_config: AircraftConfig,
    heading: FloatScalar = 0.0,
) -> Aircraft:
    """
    Create an aircraft at a spawn point, moving forward at launch speed.

    Parameters
    ----------
    position : Vector3
        Spawn world position [m].
    aircraft_config : AircraftConfig
        Aircraft tuning constants.
    heading : FloatScalar
        Spawn heading, radians to the right of +Z.

    Returns
    -------
    Aircraft
        Fresh aircraft with zero throttle and the default floor height.
    """
    position = jnp.asarray(position, dtype=FLOAT_DTYPE)
    orientation = quaternion.from_heading(jnp.asarray(heading, dtype=FLOAT_DTYPE))
    return Aircraft(
        position=position,
        orientation=orientation,
        velocity=quaternion.forward(orientation) * aircraft_config.launch_speed,
        angular_velocity=jnp.zeros(3, dtype=FLOAT_DTYPE),
        throttle=jnp.array(0.0, dtype=FLOAT_DTYPE),
        min_altitude=jnp.array(aircraft_config.min_altitude, dtype=FLOAT_DTYPE),
        spawn_position=position,
        spawn_orientation=orientation,
    )


def reset_aircraft(aircraft: Aircraft) -> Aircraft:
    """
    Return the aircraft to its spawn pose at rest.

    Parameters
    ----------
    aircraft : Aircraft
        Aircraft in any state.

    Returns
    -------
    Aircraft
        Aircraft at the spawn position and orientation with zero velocity,
        zero angular velocity and zero throttle. The floor height is kept.
    """
    return replace(
        aircraft,
        position=aircraft.spawn_position,
        orientation=aircraft.spawn_orientation,
        velocity=jnp.zeros(3, dtype=FLOAT_DTYPE),
        angular_velocity=jnp.zeros(3, dtype=FLOAT_DTYPE),
        throttle=jnp.array(0.0, dtype=FLOAT_DTYPE),
    )


def set_heading(aircraft: Aircraft, heading: FloatScalar) -> Aircraft:
    """Level the aircraft on a heading and make that the spawn orientation."""
    orientation = quaternion.from_heading(jnp.asarray(heading, dtype=FLOAT_DTYPE))
    return replace(aircraft, orientation=orientation, spawn_orientation=orientation)


def raise_to_deck(
    aircraft: Aircraft,
    deck_height: FloatScalar,
    clearance: FloatScalar,
) -> Aircraft:
    """Raise the floor to a deck under the aircraft, see `apply_deck_floor`."""
    position, velocity, min_altitude = apply_deck_floor(
        position=aircraft.position,
        velocity=aircraft.velocity,
        min_altitude=aircraft.min_altitude,
        deck_height=deck_height,
        clearance=clearance,
    )
    return replace(
        aircraft, position=position, velocity=velocity, min_altitude=min_altitude
    )


def integrate_orientation(
    orientation: Quaternion,
    angular_velocity: Vector3,
    dt: FloatScalar,
) -> Quaternion:
    """
    Rotate an orientation by body rates over one time step.

    Parameters
    ----------
    orientation : Quaternion
        Body-to-world orientation.
    angular_velocity : Vector3
        [pitch, yaw, roll] body rates [rad/s].
    dt : FloatScalar
        Time step [s].

    Returns
    -------
    Quaternion
        Orientation after successive local pitch, yaw and roll rotations.
    """
    orientation = quaternion.rotate_local(
        orientation, quaternion.PITCH_AXIS, angular_velocity[0] * dt
    )
    orientation = quaternion.rotate_local(
        orientation, quaternion.YAW_AXIS, angular_velocity[1] * dt
    )
    orientation = quaternion.rotate_local(
        orientation, quaternion.ROLL_AXIS, angular_velocity[2] * dt
    )
    return orientation


def step_aircraft(
    aircraft: Aircraft,
    controls: ControlInput,
    brake_engaged: BoolScalar,
    auto_level_enabled: BoolScalar,
    config: SimulationConfig,
    dt: FloatScalar,
) -> Aircraft:
    """
    Advance the aircraft by one tick.

    Parameters
    ----------
    aircraft : Aircraft
        Current aircraft state.
    controls : ControlInput
        Pilot input for this tick.
    brake_engaged : BoolScalar
        Whether the wheel brakes are set.
    auto_level_enabled : BoolScalar
        Whether auto-level is switched on.
    config : SimulationConfig
        Aircraft and physics configuration.
    dt : FloatScalar
        Time step [s]. Not clamped here, callers keep it within
        [0, config.max_dt] (see `clamp_dt`).

    Returns
    -------
    Aircraft
        Aircraft state after one time step.

    Notes
    -----
    Afterwards throttle is in [0, 1], speed is at most `max_speed`, altitude
    is at least `min_altitude` and |x|, |z| are at most `world_limit`.
    """
    aircraft_config = config.aircraft
    physics_config = config.physics

    grounded = is_grounded(
        aircraft.position, aircraft.min_altitude, physics_config.ground_tolerance
    )

    throttle = logic.step_throttle(
        throttle=aircraft.throttle,
        controls=controls,
        throttle_rate=aircraft_config.throttle_rate,
        grounded=grounded,
        brake_engaged=brake_engaged,
        dt=dt,
    )

    speed = norm_3(aircraft.velocity)
    control_scale = logic.calculate_control_scale(speed, aircraft_config.stall_speed)

    angular_velocity = calculate_angular_velocity(
        aircraft=aircraft,
        controls=controls,
        control_scale=control_scale,
        auto_level_enabled=auto_level_enabled,
        aircraft_config=aircraft_config,
        dt=dt,
    )
    orientation = integrate_orientation(aircraft.orientation, angular_velocity, dt)

    aircraft = replace(
        aircraft,
        orientation=orientation,
        angular_velocity=angular_velocity,
        throttle=throttle,
    )

    acceleration = calculate_acceleration(
        aircraft=aircraft,
        controls=controls,
        speed=speed,
        control_scale=control_scale,
        grounded=grounded,
        aircraft_config=aircraft_config,
        physics_config=physics_config,
    )

    velocity = clamp_speed(aircraft.velocity + acceleration * dt, aircraft_config.max_speed)
    position = aircraft.position + velocity * dt

    position, velocity = apply_floor(position, velocity, aircraft.min_altitude)
    velocity = apply_brake(velocity, grounded, brake_engaged)
    position, velocity = apply_world_bounds(position, velocity, aircraft_config.world_limit)

    return replace(aircraft, position=position, velocity=velocity)


def rollout(
    aircraft: Aircraft,
    controls: ControlInput,
    brake_engaged: BoolScalar,
    auto_level_enabled: BoolScalar,
    config: SimulationConfig,
    dt: FloatScalar,
    num_steps: int,
) -> tuple[Aircraft, Vector3]:
    """
    Hold one input for many ticks.

    Parameters
    ----------
    aircraft : Aircraft
        Initial aircraft state.
    controls : ControlInput
        Pilot input applied on every tick.
    brake_engaged : BoolScalar
        Whether the wheel brakes are set.
    auto_level_enabled : BoolScalar
        Whether auto-level is switched on.
    config : SimulationConfig
        Aircraft and physics configuration.
    dt : FloatScalar
        Time step [s].
    num_steps : int
        Number of ticks.

    Returns
    -------
    aircraft : Aircraft
        Final aircraft state.
    history : (num_steps, 5) Matrix
        Per tick [x, y, z, speed, throttle] after the step.
    """

    def body(carry: Aircraft, _: None) -> tuple[Aircraft, Vector3]:
        stepped = step_aircraft(
            carry, controls, brake_engaged, auto_level_enabled, config, dt
        )
        record = jnp.concatenate(
            [
                stepped.position,
                jnp.stack([norm_3(stepped.velocity), stepped.throttle]),
            ]
        )
        return stepped, record

    return jax.lax.scan(body, aircraft, None, length=num_steps)


def clamp_dt(dt: float, max_dt: float) -> float:
    """Host-side frame time clamp to [0, max_dt] [s]."""
    return min(max(float(dt), 0.0), float(max_dt))
