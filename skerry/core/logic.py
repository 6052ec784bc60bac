"""Control logic functions for the flight model."""

import jax.numpy as jnp

from . import quaternion
from .config import AircraftConfig
from .primitives import (
    FLOAT_DTYPE,
    BoolScalar,
    FloatScalar,
    Quaternion,
    Vector3,
    clamp,
    lerp,
    safe_divide,
)
from .state import ControlInput


def step_throttle(
    throttle: FloatScalar,
    controls: ControlInput,
    throttle_rate: FloatScalar,
    grounded: BoolScalar,
    brake_engaged: BoolScalar,
    dt: FloatScalar,
) -> FloatScalar:
    """
    Rate-limit the throttle toward the held throttle keys.

    Parameters
    ----------
    throttle : FloatScalar
        Current throttle [0, 1].
    controls : ControlInput
        Pilot input, only the throttle keys are read.
    throttle_rate : FloatScalar
        Throttle change per second [1/s].
    grounded : BoolScalar
        Whether the aircraft rests on the floor.
    brake_engaged : BoolScalar
        Whether the wheel brakes are set.
    dt : FloatScalar
        Time step [s].

    Returns
    -------
    throttle : FloatScalar
        Updated throttle in [0, 1]. Forced to 0 while braked on the ground.
    """
    direction = jnp.asarray(controls.throttle_up, dtype=FLOAT_DTYPE) - jnp.asarray(
        controls.throttle_down, dtype=FLOAT_DTYPE
    )
    spooled = clamp(throttle + direction * throttle_rate * dt, 0.0, 1.0)
    chocked = jnp.logical_and(grounded, brake_engaged)
    return jnp.where(chocked, 0.0, spooled)


def calculate_control_scale(speed: FloatScalar, stall_speed: FloatScalar) -> FloatScalar:
    """
    Control surface authority from airspeed.

    Parameters
    ----------
    speed : FloatScalar
        Airspeed [m/s].
    stall_speed : FloatScalar
        Speed at which the surfaces reach full authority [m/s].

    Returns
    -------
    scale : FloatScalar
        speed / stall_speed clamped to [0, 1].
    """
    return clamp(safe_divide(speed, stall_speed), 0.0, 1.0)


def calculate_attitude(orientation: Quaternion) -> tuple[FloatScalar, FloatScalar]:
    """
    Pitch and bank angles measured from the aircraft's own axes.

    Parameters
    ----------
    orientation : Quaternion
        Body-to-world orientation.

    Returns
    -------
    pitch : FloatScalar
        Nose elevation above the horizon [rad], in [-pi/2, pi/2].
    roll : FloatScalar
        Bank angle, positive right wing down [rad], in [-pi, pi].

    Notes
    -----
    Roll comes from the right wing's height relative to the roof, which stays
    well defined when the nose points straight up or down, unlike a generic
    Euler decomposition.
    """
    forward = quaternion.forward(orientation)
    up = quaternion.up(orientation)
    right = quaternion.right(orientation)

    pitch = jnp.arcsin(clamp(forward[1], -1.0, 1.0))
    roll = jnp.arctan2(-right[1], up[1])
    return pitch, roll


def calculate_auto_level(
    orientation: Quaternion,
    controls: ControlInput,
    deadzone: FloatScalar,
    enabled: BoolScalar,
) -> tuple[FloatScalar, FloatScalar]:
    """
    Attitude corrections for released pitch and roll sticks.

    Parameters
    ----------
    orientation : Quaternion
        Body-to-world orientation.
    controls : ControlInput
        Raw pilot input.
    deadzone : FloatScalar
        Stick magnitude below which an axis counts as released.
    enabled : BoolScalar
        Whether auto-level is switched on.

    Returns
    -------
    auto_pitch : FloatScalar
        Negative pitch angle when the pitch stick is released, else 0 [rad].
    auto_roll : FloatScalar
        Negative roll angle when the roll stick is released, else 0 [rad].
    """
    pitch, roll = calculate_attitude(orientation)
    pitch_free = jnp.logical_and(enabled, jnp.abs(controls.pitch) < deadzone)
    roll_free = jnp.logical_and(enabled, jnp.abs(controls.roll) < deadzone)
    return jnp.where(pitch_free, -pitch, 0.0), jnp.where(roll_free, -roll, 0.0)


def calculate_target_rates(
    controls: ControlInput,
    control_scale: FloatScalar,
    auto_pitch: FloatScalar,
    auto_roll: FloatScalar,
    aircraft_config: AircraftConfig,
) -> Vector3:
    """
    Commanded body rates from scaled stick input and auto-level.

    Parameters
    ----------
    controls : ControlInput
        Raw pilot input.
    control_scale : FloatScalar
        Speed-based control authority [0, 1].
    auto_pitch : FloatScalar
        Auto-level pitch correction [rad].
    auto_roll : FloatScalar
        Auto-level roll correction [rad].
    aircraft_config : AircraftConfig
        Aircraft tuning constants.

    Returns
    -------
    rates : Vector3
        Target [pitch, yaw, roll] rates [rad/s]. Yaw is never auto-levelled.
    """
    strength = aircraft_config.auto_level_strength
    pitch = controls.pitch * control_scale * aircraft_config.pitch_rate + auto_pitch * strength
    yaw = controls.yaw * control_scale * aircraft_config.yaw_rate
    roll = controls.roll * control_scale * aircraft_config.roll_rate + auto_roll * strength
    return jnp.array([pitch, yaw, roll], dtype=FLOAT_DTYPE)


def smooth_angular_velocity(
    current: Vector3,
    target: Vector3,
    damping: FloatScalar,
    dt: FloatScalar,
) -> Vector3:
    """
    Exponentially track target body rates.

    Parameters
    ----------
    current : Vector3
        Current [pitch, yaw, roll] rates [rad/s].
    target : Vector3
        Target rates [rad/s].
    damping : FloatScalar
        Tracking rate [1/s].
    dt : FloatScalar
        Time step [s].

    Returns
    -------
    rates : Vector3
        lerp(current, target, 1 - exp(-damping * dt)).
    """
    return lerp(current, target, 1.0 - jnp.exp(-damping * dt))
