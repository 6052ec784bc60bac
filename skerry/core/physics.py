"""
Physics module for computing the force terms of the flight model.

Forces are expressed as accelerations (unit mass) in the Y-up world frame.
"""

import jax.numpy as jnp

from .primitives import FLOAT_DTYPE, BoolScalar, FloatScalar, Vector3, norm_3


def calculate_thrust(
    forward: Vector3,
    throttle: FloatScalar,
    max_thrust: FloatScalar,
) -> Vector3:
    """
    Calculate engine thrust along the aircraft nose.

    Parameters
    ----------
    forward : Vector3
        Unit world direction of the nose.
    throttle : FloatScalar
        Throttle setting [0, 1].
    max_thrust : FloatScalar
        Acceleration at full throttle [m/s^2].

    Returns
    -------
    thrust : Vector3
        Thrust acceleration [m/s^2].
    """
    return forward * (max_thrust * throttle)


def calculate_drag(
    velocity: Vector3,
    speed: FloatScalar,
    drag_coeff: FloatScalar,
) -> Vector3:
    """
    Calculate quadratic aerodynamic drag opposing the velocity.

    Parameters
    ----------
    velocity : Vector3
        World velocity [m/s].
    speed : FloatScalar
        Magnitude of `velocity` [m/s].
    drag_coeff : FloatScalar
        Drag coefficient [1/m].

    Returns
    -------
    drag : Vector3
        Drag acceleration [m/s^2], magnitude drag_coeff * speed^2.
    """
    return velocity * (-drag_coeff * speed)


def calculate_turn_drag(
    velocity: Vector3,
    speed: FloatScalar,
    turn_intensity: FloatScalar,
    turn_drag: FloatScalar,
) -> Vector3:
    """
    Calculate extra drag while manoeuvring.

    Parameters
    ----------
    velocity : Vector3
        World velocity [m/s].
    speed : FloatScalar
        Magnitude of `velocity` [m/s].
    turn_intensity : FloatScalar
        Sum of absolute pitch, roll and yaw stick deflections [0, 3].
    turn_drag : FloatScalar
        Drag coefficient per unit deflection [1/m].

    Returns
    -------
    drag : Vector3
        Manoeuvre drag acceleration [m/s^2].
    """
    return velocity * (-turn_drag * turn_intensity * speed)


def calculate_lift_scale(
    speed: FloatScalar,
    pitch_input: FloatScalar,
    control_scale: FloatScalar,
    takeoff_speed: FloatScalar,
    grounded: BoolScalar,
) -> FloatScalar:
    """
    Fraction of full lift produced this tick.

    Parameters
    ----------
    speed : FloatScalar
        Airspeed [m/s].
    pitch_input : FloatScalar
        Raw pitch stick [-1, 1].
    control_scale : FloatScalar
        Speed-based control authority [0, 1].
    takeoff_speed : FloatScalar
        Speed below which no lift is produced [m/s].
    grounded : BoolScalar
        Whether the aircraft rests on the floor.

    Returns
    -------
    lift_scale : FloatScalar
        0 below take-off speed. Above it, on the ground only nose-up stick
        unsticks the aircraft, while airborne lift is always available.
    """
    rotate_scale = jnp.maximum(0.0, pitch_input) * control_scale
    airborne_scale = jnp.where(grounded, rotate_scale, control_scale)
    return jnp.where(speed >= takeoff_speed, airborne_scale, 0.0)


def calculate_lift(
    up: Vector3,
    speed: FloatScalar,
    lift_coeff: FloatScalar,
    lift_scale: FloatScalar,
) -> Vector3:
    """
    Calculate lift along the aircraft roof direction.

    Parameters
    ----------
    up : Vector3
        Unit world direction of the aircraft roof.
    speed : FloatScalar
        Airspeed [m/s].
    lift_coeff : FloatScalar
        Lift coefficient [1/m].
    lift_scale : FloatScalar
        Fraction of full lift [0, 1].

    Returns
    -------
    lift : Vector3
        Lift acceleration [m/s^2].
    """
    return up * (lift_coeff * speed * speed * lift_scale)


def calculate_gravity(gravity: FloatScalar) -> Vector3:
    """Constant downward gravitational acceleration [m/s^2]."""
    return jnp.array([0.0, -gravity, 0.0], dtype=FLOAT_DTYPE)


def calculate_ground_support(
    altitude: FloatScalar,
    min_altitude: FloatScalar,
    support_height: FloatScalar,
    gravity: FloatScalar,
) -> Vector3:
    """
    Calculate the normal force of the ground or deck.

    Parameters
    ----------
    altitude : FloatScalar
        Aircraft height [m].
    min_altitude : FloatScalar
        Floor height [m].
    support_height : FloatScalar
        Height above the floor within which the ground pushes back [m].
    gravity : FloatScalar
        Gravitational acceleration [m/s^2].

    Returns
    -------
    support : Vector3
        Upward acceleration cancelling gravity near the floor, else zero.
    """
    near_ground = altitude <= min_altitude + support_height
    support = jnp.where(near_ground, gravity, 0.0)
    return jnp.array([0.0, support, 0.0], dtype=FLOAT_DTYPE)


def clamp_speed(velocity: Vector3, max_speed: FloatScalar) -> Vector3:
    """
    Rescale a velocity so its magnitude does not exceed `max_speed`.

    Parameters
    ----------
    velocity : Vector3
        World velocity [m/s].
    max_speed : FloatScalar
        Speed limit [m/s].

    Returns
    -------
    velocity : Vector3
        Velocity with the same direction and magnitude <= max_speed.
    """
    speed = norm_3(velocity)
    scale = jnp.where(speed > max_speed, max_speed / jnp.maximum(speed, max_speed), 1.0)
    return velocity * scale
