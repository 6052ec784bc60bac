"""Flight dynamics interface between lower-level modules and simulation.py."""

import jax.numpy as jnp

from . import logic, physics, quaternion
from .config import AircraftConfig, PhysicsConfig
from .primitives import BoolScalar, FloatScalar, Vector3
from .state import Aircraft, ControlInput


def calculate_angular_velocity(
    aircraft: Aircraft,
    controls: ControlInput,
    control_scale: FloatScalar,
    auto_level_enabled: BoolScalar,
    aircraft_config: AircraftConfig,
    dt: FloatScalar,
) -> Vector3:
    """
    Calculate the body rates for this tick.

    Parameters
    ----------
    aircraft : Aircraft
        Aircraft state before rotation.
    controls : ControlInput
        Raw pilot input.
    control_scale : FloatScalar
        Speed-based control authority [0, 1].
    auto_level_enabled : BoolScalar
        Whether auto-level is switched on.
    aircraft_config : AircraftConfig
        Aircraft tuning constants.
    dt : FloatScalar
        Time step [s].

    Returns
    -------
    Vector3
        Smoothed [pitch, yaw, roll] body rates [rad/s].
    """
    auto_pitch, auto_roll = logic.calculate_auto_level(
        orientation=aircraft.orientation,
        controls=controls,
        deadzone=aircraft_config.auto_level_deadzone,
        enabled=auto_level_enabled,
    )
    target = logic.calculate_target_rates(
        controls=controls,
        control_scale=control_scale,
        auto_pitch=auto_pitch,
        auto_roll=auto_roll,
        aircraft_config=aircraft_config,
    )
    return logic.smooth_angular_velocity(
        current=aircraft.angular_velocity,
        target=target,
        damping=aircraft_config.angular_damping,
        dt=dt,
    )


def calculate_acceleration(
    aircraft: Aircraft,
    controls: ControlInput,
    speed: FloatScalar,
    control_scale: FloatScalar,
    grounded: BoolScalar,
    aircraft_config: AircraftConfig,
    physics_config: PhysicsConfig,
) -> Vector3:
    """
    Calculate the total world-frame acceleration of the aircraft.

    Parameters
    ----------
    aircraft : Aircraft
        Aircraft state with this tick's orientation and throttle applied.
    controls : ControlInput
        Raw pilot input.
    speed : FloatScalar
        Airspeed at the start of the tick [m/s].
    control_scale : FloatScalar
        Speed-based control authority [0, 1].
    grounded : BoolScalar
        Whether the aircraft started the tick on the floor.
    aircraft_config : AircraftConfig
        Aircraft tuning constants.
    physics_config : PhysicsConfig
        Gravity and ground contact constants.

    Returns
    -------
    Vector3
        Sum of thrust, drag, manoeuvre drag, lift, gravity and ground
        support [m/s^2].
    """
    forward = quaternion.forward(aircraft.orientation)
    up = quaternion.up(aircraft.orientation)

    thrust = physics.calculate_thrust(
        forward=forward,
        throttle=aircraft.throttle,
        max_thrust=aircraft_config.max_thrust,
    )
    drag = physics.calculate_drag(
        velocity=aircraft.velocity,
        speed=speed,
        drag_coeff=aircraft_config.drag_coeff,
    )
    turn_intensity = jnp.abs(controls.pitch) + jnp.abs(controls.roll) + jnp.abs(controls.yaw)
    turn_drag = physics.calculate_turn_drag(
        velocity=aircraft.velocity,
        speed=speed,
        turn_intensity=turn_intensity,
        turn_drag=aircraft_config.turn_drag,
    )
    lift_scale = physics.calculate_lift_scale(
        speed=speed,
        pitch_input=controls.pitch,
        control_scale=control_scale,
        takeoff_speed=aircraft_config.takeoff_speed,
        grounded=grounded,
    )
    lift = physics.calculate_lift(
        up=up,
        speed=speed,
        lift_coeff=aircraft_config.lift_coeff,
        lift_scale=lift_scale,
    )
    gravity = physics.calculate_gravity(physics_config.gravity)
    support = physics.calculate_ground_support(
        altitude=aircraft.position[1],
        min_altitude=aircraft.min_altitude,
        support_height=physics_config.ground_support_height,
        gravity=physics_config.gravity,
    )

    return thrust + lift + drag + turn_drag + gravity + support
