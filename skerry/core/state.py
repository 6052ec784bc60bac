"""State classes for aircraft and control input data."""

from dataclasses import dataclass

import jax
import jax.numpy as jnp

from .primitives import FLOAT_DTYPE, BoolScalar, FloatScalar, Quaternion, Vector3


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class ControlInput:
    """Pilot input resolved by the host for one tick."""

    pitch: FloatScalar
    """Pitch stick [-1, 1], positive raises the nose."""

    roll: FloatScalar
    """Roll stick [-1, 1], positive lowers the right wing."""

    yaw: FloatScalar
    """Rudder [-1, 1], positive turns the nose right."""

    throttle_up: BoolScalar
    """Whether the throttle-up control is held."""

    throttle_down: BoolScalar
    """Whether the throttle-down control is held."""

    @classmethod
    def neutral(cls) -> "ControlInput":
        """Return centred sticks with no throttle change."""
        return cls.create()

    @classmethod
    def create(
        cls,
        pitch: float = 0.0,
        roll: float = 0.0,
        yaw: float = 0.0,
        throttle_up: bool = False,
        throttle_down: bool = False,
    ) -> "ControlInput":
        """Build an input from plain Python values."""
        return cls(
            pitch=jnp.array(pitch, dtype=FLOAT_DTYPE),
            roll=jnp.array(roll, dtype=FLOAT_DTYPE),
            yaw=jnp.array(yaw, dtype=FLOAT_DTYPE),
            throttle_up=jnp.array(throttle_up, dtype=bool),
            throttle_down=jnp.array(throttle_down, dtype=bool),
        )


@jax.tree_util.register_dataclass
@dataclass(frozen=True)
class Aircraft:
    """Kinematic state of the controlled aircraft."""

    position: Vector3
    """World position [x, y, z], y up [m]."""

    orientation: Quaternion
    """Unit quaternion [w, x, y, z] rotating body axes into the world."""

    velocity: Vector3
    """World-frame linear velocity [m/s]."""

    angular_velocity: Vector3
    """Body-frame angular velocity [pitch, yaw, roll] rates [rad/s]."""

    throttle: FloatScalar
    """Throttle setting [0, 1]."""

    min_altitude: FloatScalar
    """Current floor height, may be raised by the host between ticks [m]."""

    spawn_position: Vector3
    """Position restored on reset [m]."""

    spawn_orientation: Quaternion
    """Orientation restored on reset."""
