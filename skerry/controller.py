"""
Host-facing flight controller holding aircraft state between frames.
"""

import logging
from collections.abc import Mapping
from dataclasses import replace

import jax
import jax.numpy as jnp
import numpy as np

from .core.config import SimulationConfig, validate_aircraft_config
from .core.primitives import FLOAT_DTYPE
from .core.simulation import (
    raise_to_deck,
    reset_aircraft,
    set_heading,
    spawn_aircraft,
    step_aircraft,
)
from .core.spatial import is_grounded
from .core.state import Aircraft, ControlInput

logger = logging.getLogger(__name__)


# JIT compile functions used by the controller
step_aircraft = jax.jit(step_aircraft)
reset_aircraft = jax.jit(reset_aircraft)
set_heading = jax.jit(set_heading)
raise_to_deck = jax.jit(raise_to_deck)


class FlightController:
    """
    Stateful wrapper stepping one aircraft once per rendered frame.

    Parameters
    ----------
    start_position : sequence of float
        Spawn position [x, y, z] [m].
    config : SimulationConfig
        Aircraft and physics configuration.
    heading : float
        Spawn heading, radians to the right of +Z.

    Raises
    ------
    ValueError
        If the aircraft configuration is invalid.
    """

    def __init__(
        self,
        start_position,
        config: SimulationConfig = SimulationConfig(),
        heading: float = 0.0,
    ) -> None:
        validate_aircraft_config(config.aircraft)
        self.config = config
        self.aircraft: Aircraft = spawn_aircraft(
            jnp.asarray(start_position, dtype=FLOAT_DTYPE), config.aircraft, heading
        )
        logger.info(
            "Spawned aircraft at %s heading %.3f rad",
            np.round(np.asarray(self.aircraft.position), 2).tolist(),
            heading,
        )

    @property
    def speed(self) -> float:
        return float(jnp.linalg.norm(self.aircraft.velocity))

    @property
    def throttle(self) -> float:
        return float(self.aircraft.throttle)

    @property
    def position(self) -> np.ndarray:
        return np.asarray(self.aircraft.position)

    @property
    def velocity(self) -> np.ndarray:
        return np.asarray(self.aircraft.velocity)

    @property
    def orientation(self) -> np.ndarray:
        """Unit quaternion [w, x, y, z] for the aircraft visual."""
        return np.asarray(self.aircraft.orientation)

    @property
    def angular_velocity(self) -> np.ndarray:
        """Body rates [pitch, yaw, roll] [rad/s]."""
        return np.asarray(self.aircraft.angular_velocity)

    @property
    def is_grounded(self) -> bool:
        return bool(
            is_grounded(
                self.aircraft.position,
                self.aircraft.min_altitude,
                self.config.physics.ground_tolerance,
            )
        )

    @property
    def min_altitude(self) -> float:
        return float(self.aircraft.min_altitude)

    @min_altitude.setter
    def min_altitude(self, value: float) -> None:
        self.aircraft = replace(
            self.aircraft, min_altitude=jnp.asarray(value, dtype=FLOAT_DTYPE)
        )

    def reset(self) -> None:
        """Return to the spawn pose at rest, keeping the current floor."""
        self.aircraft = reset_aircraft(self.aircraft)
        logger.debug("Aircraft reset to spawn")

    def update(
        self,
        dt: float,
        controls: ControlInput | Mapping[str, float] | None = None,
        brake_engaged: bool = False,
        auto_level_enabled: bool = False,
    ) -> None:
        """
        Advance the aircraft by one frame.

        Parameters
        ----------
        dt : float
            Frame time [s]. Callers keep it within [0, config.max_dt],
            see `skerry.core.simulation.clamp_dt`.
        controls : ControlInput | Mapping[str, float] | None
            Pilot input, either a ControlInput or a mapping with any of the
            keys pitch, roll, yaw, throttle_up and throttle_down. None means
            centred sticks.
        brake_engaged : bool
            Whether the wheel brakes are set.
        auto_level_enabled : bool
            Whether auto-level is switched on.
        """
        if controls is None:
            controls = ControlInput.neutral()
        elif isinstance(controls, Mapping):
            controls = ControlInput.create(**controls)

        self.aircraft = step_aircraft(
            self.aircraft,
            controls,
            jnp.asarray(brake_engaged, dtype=bool),
            jnp.asarray(auto_level_enabled, dtype=bool),
            self.config,
            jnp.asarray(dt, dtype=FLOAT_DTYPE),
        )

    def apply_deck_height(self, deck_height: float, clearance: float = 0.3) -> None:
        """
        Raise the floor to a deck sampled under the aircraft.

        The floor becomes max(min_altitude, deck_height + clearance) and is
        never lowered. If the aircraft is below the deck it is lifted onto it
        and its downward velocity is removed.
        """
        previous = self.min_altitude
        self.aircraft = raise_to_deck(
            self.aircraft,
            jnp.asarray(deck_height, dtype=FLOAT_DTYPE),
            jnp.asarray(clearance, dtype=FLOAT_DTYPE),
        )
        if self.min_altitude > previous:
            logger.debug("Floor raised from %.2f to %.2f", previous, self.min_altitude)

    def set_heading(self, yaw: float) -> None:
        """Level the aircraft on a heading, used as the spawn orientation on reset."""
        self.aircraft = set_heading(self.aircraft, jnp.asarray(yaw, dtype=FLOAT_DTYPE))
