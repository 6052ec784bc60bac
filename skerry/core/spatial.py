"""
Spatial module for ground contact, floor and world-bound constraints.

All positions are in the Y-up world frame [m].
"""

import jax.numpy as jnp

from .primitives import BoolScalar, FloatScalar, Vector3, clamp


def is_grounded(
    position: Vector3,
    min_altitude: FloatScalar,
    tolerance: FloatScalar,
) -> BoolScalar:
    """
    Ground contact test.

    Parameters
    ----------
    position : Vector3
        Aircraft world position [m].
    min_altitude : FloatScalar
        Floor height [m].
    tolerance : FloatScalar
        Height above the floor still counted as contact [m].

    Returns
    -------
    grounded : BoolScalar
        True if the aircraft is at or just above the floor.
    """
    return position[1] <= min_altitude + tolerance


def apply_floor(
    position: Vector3,
    velocity: Vector3,
    min_altitude: FloatScalar,
) -> tuple[Vector3, Vector3]:
    """
    Keep the aircraft on or above the floor.

    Parameters
    ----------
    position : Vector3
        Aircraft world position [m].
    velocity : Vector3
        Aircraft world velocity [m/s].
    min_altitude : FloatScalar
        Floor height [m].

    Returns
    -------
    position : Vector3
        Position with y raised to the floor if it sank below.
    velocity : Vector3
        Velocity with downward y removed when the floor was hit.
    """
    below = position[1] < min_altitude
    position = position.at[1].set(jnp.where(below, min_altitude, position[1]))
    sinking = jnp.logical_and(below, velocity[1] < 0.0)
    velocity = velocity.at[1].set(jnp.where(sinking, 0.0, velocity[1]))
    return position, velocity


def apply_brake(
    velocity: Vector3,
    grounded: BoolScalar,
    brake_engaged: BoolScalar,
) -> Vector3:
    """Stop horizontal motion while braked on the ground."""
    holding = jnp.logical_and(grounded, brake_engaged)
    return velocity.at[0].set(jnp.where(holding, 0.0, velocity[0])).at[2].set(
        jnp.where(holding, 0.0, velocity[2])
    )


def apply_world_bounds(
    position: Vector3,
    velocity: Vector3,
    world_limit: FloatScalar,
) -> tuple[Vector3, Vector3]:
    """
    Clamp the horizontal position to the flyable square.

    Parameters
    ----------
    position : Vector3
        Aircraft world position [m].
    velocity : Vector3
        Aircraft world velocity [m/s].
    world_limit : FloatScalar
        Half-width of the flyable square [m].

    Returns
    -------
    position : Vector3
        Position with x and z clamped to [-world_limit, world_limit].
    velocity : Vector3
        Velocity with the component into a crossed wall removed.
    """
    for axis in (0, 2):
        outside = jnp.abs(position[axis]) > world_limit
        position = position.at[axis].set(
            clamp(position[axis], -world_limit, world_limit)
        )
        velocity = velocity.at[axis].set(jnp.where(outside, 0.0, velocity[axis]))
    return position, velocity


def apply_deck_floor(
    position: Vector3,
    velocity: Vector3,
    min_altitude: FloatScalar,
    deck_height: FloatScalar,
    clearance: FloatScalar,
) -> tuple[Vector3, Vector3, FloatScalar]:
    """
    Raise the floor to a deck sampled under the aircraft.

    Parameters
    ----------
    position : Vector3
        Aircraft world position [m].
    velocity : Vector3
        Aircraft world velocity [m/s].
    min_altitude : FloatScalar
        Current floor height [m].
    deck_height : FloatScalar
        Deck surface height below the aircraft [m].
    clearance : FloatScalar
        Gap kept between the deck and the aircraft origin [m].

    Returns
    -------
    position : Vector3
        Position lifted onto the deck if it was below it.
    velocity : Vector3
        Velocity with downward y removed if the aircraft was lifted.
    min_altitude : FloatScalar
        Floor height, never lowered.
    """
    deck_floor = deck_height + clearance
    min_altitude = jnp.maximum(min_altitude, deck_floor)
    below = position[1] < deck_floor
    position = position.at[1].set(jnp.where(below, deck_floor, position[1]))
    velocity = velocity.at[1].set(
        jnp.where(below, jnp.maximum(0.0, velocity[1]), velocity[1])
    )
    return position, velocity, min_altitude
