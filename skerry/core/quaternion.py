"""
Quaternion package for 3D orientation and rotation.

Uses scalar-first format [w, x, y, z] with Hamilton product.
World and body frames are Y-up: body forward is local +Z, body up is local +Y
and body right is local +X. All angles in radians.
https://blog.mbedded.ninja/mathematics/geometry/quaternions
"""

import jax
import jax.numpy as jnp

from .primitives import EPS, FLOAT_DTYPE, FloatScalar, Quaternion, Vector3, norm_3

BODY_FORWARD: Vector3 = jnp.array([0.0, 0.0, 1.0], dtype=FLOAT_DTYPE)
BODY_UP: Vector3 = jnp.array([0.0, 1.0, 0.0], dtype=FLOAT_DTYPE)
BODY_RIGHT: Vector3 = jnp.array([1.0, 0.0, 0.0], dtype=FLOAT_DTYPE)

# Body-local rotation axes with positive angle = nose up, nose right, right wing down
PITCH_AXIS: Vector3 = -BODY_RIGHT
YAW_AXIS: Vector3 = BODY_UP
ROLL_AXIS: Vector3 = -BODY_FORWARD


def identity() -> Quaternion:
    """Return the identity rotation [1, 0, 0, 0]."""
    return jnp.array([1.0, 0.0, 0.0, 0.0], dtype=FLOAT_DTYPE)


def normalize(q: Quaternion) -> Quaternion:
    """
    Normalise a quaternion to unit length.

    Parameters
    ----------
    q : (4,) Quaternion
        Input quaternion [w, x, y, z].

    Returns
    -------
    (4,) Quaternion
        Unit quaternion, or identity if input magnitude is near zero.
    """
    magnitude = jnp.sqrt(jnp.sum(q * q))
    return jax.lax.cond(
        magnitude > EPS,
        lambda: q / magnitude,
        identity,
    )


def multiply(q1: Quaternion, q2: Quaternion) -> Quaternion:
    """
    Multiply two quaternions (Hamilton product).

    Parameters
    ----------
    q1 : (4,) Quaternion
        First quaternion in [w, x, y, z] order.
    q2 : (4,) Quaternion
        Second quaternion in [w, x, y, z] order.

    Returns
    -------
    (4,) Quaternion
        The quaternion product q1 * q2.
    """
    w1, x1, y1, z1 = q1
    w2, x2, y2, z2 = q2
    return jnp.array(
        [
            w1 * w2 - x1 * x2 - y1 * y2 - z1 * z2,
            w1 * x2 + x1 * w2 + y1 * z2 - z1 * y2,
            w1 * y2 - x1 * z2 + y1 * w2 + z1 * x2,
            w1 * z2 + x1 * y2 - y1 * x2 + z1 * w2,
        ],
        dtype=FLOAT_DTYPE,
    )


def conjugate(q: Quaternion) -> Quaternion:
    """Return the conjugate [w, -x, -y, -z] of a quaternion."""
    w, x, y, z = q
    return jnp.array([w, -x, -y, -z], dtype=FLOAT_DTYPE)


def rotate_vector(v: Vector3, q: Quaternion) -> Vector3:
    """
    Rotate a 3D vector using a quaternion.

    Parameters
    ----------
    v : (3,) Vector3
        3D vector to rotate.
    q : (4,) Quaternion
        Unit quaternion representing the rotation.

    Returns
    -------
    (3,) Vector3
        Rotated 3D vector.
    """
    # Convert 3D vector to pure quaternion
    v_quat = jnp.array([0.0, *v], dtype=FLOAT_DTYPE)

    w, x, y, z = multiply(multiply(q, v_quat), conjugate(q))
    return jnp.array([x, y, z], dtype=FLOAT_DTYPE)


def from_axis_angle(axis: Vector3, angle: FloatScalar) -> Quaternion:
    """
    Create a quaternion from axis-angle representation.

    Parameters
    ----------
    axis : (3,) Vector3
        3D rotation axis.
    angle : FloatScalar
        Rotation angle in radians.

    Returns
    -------
    (4,) Quaternion
        Quaternion representing the rotation.

    Notes
    -----
    If the axis has near-zero magnitude, it defaults to [1, 0, 0] (x-axis),
    producing a valid quaternion for the given angle.
    """
    magnitude = norm_3(axis)
    x, y, z = jax.lax.cond(
        magnitude > EPS,
        lambda: axis / magnitude,
        lambda: jnp.array([1.0, 0.0, 0.0], dtype=FLOAT_DTYPE),
    )

    s, c = jnp.sin(0.5 * angle), jnp.cos(0.5 * angle)
    return jnp.array([c, x * s, y * s, z * s], dtype=FLOAT_DTYPE)


def from_heading(yaw: FloatScalar) -> Quaternion:
    """Level orientation turned `yaw` radians to the right of +Z."""
    return from_axis_angle(YAW_AXIS, yaw)


def rotate_local(q: Quaternion, axis: Vector3, angle: FloatScalar) -> Quaternion:
    """
    Rotate an orientation about one of its own body axes.

    Parameters
    ----------
    q : (4,) Quaternion
        Current body-to-world orientation.
    axis : (3,) Vector3
        Rotation axis expressed in body coordinates.
    angle : FloatScalar
        Rotation angle in radians.

    Returns
    -------
    (4,) Quaternion
        Renormalised orientation q * r(axis, angle).
    """
    return normalize(multiply(q, from_axis_angle(axis, angle)))


def forward(q: Quaternion) -> Vector3:
    """World direction of the body nose."""
    return rotate_vector(BODY_FORWARD, q)


def up(q: Quaternion) -> Vector3:
    """World direction of the body roof."""
    return rotate_vector(BODY_UP, q)


def right(q: Quaternion) -> Vector3:
    """World direction of the right wing."""
    return rotate_vector(BODY_RIGHT, q)
