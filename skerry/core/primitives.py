"""
Primitives module for shared array aliases, numerical constants, and basic functions.
"""

import jax
import jax.numpy as jnp
from jaxtyping import Array, Bool, Float, Int, Scalar

# Terrain hashing amplifies rounding error by ~4e4, so run in double precision
jax.config.update("jax_enable_x64", True)

# Project precision settings
FLOAT_DTYPE = jnp.float64
INT_DTYPE = jnp.int64
EPS = 1e-9

# Project type aliases
Scalar = Scalar
BoolScalar = Bool[Array, ""]
IntScalar = Int[Array, ""]
FloatScalar = Float[Array, ""]
Vector = Float[Array, "N"]
Vector3 = Float[Array, "3"]
Quaternion = Float[Array, "4"]
Matrix = Float[Array, "N M"]
Field = Float[Array, "..."]
Array = Array


def norm_3(v: Vector3) -> FloatScalar:
    """
    Compute the Euclidean norm of a 3D vector.

    Parameters
    ----------
    v : Vector3
        3D vector [x, y, z].

    Returns
    -------
    norm : FloatScalar
        L2 norm (magnitude) of the vector.
    """
    return jnp.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2)


def clamp(value: Field, low: Field, high: Field) -> Field:
    """Clamp `value` into [low, high] (elementwise)."""
    return jnp.minimum(high, jnp.maximum(low, value))


def smoothstep(t: Field) -> Field:
    """
    Cubic Hermite ease t * t * (3 - 2t).

    Parameters
    ----------
    t : Field
        Blend parameter, expected in [0, 1].

    Returns
    -------
    Field
        Eased value with zero slope at both ends.
    """
    return t * t * (3.0 - 2.0 * t)


def lerp(a: Field, b: Field, t: Field) -> Field:
    """Linear interpolation from `a` (t = 0) to `b` (t = 1)."""
    return a + (b - a) * t


def safe_divide(numerator: Field, denominator: Field) -> Field:
    """
    Divide, replacing near-zero denominators by EPS with the same sign.

    Parameters
    ----------
    numerator : Field
        Dividend.
    denominator : Field
        Divisor, may be zero.

    Returns
    -------
    Field
        Finite quotient for any finite inputs.
    """
    sign = jnp.where(denominator < 0.0, -1.0, 1.0)
    guarded = jnp.where(jnp.abs(denominator) > EPS, denominator, sign * EPS)
    return numerator / guarded
