"""Tests for primitives module."""

import jax.numpy as jnp

from skerry.core.primitives import (
    EPS,
    FLOAT_DTYPE,
    clamp,
    lerp,
    norm_3,
    safe_divide,
    smoothstep,
)


def test_norm_3(jit_mode: str) -> None:
    """Test 3D vector norm."""
    # Standard case 1 - pythagorean triple
    v1 = jnp.array([3.0, 4.0, 0.0], dtype=FLOAT_DTYPE)
    assert jnp.isclose(norm_3(v1), 5.0, atol=EPS)

    # Standard case 2 - negative components
    v2 = jnp.array([-2.0, -3.0, -6.0], dtype=FLOAT_DTYPE)
    assert jnp.isclose(norm_3(v2), 7.0, atol=EPS)

    # Edge case 1 - zero vector
    v3 = jnp.zeros(3, dtype=FLOAT_DTYPE)
    assert jnp.isclose(norm_3(v3), 0.0, atol=EPS)


def test_clamp(jit_mode: str) -> None:
    """Test elementwise clamping."""
    values = jnp.array([-2.0, 0.25, 3.0], dtype=FLOAT_DTYPE)
    result = clamp(values, 0.0, 1.0)
    expected = jnp.array([0.0, 0.25, 1.0], dtype=FLOAT_DTYPE)
    assert jnp.allclose(result, expected, atol=EPS)


def test_smoothstep(jit_mode: str) -> None:
    """Test cubic Hermite easing."""
    # Standard case 1 - end points and midpoint
    t = jnp.array([0.0, 0.5, 1.0], dtype=FLOAT_DTYPE)
    result = smoothstep(t)
    expected = jnp.array([0.0, 0.5, 1.0], dtype=FLOAT_DTYPE)
    assert jnp.allclose(result, expected, atol=EPS)

    # Standard case 2 - quarter point
    assert jnp.isclose(smoothstep(jnp.array(0.25, dtype=FLOAT_DTYPE)), 0.15625, atol=EPS)


def test_lerp(jit_mode: str) -> None:
    """Test linear interpolation."""
    a = jnp.array([0.0, 10.0], dtype=FLOAT_DTYPE)
    b = jnp.array([1.0, -10.0], dtype=FLOAT_DTYPE)
    assert jnp.allclose(lerp(a, b, 0.0), a, atol=EPS)
    assert jnp.allclose(lerp(a, b, 1.0), b, atol=EPS)
    assert jnp.allclose(lerp(a, b, 0.5), jnp.array([0.5, 0.0]), atol=EPS)


def test_safe_divide(jit_mode: str) -> None:
    """Test guarded division."""
    # Standard case 1 - ordinary division
    result_1 = safe_divide(jnp.array(6.0, dtype=FLOAT_DTYPE), jnp.array(3.0, dtype=FLOAT_DTYPE))
    assert jnp.isclose(result_1, 2.0, atol=EPS)

    # Edge case 1 - zero denominator stays finite
    result_2 = safe_divide(jnp.array(1.0, dtype=FLOAT_DTYPE), jnp.array(0.0, dtype=FLOAT_DTYPE))
    assert jnp.isfinite(result_2)
    assert result_2 > 0.0

    # Edge case 2 - tiny negative denominator keeps its sign
    result_3 = safe_divide(
        jnp.array(1.0, dtype=FLOAT_DTYPE), jnp.array(-1e-12, dtype=FLOAT_DTYPE)
    )
    assert jnp.isfinite(result_3)
    assert result_3 < 0.0
