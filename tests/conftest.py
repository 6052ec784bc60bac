"""Test configuration for skerry tests."""

import os

import jax
import pytest


def pytest_generate_tests(metafunc):
    """Run each test with JIT enabled and disabled."""
    if "jit_mode" in metafunc.fixturenames:
        metafunc.parametrize("jit_mode", ["no_jit", "jit"])


@pytest.fixture
def jit_mode(request):
    """Set JAX JIT compilation mode."""
    if request.param == "no_jit":
        os.environ["JAX_DISABLE_JIT"] = "1"
        jax.config.update("jax_disable_jit", True)
    else:
        os.environ["JAX_DISABLE_JIT"] = "0"
        jax.config.update("jax_disable_jit", False)
    yield request.param
    jax.config.update("jax_disable_jit", False)
