"""Shared fixtures for polyshare tests."""

import random
import pytest
from polyshare.gf61 import GF61, M61
from polyshare.modring import BN3072


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: marks tests as slow (3072-bit sweeps)")


@pytest.fixture
def rng():
    """Deterministic RNG for reproducible tests."""
    return random.Random(42)


@pytest.fixture
def sample_elements(rng):
    """10 random GF61 elements for property testing."""
    return [GF61.random(rng) for _ in range(10)]


@pytest.fixture(params=[GF61, BN3072], ids=['gf61', 'bn3072'])
def group(request):
    """Each shipped backend, for backend-agnostic tests."""
    return request.param


@pytest.fixture
def invalid_element(group):
    """An element of `group` that fails is_valid()."""
    if group is GF61:
        return GF61(M61)
    return group(group.MODULUS)
