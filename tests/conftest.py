import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def random_ip(rng):
    """Addresses with a first octet in [1, 171], so never inside 172.x or 192.x."""

    def make():
        a = rng.integers(1, 172)
        b, c = rng.integers(0, 255, size=2)
        d = rng.integers(1, 255)
        return f'{a}.{b}.{c}.{d}'

    return make
