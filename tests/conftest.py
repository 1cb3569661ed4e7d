import numpy as np
import pytest

from tinytensor import Tensor


@pytest.fixture
def matrix():
    """2x2 integer tensor used by most indexing and arithmetic tests."""
    return Tensor([1, 2, 3, 4], [2, 2])


@pytest.fixture
def cube():
    """2x3x4 tensor whose elements equal their flat position."""
    return Tensor(np.arange(24), [2, 3, 4])


@pytest.fixture
def rng():
    return np.random.default_rng(42)
