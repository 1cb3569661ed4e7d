import logging
import math

import numpy as np

from .shape import Shape
from .tensor import Tensor

__all__ = [
    "from_distribution",
    "from_uniform",
    "from_normal",
    "from_standard_normal",
]

logger = logging.getLogger(__name__)


def _as_shape(shape):
    return shape if isinstance(shape, Shape) else Shape(shape)


def _as_rng(rng):
    """Accept a Generator, a seed, or None for fresh OS entropy."""
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def from_distribution(shape, sampler):
    """Fill a tensor by calling `sampler()` once per element, in row-major order.

    EXAMPLE:
    >>> rng = np.random.default_rng(42)
    >>> t = from_distribution([2, 3], lambda: rng.random() < 0.5)
    >>> t.shape()
    (2, 3)
    """
    shape = _as_shape(shape)
    return Tensor([sampler() for _ in range(shape.numel())], shape)


def from_uniform(shape, low, high, rng=None):
    """Create a tensor of samples drawn uniformly from [low, high], both bounds included.

    Raises:
        ValueError: a bound is not finite, or low > high
    """
    if not (math.isfinite(low) and math.isfinite(high)):
        raise ValueError(
            f"Invalid parameters for uniform distribution: low={low}, high={high} must be finite"
        )
    if low > high:
        raise ValueError(
            f"Invalid parameters for uniform distribution: low={low} > high={high}"
        )
    shape = _as_shape(shape)
    logger.debug("Sampling %s from uniform(%s, %s)", shape.dims(), low, high)
    # Widen the half-open interval by one ulp so high itself can be drawn
    samples = _as_rng(rng).uniform(low, np.nextafter(high, np.inf), size=shape.numel())
    return Tensor(np.minimum(samples, high), shape)


def from_normal(shape, mean, std, rng=None):
    """Create a tensor of samples from a normal distribution.

    Raises:
        ValueError: mean or std is not finite, or std is negative
    """
    if not (math.isfinite(mean) and math.isfinite(std)):
        raise ValueError(
            f"Invalid parameters for normal distribution: mean={mean}, std={std} must be finite"
        )
    if std < 0:
        raise ValueError(
            f"Invalid parameters for normal distribution: std={std} is negative"
        )
    shape = _as_shape(shape)
    logger.debug("Sampling %s from normal(%s, %s)", shape.dims(), mean, std)
    return Tensor(_as_rng(rng).normal(mean, std, size=shape.numel()), shape)


def from_standard_normal(shape, rng=None):
    """Create a tensor of samples from a normal distribution with mean 0, std 1."""
    shape = _as_shape(shape)
    return Tensor(_as_rng(rng).standard_normal(size=shape.numel()), shape)
