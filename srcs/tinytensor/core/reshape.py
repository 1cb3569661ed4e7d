import logging
import operator
from functools import reduce

from .config import WILDCARD
from .shape import Shape, as_extent

__all__ = ["ReshapeSpec", "infer_shape"]

logger = logging.getLogger(__name__)


class ReshapeSpec:
    """Target shape for a reshape, with at most one wildcard axis.

    The wildcard (zero) axis takes whatever extent makes the element count
    match the tensor being reshaped.

    EXAMPLE:
    >>> ReshapeSpec([2, 0]).resolve(6)
    Shape([2, 3])
    """

    def __init__(self, dims):
        if isinstance(dims, Shape):
            dims = dims.dims()
        dims = [as_extent(d) for d in dims]
        if not dims:
            raise ValueError("Reshape target must have at least one axis")
        if any(d < 0 for d in dims):
            raise ValueError(f"Reshape extents must be non-negative, got {dims}")
        if dims.count(WILDCARD) > 1:
            raise ValueError(
                f"Shape specification should have at most one zero dimension, got {dims}"
            )
        self.dims = dims

    @property
    def wildcard_axis(self):
        """Position of the wildcard axis, or None if every extent is given."""
        if WILDCARD in self.dims:
            return self.dims.index(WILDCARD)
        return None

    def known_product(self):
        """Product of every extent except the wildcard."""
        return reduce(operator.mul, (d for d in self.dims if d != WILDCARD), 1)

    def resolve(self, numel):
        """Fill in the wildcard for a buffer of `numel` elements.

        Raises:
            ValueError: the wildcard extent is not a whole number, or the
                resolved shape does not hold exactly `numel` elements
        """
        dims = list(self.dims)
        axis = self.wildcard_axis
        if axis is not None:
            known = self.known_product()
            if numel % known != 0:
                raise ValueError(
                    f"Cannot infer dimension {axis} of {self.dims}: "
                    f"{numel} elements are not divisible by {known}"
                )
            dims[axis] = numel // known
            logger.debug("Inferred axis %d of %s as %d", axis, self.dims, dims[axis])

        shape = Shape(dims)
        if shape.numel() != numel:
            raise ValueError(
                f"Total elements must match: {numel} ≠ {shape.numel()} for shape {shape.dims()}"
            )
        return shape

    def __repr__(self):
        return f"ReshapeSpec({self.dims})"


def infer_shape(spec, numel):
    """Resolve a reshape target against an element count.

    EXAMPLE:
    >>> infer_shape([2, 0, 2], 12)
    Shape([2, 3, 2])
    """
    if not isinstance(spec, ReshapeSpec):
        spec = ReshapeSpec(spec)
    return spec.resolve(numel)
