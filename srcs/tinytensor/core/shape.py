import operator
from functools import reduce
from typing import Iterable, Tuple

__all__ = ["Shape"]


def as_extent(dim):
    """Coerce one axis extent to a plain int, rejecting floats and bools."""
    if isinstance(dim, bool):
        raise TypeError(f"Shape extents must be integers, got {dim!r}")
    try:
        return operator.index(dim)
    except TypeError:
        raise TypeError(
            f"Shape extents must be integers, got {type(dim).__name__}"
        ) from None


class Shape:
    """Validated, immutable list of per-axis extents.

    A shape is an ordered sequence of non-negative integers. Its rank is the
    number of axes and its element count (numel) is the product of the extents.
    At least one extent must be nonzero.

    EXAMPLE:
    >>> s = Shape([2, 3, 4])
    >>> s.size
    3
    >>> s.numel()
    24
    >>> s.dims()
    (2, 3, 4)
    """

    __slots__ = ("_dims",)

    def __init__(self, dims: Iterable[int]):
        if isinstance(dims, Shape):
            dims = dims.dims()
        dims = tuple(as_extent(d) for d in dims)
        if any(d < 0 for d in dims):
            raise ValueError(f"Shape extents must be non-negative, got {dims}")
        if not any(d != 0 for d in dims):
            raise ValueError(f"Shape dimensions cannot all be zero, got {dims}")
        self._dims = dims

    @property
    def size(self) -> int:
        """Rank of the shape (number of axes)."""
        return len(self._dims)

    def numel(self) -> int:
        """Total number of elements addressed by the shape."""
        return reduce(operator.mul, self._dims, 1)

    def dims(self) -> Tuple[int, ...]:
        return self._dims

    def stride(self) -> int:
        """Number of elements spanned by one step along the first axis.

        EXAMPLE:
        >>> Shape([2, 3, 4]).stride()
        12
        """
        return reduce(operator.mul, self._dims[1:], 1)

    def suffix(self) -> "Shape":
        """Shape that remains after descending into the first axis.

        The suffix of a validated shape is not checked again: a tensor of
        shape (3, 0) holds rows of shape (0,).
        """
        if len(self._dims) < 2:
            raise ValueError(f"Shape {self._dims} has no axes below the first")
        suffix = object.__new__(Shape)
        suffix._dims = self._dims[1:]
        return suffix

    def __len__(self):
        return len(self._dims)

    def __iter__(self):
        return iter(self._dims)

    def __getitem__(self, axis):
        return self._dims[axis]

    def __eq__(self, other):
        if isinstance(other, Shape):
            return self._dims == other._dims
        if isinstance(other, (tuple, list)):
            return self._dims == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._dims)

    def __repr__(self):
        return f"Shape({list(self._dims)})"
