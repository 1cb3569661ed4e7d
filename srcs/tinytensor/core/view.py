import operator

import numpy as np

from .entry import Entry
from .shape import Shape

__all__ = ["View"]


def _readonly(data):
    """Return a non-writeable numpy view over the same memory."""
    view = data.view()
    view.flags.writeable = False
    return view


class View:
    """Borrowed projection of a flat buffer region plus a shape suffix.

    A View never copies element data. It holds a numpy view into the buffer
    of the tensor it came from, which keeps that buffer alive for as long as
    the View exists. The data is exposed read-only.

    EXAMPLE:
    >>> t = Tensor([1, 2, 3, 4, 5, 6], [2, 3])
    >>> v = t.view()
    >>> v.index(1).slice()
    array([4, 5, 6])
    >>> v[1, 2].scalar()
    6
    """

    __slots__ = ("_data", "_shape")

    def __init__(self, data, shape):
        shape = shape if isinstance(shape, Shape) else Shape(shape)
        if not isinstance(data, np.ndarray) or data.ndim != 1:
            raise ValueError("View data must be a one-dimensional numpy array")
        if len(data) != shape.numel():
            raise ValueError(
                f"View data of length {len(data)} does not match shape "
                f"{shape.dims()} ({shape.numel()} elements)"
            )
        self._data = data if not data.flags.writeable else _readonly(data)
        self._shape = shape

    def data(self):
        return self._data

    def shape(self):
        return self._shape.dims()

    def numel(self):
        return self._shape.numel()

    def index(self, position):
        """Descend one axis.

        On a rank-1 view this returns the element at `position` as a scalar
        entry. On a higher rank view it returns the sub-block at `position`
        along the first axis as a slice entry, whose View spans `stride`
        consecutive elements (the product of the remaining extents).

        Raises:
            TypeError: position is not an integer
            IndexError: position is outside [0, extent of the first axis)
        """
        try:
            position = operator.index(position)
        except TypeError:
            raise TypeError(
                f"Index position must be an integer, got {type(position).__name__}"
            ) from None
        extent = self._shape[0]
        if not 0 <= position < extent:
            raise IndexError(
                f"Index {position} out of range for axis of size {extent}"
            )

        if self._shape.size == 1:
            return Entry.of_scalar(self._data[position])

        stride = self._shape.stride()
        start = position * stride
        return Entry.of_slice(
            View(self._data[start : start + stride], self._shape.suffix())
        )

    def __getitem__(self, positions):
        """Descend one axis per position and return the final entry.

        EXAMPLE:
        >>> t = Tensor(list(range(24)), [2, 3, 4])
        >>> t.view()[1, 2, 3].scalar()
        23
        """
        if not isinstance(positions, tuple):
            return self.index(positions)
        if not positions:
            raise IndexError("At least one index position is required")

        entry = self.index(positions[0])
        for position in positions[1:]:
            if entry.is_scalar:
                raise IndexError(
                    f"Too many indices for shape {self.shape()}: got {len(positions)}"
                )
            entry = entry.view().index(position)
        return entry

    def __len__(self):
        return self._shape[0]

    def __iter__(self):
        for position in range(len(self)):
            yield self.index(position)

    def __eq__(self, other):
        if not isinstance(other, View):
            return NotImplemented
        return self._shape == other._shape and np.array_equal(
            self._data, other._data
        )

    __hash__ = None

    def __repr__(self):
        return f"View(data={self._data}, shape={self.shape()})"
