from .shape import Shape
from .tensor import Tensor

__all__ = ["into_tensor", "into_vector", "into_matrix"]


def _length(source):
    if isinstance(source, Tensor):
        return source.numel()
    return len(source)


def into_tensor(source, shape):
    """Build a tensor of `shape` from a flat sequence, 1-D array or tensor.

    A tensor source is copied, so the result owns its own buffer.

    EXAMPLE:
    >>> into_tensor([1, 2, 3, 4], [2, 2]).shape()
    (2, 2)
    """
    shape = shape if isinstance(shape, Shape) else Shape(shape)
    length = _length(source)
    if length != shape.numel():
        raise ValueError(
            f"Cannot convert {length} elements into shape {shape.dims()} "
            f"({shape.numel()} elements)"
        )
    return Tensor(source, shape)


def into_vector(source):
    """Build a rank-1 tensor holding every element of `source`."""
    return into_tensor(source, [_length(source)])


def into_matrix(source, rows, cols):
    """Build a rows x cols tensor from `source`.

    EXAMPLE:
    >>> into_matrix(range(6), 2, 3).index(1).slice()
    array([3, 4, 5])
    """
    return into_tensor(source, [rows, cols])
