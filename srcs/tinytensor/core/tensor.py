import logging
import numbers

import numpy as np

from .config import DEFAULT_DTYPE
from .reshape import infer_shape
from .shape import Shape
from .view import View

logger = logging.getLogger(__name__)

# Integer, unsigned and boolean dtypes divide exactly and must not see a zero divisor
EXACT_KINDS = "iub"


def truncated_divide(dividend, divisor):
    """Integer quotient rounded toward zero, so -7 / 2 gives -3."""
    quotient = np.floor_divide(dividend, divisor)
    inexact = np.remainder(dividend, divisor) != 0
    opposite = np.less(dividend, 0) != np.less(divisor, 0)
    return quotient + (inexact & opposite)


class Tensor:
    """Flat, typed, shape-tagged buffer: vectors and matrices generalized to any rank.

    A tensor owns exactly one contiguous one-dimensional numpy buffer holding
    its elements in row-major order (the last axis varies fastest), plus the
    Shape describing how that buffer splits into axes:
        - data: the flat buffer, always shape.numel() elements long
        - shape: the per-axis extents
        - dtype: element type of the buffer

    Nested structure is read through `view()`/`index()`, which hand out
    zero-copy Views. Reshape and the in-place arithmetic operators mutate the
    tensor; the other arithmetic operators build a new one.
    """

    # Keep numpy from treating a Tensor as an array-like operand
    __array_ufunc__ = None

    def __init__(self, data, shape, dtype=None):
        """Create a new tensor from flat data and a shape.

        `data` may also be another Tensor or a View, whose elements are
        copied in row-major order.

        EXAMPLE:
        >>> t = Tensor([1, 2, 3, 4], [2, 2])
        >>> t.shape()
        (2, 2)
        >>> t.numel()
        4
        """
        shape = shape if isinstance(shape, Shape) else Shape(shape)
        if isinstance(data, Tensor):
            data = data._data.copy()
        elif isinstance(data, View):
            data = data.data()
        buffer = np.asarray(data, dtype=dtype)
        if buffer.dtype == object and dtype is None:
            raise TypeError(
                "Tensor data must be numeric, got elements of type "
                f"{type(buffer.flat[0]).__name__ if buffer.size else 'object'}"
            )
        if buffer.ndim != 1:
            raise ValueError(
                f"Tensor data must be flat, got an array of shape {buffer.shape}"
            )
        if len(buffer) != shape.numel():
            raise ValueError(
                f"Data does not match shape size: {len(buffer)} elements "
                f"for shape {shape.dims()} ({shape.numel()} elements)"
            )
        if not (buffer.flags.c_contiguous and buffer.flags.writeable):
            buffer = buffer.copy()
        self._data = buffer
        self._shape = shape

    @classmethod
    def zeros(cls, shape, dtype=None):
        """Create a tensor of the given shape filled with zeros.

        EXAMPLE:
        >>> Tensor.zeros([2, 2]).data()
        array([0., 0., 0., 0.], dtype=float32)
        """
        shape = shape if isinstance(shape, Shape) else Shape(shape)
        dtype = DEFAULT_DTYPE if dtype is None else dtype
        return cls(np.zeros(shape.numel(), dtype=dtype), shape)

    @classmethod
    def ones(cls, shape, dtype=None):
        """Create a tensor of the given shape filled with ones."""
        shape = shape if isinstance(shape, Shape) else Shape(shape)
        dtype = DEFAULT_DTYPE if dtype is None else dtype
        return cls(np.ones(shape.numel(), dtype=dtype), shape)

    @classmethod
    def from_scalar(cls, value, shape, dtype=None):
        """Create a tensor with every element set to `value`.

        EXAMPLE:
        >>> Tensor.from_scalar(7, [2, 3]).data()
        array([7, 7, 7, 7, 7, 7])
        """
        shape = shape if isinstance(shape, Shape) else Shape(shape)
        return cls(np.full(shape.numel(), value, dtype=dtype), shape)

    def data(self):
        """Return a read-only view of the flat buffer in row-major order."""
        data = self._data.view()
        data.flags.writeable = False
        return data

    def shape(self):
        """Return the per-axis extents as a tuple."""
        return self._shape.dims()

    def numel(self):
        """Return the total number of elements."""
        return self._shape.numel()

    @property
    def dtype(self):
        return self._data.dtype

    def numpy(self):
        """Return a copy of the elements as an array laid out under the shape."""
        return self._data.reshape(self._shape.dims()).copy()

    def memory_footprint(self):
        """Calculate exact memory usage of the buffer in bytes.

        Returns:
            int: Memory usage in bytes (e.g., 1000x1000 float32 = 4MB)
        """
        return self._data.nbytes

    def view(self):
        """Return a View spanning the whole buffer and the full shape."""
        return View(self._data, self._shape)

    def index(self, position):
        """Index the first axis: a scalar entry for rank 1, else a slice entry.

        EXAMPLE:
        >>> t = Tensor([1, 2, 3, 4], [2, 2])
        >>> t.index(1).slice()
        array([3, 4])
        >>> t.index(0).view().index(1).scalar()
        2
        """
        return self.view().index(position)

    def __getitem__(self, positions):
        """Descend one axis per position, e.g. t[1, 0]."""
        return self.view()[positions]

    def __len__(self):
        return self._shape[0]

    def __iter__(self):
        return iter(self.view())

    def reshape(self, *shape):
        """Reinterpret the buffer under a new shape, in place.

        One axis may be given as 0, in which case its extent is inferred
        from the element count. The buffer is neither copied nor reordered.
        Returns the tensor itself.

        EXAMPLE:
        >>> t = Tensor([1, 2, 3, 4, 5, 6], [6])
        >>> t.reshape(2, 3).shape()
        (2, 3)
        >>> t.reshape([0, 2]).shape()  # Infers 0 as 3
        (3, 2)
        """
        if len(shape) == 1 and isinstance(shape[0], (tuple, list, Shape)):
            new_shape = shape[0]
        else:
            new_shape = shape

        resolved = infer_shape(new_shape, len(self._data))
        logger.debug("Reshaping tensor %s -> %s", self.shape(), resolved.dims())
        self._shape = resolved
        return self

    def cast(self, dtype, casting="safe"):
        """Convert every element to `dtype`, returning a new tensor of the same shape.

        Casts that could lose information are refused with a TypeError unless
        a looser numpy `casting` rule ("same_kind", "unsafe") is passed.

        EXAMPLE:
        >>> Tensor([1, 2, 3, 4], [2, 2]).cast(np.float64).data()
        array([1., 2., 3., 4.])
        """
        return Tensor(self._data.astype(dtype, casting=casting), self._shape)

    # Elementwise arithmetic

    def _operand(self, other, verb):
        """Return the buffer or scalar to combine with, or None if unsupported."""
        if isinstance(other, Tensor):
            if self._shape != other._shape:
                raise ValueError(
                    f"Tensors must have the same shape to be {verb}: "
                    f"{self.shape()} ≠ {other.shape()}"
                )
            return other._data
        if isinstance(other, (numbers.Number, np.generic)):
            return other
        return None

    @staticmethod
    def _check_divisor(dividend, divisor):
        dividend_kind = np.asarray(dividend).dtype.kind
        divisor = np.asarray(divisor)
        if (
            dividend_kind in EXACT_KINDS
            and divisor.dtype.kind in EXACT_KINDS
            and np.any(divisor == 0)
        ):
            raise ZeroDivisionError("integer division by zero")

    def _divides_exactly(self, operand):
        return (
            self._data.dtype.kind in "iu"
            and np.asarray(operand).dtype.kind in "iu"
        )

    def _apply(self, ufunc, other, verb):
        operand = self._operand(other, verb)
        if operand is None:
            return NotImplemented
        if ufunc in (np.true_divide, np.floor_divide):
            self._check_divisor(self._data, operand)
        return Tensor(ufunc(self._data, operand), self._shape)

    def _apply_reflected(self, ufunc, other):
        if not isinstance(other, (numbers.Number, np.generic)):
            return NotImplemented
        if ufunc in (np.true_divide, np.floor_divide):
            self._check_divisor(other, self._data)
        return Tensor(ufunc(other, self._data), self._shape)

    def _apply_inplace(self, ufunc, other, verb):
        operand = self._operand(other, verb)
        if operand is None:
            return NotImplemented
        if ufunc in (np.true_divide, np.floor_divide):
            self._check_divisor(self._data, operand)
        if ufunc is np.true_divide and self._divides_exactly(operand):
            np.copyto(
                self._data, truncated_divide(self._data, operand), casting="same_kind"
            )
            return self
        ufunc(self._data, operand, out=self._data)
        return self

    def __add__(self, other):
        """Add element-wise with a tensor of the same shape or a scalar.

        EXAMPLE:
        >>> a = Tensor([1, 2, 3, 4], [2, 2])
        >>> b = Tensor([5, 6, 7, 8], [2, 2])
        >>> (a + b).data()
        array([ 6,  8, 10, 12])
        """
        return self._apply(np.add, other, "added")

    def __sub__(self, other):
        """Subtract element-wise.

        EXAMPLE:
        >>> a = Tensor([1, 2, 3, 4], [2, 2])
        >>> (a - 1).data()
        array([0, 1, 2, 3])
        """
        return self._apply(np.subtract, other, "subtracted")

    def __mul__(self, other):
        """Multiply element-wise (NOT matrix multiplication)."""
        return self._apply(np.multiply, other, "multiplied")

    def __truediv__(self, other):
        """Divide element-wise.

        Integer tensors divide into a floating tensor; a zero divisor among
        integer operands raises ZeroDivisionError. Floating division by zero
        gives inf or nan.

        EXAMPLE:
        >>> a = Tensor([1.0, 2.0, 3.0, 4.0], [2, 2])
        >>> (a / 2.0).data()
        array([0.5, 1. , 1.5, 2. ])
        """
        return self._apply(np.true_divide, other, "divided")

    def __floordiv__(self, other):
        """Divide element-wise, rounding toward negative infinity."""
        return self._apply(np.floor_divide, other, "divided")

    def __radd__(self, other):
        return self._apply_reflected(np.add, other)

    def __rsub__(self, other):
        return self._apply_reflected(np.subtract, other)

    def __rmul__(self, other):
        return self._apply_reflected(np.multiply, other)

    def __rtruediv__(self, other):
        return self._apply_reflected(np.true_divide, other)

    def __rfloordiv__(self, other):
        return self._apply_reflected(np.floor_divide, other)

    def __iadd__(self, other):
        return self._apply_inplace(np.add, other, "added")

    def __isub__(self, other):
        return self._apply_inplace(np.subtract, other, "subtracted")

    def __imul__(self, other):
        return self._apply_inplace(np.multiply, other, "multiplied")

    def __itruediv__(self, other):
        """Divide in place.

        Integer tensors divided by integers keep their dtype and round the
        quotient toward zero; use `//=` to round toward negative infinity.

        EXAMPLE:
        >>> t = Tensor([-7, 7], [2])
        >>> t /= 2
        >>> t.data()
        array([-3,  3])
        """
        return self._apply_inplace(np.true_divide, other, "divided")

    def __ifloordiv__(self, other):
        return self._apply_inplace(np.floor_divide, other, "divided")

    def __neg__(self):
        return Tensor(np.negative(self._data), self._shape)

    def __pos__(self):
        return Tensor(self._data.copy(), self._shape)

    def __eq__(self, other):
        """Tensors are equal when both shape and every element match."""
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and bool(
            np.array_equal(self._data, other._data)
        )

    __hash__ = None

    def __repr__(self):
        """String representation of tensor for debugging."""
        return f"Tensor(data={self._data}, shape={self.shape()})"

    def __str__(self):
        """Human-readable string representation."""
        return f"Tensor({self.numpy()})"
