from enum import Enum

__all__ = ["Entry", "EntryKind"]


class EntryKind(Enum):
    SCALAR = "scalar"
    SLICE = "slice"


class Entry:
    """Result of one indexing step: a scalar element or a narrower View.

    Which variant comes back is decided by the rank of what was indexed:
    the last remaining axis yields a scalar, any other axis a slice. Asking
    a scalar entry for its slice (or the other way round) means the caller
    assumed the wrong rank, and raises TypeError.

    EXAMPLE:
    >>> t = Tensor([1, 2, 3, 4], [2, 2])
    >>> t.index(1).slice()
    array([3, 4])
    >>> t.index(0).view().index(1).scalar()
    2
    """

    __slots__ = ("_kind", "_value")

    def __init__(self, kind, value):
        if not isinstance(kind, EntryKind):
            raise TypeError(f"Expected EntryKind, got {type(kind).__name__}")
        self._kind = kind
        self._value = value

    @classmethod
    def of_scalar(cls, value):
        return cls(EntryKind.SCALAR, value)

    @classmethod
    def of_slice(cls, view):
        return cls(EntryKind.SLICE, view)

    @property
    def kind(self):
        return self._kind

    @property
    def is_scalar(self):
        return self._kind is EntryKind.SCALAR

    @property
    def is_slice(self):
        return self._kind is EntryKind.SLICE

    def scalar(self):
        """Return the element held by a scalar entry."""
        if not self.is_scalar:
            raise TypeError("Cannot get element from slice.")
        return self._value

    def slice(self):
        """Return the flat, read-only data of a slice entry."""
        if not self.is_slice:
            raise TypeError("Cannot get slice from element.")
        return self._value.data()

    def view(self):
        """Return the View of a slice entry, for further descent."""
        if not self.is_slice:
            raise TypeError("Cannot get view from element.")
        return self._value

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self.is_scalar:
            return bool(self._value == other._value)
        return self._value == other._value

    __hash__ = None

    def __repr__(self):
        if self.is_scalar:
            return f"Entry.scalar({self._value!r})"
        return f"Entry.slice({self._value!r})"
