# src/tinytensor/__init__.py
__version__ = "0.1.0"

from .core.shape import Shape
from .core.entry import Entry, EntryKind
from .core.view import View
from .core.reshape import ReshapeSpec, infer_shape
from .core.tensor import Tensor
from .core.convert import into_tensor, into_vector, into_matrix
from .core.random import (
    from_distribution,
    from_uniform,
    from_normal,
    from_standard_normal,
)
