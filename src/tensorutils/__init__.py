"""
tensorutils: a generic multi-dimensional array container.

Tensors hold elements of one numeric type in contiguous row-major storage,
with either a dynamic rank or a rank fixed at construction. The package
provides element access with partial indexing, element-wise arithmetic with
type promotion, sub-tensor assignment, axis permutation, generalized tensor
contraction and text/binary persistence.

    >>> from tensorutils import Tensor
    >>> a = Tensor((2, 3, 5, 7), 1.0)
    >>> b = Tensor((3, 11, 13, 5), 2.0)
    >>> a.dot(b, (1, 2), (0, 3)).shape
    (2, 7, 11, 13)
"""

import logging

from .domain import (
    IndexMapper,
    ITensor,
    RankMismatchError,
    ShapeMismatchError,
    ShapeModel,
    TensorUtilsError,
    UnableToOpenFileError,
)
from .infrastructure._dtypes import DTYPE_EXTENSIONS
from .infrastructure.config import (
    TensorSettings,
    configure,
    default_dtype,
    get_settings,
    set_settings,
    setup_logging,
)
from .infrastructure.contraction import ContractionKernel
from .infrastructure.io import TensorFormat, read, write
from .infrastructure.storage import ElementStorage
from .infrastructure.tensor import Tensor

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    Tensor.__name__,
    ITensor.__name__,
    ShapeModel.__name__,
    IndexMapper.__name__,
    ElementStorage.__name__,
    ContractionKernel.__name__,
    TensorFormat.__name__,
    TensorSettings.__name__,
    TensorUtilsError.__name__,
    ShapeMismatchError.__name__,
    RankMismatchError.__name__,
    UnableToOpenFileError.__name__,
    "DTYPE_EXTENSIONS",
    "read",
    "write",
    get_settings.__name__,
    set_settings.__name__,
    configure.__name__,
    default_dtype.__name__,
    setup_logging.__name__,
]
