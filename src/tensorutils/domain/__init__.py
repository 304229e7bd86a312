from ._errors import (
    TensorUtilsError,
    ShapeMismatchError,
    RankMismatchError,
    UnableToOpenFileError,
)
from ._shape import ShapeModel
from ._index_mapper import IndexMapper
from ._tensor import ITensor

__all__ = [
    TensorUtilsError.__name__,
    ShapeMismatchError.__name__,
    RankMismatchError.__name__,
    UnableToOpenFileError.__name__,
    ShapeModel.__name__,
    IndexMapper.__name__,
    ITensor.__name__,
]
