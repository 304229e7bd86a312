"""
Concrete Tensor implementation (NumPy backend).

This module provides the concrete `Tensor`, which satisfies the domain-level
`ITensor` protocol by composing:

- a `ShapeModel` (dimension sizes, rank, size, strides),
- an `ElementStorage` (the flat, exclusively owned element buffer), and
- an optional fixed rank that shape-changing operations must respect.

Operations are grouped into mixins (arithmetic, memory, assignment, shape,
transpose, contraction) that are combined here. Mixins never import `Tensor`
directly; they construct results through ``type(self)`` so that subclasses
produce instances of their own type.

Design notes
------------
- Element access uses the partial-indexing rule: missing trailing indices
  default to 0. ``t.at(1, 2)`` on a rank-4 tensor reads ``t.at(1, 2, 0, 0)``,
  which is the corner element of that sub-tensor, not the sub-tensor itself.
- All operations validate before mutating; a failing call leaves the tensor
  unchanged.
- Derived tensors always own fresh storage.
"""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np

from ...domain._errors import RankMismatchError
from ...domain._index_mapper import IndexMapper
from ...domain._shape import ShapeModel
from ...domain._tensor import ITensor
from .._dtypes import resolve_dtype
from ..config._settings import get_settings
from ..storage._element_storage import ElementStorage
from .mixins.arithmetic import TensorMixinArithmetic
from .mixins.contraction import TensorMixinContraction
from .mixins.memory import TensorMixinAssign, TensorMixinMemory
from .mixins.shape import TensorMixinShape, TensorMixinTranspose

logger = logging.getLogger(__name__)

Number = Union[int, float]


class Tensor(
    TensorMixinArithmetic,
    TensorMixinMemory,
    TensorMixinAssign,
    TensorMixinShape,
    TensorMixinTranspose,
    TensorMixinContraction,
    ITensor,
):
    """
    Multi-dimensional array with row-major contiguous storage.

    Parameters
    ----------
    dims : Sequence[int], optional
        Dimension sizes. Defaults to ``()`` (a scalar) for dynamic-rank
        tensors and to ``(0,) * fixed_rank`` (an empty tensor) when a fixed
        rank is given.
    fill : Number, optional
        Initial value of every element. Defaults to 0.
    dtype : Any, optional
        Element type. Defaults to the configured default dtype
        (`TensorSettings.default_dtype`).
    fixed_rank : int, optional
        If given, the tensor's rank is locked: any operation that would
        change it raises `RankMismatchError`.

    Raises
    ------
    RankMismatchError
        If `fixed_rank` is given and ``len(dims) != fixed_rank``.
    TypeError
        If `dtype` is not a supported element type or a dimension is not an int.
    ValueError
        If a dimension is negative or `fixed_rank` is negative.

    Examples
    --------
    >>> a = Tensor((2, 3, 5, 7), 1.0)
    >>> a.at(1, 2) == a.at(1, 2, 0, 0)
    True
    """

    def __init__(
        self,
        dims: Optional[Sequence[int]] = None,
        fill: Number = 0,
        *,
        dtype: Any = None,
        fixed_rank: Optional[int] = None,
    ) -> None:
        if fixed_rank is not None:
            if isinstance(fixed_rank, bool) or not isinstance(fixed_rank, Integral):
                raise TypeError(f"fixed_rank must be an int or None, got {fixed_rank!r}")
            if fixed_rank < 0:
                raise ValueError(f"fixed_rank must be non-negative, got {fixed_rank}")
            fixed_rank = int(fixed_rank)

        if dims is None:
            dims = (0,) * fixed_rank if fixed_rank is not None else ()

        shape = ShapeModel(dims)
        if fixed_rank is not None and shape.rank != fixed_rank:
            raise RankMismatchError("Tensor", fixed_rank, shape.rank)

        dt = resolve_dtype(get_settings().default_dtype if dtype is None else dtype)

        self._shape: ShapeModel = shape
        self._storage: ElementStorage = ElementStorage(shape.size, dt, fill)
        self._fixed_rank: Optional[int] = fixed_rank

    # ------------------------------------------------------------------
    # Internal construction hooks
    # ------------------------------------------------------------------
    @classmethod
    def _from_parts(
        cls,
        shape: ShapeModel,
        storage: ElementStorage,
        *,
        fixed_rank: Optional[int] = None,
    ) -> "Tensor":
        """
        Build a tensor around an existing shape and storage (no copy).

        The caller hands over ownership of `storage`.
        """
        if len(storage) != shape.size:
            raise ValueError(
                f"storage length {len(storage)} does not match shape size {shape.size}"
            )
        if fixed_rank is not None and shape.rank != fixed_rank:
            raise RankMismatchError(cls.__name__, fixed_rank, shape.rank)

        obj = cls.__new__(cls)  # bypass __init__
        obj._shape = shape
        obj._storage = storage
        obj._fixed_rank = fixed_rank
        return obj

    @classmethod
    def _from_array(
        cls, arr: np.ndarray, *, fixed_rank: Optional[int] = None
    ) -> "Tensor":
        """Build a tensor owning a copy of `arr` (shape and dtype taken from it)."""
        storage = ElementStorage.from_values(arr, arr.dtype)
        return cls._from_parts(ShapeModel(arr.shape), storage, fixed_rank=fixed_rank)

    def _mapper(self) -> IndexMapper:
        """Return an `IndexMapper` for the current shape."""
        return IndexMapper(self._shape)

    def _check_rank(self, op: str, new_rank: int) -> None:
        """
        Raise `RankMismatchError` if `op` would move a fixed-rank tensor to
        `new_rank`.
        """
        if self._fixed_rank is not None and new_rank != self._fixed_rank:
            raise RankMismatchError(op, self._fixed_rank, new_rank)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the tensor shape.

        Returns
        -------
        tuple[int, ...]
            The dimension sizes; ``()`` for a scalar.
        """
        return self._shape.dims

    @property
    def dims(self) -> tuple[int, ...]:
        """Return the dimension sizes (same as `shape`)."""
        return self._shape.dims

    @property
    def shape_model(self) -> ShapeModel:
        """Return the immutable `ShapeModel` describing this tensor."""
        return self._shape

    @property
    def rank(self) -> int:
        """Return the number of axes."""
        return self._shape.rank

    @property
    def size(self) -> int:
        """Return the total number of elements."""
        return self._shape.size

    @property
    def strides(self) -> tuple[int, ...]:
        """Return row-major strides in elements."""
        return self._shape.strides

    @property
    def dtype(self) -> np.dtype:
        """Return the element dtype."""
        return self._storage.dtype

    @property
    def fixed_rank(self) -> Optional[int]:
        """Return the locked rank, or None for a dynamic-rank tensor."""
        return self._fixed_rank

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def at(self, *indices: int) -> Any:
        """
        Read one element by (possibly partial) multi-index.

        Parameters
        ----------
        *indices : int
            One index per leading axis. Missing trailing indices default to 0.

        Returns
        -------
        numpy scalar
            The element, typed as `self.dtype`.

        Raises
        ------
        RankMismatchError
            If more indices than axes are given.
        IndexError
            If an index is negative or not smaller than its dimension.
        ShapeMismatchError
            If the tensor is rank-0 and any index is given.
        """
        return self._storage[self._mapper().flat_offset(indices, op="at")]

    def __call__(self, *indices: int) -> Any:
        return self.at(*indices)

    def set_at(self, indices: Sequence[int], value: Number) -> None:
        """
        Write one element by (possibly partial) multi-index.

        The value is converted to `self.dtype`. Index rules are those of `at`.
        """
        offset = self._mapper().flat_offset(tuple(indices), op="set_at")
        self._storage[offset] = value

    def iter_flat(self) -> Iterator[Any]:
        """Yield every element in row-major order."""
        return iter(self._storage)

    def __array__(self, dtype: Any = None, copy: Any = None) -> np.ndarray:
        arr = self.to_numpy()
        return arr if dtype is None else arr.astype(dtype)

    def __repr__(self) -> str:
        """
        Return a human-readable description of the tensor.

        Returns
        -------
        str
            Shape, dtype and (when set) the fixed rank.
        """
        if self._fixed_rank is None:
            return f"Tensor(shape={self.shape}, dtype={self.dtype})"
        return (
            f"Tensor(shape={self.shape}, dtype={self.dtype}, "
            f"fixed_rank={self._fixed_rank})"
        )

    def __str__(self) -> str:
        return str(self.to_numpy())
