"""
Tensor memory / construction mixin.

This module defines `TensorMixinMemory`, a focused mixin that provides
factory constructors (`from_numpy`, `from_flat`) and the memory-related
operations of a concrete `Tensor`: (re)allocation, filling, deep copies,
element type conversion and NumPy interop.

Notes
-----
- The mixin assumes the concrete `Tensor` provides the internal fields
  `_shape`, `_storage`, `_fixed_rank` and the hooks `_from_parts`,
  `_from_array` and `_check_rank`.
- Every operation validates its arguments before touching `_shape` or
  `_storage`, so a failing call leaves the tensor unchanged.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any, Iterable, Optional, Sequence, Type, Union

import numpy as np
from typing_extensions import Self

from .....domain._errors import RankMismatchError, ShapeMismatchError
from .....domain._shape import ShapeModel
from .....domain._tensor import ITensor
from ...._dtypes import resolve_dtype
from ....config._settings import get_settings
from ....storage._element_storage import ElementStorage

logger = logging.getLogger(__name__)

Number = Union[int, float]


class TensorMixinMemory(ABC):
    """
    Mixin that implements tensor construction and memory-management helpers.

    It provides:

    - Factory constructors: `from_numpy`, `from_flat`
    - Allocation: `alloc`
    - Memory utilities: `fill`, `clone`, `copy_from`, `astype`,
      `to_numpy`, `copy_from_numpy`
    """

    # ----------------------------
    # Factories
    # ----------------------------
    @classmethod
    def from_numpy(
        cls: Type[ITensor],
        arr: Any,
        *,
        dtype: Any = None,
        fixed_rank: Optional[int] = None,
    ) -> "ITensor":
        """
        Create a tensor holding a copy of a NumPy array (or array-like).

        Parameters
        ----------
        arr : array-like
            Source values. The tensor takes its shape.
        dtype : Any, optional
            Element type. Defaults to the array's own dtype when it is a
            supported type, otherwise to the configured default dtype.
        fixed_rank : int, optional
            Lock the rank of the new tensor.

        Returns
        -------
        ITensor
            A new tensor owning its own storage.
        """
        a = np.asarray(arr)
        if dtype is None:
            try:
                dt = resolve_dtype(a.dtype)
            except TypeError:
                dt = get_settings().default_dtype
        else:
            dt = resolve_dtype(dtype)
        return cls._from_array(a.astype(dt, copy=True), fixed_rank=fixed_rank)

    @classmethod
    def from_flat(
        cls: Type[ITensor],
        dims: Sequence[int],
        values: Iterable[Any],
        *,
        dtype: Any = None,
        fixed_rank: Optional[int] = None,
    ) -> "ITensor":
        """
        Create a tensor from dimension sizes and a row-major sequence of values.

        Raises
        ------
        ShapeMismatchError
            If the number of values differs from ``prod(dims)``.
        """
        shape = ShapeModel(dims)
        dt = resolve_dtype(get_settings().default_dtype if dtype is None else dtype)
        storage = ElementStorage.from_values(values, dt)
        if len(storage) != shape.size:
            raise ShapeMismatchError(
                "from_flat",
                f"shape {shape.dims} holds {shape.size} elements, got {len(storage)} values",
                expected=shape.size,
                actual=len(storage),
            )
        return cls._from_parts(shape, storage, fixed_rank=fixed_rank)

    # ----------------------------
    # Allocation
    # ----------------------------
    def alloc(self, dims: Sequence[int], fill: Number = 0) -> Self:
        """
        Replace shape and storage, filling every element with `fill`.

        Parameters
        ----------
        dims : Sequence[int]
            New dimension sizes.
        fill : Number, optional
            Value of every element. Defaults to 0.

        Returns
        -------
        Self
            `self`, for chaining.

        Raises
        ------
        RankMismatchError
            If the tensor has a fixed rank and ``len(dims)`` differs from it.
        """
        shape = ShapeModel(dims)
        self._check_rank("alloc", shape.rank)

        storage = ElementStorage(shape.size, self.dtype, fill)
        self._shape = shape
        self._storage = storage
        logger.debug("alloc %s %s (%d elements)", shape.dims, self.dtype, shape.size)
        return self

    def fill(self, value: Number) -> None:
        """Assign `value` to every element (converted to `self.dtype`)."""
        self._storage.fill(value)

    # ----------------------------
    # Copies
    # ----------------------------
    def clone(self) -> "ITensor":
        """
        Return a deep copy of this tensor.

        The copy has the same shape, dtype and fixed rank, and its own storage.
        """
        return type(self)._from_parts(
            self._shape, self._storage.copy(), fixed_rank=self._fixed_rank
        )

    def copy_from(self, other: ITensor) -> None:
        """
        Replace this tensor's shape and values with `other`'s.

        Values are converted to `self.dtype`.

        Raises
        ------
        RankMismatchError
            If this tensor has a fixed rank and ``other.rank`` differs from it.
        """
        if self._fixed_rank is not None and other.rank != self._fixed_rank:
            raise RankMismatchError("copy_from", self._fixed_rank, other.rank)

        storage = ElementStorage.from_values(other.to_numpy(), self.dtype)
        self._shape = ShapeModel(other.shape)
        self._storage = storage

    def astype(self, dtype: Any) -> "ITensor":
        """
        Return a copy converted to `dtype`.

        Floating-point to integer conversion truncates toward zero. The fixed
        rank is preserved.
        """
        return type(self)._from_parts(
            self._shape, self._storage.astype(dtype), fixed_rank=self._fixed_rank
        )

    # ----------------------------
    # NumPy interop
    # ----------------------------
    def to_numpy(self) -> np.ndarray:
        """
        Return a copy of the data as an ndarray shaped `self.shape`.

        Returns
        -------
        np.ndarray
            A writable array that does not alias the tensor's storage.
        """
        return np.array(self._storage.view(), copy=True).reshape(self.shape)

    def copy_from_numpy(self, arr: Any) -> None:
        """
        Overwrite the elements with values from `arr`.

        `arr` must hold exactly `self.size` elements; its shape is ignored and
        its values are taken in row-major order and converted to `self.dtype`.

        Raises
        ------
        ShapeMismatchError
            If the element count differs.
        """
        src = np.asarray(arr)
        if src.size != self.size:
            raise ShapeMismatchError(
                "copy_from_numpy",
                f"expected {self.size} values, got {src.size}",
                expected=self.size,
                actual=src.size,
            )
        self._storage.write_all(src)
