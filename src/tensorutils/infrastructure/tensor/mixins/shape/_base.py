"""
Tensor shape and indexing mixin.

This module defines `TensorMixinShape`, which implements the shape-changing
and slicing operations of the concrete `Tensor`:

- `reshape`   : in-place change of dimension sizes (element count preserved)
- `subtensor` : copy of the rank-(r-1) sub-tensor at an index of the first axis
- `__getitem__` : ``t[i]`` alias of `subtensor`

Design notes
------------
- To avoid circular imports the mixin does not import `Tensor`; new tensors
  are constructed via ``type(self)``.
- Slices are copies, never views.
"""

from __future__ import annotations

from abc import ABC
from typing import Sequence

import numpy as np
from typing_extensions import Self

from .....domain._errors import ShapeMismatchError
from .....domain._shape import ShapeModel
from .....domain._tensor import ITensor


class TensorMixinShape(ABC):
    """
    Shape and first-axis indexing operations.

    Notes
    -----
    - Methods assume the host class provides `_shape`, `_storage`,
      `_mapper()`, `_check_rank(...)` and `_from_array(...)`.
    """

    def reshape(self, dims: Sequence[int]) -> Self:
        """
        Change the dimension sizes in place.

        Element order (row-major) is unchanged; only the interpretation of
        the flat storage changes.

        Parameters
        ----------
        dims : Sequence[int]
            New dimension sizes. Their product must equal `self.size`.

        Returns
        -------
        Self
            `self`, for chaining.

        Raises
        ------
        ShapeMismatchError
            If ``prod(dims) != self.size``.
        RankMismatchError
            If the tensor has a fixed rank and ``len(dims)`` differs from it.
        """
        shape = ShapeModel(dims)
        if shape.size != self._shape.size:
            raise ShapeMismatchError(
                "reshape",
                f"cannot reshape {self._shape.dims} ({self._shape.size} elements) "
                f"into {shape.dims} ({shape.size} elements)",
                expected=self._shape.size,
                actual=shape.size,
            )
        self._check_rank("reshape", shape.rank)
        self._shape = shape
        return self

    def subtensor(self, index: int) -> "ITensor":
        """
        Return a copy of the sub-tensor at `index` along the first axis.

        The result has rank ``self.rank - 1`` and dynamic rank.

        Raises
        ------
        ShapeMismatchError
            If the tensor is rank-0.
        IndexError
            If `index` is outside ``[0, dims[0])``.
        """
        (i,) = self._mapper().validate((index,), op="subtensor")
        return type(self)._from_array(np.asarray(self.to_numpy()[i]))

    def __getitem__(self, index: int) -> "ITensor":
        return self.subtensor(index)
