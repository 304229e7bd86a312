"""
Sub-tensor assignment.

`TensorMixinAssign.assign` overwrites a rectangular region of a tensor with
the elements of another tensor.

Region
------
The region is described by the axes that carry a start coordinate
(`dest_axes`) and those coordinates (`dest_offsets`). Every axis of the
destination runs from its start coordinate to its end; axes that are not
named, and named axes without an offset, start at 0.

For a destination of shape ``(2, 3, 5, 7)``:

    dest.assign(src, (1, 2), (0,))     # region dest[:, 0:, :, :] -> 210 cells
    dest.assign(src, (1, 2), (1, 2))   # region dest[:, 1:, 2:, :] -> 84 cells

The source only has to provide the right *number* of elements; its shape is
ignored. Its values, flattened in row-major order, fill the region cells in
row-major order of the destination.
"""

from __future__ import annotations

from abc import ABC
from typing import Sequence

import numpy as np

from .....domain._errors import RankMismatchError, ShapeMismatchError
from .....domain._index_mapper import integer_tuple
from .....domain._tensor import ITensor


def _region_offsets(
    dims: tuple[int, ...], axes: Sequence[int], offsets: Sequence[int]
) -> np.ndarray:
    """Return the flat storage offsets of the region cells in visiting order."""
    starts = dict(zip(axes, offsets))
    index = tuple(slice(starts.get(ax, 0), None) for ax in range(len(dims)))
    size = int(np.prod(dims, dtype=np.int64))
    return np.arange(size, dtype=np.int64).reshape(dims)[index].reshape(-1)


class TensorMixinAssign(ABC):
    """Mixin providing in-place sub-tensor assignment."""

    def assign(
        self,
        source: ITensor,
        dest_axes: Sequence[int],
        dest_offsets: Sequence[int] = (),
    ) -> None:
        """
        Overwrite a rectangular region of this tensor with `source`'s elements.

        Parameters
        ----------
        source : ITensor
            Tensor whose elements (row-major) are written. Only its size
            matters; values are converted to `self.dtype`.
        dest_axes : Sequence[int]
            Axes of this tensor that receive a start coordinate.
        dest_offsets : Sequence[int], optional
            Start coordinate on each of `dest_axes`. Missing trailing entries
            default to 0.

        Raises
        ------
        ShapeMismatchError
            If this tensor is a scalar and axes are given, if `dest_axes`
            contains duplicates, or if ``source.size`` differs from the number
            of region cells.
        RankMismatchError
            If more offsets than axes are given.
        IndexError
            If an axis or an offset is out of range.
        TypeError
            If an axis or an offset is not an integer.

        Notes
        -----
        All checks run before the first write; a failing call leaves this
        tensor unchanged.
        """
        dims = self.shape
        rank = len(dims)
        axes = integer_tuple(dest_axes, op="assign", what="axes")
        offsets = list(integer_tuple(dest_offsets, op="assign", what="offsets"))

        if rank == 0 and axes:
            raise ShapeMismatchError(
                "assign", "a rank-0 tensor has no axes to assign along", actual=axes
            )
        for ax in axes:
            if ax < 0 or ax >= rank:
                raise IndexError(f"assign: axis {ax} is out of range for rank {rank}")
        if len(set(axes)) != len(axes):
            raise ShapeMismatchError(
                "assign", f"duplicate axes in {axes}", actual=axes
            )
        if len(offsets) > len(axes):
            raise RankMismatchError("assign", len(axes), len(offsets))

        offsets += [0] * (len(axes) - len(offsets))
        for ax, off in zip(axes, offsets):
            if off < 0 or off >= dims[ax]:
                raise IndexError(
                    f"assign: offset {off} is out of range for axis {ax} with size {dims[ax]}"
                )

        starts = dict(zip(axes, offsets))
        count = 1
        for ax, dim in enumerate(dims):
            count *= dim - starts.get(ax, 0)
        if source.size != count:
            raise ShapeMismatchError(
                "assign",
                f"region holds {count} elements, source has {source.size}",
                expected=count,
                actual=source.size,
            )

        values = source.to_numpy().reshape(-1)
        self._storage.write_block(_region_offsets(dims, axes, offsets), values)
