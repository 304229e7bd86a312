"""
Multi-index <-> flat-offset mapping.

`IndexMapper` converts between multi-dimensional index tuples and offsets into
a tensor's contiguous row-major storage, given a `ShapeModel`.

Partial indexing
----------------
Supplying fewer indices than the tensor's rank is permitted: the missing
trailing indices default to 0. On a rank-4 tensor ``A``, ``A.at(1, 2)``
therefore addresses the same element as ``A.at(1, 2, 0, 0)``. This is a
convenience with a sharp edge: a partial index addresses the *first element*
of the sub-tensor along the unaddressed axes, never the whole sub-tensor.
"""

from __future__ import annotations

from numbers import Integral
from typing import Iterator, Sequence

from ._errors import RankMismatchError, ShapeMismatchError
from ._shape import ShapeModel


def integer_tuple(values: Sequence[int], *, op: str, what: str) -> tuple[int, ...]:
    """
    Return `values` as a tuple of ints, rejecting non-integer entries.

    Raises
    ------
    TypeError
        If an entry is a bool or not an `Integral` (e.g. a float axis).
    """
    out = []
    for v in values:
        if isinstance(v, bool) or not isinstance(v, Integral):
            raise TypeError(f"{op}: {what} must be integers, got {v!r}")
        out.append(int(v))
    return tuple(out)


class IndexMapper:
    """
    Index arithmetic for one `ShapeModel`.

    Parameters
    ----------
    shape : ShapeModel
        Shape whose strides define the mapping.

    Notes
    -----
    - Offsets are element offsets into row-major storage.
    - The mapper holds no element data and can be shared freely.
    """

    __slots__ = ("_shape",)

    def __init__(self, shape: ShapeModel) -> None:
        self._shape = shape

    @property
    def shape(self) -> ShapeModel:
        """Return the shape this mapper was built for."""
        return self._shape

    def validate(self, indices: Sequence[int], *, op: str = "index") -> tuple[int, ...]:
        """
        Validate a (possibly partial) multi-index and return it as ints.

        Parameters
        ----------
        indices : Sequence[int]
            Index per leading axis. May be shorter than the rank.
        op : str, optional
            Operation name used in error messages.

        Returns
        -------
        tuple[int, ...]
            The validated indices (not padded).

        Raises
        ------
        ShapeMismatchError
            If the shape is rank-0 and at least one index is supplied.
        RankMismatchError
            If more indices than axes are supplied.
        IndexError
            If any index is negative or not smaller than its axis's dimension.
        TypeError
            If an index is not an integer.
        """
        shape = self._shape
        n = len(indices)

        if n and shape.rank == 0:
            raise ShapeMismatchError(
                op, "a rank-0 tensor cannot be indexed or sliced", actual=n
            )
        if n > shape.rank:
            raise RankMismatchError(op, shape.rank, n)

        out = []
        for axis, idx in enumerate(indices):
            if isinstance(idx, bool) or not isinstance(idx, Integral):
                raise TypeError(
                    f"{op}: index for axis {axis} must be an integer, "
                    f"got {type(idx).__name__}"
                )
            dim = shape.dims[axis]
            if idx < 0 or idx >= dim:
                raise IndexError(
                    f"{op}: index {idx} is out of range for axis {axis} with size {dim}"
                )
            out.append(int(idx))
        return tuple(out)

    def flat_offset(self, indices: Sequence[int], *, op: str = "index") -> int:
        """
        Map a (possibly partial) multi-index to a flat storage offset.

        ``offset = sum(indices[i] * strides[i])`` over the supplied indices;
        unaddressed trailing axes contribute 0.

        Raises
        ------
        ShapeMismatchError, RankMismatchError, IndexError, TypeError
            See `validate`.
        """
        idx = self.validate(indices, op=op)
        strides = self._shape.strides
        return sum(i * s for i, s in zip(idx, strides))

    def unravel(self, offset: int) -> tuple[int, ...]:
        """
        Map a flat offset back to the full multi-index (row-major).

        Raises
        ------
        IndexError
            If `offset` is outside ``[0, size)``.
        """
        size = self._shape.size
        if offset < 0 or offset >= size:
            raise IndexError(f"offset {offset} is out of range for size {size}")

        out = []
        rem = int(offset)
        for s in self._shape.strides:
            q, rem = divmod(rem, s)
            out.append(q)
        return tuple(out)

    def iter_indices(self) -> Iterator[tuple[int, ...]]:
        """
        Yield every full multi-index in row-major order.

        A rank-0 shape yields the single empty index ``()``; a shape with a
        zero-sized axis yields nothing.
        """
        dims = self._shape.dims
        if self._shape.size == 0:
            return

        idx = [0] * len(dims)
        while True:
            yield tuple(idx)
            axis = len(dims) - 1
            while axis >= 0:
                idx[axis] += 1
                if idx[axis] < dims[axis]:
                    break
                idx[axis] = 0
                axis -= 1
            if axis < 0:
                return
