"""
Shape value type.

This module defines `ShapeModel`, an immutable description of a tensor's
layout: the ordered per-axis dimension sizes together with the quantities
derived from them (rank, element count and row-major strides).

`ShapeModel` owns no element data. Tensors replace their shape wholesale
(e.g., on `alloc` or `reshape`); a shape instance is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Integral
from typing import Iterable


def _normalize_dims(dims: Iterable[int]) -> tuple[int, ...]:
    """
    Convert an iterable of dimension sizes into a validated tuple.

    Raises
    ------
    TypeError
        If an entry is not an integer (booleans are rejected as well).
    ValueError
        If an entry is negative.
    """
    out = []
    for i, d in enumerate(dims):
        if isinstance(d, bool) or not isinstance(d, Integral):
            raise TypeError(
                f"dimension {i} must be an integer, got {type(d).__name__} ({d!r})"
            )
        if d < 0:
            raise ValueError(f"dimension {i} must be non-negative, got {d}")
        out.append(int(d))
    return tuple(out)


@dataclass(frozen=True)
class ShapeModel:
    """
    Immutable tensor shape.

    Parameters
    ----------
    dims : Iterable[int]
        Ordered, non-negative dimension sizes (one per axis). An empty
        sequence describes a rank-0 (scalar) tensor.

    Attributes
    ----------
    dims : tuple[int, ...]
        Validated dimension sizes.
    rank : int
        Number of axes.
    size : int
        Total number of elements (product of `dims`; 1 for a scalar,
        0 whenever any dimension is 0).
    strides : tuple[int, ...]
        Row-major element strides: ``strides[i] = prod(dims[i+1:])``.

    Notes
    -----
    Strides are expressed in elements, not bytes.
    """

    dims: tuple[int, ...]
    rank: int = field(init=False)
    size: int = field(init=False)
    strides: tuple[int, ...] = field(init=False)

    def __init__(self, dims: Iterable[int] = ()) -> None:
        d = _normalize_dims(dims)

        strides = [1] * len(d)
        acc = 1
        for i in range(len(d) - 1, -1, -1):
            strides[i] = acc
            acc *= d[i]

        object.__setattr__(self, "dims", d)
        object.__setattr__(self, "rank", len(d))
        object.__setattr__(self, "size", acc)
        object.__setattr__(self, "strides", tuple(strides))

    @classmethod
    def scalar(cls) -> "ShapeModel":
        """Return the rank-0 shape."""
        return cls(())

    def is_scalar(self) -> bool:
        """Return True if this shape has no axes."""
        return self.rank == 0

    def permuted(self, perm: Iterable[int]) -> "ShapeModel":
        """
        Return the shape obtained by reading axis ``perm[i]`` into position ``i``.

        The permutation itself is not validated here; callers validate it
        first (see `Tensor.transpose`).
        """
        return ShapeModel(self.dims[int(p)] for p in perm)

    def without_axes(self, axes: Iterable[int]) -> "ShapeModel":
        """Return the shape of the axes not listed in `axes`, in original order."""
        drop = {int(a) for a in axes}
        return ShapeModel(d for i, d in enumerate(self.dims) if i not in drop)

    def __len__(self) -> int:
        return self.rank

    def __iter__(self):
        return iter(self.dims)

    def __repr__(self) -> str:
        return f"ShapeModel(dims={self.dims})"
