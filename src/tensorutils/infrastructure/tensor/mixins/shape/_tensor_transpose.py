"""
Axis permutation.

`TensorMixinTranspose.transpose(perm)` returns a new tensor whose axis ``i``
is axis ``perm[i]`` of the source:

    new_dims[i] = dims[perm[i]]
    out[j_0, ..., j_{r-1}] = src[k]   where k[perm[i]] = j_i

The data is physically permuted into fresh row-major storage.
"""

from __future__ import annotations

from abc import ABC
from numbers import Integral
from typing import Optional, Sequence

import numpy as np

from .....domain._errors import ShapeMismatchError
from .....domain._tensor import ITensor


class TensorMixinTranspose(ABC):
    """Mixin providing axis permutation (`transpose`, `T`)."""

    def _validate_perm(self, perm: Sequence[int]) -> tuple[int, ...]:
        rank = self.rank
        p = tuple(perm)
        if len(p) != rank:
            raise ShapeMismatchError(
                "transpose",
                f"permutation {p} has {len(p)} entries, tensor has rank {rank}",
                expected=rank,
                actual=len(p),
            )
        for ax in p:
            if isinstance(ax, bool) or not isinstance(ax, Integral):
                raise ShapeMismatchError(
                    "transpose", f"permutation entries must be integers, got {ax!r}", actual=p
                )
        if sorted(int(ax) for ax in p) != list(range(rank)):
            raise ShapeMismatchError(
                "transpose",
                f"{p} is not a permutation of range({rank})",
                expected=tuple(range(rank)),
                actual=p,
            )
        return tuple(int(ax) for ax in p)

    def transpose(self, perm: Optional[Sequence[int]] = None) -> "ITensor":
        """
        Return a new tensor with permuted axes.

        Parameters
        ----------
        perm : Sequence[int], optional
            Permutation of ``range(rank)``. Defaults to reversing the axes.

        Returns
        -------
        ITensor
            New tensor with ``shape[i] == self.shape[perm[i]]``, the same
            dtype and the same fixed rank.

        Raises
        ------
        ShapeMismatchError
            If `perm` is not a permutation of ``range(rank)``.
        """
        if perm is None:
            p = tuple(reversed(range(self.rank)))
        else:
            p = self._validate_perm(perm)

        out = np.transpose(self.to_numpy(), p).copy(order="C")
        return type(self)._from_array(out, fixed_rank=self._fixed_rank)

    @property
    def T(self) -> "ITensor":
        """Return the tensor with its axes reversed (``transpose()``)."""
        return self.transpose()
