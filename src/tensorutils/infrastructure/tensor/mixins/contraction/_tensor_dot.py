"""
Generalized tensor contraction.

`TensorMixinContraction.dot` contracts two tensors over paired axes:

    C[f_a..., f_b...] = sum over c of A[f_a..., c...] * B[f_b..., c...]

where ``self_axes[k]`` of A is paired with ``other_axes[k]`` of B, ``f_a`` and
``f_b`` run over the free (uncontracted) axes of each operand in their
original order, and ``c`` runs over the paired contracted axes.

Example: a ``(2, 3, 5, 7)`` tensor contracted with a ``(3, 11, 13, 5)`` tensor
over ``self_axes=(1, 2)``, ``other_axes=(0, 3)`` yields shape ``(2, 7, 11, 13)``.

The arithmetic itself is delegated to a registered `ContractionKernel`; this
mixin only validates operands, selects the block of `self` and picks the
kernel.
"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Optional, Sequence

from .....domain._errors import ShapeMismatchError
from .....domain._index_mapper import integer_tuple
from .....domain._tensor import ITensor
from ...._dtypes import promote
from ....config._settings import get_settings
from ....contraction import ContractionKernel

logger = logging.getLogger(__name__)


def _check_axis_range(axes: tuple[int, ...], rank: int, which: str) -> None:
    for ax in axes:
        if ax < 0 or ax >= rank:
            raise IndexError(
                f"dot: {which} axis {ax} is out of range for rank {rank}"
            )


def _check_unique(axes: tuple[int, ...], which: str) -> None:
    if len(set(axes)) != len(axes):
        raise ShapeMismatchError("dot", f"duplicate {which} axes in {axes}", actual=axes)


class TensorMixinContraction(ABC):
    """Mixin providing generalized tensor contraction (`dot`)."""

    def dot(
        self,
        other: ITensor,
        self_axes: Sequence[int],
        other_axes: Sequence[int],
        self_offsets: Optional[Sequence[int]] = None,
        *,
        kernel: Optional[str] = None,
    ) -> "ITensor":
        """
        Contract this tensor with `other` over paired axes.

        Parameters
        ----------
        other : ITensor
            Right operand.
        self_axes, other_axes : Sequence[int]
            Contracted axes; ``self_axes[k]`` is paired with ``other_axes[k]``.
            Empty lists produce the outer product.
        self_offsets : Sequence[int], optional
            Partial multi-index into this tensor (missing trailing entries are
            0). The contraction reads the block of this tensor that starts at
            that corner and extends to the end of every axis. Defaults to the
            whole tensor.
        kernel : str, optional
            Registered kernel name. Defaults to
            `TensorSettings.contraction_kernel`.

        Returns
        -------
        ITensor
            New dynamic-rank tensor with the free dims of (the block of) this
            tensor followed by the free dims of `other`. Its dtype is the
            promotion of both operand dtypes.

        Raises
        ------
        ShapeMismatchError
            If the axis lists differ in length, contain duplicates, or pair
            axes of different extent.
        IndexError
            If an axis is outside its operand's rank, or an offset is out of
            range.
        RankMismatchError
            If `self_offsets` has more entries than this tensor has axes.
        ValueError
            If `kernel` names no registered kernel.
        TypeError
            If an axis or an offset is not an integer.
        """
        a_axes = integer_tuple(self_axes, op="dot", what="self axes")
        b_axes = integer_tuple(other_axes, op="dot", what="other axes")

        if len(a_axes) != len(b_axes):
            raise ShapeMismatchError(
                "dot",
                f"axis lists differ in length: {len(a_axes)} vs {len(b_axes)}",
                expected=len(a_axes),
                actual=len(b_axes),
            )
        _check_axis_range(a_axes, self.rank, "self")
        _check_axis_range(b_axes, other.rank, "other")
        _check_unique(a_axes, "self")
        _check_unique(b_axes, "other")

        a = self.to_numpy()
        if self_offsets is not None:
            corner = self._mapper().validate(tuple(self_offsets), op="dot")
            if any(corner):
                a = a[tuple(slice(i, None) for i in corner)]

        b = other.to_numpy()
        for ax_a, ax_b in zip(a_axes, b_axes):
            if a.shape[ax_a] != b.shape[ax_b]:
                raise ShapeMismatchError(
                    "dot",
                    f"extent {a.shape[ax_a]} of self axis {ax_a} does not match "
                    f"extent {b.shape[ax_b]} of other axis {ax_b}",
                    expected=a.shape[ax_a],
                    actual=b.shape[ax_b],
                )

        out_dtype = promote(self.dtype, other.dtype)
        contract = ContractionKernel(kernel or get_settings().contraction_kernel)
        logger.debug(
            "dot %s x %s over %s/%s using %r kernel",
            a.shape,
            b.shape,
            a_axes,
            b_axes,
            contract.name,
        )
        out = contract(a, b, a_axes, b_axes, out_dtype)
        return type(self)._from_array(out)
