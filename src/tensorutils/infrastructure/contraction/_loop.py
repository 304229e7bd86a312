"""
Reference contraction kernel.

This kernel evaluates the contraction literally, element by element:

    out[f_a..., f_b...] = sum over c of a[f_a..., c...] * b[f_b..., c...]

Every operand element is located through `IndexMapper.flat_offset`, i.e. by
the same row-major offset arithmetic the tensor uses for element access. It
is slow (pure Python loops) and exists as the ground truth the fast kernels
are tested against, and as a fallback for debugging.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from ...domain._index_mapper import IndexMapper
from ...domain._shape import ShapeModel
from ._base import ContractionKernel

logger = logging.getLogger(__name__)


def _place(
    rank: int,
    free_axes: Sequence[int],
    free_idx: Sequence[int],
    con_axes: Sequence[int],
    con_idx: Sequence[int],
) -> list[int]:
    """Assemble a full multi-index from its free and contracted parts."""
    full = [0] * rank
    for ax, i in zip(free_axes, free_idx):
        full[ax] = i
    for ax, i in zip(con_axes, con_idx):
        full[ax] = i
    return full


@ContractionKernel.register_kernel("loop")
def contract_loop(
    a: np.ndarray,
    b: np.ndarray,
    a_axes: Sequence[int],
    b_axes: Sequence[int],
    out_dtype: np.dtype,
) -> np.ndarray:
    """
    Contract `a` and `b` over paired axes by explicit summation.

    Parameters
    ----------
    a, b : np.ndarray
        Operands (any shape).
    a_axes, b_axes : Sequence[int]
        Paired contracted axes, already validated.
    out_dtype : np.dtype
        Accumulation and result dtype.

    Returns
    -------
    np.ndarray
        Array of shape ``free(a) + free(b)``.
    """
    a_shape = ShapeModel(a.shape)
    b_shape = ShapeModel(b.shape)
    a_map = IndexMapper(a_shape)
    b_map = IndexMapper(b_shape)

    a_free = [ax for ax in range(a_shape.rank) if ax not in a_axes]
    b_free = [ax for ax in range(b_shape.rank) if ax not in b_axes]

    out_shape = ShapeModel(
        a_shape.without_axes(a_axes).dims + b_shape.without_axes(b_axes).dims
    )
    con_shape = ShapeModel(a_shape.dims[ax] for ax in a_axes)

    a_flat = np.ascontiguousarray(a).reshape(-1).astype(out_dtype, copy=False)
    b_flat = np.ascontiguousarray(b).reshape(-1).astype(out_dtype, copy=False)

    logger.debug(
        "loop contraction: %s x %s over %s/%s -> %s",
        a_shape.dims,
        b_shape.dims,
        tuple(a_axes),
        tuple(b_axes),
        out_shape.dims,
    )

    out = np.zeros(out_shape.dims, dtype=out_dtype).reshape(-1)
    con_indices = list(IndexMapper(con_shape).iter_indices())
    n_a_free = len(a_free)

    for pos, out_idx in enumerate(IndexMapper(out_shape).iter_indices()):
        fa = out_idx[:n_a_free]
        fb = out_idx[n_a_free:]
        acc = out_dtype.type(0)
        for c in con_indices:
            ia = a_map.flat_offset(_place(a_shape.rank, a_free, fa, a_axes, c))
            ib = b_map.flat_offset(_place(b_shape.rank, b_free, fb, b_axes, c))
            acc = acc + a_flat[ia] * b_flat[ib]
        out[pos] = acc

    return out.reshape(out_shape.dims)
