"""
Matrix-multiply based contraction kernel.

The operands are reordered so that the contracted axes are contiguous
(free axes first for `a`, contracted axes first for `b`), flattened into
2-D matrices and multiplied:

    A' : (prod(free_a), K)      B' : (K, prod(free_b))      K = prod(contracted)

The product is reshaped to ``free(a) + free(b)``. This is the default kernel.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ._base import ContractionKernel


@ContractionKernel.register_kernel("tensordot")
def contract_tensordot(
    a: np.ndarray,
    b: np.ndarray,
    a_axes: Sequence[int],
    b_axes: Sequence[int],
    out_dtype: np.dtype,
) -> np.ndarray:
    """
    Contract `a` and `b` over paired axes via reorder + reshape + matmul.

    Parameters
    ----------
    a, b : np.ndarray
        Operands (any shape).
    a_axes, b_axes : Sequence[int]
        Paired contracted axes, already validated.
    out_dtype : np.dtype
        Result dtype; operands are converted to it before multiplying.

    Returns
    -------
    np.ndarray
        Array of shape ``free(a) + free(b)``.
    """
    a_free = [ax for ax in range(a.ndim) if ax not in a_axes]
    b_free = [ax for ax in range(b.ndim) if ax not in b_axes]

    free_a_dims = [a.shape[ax] for ax in a_free]
    free_b_dims = [b.shape[ax] for ax in b_free]

    m = int(np.prod(free_a_dims, dtype=np.int64))
    n = int(np.prod(free_b_dims, dtype=np.int64))
    k = int(np.prod([a.shape[ax] for ax in a_axes], dtype=np.int64))

    a2 = np.transpose(a, a_free + list(a_axes)).astype(out_dtype).reshape(m, k)
    b2 = np.transpose(b, list(b_axes) + b_free).astype(out_dtype).reshape(k, n)

    out = np.matmul(a2, b2)
    return out.reshape(free_a_dims + free_b_dims)
