"""
Arithmetic mixin implementing element-wise Tensor operators.

This module defines :class:`TensorMixinArithmetic`, which provides ``+``,
``-``, ``*`` and ``/`` (with reflected and in-place variants) plus unary
negation for the concrete `Tensor`.

Semantics
---------
- Tensor operands must have the same number of elements; their shapes may
  differ. Elements are combined in row-major order and the result takes the
  shape of the left operand. A size mismatch raises `ShapeMismatchError`.
- Scalars (Python or NumPy numbers) combine with every element.
- Out-of-place results use NumPy type promotion; ``/`` is true division, so
  integer operands produce a floating result.
- In-place operators keep the receiver's dtype and convert the result back
  to it (truncating toward zero for integer receivers).
"""

from __future__ import annotations

from abc import ABC
from numbers import Integral, Number as _NumberABC
from typing import Any, Callable, Union

import numpy as np

from .....domain._errors import ShapeMismatchError
from .....domain._tensor import ITensor
from ...._dtypes import promote

Number = Union[int, float]

_Ufunc = Callable[[Any, Any], np.ndarray]


def _lift_scalar(value: Any, dtype: np.dtype) -> Any:
    """
    Return a scalar operand ready for a ufunc against elements of `dtype`.

    Python integers that fit `dtype` stay weakly typed and keep the tensor's
    type. Integers outside its range become arrays of their own default type,
    so the operation widens instead of raising `OverflowError`.
    """
    if isinstance(value, np.generic) or dtype.kind not in "iu":
        return value
    if isinstance(value, Integral):
        info = np.iinfo(dtype)
        if not info.min <= value <= info.max:
            return np.asarray(value)
    return value


class TensorMixinArithmetic(ABC):
    """
    Element-wise arithmetic operators for tensors.

    Notes
    -----
    - Operands are read through the storage's read-only view; results are
      always written into fresh storage (out-of-place) or through the
      storage's write API (in-place).
    - Unsupported operand types make the operator return `NotImplemented`
      so Python can try the reflected operation.
    """

    # ----------------------------
    # Operand handling
    # ----------------------------
    def _operand_values(self, other: Any, op: str) -> Any:
        """
        Return `other` as a flat array (tensor) or a scalar, or None if unsupported.

        Raises
        ------
        ShapeMismatchError
            If `other` is a tensor whose size differs from `self.size`.
        """
        if isinstance(other, ITensor):
            if other.size != self.size:
                raise ShapeMismatchError(
                    op,
                    f"operands must have the same number of elements, "
                    f"got {self.size} and {other.size}",
                    expected=self.size,
                    actual=other.size,
                )
            return other.to_numpy().reshape(-1)
        if isinstance(other, _NumberABC) and not isinstance(other, complex):
            return _lift_scalar(other, self.dtype)
        return None

    def _elementwise(self, other: Any, ufunc: _Ufunc, op: str, *, reflected: bool = False):
        """
        Compute ``ufunc(self, other)`` (or ``ufunc(other, self)`` if reflected)
        into a new tensor shaped like `self`.
        """
        rhs = self._operand_values(other, op)
        if rhs is None:
            return NotImplemented

        lhs = self._storage.view()
        rhs_dtype = rhs.dtype if isinstance(rhs, np.ndarray) else rhs
        out_dtype = promote(self.dtype, rhs_dtype)

        with np.errstate(divide="ignore", invalid="ignore"):
            res = ufunc(rhs, lhs) if reflected else ufunc(lhs, rhs)

        res = np.asarray(res)
        if ufunc is np.true_divide and res.dtype.kind == "f":
            out_dtype = promote(out_dtype, res.dtype)
        return type(self)._from_array(
            res.astype(out_dtype, copy=False).reshape(self.shape),
            fixed_rank=self._fixed_rank,
        )

    def _elementwise_inplace(self, other: Any, ufunc: _Ufunc, op: str):
        """
        Compute ``ufunc(self, other)`` and write it back into `self`'s storage,
        converting to `self.dtype`.
        """
        rhs = self._operand_values(other, op)
        if rhs is None:
            return NotImplemented

        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            res = ufunc(self._storage.view(), rhs)
            self._storage.write_all(np.asarray(res))
        return self

    # ----------------------------
    # Addition
    # ----------------------------
    def __add__(self, other: Union[ITensor, Number]) -> "ITensor":
        """
        Element-wise addition.

        Parameters
        ----------
        other : Union[ITensor, Number]
            Tensor with the same number of elements, or a scalar.

        Returns
        -------
        ITensor
            New tensor shaped like `self` holding ``self + other``.
        """
        return self._elementwise(other, np.add, "add")

    def __radd__(self, other: Number) -> "ITensor":
        return self._elementwise(other, np.add, "add", reflected=True)

    def __iadd__(self, other: Union[ITensor, Number]) -> "ITensor":
        return self._elementwise_inplace(other, np.add, "iadd")

    # ----------------------------
    # Subtraction
    # ----------------------------
    def __sub__(self, other: Union[ITensor, Number]) -> "ITensor":
        """
        Element-wise subtraction.

        Returns
        -------
        ITensor
            New tensor shaped like `self` holding ``self - other``.
        """
        return self._elementwise(other, np.subtract, "sub")

    def __rsub__(self, other: Number) -> "ITensor":
        return self._elementwise(other, np.subtract, "sub", reflected=True)

    def __isub__(self, other: Union[ITensor, Number]) -> "ITensor":
        return self._elementwise_inplace(other, np.subtract, "isub")

    # ----------------------------
    # Multiplication
    # ----------------------------
    def __mul__(self, other: Union[ITensor, Number]) -> "ITensor":
        """
        Element-wise multiplication (not a contraction; see `dot`).

        Returns
        -------
        ITensor
            New tensor shaped like `self` holding ``self * other``.
        """
        return self._elementwise(other, np.multiply, "mul")

    def __rmul__(self, other: Number) -> "ITensor":
        return self._elementwise(other, np.multiply, "mul", reflected=True)

    def __imul__(self, other: Union[ITensor, Number]) -> "ITensor":
        return self._elementwise_inplace(other, np.multiply, "imul")

    # ----------------------------
    # True division
    # ----------------------------
    def __truediv__(self, other: Union[ITensor, Number]) -> "ITensor":
        """
        Element-wise true division.

        Returns
        -------
        ITensor
            New tensor shaped like `self` holding ``self / other``. Integer
            operands yield a floating-point result. Division by zero follows
            IEEE rules (inf/nan) without raising.
        """
        return self._elementwise(other, np.true_divide, "truediv")

    def __rtruediv__(self, other: Number) -> "ITensor":
        return self._elementwise(other, np.true_divide, "truediv", reflected=True)

    def __itruediv__(self, other: Union[ITensor, Number]) -> "ITensor":
        return self._elementwise_inplace(other, np.true_divide, "itruediv")

    # ----------------------------
    # Unary
    # ----------------------------
    def __neg__(self) -> "ITensor":
        """Return a new tensor with every element negated."""
        return type(self)._from_array(
            np.negative(self._storage.view()).reshape(self.shape),
            fixed_rank=self._fixed_rank,
        )

    def __pos__(self) -> "ITensor":
        """Return a copy of this tensor."""
        return self.clone()
