"""
Element-wise arithmetic mixin for Tensor.

Provides the operator family on `Tensor`:

- addition           (``+``, ``+=``)
- subtraction        (``-``, ``-=``)
- multiplication     (``*``, ``*=``)
- true division      (``/``, ``/=``)
- unary negation / plus

Public API
----------
- ``TensorMixinArithmetic``
"""

from ._base import TensorMixinArithmetic

__all__ = [
    TensorMixinArithmetic.__name__,
]
