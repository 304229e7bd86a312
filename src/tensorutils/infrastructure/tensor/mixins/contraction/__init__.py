"""
Contraction mixin for Tensor.

Public API
----------
- ``TensorMixinContraction`` : generalized tensor contraction (`dot`)
"""

from ._tensor_dot import TensorMixinContraction

__all__ = [
    TensorMixinContraction.__name__,
]
