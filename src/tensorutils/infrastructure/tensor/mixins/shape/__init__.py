"""
Shape-related Tensor mixins.

- `TensorMixinShape`     : `reshape`, first-axis slicing (`subtensor`, ``t[i]``)
- `TensorMixinTranspose` : axis permutation (`transpose`, `T`)
"""

from ._base import TensorMixinShape
from ._tensor_transpose import TensorMixinTranspose

__all__ = [
    TensorMixinShape.__name__,
    TensorMixinTranspose.__name__,
]
