"""
Tensor memory operations.

This package provides the memory-related mixins combined into `Tensor`:

- `TensorMixinMemory` : factories (`from_numpy`, `from_flat`), `alloc`,
  `fill`, `clone`, `copy_from`, `astype`, `to_numpy`, `copy_from_numpy`
- `TensorMixinAssign` : sub-tensor assignment (`assign`)
"""

from ._base import TensorMixinMemory
from ._tensor_assign import TensorMixinAssign

__all__ = [
    TensorMixinMemory.__name__,
    TensorMixinAssign.__name__,
]
