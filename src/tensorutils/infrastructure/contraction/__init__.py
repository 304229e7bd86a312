"""
Contraction kernel registrations.

Importing this package registers the built-in kernels with
`ContractionKernel`:

- ``loop``      : reference element-by-element summation
- ``tensordot`` : axis reorder + reshape + matrix multiply (default)

Only `ContractionKernel` is part of the public interface; the kernel modules
are imported for their registration side effects.
"""

from ._base import ContractionKernel
from ._loop import contract_loop
from ._tensordot import contract_tensordot

__all__ = [
    ContractionKernel.__name__,
]
