"""
Tensor file I/O.

Importing this package registers the built-in file formats with
`TensorFormat`:

- ``text``   : rank line, dims line, then whitespace-separated values
- ``binary`` : ``TUB1`` magic, dtype code, uint64 header, raw element data

Public API
----------
- `read`, `write`
- `TensorFormat`, `TensorCodec` (for registering additional formats)
"""

from ._formats import TensorCodec, TensorFormat
from ._text import TextCodec
from ._binary import BinaryCodec
from ._file_io import read, write

__all__ = [
    "read",
    "write",
    TensorFormat.__name__,
    TensorCodec.__name__,
]
