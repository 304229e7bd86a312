"""
Binary tensor format.

Layout (all integers little-endian)::

    offset  size          field
    0       4             magic  b"TUB1"
    4       1             NumPy dtype char (one of DTYPE_EXTENSIONS)
    5       8             rank, uint64
    13      8 * rank      dimension sizes, uint64
    ...     size*itemsize element data, row-major, little-endian

Unlike the text format the element type travels with the file.
"""

from __future__ import annotations

from typing import IO, Optional

import numpy as np

from ...domain._errors import ShapeMismatchError
from .._dtypes import DTYPE_EXTENSIONS
from ._formats import TensorCodec, TensorFormat

MAGIC = b"TUB1"

_U64 = np.dtype("<u8")


def _read_exact(fh: IO[bytes], n: int, what: str) -> bytes:
    buf = fh.read(n)
    if len(buf) != n:
        raise ShapeMismatchError(
            "read", f"truncated {what}: expected {n} bytes, got {len(buf)}",
            expected=n, actual=len(buf),
        )
    return buf


@TensorFormat.register_format("binary")
class BinaryCodec(TensorCodec):
    """Self-describing little-endian binary codec."""

    binary = True

    def dump(self, arr: np.ndarray, fh: IO[bytes]) -> None:
        fh.write(MAGIC)
        fh.write(arr.dtype.char.encode("ascii"))
        fh.write(np.array([arr.ndim], dtype=_U64).tobytes())
        fh.write(np.array(arr.shape, dtype=_U64).tobytes())
        fh.write(np.ascontiguousarray(arr, dtype=arr.dtype.newbyteorder("<")).tobytes())

    def load(
        self, fh: IO[bytes], dtype: Optional[np.dtype]
    ) -> tuple[tuple[int, ...], np.ndarray, np.dtype]:
        """
        Parse a binary tensor file.

        The stored element type wins over `dtype`; the caller converts if it
        asked for something else.

        Raises
        ------
        ShapeMismatchError
            If the magic, dtype char or header is malformed, or the data
            section does not hold exactly ``prod(dims)`` elements.
        """
        if _read_exact(fh, len(MAGIC), "magic") != MAGIC:
            raise ShapeMismatchError("read", "not a tensorutils binary file (bad magic)")

        char = _read_exact(fh, 1, "dtype").decode("ascii", errors="replace")
        if char not in DTYPE_EXTENSIONS:
            raise ShapeMismatchError("read", f"unknown element type code {char!r}")
        dt = np.dtype(char)

        rank = int(np.frombuffer(_read_exact(fh, 8, "rank"), dtype=_U64)[0])
        dims_raw = _read_exact(fh, 8 * rank, "dimensions")
        dims = tuple(int(d) for d in np.frombuffer(dims_raw, dtype=_U64))

        expected = int(np.prod(dims, dtype=np.int64))
        data = fh.read()
        if len(data) != expected * dt.itemsize:
            raise ShapeMismatchError(
                "read",
                f"header declares {expected} elements of {dt.itemsize} bytes, "
                f"data section holds {len(data)} bytes",
                expected=expected * dt.itemsize,
                actual=len(data),
            )

        values = np.frombuffer(data, dtype=dt.newbyteorder("<")).astype(dt)
        return dims, values, dt
