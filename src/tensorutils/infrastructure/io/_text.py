"""
Plain-text tensor format.

Layout::

    3               <- rank
    2 3 4           <- dimension sizes (empty line for a scalar)
    v v v v         <- values, row-major; one line per last-axis row
    ...

When ``TensorSettings.text_values_per_line`` is positive, values are instead
wrapped at that many per line. The reader ignores line structure after the
header and only counts whitespace-separated values.

The element type is not stored; the reader gets it from the caller (usually
inferred from the file extension).
"""

from __future__ import annotations

from typing import IO, Iterable, Iterator, Optional

import numpy as np

from ...domain._errors import ShapeMismatchError
from ..config._settings import get_settings
from ._formats import TensorCodec, TensorFormat


def _format_values(values: Iterable[np.generic]) -> str:
    # NumPy scalar str() is the shortest round-tripping representation.
    return " ".join(str(v) for v in values)


def _value_lines(arr: np.ndarray, per_line: int) -> Iterator[str]:
    flat = arr.reshape(-1)
    if flat.size == 0:
        return
    if per_line > 0:
        width = per_line
    elif arr.ndim == 0:
        width = 1
    else:
        width = arr.shape[-1]
    for start in range(0, flat.size, width):
        yield _format_values(flat[start : start + width])


def _parse_value(token: str, dt: np.dtype) -> np.generic:
    if dt.kind not in "iu":
        return dt.type(token)
    try:
        value = int(token)
    except ValueError:
        # floating-point text
        try:
            value = int(float(token))
        except OverflowError as e:
            raise ValueError(f"cannot convert {token!r} to {dt.name}") from e
    return np.asarray(value).astype(dt, casting="unsafe")[()]


def _parse_header(lines: list[str]) -> tuple[int, ...]:
    if len(lines) < 2:
        raise ShapeMismatchError("read", "missing rank or dimension line in header")
    try:
        rank = int(lines[0].strip())
        dims = tuple(int(tok) for tok in lines[1].split())
    except ValueError as e:
        raise ShapeMismatchError("read", f"malformed header: {e}") from e
    if rank < 0 or any(d < 0 for d in dims):
        raise ShapeMismatchError("read", "negative rank or dimension in header")
    if len(dims) != rank:
        raise ShapeMismatchError(
            "read",
            f"header declares rank {rank} but lists {len(dims)} dimensions",
            expected=rank,
            actual=len(dims),
        )
    return dims


@TensorFormat.register_format("text")
class TextCodec(TensorCodec):
    """Whitespace-separated text codec."""

    binary = False

    def dump(self, arr: np.ndarray, fh: IO[str]) -> None:
        fh.write(f"{arr.ndim}\n")
        fh.write(" ".join(str(d) for d in arr.shape) + "\n")
        for line in _value_lines(arr, get_settings().text_values_per_line):
            fh.write(line + "\n")

    def load(
        self, fh: IO[str], dtype: Optional[np.dtype]
    ) -> tuple[tuple[int, ...], np.ndarray, np.dtype]:
        """
        Parse a text tensor file.

        Raises
        ------
        ShapeMismatchError
            If the header is malformed or the number of values differs from
            the product of the declared dimensions.
        ValueError
            If a value cannot be parsed as `dtype`.
        """
        dt = get_settings().default_dtype if dtype is None else np.dtype(dtype)
        lines = fh.read().splitlines()
        dims = _parse_header(lines)

        tokens = [tok for line in lines[2:] for tok in line.split()]
        expected = int(np.prod(dims, dtype=np.int64))
        if len(tokens) != expected:
            raise ShapeMismatchError(
                "read",
                f"header declares {expected} values, file holds {len(tokens)}",
                expected=expected,
                actual=len(tokens),
            )

        values = np.array([_parse_value(tok, dt) for tok in tokens], dtype=dt)
        return dims, values, dt
