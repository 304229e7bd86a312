"""
Supported element types and their file extensions.

Every tensor stores elements of one NumPy numeric type. The supported set is
exactly the set of types that have a file extension in `DTYPE_EXTENSIONS`;
the table is keyed by NumPy's one-character type code so that C-level types
sharing a width on some platforms (e.g., ``long`` and ``long long``) keep
distinct extensions.

DATA TYPE           | NUMPY CHAR | EXTENSION
--------------------|------------|----------
float               | f          | .f32
double              | d          | .f64
long double         | g          | .f80
unsigned char       | B          | .uc
signed char         | b          | .sc
unsigned short      | H          | .us
unsigned int        | I          | .u
unsigned long       | L          | .ul
unsigned long long  | Q          | .ull
short               | h          | .s
int                 | i          | .int
long                | l          | .l
long long           | q          | .ll
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping, Optional

import numpy as np

DTYPE_EXTENSIONS: Mapping[str, str] = MappingProxyType(
    {
        "f": ".f32",
        "d": ".f64",
        "g": ".f80",
        "B": ".uc",
        "b": ".sc",
        "H": ".us",
        "I": ".u",
        "L": ".ul",
        "Q": ".ull",
        "h": ".s",
        "i": ".int",
        "l": ".l",
        "q": ".ll",
    }
)
"""Read-only mapping from NumPy dtype char to file extension."""

EXTENSION_DTYPES: Mapping[str, str] = MappingProxyType(
    {ext: char for char, ext in DTYPE_EXTENSIONS.items()}
)
"""Read-only reverse mapping from file extension to NumPy dtype char."""


def resolve_dtype(dtype: Any) -> np.dtype:
    """
    Normalize a dtype-like value into a supported `numpy.dtype`.

    Parameters
    ----------
    dtype : Any
        Anything accepted by `numpy.dtype` (type object, string, dtype).

    Returns
    -------
    numpy.dtype
        The normalized dtype.

    Raises
    ------
    TypeError
        If the value is not a dtype or names an unsupported element type
        (bool, complex, object, strings, half precision, ...).
    """
    try:
        dt = np.dtype(dtype)
    except TypeError as e:
        raise TypeError(f"Unsupported element type: {dtype!r}") from e

    if dt.char not in DTYPE_EXTENSIONS:
        supported = ", ".join(sorted({np.dtype(c).name for c in DTYPE_EXTENSIONS}))
        raise TypeError(
            f"Unsupported element type: {dt.name!r}. Supported: {supported}"
        )
    return dt


def promote(a: np.dtype, b: Any) -> np.dtype:
    """
    Return the element type of a binary operation between `a` and `b`.

    `b` may be a dtype or a Python/NumPy scalar. Python scalars follow
    NumPy's promotion rules (they do not widen the tensor's type unless the
    kind changes, e.g. int tensor with a float scalar becomes float64).
    """
    try:
        dt = np.result_type(a, b)
    except TypeError as e:
        raise TypeError(f"Unsupported operand for {a.name} tensor: {b!r}") from e
    return resolve_dtype(dt)


def extension_for(dtype: Any) -> str:
    """Return the file extension registered for `dtype`."""
    return DTYPE_EXTENSIONS[resolve_dtype(dtype).char]


def dtype_for_extension(ext: str) -> Optional[np.dtype]:
    """Return the dtype registered for extension `ext`, or None if unknown."""
    char = EXTENSION_DTYPES.get(ext.lower())
    return None if char is None else np.dtype(char)
