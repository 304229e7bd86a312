"""
Contiguous element storage.

This module defines `ElementStorage`, a flat, contiguous, type-homogeneous
buffer of numeric elements backed by a 1-D NumPy array. It is the only owner
of element data in tensorutils: every `Tensor` holds exactly one storage
instance and never shares it with another tensor.

Ownership semantics
-------------------
- A storage is owned by one tensor. Copying a tensor deep-copies its storage
  (`copy`); there is no reference counting and no view sharing.
- `view()` exposes a read-only NumPy view for collaborators that need to read
  in bulk (kernels, file I/O). Writes go through the storage methods.

Design notes
------------
- The storage knows nothing about shape; it exposes the capability set
  {indexed read/write, append, resize, iterate}. Keeping the size in sync
  with a shape is the owning tensor's responsibility, which is why the tensor
  does not forward `append`/`resize` to callers.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Union

import numpy as np

from .._dtypes import resolve_dtype

Number = Union[int, float]


def _as_element(value: Any, dtype: np.dtype) -> np.ndarray:
    """Convert scalar value(s) to an array of `dtype` (unsafe cast, integers wrap)."""
    return np.asarray(value).astype(dtype, casting="unsafe")


class ElementStorage:
    """
    Flat owned buffer of elements of one numeric dtype.

    Parameters
    ----------
    length : int
        Number of elements.
    dtype : Any
        Supported element type (see `resolve_dtype`).
    fill : Number, optional
        Value assigned to every element. Defaults to 0.
    """

    __slots__ = ("_buf",)

    def __init__(self, length: int, dtype: Any, fill: Number = 0) -> None:
        if length < 0:
            raise ValueError(f"storage length must be non-negative, got {length}")
        dt = resolve_dtype(dtype)
        self._buf = np.full((int(length),), _as_element(fill, dt), dtype=dt)

    @classmethod
    def from_values(cls, values: Iterable[Any], dtype: Any) -> "ElementStorage":
        """
        Build a storage from an iterable or array of values (converted to `dtype`).

        Multi-dimensional arrays are flattened in row-major order.
        """
        dt = resolve_dtype(dtype)
        if not isinstance(values, (np.ndarray, list, tuple)):
            values = list(values)
        arr = _as_element(values, dt).reshape(-1)
        obj = cls.__new__(cls)
        obj._buf = np.ascontiguousarray(arr)
        return obj

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def dtype(self) -> np.dtype:
        """Return the element dtype."""
        return self._buf.dtype

    def __len__(self) -> int:
        return int(self._buf.shape[0])

    def __iter__(self) -> Iterator[Any]:
        return iter(self._buf)

    def __repr__(self) -> str:
        return f"ElementStorage(length={len(self)}, dtype={self._buf.dtype})"

    # ------------------------------------------------------------------
    # Element access
    # ------------------------------------------------------------------
    def __getitem__(self, offset: int) -> Any:
        return self._buf[offset]

    def __setitem__(self, offset: int, value: Any) -> None:
        self._buf[offset] = _as_element(value, self._buf.dtype)

    def view(self) -> np.ndarray:
        """
        Return a read-only 1-D NumPy view of the buffer.

        Notes
        -----
        The view aliases the storage and becomes stale after `resize`/`append`.
        Callers must not keep it beyond the current operation.
        """
        v = self._buf.view()
        v.flags.writeable = False
        return v

    def write_block(self, offsets: np.ndarray, values: np.ndarray) -> None:
        """
        Scatter `values` into the positions listed in `offsets`.

        Values are converted to the storage dtype (unsafe cast).
        """
        self._buf[offsets] = np.asarray(values).astype(self._buf.dtype, copy=False)

    def write_all(self, values: np.ndarray) -> None:
        """
        Overwrite every element with `values` (flattened row-major, same length).
        """
        src = np.asarray(values).reshape(-1)
        if src.shape[0] != self._buf.shape[0]:
            raise ValueError(
                f"write_all expects {self._buf.shape[0]} values, got {src.shape[0]}"
            )
        self._buf[...] = src.astype(self._buf.dtype, copy=False)

    # ------------------------------------------------------------------
    # Capacity changes
    # ------------------------------------------------------------------
    def fill(self, value: Number) -> None:
        """Assign `value` to every element."""
        self._buf.fill(_as_element(value, self._buf.dtype))

    def resize(self, length: int, fill: Number = 0) -> None:
        """
        Replace the buffer with one of `length` elements, each set to `fill`.

        Existing values are discarded.
        """
        if length < 0:
            raise ValueError(f"storage length must be non-negative, got {length}")
        dt = self._buf.dtype
        self._buf = np.full((int(length),), _as_element(fill, dt), dtype=dt)

    def append(self, value: Number) -> None:
        """Append one element at the end."""
        self._buf = np.append(self._buf, _as_element([value], self._buf.dtype))

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------
    def copy(self) -> "ElementStorage":
        """Return a deep copy."""
        obj = ElementStorage.__new__(ElementStorage)
        obj._buf = self._buf.copy()
        return obj

    def astype(self, dtype: Any) -> "ElementStorage":
        """Return a deep copy converted to `dtype` (unsafe cast)."""
        dt = resolve_dtype(dtype)
        obj = ElementStorage.__new__(ElementStorage)
        obj._buf = self._buf.astype(dt, copy=True)
        return obj
