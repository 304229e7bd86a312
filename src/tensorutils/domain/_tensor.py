"""
Tensor interface definitions.

This module defines the domain-level interface for tensor-like objects using
structural typing. The interface captures the backend-agnostic surface that
collaborators (file I/O, contraction kernels, tests) rely on, so they can be
written against `ITensor` instead of the concrete NumPy-backed `Tensor`.

Notes
-----
The protocol mirrors the public API of the infrastructure `Tensor`. Concrete
implementations may add helpers, but collaborators must only depend on what
is declared here.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional, Protocol, Sequence, Union, runtime_checkable

Number = Union[int, float]


@runtime_checkable
class ITensor(Protocol):
    """
    Tensor interface.

    An `ITensor` is a multi-dimensional array with a row-major contiguous
    layout, a single numeric element type, and an optional fixed rank.

    Notes
    -----
    - Shape-changing operations on a fixed-rank tensor must fail rather than
      change the rank.
    - Every derivation (transpose, slice, dot, cast) returns a new tensor
      with its own storage; no method returns a view aliasing another
      tensor's storage.
    """

    # ---------------------------------------------------------------------
    # Layout
    # ---------------------------------------------------------------------
    @property
    def shape(self) -> tuple[int, ...]:
        """
        Return the dimension sizes.

        Returns
        -------
        tuple[int, ...]
            One entry per axis; ``()`` for a scalar.
        """
        ...

    @property
    def rank(self) -> int:
        """Return the number of axes."""
        ...

    @property
    def size(self) -> int:
        """Return the total number of elements."""
        ...

    @property
    def strides(self) -> tuple[int, ...]:
        """Return row-major element strides."""
        ...

    @property
    def dtype(self) -> Any:
        """
        Return the element type.

        Returns
        -------
        Any
            Backend dtype descriptor (``numpy.dtype`` in the NumPy backend).
        """
        ...

    @property
    def fixed_rank(self) -> Optional[int]:
        """Return the locked rank, or None for a dynamic-rank tensor."""
        ...

    # ---------------------------------------------------------------------
    # Element access
    # ---------------------------------------------------------------------
    def at(self, *indices: int) -> Any:
        """
        Read one element by (possibly partial) multi-index.

        Missing trailing indices default to 0.

        Raises
        ------
        RankMismatchError
            If more indices than axes are supplied.
        IndexError
            If an index is out of range.
        ShapeMismatchError
            If the tensor is rank-0 and an index is supplied.
        """
        ...

    def set_at(self, indices: Sequence[int], value: Number) -> None:
        """Write one element by (possibly partial) multi-index."""
        ...

    def iter_flat(self) -> Iterator[Any]:
        """Yield every element in row-major order."""
        ...

    def to_numpy(self) -> Any:
        """
        Return a copy of the data as a backend-native array shaped `shape`.
        """
        ...

    # ---------------------------------------------------------------------
    # Shape mutation and derivations
    # ---------------------------------------------------------------------
    def alloc(self, dims: Sequence[int], fill: Number = 0) -> "ITensor":
        """
        Replace shape and storage, filling every element with `fill`.

        Raises
        ------
        RankMismatchError
            If the tensor has a fixed rank and ``len(dims)`` differs from it.
        """
        ...

    def reshape(self, dims: Sequence[int]) -> "ITensor":
        """Change the shape in place while keeping the element count."""
        ...

    def transpose(self, perm: Optional[Sequence[int]] = None) -> "ITensor":
        """Return a new tensor whose axis ``i`` is this tensor's axis ``perm[i]``."""
        ...

    def assign(
        self,
        source: "ITensor",
        dest_axes: Sequence[int],
        dest_offsets: Sequence[int] = (),
    ) -> None:
        """Overwrite a rectangular region of this tensor with `source`'s elements."""
        ...

    def dot(
        self,
        other: "ITensor",
        self_axes: Sequence[int],
        other_axes: Sequence[int],
        self_offsets: Optional[Sequence[int]] = None,
        *,
        kernel: Optional[str] = None,
    ) -> "ITensor":
        """Contract this tensor with `other` over paired axes."""
        ...

    def copy_from(self, other: "ITensor") -> None:
        """Replace shape and data with `other`'s, converting element types."""
        ...

    def clone(self) -> "ITensor":
        """Return a deep copy."""
        ...

    def astype(self, dtype: Any) -> "ITensor":
        """Return a copy converted to `dtype`."""
        ...
