"""
Tensor-related exceptions for tensorutils.

This module defines the error kinds raised by tensor operations. Every
operation validates its inputs before touching any storage, so when one of
these errors propagates the receiving tensor is guaranteed to be unchanged.

Error kinds
-----------
- `ShapeMismatchError`: element-count or axis-size preconditions are violated
  (wrong total size for assignment/operators, a non-permutation passed to
  transpose, mismatched contracted-axis sizes, slicing a rank-0 tensor).
- `RankMismatchError`: an operation would change the rank of a rank-fixed
  tensor, or more indices than axes were supplied.
- `UnableToOpenFileError`: the file I/O layer cannot access a path.

Indices, offsets and axis numbers that address outside a tensor's bounds
raise Python's built-in `IndexError`.
"""

from __future__ import annotations


class TensorUtilsError(RuntimeError):
    """
    Base class for all errors raised by tensorutils.

    Catching this class catches every tensorutils-specific failure while
    leaving built-in errors (e.g., `IndexError`, `TypeError`) untouched.
    """


class ShapeMismatchError(TensorUtilsError):
    """
    Raised when an operation's shape or element-count preconditions fail.

    Attributes
    ----------
    op : str
        Name of the operation that rejected its operands (e.g., "assign").
    expected : object
        Expected shape, size or axis description (may be None).
    actual : object
        Offending shape, size or axis description (may be None).
    """

    def __init__(
        self,
        op: str,
        message: str,
        *,
        expected: object = None,
        actual: object = None,
    ) -> None:
        """
        Initialize the ShapeMismatchError.

        Parameters
        ----------
        op : str
            The operation name that failed validation.
        message : str
            Human-readable description of the violated precondition.
        expected : object, optional
            The value the operation required.
        actual : object, optional
            The value the operation received.
        """
        super().__init__(f"{op}: {message}")
        self.op = op
        self.expected = expected
        self.actual = actual


class RankMismatchError(TensorUtilsError):
    """
    Raised when an operation would change the rank of a fixed-rank tensor,
    or when a multi-index carries more entries than the tensor has axes.

    Attributes
    ----------
    op : str
        Name of the operation that failed.
    expected_rank : int
        The rank the tensor is locked to (or its current rank).
    actual_rank : int
        The rank the operation attempted to use.
    """

    def __init__(self, op: str, expected_rank: int, actual_rank: int) -> None:
        """
        Initialize the RankMismatchError.

        Parameters
        ----------
        op : str
            The operation name that failed.
        expected_rank : int
            Rank allowed for the tensor.
        actual_rank : int
            Rank requested by the operation.
        """
        super().__init__(
            f"{op}: expected rank {expected_rank}, got rank {actual_rank}."
        )
        self.op = op
        self.expected_rank = expected_rank
        self.actual_rank = actual_rank


class UnableToOpenFileError(TensorUtilsError):
    """
    Raised when a tensor file cannot be opened for reading or writing.

    Attributes
    ----------
    path : str
        The path that could not be opened.
    mode : str
        "r" for reading, "w" for writing.
    """

    def __init__(self, path: str, mode: str) -> None:
        action = "reading" if mode == "r" else "writing"
        super().__init__(f"Unable to open file '{path}' for {action}.")
        self.path = path
        self.mode = mode
