"""
Contraction kernel registry and dispatch utilities.

This module defines `ContractionKernel`, the registry through which
`Tensor.dot` resolves the routine that actually computes a tensor contraction.

Design
------
- Kernels are registered by string name via a decorator-based registry.
- A kernel is a pure function over NumPy arrays:

      kernel(a, b, a_axes, b_axes, out_dtype) -> np.ndarray

  where `a` and `b` are already shaped operands, `a_axes[k]` is paired with
  `b_axes[k]`, and the result has shape
  ``free_dims(a) + free_dims(b)`` and dtype `out_dtype`.
- Validation (axis ranges, duplicates, paired extents) is done by the tensor
  before dispatch; kernels may assume valid input.

Usage example
-------------
Registering a kernel:

    @ContractionKernel.register_kernel("my_kernel")
    def my_kernel(a, b, a_axes, b_axes, out_dtype):
        ...

Dispatching:

    kernel = ContractionKernel("tensordot")
    out = kernel(a, b, (1,), (0,), np.dtype("float64"))
"""

from __future__ import annotations

from typing import Callable, ClassVar, Dict, Sequence

import numpy as np
from typing_extensions import TypeVar

KernelFn = Callable[[np.ndarray, np.ndarray, Sequence[int], Sequence[int], np.dtype], np.ndarray]
T = TypeVar("T", bound=KernelFn)


class ContractionKernel:
    """
    Registry-backed contraction kernel dispatcher.

    Usage
    -----
    Register:
        @ContractionKernel.register_kernel("loop")
        def loop(a, b, a_axes, b_axes, out_dtype): ...

    Dispatch:
        kernel = ContractionKernel("loop")
        kernel(a, b, a_axes, b_axes, out_dtype)
    """

    KERNELS: ClassVar[Dict[str, KernelFn]] = {}

    def __init__(self, kernel_name: str) -> None:
        try:
            self._kernel: KernelFn = self.KERNELS[kernel_name]
        except KeyError as e:
            available = ", ".join(sorted(self.KERNELS)) or "<none>"
            raise ValueError(
                f"Unsupported contraction kernel: {kernel_name!r}. "
                f"Available: {available}"
            ) from e
        self._name = kernel_name

    @property
    def name(self) -> str:
        """Return the registry name of the resolved kernel."""
        return self._name

    @classmethod
    def register_kernel(cls, name: str, *, overwrite: bool = False) -> Callable[[T], T]:
        """
        Decorator to register a contraction kernel under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the kernel later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Kernel name must be a non-empty string")

        def decorator(func: T) -> T:
            if not overwrite and name in cls.KERNELS:
                raise ValueError(f"Contraction kernel already registered: {name!r}")
            cls.KERNELS[name] = func
            return func

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered kernel names (sorted)."""
        return tuple(sorted(cls.KERNELS))

    def __call__(
        self,
        a: np.ndarray,
        b: np.ndarray,
        a_axes: Sequence[int],
        b_axes: Sequence[int],
        out_dtype: np.dtype,
    ) -> np.ndarray:
        """
        Run the resolved kernel.

        Returns
        -------
        np.ndarray
            Contiguous array of shape ``free(a) + free(b)`` and dtype `out_dtype`.
        """
        out = self._kernel(a, b, tuple(a_axes), tuple(b_axes), out_dtype)
        return np.asarray(out, dtype=out_dtype, order="C")
