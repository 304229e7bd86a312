"""
Tensor file format registry.

A file format is a codec class registered under a string name. `read` and
`write` resolve the codec by name and hand it an open file object; codecs never
open files themselves and never see `Tensor` objects, only NumPy arrays:

    codec.dump(arr, fh)          # arr: ndarray shaped like the tensor
    dims, flat, dtype = codec.load(fh, dtype)

Registering a format:

    @TensorFormat.register_format("my_format")
    class MyCodec(TensorCodec):
        binary = True
        ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import IO, Any, Callable, ClassVar, Dict, Optional, Type

import numpy as np
from typing_extensions import TypeVar


class TensorCodec(ABC):
    """
    Base class of tensor file codecs.

    Attributes
    ----------
    binary : bool
        True if the codec reads/writes bytes, False for text.
    """

    binary: ClassVar[bool] = False

    @abstractmethod
    def dump(self, arr: np.ndarray, fh: IO[Any]) -> None:
        """Write `arr` (shape and values) to the open file `fh`."""
        raise NotImplementedError

    @abstractmethod
    def load(
        self, fh: IO[Any], dtype: Optional[np.dtype]
    ) -> tuple[tuple[int, ...], np.ndarray, np.dtype]:
        """
        Read one tensor from the open file `fh`.

        Parameters
        ----------
        fh : IO
            Open file positioned at the start.
        dtype : np.dtype, optional
            Element type requested by the caller, if known.

        Returns
        -------
        tuple
            ``(dims, flat_values, dtype)`` with ``len(flat_values) == prod(dims)``.

        Raises
        ------
        ShapeMismatchError
            If the header is malformed or the value count does not match it.
        """
        raise NotImplementedError


C = TypeVar("C", bound=Type[TensorCodec])


class TensorFormat:
    """
    Registry-backed file format resolver.

    Usage
    -----
    Resolve:
        fmt = TensorFormat("text")
        fmt.codec.dump(arr, fh)
    """

    FORMATS: ClassVar[Dict[str, Type[TensorCodec]]] = {}

    def __init__(self, format_name: str) -> None:
        try:
            codec_cls = self.FORMATS[format_name]
        except KeyError as e:
            available = ", ".join(sorted(self.FORMATS)) or "<none>"
            raise ValueError(
                f"Unsupported tensor file format: {format_name!r}. "
                f"Available: {available}"
            ) from e
        self._name = format_name
        self._codec = codec_cls()

    @property
    def name(self) -> str:
        """Return the registry name of the resolved format."""
        return self._name

    @property
    def codec(self) -> TensorCodec:
        """Return the codec instance."""
        return self._codec

    @property
    def binary(self) -> bool:
        """Return True if files of this format are opened in binary mode."""
        return self._codec.binary

    @classmethod
    def register_format(cls, name: str, *, overwrite: bool = False) -> Callable[[C], C]:
        """
        Decorator to register a codec class under `name`.

        Parameters
        ----------
        name:
            Registry key used to retrieve the format later.
        overwrite:
            If False (default), raises if `name` is already registered.
        """
        if not isinstance(name, str) or not name:
            raise ValueError("Format name must be a non-empty string")

        def decorator(codec_cls: C) -> C:
            if not overwrite and name in cls.FORMATS:
                raise ValueError(f"Tensor file format already registered: {name!r}")
            cls.FORMATS[name] = codec_cls
            return codec_cls

        return decorator

    @classmethod
    def available(cls) -> tuple[str, ...]:
        """Return registered format names (sorted)."""
        return tuple(sorted(cls.FORMATS))
