"""
Reading and writing tensors to files.

`write` and `read` are the file-system facing half of tensor persistence:
they resolve paths and element types, open files, and delegate the byte
layout to a registered codec (`"text"` or `"binary"`).

Extension convention
--------------------
Every supported element type has a file extension (`DTYPE_EXTENSIONS`).
`write` appends it when the target path has no suffix, and `read` uses it to
infer the element type of text files:

    >>> write(Tensor((2, 3), 1.5), "weights")          # -> weights.f64
    >>> read("weights.f64").dtype
    dtype('float64')
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

from ...domain._errors import UnableToOpenFileError
from ...domain._tensor import ITensor
from .._dtypes import dtype_for_extension, extension_for, resolve_dtype
from ..config._settings import get_settings
from ..tensor import Tensor
from ._formats import TensorFormat

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _format_for(binary: bool) -> TensorFormat:
    return TensorFormat("binary" if binary else "text")


def write(tensor: ITensor, path: PathLike, *, binary: bool = False) -> Path:
    """
    Write `tensor` to `path`.

    Parameters
    ----------
    tensor : ITensor
        Tensor to persist.
    path : str or os.PathLike
        Target file. If it has no suffix, the extension of the tensor's
        element type is appended.
    binary : bool, optional
        Use the binary format instead of text. Defaults to False.

    Returns
    -------
    Path
        The path actually written.

    Raises
    ------
    UnableToOpenFileError
        If the file cannot be opened for writing.
    """
    target = Path(path)
    if not target.suffix:
        target = target.with_name(target.name + extension_for(tensor.dtype))

    fmt = _format_for(binary)
    try:
        fh = open(target, "wb" if fmt.binary else "w", encoding=None if fmt.binary else "utf-8")
    except OSError as e:
        raise UnableToOpenFileError(str(target), "w") from e

    with fh:
        fmt.codec.dump(tensor.to_numpy(), fh)

    logger.debug(
        "wrote %s tensor %s (%s) to %s", fmt.name, tensor.shape, tensor.dtype, target
    )
    return target


def read(path: PathLike, *, binary: bool = False, dtype: Any = None) -> Tensor:
    """
    Read a tensor from `path`.

    Parameters
    ----------
    path : str or os.PathLike
        Source file.
    binary : bool, optional
        Read the binary format instead of text. Defaults to False.
    dtype : Any, optional
        Element type of the result. When omitted, text files use the type
        registered for the file extension (or the configured default dtype for
        unknown extensions) and binary files use the type stored in the file.

    Returns
    -------
    Tensor
        A new dynamic-rank tensor.

    Raises
    ------
    UnableToOpenFileError
        If the file cannot be opened for reading.
    ShapeMismatchError
        If the header is malformed or the value count does not match it.
    """
    source = Path(path)
    requested = None if dtype is None else resolve_dtype(dtype)

    if requested is None and not binary:
        inferred = dtype_for_extension(source.suffix)
        if inferred is None:
            inferred = get_settings().default_dtype
            logger.debug(
                "unknown extension %r, reading %s as %s", source.suffix, source, inferred
            )
        codec_dtype = inferred
    else:
        codec_dtype = requested

    fmt = _format_for(binary)
    try:
        fh = open(source, "rb" if fmt.binary else "r", encoding=None if fmt.binary else "utf-8")
    except OSError as e:
        raise UnableToOpenFileError(str(source), "r") from e

    with fh:
        dims, values, file_dtype = fmt.codec.load(fh, codec_dtype)

    out_dtype = file_dtype if requested is None else requested
    logger.debug("read %s tensor %s (%s) from %s", fmt.name, dims, out_dtype, source)
    return Tensor.from_flat(dims, values, dtype=out_dtype)
