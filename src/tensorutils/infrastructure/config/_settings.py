"""
Library-wide settings.

This module holds the process-wide defaults used when a call does not specify
them explicitly:

- ``default_dtype``: element type of newly constructed tensors.
- ``contraction_kernel``: name of the registered kernel used by `Tensor.dot`.
- ``text_values_per_line``: line width cap used by the text file writer
  (0 means "one line per last-axis row").

Settings can be changed programmatically (`configure`, `default_dtype`),
loaded from the ``[tensorutils]`` table of a TOML file (`TensorSettings.load`)
or overridden through environment variables read at import time:

- ``TENSORUTILS_DEFAULT_DTYPE``
- ``TENSORUTILS_CONTRACTION_KERNEL``
"""

from __future__ import annotations

import logging
import os
import sys
import tomllib
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator

import numpy as np

from .._dtypes import resolve_dtype

logger = logging.getLogger(__name__)

ENV_DEFAULT_DTYPE = "TENSORUTILS_DEFAULT_DTYPE"
ENV_CONTRACTION_KERNEL = "TENSORUTILS_CONTRACTION_KERNEL"


@dataclass(frozen=True)
class TensorSettings:
    """Immutable snapshot of library defaults."""

    default_dtype: np.dtype = np.dtype(np.float64)
    contraction_kernel: str = "tensordot"
    text_values_per_line: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_dtype", resolve_dtype(self.default_dtype))
        if not isinstance(self.contraction_kernel, str) or not self.contraction_kernel:
            raise ValueError("contraction_kernel must be a non-empty string")
        if int(self.text_values_per_line) < 0:
            raise ValueError("text_values_per_line must be non-negative")
        object.__setattr__(self, "text_values_per_line", int(self.text_values_per_line))

    @classmethod
    def from_env(cls, environ: Any = None) -> "TensorSettings":
        """
        Build settings from environment variables, falling back to defaults.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Environment mapping; defaults to `os.environ`.
        """
        env = os.environ if environ is None else environ
        kwargs: dict[str, Any] = {}
        if env.get(ENV_DEFAULT_DTYPE):
            kwargs["default_dtype"] = env[ENV_DEFAULT_DTYPE]
        if env.get(ENV_CONTRACTION_KERNEL):
            kwargs["contraction_kernel"] = env[ENV_CONTRACTION_KERNEL]
        return cls(**kwargs)

    @classmethod
    def load(cls, config_path: str) -> "TensorSettings":
        """
        Load settings from the ``[tensorutils]`` table of a TOML file.

        Parameters
        ----------
        config_path : str
            Filesystem path to a TOML file.

        Returns
        -------
        TensorSettings
            Settings populated from the table; missing keys keep their defaults.

        Raises
        ------
        FileNotFoundError
            If no file exists at `config_path`.
        ValueError
            If the table contains unknown keys.
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found at {config_path}")

        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        table = data.get("tensorutils", {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(table) - known)
        if unknown:
            raise ValueError(f"Unknown tensorutils settings: {', '.join(unknown)}")
        return cls(**table)


_settings: TensorSettings = TensorSettings.from_env()


def get_settings() -> TensorSettings:
    """Return the active settings snapshot."""
    return _settings


def set_settings(settings: TensorSettings) -> TensorSettings:
    """
    Install `settings` as the active snapshot and return the previous one.
    """
    global _settings
    if not isinstance(settings, TensorSettings):
        raise TypeError(f"set_settings expects TensorSettings, got {type(settings)!r}")
    previous = _settings
    _settings = settings
    logger.debug("tensorutils settings changed: %r", settings)
    return previous


def configure(**changes: Any) -> TensorSettings:
    """
    Update selected fields of the active settings.

    Examples
    --------
    >>> configure(default_dtype="float32", contraction_kernel="loop")

    Returns
    -------
    TensorSettings
        The new active settings.
    """
    new = replace(_settings, **changes)
    set_settings(new)
    return new


@contextmanager
def default_dtype(dtype: Any) -> Iterator[np.dtype]:
    """
    Temporarily change the default element type.

    The previous settings are restored on exit, including when the block
    raises. An unsupported dtype raises `TypeError` before anything changes.
    """
    new = replace(_settings, default_dtype=dtype)
    previous = set_settings(new)
    try:
        yield new.default_dtype
    finally:
        set_settings(previous)


def setup_logging(level: int | str = logging.INFO) -> None:
    """
    Attach a stdout stream handler to the ``tensorutils`` logger.

    Intended for applications and scripts; the library itself only emits
    records and never configures handlers on import.
    """
    root = logging.getLogger("tensorutils")
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    root.addHandler(handler)
    root.setLevel(level if isinstance(level, int) else level.upper())
