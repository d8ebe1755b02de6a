# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Process-wide defaults: element dtype for numeric factories and the RNG."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

import numpy as np

# Supported dtype names for the numeric factories
_SUPPORTED_DTYPES = {"float32", "float64", "int32", "int64", "bool"}

_default_dtype = "float32"
_generator = np.random.default_rng()


def _validate_dtype(dtype: str) -> str:
    if dtype not in _SUPPORTED_DTYPES:
        raise ValueError(f"Unsupported dtype '{dtype}'")
    return dtype


# Global default dtype management


def set_default_dtype(dtype: str) -> None:
    """Set the global default data type for new tensors."""

    global _default_dtype
    _default_dtype = _validate_dtype(dtype)


def get_default_dtype() -> str:
    """Get the current global default data type."""

    return _default_dtype


@contextmanager
def default_dtype(dtype: str) -> Iterator[str]:
    """Temporarily switch the default dtype, restoring it on exit."""

    previous = get_default_dtype()
    set_default_dtype(dtype)
    try:
        yield dtype
    finally:
        set_default_dtype(previous)


def resolve_dtype(dtype: Optional[str]) -> np.dtype:
    """Map ``None`` to the default dtype and validate explicit names."""

    if dtype is None:
        return np.dtype(_default_dtype)
    return np.dtype(_validate_dtype(dtype))


# Random number generation


def manual_seed(seed: int) -> None:
    """Reseed the generator used by :func:`stridetensor.rand`."""

    global _generator
    _generator = np.random.default_rng(seed)


def get_generator() -> np.random.Generator:
    """Return the generator currently backing random factories."""

    return _generator


__all__ = [
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "resolve_dtype",
    "manual_seed",
    "get_generator",
]
