# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Exceptions raised by tensor views and their buffers."""

from __future__ import annotations


class TensorError(Exception):
    """Base class for every error reported by stridetensor.

    Each concrete subclass also derives from the builtin exception a Python
    caller would expect, so ``except IndexError`` keeps working for indexing.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class DimensionalityError(TensorError, IndexError):
    """An index has more entries than the tensor has dimensions."""


class IndexOutOfRangeError(TensorError, IndexError):
    """A per-dimension index is outside the extent of that dimension."""


class ShapeMismatchError(TensorError, ValueError):
    """A target shape does not describe the same number of elements."""


class BorrowError(TensorError, RuntimeError):
    """A buffer borrow conflicts with one that is still active."""


__all__ = [
    "TensorError",
    "DimensionalityError",
    "IndexOutOfRangeError",
    "ShapeMismatchError",
    "BorrowError",
]
