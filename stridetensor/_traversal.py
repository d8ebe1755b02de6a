# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Row-major traversal of the flat buffer offsets covered by a view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, List, Sequence

import numpy as np

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .tensor import Tensor


class OffsetIterator:
    """Odometer over a view's logical indices, yielding buffer offsets.

    ``_counters`` holds the logical index of the next element and
    ``_offset`` its flat position; ``_done`` flips once the carry runs past
    the first dimension. A rank-0 view has nothing to carry through, so it
    yields its single offset and stops.
    """

    def __init__(self, shape: Sequence[int], strides: Sequence[int], offset: int):
        self._shape = tuple(shape)
        self._strides = tuple(strides)
        self._counters: List[int] = [0] * len(self._shape)
        self._offset = offset
        self._done = any(extent == 0 for extent in self._shape)

    def __iter__(self) -> "OffsetIterator":
        return self

    def __next__(self) -> int:
        if self._done:
            raise StopIteration
        current = self._offset
        if not self._shape:
            self._done = True
            return current

        for d in range(len(self._shape) - 1, -1, -1):
            self._counters[d] += 1
            self._offset += self._strides[d]
            if self._counters[d] < self._shape[d]:
                break
            # wrap this dimension and carry into the one on its left
            self._counters[d] = 0
            self._offset -= self._shape[d] * self._strides[d]
            if d == 0:
                self._done = True
        return current


class TensorIterator:
    """Yield the elements of a tensor in row-major order.

    The iterator works on a shallow clone, so it keeps the buffer alive on
    its own and is unaffected by what the caller does with its handle.
    """

    def __init__(self, tensor: "Tensor"):
        self._tensor = tensor.clone()
        self._offsets = self._tensor.offsets()

    def __iter__(self) -> "TensorIterator":
        return self

    def __next__(self) -> Any:
        index = next(self._offsets)
        with self._tensor.buffer.borrow() as data:
            return to_python(data[index])


def to_python(value: Any) -> Any:
    """Unwrap NumPy scalars into the equivalent builtin value."""

    if isinstance(value, np.generic):
        return value.item()
    return value


def gather_offsets(tensor: "Tensor") -> np.ndarray:
    """Collect every traversal offset of ``tensor`` into an index array."""

    return np.fromiter(tensor.offsets(), dtype=np.intp, count=tensor.size)


__all__ = ["OffsetIterator", "TensorIterator", "to_python", "gather_offsets"]
