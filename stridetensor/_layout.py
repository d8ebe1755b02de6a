# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Row-major shape and stride arithmetic shared by every tensor view."""

from __future__ import annotations

import operator
from typing import Sequence, Tuple, Union

from .errors import ShapeMismatchError

Shape = Tuple[int, ...]


def size_and_strides(shape: Sequence[int]) -> Tuple[int, Shape]:
    """Return ``(size, strides)`` for a row-major layout of ``shape``.

    The last dimension gets stride 1 and each earlier dimension steps over
    the product of the extents to its right. An empty shape describes a
    scalar, which occupies a single slot and has no strides.
    """

    strides = [0] * len(shape)
    acc = 1
    for d in range(len(shape) - 1, -1, -1):
        strides[d] = acc
        acc *= shape[d]
    return acc, tuple(strides)


def normalize_shape(
    *shape: Union[int, Sequence[int]], allow_inferred: bool = False
) -> Shape:
    """Accept ``f(2, 3)``, ``f((2, 3))`` and ``f([2, 3])`` alike.

    With ``allow_inferred`` a ``-1`` entry is passed through for
    :func:`infer_shape` to resolve.
    """

    if len(shape) == 1 and isinstance(shape[0], (list, tuple)):
        shape = tuple(shape[0])

    extents = []
    for extent in shape:
        try:
            value = operator.index(extent)
        except TypeError:
            raise TypeError(
                f"shape entries must be integers, got {type(extent).__name__}"
            ) from None
        if value < 0 and not (allow_inferred and value == -1):
            raise ValueError(f"negative dimension {value} in shape {tuple(shape)}")
        extents.append(value)
    return tuple(extents)


def infer_shape(shape: Sequence[int], size: int) -> Shape:
    """Resolve a single ``-1`` entry of a reshape target against ``size``."""

    unknown = [d for d, extent in enumerate(shape) if extent == -1]
    if not unknown:
        return tuple(shape)
    if len(unknown) > 1:
        raise ShapeMismatchError("only one dimension can be inferred")

    known = 1
    for extent in shape:
        if extent != -1:
            known *= extent
    if known == 0 or size % known != 0:
        raise ShapeMismatchError(
            f"shape {tuple(shape)} is invalid for a tensor of size {size}"
        )
    resolved = list(shape)
    resolved[unknown[0]] = size // known
    return tuple(resolved)


def is_contiguous(shape: Sequence[int], strides: Sequence[int]) -> bool:
    """Check whether ``strides`` walk ``shape`` in plain row-major order."""

    _, expected = size_and_strides(shape)
    return all(
        extent == 1 or stride == want
        for extent, stride, want in zip(shape, strides, expected)
    )


def max_offset(offset: int, shape: Sequence[int], strides: Sequence[int]) -> int:
    """Largest flat offset reachable from ``offset`` when no extent is zero."""

    return offset + sum((extent - 1) * stride for extent, stride in zip(shape, strides))


__all__ = [
    "Shape",
    "size_and_strides",
    "normalize_shape",
    "infer_shape",
    "is_contiguous",
    "max_offset",
]
