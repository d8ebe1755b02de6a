# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Nested-bracket text rendering for tensors."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from ._layout import size_and_strides

if TYPE_CHECKING:  # pragma: no cover - typing only
    from .tensor import Tensor


def render(tensor: "Tensor") -> str:
    """Render ``tensor`` like a nested array literal.

    Scalars render as their bare value. Otherwise every dimension boundary
    that opens or closes at a position adds a bracket, elements are separated
    by ``", "`` and each row break continues on a new line indented by the
    current nesting depth::

        [[1, 2]
         [3, 4]]
    """

    with tensor.buffer.borrow() as data:
        if tensor.is_scalar():
            return str(data[tensor.offset])

        size = tensor.size
        if size == 0:
            return "[]"

        # boundaries follow the logical row-major layout of the view
        _, strides = size_and_strides(tensor.shape)
        outer = strides[:-1]

        parts: List[str] = []
        depth = 0
        for i, index in enumerate(tensor.offsets()):
            opens = (1 if i == 0 else 0) + sum(1 for s in outer if i % s == 0)
            closes = (1 if i + 1 == size else 0) + sum(
                1 for s in outer if (i + 1) % s == 0
            )
            parts.append("[" * opens)
            parts.append(str(data[index]))
            if closes == 0:
                parts.append(", ")
            parts.append("]" * closes)
            depth += opens - closes
            if closes > 0 and depth > 0:
                parts.append("\n" + " " * depth)
        return "".join(parts)


def render_repr(tensor: "Tensor") -> str:
    """``tensor(...)`` wrapper with continuation lines aligned under it."""

    prefix = "tensor("
    body = render(tensor).replace("\n", "\n" + " " * len(prefix))
    return f"{prefix}{body}, dtype={tensor.dtype})"


__all__ = ["render", "render_repr"]
