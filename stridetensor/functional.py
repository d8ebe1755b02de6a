# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Free-function forms of the structural tensor operations."""

from __future__ import annotations

from typing import Sequence, Union

from ._display import render
from .tensor import Index, Tensor


def reshape(input: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return input.reshape(*shape)


def view(input: Tensor, *shape: Union[int, Sequence[int]]) -> Tensor:
    return input.view(*shape)


def flatten(input: Tensor) -> Tensor:
    return input.flatten()


def get(input: Tensor, index: Index, tile: bool = False) -> Tensor:
    return input.get(index, tile=tile)


def deep_clone(input: Tensor) -> Tensor:
    return input.deep_clone()


__all__ = ["reshape", "view", "flatten", "get", "deep_clone", "render"]
