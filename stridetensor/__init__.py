# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

from typing import Iterable

from . import functional
from ._buffer import Buffer
from ._config import (
    default_dtype,
    get_default_dtype,
    get_generator,
    manual_seed,
    set_default_dtype,
)
from ._traversal import OffsetIterator, TensorIterator
from ._version import __version__, __version_tuple__
from .errors import (
    BorrowError,
    DimensionalityError,
    IndexOutOfRangeError,
    ShapeMismatchError,
    TensorError,
)
from .tensor import Tensor

functional = functional

# Tensor factories map directly to the static constructors.
tensor = Tensor
from_array = Tensor.from_array
from_iterable = Tensor.from_iterable
from_shape = Tensor.from_shape
scalar = Tensor.scalar
rand = Tensor.rand
arange = Tensor.arange
step_range = Tensor.step_range
linspace = Tensor.linspace
from_numpy = Tensor.from_numpy

_FUNCTIONAL_FORWARDERS: Iterable[str] = (
    "reshape",
    "view",
    "flatten",
    "get",
    "deep_clone",
    "render",
)

for _name in _FUNCTIONAL_FORWARDERS:
    globals()[_name] = getattr(functional, _name)


__all__ = [
    "Tensor",
    "Buffer",
    "OffsetIterator",
    "TensorIterator",
    "tensor",
    "functional",
    "from_array",
    "from_iterable",
    "from_shape",
    "scalar",
    "rand",
    "arange",
    "step_range",
    "linspace",
    "from_numpy",
    "reshape",
    "view",
    "flatten",
    "get",
    "deep_clone",
    "render",
    "set_default_dtype",
    "get_default_dtype",
    "default_dtype",
    "manual_seed",
    "get_generator",
    "TensorError",
    "DimensionalityError",
    "IndexOutOfRangeError",
    "ShapeMismatchError",
    "BorrowError",
    "__version__",
    "__version_tuple__",
]
