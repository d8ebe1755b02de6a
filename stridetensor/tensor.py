# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""
Strided tensor views over shared buffers.
"""

from __future__ import annotations

import logging
import operator
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from ._buffer import Buffer
from ._config import get_generator, resolve_dtype
from ._display import render, render_repr
from ._layout import (
    Shape,
    infer_shape,
    is_contiguous,
    max_offset,
    normalize_shape,
    size_and_strides,
)
from ._traversal import OffsetIterator, TensorIterator, gather_offsets, to_python
from .errors import DimensionalityError, IndexOutOfRangeError, ShapeMismatchError

logger = logging.getLogger(__name__)

Index = Union[int, Sequence[int]]


class Tensor:
    """
    An N-dimensional view onto a shared :class:`Buffer`.

    A tensor is only metadata: the buffer it reads from, the flat offset of
    its first logical element, and a row-major ``shape``/``strides`` pair.
    Indexing, reshaping, flattening and :meth:`clone` all return new views
    over the same buffer; :meth:`deep_clone` is the only way to obtain an
    independent copy.
    """

    __slots__ = ("_buffer", "_offset", "_shape", "_strides", "_size")

    @classmethod
    def _wrap_buffer(
        cls,
        buffer: Buffer,
        shape: Sequence[int],
        offset: int = 0,
        strides: Optional[Sequence[int]] = None,
    ) -> "Tensor":
        """Instantiate a view of ``buffer`` without going through ``__init__``.

        ``strides`` default to the row-major strides of ``shape``. The view
        is rejected if any offset it can reach lies outside the buffer.
        """

        size, default_strides = size_and_strides(shape)
        strides = default_strides if strides is None else tuple(strides)
        if size > 0 and max_offset(offset, shape, strides) >= len(buffer):
            raise IndexOutOfRangeError(
                f"view of shape {tuple(shape)} at offset {offset} exceeds "
                f"buffer of length {len(buffer)}"
            )

        instance = cls.__new__(cls)
        instance._buffer = buffer
        instance._offset = offset
        instance._shape = tuple(shape)
        instance._strides = strides
        instance._size = size
        return instance

    def __init__(self, data: Any, dtype: Optional[str] = None):
        """
        Initialize a tensor from nested data.

        Args:
            data: Nested lists/tuples, a NumPy array, a scalar, or another tensor
            dtype: One of the supported dtype names; floats default to the global
                default dtype

        Examples:
            >>> t1 = Tensor([1, 2, 3])
            >>> t2 = Tensor([[1, 2], [3, 4]], dtype='float64')
        """
        if dtype is not None:
            dtype = str(resolve_dtype(dtype))
        if isinstance(data, Tensor):
            # Copy constructor
            if dtype is None:
                dtype = data.dtype
            data = data.numpy()

        is_array = isinstance(data, np.ndarray)
        array = np.asarray(data, dtype=dtype)
        if dtype is None and not is_array and array.dtype.kind == "f":
            array = array.astype(resolve_dtype(None), copy=False)
        self._adopt(Tensor._wrap_buffer(Buffer(array), array.shape))

    def _adopt(self, other: "Tensor") -> None:
        self._buffer = other._buffer
        self._offset = other._offset
        self._shape = other._shape
        self._strides = other._strides
        self._size = other._size

    # Core properties
    @property
    def shape(self) -> Shape:
        """Extent of every dimension."""
        return self._shape

    @property
    def strides(self) -> Shape:
        """Flat-offset step per unit index in each dimension."""
        return self._strides

    @property
    def size(self) -> int:
        """Total number of logical elements."""
        return self._size

    @property
    def offset(self) -> int:
        """Buffer position of logical element 0."""
        return self._offset

    @property
    def ndim(self) -> int:
        """Number of dimensions."""
        return len(self._shape)

    rank = ndim

    @property
    def dtype(self) -> str:
        """Name of the buffer's element type."""
        return str(self._buffer.dtype)

    @property
    def buffer(self) -> Buffer:
        """The storage shared with every related view."""
        return self._buffer

    # Basic tensor info methods
    def numel(self) -> int:
        return self._size

    def dim(self) -> int:
        return self.ndim

    def is_scalar(self) -> bool:
        return not self._shape

    def is_contiguous(self) -> bool:
        """Check if the view walks its buffer in plain row-major order."""
        return is_contiguous(self._shape, self._strides)

    def shares_buffer(self, other: "Tensor") -> bool:
        """Return ``True`` when both tensors alias the same storage."""
        return self._buffer is other._buffer

    # Indexing
    def _resolve_offset(self, index: Sequence[int], tile: bool) -> int:
        if len(index) > len(self._shape):
            raise DimensionalityError(
                f"index has too many dimensions: got {len(index)} entries "
                f"for a tensor of rank {len(self._shape)}"
            )

        offset = self._offset
        for dim, (value, extent) in enumerate(zip(index, self._shape)):
            if tile:
                if extent == 0:
                    raise IndexOutOfRangeError(
                        f"cannot tile index {value} over empty dimension {dim}"
                    )
                value %= extent
            elif not 0 <= value < extent:
                raise IndexOutOfRangeError(
                    f"index {value} is out of range for dimension {dim}"
                )
            offset += value * self._strides[dim]
        return offset

    def get(self, index: Index, tile: bool = False) -> "Tensor":
        """Return the sub-view selected by a leading partial index.

        Indexing ``k`` leading dimensions of an ``n``-D tensor yields an
        ``(n - k)``-D view over the same buffer; a full index yields a
        scalar view. With ``tile`` each entry wraps modulo its extent.
        """

        index = _as_index(index)
        offset = self._resolve_offset(index, tile)
        consumed = len(index)
        return Tensor._wrap_buffer(
            self._buffer,
            self._shape[consumed:],
            offset,
            self._strides[consumed:],
        )

    def __getitem__(self, key: Index) -> "Tensor":
        """Tensor indexing with Python-style negative indices."""
        index = _as_index(key)
        normalized = [
            value + extent if value < 0 else value
            for value, extent in zip(index, self._shape)
        ]
        normalized.extend(index[len(normalized):])
        return self.get(normalized)

    # Tensor manipulation methods
    def reshape(self, *shape: Union[int, Sequence[int]]) -> "Tensor":
        """Reinterpret the view's elements under a new shape.

        The result shares the buffer and keeps this view's offset. One
        extent may be ``-1`` and is inferred from the others.
        """

        requested = normalize_shape(*shape, allow_inferred=True)
        new_shape = infer_shape(requested, self._size)
        new_size, new_strides = size_and_strides(new_shape)
        if new_size != self._size:
            raise ShapeMismatchError(
                f"new shape {new_shape} cannot be of a different size: "
                f"{new_size} != {self._size}"
            )
        if not self.is_contiguous():
            raise ShapeMismatchError(
                "cannot reshape a view that is not contiguous; call deep_clone() first"
            )
        return Tensor._wrap_buffer(self._buffer, new_shape, self._offset, new_strides)

    def view(self, *shape: Union[int, Sequence[int]]) -> "Tensor":
        """Alias for reshape."""
        return self.reshape(*shape)

    def flatten(self) -> "Tensor":
        """One-dimensional view of the elements in traversal order."""
        return self.reshape(self._size)

    def clone(self) -> "Tensor":
        """Shallow copy: new metadata, same buffer."""
        return Tensor._wrap_buffer(
            self._buffer, self._shape, self._offset, self._strides
        )

    def deep_clone(self) -> "Tensor":
        """Copy the view's elements into a fresh, contiguous buffer."""
        with self._buffer.borrow() as data:
            gathered = data[gather_offsets(self)]
        logger.debug("deep clone of %s view into %d elements", self._shape, self._size)
        return Tensor._wrap_buffer(Buffer(gathered), self._shape)

    # Traversal
    def offsets(self) -> OffsetIterator:
        """Buffer offsets of the logical elements in row-major order."""
        return OffsetIterator(self._shape, self._strides, self._offset)

    def __iter__(self) -> TensorIterator:
        return TensorIterator(self)

    def __len__(self) -> int:
        return self._size

    # Data conversion methods
    def numpy(self) -> np.ndarray:
        """Copy the logical contents into a new NumPy array."""
        with self._buffer.borrow() as data:
            return data[gather_offsets(self)].reshape(self._shape)

    def tolist(self) -> Any:
        """Convert to nested Python lists; scalars become a bare value."""
        if self.is_scalar():
            return self.item()
        return _nest(list(self), self._shape)

    def item(self) -> Any:
        """Return the Python value of a single-element tensor."""
        if self._size != 1:
            raise ShapeMismatchError(
                "only one element tensors can be converted to Python scalars"
            )
        with self._buffer.borrow() as data:
            return to_python(data[next(self.offsets())])

    # String representations
    def __repr__(self) -> str:
        return render_repr(self)

    def __str__(self) -> str:
        return render(self)

    # Static tensor creation methods
    @staticmethod
    def from_array(values: Sequence[Any], dtype: Optional[str] = None) -> "Tensor":
        """Create a one-dimensional tensor holding ``values`` in order."""
        buffer = Buffer.from_elements(values, dtype)
        return Tensor._wrap_buffer(buffer, (len(buffer),))

    @staticmethod
    def from_iterable(values: Iterable[Any], dtype: Optional[str] = None) -> "Tensor":
        """Consume a finite iterable into a one-dimensional tensor."""
        return Tensor.from_array(list(values), dtype)

    @staticmethod
    def from_shape(
        value: Any,
        shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Create a tensor of ``shape`` with every element equal to ``value``."""
        shape = normalize_shape(shape)
        size, _ = size_and_strides(shape)
        if np.ndim(value) == 0 and not isinstance(value, (tuple, list)):
            data = np.full(size, value, dtype=dtype)
        else:
            data = np.empty(size, dtype=object if dtype is None else dtype)
            data.fill(value)
        return Tensor._wrap_buffer(Buffer(data), shape)

    @staticmethod
    def scalar(value: Any, dtype: Optional[str] = None) -> "Tensor":
        """Create a rank-0 tensor."""
        return Tensor.from_shape(value, (), dtype)

    @staticmethod
    def rand(
        *shape: Union[int, Sequence[int]],
        dtype: Optional[str] = None,
        source: Optional[Callable[[], Any]] = None,
    ) -> "Tensor":
        """Create a tensor of independently drawn random values.

        Without ``source`` values come from the generator seeded by
        :func:`manual_seed`: uniform ``[0, 1)`` for floats, the full range for
        integers and fair coin flips for bools. ``source`` is a zero-argument
        callable producing one element per call, for any other element type.
        """
        shape = normalize_shape(*shape)
        size, _ = size_and_strides(shape)
        if source is not None:
            buffer = Buffer.from_elements((source() for _ in range(size)), dtype)
            return Tensor._wrap_buffer(buffer, shape)

        np_dtype = resolve_dtype(dtype)
        rng = get_generator()
        if np_dtype.kind == "f":
            data = rng.random(size, dtype=np_dtype)
        elif np_dtype.kind == "b":
            data = rng.integers(0, 2, size).astype(np_dtype)
        else:
            info = np.iinfo(np_dtype)
            data = rng.integers(info.min, info.max, size, dtype=np_dtype, endpoint=True)
        return Tensor._wrap_buffer(Buffer(data), shape)

    @staticmethod
    def arange(
        start: Union[int, range],
        end: Optional[int] = None,
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Create a tensor from the integers of ``range(start, end)``.

        ``start`` may also be a ``range`` object, whose step is honoured.
        A single integer argument counts up from zero.
        """
        if isinstance(start, range):
            if end is not None:
                raise TypeError("arange() takes no end when given a range")
            values = start
        elif end is None:
            values = range(operator.index(start))
        else:
            values = range(operator.index(start), operator.index(end))
        return _from_integers(values, dtype)

    @staticmethod
    def step_range(
        start: int, end: int, step: int, dtype: Optional[str] = None
    ) -> "Tensor":
        """Create a tensor from ``range(start, end, step)``."""
        if step == 0:
            raise ValueError("step_range() step must not be zero")
        values = range(operator.index(start), operator.index(end), operator.index(step))
        return _from_integers(values, dtype)

    @staticmethod
    def linspace(
        start: float,
        end: float,
        steps: int,
        dtype: Optional[str] = None,
    ) -> "Tensor":
        """Create ``steps`` evenly spaced values from ``start`` to ``end``.

        Both endpoints are included: the spacing is ``(end - start) /
        (steps - 1)`` and the last element equals ``end`` exactly.
        """
        if steps <= 0:
            raise ValueError("Number of steps must be positive")

        data = np.linspace(start, end, steps, endpoint=True, dtype=resolve_dtype(dtype))
        return Tensor._wrap_buffer(Buffer(data), (steps,))

    @staticmethod
    def from_numpy(array: np.ndarray) -> "Tensor":
        """Create a tensor holding a copy of a NumPy array of any rank."""
        array = np.asarray(array)
        return Tensor._wrap_buffer(Buffer(array), array.shape)


def _as_index(index: Index) -> Tuple[int, ...]:
    if isinstance(index, (list, tuple)):
        return tuple(operator.index(value) for value in index)
    return (operator.index(index),)


def _nest(elements: List[Any], shape: Sequence[int]) -> List[Any]:
    if len(shape) == 1:
        return elements
    step = len(elements) // shape[0] if shape[0] else 0
    return [
        _nest(elements[i * step:(i + 1) * step], shape[1:]) for i in range(shape[0])
    ]


def _from_integers(values: range, dtype: Optional[str]) -> Tensor:
    data = np.fromiter(values, dtype=np.int64, count=len(values))
    return Tensor._wrap_buffer(Buffer(data, dtype=resolve_dtype(dtype)), (len(values),))


# Convenience functions for tensor creation
def tensor(data: Any, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from data."""
    return Tensor(data, dtype=dtype)


def from_array(values: Sequence[Any], dtype: Optional[str] = None) -> Tensor:
    """Create a one-dimensional tensor holding ``values`` in order."""
    return Tensor.from_array(values, dtype=dtype)


def from_iterable(values: Iterable[Any], dtype: Optional[str] = None) -> Tensor:
    """Consume a finite iterable into a one-dimensional tensor."""
    return Tensor.from_iterable(values, dtype=dtype)


def from_shape(
    value: Any, shape: Union[int, Sequence[int]], dtype: Optional[str] = None
) -> Tensor:
    """Create a tensor of ``shape`` filled with ``value``."""
    return Tensor.from_shape(value, shape, dtype=dtype)


def scalar(value: Any, dtype: Optional[str] = None) -> Tensor:
    """Create a rank-0 tensor."""
    return Tensor.scalar(value, dtype=dtype)


def rand(
    *shape: Union[int, Sequence[int]],
    dtype: Optional[str] = None,
    source: Optional[Callable[[], Any]] = None,
) -> Tensor:
    """Create a tensor with random values."""
    return Tensor.rand(*shape, dtype=dtype, source=source)


def arange(
    start: Union[int, range], end: Optional[int] = None, dtype: Optional[str] = None
) -> Tensor:
    """Create a tensor from an integer range."""
    return Tensor.arange(start, end, dtype=dtype)


def step_range(start: int, end: int, step: int, dtype: Optional[str] = None) -> Tensor:
    """Create a tensor from a stepped integer range."""
    return Tensor.step_range(start, end, step, dtype=dtype)


def linspace(
    start: float, end: float, steps: int, dtype: Optional[str] = None
) -> Tensor:
    """Create a tensor with linearly spaced values."""
    return Tensor.linspace(start, end, steps, dtype=dtype)


def from_numpy(array: np.ndarray) -> Tensor:
    """Create a tensor from a NumPy array."""
    return Tensor.from_numpy(array)


# Export all public symbols
__all__ = [
    "Tensor",
    "tensor",
    "from_array",
    "from_iterable",
    "from_shape",
    "scalar",
    "rand",
    "arange",
    "step_range",
    "linspace",
    "from_numpy",
]
