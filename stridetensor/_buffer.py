# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

"""Shared element storage with runtime borrow checking."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

import numpy as np

from .errors import BorrowError

logger = logging.getLogger(__name__)


class Buffer:
    """A fixed-length, one-dimensional store shared by tensor views.

    Every view derived from one construction holds a reference to the same
    ``Buffer``; it is released when the last of them goes away. Access goes
    through :meth:`borrow` (shared, read-only) or :meth:`borrow_mut`
    (exclusive). Conflicting borrows raise :class:`BorrowError` instead of
    waiting, so a ``Buffer`` must not be shared across threads.
    """

    def __init__(self, data: Any, dtype: Any = None):
        array = np.array(data, dtype=dtype, copy=True)
        if array.ndim != 1:
            array = array.reshape(-1)
        self._data = array
        self._shared = 0
        self._exclusive = False
        logger.debug("allocated buffer of %d %s elements", len(array), array.dtype)

    @classmethod
    def from_elements(cls, elements: Any, dtype: Any = None) -> "Buffer":
        """Build a buffer holding ``elements`` one per slot.

        Unlike the constructor this never lets NumPy split nested elements
        (tuples, lists) into extra dimensions.
        """

        elements = list(elements)
        if dtype is None:
            try:
                array = np.asarray(elements)
            except ValueError:
                array = None
            if (
                array is not None
                and array.ndim == 1
                and len(array) == len(elements)
                and (array.dtype.kind not in "US" or _all_text(elements))
            ):
                return cls(array)
            dtype = object
        array = np.empty(len(elements), dtype=dtype)
        array[:] = elements
        return cls(array)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Buffer(len={len(self)}, dtype={self.dtype})"

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_borrowed(self) -> bool:
        """``True`` while at least one borrow of either kind is active."""
        return self._exclusive or self._shared > 0

    @property
    def is_borrowed_mut(self) -> bool:
        return self._exclusive

    @contextmanager
    def borrow(self) -> Iterator[np.ndarray]:
        """Yield a read-only view of the storage.

        Any number of shared borrows may overlap; an active exclusive borrow
        makes this fail immediately.
        """

        if self._exclusive:
            logger.debug("shared borrow refused on %r", self)
            raise BorrowError("buffer is already mutably borrowed")
        self._shared += 1
        try:
            view = self._data.view()
            view.flags.writeable = False
            yield view
        finally:
            self._shared -= 1

    @contextmanager
    def borrow_mut(self) -> Iterator[np.ndarray]:
        """Yield the writable storage while no other borrow is active."""

        if self._exclusive or self._shared:
            logger.debug("exclusive borrow refused on %r", self)
            raise BorrowError("buffer is already borrowed")
        self._exclusive = True
        try:
            yield self._data
        finally:
            self._exclusive = False


def _all_text(elements: list) -> bool:
    # NumPy stringifies numbers mixed with text; keep those as objects
    return all(isinstance(e, (str, bytes)) for e in elements)


__all__ = ["Buffer"]
