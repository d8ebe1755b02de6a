# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import gc
import weakref

import numpy as np
import pytest

import stridetensor as st
from stridetensor import Buffer, BorrowError, TensorError


def test_shared_borrows_overlap():
    buffer = Buffer([1, 2, 3])
    with buffer.borrow() as first:
        with buffer.borrow() as second:
            assert buffer.is_borrowed
            assert not buffer.is_borrowed_mut
            np.testing.assert_array_equal(first, second)
    assert not buffer.is_borrowed


def test_shared_borrow_is_read_only():
    buffer = Buffer([1, 2, 3])
    with buffer.borrow() as data:
        with pytest.raises(ValueError):
            data[0] = 5


def test_exclusive_borrow_conflicts_fail_immediately():
    buffer = Buffer([1, 2, 3])
    with buffer.borrow():
        with pytest.raises(BorrowError):
            with buffer.borrow_mut():
                pass

    with buffer.borrow_mut() as data:
        assert buffer.is_borrowed_mut
        data[0] = 10
        with pytest.raises(BorrowError):
            with buffer.borrow():
                pass
        with pytest.raises(BorrowError):
            with buffer.borrow_mut():
                pass

    with buffer.borrow() as data:
        assert data[0] == 10


def test_borrow_error_is_a_runtime_tensor_error():
    buffer = Buffer([1])
    with buffer.borrow_mut():
        with pytest.raises(RuntimeError) as excinfo:
            with buffer.borrow():
                pass
    assert isinstance(excinfo.value, TensorError)
    assert "mutably borrowed" in str(excinfo.value)


def test_borrow_released_after_exception():
    buffer = Buffer([1, 2])
    with pytest.raises(KeyError):
        with buffer.borrow_mut():
            raise KeyError("boom")
    assert not buffer.is_borrowed
    with buffer.borrow():
        pass


def test_buffer_is_copied_and_flattened():
    source = np.arange(6).reshape(2, 3)
    buffer = Buffer(source)
    source[0, 0] = 99
    assert len(buffer) == 6
    with buffer.borrow() as data:
        assert data.ndim == 1
        assert data[0] == 0


def test_from_elements_keeps_nested_values_whole():
    buffer = Buffer.from_elements([(1, 2), (3, 4)])
    assert len(buffer) == 2
    assert buffer.dtype == np.dtype(object)
    with buffer.borrow() as data:
        assert data[1] == (3, 4)


def test_from_elements_does_not_stringify_mixed_values():
    buffer = Buffer.from_elements([1, "a"])
    assert buffer.dtype == np.dtype(object)
    assert list(st.from_array([1, "a"])) == [1, "a"]


def test_buffer_lives_as_long_as_its_last_view():
    base = st.from_array([1, 2, 3])
    view = base.get([1])
    ref = weakref.ref(base.buffer)

    del base
    gc.collect()
    assert ref() is not None
    assert view.item() == 2

    del view
    gc.collect()
    assert ref() is None
