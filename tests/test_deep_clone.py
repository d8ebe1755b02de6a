# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import logging

import numpy as np
import pytest

import stridetensor as st


def test_shallow_clone_shares_buffer(grid):
    copy = grid.clone()
    assert copy is not grid
    assert copy.shares_buffer(grid)
    assert copy.shape == grid.shape
    assert copy.offset == grid.offset


def test_deep_clone_of_sub_view_is_independent(grid):
    row = grid.get([1])
    copy = row.deep_clone()
    assert copy.tolist() == [4, 5, 6]
    assert copy.offset == 0
    assert copy.strides == (1,)
    assert len(copy.buffer) == 3
    assert not copy.shares_buffer(grid)
    assert copy.buffer is not row.buffer


def test_deep_clone_of_reshaped_view(grid):
    reshaped = grid.reshape(3, 2)
    copy = reshaped.deep_clone()
    assert copy.shape == (3, 2)
    assert copy.strides == (2, 1)
    assert list(copy) == list(reshaped)
    assert not copy.shares_buffer(reshaped)


def test_deep_clone_of_scalar_view(grid):
    copy = grid.get([1, 1]).deep_clone()
    assert copy.is_scalar()
    assert copy.item() == 5
    assert len(copy.buffer) == 1


def test_deep_clone_survives_source_mutation(grid):
    copy = grid.deep_clone()
    with grid.buffer.borrow_mut() as data:
        data[0] = 100
    assert grid.get([0, 0]).item() == 100
    assert copy.get([0, 0]).item() == 1


def test_deep_clone_logs_at_debug_level(grid, caplog):
    caplog.set_level(logging.DEBUG, logger="stridetensor")
    grid.deep_clone()
    assert any("deep clone" in record.getMessage() for record in caplog.records)


def test_numpy_materializes_view(grid):
    np.testing.assert_array_equal(grid.get([1]).numpy(), np.array([4, 5, 6]))
    assert grid.numpy().shape == (2, 3)
    assert st.scalar(2).numpy().shape == ()


def test_item_requires_single_element(grid):
    with pytest.raises(st.ShapeMismatchError):
        grid.item()
    assert st.from_array([8]).item() == 8


def test_tolist_nests_by_shape():
    t = st.from_array(list(range(8))).reshape(2, 2, 2)
    assert t.tolist() == [[[0, 1], [2, 3]], [[4, 5], [6, 7]]]
    assert st.from_shape(0, (2, 0)).tolist() == [[], []]
    assert st.from_shape(0, (0, 3)).tolist() == []
