# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import pytest

from stridetensor import ShapeMismatchError
from stridetensor._layout import (
    infer_shape,
    is_contiguous,
    normalize_shape,
    size_and_strides,
)


@pytest.mark.parametrize(
    "shape, size, strides",
    [
        ((), 1, ()),
        ((5,), 5, (1,)),
        ((2, 3), 6, (3, 1)),
        ((2, 3, 4), 24, (12, 4, 1)),
        ((4, 0, 3), 0, (0, 3, 1)),
    ],
)
def test_size_and_strides_row_major(shape, size, strides):
    assert size_and_strides(shape) == (size, strides)


def test_size_and_strides_accepts_lists():
    assert size_and_strides([3, 1, 2]) == (6, (2, 2, 1))


def test_normalize_shape_calling_conventions():
    assert normalize_shape(2, 3) == (2, 3)
    assert normalize_shape((2, 3)) == (2, 3)
    assert normalize_shape([2, 3]) == (2, 3)
    assert normalize_shape() == ()


def test_normalize_shape_rejects_bad_extents():
    with pytest.raises(ValueError):
        normalize_shape(2, -3)
    with pytest.raises(TypeError):
        normalize_shape(2.5)


def test_normalize_shape_allows_inferred_dimension_on_request():
    assert normalize_shape(-1, 2, allow_inferred=True) == (-1, 2)
    with pytest.raises(ValueError):
        normalize_shape(-2, 2, allow_inferred=True)


def test_infer_shape():
    assert infer_shape((-1, 2), 6) == (3, 2)
    assert infer_shape((2, 3), 6) == (2, 3)
    with pytest.raises(ShapeMismatchError):
        infer_shape((-1, -1), 6)
    with pytest.raises(ShapeMismatchError):
        infer_shape((-1, 4), 6)


def test_is_contiguous():
    assert is_contiguous((2, 3), (3, 1))
    assert is_contiguous((), ())
    assert is_contiguous((1, 3), (99, 1))
    assert not is_contiguous((3, 2), (1, 3))
