# Copyright (c) 2025 Soumyadip Sarkar.
# All rights reserved.
#
# This source code is licensed under the Apache-style license found in the
# LICENSE file in the root directory of this source tree.

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import stridetensor as st  # noqa: E402


@pytest.fixture(autouse=True)
def _restore_default_dtype():
    original = st.get_default_dtype()
    yield
    st.set_default_dtype(original)


@pytest.fixture
def grid():
    """2x3 view over the values 1..6."""
    return st.from_array([1, 2, 3, 4, 5, 6]).reshape(2, 3)
