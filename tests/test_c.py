# Copyright (c) 2020-2023, Andrea Zoppi.
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# 1. Redistributions of source code must retain the above copyright notice,
#    this list of conditions and the following disclaimer.
#
# 2. Redistributions in binary form must reproduce the above copyright
#    notice, this list of conditions and the following disclaimer in the
#    documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
# ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.

from typing import Type

import pytest
from _common import *

import cvutils
from cvutils.base import next_capacity
from cvutils.c import GrowableArray as _GrowableArray
from cvutils.c import GrowableBuffer as _GrowableBuffer
from cvutils.c import SortedTable as _SortedTable


class TestGrowableArray(BaseGrowableArraySuite):
    GrowableArray: Type['_GrowableArray'] = _GrowableArray


class TestGrowableBuffer(BaseGrowableBufferSuite):
    GrowableBuffer: Type['_GrowableBuffer'] = _GrowableBuffer


class TestSortedTable(BaseSortedTableSuite):
    SortedTable: Type['_SortedTable'] = _SortedTable


def test_package_exports():
    assert cvutils.GrowableArray is _GrowableArray
    assert cvutils.GrowableBuffer is _GrowableBuffer
    assert cvutils.SortedTable is _SortedTable
    assert cvutils.__version__


@pytest.mark.parametrize('capacity, minimum, expected', [
    (0, 0, 1),
    (0, 1, 1),
    (0, 2, 3),
    (0, 5, 7),
    (1, 1, 1),
    (3, 4, 7),
    (7, 8, 15),
    (15, 3, 15),
    (2, 3, 5),
])
def test_next_capacity(capacity, minimum, expected):
    assert next_capacity(capacity, minimum) == expected


def test_check_invariants_rejects_inconsistent_comparator(monkeypatch):
    from cvutils import config as cv_config

    monkeypatch.setenv('CVUTILS_CHECK_INVARIANTS', '1')
    cv_config.reset_runtime_config_cache()
    try:
        # Claims every key follows every element
        table = _SortedTable(lambda key, item: 1, lambda item: item)
        table.insert(1)
        with pytest.raises(ValueError, match='inconsistent ordering'):
            table.insert(2)
        assert list(table) == [1]

        clone = table.clone()
        with pytest.raises(ValueError, match='inconsistent ordering'):
            clone.insert(3)
    finally:
        monkeypatch.delenv('CVUTILS_CHECK_INVARIANTS')
        cv_config.reset_runtime_config_cache()


def test_check_invariants_accepts_consistent_comparator(monkeypatch):
    from cvutils import config as cv_config

    monkeypatch.setenv('CVUTILS_CHECK_INVARIANTS', 'yes')
    cv_config.reset_runtime_config_cache()
    try:
        table = _SortedTable(lambda key, item: key - item, lambda item: item)
        for value in (5, 1, 3, 3, 9, 0):
            table.insert(value)
        assert list(table) == [0, 1, 3, 5, 9]
    finally:
        monkeypatch.delenv('CVUTILS_CHECK_INVARIANTS')
        cv_config.reset_runtime_config_cache()


def test_unchecked_comparator_is_not_verified():
    table = _SortedTable(lambda key, item: -1, lambda item: item)
    table.insert(1)
    table.insert(2)
    assert len(table) == 2


def test_check_invariants_covers_bulk_update(monkeypatch):
    from cvutils import config as cv_config

    monkeypatch.setenv('CVUTILS_CHECK_INVARIANTS', '1')
    cv_config.reset_runtime_config_cache()
    try:
        # Claims every key follows every element
        with pytest.raises(ValueError, match='inconsistent ordering'):
            _SortedTable(lambda key, item: 1, lambda item: item, [1, 2])

        table = _SortedTable(lambda key, item: 1, lambda item: item)
        table.insert(7)
        with pytest.raises(ValueError, match='inconsistent ordering'):
            table.update([3, 4])
        assert list(table) == [7]

        table = _SortedTable(lambda key, item: key - item, lambda item: item, [5, 1, 3, 1])
        assert list(table) == [1, 3, 5]
    finally:
        monkeypatch.delenv('CVUTILS_CHECK_INVARIANTS')
        cv_config.reset_runtime_config_cache()
