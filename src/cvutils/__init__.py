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

r"""Growable arrays, byte buffers, and sorted tables.

This package provides three small containers, meant for code which wants
explicit control over growth, ownership, and ordering.

A :obj:`GrowableArray` is an index-addressable array of opaque element
handles, which never copies nor releases its elements implicitly:

>>> from cvutils import GrowableArray
>>> array = GrowableArray()
>>> for value in (10, 20):
...     _ = array.push(value)
>>> _ = array.insert(1, 15)
>>> array.contents()
[10, 15, 20]

Its storage grows by doubling-plus-one, so that appending is amortized
constant time:

>>> array.capacity
3
>>> _ = array.push(25)
>>> array.capacity
7

A :obj:`GrowableBuffer` accumulates bytes, keeping a NUL terminator right
after them:

>>> from cvutils import GrowableBuffer
>>> buffer = GrowableBuffer()
>>> buffer.cat('ab')
>>> buffer.cat(b'cd')
>>> bytes(buffer), len(buffer)
(b'abcd', 4)

A :obj:`SortedTable` keeps elements sorted by key within a
:obj:`GrowableArray`, looking them up via binary search instead of hashing.
This trades asymptotic insertion cost for simplicity and locality, which pays
off for small to medium tables:

>>> from cvutils import SortedTable
>>> compare = lambda key, item: (key > item[0]) - (key < item[0])
>>> table = SortedTable(compare, lambda item: item[0])
>>> for item in [(5, 'five'), (1, 'one'), (3, 'three')]:
...     _ = table.insert(item)
>>> [key for key, _ in table]
[1, 3, 5]
>>> table.search(3)
(3, 'three')

None of the containers is thread-safe: callers must synchronize access.
"""

__version__ = '0.1.0'

from .c import *  # noqa: F401, F403
