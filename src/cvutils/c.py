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

r"""Container implementations.

This module is plain Python, written in Cython *pure Python mode*: it runs
as it is, and it can be compiled into an extension module for speed (see
``setup.py``).
"""

import functools
from typing import Any
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple
from typing import Union

import cython
from bytesparse.base import STR_MAX_CONTENT_SIZE
from bytesparse.base import AnyBytes
from bytesparse.base import Value

from .base import TERMINATOR
from .base import BaseGrowableArray
from .base import BaseGrowableBuffer
from .base import BaseSortedTable
from .base import Comparator
from .base import Element
from .base import Key
from .base import KeyGetter
from .base import Releaser
from .base import next_capacity
from .config import runtime_config
from .logging import get_logger

__all__ = [
    'GrowableArray',
    'GrowableBuffer',
    'SortedTable',
]

_LOG = get_logger('c')


class GrowableArray(BaseGrowableArray):
    __doc__ = BaseGrowableArray.__doc__

    def __copy__(
        self,
    ) -> 'GrowableArray':

        return self.clone()

    def __eq__(
        self,
        other: Any,
    ) -> bool:

        if isinstance(other, BaseGrowableArray):
            return self.contents() == other.contents()
        if isinstance(other, (list, tuple)):
            return self.contents() == list(other)
        return NotImplemented

    def __getitem__(
        self,
        key: Union[int, slice],
    ) -> Any:

        if isinstance(key, slice):
            return self._items[:self._length][key]

        length = self._length
        if key < 0:
            key += length
        if not 0 <= key < length:
            raise IndexError('index out of range')
        return self._items[key]

    def __init__(
        self,
    ):

        # Slots beyond the length are always None
        self._items: List[Element] = []
        self._length: int = 0

    def __iter__(
        self,
    ) -> Iterator[Element]:

        return iter(self._items[:self._length])

    def __len__(
        self,
    ) -> int:

        return self._length

    def __repr__(
        self,
    ) -> str:

        return f'<{type(self).__name__}[{self._length}/{len(self._items)}]@0x{id(self):X}>'

    def __setitem__(
        self,
        key: int,
        value: Element,
    ) -> None:

        length = self._length
        if key < 0:
            key += length
        if not 0 <= key < length:
            raise IndexError('index out of range')
        self._items[key] = value

    @cython.locals(index=cython.Py_ssize_t, length=cython.Py_ssize_t)
    def __str__(
        self,
    ) -> str:

        length = self._length
        if length >= STR_MAX_CONTENT_SIZE:
            return repr(self)

        buffer = GrowableBuffer()
        buffer.cat(f'vlist[{length}](')
        items = self._items

        for index in range(length):
            if index:
                buffer.append_byte(0x2C)  # ','
            text = str(items[index]).encode('utf-8')
            buffer.append_bytes(text, len(text))

        buffer.append_byte(0x29)  # ')'
        return buffer.decode()

    @property
    def capacity(
        self,
    ) -> int:

        return len(self._items)

    def clear(
        self,
    ) -> None:

        self.set_length(0)

    def clone(
        self,
    ) -> 'GrowableArray':

        length = self._length
        clone = type(self)()
        clone.reserve(length)
        clone._items[:length] = self._items[:length]
        clone._length = length
        return clone

    def contents(
        self,
    ) -> List[Element]:

        return self._items[:self._length]

    def dequeue(
        self,
    ) -> Optional[Element]:

        return self.remove(0)

    def free(
        self,
    ) -> None:

        self._items = []
        self._length = 0

    def free_all(
        self,
        release: Releaser,
    ) -> None:

        count = 0
        for element in self._items[:self._length]:
            if element is not None:
                release(element)
                count += 1

        _LOG.debug('%s@0x%X released %d elements', type(self).__name__, id(self), count)
        self.free()

    def get(
        self,
        index: int,
    ) -> Optional[Element]:

        if not self._length:
            return None
        if not 0 <= index < self._length:
            raise IndexError('index out of range')
        return self._items[index]

    @cython.locals(length=cython.Py_ssize_t)
    def insert(
        self,
        index: int,
        element: Element,
    ) -> Element:

        length = self._length
        if not 0 <= index <= length:
            raise IndexError('index out of range')

        self.reserve(length + 1)
        items = self._items
        items[index + 1:length + 1] = items[index:length]
        items[index] = element
        self._length = length + 1
        return element

    @property
    def length(
        self,
    ) -> int:

        return self._length

    def pop(
        self,
    ) -> Optional[Element]:

        if not self._length:
            return None
        return self.remove(self._length - 1)

    def push(
        self,
        element: Element,
    ) -> Element:

        return self.insert(self._length, element)

    @cython.locals(length=cython.Py_ssize_t)
    def remove(
        self,
        index: int,
    ) -> Optional[Element]:

        length = self._length
        if not length:
            return None
        if not 0 <= index < length:
            raise IndexError('index out of range')

        items = self._items
        element = items[index]
        items[index:length - 1] = items[index + 1:length]
        items[length - 1] = None
        self._length = length - 1
        return element

    @cython.locals(capacity=cython.Py_ssize_t, newsize=cython.Py_ssize_t)
    def reserve(
        self,
        minimum: int,
    ) -> None:

        capacity = len(self._items)
        newsize = next_capacity(capacity, minimum)
        if newsize > capacity:
            self._items.extend([None] * (newsize - capacity))
            _LOG.debug('%s@0x%X grown from %d to %d slots', type(self).__name__, id(self), capacity, newsize)

    def set(
        self,
        index: int,
        element: Element,
    ) -> Optional[Element]:

        if index < 0:
            raise IndexError('index out of range')

        if index < self._length:
            previous = self._items[index]
            self._items[index] = element
            return previous

        self.reserve(index + 1)
        self._items[index] = element
        self._length = index + 1
        return None

    def set_length(
        self,
        length: int,
    ) -> None:

        if length < 0:
            raise ValueError('negative length')

        if length > self._length:
            self.reserve(length)
        else:
            self._items[length:self._length] = [None] * (self._length - length)
        self._length = length


class GrowableBuffer(BaseGrowableBuffer):
    __doc__ = BaseGrowableBuffer.__doc__

    def __bytes__(
        self,
    ) -> bytes:

        storage = self._storage
        if storage is None:
            return b''
        return bytes(storage[:self._length])

    def __eq__(
        self,
        other: Any,
    ) -> bool:

        if isinstance(other, (BaseGrowableBuffer, bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    def __getitem__(
        self,
        key: Union[int, slice],
    ) -> Union[Value, bytes]:

        if isinstance(key, slice):
            return bytes(self)[key]

        length = self._length
        if key < 0:
            key += length
        if not 0 <= key < length:
            raise IndexError('index out of range')
        return self._storage[key]

    def __init__(
        self,
    ):

        self._storage: Optional[bytearray] = None
        self._capacity: int = 0
        self._length: int = 0
        self._fixed: bool = False

    def __iter__(
        self,
    ) -> Iterator[Value]:

        return iter(bytes(self))

    def __len__(
        self,
    ) -> int:

        return self._length

    def __repr__(
        self,
    ) -> str:

        fixed = ',fixed' if self._fixed else ''
        return f'<{type(self).__name__}[{self._length}/{self._capacity}{fixed}]@0x{id(self):X}>'

    def __str__(
        self,
    ) -> str:

        if self._length >= STR_MAX_CONTENT_SIZE:
            return repr(self)
        return str(bytes(self))

    def append_byte(
        self,
        value: Value,
    ) -> None:

        if not 0 <= value <= 0xFF:
            raise ValueError('byte must be in range(0, 256)')
        self.append_bytes(bytes((value,)), 1)

    @cython.locals(length=cython.Py_ssize_t, need=cython.Py_ssize_t)
    def append_bytes(
        self,
        data: AnyBytes,
        size: Optional[int] = None,
    ) -> None:

        if isinstance(data, (str, int)):
            raise TypeError('a bytes-like object is required')
        if not isinstance(data, (bytes, bytearray)):
            data = bytes(data)

        if size is None:
            size = data.find(TERMINATOR)
            if size < 0:
                size = len(data)
        elif not 0 <= size <= len(data):
            raise ValueError('size out of range')

        length = self._length
        need = length + size
        if self._fixed:
            if need > self._capacity:
                raise BufferError('fixed capacity exceeded')
        else:
            self.reserve(need)

        storage = self._storage
        storage[length:need] = data[:size]
        self._length = need
        if not self._fixed:
            storage[need] = TERMINATOR

    @property
    def capacity(
        self,
    ) -> int:

        return self._capacity

    def cat(
        self,
        text: Union[str, AnyBytes],
    ) -> None:

        if isinstance(text, str):
            text = text.encode('utf-8')
        self.append_bytes(text)

    def clear(
        self,
    ) -> None:

        self.set_length(0)

    def decode(
        self,
        encoding: str = 'utf-8',
        errors: str = 'strict',
    ) -> str:

        return bytes(self).decode(encoding, errors)

    def extract_owned_storage(
        self,
    ) -> bytearray:

        storage = self._storage
        if storage is None:
            storage = bytearray(1)

        _LOG.debug('%s@0x%X storage extracted', type(self).__name__, id(self))
        self._storage = None
        self._capacity = 0
        self._length = 0
        self._fixed = False
        return storage

    @property
    def fixed(
        self,
    ) -> bool:

        return self._fixed

    def install_fixed_storage(
        self,
        storage: bytearray,
        size: int,
    ) -> None:

        if not isinstance(storage, bytearray):
            raise TypeError('storage must be a bytearray')
        if not 0 <= size <= len(storage):
            raise ValueError('size out of range')

        self._storage = storage
        self._capacity = size
        self._length = size
        self._fixed = True
        _LOG.debug('%s@0x%X storage installed, %d bytes', type(self).__name__, id(self), size)

    @cython.locals(capacity=cython.Py_ssize_t, newsize=cython.Py_ssize_t, length=cython.Py_ssize_t)
    def reserve(
        self,
        minimum: int,
    ) -> None:

        if self._fixed:
            raise BufferError('cannot resize a fixed capacity buffer')

        capacity = self._capacity
        newsize = next_capacity(capacity, minimum)
        if newsize <= capacity and self._storage is not None:
            return

        storage = bytearray(newsize + 1)  # room for the terminator
        length = self._length
        if length:
            storage[:length] = self._storage[:length]
        self._storage = storage
        self._capacity = newsize
        _LOG.debug('%s@0x%X grown from %d to %d bytes', type(self).__name__, id(self), capacity, newsize)

    def set_length(
        self,
        length: int,
    ) -> None:

        if not 0 <= length <= self._capacity:
            raise ValueError('length out of range')

        self._length = length
        if not self._fixed and self._storage is not None:
            self._storage[length] = TERMINATOR

    @property
    def storage(
        self,
    ) -> Optional[bytearray]:

        return self._storage

    def view(
        self,
    ) -> memoryview:

        storage = self._storage
        if storage is None:
            return memoryview(b'')
        return memoryview(storage)[:self._length]


class SortedTable(BaseSortedTable):
    __doc__ = BaseSortedTable.__doc__

    def __contains__(
        self,
        key: Key,
    ) -> bool:

        return self.locate(key)[0]

    def __copy__(
        self,
    ) -> 'SortedTable':

        return self.clone()

    def __getitem__(
        self,
        index: int,
    ) -> Element:

        return self._backing[index]

    def __init__(
        self,
        compare: Comparator,
        getkey: KeyGetter,
        elements: Optional[Iterable[Element]] = None,
    ):

        self._backing: GrowableArray = GrowableArray()
        self._compare: Comparator = compare
        self._getkey: KeyGetter = getkey
        self._check: bool = runtime_config().check_invariants

        if elements is not None:
            self.update(elements)

    def __iter__(
        self,
    ) -> Iterator[Element]:

        return iter(self._backing)

    def __len__(
        self,
    ) -> int:

        return len(self._backing)

    def __repr__(
        self,
    ) -> str:

        return f'<{type(self).__name__}[{len(self._backing)}]@0x{id(self):X}>'

    def _check_neighbours(
        self,
        index: int,
        element: Element,
        found: bool,
    ) -> None:

        compare = self._compare
        getkey = self._getkey
        items = self._backing._items
        length = len(self._backing)

        if index > 0:
            if compare(getkey(items[index - 1]), element) >= 0:
                raise ValueError(f'inconsistent ordering before index {index}')

        after = index + 1 if found else index
        if after < length:
            if compare(getkey(element), items[after]) >= 0:
                raise ValueError(f'inconsistent ordering after index {index}')

    def _check_sorted(
        self,
        elements: List[Element],
    ) -> None:

        compare = self._compare
        getkey = self._getkey

        for index in range(1, len(elements)):
            if compare(getkey(elements[index - 1]), elements[index]) >= 0:
                raise ValueError(f'inconsistent ordering before index {index}')

    def _commit(
        self,
        elements: List[Element],
    ) -> None:

        backing = self._backing
        backing.set_length(len(elements))
        for index, element in enumerate(elements):
            backing[index] = element

    def _sorted(
        self,
        elements: List[Element],
    ) -> List[Element]:

        compare = self._compare
        getkey = self._getkey

        def sorter(left, right):
            return compare(getkey(left), right)

        return sorted(elements, key=functools.cmp_to_key(sorter))

    @property
    def backing(
        self,
    ) -> GrowableArray:

        return self._backing

    def clear(
        self,
    ) -> None:

        self._backing.clear()

    def clone(
        self,
    ) -> 'SortedTable':

        clone = type(self)(self._compare, self._getkey)
        clone._backing = self._backing.clone()
        clone._check = self._check
        return clone

    @property
    def compare(
        self,
    ) -> Comparator:

        return self._compare

    def free(
        self,
    ) -> None:

        self._backing.free()

    @property
    def getkey(
        self,
    ) -> KeyGetter:

        return self._getkey

    def index(
        self,
        key: Key,
    ) -> int:

        found, index = self.locate(key)
        if not found:
            raise KeyError(key)
        return index

    def insert(
        self,
        element: Element,
    ) -> Optional[Element]:

        found, index = self.locate(self._getkey(element))

        if self._check:
            self._check_neighbours(index, element, found)

        if found:
            return self._backing.set(index, element)

        self._backing.insert(index, element)
        return None

    @cython.locals(low=cython.Py_ssize_t, high=cython.Py_ssize_t, mid=cython.Py_ssize_t, found=cython.bint)
    def locate(
        self,
        key: Key,
    ) -> Tuple[bool, int]:

        compare = self._compare
        items = self._backing._items
        found = False
        low = 0
        high = len(self._backing)

        while low < high:
            mid = (low + high) // 2
            diff = compare(key, items[mid])
            if diff == 0:
                found = True
            if diff > 0:
                low = mid + 1
            else:
                high = mid

        return bool(found), low

    def remove(
        self,
        key: Key,
    ) -> Optional[Element]:

        found, index = self.locate(key)
        if not found:
            return None
        return self._backing.remove(index)

    def search(
        self,
        key: Key,
    ) -> Optional[Element]:

        found, index = self.locate(key)
        if not found:
            return None
        return self._backing.get(index)

    def sort(
        self,
    ) -> None:

        length = len(self._backing)
        if not length:
            return

        self._commit(self._sorted(self._backing.contents()))
        _LOG.debug('%s@0x%X sorted %d elements', type(self).__name__, id(self), length)

    def update(
        self,
        elements: Iterable[Element],
    ) -> None:

        merged = self._backing.contents()
        merged.extend(elements)
        merged = self._sorted(merged)

        # Collapse equal keys, keeping the last element of each run
        compare = self._compare
        getkey = self._getkey
        kept: List[Element] = []

        for element in merged:
            if kept and compare(getkey(element), kept[-1]) == 0:
                kept[-1] = element
            else:
                kept.append(element)

        if self._check:
            self._check_sorted(kept)

        self._commit(kept)
