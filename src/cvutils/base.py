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

r"""Abstract interfaces of the containers.

The documented behaviour lives here, while :mod:`cvutils.c` provides the
actual implementations.
"""

import abc
import collections.abc
from typing import Any
from typing import Callable
from typing import Iterable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Tuple
from typing import TypeAlias
from typing import Union

from bytesparse.base import AnyBytes
from bytesparse.base import Value

Element: TypeAlias = Any
Key: TypeAlias = Any
Comparator: TypeAlias = Callable[[Key, Element], int]
KeyGetter: TypeAlias = Callable[[Element], Key]
Releaser: TypeAlias = Callable[[Element], None]

TERMINATOR: Value = 0


def next_capacity(
    capacity: int,
    minimum: int,
) -> int:
    r"""Computes the grown capacity.

    The capacity is repeatedly doubled-plus-one, starting from the current
    one, until it meets the requested minimum.
    A minimum of zero is treated as one, so that storage gets allocated.

    Arguments:
        capacity (int):
            Current capacity.

        minimum (int):
            Requested minimum capacity.

    Returns:
        int: The new capacity, never less than `capacity`.

    Examples:
        >>> from cvutils.base import next_capacity
        >>> next_capacity(0, 0)
        1
        >>> next_capacity(0, 5)
        7
        >>> next_capacity(7, 8)
        15
        >>> next_capacity(15, 3)
        15
    """

    if minimum < 1:
        minimum = 1
    while capacity < minimum:
        capacity = (capacity * 2) + 1
    return capacity


class BaseGrowableArray(collections.abc.Sequence):
    r"""Growable array of opaque element handles.

    The array exclusively owns its storage, made of :attr:`capacity` slots.
    Only the leading :attr:`length` slots are occupied; the remaining ones
    are always ``None``.

    Elements are never copied nor released implicitly: the array does not
    assume ownership of its elements, unless :meth:`free_all` is called.

    Examples:
        >>> from cvutils import GrowableArray
        >>> array = GrowableArray()
        >>> array.push(10)
        10
        >>> array.push(20)
        20
        >>> array.insert(1, 15)
        15
        >>> str(array)
        'vlist[3](10,15,20)'
        >>> array.capacity
        3
    """

    @abc.abstractmethod
    def __copy__(
        self,
    ) -> 'BaseGrowableArray':
        ...

    @abc.abstractmethod
    def __eq__(
        self,
        other: Any,
    ) -> bool:
        r"""Equality comparison.

        Arguments:
            other (sequence):
                Sequence of elements to compare with the occupied slots.

        Returns:
            bool: Same length and equal elements.
        """
        ...

    @abc.abstractmethod
    def __getitem__(
        self,
        key: Union[int, slice],
    ) -> Any:
        r"""Gets elements.

        Unlike :meth:`get`, negative indices and slices are accepted, with
        the usual Python semantics over the occupied slots.

        Arguments:
            key (slice or int):
                Index or range of the occupied slots.

        Returns:
            element or list: The selected element(s).

        Raises:
            IndexError: Index out of range.
        """
        ...

    @abc.abstractmethod
    def __init__(
        self,
    ):
        ...

    @abc.abstractmethod
    def __iter__(
        self,
    ) -> Iterator[Element]:
        ...

    @abc.abstractmethod
    def __len__(
        self,
    ) -> int:
        r"""Number of occupied slots."""
        ...

    @abc.abstractmethod
    def __repr__(
        self,
    ) -> str:
        ...

    @abc.abstractmethod
    def __setitem__(
        self,
        key: int,
        value: Element,
    ) -> None:
        r"""Overwrites an occupied slot.

        Arguments:
            key (int):
                Index of an occupied slot; negative indices are accepted.

            value:
                New element.

        Raises:
            IndexError: Index out of range.
        """
        ...

    @abc.abstractmethod
    def __str__(
        self,
    ) -> str:
        r"""Printable listing.

        Returns:
            str: Listing like ``vlist[3](10,15,20)``; too long arrays
            fall back to :meth:`__repr__`.
        """
        ...

    @property
    @abc.abstractmethod
    def capacity(
        self,
    ) -> int:
        r"""int: Number of allocated slots."""
        ...

    @abc.abstractmethod
    def clear(
        self,
    ) -> None:
        r"""Empties the array, keeping its storage."""
        ...

    @abc.abstractmethod
    def clone(
        self,
    ) -> 'BaseGrowableArray':
        r"""Shallow copy.

        The new array holds the very same element handles, in the same order,
        within its own storage.

        Returns:
            :obj:`BaseGrowableArray`: The cloned array.

        Examples:
            >>> from cvutils import GrowableArray
            >>> array = GrowableArray()
            >>> item = [1]
            >>> _ = array.push(item)
            >>> other = array.clone()
            >>> other.get(0) is item
            True
            >>> _ = other.push(2)
            >>> len(array), len(other)
            (1, 2)
        """
        ...

    @abc.abstractmethod
    def contents(
        self,
    ) -> List[Element]:
        r"""List copy of the occupied slots."""
        ...

    @abc.abstractmethod
    def dequeue(
        self,
    ) -> Optional[Element]:
        r"""Removes the first element.

        Returns:
            element: The removed element, ``None`` if empty.
        """
        ...

    @abc.abstractmethod
    def free(
        self,
    ) -> None:
        r"""Releases the storage.

        The array becomes empty, with no allocated slots.
        Elements are left untouched.
        """
        ...

    @abc.abstractmethod
    def free_all(
        self,
        release: Releaser,
    ) -> None:
        r"""Releases all the elements, then the storage.

        Arguments:
            release (callable):
                Called once for each element which is not ``None``.
        """
        ...

    @abc.abstractmethod
    def get(
        self,
        index: int,
    ) -> Optional[Element]:
        r"""Gets an element.

        Arguments:
            index (int):
                Index of an occupied slot.

        Returns:
            element: The element at `index`; ``None`` if the array is empty.

        Raises:
            IndexError: Index out of range of a non-empty array.

        Examples:
            >>> from cvutils import GrowableArray
            >>> array = GrowableArray()
            >>> print(array.get(5))
            None
            >>> _ = array.push('a')
            >>> array.get(0)
            'a'
        """
        ...

    @abc.abstractmethod
    def insert(
        self,
        index: int,
        element: Element,
    ) -> Element:
        r"""Inserts an element.

        Elements from `index` onwards are shifted right by one slot.

        Arguments:
            index (int):
                Insertion index, up to :attr:`length` (appending).

            element:
                Element to insert.

        Returns:
            element: The inserted `element`.

        Raises:
            IndexError: Index out of range.
        """
        ...

    @property
    @abc.abstractmethod
    def length(
        self,
    ) -> int:
        r"""int: Number of occupied slots."""
        ...

    @abc.abstractmethod
    def pop(
        self,
    ) -> Optional[Element]:
        r"""Removes the last element.

        Returns:
            element: The removed element, ``None`` if empty.
        """
        ...

    @abc.abstractmethod
    def push(
        self,
        element: Element,
    ) -> Element:
        r"""Appends an element.

        Returns:
            element: The appended `element`.
        """
        ...

    @abc.abstractmethod
    def remove(
        self,
        index: int,
    ) -> Optional[Element]:
        r"""Removes an element.

        Elements after `index` are shifted left by one slot, and the
        vacated tail slot is cleared.

        Arguments:
            index (int):
                Index of an occupied slot.

        Returns:
            element: The removed element; ``None`` if the array was empty.

        Raises:
            IndexError: Index out of range of a non-empty array.
        """
        ...

    @abc.abstractmethod
    def reserve(
        self,
        minimum: int,
    ) -> None:
        r"""Grows the storage to hold at least `minimum` slots.

        See Also:
            :func:`next_capacity`
        """
        ...

    @abc.abstractmethod
    def set(
        self,
        index: int,
        element: Element,
    ) -> Optional[Element]:
        r"""Overwrites or extends.

        Within the occupied slots, the element is overwritten.
        Beyond them, the array is extended up to `index`; any gap is filled
        with ``None``.

        Arguments:
            index (int):
                Target index.

            element:
                New element.

        Returns:
            element: The previous element, ``None`` when extending.

        Raises:
            IndexError: Negative index.

        Examples:
            >>> from cvutils import GrowableArray
            >>> array = GrowableArray()
            >>> print(array.set(2, 'c'))
            None
            >>> array.contents()
            [None, None, 'c']
            >>> array.set(2, 'C')
            'c'
            >>> len(array)
            3
        """
        ...

    @abc.abstractmethod
    def set_length(
        self,
        length: int,
    ) -> None:
        r"""Truncates or extends the occupied slots.

        Truncation clears the released slots but keeps the storage.
        Extension exposes ``None`` slots, growing the storage if needed.

        Arguments:
            length (int):
                New length.

        Raises:
            ValueError: Negative length.
        """
        ...


class BaseGrowableBuffer(collections.abc.Sequence):
    r"""Growable byte buffer.

    The buffer exclusively owns its storage.
    Unless in *fixed* mode, the storage always has room for a trailing NUL
    terminator, which is kept right after the used bytes.

    In *fixed* mode the buffer wraps storage handed over by the caller via
    :meth:`install_fixed_storage`, which is never reallocated; appending
    beyond its :attr:`capacity` is forbidden.

    Examples:
        >>> from cvutils import GrowableBuffer
        >>> buffer = GrowableBuffer()
        >>> buffer.append_bytes(b'ab')
        >>> buffer.append_bytes(b'cd')
        >>> bytes(buffer)
        b'abcd'
        >>> buffer.storage[len(buffer)]
        0
    """

    @abc.abstractmethod
    def __bytes__(
        self,
    ) -> bytes:
        r"""Creates a bytes clone of the used bytes."""
        ...

    @abc.abstractmethod
    def __eq__(
        self,
        other: Any,
    ) -> bool:
        ...

    @abc.abstractmethod
    def __getitem__(
        self,
        key: Union[int, slice],
    ) -> Union[Value, bytes]:
        ...

    @abc.abstractmethod
    def __init__(
        self,
    ):
        ...

    @abc.abstractmethod
    def __len__(
        self,
    ) -> int:
        r"""Number of used bytes, terminator excluded."""
        ...

    @abc.abstractmethod
    def __repr__(
        self,
    ) -> str:
        ...

    @abc.abstractmethod
    def __str__(
        self,
    ) -> str:
        ...

    @abc.abstractmethod
    def append_byte(
        self,
        value: Value,
    ) -> None:
        r"""Appends a single byte.

        Arguments:
            value (int):
                Byte value, within ``0`` and ``255``.

        Raises:
            ValueError: Invalid byte value.
            BufferError: Fixed capacity exceeded.
        """
        ...

    @abc.abstractmethod
    def append_bytes(
        self,
        data: AnyBytes,
        size: Optional[int] = None,
    ) -> None:
        r"""Appends bytes.

        Arguments:
            data (bytes):
                Bytes to append.

            size (int):
                Number of leading bytes of `data` to append.
                If ``None``, `data` is appended up to its first NUL byte,
                or entirely if it has none.

        Raises:
            ValueError: `size` exceeds `data`.
            BufferError: Fixed capacity exceeded.

        Examples:
            >>> from cvutils import GrowableBuffer
            >>> buffer = GrowableBuffer()
            >>> buffer.append_bytes(b'Hello\0World')
            >>> bytes(buffer)
            b'Hello'
            >>> buffer.append_bytes(b', World!', 2)
            >>> bytes(buffer)
            b'Hello, '
        """
        ...

    @property
    @abc.abstractmethod
    def capacity(
        self,
    ) -> int:
        r"""int: Usable bytes of the storage, terminator excluded."""
        ...

    @abc.abstractmethod
    def cat(
        self,
        text: Union[str, AnyBytes],
    ) -> None:
        r"""Appends text up to its terminator.

        Arguments:
            text (str or bytes):
                Text to append; :obj:`str` is UTF-8 encoded.
        """
        ...

    @abc.abstractmethod
    def clear(
        self,
    ) -> None:
        ...

    @abc.abstractmethod
    def decode(
        self,
        encoding: str = 'utf-8',
        errors: str = 'strict',
    ) -> str:
        ...

    @abc.abstractmethod
    def extract_owned_storage(
        self,
    ) -> bytearray:
        r"""Relinquishes the storage.

        The caller becomes the owner of the returned storage, which is never
        empty, and the buffer gets back to its initial empty state.

        Returns:
            :obj:`bytearray`: The former storage; just a terminator if none
            was allocated.

        Examples:
            >>> from cvutils import GrowableBuffer
            >>> buffer = GrowableBuffer()
            >>> buffer.extract_owned_storage()
            bytearray(b'\x00')
            >>> buffer.cat('abc')
            >>> size = len(buffer)
            >>> storage = buffer.extract_owned_storage()
            >>> bytes(storage[:size + 1])
            b'abc\x00'
            >>> len(buffer), buffer.capacity
            (0, 0)
        """
        ...

    @property
    @abc.abstractmethod
    def fixed(
        self,
    ) -> bool:
        r"""bool: Fixed capacity mode."""
        ...

    @abc.abstractmethod
    def install_fixed_storage(
        self,
        storage: bytearray,
        size: int,
    ) -> None:
        r"""Takes ownership of external storage.

        Any previous storage is dropped, and the buffer switches to *fixed*
        mode, representing exactly the first `size` bytes of `storage`.
        No terminator is guaranteed.

        Arguments:
            storage (bytearray):
                Storage to take.

            size (int):
                Number of bytes of `storage` to represent.

        Raises:
            ValueError: `size` exceeds `storage`.

        Examples:
            >>> from cvutils import GrowableBuffer
            >>> buffer = GrowableBuffer()
            >>> buffer.install_fixed_storage(bytearray(b'abcdef'), 4)
            >>> bytes(buffer), buffer.fixed
            (b'abcd', True)
            >>> buffer.clear()
            >>> buffer.append_bytes(b'xyz')
            >>> bytes(buffer.storage)
            b'xyzdef'
        """
        ...

    @abc.abstractmethod
    def reserve(
        self,
        minimum: int,
    ) -> None:
        r"""Grows the storage to hold at least `minimum` bytes.

        Raises:
            BufferError: Fixed buffer.
        """
        ...

    @abc.abstractmethod
    def set_length(
        self,
        length: int,
    ) -> None:
        r"""Sets the number of used bytes.

        Arguments:
            length (int):
                New length, within the :attr:`capacity`.

        Raises:
            ValueError: Invalid length.
        """
        ...

    @property
    @abc.abstractmethod
    def storage(
        self,
    ) -> Optional[bytearray]:
        r"""bytearray: The owned storage, ``None`` if not allocated."""
        ...

    @abc.abstractmethod
    def view(
        self,
    ) -> memoryview:
        r"""Memory view of the used bytes."""
        ...


class BaseSortedTable(collections.abc.Collection):
    r"""Sorted table of elements.

    Elements are kept sorted by key within a backing
    :obj:`BaseGrowableArray`, and located via binary search.
    No hashing is involved: ordering is defined by a comparator between a key
    and an element, while keys are projected out of elements by a key getter.

    Each key is held at most once: inserting an element with an already
    present key replaces the previous element.

    Arguments:
        compare (callable):
            Three-way comparison ``compare(key, element)``, returning a
            negative, zero, or positive integer.

        getkey (callable):
            Key getter ``getkey(element)``.

        elements (iterable):
            Optional elements to load via :meth:`update`.

    Examples:
        >>> from cvutils import SortedTable
        >>> compare = lambda key, item: (key > item[0]) - (key < item[0])
        >>> getkey = lambda item: item[0]
        >>> table = SortedTable(compare, getkey)
        >>> for item in [(5, 'e'), (1, 'a'), (3, 'c')]:
        ...     _ = table.insert(item)
        >>> list(table)
        [(1, 'a'), (3, 'c'), (5, 'e')]
        >>> table.search(3)
        (3, 'c')
        >>> print(table.search(9))
        None
        >>> table.insert((3, 'C'))
        (3, 'c')
        >>> list(table)
        [(1, 'a'), (3, 'C'), (5, 'e')]
    """

    @abc.abstractmethod
    def __contains__(
        self,
        key: Key,
    ) -> bool:
        r"""Checks if a key is present."""
        ...

    @abc.abstractmethod
    def __copy__(
        self,
    ) -> 'BaseSortedTable':
        ...

    @abc.abstractmethod
    def __getitem__(
        self,
        index: int,
    ) -> Element:
        r"""Gets the element at some position of the key order.

        Raises:
            IndexError: Index out of range.
        """
        ...

    @abc.abstractmethod
    def __init__(
        self,
        compare: Comparator,
        getkey: KeyGetter,
        elements: Optional[Iterable[Element]] = None,
    ):
        ...

    @abc.abstractmethod
    def __iter__(
        self,
    ) -> Iterator[Element]:
        r"""Iterates over elements, in key order."""
        ...

    @abc.abstractmethod
    def __len__(
        self,
    ) -> int:
        ...

    @abc.abstractmethod
    def __repr__(
        self,
    ) -> str:
        ...

    @property
    @abc.abstractmethod
    def backing(
        self,
    ) -> BaseGrowableArray:
        r""":obj:`BaseGrowableArray`: The backing array.

        Warnings:
            Altering the backing array directly may break the ordering.
        """
        ...

    @abc.abstractmethod
    def clear(
        self,
    ) -> None:
        ...

    @abc.abstractmethod
    def clone(
        self,
    ) -> 'BaseSortedTable':
        r"""Shallow copy.

        The new table shares the comparator and the key getter, and holds the
        same element handles within its own backing array.
        """
        ...

    @property
    @abc.abstractmethod
    def compare(
        self,
    ) -> Comparator:
        ...

    @abc.abstractmethod
    def free(
        self,
    ) -> None:
        r"""Releases the backing storage, leaving elements untouched."""
        ...

    @property
    @abc.abstractmethod
    def getkey(
        self,
    ) -> KeyGetter:
        ...

    @abc.abstractmethod
    def index(
        self,
        key: Key,
    ) -> int:
        r"""Position of a present key.

        Raises:
            KeyError: Key not found.
        """
        ...

    @abc.abstractmethod
    def insert(
        self,
        element: Element,
    ) -> Optional[Element]:
        r"""Inserts an element, keeping the table sorted.

        Arguments:
            element:
                Element to insert.

        Returns:
            element: The replaced element with the same key, or ``None``.
        """
        ...

    @abc.abstractmethod
    def locate(
        self,
        key: Key,
    ) -> Tuple[bool, int]:
        r"""Binary search.

        Arguments:
            key:
                Key to find.

        Returns:
            (bool, int): Whether `key` was found, and either its position or
            the insertion point keeping the table sorted.

        Examples:
            >>> from cvutils import SortedTable
            >>> compare = lambda key, item: key - item
            >>> table = SortedTable(compare, lambda item: item, [10, 20, 30])
            >>> table.locate(20)
            (True, 1)
            >>> table.locate(25)
            (False, 2)
            >>> table.locate(99)
            (False, 3)
        """
        ...

    @abc.abstractmethod
    def remove(
        self,
        key: Key,
    ) -> Optional[Element]:
        r"""Removes the element with the given key.

        Returns:
            element: The removed element, ``None`` if not found.
        """
        ...

    @abc.abstractmethod
    def search(
        self,
        key: Key,
    ) -> Optional[Element]:
        r"""Searches for a key.

        Returns:
            element: The element with matching key, ``None`` if not found.
        """
        ...

    @abc.abstractmethod
    def sort(
        self,
    ) -> None:
        r"""Sorts the backing array.

        The comparator and the key getter are adapted into a sorting key.
        Sorting is stable.
        """
        ...

    @abc.abstractmethod
    def update(
        self,
        elements: Iterable[Element],
    ) -> None:
        r"""Bulk insertion.

        Elements are appended, then the whole table is sorted once.
        Among elements with the same key, only the last one is kept, just like
        with repeated calls to :meth:`insert`.
        The table is left untouched if anything fails along the way.

        Arguments:
            elements (iterable):
                Elements to insert.
        """
        ...
