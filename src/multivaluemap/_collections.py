import logging
import sys
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

import numpy as np

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

logger = logging.getLogger(__name__)

_V = TypeVar("_V")


class Collection(ABC, Generic[_V]):
    """
    Storage policy for the values of a single key in a :class:`MultiValuedMap`.

    A :class:`Collection` wraps one backing store, created when the collection is
    instantiated and never replaced. Subclasses decide how absorbed values are kept
    (e.g., whether duplicates are retained). Pass a subclass as the ``value_type``
    option of a :class:`MultiValuedMap` to choose the policy for every key of that map.

    A subclass must implement :meth:`set_value`, :meth:`get_value`, :meth:`__iter__`
    and :meth:`__len__`; otherwise it cannot be instantiated.

    Absorbing ``None`` must always be a no-op.
    """

    __slots__ = ()

    @abstractmethod
    def set_value(self, value: _V | None, /) -> None:
        """
        Absorb a value into the backing store.

        :param value: The value to absorb. ``None`` is ignored.
        """

    @abstractmethod
    def get_value(self) -> list[_V]:
        """Return a new list with all the absorbed values, in order."""

    @abstractmethod
    def __iter__(self) -> Iterator[_V]: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def __contains__(self, value: object) -> bool:
        for v in self:
            if v is value:
                return True
            # Elementwise comparisons (e.g. between arrays) do not count as equal
            eq = v == value
            if isinstance(eq, (bool, np.bool_)) and eq:
                return True
        return False

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_value()!r})"


class OrderedCollection(Collection[_V]):
    """
    A :class:`Collection` backed by a :class:`list`.

    Values are kept in the order they were absorbed, duplicates included. This is the
    default ``value_type`` of a :class:`MultiValuedMap`.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: list[_V] = []

    @override
    def set_value(self, value: _V | None, /) -> None:
        if value is not None:
            self._values.append(value)

    @override
    def get_value(self) -> list[_V]:
        return list(self._values)

    @override
    def __iter__(self) -> Iterator[_V]:
        return iter(self._values)

    @override
    def __len__(self) -> int:
        return len(self._values)


class _Identity:
    """Hashable stand-in that compares an unhashable value by identity."""

    __slots__ = ("value",)

    def __init__(self, value: object) -> None:
        self.value = value

    @override
    def __eq__(self, other: object) -> bool:
        return isinstance(other, _Identity) and other.value is self.value

    @override
    def __hash__(self) -> int:
        return id(self.value)


class UniqueCollection(Collection[_V]):
    """
    A :class:`Collection` that discards duplicate values.

    Values are kept in the order they were first absorbed. Hashable values (numbers,
    strings, tuples, ...) are deduplicated by equality. Values that cannot be hashed
    (e.g., :class:`list` or :class:`dict` objects) are deduplicated by identity only:
    the same object absorbed twice is stored once, but two equal and distinct objects
    are both stored.
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        # Insertion-ordered dict used as an ordered set
        self._values: dict[Hashable, _V] = {}

    @override
    def set_value(self, value: _V | None, /) -> None:
        if value is None:
            return

        key: Hashable
        try:
            hash(value)
        except TypeError:
            logger.debug(
                "Unhashable %s value compared by identity", type(value).__name__
            )
            key = _Identity(value)
        else:
            key = value

        self._values.setdefault(key, value)

    @override
    def get_value(self) -> list[_V]:
        return list(self._values.values())

    @override
    def __iter__(self) -> Iterator[_V]:
        return iter(self._values.values())

    @override
    def __len__(self) -> int:
        return len(self._values)

    @override
    def __contains__(self, value: object) -> bool:
        try:
            return value in self._values
        except TypeError:
            return _Identity(value) in self._values
