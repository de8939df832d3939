import collections.abc
import logging
import sys
from collections.abc import Callable, Hashable, Iterable, Iterator, Mapping
from types import MethodType
from typing import Any, Generic, TypeVar

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from multicollections import MultiDict

from ._collections import Collection
from ._exceptions import InvalidArgumentError
from ._options import MultiValuedMapOptions, resolve_options
from ._util import is_values, validated_entries
from .typing import EntriesLike

logger = logging.getLogger(__name__)

_K = TypeVar("_K", bound=Hashable)
_V = TypeVar("_V")

_UNSET: Any = object()


class MultiValuedMap(Generic[_K, _V]):
    """
    A map in which every key is associated with a collection of values.

    Keys are unique and kept in first-insertion order. The values of each key are
    stored in a :class:`Collection` created the first time a value is set for that
    key; the :class:`Collection` subclass used for every key is chosen once, with the
    ``value_type`` option (default: :class:`OrderedCollection`, which keeps
    duplicates; :class:`UniqueCollection` discards them).

    :meth:`keys`, :meth:`values` and :meth:`entries` return live views of the map.
    :meth:`get`, :meth:`for_each` and iteration over the map itself hand out fresh
    copies of the values, which can be modified freely.

    :class:`MultiValuedMap` does no locking. Callers sharing an instance between
    threads must synchronize access themselves.

    :param entries: Optional initial ``(key, value)`` entries, or a mapping. If the
        value of an entry is a sequence (e.g., a :class:`list`, a :class:`tuple` or a
        1-D :class:`numpy.ndarray`; but not a :class:`str`), each of its elements is
        set separately; otherwise the value is set as is.
    :param options: A :class:`MultiValuedMapOptions` instance or a mapping with its
        fields (e.g., ``{"value_type": UniqueCollection}``).

    :raises InvalidArgumentError: If ``entries`` is not iterable or contains an
        element that is not a two-element entry.

    Example usage: ::

        from multivaluemap import MultiValuedMap, UniqueCollection

        heroes = MultiValuedMap([("Captain Marvel", ["Carol Danvers", "Mar-Vell"])])
        heroes.set("Spider-Man", "Peter Parker").set("Spider-Man", "Miles Morales")
        print(heroes.get("Spider-Man")) # ['Peter Parker', 'Miles Morales']

        tags = MultiValuedMap(options={"value_type": UniqueCollection})
        tags.set_all("post", ["python", "maps", "python"])
        print(tags.get("post")) # ['python', 'maps']
    """

    class KeysView(collections.abc.KeysView[Any]):
        def __init__(self, mvm: "MultiValuedMap[Any, Any]") -> None:
            super().__init__(mvm)
            self._mvm = mvm

        @override
        def __iter__(self) -> Iterator[Any]:
            return (key for key, _ in self._mvm._iter_live())

        @override
        def __len__(self) -> int:
            return len(self._mvm._collections)

        @override
        def __contains__(self, key: object) -> bool:
            return self._mvm.has(key)

    class ValuesView(collections.abc.ValuesView[Collection[Any]]):
        def __init__(self, mvm: "MultiValuedMap[Any, Any]") -> None:
            super().__init__(mvm)
            self._mvm = mvm

        @override
        def __iter__(self) -> Iterator[Collection[Any]]:
            return (collection for _, collection in self._mvm._iter_live())

        @override
        def __len__(self) -> int:
            return len(self._mvm._collections)

        @override
        def __contains__(self, collection: object) -> bool:
            return any(c is collection for c in self)

    class ItemsView(collections.abc.ItemsView[Any, Collection[Any]]):
        def __init__(self, mvm: "MultiValuedMap[Any, Any]") -> None:
            super().__init__(mvm)
            self._mvm = mvm

        @override
        def __iter__(self) -> Iterator[tuple[Any, Collection[Any]]]:
            return self._mvm._iter_live()

        @override
        def __len__(self) -> int:
            return len(self._mvm._collections)

        @override
        def __contains__(self, item: object) -> bool:
            if not isinstance(item, tuple) or len(item) != 2:
                return False
            key, collection = item
            try:
                return self._mvm._collections[key] is collection
            except (KeyError, TypeError):
                return False

    def __init__(
        self,
        entries: EntriesLike | None = None,
        /,
        options: MultiValuedMapOptions | Mapping[str, Any] | None = None,
    ) -> None:
        self._options = resolve_options(options)
        self._collections: dict[_K, Collection[_V]] = {}

        if entries is None:
            return

        validated = validated_entries(entries)
        for key, value in validated:
            if is_values(value):
                for v in value:
                    self.set(key, v)
            else:
                self.set(key, value)

        logger.debug(
            "Created %s with %d keys from %d entries (value type: %s)",
            type(self).__name__,
            len(self._collections),
            len(validated),
            self.value_type.__name__,
        )

    @property
    def value_type(self) -> type[Collection[Any]]:
        """The :class:`Collection` subclass that stores the values of each key."""
        return self._options.value_type

    def set(self, key: _K, value: _V | None, /) -> Self:
        """
        Add a value to the values of a key.

        The key is added to the map if not already present, even if ``value`` is
        ``None`` (which is otherwise ignored).

        :returns: This map, so that calls can be chained.
        """
        try:
            collection = self._collections[key]
        except KeyError:
            collection = self._collections[key] = self.value_type()
        collection.set_value(value)
        return self

    def set_all(self, key: _K, values: Iterable[_V | None] = (), /) -> Self:
        """
        Add every element of ``values`` to the values of a key, in order.

        :returns: This map, so that calls can be chained.

        :raises InvalidArgumentError: If ``values`` is not iterable.
        """
        if not isinstance(values, Iterable):
            raise InvalidArgumentError(values, expected="an iterable of values")

        for value in list(values):
            self.set(key, value)
        return self

    @property
    def size(self) -> int:
        """The number of keys in the map."""
        return len(self._collections)

    def __len__(self) -> int:
        return len(self._collections)

    def has(self, key: object, /) -> bool:
        try:
            return key in self._collections
        except TypeError:
            # Unhashable keys are never present
            return False

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def delete(self, key: object, /) -> bool:
        """
        Remove a key and all its values.

        :returns: Whether the key was present.
        """
        try:
            del self._collections[key]  # ty: ignore[invalid-argument-type]
        except (KeyError, TypeError):
            return False
        return True

    def __delitem__(self, key: _K) -> None:
        del self._collections[key]

    def clear(self) -> None:
        self._collections.clear()

    def keys(self) -> "MultiValuedMap.KeysView":
        return MultiValuedMap.KeysView(self)

    def values(self) -> "MultiValuedMap.ValuesView":
        """Return a live view of the :class:`Collection` of each key."""
        return MultiValuedMap.ValuesView(self)

    def entries(self) -> "MultiValuedMap.ItemsView":
        """Return a live view of ``(key, collection)`` pairs."""
        return MultiValuedMap.ItemsView(self)

    items = entries

    def get(self, key: object, /) -> list[_V] | None:
        """
        Return a copy of the values of a key.

        :returns: A new list with the values, which is empty if the key is present
            but no value was ever absorbed for it; or ``None`` if the key is not
            present.
        """
        try:
            collection = self._collections.get(key)  # ty: ignore[invalid-argument-type]
        except TypeError:
            return None
        if collection is None:
            return None
        return collection.get_value()

    def __getitem__(self, key: _K) -> list[_V]:
        return self._collections[key].get_value()

    def for_each(
        self,
        callback: Callable[..., object],
        this_arg: object = _UNSET,
        /,
    ) -> None:
        """
        Call ``callback(values, key, mvm)``, or ``callback(this_arg, values, key, mvm)`` if ``this_arg`` is given, for every key.

        Keys are visited in insertion order, and ``values`` is a new copy of the
        values of the key on every call. ``callback`` may modify the map: keys deleted
        before being visited are skipped and keys added are visited.

        :param this_arg: If given (even as ``None``), ``callback`` is bound to this
            object like a method, so it receives it as an extra first argument.
        """
        if this_arg is not _UNSET:
            callback = MethodType(callback, this_arg)

        for key, collection in self._iter_live():
            callback(collection.get_value(), key, self)

    def __iter__(self) -> Iterator[tuple[_K, list[_V]]]:
        for key, collection in self._iter_live():
            yield key, collection.get_value()

    def _iter_live(self) -> Iterator[tuple[_K, Collection[_V]]]:
        """
        Iterate over ``(key, collection)`` pairs while tolerating changes to the keys.

        Keys deleted before being reached are skipped; keys added (or deleted and set
        again) while iterating are yielded in insertion order.
        """
        seen: dict[_K, Collection[_V]] = {}
        while True:
            progressed = False
            for key in list(self._collections):
                collection = self._collections.get(key)
                if collection is None or seen.get(key) is collection:
                    continue
                seen[key] = collection
                progressed = True
                yield key, collection
            if not progressed:
                return

    def as_dict(self) -> dict[_K, list[_V]]:
        """Return a :class:`dict` with a copy of the values of every key."""
        return {key: c.get_value() for key, c in self._collections.items()}

    def as_multidict(self) -> MultiDict[_K, _V]:
        """
        Return a :class:`multicollections.MultiDict` with one item per stored value.

        Keys without any value are not represented in the result.
        """
        ret = MultiDict[_K, _V]()
        for key, collection in self._collections.items():
            for value in collection:
                ret.add(key, value)
        return ret

    def copy(self) -> Self:
        """Return an independent map with the same value type and contents."""
        ret = type(self)(options=self._options)
        for key, collection in self._collections.items():
            new = ret._collections[key] = self.value_type()
            for value in collection:
                new.set_value(value)
        return ret

    @override
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiValuedMap):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    __hash__ = None  # type: ignore[assignment]

    @override
    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.as_dict()!r}, options={{'value_type': {self.value_type.__name__}}})"
