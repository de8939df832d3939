from collections.abc import Iterable, Mapping, Sequence
from typing import TypeGuard

import numpy as np

from ._exceptions import InvalidArgumentError
from .typing import EntriesLike, Entry, Values

_STRINGS = (str, bytes, bytearray)


def is_values(obj: object, /) -> TypeGuard[Values]:
    """Whether ``obj`` is a sequence of values rather than a single value."""
    if isinstance(obj, np.ndarray):
        return obj.ndim == 1
    return isinstance(obj, Sequence) and not isinstance(obj, _STRINGS)


def is_entry(obj: object, /) -> bool:
    return (
        isinstance(obj, Sequence) and not isinstance(obj, _STRINGS) and len(obj) == 2
    )


def validated_entries(entries: EntriesLike, /) -> list[Entry]:
    """
    Return the ``(key, value)`` entries of a seed, checking all of them first.

    :raises InvalidArgumentError: If ``entries`` is not iterable or any of its
        elements is not a two-element entry.
    """
    if isinstance(entries, Mapping):
        return list(entries.items())

    if not isinstance(entries, Iterable):
        raise InvalidArgumentError(
            entries, expected="an iterable of (key, value) entries"
        )

    ret: list[Entry] = []
    for entry in entries:
        if not is_entry(entry):
            raise InvalidArgumentError(entry, expected="a (key, value) entry")
        key, value = entry
        ret.append((key, value))

    return ret

