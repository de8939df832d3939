"""Type aliases for the inputs of a :class:`multivaluemap.MultiValuedMap`."""

from collections.abc import Hashable, Iterable, Mapping, Sequence
from typing import Any, TypeAlias

import numpy as np

Values: TypeAlias = Sequence[Any] | np.ndarray[tuple[int], np.dtype[Any]]
"""A sequence of values, absorbed one element at a time when seeding a map."""

Entry: TypeAlias = tuple[Hashable, Any]
"""A key together with a single value or with :type:`Values`."""
EntryLike: TypeAlias = Entry | Sequence[Any]
"""Any two-element sequence that could be interpreted as an :type:`Entry`."""

EntriesLike: TypeAlias = Iterable[EntryLike] | Mapping[Hashable, Any]
"""Seed entries of a map: an iterable of :type:`EntryLike` or a mapping (including a
:class:`multicollections.MultiDict`)."""
