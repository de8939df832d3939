from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from ._collections import Collection, OrderedCollection, UniqueCollection

_NAMED_VALUE_TYPES: dict[str, type[Collection]] = {
    "ordered": OrderedCollection,
    "unique": UniqueCollection,
}


class MultiValuedMapOptions(BaseModel):
    """
    Construction options of a :class:`MultiValuedMap`.

    :param value_type: The :class:`Collection` subclass instantiated for every key of
        the map. Also accepts the names ``"ordered"`` (:class:`OrderedCollection`) and
        ``"unique"`` (:class:`UniqueCollection`). ``None`` selects the default,
        :class:`OrderedCollection`.
    """

    model_config = ConfigDict(frozen=True)

    value_type: type[Collection] = OrderedCollection

    @field_validator("value_type", mode="before")
    @classmethod
    def _resolve_value_type(cls, value: object) -> object:
        if value is None:
            return OrderedCollection

        if isinstance(value, str):
            try:
                return _NAMED_VALUE_TYPES[value.lower()]
            except KeyError:
                msg = f"Unknown value type {value!r} (expected one of {', '.join(map(repr, _NAMED_VALUE_TYPES))})"
                raise ValueError(msg) from None

        return value


def resolve_options(
    options: MultiValuedMapOptions | Mapping[str, Any] | None,
) -> MultiValuedMapOptions:
    if options is None:
        return MultiValuedMapOptions()

    if isinstance(options, MultiValuedMapOptions):
        return options

    if isinstance(options, Mapping):
        options = dict(options)

    return MultiValuedMapOptions.model_validate(options)
