import pytest
from multivaluemap import (
    Collection,
    MultiValuedMap,
    MultiValuedMapOptions,
    OrderedCollection,
    UniqueCollection,
)
from multivaluemap._options import resolve_options
from pydantic import ValidationError


def test_default() -> None:
    options = MultiValuedMapOptions()
    assert options.value_type is OrderedCollection


@pytest.mark.parametrize(
    ("value_type", "expected"),
    [
        (OrderedCollection, OrderedCollection),
        (UniqueCollection, UniqueCollection),
        ("ordered", OrderedCollection),
        ("unique", UniqueCollection),
        ("Unique", UniqueCollection),
        (None, OrderedCollection),
    ],
)
def test_value_type(value_type: object, expected: type[Collection]) -> None:
    options = MultiValuedMapOptions(value_type=value_type)  # type: ignore[arg-type]
    assert options.value_type is expected


def test_custom_value_type() -> None:
    class SortedCollection(OrderedCollection[int]):
        def get_value(self) -> list[int]:
            return sorted(super().get_value())

    mvm = MultiValuedMap(options=MultiValuedMapOptions(value_type=SortedCollection))
    mvm.set_all("A", [3, 1, 2])
    assert mvm.get("A") == [1, 2, 3]
    assert mvm.value_type is SortedCollection


@pytest.mark.parametrize("value_type", ["set", 42, list, object()])
def test_invalid_value_type(value_type: object) -> None:
    with pytest.raises(ValidationError):
        MultiValuedMapOptions(value_type=value_type)  # type: ignore[arg-type]


def test_invalid_options() -> None:
    with pytest.raises(ValidationError):
        MultiValuedMap(None, {"value_type": dict})

    with pytest.raises(ValidationError):
        MultiValuedMap(None, 42)  # type: ignore[arg-type]


def test_frozen() -> None:
    options = MultiValuedMapOptions()
    with pytest.raises(ValidationError):
        options.value_type = UniqueCollection  # type: ignore[misc]


def test_resolve_options() -> None:
    options = MultiValuedMapOptions(value_type=UniqueCollection)
    assert resolve_options(options) is options
    assert resolve_options(None) == MultiValuedMapOptions()
    assert resolve_options({"value_type": "unique"}) == options
