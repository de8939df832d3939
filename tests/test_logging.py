import logging

import pytest
from multivaluemap import MultiValuedMap, UniqueCollection


def test_construction_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="multivaluemap"):
        MultiValuedMap([("A", [1, 2]), ("B", 3)])

    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.name == "multivaluemap._map"
    assert record.levelno == logging.DEBUG
    assert "2 keys from 2 entries" in record.getMessage()
    assert "OrderedCollection" in record.getMessage()


def test_none_is_not_logged(caplog: pytest.LogCaptureFixture) -> None:
    mvm = MultiValuedMap(options={"value_type": UniqueCollection})
    with caplog.at_level(logging.DEBUG, logger="multivaluemap"):
        mvm.set("A", None).set_all("A", [None, None])

    assert caplog.records == []
    assert mvm.get("A") == []


def test_identity_fallback_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    mvm = MultiValuedMap(options={"value_type": UniqueCollection})
    with caplog.at_level(logging.DEBUG, logger="multivaluemap"):
        mvm.set("A", [1])

    assert [r.name for r in caplog.records] == ["multivaluemap._collections"]
    assert "list" in caplog.records[0].getMessage()


def test_nothing_logged_by_default(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        MultiValuedMap([("A", 1)]).set("A", [1])

    assert caplog.records == []
