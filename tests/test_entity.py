import pytest

from dataverse_client import Dataverse

from .factories import dataverse_payload


def test_snapshot_access():
    dv = Dataverse("demo", data=dataverse_payload(1, "demo"))

    assert dv["alias"] == "demo"
    assert "name" in dv
    assert dv.get("missing", "fallback") == "fallback"
    assert "dataverseContacts" in list(dv.keys())
    assert dv.dig("dataverseContacts", 0, "contactEmail") == "abc@def.org"
    assert dv.dig("dataverseContacts", 3, "contactEmail") is None
    assert dv.dig("alias", "nested") is None


def test_snapshot_is_read_only_copy():
    data = dataverse_payload(1, "demo")
    dv = Dataverse("demo", data=data)
    data["alias"] = "changed"

    assert dv["alias"] == "demo"
    with pytest.raises(TypeError):
        dv.api_data["alias"] = "changed"


def test_structural_equality_and_hash():
    first = Dataverse("demo", data=dataverse_payload(1, "demo"))
    second = Dataverse(1, data=dataverse_payload(1, "demo"))
    other = Dataverse("other", data=dataverse_payload(2, "other"))

    assert first == second
    assert hash(first) == hash(second)
    assert first != other
    assert len({first, second, other}) == 2
    assert first != {"alias": "demo"}


def test_refresh_replaces_snapshot_and_caches(server):
    dv = Dataverse("demo", data=dataverse_payload(1, "demo"))
    server.ok("GET", "dataverses/demo/storagesize", {"message": "Total size: 10 bytes"})
    assert dv.size() == 10

    updated = dict(dataverse_payload(1, "demo"), name="Renamed")
    server.ok("GET", "dataverses/demo", updated)
    server.ok("GET", "dataverses/demo/storagesize", {"message": "Total size: 20 bytes"})

    assert dv.refresh() is dv
    assert dv["name"] == "Renamed"
    assert dv.size() == 20
