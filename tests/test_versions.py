import pytest

from dataverse_client.dataset.versions import (
    DRAFT,
    PublishedVersion,
    VersionAlias,
    parse_version,
    version_key,
)
from dataverse_client.errors import UnsupportedTypeError


@pytest.mark.parametrize("ref, expected", [
    ("latest", VersionAlias.LATEST),
    (":latest", VersionAlias.LATEST),
    ("published", VersionAlias.PUBLISHED),
    (":latest-published", VersionAlias.PUBLISHED),
    ("draft", DRAFT),
    (":draft", DRAFT),
    ("DRAFT", DRAFT),
    ("1.2", PublishedVersion(1, 2)),
    ("3", PublishedVersion(3, 0)),
    (1.2, PublishedVersion(1, 2)),
    (2, PublishedVersion(2, 0)),
    (PublishedVersion(4, 1), PublishedVersion(4, 1)),
    (VersionAlias.PUBLISHED, VersionAlias.PUBLISHED),
])
def test_parse_version(ref, expected):
    assert parse_version(ref) == expected


@pytest.mark.parametrize("ref", ["", "v1", "1.2.3", "newest", None, True, [1]])
def test_parse_version_rejects_unknown(ref):
    with pytest.raises(ValueError):
        parse_version(ref)


def test_published_versions_order_numerically():
    versions = [PublishedVersion(1, 10), PublishedVersion(2, 0), PublishedVersion(1, 2)]

    assert sorted(versions) == [PublishedVersion(1, 2), PublishedVersion(1, 10), PublishedVersion(2, 0)]
    assert str(PublishedVersion(1, 10)) == "1.10"
    assert PublishedVersion(1, 10).path == "1.10"


def test_draft_key():
    assert str(DRAFT) == "draft"
    assert DRAFT.path == ":draft"
    assert str(VersionAlias.LATEST) == "latest"


def test_version_key_from_envelope():
    assert version_key({"versionState": "DRAFT"}) is DRAFT
    assert version_key({
        "versionState": "RELEASED", "versionNumber": 2, "versionMinorNumber": 1,
    }) == PublishedVersion(2, 1)


def test_version_key_unknown_state():
    with pytest.raises(UnsupportedTypeError, match="DEACCESSIONED"):
        version_key({"versionState": "DEACCESSIONED"})
