"""Builders for Dataverse API payloads used across the tests."""

from typing import Any, Dict, List, Optional

PID = "doi:10.5072/FK2/ABCDEF"

TERMS_OF_USE = (
    '<a href="http://creativecommons.org/publicdomain/zero/1.0">'
    '<img src="https://licensebuttons.net/p/zero/1.0/88x31.png" alt="CC0" />CC0 1.0</a>.'
)


def primitive(name: str, value: Any, multiple: bool = False) -> Dict[str, Any]:
    return {"typeName": name, "multiple": multiple, "typeClass": "primitive", "value": value}


def vocabulary(name: str, value: Any, multiple: bool = True) -> Dict[str, Any]:
    return {
        "typeName": name,
        "multiple": multiple,
        "typeClass": "controlledVocabulary",
        "value": value,
    }


def compound(name: str, value: Any, multiple: bool = True) -> Dict[str, Any]:
    return {"typeName": name, "multiple": multiple, "typeClass": "compound", "value": value}


def author(name: str, affiliation: str = "Example University") -> Dict[str, Any]:
    return {
        "authorName": primitive("authorName", name),
        "authorAffiliation": primitive("authorAffiliation", affiliation),
    }


def citation_block(title: str = "Sample dataset", author_name: str = "Doe, Jane") -> Dict[str, Any]:
    return {
        "citation": {
            "displayName": "Citation Metadata",
            "fields": [
                primitive("title", title),
                compound("author", [author(author_name)]),
                vocabulary("subject", ["Other"]),
            ],
        }
    }


def file_entry(file_id: int = 11, label: str = "data.csv") -> Dict[str, Any]:
    return {
        "label": label,
        "restricted": False,
        "version": 1,
        "dataFile": {
            "id": file_id,
            "persistentId": "",
            "filename": label,
            "contentType": "text/csv",
            "filesize": 1234,
        },
    }


def version_envelope(
    state: str = "RELEASED",
    major: int = 1,
    minor: int = 0,
    title: str = "Sample dataset",
    files: Optional[List[Dict[str, Any]]] = None,
    version_id: int = 101,
    dataset_id: int = 5,
) -> Dict[str, Any]:
    envelope = {
        "id": version_id,
        "datasetId": dataset_id,
        "datasetPersistentId": PID,
        "storageIdentifier": "file://10.5072/FK2/ABCDEF",
        "versionState": state,
        "lastUpdateTime": "2021-03-01T12:00:00Z",
        "createTime": "2021-02-01T08:30:00Z",
        "termsOfUse": TERMS_OF_USE,
        "metadataBlocks": citation_block(title),
        "files": [file_entry()] if files is None else files,
    }
    if state == "RELEASED":
        envelope.update({
            "versionNumber": major,
            "versionMinorNumber": minor,
            "releaseTime": "2021-03-02T09:15:00Z",
        })
    return envelope


def version_summary(envelope: Dict[str, Any]) -> Dict[str, Any]:
    """Entry of the ``datasets/{id}/versions`` listing."""
    return {k: v for k, v in envelope.items() if k not in ("metadataBlocks", "files")}


def dataset_payload(latest: Optional[Dict[str, Any]], dataset_id: int = 5) -> Dict[str, Any]:
    payload = {
        "id": dataset_id,
        "identifier": "FK2/ABCDEF",
        "persistentUrl": "https://doi.org/10.5072/FK2/ABCDEF",
        "protocol": "doi",
        "authority": "10.5072",
        "publisher": "Demo Dataverse",
        "storageIdentifier": "file://10.5072/FK2/ABCDEF",
    }
    if latest is not None:
        payload["latestVersion"] = latest
    return payload


def dataverse_payload(dataverse_id: int = 1, alias: str = "demo") -> Dict[str, Any]:
    return {
        "id": dataverse_id,
        "alias": alias,
        "name": f"{alias} dataverse",
        "dataverseContacts": [{"displayOrder": 0, "contactEmail": "abc@def.org"}],
        "permissionRoot": True,
        "dataverseType": "UNCATEGORIZED",
    }
