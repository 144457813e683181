"""
Normalization of version envelopes.

Flattens the server's metadata blocks into a single field name -> value
mapping and merges file entries with their data file details.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from ..errors import UnsupportedTypeError


class TypeClass(str, Enum):
    """``typeClass`` of a metadata field."""

    PRIMITIVE = "primitive"
    CONTROLLED_VOCABULARY = "controlledVocabulary"
    COMPOUND = "compound"


def field_to_value(field: Mapping[str, Any]) -> Any:
    """
    Get the value of a metadata field.

    Primitive and controlled vocabulary fields hold a scalar or a list;
    compound fields hold nested fields that become name -> value mappings.
    """
    try:
        type_class = TypeClass(field.get("typeClass"))
    except ValueError:
        raise UnsupportedTypeError(
            f"Unsupported typeClass: '{field.get('typeClass')}'"
        ) from None

    if type_class is TypeClass.COMPOUND:
        return compound_to_value(field.get("value"))
    return field.get("value")


def compound_to_value(value: Any) -> Any:
    """Normalize a compound value (one set of nested fields or a list of them)."""
    if isinstance(value, list):
        return [compound_to_value(item) for item in value]
    return {
        nested["typeName"]: field_to_value(nested)
        for nested in (value or {}).values()
    }


def pack_metadata(blocks: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Flatten metadata blocks into field typeName -> value.

    Block grouping is discarded.
    """
    data: Dict[str, Any] = {}
    for block in (blocks or {}).values():
        for field in block.get("fields", []):
            data[field["typeName"]] = field_to_value(field)
    return data


def pack_files(files: Optional[List[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
    """Merge each file entry with its ``dataFile`` details."""
    packed = []
    for file in files or []:
        entry = {k: v for k, v in file.items() if k != "dataFile"}
        entry.update(file.get("dataFile") or {})
        packed.append(entry)
    return packed
