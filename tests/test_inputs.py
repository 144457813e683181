import json
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

from dataverse_client.errors import InputError
from dataverse_client.inputs import (
    FilePath,
    InlineObject,
    RawText,
    classify_input,
    load_payload,
)

SCHEMA = {
    "type": "object",
    "required": ["alias"],
    "properties": {"alias": {"type": "string"}},
}


def test_classify_input(tmp_path):
    path = tmp_path / "dv.json"
    path.write_text("{}", encoding="utf-8")

    assert classify_input({"a": 1}) == InlineObject({"a": 1})
    assert classify_input(path) == FilePath(path)
    assert classify_input(str(path)) == FilePath(Path(str(path)))
    assert classify_input('{"a": 1}') == RawText('{"a": 1}')
    assert classify_input(str(tmp_path / "missing.json")) == RawText(str(tmp_path / "missing.json"))
    assert classify_input(ET.Element("codeBook")) == RawText("<codeBook />")


def test_classify_input_rejects_other_types():
    with pytest.raises(InputError, match="could not be parsed"):
        classify_input(42)


def test_load_payload_from_mapping_json_and_file(tmp_path):
    path = tmp_path / "dv.json"
    path.write_text(json.dumps({"alias": "from_file"}), encoding="utf-8")

    assert load_payload({"alias": "inline"}, schema=SCHEMA).body == {"alias": "inline"}
    assert load_payload('{"alias": "text"}', schema=SCHEMA).body == {"alias": "text"}
    payload = load_payload(str(path), schema=SCHEMA)
    assert payload.body == {"alias": "from_file"}
    assert payload.xml is False


@pytest.mark.parametrize("data", ["not json", "[1, 2]", "nonexistent_file.json"])
def test_load_payload_unparseable(data):
    with pytest.raises(InputError):
        load_payload(data)


def test_load_payload_schema_violation(caplog):
    with pytest.raises(InputError, match="schema validation"):
        load_payload({"alias": 5}, schema=SCHEMA)

    assert "Schema error at ['alias']" in caplog.text


def test_load_payload_xml(tmp_path):
    path = tmp_path / "ddi.xml"
    path.write_text("<codeBook><stdyDscr/></codeBook>", encoding="utf-8")

    assert load_payload(path, xml=True).body == "<codeBook><stdyDscr/></codeBook>"
    assert load_payload("<codeBook/>", xml=True).xml is True
    assert load_payload(ET.Element("codeBook"), xml=True).body == "<codeBook />"


def test_load_payload_xml_rejects_mapping_and_bad_xml():
    with pytest.raises(InputError):
        load_payload({"a": 1}, xml=True)
    with pytest.raises(InputError, match="XML could not be parsed"):
        load_payload("<codeBook>", xml=True)
