"""Tests for gsp.serialization: AST JSON round-trip."""

import json

import pytest

from gsp import parse, render
from gsp.location import Position
from gsp.nodes import Attr, Document, Element, Text
from gsp.serialization import from_dict, from_json, to_dict, to_json

SOURCE = """?xml version="1.0" {}
>feed.main #f lang="ünï" {
  entry { title {- Hello @b{= "world" } } }
}"""


class TestToDict:
    def test_type_discriminators(self) -> None:
        data = to_dict(parse("p.x {- hi }"))
        assert data["_type"] == "Document"
        element = data["children"][0]
        assert element["_type"] == "Element"
        assert element["attrs"] == [{"_type": "Attr", "key": "class", "value": "x"}]
        assert element["children"][0]["_type"] == "TextGroup"
        assert element["children"][0]["trim"] is True

    def test_position_serialized(self) -> None:
        data = to_dict(Text(location=Position(1, 4, 2, "a.gsp"), content="x"))
        assert data["location"] == {
            "_type": "Position",
            "row": 1,
            "col": 4,
            "prev_col": 2,
            "source_file": "a.gsp",
        }

    def test_json_is_deterministic(self) -> None:
        doc = parse(SOURCE)
        assert to_json(doc) == to_json(doc)
        assert list(json.loads(to_json(doc)).keys()) == sorted(["_type", "children", "location"])

    def test_json_keeps_unicode(self) -> None:
        assert "ünï" in to_json(parse(SOURCE))


class TestRoundTrip:
    def test_document_round_trip(self) -> None:
        doc = parse(SOURCE)
        restored = from_json(to_json(doc, indent=2))
        assert restored == doc
        assert render(restored) == render(doc)

    def test_node_round_trip(self) -> None:
        node = Element(
            location=Position(),
            name="a",
            attrs=(Attr("href", "/"), Attr("hidden")),
            newline=True,
        )
        assert from_dict(to_dict(node)) == node


class TestErrors:
    def test_missing_type(self) -> None:
        with pytest.raises(ValueError, match="_type"):
            from_dict({"content": "x"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown node type"):
            from_dict({"_type": "Paragraph"})

    def test_from_json_requires_document(self) -> None:
        with pytest.raises(ValueError, match="Expected Document"):
            from_json(json.dumps(to_dict(Text(location=Position(), content="x"))))

    def test_from_json_returns_document(self) -> None:
        assert isinstance(from_json(to_json(parse(""))), Document)
