"""AST serialization: JSON round-trip for GSP AST nodes.

Converts typed AST nodes to/from JSON-compatible dicts. Used by
``gsp --ast`` to inspect what the parser produced, and handy for caching
parsed documents.

All output is deterministic (sorted keys).

Example:
    from gsp import parse
    from gsp.serialization import to_json, from_json

    doc = parse('p {- Hello }')
    assert from_json(to_json(doc)) == doc

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from dataclasses import fields
from typing import Any

from gsp.location import Position
from gsp.nodes import (
    Attr,
    DocType,
    Document,
    Element,
    Node,
    Text,
    TextGroup,
    XmlProlog,
)

# Registry of node type names to classes for deserialization
_NODE_TYPES: dict[str, type[Node]] = {
    "Document": Document,
    "Element": Element,
    "TextGroup": TextGroup,
    "Text": Text,
    "DocType": DocType,
    "XmlProlog": XmlProlog,
}


def to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a JSON-compatible dict.

    Includes a ``_type`` discriminator field for deserialization.

    """
    result: dict[str, Any] = {"_type": type(node).__name__}

    for f in fields(node):
        result[f.name] = _serialize_value(getattr(node, f.name))

    return result


def _serialize_value(value: Any) -> Any:
    if isinstance(value, Node):
        return to_dict(value)
    if isinstance(value, Position):
        return {
            "_type": "Position",
            "row": value.row,
            "col": value.col,
            "prev_col": value.prev_col,
            "source_file": value.source_file,
        }
    if isinstance(value, Attr):
        return {"_type": "Attr", "key": value.key, "value": value.value}
    if isinstance(value, tuple):
        return [_serialize_value(item) for item in value]
    # Primitives: str, bool, None
    return value


def from_dict(data: dict[str, Any]) -> Node:
    """Reconstruct a typed AST node from a dict.

    Raises:
        ValueError: If ``_type`` is missing or unknown.

    """
    type_name = data.get("_type")
    if type_name is None:
        msg = "Missing '_type' field in serialized node"
        raise ValueError(msg)

    node_cls = _NODE_TYPES.get(type_name)
    if node_cls is None:
        msg = f"Unknown node type: {type_name!r}"
        raise ValueError(msg)

    kwargs: dict[str, Any] = {}
    for f in fields(node_cls):
        if f.name in data:
            kwargs[f.name] = _deserialize_value(data[f.name])

    return node_cls(**kwargs)


def _deserialize_value(value: Any) -> Any:
    if isinstance(value, dict):
        type_name = value.get("_type")
        if type_name == "Position":
            return Position(
                row=value["row"],
                col=value["col"],
                prev_col=value.get("prev_col", 0),
                source_file=value.get("source_file"),
            )
        if type_name == "Attr":
            return Attr(key=value["key"], value=value.get("value", ""))
        if type_name is not None:
            return from_dict(value)
        return value
    if isinstance(value, list):
        return tuple(_deserialize_value(item) for item in value)
    return value


def to_json(doc: Document, *, indent: int | None = None) -> str:
    """Serialize a Document AST to a JSON string."""
    return json.dumps(to_dict(doc), sort_keys=True, indent=indent, ensure_ascii=False)


def from_json(data: str) -> Document:
    """Deserialize a Document AST from a JSON string.

    Raises:
        ValueError: If the JSON doesn't represent a Document.

    """
    node = from_dict(json.loads(data))
    if not isinstance(node, Document):
        msg = f"Expected Document, got {type(node).__name__}"
        raise ValueError(msg)
    return node
