"""Typed AST nodes for GSP.

All AST nodes are frozen dataclasses with slots for:
- Immutability: the renderer can never modify the caller's tree
- Memory efficiency: __slots__ reduces memory footprint
- Pattern matching: match statements work naturally

Node Hierarchy:
Node (base)
├── Document      root of every parse
├── Element       name, attributes, children
├── TextGroup     text run; interleaved Text and embedded Element children
├── Text          literal text leaf
├── DocType       <!DOCTYPE ...>
└── XmlProlog     <?xml ...?>

Thread Safety:
All nodes are frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass

from gsp.location import Position


@dataclass(frozen=True, slots=True)
class Attr:
    """An attribute as a key/value pair.

    An empty value marks a boolean attribute, rendered as the bare key.

    """

    key: str
    value: str = ""


# =============================================================================
# Base Node
# =============================================================================


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all AST nodes.

    All nodes track where they start in the source.

    """

    location: Position


# =============================================================================
# Leaves
# =============================================================================


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Literal text.

    GSP: the characters of a text run between embedded elements
    HTML: escaped text content

    """

    content: str


@dataclass(frozen=True, slots=True)
class DocType(Node):
    """Document type declaration.

    GSP: !doctype html {}
    HTML: <!DOCTYPE html>

    """

    attrs: tuple[Attr, ...] = ()


@dataclass(frozen=True, slots=True)
class XmlProlog(Node):
    """XML declaration. Switches the rest of the render to XML mode.

    GSP: ?xml version="1.0" {}
    XML: <?xml version="1.0"?>

    """

    attrs: tuple[Attr, ...] = ()


# =============================================================================
# Containers
# =============================================================================


@dataclass(frozen=True, slots=True)
class Element(Node):
    """A tagged element.

    GSP: >div.note #intro hidden { ... }
    HTML: <div class="note" id="intro" hidden>...</div>

    ``newline`` records the leading ``>`` marker. It is a hint only; the
    default renderer ignores it.

    """

    name: str
    attrs: tuple[Attr, ...] = ()
    children: tuple[Node, ...] = ()
    newline: bool = False


@dataclass(frozen=True, slots=True)
class TextGroup(Node):
    """A text run, possibly with embedded elements.

    GSP: - text @em{-inline} text      (trim=True)
         = text kept verbatim          (trim=False)

    With ``trim`` set, leading whitespace of a first Text child and trailing
    whitespace of a last Text child are dropped at render time.

    """

    children: tuple[Node, ...] = ()
    trim: bool = False


@dataclass(frozen=True, slots=True)
class Document(Node):
    """Root node of a parsed document."""

    children: tuple[Node, ...] = ()


# Type aliases
Declaration = DocType | XmlProlog
