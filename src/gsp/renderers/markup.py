"""HTML/XML renderer using StringBuilder pattern.

Renders a typed AST to markup text in a single depth-first pass.

Thread Safety:
All per-render state is encapsulated in RenderContext, created fresh for each
render() call. Multiple threads can safely share a single MarkupRenderer
instance and call render() concurrently without synchronization.

XML Mode:
Childless elements are written self-closing (``<br/>``) in XML mode and as a
bare start tag (``<br>``) otherwise. A render starts in XML mode when the
renderer was built with ``OutputMode.XML``; an ``XmlProlog`` node switches the
rest of the current render to XML mode.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from gsp.charsets import trim_left_spaces, trim_right_spaces
from gsp.config import OutputMode
from gsp.errors import RenderError
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
from gsp.stringbuilder import StringBuilder
from gsp.utils.logger import get_logger

logger = get_logger(__name__)

_ATTR_ESCAPES = str.maketrans(
    {
        '"': "&quot;",
        "&": "&amp;",
        "<": "&lt;",
    }
)

_TEXT_ESCAPES = str.maketrans(
    {
        '"': "&quot;",
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        "'": "&apos;",
    }
)


def escape_attr(s: str) -> str:
    """Escape an attribute value.

    Values are always double quoted, so only ``"``, ``&`` and ``<`` need
    replacing; ``>`` and ``'`` are left alone.
    """
    return s.translate(_ATTR_ESCAPES)


def escape_text(s: str) -> str:
    """Escape text content, including both quote characters."""
    return s.translate(_TEXT_ESCAPES)


def render_attrs(attrs: Sequence[Attr], sb: StringBuilder) -> None:
    """Render attributes with a leading space each.

    All ``class`` entries merge into one space-separated ``class`` attribute,
    written first. Other attributes follow in source order; an empty value
    renders as a bare key.
    """
    classes = [a.value for a in attrs if a.key == "class"]
    if classes:
        sb.append(' class="')
        sb.append(" ".join(escape_attr(v) for v in classes))
        sb.append('"')

    for attr in attrs:
        if attr.key == "class":
            continue
        sb.append(" ").append(attr.key)
        if attr.value:
            sb.append('="').append(escape_attr(attr.value)).append('"')


@dataclass(slots=True)
class RenderContext:
    """Per-render mutable state.

    Created fresh for each render() call.

    Attributes:
        xml: Write childless elements self-closing
        elements: Number of elements written so far
    """

    xml: bool = False
    elements: int = 0


class MarkupRenderer:
    """Render AST to HTML or XML.

    Usage:
        >>> from gsp import parse
        >>> renderer = MarkupRenderer()
        >>> renderer.render(parse('p.lead {- Hello }'))
        '<p class="lead">Hello</p>'

    Thread Safety:
        Multiple threads can safely share a single MarkupRenderer instance.
        Each render() call creates an independent RenderContext.
    """

    __slots__ = ("_mode", "_newlines")

    def __init__(self, mode: OutputMode = OutputMode.HTML, *, newlines: bool = False) -> None:
        """Initialize renderer.

        Args:
            mode: Mode each render starts in
            newlines: Emit a line feed after elements whose newline hint is set
        """
        self._mode = mode
        self._newlines = newlines

    @property
    def mode(self) -> OutputMode:
        return self._mode

    def render(self, node: Node) -> str:
        """Render a node (usually a Document) to a string.

        Raises:
            RenderError: If the tree contains a node type the renderer does
                not know.
        """
        return self._build(node).build()

    def render_to(self, node: Node, sink: TextIO) -> None:
        """Render a node and write the result to a text stream.

        Raises:
            RenderError: On an unknown node type or if writing fails.
        """
        sb = self._build(node)
        try:
            sb.write_to(sink)
        except OSError as exc:
            raise RenderError(f"failed to write output: {exc}") from exc

    def _build(self, node: Node) -> StringBuilder:
        ctx = RenderContext(xml=self._mode is OutputMode.XML)
        sb = StringBuilder()
        self._render_node(node, sb, ctx)
        logger.debug("rendered %d element(s); xml=%s", ctx.elements, ctx.xml)
        return sb

    # =========================================================================
    # Nodes
    # =========================================================================

    def _render_node(self, node: Node, sb: StringBuilder, ctx: RenderContext) -> None:
        match node:
            case Text():
                sb.append(escape_text(node.content))
            case Element():
                self._render_element(node, sb, ctx)
            case TextGroup():
                self._render_group(node, sb, ctx)
            case Document():
                self._render_children(node.children, sb, ctx)
            case DocType():
                sb.append("<!DOCTYPE")
                render_attrs(node.attrs, sb)
                sb.append(">")
            case XmlProlog():
                sb.append("<?xml")
                render_attrs(node.attrs, sb)
                sb.append("?>")
                if not ctx.xml:
                    logger.debug("XML prolog at %s; switching to XML mode", node.location)
                    ctx.xml = True
            case _:
                raise RenderError(f"cannot render node of type {type(node).__name__}")

    def _render_element(self, element: Element, sb: StringBuilder, ctx: RenderContext) -> None:
        ctx.elements += 1
        sb.append("<").append(element.name)
        render_attrs(element.attrs, sb)

        if element.children:
            sb.append(">")
            self._render_children(element.children, sb, ctx)
            sb.append("</").append(element.name).append(">")
        elif ctx.xml:
            sb.append("/>")
        else:
            sb.append(">")

        if self._newlines and element.newline:
            sb.append("\n")

    def _render_children(
        self, children: Sequence[Node], sb: StringBuilder, ctx: RenderContext
    ) -> None:
        for child in children:
            self._render_node(child, sb, ctx)

    def _render_group(self, group: TextGroup, sb: StringBuilder, ctx: RenderContext) -> None:
        """Render a text run, trimming its outer whitespace when asked to.

        Only a Text in the first or last slot is trimmed; the node itself is
        left untouched.
        """
        if not group.trim:
            self._render_children(group.children, sb, ctx)
            return

        last = len(group.children) - 1
        for i, child in enumerate(group.children):
            if not isinstance(child, Text):
                self._render_node(child, sb, ctx)
                continue
            content = child.content
            if i == 0:
                content = trim_left_spaces(content)
            if i == last:
                content = trim_right_spaces(content)
            sb.append(escape_text(content))
