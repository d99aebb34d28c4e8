"""
GSP: a brace-delimited notation that compiles to HTML and XML

GSP trades the noise of angle-bracket markup for a terse, brace-based
structure with ``.class`` and ``#id`` shorthand and inline-embedded elements.

Quick Start:
    >>> from gsp import parse, render
    >>> doc = parse('div.note #intro { p {- Hello @em{-there}! } }')
    >>> render(doc)
    '<div class="note" id="intro"><p>Hello <em>there</em>!</p></div>'

    >>> # XML output: childless elements are self-closing
    >>> from gsp import OutputMode
    >>> render(parse('feed { entry {} }'), mode=OutputMode.XML)
    '<feed><entry/></feed>'

Command Line:
    gsp [-d] [-x] [-n] [--ast] [file ...]
"""

from __future__ import annotations

import io
from typing import BinaryIO, TextIO

from gsp.config import (
    HTML_DOCTYPE,
    OutputMode,
    RenderConfig,
    get_render_config,
    render_config_context,
    reset_render_config,
    set_render_config,
)
from gsp.errors import (
    DecodeError,
    GspError,
    InvalidSyntaxError,
    ParseError,
    RenderError,
    UnexpectedEndOfInput,
)
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
from gsp.parser import Parser
from gsp.renderers.markup import MarkupRenderer
from gsp.scanner import Scanner
from gsp.serialization import from_dict, from_json, to_dict, to_json

__version__ = "0.3.0"


def parse(
    source: bytes | str | BinaryIO,
    *,
    source_file: str | None = None,
) -> Document:
    """Parse GSP source into a typed AST.

    Args:
        source: UTF-8 bytes, a string, or a readable binary stream. Streams
            are read but never closed.
        source_file: Optional source file path for error messages

    Returns:
        Document AST root node

    Raises:
        InvalidSyntaxError: On a grammar or name violation
        UnexpectedEndOfInput: If input ends inside an open construct
        DecodeError: If the input is not valid UTF-8

    Example:
        >>> doc = parse('a href="/" {- home }')
        >>> doc.children[0].attrs
        (Attr(key='href', value='/'),)
    """
    if isinstance(source, str):
        stream: BinaryIO = io.BytesIO(source.encode("utf-8"))
    elif isinstance(source, (bytes, bytearray)):
        stream = io.BytesIO(source)
    else:
        stream = source
    return Parser(stream, source_file=source_file).parse()


def render(
    doc: Node,
    *,
    mode: OutputMode = OutputMode.HTML,
    sink: TextIO | None = None,
    newlines: bool = False,
) -> str:
    """Render an AST to markup.

    Args:
        doc: Document (or any node) to render
        mode: Start in HTML or XML mode
        sink: Optional text stream the output is also written to
        newlines: Emit a line feed after elements marked with ``>``

    Returns:
        The rendered markup

    Raises:
        RenderError: On an unknown node type or if writing to ``sink`` fails
    """
    output = MarkupRenderer(mode, newlines=newlines).render(doc)
    if sink is not None:
        try:
            sink.write(output)
        except OSError as exc:
            raise RenderError(f"failed to write output: {exc}") from exc
    return output


def compile_markup(
    source: bytes | str | BinaryIO,
    *,
    source_file: str | None = None,
    config: RenderConfig | None = None,
) -> str:
    """Parse and render in one step.

    Uses ``config`` or, when omitted, the active RenderConfig. In HTML mode
    the output starts with ``<!DOCTYPE html>`` unless ``config.doctype`` is
    false.

    Example:
        >>> compile_markup('br {}', config=RenderConfig(doctype=False))
        '<br>'
    """
    config = config or get_render_config()
    doc = parse(source, source_file=source_file)
    body = render(doc, mode=config.mode, newlines=config.newlines)
    if config.emits_doctype:
        return HTML_DOCTYPE + body
    return body


__all__ = [
    "HTML_DOCTYPE",
    "Attr",
    "DecodeError",
    "DocType",
    "Document",
    "Element",
    "GspError",
    "InvalidSyntaxError",
    "MarkupRenderer",
    "Node",
    "OutputMode",
    "ParseError",
    "Parser",
    "Position",
    "RenderConfig",
    "RenderError",
    "Scanner",
    "Text",
    "TextGroup",
    "UnexpectedEndOfInput",
    "XmlProlog",
    "__version__",
    "compile_markup",
    "from_dict",
    "from_json",
    "get_render_config",
    "parse",
    "render",
    "render_config_context",
    "reset_render_config",
    "set_render_config",
    "to_dict",
    "to_json",
]
