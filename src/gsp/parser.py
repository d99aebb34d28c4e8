"""Recursive descent parser producing typed AST.

Consumes code points from a Scanner and builds immutable (frozen) dataclass
nodes.

Grammar:
    document := ( decl | node )*
    node     := textRun | element
    element  := ['>'] name attrs '{' node* '}'
    attrs    := ( '.' name | '#' name | name ['=' string] )*
    textRun  := ('-' | '=') textBody
    textBody := ( char | '@' element | escape )*
    decl     := '!' 'doctype' attrs '{' '}' | '?' 'xml' attrs '{' '}'

A text run extends up to the unescaped '}' that closes its element; the
element consumes that brace.

Thread Safety:
- Parser instances are single-use and not thread-safe
- The resulting AST is immutable and safe to share across threads

"""

from __future__ import annotations

from collections.abc import Container
from typing import BinaryIO

from gsp.charsets import EOF
from gsp.errors import InvalidSyntaxError, UnexpectedEndOfInput
from gsp.location import Position
from gsp.names import is_name_char, is_name_start_char
from gsp.nodes import (
    Attr,
    Declaration,
    DocType,
    Document,
    Element,
    Node,
    Text,
    TextGroup,
    XmlProlog,
)
from gsp.scanner import Scanner
from gsp.utils.logger import get_logger

logger = get_logger(__name__)

# Shorthand sigils and the attribute keys they desugar to
SHORTHAND_KEYS: dict[str, str] = {".": "class", "#": "id"}

# Text run markers; '-' trims boundary whitespace, '=' keeps it
TEXT_MARKERS: dict[str, bool] = {"-": True, "=": False}

# Declaration sigils and the keyword each must be followed by
DECLARATION_KEYWORDS: dict[str, str] = {"!": "doctype", "?": "xml"}

STRING_ESCAPES: frozenset[str] = frozenset('\\"')
TEXT_ESCAPES: frozenset[str] = frozenset("\\@}")


class Parser:
    """Recursive descent parser for GSP.

    Usage:
            >>> import io
            >>> parser = Parser(io.BytesIO(b'p.lead {- Hello @em{-there} }'))
            >>> doc = parser.parse()
            >>> doc.children[0].name
            'p'

    Thread Safety:
        Parser instances are single-use and not thread-safe. Create one per
        parse operation. The resulting AST is immutable and thread-safe.

    """

    __slots__ = ("_scanner", "_source_file")

    def __init__(self, stream: BinaryIO, source_file: str | None = None) -> None:
        """Initialize parser over a binary stream.

        Args:
            stream: UTF-8 encoded GSP source
            source_file: Optional source file path for error messages
        """
        self._scanner = Scanner(stream, source_file=source_file)
        self._source_file = source_file

    def parse(self) -> Document:
        """Parse the whole input into a Document.

        Returns:
            Document whose children are the top-level nodes

        Raises:
            InvalidSyntaxError: On a grammar or name violation
            UnexpectedEndOfInput: If input ends inside an open construct
            DecodeError: If the input is not valid UTF-8
        """
        scanner = self._scanner
        children: list[Node] = []

        while True:
            scanner.skip_spaces()
            char = scanner.peek()
            if char == EOF:
                break
            if char in DECLARATION_KEYWORDS:
                children.append(self._parse_declaration())
            else:
                children.append(self._parse_node())

        logger.debug(
            "parsed %d top-level node(s) from %s",
            len(children),
            self._source_file or "<stream>",
        )
        return Document(
            location=Position(source_file=self._source_file),
            children=tuple(children),
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _mark(self) -> Position:
        """Position of the next, not yet consumed, character."""
        pos = self._scanner.position
        return Position(pos.row, pos.col + 1, pos.prev_col, self._source_file)

    def _syntax_error(self, expected: str, found: str) -> InvalidSyntaxError:
        return InvalidSyntaxError(self._scanner.position, expected, found)

    def _end_of_input(self) -> UnexpectedEndOfInput:
        return UnexpectedEndOfInput(self._scanner.position)

    # =========================================================================
    # Nodes
    # =========================================================================

    def _parse_node(self) -> Node:
        """Parse a text run or an element."""
        self._scanner.skip_spaces()
        char = self._scanner.peek()
        if char in TEXT_MARKERS:
            return self._parse_text(trim=TEXT_MARKERS[char])
        return self._parse_element()

    def _parse_element(self) -> Element:
        scanner = self._scanner
        scanner.skip_spaces()
        location = self._mark()

        newline = False
        if scanner.peek() == ">":
            scanner.read()
            newline = True

        name = self._parse_name("element name", stop=SHORTHAND_KEYS)
        attrs = self._parse_attrs()

        # _parse_attrs() stops in front of the '{'
        scanner.read()

        children: list[Node] = []
        while True:
            scanner.skip_spaces()
            char = scanner.peek()
            if char == EOF:
                raise self._end_of_input()
            if char == "}":
                break
            children.append(self._parse_node())

        scanner.read()
        return Element(
            location=location,
            name=name,
            attrs=attrs,
            children=tuple(children),
            newline=newline,
        )

    def _parse_text(self, trim: bool) -> TextGroup:
        """Parse a text run, including any '@' embedded elements.

        The closing '}' is pushed back for the enclosing element.
        """
        scanner = self._scanner
        location = self._mark()
        scanner.read()  # marker

        children: list[Node] = []
        parts: list[str] = []
        text_start = self._mark()

        while True:
            char = scanner.read()
            if char == EOF:
                raise self._end_of_input()
            if char == "}":
                scanner.unread()
                break
            if char == "@":
                children.append(Text(location=text_start, content="".join(parts)))
                parts = []
                children.append(self._parse_element())
                text_start = self._mark()
                continue
            if char == "\\":
                char = scanner.read()
                if char == EOF:
                    raise self._end_of_input()
                if char not in TEXT_ESCAPES:
                    raise self._syntax_error(
                        "valid escape sequence ('\\\\', '\\@', or '\\}')",
                        f"'\\{char}'",
                    )
            parts.append(char)

        children.append(Text(location=text_start, content="".join(parts)))
        return TextGroup(location=location, children=tuple(children), trim=trim)

    def _parse_declaration(self) -> Declaration:
        """Parse a document-level ``!doctype`` or ``?xml`` declaration."""
        scanner = self._scanner
        location = self._mark()
        sigil = scanner.read()
        keyword = DECLARATION_KEYWORDS[sigil]

        name = self._parse_name(f"'{sigil}{keyword}'")
        if name.lower() != keyword:
            raise self._syntax_error(f"'{sigil}{keyword}'", f"'{sigil}{name}'")

        attrs = self._parse_attrs()
        scanner.read()  # '{'

        char = scanner.read_non_space()
        if char == EOF:
            raise self._end_of_input()
        if char != "}":
            raise self._syntax_error("'}' (declarations take no content)", f"'{char}'")

        if sigil == "!":
            return DocType(location=location, attrs=attrs)
        return XmlProlog(location=location, attrs=attrs)

    # =========================================================================
    # Tokens
    # =========================================================================

    def _parse_name(self, expected: str = "name", stop: Container[str] = ()) -> str:
        """Parse and validate a name; the first non-name character is pushed back.

        Characters in ``stop`` end the name even where the name rules would
        allow them, so ``div.note`` reads as ``div`` followed by ``.note``.
        """
        scanner = self._scanner
        scanner.skip_spaces()

        char = scanner.read()
        if char == EOF:
            raise self._end_of_input()
        if not is_name_start_char(char):
            raise self._syntax_error(expected, f"invalid character '{char}'")

        parts: list[str] = []
        while is_name_char(char) and char not in stop:
            parts.append(char)
            char = scanner.read()

        scanner.unread()
        return "".join(parts)

    def _parse_attrs(self) -> tuple[Attr, ...]:
        """Parse attributes up to, not including, the opening '{'.

        ``.name`` and ``#name`` desugar to ``class`` and ``id`` in place.
        """
        scanner = self._scanner
        attrs: list[Attr] = []

        while True:
            scanner.skip_spaces()
            char = scanner.peek()
            if char == EOF:
                raise self._end_of_input()
            if char == "{":
                break

            if char in SHORTHAND_KEYS:
                scanner.read()
                value = self._parse_name(f"name after '{char}'", stop=SHORTHAND_KEYS)
                attrs.append(Attr(SHORTHAND_KEYS[char], value))
                continue

            key = self._parse_name("attribute name")
            if scanner.read_non_space() != "=":
                scanner.unread()
                attrs.append(Attr(key))
                continue

            attrs.append(Attr(key, self._parse_string()))

        return tuple(attrs)

    def _parse_string(self) -> str:
        """Parse a double-quoted attribute value."""
        scanner = self._scanner

        char = scanner.read_non_space()
        if char == EOF:
            raise self._end_of_input()
        if char != '"':
            raise self._syntax_error("double-quoted string", f"'{char}'")

        parts: list[str] = []
        while True:
            char = scanner.read()
            if char == EOF:
                raise self._syntax_error("closing '\"'", "end of input")
            if char == '"':
                return "".join(parts)
            if char == "\\":
                char = scanner.read()
                if char == EOF:
                    raise self._syntax_error("closing '\"'", "end of input")
                if char not in STRING_ESCAPES:
                    raise self._syntax_error(
                        "valid escape sequence ('\\\\' or '\\\"')",
                        f"'\\{char}'",
                    )
            parts.append(char)
