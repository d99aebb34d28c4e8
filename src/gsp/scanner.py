"""Code point scanner over a UTF-8 byte stream.

The scanner decodes its input incrementally and exposes a cursor with
one-character lookahead (``peek``) and one-character pushback (``unread``).
It also keeps the row and column of the last consumed character so the
parser can report where an error happened.

Thread Safety:
Scanner instances are single-use. Create one per input stream.
All state is instance-local; no shared mutable state.

"""

from __future__ import annotations

import codecs
from typing import BinaryIO

from gsp.charsets import EOF, is_space
from gsp.errors import DecodeError
from gsp.location import Position


class Scanner:
    """Cursor over the code points of a byte stream.

    ``read()`` returns the empty string ``EOF`` once the input is exhausted;
    that is not an error. Malformed UTF-8 raises DecodeError when the cursor
    reaches it.

    Only one ``unread()`` is allowed between two ``read()`` calls. Stepping
    back over a line feed restores the previous row's column from
    ``prev_col``, which a second step back could not do.

    Usage:
            >>> import io
            >>> scanner = Scanner(io.BytesIO("a\\nb".encode()))
            >>> scanner.read(), scanner.read()
            ('a', '\\n')
            >>> str(scanner.position)
            '2:0'
            >>> scanner.unread()
            >>> str(scanner.position)
            '1:1'

    """

    CHUNK_SIZE = 8192

    __slots__ = (
        "_stream",
        "_decoder",
        "_buffer",
        "_index",
        "_exhausted",
        "_pending_error",
        "_row",
        "_col",
        "_prev_col",
        "_last",
        "_source_file",
    )

    def __init__(self, stream: BinaryIO, source_file: str | None = None) -> None:
        """Initialize scanner over a binary stream.

        Args:
            stream: Readable binary stream; never closed by the scanner
            source_file: Optional source file path for error messages
        """
        self._stream = stream
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
        self._buffer = ""
        self._index = 0
        self._exhausted = False
        self._pending_error: str | None = None
        self._row = 0
        self._col = 0
        self._prev_col = 0
        # Last consumed code point, EOF, or None when unread() is not allowed
        self._last: str | None = None
        self._source_file = source_file

    @property
    def position(self) -> Position:
        """Position of the last consumed character."""
        return Position(self._row, self._col, self._prev_col, self._source_file)

    # =========================================================================
    # Buffer management
    # =========================================================================

    def _fill(self) -> bool:
        """Make sure at least one unconsumed code point is buffered.

        Returns:
            False at end of input.

        Raises:
            DecodeError: If the next bytes are not valid UTF-8.
        """
        while self._index >= len(self._buffer):
            if self._pending_error is not None:
                raise DecodeError(self.position, self._pending_error)
            if self._exhausted:
                return False

            chunk = self._stream.read(self.CHUNK_SIZE)
            final = not chunk
            try:
                text = self._decoder.decode(chunk, final=final)
            except UnicodeDecodeError as exc:
                # Hand out the valid prefix first; fail when the cursor gets there
                text = exc.object[: exc.start].decode("utf-8")
                self._pending_error = exc.reason
            if final:
                self._exhausted = True

            # Keep the last consumed character around for unread()
            keep = self._buffer[self._index - 1 :] if self._index else ""
            self._buffer = keep + text
            self._index = len(keep)
        return True

    # =========================================================================
    # Cursor
    # =========================================================================

    def peek(self) -> str:
        """Return the next code point without consuming it (EOF at the end)."""
        if not self._fill():
            return EOF
        return self._buffer[self._index]

    def read(self) -> str:
        """Consume and return the next code point (EOF at the end)."""
        if not self._fill():
            self._last = EOF
            return EOF

        char = self._buffer[self._index]
        self._index += 1
        if char == "\n":
            self._prev_col = self._col
            self._col = 0
            self._row += 1
        else:
            self._col += 1
        self._last = char
        return char

    def unread(self) -> None:
        """Push the last consumed code point back.

        Unreading after ``read()`` returned EOF is a no-op.

        Raises:
            RuntimeError: If called twice without a ``read()`` in between.
        """
        last = self._last
        if last is None:
            raise RuntimeError("unread() may only be called once per read()")
        self._last = None
        if last == EOF:
            return

        self._index -= 1
        if self._col == 0:
            self._row -= 1
            self._col = self._prev_col
        else:
            self._col -= 1

    def skip_spaces(self) -> None:
        """Consume consecutive Unicode whitespace."""
        while is_space(self.peek()):
            self.read()

    def read_non_space(self) -> str:
        """Skip whitespace, then consume and return the next code point."""
        self.skip_spaces()
        return self.read()
