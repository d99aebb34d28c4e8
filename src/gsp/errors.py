"""Exception classes for GSP.

Provides standardized exceptions for error handling throughout GSP.
Every parse error is fatal: the parser never recovers or returns a partial
document.
"""

from __future__ import annotations

from gsp.location import Position


class GspError(Exception):
    """Base exception for all GSP errors.

    Subclass this for specific error categories.
    """

    pass


class ParseError(GspError):
    """Error while reading GSP source.

    Base class for the three ways a parse can fail.
    """

    def __init__(self, message: str, position: Position | None = None) -> None:
        """Initialize parse error with optional position.

        Args:
            message: Error description
            position: Location of the last consumed character (optional)
        """
        self.message = message
        self.position = position

        if position is not None:
            super().__init__(f"{position}: {message}")
        else:
            super().__init__(message)


class InvalidSyntaxError(ParseError):
    """The source violates the grammar or the name-character rules.

    Attributes:
        expected: What the parser was looking for
        found: What it found instead
    """

    def __init__(self, position: Position, expected: str, found: str) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"syntax error; expected {expected} but found {found}",
            position,
        )


class UnexpectedEndOfInput(ParseError):
    """Input ran out inside an open construct.

    Kept apart from InvalidSyntaxError so callers can point at the most
    likely cause.
    """

    def __init__(self, position: Position | None = None) -> None:
        super().__init__(
            "hit end-of-input while parsing; "
            "you're probably missing a closing brace ('}') somewhere",
            position,
        )


class DecodeError(ParseError):
    """The input byte stream is not valid UTF-8."""

    def __init__(self, position: Position | None = None, reason: str = "") -> None:
        message = "malformed UTF-8 in input"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, position)


class RenderError(GspError):
    """Error during rendering.

    Raised when the renderer meets a node it does not know or when the
    output sink fails.
    """

    pass
