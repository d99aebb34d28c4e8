"""Character classes shared by the scanner and the renderer.

Whitespace follows the Unicode White_Space property. Python's str.isspace()
also accepts the ASCII information separators (U+001C..U+001F), which are
not whitespace for GSP, so they are excluded here.

Usage:
    from gsp.charsets import is_space

    if is_space(char):
        ...
"""

# Characters str.isspace() accepts that are not Unicode White_Space
_NOT_WHITESPACE: frozenset[str] = frozenset("\x1c\x1d\x1e\x1f")

# Fast path for the common case
ASCII_WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")

# End-of-input sentinel returned by the scanner
EOF = ""


def is_space(char: str) -> bool:
    """Check if a single code point is Unicode whitespace.

    The end-of-input sentinel is not whitespace.
    """
    if char in ASCII_WHITESPACE:
        return True
    if not char:
        return False
    return char.isspace() and char not in _NOT_WHITESPACE


def trim_left_spaces(s: str) -> str:
    """Return ``s`` without its leading Unicode whitespace."""
    i = 0
    while i < len(s) and is_space(s[i]):
        i += 1
    return s[i:]


def trim_right_spaces(s: str) -> str:
    """Return ``s`` without its trailing Unicode whitespace."""
    i = len(s)
    while i > 0 and is_space(s[i - 1]):
        i -= 1
    return s[:i]
