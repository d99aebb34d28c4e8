"""Identifier classification for element, attribute and shorthand names.

Names follow the XML ``NameStartChar`` / ``NameChar`` productions.

Usage:
    from gsp.names import is_name_start_char, is_name_char

    if is_name_start_char(first) and all(map(is_name_char, rest)):
        ...
"""

# Inclusive code point ranges allowed anywhere in a name
NAME_START_RANGES: tuple[tuple[int, int], ...] = (
    (0x0000C0, 0x0000D6),
    (0x0000D8, 0x0000F6),
    (0x0000F8, 0x0002FF),
    (0x000370, 0x00037D),
    (0x00037F, 0x001FFF),
    (0x00200C, 0x00200D),
    (0x002070, 0x00218F),
    (0x002C00, 0x002FEF),
    (0x003001, 0x00D7FF),
    (0x00F900, 0x00FDCF),
    (0x00FDF0, 0x00FFFD),
    (0x010000, 0x0EFFFF),
)

# Additional ranges allowed after the first character
NAME_RANGES: tuple[tuple[int, int], ...] = (
    (0x0300, 0x036F),
    (0x203F, 0x2040),
)

NAME_START_SINGLES: frozenset[str] = frozenset(
    ":_ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
)
NAME_SINGLES: frozenset[str] = NAME_START_SINGLES | frozenset("-.0123456789·")


def _in_ranges(cp: int, ranges: tuple[tuple[int, int], ...]) -> bool:
    return any(lo <= cp <= hi for lo, hi in ranges)


def is_name_start_char(char: str) -> bool:
    """Return whether ``char`` may begin a name."""
    if len(char) != 1:
        return False
    if char in NAME_START_SINGLES:
        return True
    return _in_ranges(ord(char), NAME_START_RANGES)


def is_name_char(char: str) -> bool:
    """Return whether ``char`` may appear after the first character of a name."""
    if len(char) != 1:
        return False
    if char in NAME_SINGLES or is_name_start_char(char):
        return True
    return _in_ranges(ord(char), NAME_RANGES)


def is_valid_name(name: str) -> bool:
    """Return whether the whole string is a legal name.

    Examples:
        >>> is_valid_name("ta-g2")
        True
        >>> is_valid_name("123tag")
        False
    """
    if not name or not is_name_start_char(name[0]):
        return False
    return all(is_name_char(c) for c in name[1:])
