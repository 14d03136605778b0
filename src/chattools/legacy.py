"""Translation of legacy ``&`` color codes into modern tags.

Supported forms (codes are case-insensitive)::

    &c              -> <red>
    &l              -> <bold>
    &#336633        -> <#336633>
    &#363           -> <#336633>
    &x&3&3&6&6&3&3  -> <#336633>
    \\&c            -> &c  (escaped, emitted literally)

Anything else starting with ``&`` is left untouched.
"""

from __future__ import annotations

import re

from .colors import HEX_COLOR_FULL_LENGTH, HEX_COLOR_SHORT_LENGTH, expand_short_hex, is_hex_digits
from .logger import get_logger

LEGACY_CHAR = "&"
ESCAPE = "\\"
HEX_MARKER = "#"
BUKKIT_HEX_MARKER = "x"

LEGACY_CODES: dict[str, str] = {
    "0": "black",
    "1": "dark_blue",
    "2": "dark_green",
    "3": "dark_aqua",
    "4": "dark_red",
    "5": "dark_purple",
    "6": "gold",
    "7": "gray",
    "8": "dark_gray",
    "9": "blue",
    "a": "green",
    "b": "aqua",
    "c": "red",
    "d": "light_purple",
    "e": "yellow",
    "f": "white",
    "k": "obfuscated",
    "l": "bold",
    "m": "strikethrough",
    "n": "underlined",
    "o": "italic",
    "r": "reset",
}

# Unescaped single-character codes, including the bare Bukkit hex marker
_LEGACY_CODE_PATTERN = re.compile(r"(?<!\\)&[0-9a-fk-orx]", re.IGNORECASE)


def translate_legacy(text: str) -> str:
    """Translate every legacy code in ``text`` into its modern tag.

    Scans left to right once. A backslash directly before ``&`` suppresses
    translation of that occurrence; the backslash is dropped and the ``&``
    kept. Malformed or truncated codes pass through verbatim.
    """
    out: list[str] = []
    translated = 0
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch == ESCAPE and i + 1 < n and text[i + 1] == LEGACY_CHAR:
            out.append(LEGACY_CHAR)
            i += 2
            continue
        if ch != LEGACY_CHAR:
            out.append(ch)
            i += 1
            continue

        hex_tag, consumed = _match_hex(text, i)
        if hex_tag is not None:
            out.append(hex_tag)
            translated += 1
            i += consumed
            continue

        code = text[i + 1].lower() if i + 1 < n else ""
        if code in LEGACY_CODES:
            out.append(f"<{LEGACY_CODES[code]}>")
            translated += 1
            i += 2
            continue

        out.append(ch)
        i += 1

    if translated:
        get_logger().changes(f"Translated {translated} legacy code(s)")
    return "".join(out)


def strip_legacy(text: str) -> str:
    """Remove unescaped single-character legacy codes, leaving other text alone.

    Used when the legacy dialect is disabled. Hex forms such as ``&#336633``
    are not codes on their own and stay as plain text. Stripping repeats
    until no code is left, so ``&&cc`` does not leave ``&c`` behind.
    """
    total = 0
    stripped, count = _LEGACY_CODE_PATTERN.subn("", text)
    while count:
        total += count
        stripped, count = _LEGACY_CODE_PATTERN.subn("", stripped)
    if total:
        get_logger().changes(f"Stripped {total} legacy code(s)")
    return stripped


def _match_hex(text: str, start: int) -> tuple[str | None, int]:
    """Match a hex code at ``start`` (which holds '&').

    Returns the modern tag and the number of characters consumed, or
    (None, 0) when no hex form matches.
    """
    marker = text[start + 1 : start + 2]

    if marker == HEX_MARKER:
        digits_start = start + 2
        full = text[digits_start : digits_start + HEX_COLOR_FULL_LENGTH]
        if len(full) == HEX_COLOR_FULL_LENGTH and is_hex_digits(full):
            return f"<#{full}>", 2 + HEX_COLOR_FULL_LENGTH
        short_end = digits_start + HEX_COLOR_SHORT_LENGTH
        short = text[digits_start:short_end]
        # exactly three digits; four or five are not a code
        following = text[short_end : short_end + 1]
        if (
            len(short) == HEX_COLOR_SHORT_LENGTH
            and is_hex_digits(short)
            and not is_hex_digits(following)
        ):
            return f"<#{expand_short_hex(short)}>", 2 + HEX_COLOR_SHORT_LENGTH
        return None, 0

    if marker.lower() == BUKKIT_HEX_MARKER:
        # &x followed by six &-prefixed hex digits
        digits: list[str] = []
        position = start + 2
        for _ in range(HEX_COLOR_FULL_LENGTH):
            pair = text[position : position + 2]
            if len(pair) != 2 or pair[0] != LEGACY_CHAR or not is_hex_digits(pair[1]):
                return None, 0
            digits.append(pair[1])
            position += 2
        return f"<#{''.join(digits)}>", position - start

    return None, 0
