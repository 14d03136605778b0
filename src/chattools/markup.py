"""Tokenizer and tag classification for the angle-bracket markup dialect.

The markup is a string of literal text interleaved with tags::

    <gradient:#1eae98:#d8b5ff>Majek</gradient><aqua>dor<#336633>!

A tag is ``<name>``, ``<name:arg:arg>``, ``</name>`` (closing) or
``<!name>`` (negated). Arguments may be quoted with ``'`` or ``"``.
A backslash escapes a following ``<`` (or another backslash) in text.

Tokens keep their raw source text so a filtered token stream serializes
back to the exact source syntax for every token that survives.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from .colors import TextColor, css_color, named_color, parse_hex, resolve_color
from .components import TextDecoration

TAG_OPEN = "<"
TAG_CLOSE = ">"
ESCAPE = "\\"
ARG_SEPARATOR = ":"
QUOTES = frozenset("'\"")

_TAG_NAME = re.compile(r"[a-zA-Z0-9_#\-]+")

GRADIENT_TAGS = frozenset({"gradient", "rainbow"})
COLOR_TAGS = frozenset({"color", "colour", "c"})
CSS_TAG = "css"
RESET_TAGS = frozenset({"reset", "r"})
ADVANCED_TAGS = frozenset(
    {"click", "hover", "insert", "insertion", "font", "key", "lang", "tr", "translate"}
)


class TagCategory(str, Enum):
    """Categories a configuration can switch on or off."""

    GRADIENT = "gradient"
    HEX_COLOR = "hex_color"
    STANDARD_COLOR = "standard_color"
    DECORATION = "decoration"
    ADVANCED = "advanced"
    RESET = "reset"


@dataclass(frozen=True)
class TextToken:
    """Literal text, kept exactly as written (escapes included)."""

    raw: str

    @property
    def value(self) -> str:
        return unescape(self.raw)


@dataclass(frozen=True)
class TagToken:
    """A single tag such as ``<color:#ff0000>`` or ``</bold>``."""

    raw: str
    name: str
    args: tuple[str, ...] = ()
    closing: bool = False
    negated: bool = False


Token = TextToken | TagToken


def tokenize(markup: str) -> list[Token]:
    """Split markup into text and tag tokens.

    Anything that looks like a tag but is malformed (no closing ``>``, an
    empty or invalid name) stays part of the surrounding text.
    """
    tokens: list[Token] = []
    text_start = 0
    i = 0
    n = len(markup)

    while i < n:
        ch = markup[i]
        if ch == ESCAPE and i + 1 < n and markup[i + 1] in (TAG_OPEN, ESCAPE):
            i += 2
            continue
        if ch == TAG_OPEN:
            end = _find_tag_end(markup, i)
            tag = _parse_tag(markup[i : end + 1]) if end != -1 else None
            if tag is not None:
                if text_start < i:
                    tokens.append(TextToken(markup[text_start:i]))
                tokens.append(tag)
                i = end + 1
                text_start = i
                continue
        i += 1

    if text_start < n:
        tokens.append(TextToken(markup[text_start:]))
    return tokens


def serialize(tokens: Iterable[Token]) -> str:
    """Join tokens back into markup using their raw text."""
    return "".join(token.raw for token in tokens)


def unescape(text: str) -> str:
    r"""Resolve ``\<`` and ``\\`` escapes in literal text."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == ESCAPE and i + 1 < n and text[i + 1] in (TAG_OPEN, ESCAPE):
            out.append(text[i + 1])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def escape_tag_opens(text: str) -> str:
    r"""Escape every bare ``<`` in literal text so it can never start a tag."""
    out: list[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == ESCAPE and i + 1 < n and text[i + 1] in (TAG_OPEN, ESCAPE):
            out.append(text[i : i + 2])
            i += 2
            continue
        if ch == TAG_OPEN:
            out.append(ESCAPE)
        out.append(ch)
        i += 1
    return "".join(out)


def categorize(tag: TagToken) -> TagCategory | None:
    """Return the category of a tag, or None for unknown tags and placeholders."""
    name = tag.name
    if name in GRADIENT_TAGS:
        return TagCategory.GRADIENT
    if name in ADVANCED_TAGS:
        return TagCategory.ADVANCED
    if name in RESET_TAGS:
        return TagCategory.RESET
    if TextDecoration.from_name(name) is not None:
        return TagCategory.DECORATION
    if name.startswith("#"):
        return TagCategory.HEX_COLOR if parse_hex(name) else None
    if name in COLOR_TAGS:
        if not tag.args:
            return None
        if tag.args[0].startswith("#"):
            return TagCategory.HEX_COLOR if parse_hex(tag.args[0]) else None
        return TagCategory.STANDARD_COLOR if resolve_color(tag.args[0]) else None
    if name == CSS_TAG:
        return TagCategory.STANDARD_COLOR if tag.args and css_color(tag.args[0]) else None
    if named_color(name) or css_color(name):
        return TagCategory.STANDARD_COLOR
    return None


def tag_color(tag: TagToken) -> TextColor | None:
    """Resolve the color a color tag applies."""
    name = tag.name
    if name.startswith("#"):
        return parse_hex(name)
    if name in COLOR_TAGS:
        return resolve_color(tag.args[0]) if tag.args else None
    if name == CSS_TAG:
        return css_color(tag.args[0]) if tag.args else None
    return named_color(name) or css_color(name)


def tag_decoration(tag: TagToken) -> tuple[TextDecoration, bool] | None:
    """Resolve a decoration tag to (decoration, state).

    ``<bold>`` switches on; ``<!bold>`` and ``<bold:false>`` switch off.
    """
    decoration = TextDecoration.from_name(tag.name)
    if decoration is None:
        return None
    state = not tag.negated
    if tag.args and tag.args[0].lower() == "false":
        state = False
    return decoration, state


def tag_key(tag: TagToken) -> str:
    """Key used to pair a closing tag with its opener.

    Aliases collapse (``</b>`` closes ``<bold>``, ``</c>`` closes ``<color:...>``).
    """
    name = tag.name
    decoration = TextDecoration.from_name(name)
    if decoration is not None:
        return decoration.value
    if name in COLOR_TAGS:
        return "color"
    if name in RESET_TAGS:
        return "reset"
    if name == "insertion":
        return "insert"
    if name in ("tr", "translate"):
        return "lang"
    return name


def _find_tag_end(markup: str, start: int) -> int:
    """Find the ``>`` closing the tag opened at ``start``, or -1."""
    quote: str | None = None
    j = start + 1
    n = len(markup)
    while j < n:
        c = markup[j]
        if quote is not None:
            if c == ESCAPE and j + 1 < n:
                j += 2
                continue
            if c == quote:
                quote = None
        elif c in QUOTES and markup[j - 1] == ARG_SEPARATOR:
            quote = c
        elif c == TAG_CLOSE:
            return j
        elif c == TAG_OPEN:
            return -1
        j += 1
    return -1


def _parse_tag(raw: str) -> TagToken | None:
    body = raw[1:-1]
    closing = body.startswith("/")
    if closing:
        body = body[1:]
    negated = body.startswith("!")
    if negated:
        body = body[1:]

    parts = _split_args(body)
    if not _TAG_NAME.fullmatch(parts[0]):
        return None
    return TagToken(
        raw=raw,
        name=parts[0].lower(),
        args=tuple(parts[1:]),
        closing=closing,
        negated=negated,
    )


def _split_args(body: str) -> list[str]:
    """Split a tag body on ':' outside quotes, unquoting quoted arguments."""
    parts: list[str] = []
    current: list[str] = []
    quote: str | None = None
    i = 0
    n = len(body)
    while i < n:
        c = body[i]
        if quote is not None:
            if c == ESCAPE and i + 1 < n and body[i + 1] == quote:
                current.append(quote)
                i += 2
                continue
            if c == quote:
                quote = None
            else:
                current.append(c)
        elif c == ARG_SEPARATOR:
            parts.append("".join(current))
            current = []
        elif c in QUOTES and not current:
            quote = c
        else:
            current.append(c)
        i += 1
    parts.append("".join(current))
    return parts
