"""Immutable styled text tree used by the parser, filter and segmenter."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any

from .colors import TextColor


class TextDecoration(str, Enum):
    """Text decorations a style can switch on or off."""

    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINED = "underlined"
    STRIKETHROUGH = "strikethrough"
    OBFUSCATED = "obfuscated"

    @classmethod
    def from_name(cls, name: str) -> TextDecoration | None:
        """Resolve a decoration tag name or alias (e.g. 'b', 'em', 'st')."""
        key = name.lower()
        return DECORATION_ALIASES.get(key) or next((d for d in cls if d.value == key), None)


DECORATION_ALIASES: dict[str, TextDecoration] = {
    "b": TextDecoration.BOLD,
    "i": TextDecoration.ITALIC,
    "em": TextDecoration.ITALIC,
    "u": TextDecoration.UNDERLINED,
    "st": TextDecoration.STRIKETHROUGH,
    "obf": TextDecoration.OBFUSCATED,
}


@dataclass(frozen=True)
class ClickEvent:
    """Click action attached by a <click:action:value> tag."""

    action: str
    value: str


@dataclass(frozen=True)
class HoverEvent:
    """Hover action attached by a <hover:action:value> tag."""

    action: str
    value: StyledNode


@dataclass(frozen=True)
class Style:
    """A set of optional style attributes.

    Every attribute is None when unset. Decorations are tri-state:
    None (inherit), True (explicitly on) or False (explicitly off).
    """

    color: TextColor | None = None
    bold: bool | None = None
    italic: bool | None = None
    underlined: bool | None = None
    strikethrough: bool | None = None
    obfuscated: bool | None = None
    font: str | None = None
    insertion: str | None = None
    click_event: ClickEvent | None = None
    hover_event: HoverEvent | None = None

    def decoration(self, decoration: TextDecoration) -> bool | None:
        state: bool | None = getattr(self, decoration.value)
        return state

    def with_decoration(self, decoration: TextDecoration, state: bool | None) -> Style:
        return replace(self, **{decoration.value: state})

    def with_color(self, color: TextColor | None) -> Style:
        return replace(self, color=color)

    def merge(self, parent: Style) -> Style:
        """Overlay this style on a parent's effective style.

        Attributes set here win; unset attributes are inherited from the parent.
        """
        values: dict[str, Any] = {}
        for f in fields(self):
            own = getattr(self, f.name)
            values[f.name] = getattr(parent, f.name) if own is None else own
        return Style(**values)

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def describe(self) -> str:
        """Short human-readable summary, e.g. 'color=red bold !italic'."""
        parts: list[str] = []
        if self.color is not None:
            parts.append(f"color={self.color}")
        for decoration in TextDecoration:
            state = self.decoration(decoration)
            if state is not None:
                parts.append(decoration.value if state else f"!{decoration.value}")
        if self.font is not None:
            parts.append(f"font={self.font}")
        if self.insertion is not None:
            parts.append(f"insertion={self.insertion}")
        if self.click_event is not None:
            parts.append(f"click={self.click_event.action}:{self.click_event.value}")
        if self.hover_event is not None:
            parts.append(f"hover={self.hover_event.action}")
        return " ".join(parts)


EMPTY_STYLE = Style()


@dataclass(frozen=True)
class StyledNode:
    """A node of literal text with a style and ordered children.

    Nodes are never mutated; every transformation builds new nodes.
    """

    content: str = ""
    style: Style = EMPTY_STYLE
    children: tuple[StyledNode, ...] = ()

    @classmethod
    def text(cls, content: str, style: Style | None = None) -> StyledNode:
        return cls(content=content, style=style or EMPTY_STYLE)

    def append(self, *children: StyledNode) -> StyledNode:
        """Return a copy of this node with children added at the end."""
        return replace(self, children=self.children + children)

    def with_style(self, style: Style) -> StyledNode:
        return replace(self, style=style)

    def plain_text(self) -> str:
        """Concatenate the content of this node and its descendants."""
        return self.content + "".join(child.plain_text() for child in self.children)

    def iter_runs(self, parent_style: Style = EMPTY_STYLE) -> Iterator[tuple[str, Style]]:
        """Yield (text, effective style) for every non-empty content, in pre-order."""
        effective = self.style.merge(parent_style)
        if self.content:
            yield self.content, effective
        for child in self.children:
            yield from child.iter_runs(effective)

    def flatten(self) -> list[tuple[str, Style]]:
        """Resolve the tree into runs, merging neighbours with equal effective style."""
        runs: list[tuple[str, Style]] = []
        for text, style in self.iter_runs():
            if runs and runs[-1][1] == style:
                runs[-1] = (runs[-1][0] + text, style)
            else:
                runs.append((text, style))
        return runs
