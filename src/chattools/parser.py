"""Parser building a StyledNode tree from markup tokens."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field

from .colors import BLACK, WHITE, TextColor, gradient_colors, rainbow_colors, resolve_color
from .components import EMPTY_STYLE, ClickEvent, HoverEvent, Style, StyledNode
from .markup import (
    ARG_SEPARATOR,
    COLOR_TAGS,
    TagCategory,
    TagToken,
    TextToken,
    Token,
    categorize,
    tag_color,
    tag_decoration,
    tag_key,
    tokenize,
)

PlaceholderResolver = Callable[[str], str | None]
NodeEffect = Callable[[StyledNode], StyledNode]

DEFAULT_GRADIENT = (WHITE, BLACK)


def placeholders(values: Mapping[str, str] | None = None, **kwargs: str) -> PlaceholderResolver:
    """Build a resolver replacing ``<name>`` tags with the given markup.

    Example:
        resolver = placeholders(player="<gold>Majekdor")
    """
    table = {**(values or {}), **kwargs}
    table = {name.lower(): markup for name, markup in table.items()}

    def resolve(name: str) -> str | None:
        return table.get(name)

    return resolve


@dataclass
class _Frame:
    """An open tag whose content is still being collected."""

    key: str | None
    style: Style
    children: list[StyledNode] = field(default_factory=list[StyledNode])
    effect: NodeEffect | None = None


class _TreeBuilder:
    """Stack of open tags; closing a tag folds its frame into the parent."""

    def __init__(self) -> None:
        self._frames: list[_Frame] = [_Frame(key=None, style=EMPTY_STYLE)]

    def add_text(self, text: str) -> None:
        if text:
            self._frames[-1].children.append(StyledNode.text(text))

    def open(self, key: str, style: Style, effect: NodeEffect | None = None) -> None:
        self._frames.append(_Frame(key=key, style=style, effect=effect))

    def close(self, key: str) -> bool:
        """Close the innermost open tag with this key (and any tags inside it)."""
        for index in range(len(self._frames) - 1, 0, -1):
            if self._frames[index].key == key:
                while len(self._frames) > index:
                    self._pop()
                return True
        return False

    def reset(self) -> None:
        while len(self._frames) > 1:
            self._pop()

    def finish(self) -> StyledNode:
        self.reset()
        return StyledNode(children=tuple(self._frames[0].children))

    def _pop(self) -> None:
        frame = self._frames.pop()
        node = StyledNode(style=frame.style, children=tuple(frame.children))
        if frame.effect is not None:
            node = frame.effect(node)
        self._frames[-1].children.append(node)


class MarkupParser:
    """Parse markup into an immutable StyledNode tree.

    Tags stay open until their closing tag, a ``<reset>``, or the end of
    the input. Unknown tags and malformed tags are kept as literal text.
    Unmatched closing tags of known tags are dropped.

    Args:
        placeholder_resolver: Maps a tag name to replacement markup, or None
            to leave the tag alone
        advanced_transformations: When False, click/hover/insert/font/key/lang
            tags are kept as literal text instead of being interpreted
    """

    def __init__(
        self,
        placeholder_resolver: PlaceholderResolver | None = None,
        *,
        advanced_transformations: bool = True,
    ) -> None:
        self._resolver = placeholder_resolver
        self._advanced = advanced_transformations

    def parse(self, markup: str) -> StyledNode:
        return self.parse_tokens(tokenize(markup))

    def parse_tokens(self, tokens: Iterable[Token]) -> StyledNode:
        builder = _TreeBuilder()
        for token in self._resolve_placeholders(tokens):
            if isinstance(token, TextToken):
                builder.add_text(token.value)
            else:
                self._apply_tag(builder, token)
        return builder.finish()

    def _resolve_placeholders(self, tokens: Iterable[Token]) -> list[Token]:
        resolved: list[Token] = []
        for token in tokens:
            if (
                self._resolver is not None
                and isinstance(token, TagToken)
                and not token.closing
                and categorize(token) is None
            ):
                replacement = self._resolver(token.name)
                if replacement is not None:
                    resolved.extend(tokenize(replacement))
                    continue
            resolved.append(token)
        return resolved

    def _apply_tag(self, builder: _TreeBuilder, tag: TagToken) -> None:  # noqa: PLR0911
        category = categorize(tag)

        if category is TagCategory.ADVANCED and not self._advanced:
            builder.add_text(tag.raw)
            return

        if tag.closing:
            closed = builder.close(tag_key(tag))
            if not closed and category is None and tag.name not in COLOR_TAGS:
                builder.add_text(tag.raw)
            return

        if category is TagCategory.RESET:
            builder.reset()
            return

        if category is TagCategory.DECORATION:
            decoration, state = tag_decoration(tag)  # type: ignore[misc]
            builder.open(tag_key(tag), EMPTY_STYLE.with_decoration(decoration, state))
            return

        if category in (TagCategory.HEX_COLOR, TagCategory.STANDARD_COLOR):
            builder.open(tag_key(tag), Style(color=tag_color(tag)))
            return

        if category is TagCategory.GRADIENT:
            builder.open(tag_key(tag), EMPTY_STYLE, effect=_gradient_effect(tag))
            return

        if category is TagCategory.ADVANCED:
            style = self._advanced_style(tag)
            if style is not None:
                builder.open(tag_key(tag), style)
                return

        builder.add_text(tag.raw)

    def _advanced_style(self, tag: TagToken) -> Style | None:
        """Style for click/hover/insert/font tags; None when unsupported or malformed."""
        name = tag_key(tag)
        if name == "click" and len(tag.args) >= 2:
            value = ARG_SEPARATOR.join(tag.args[1:])
            return Style(click_event=ClickEvent(tag.args[0].lower(), value))
        if name == "hover" and len(tag.args) >= 2:
            action = tag.args[0].lower()
            value = ARG_SEPARATOR.join(tag.args[1:])
            hover = self.parse(value) if action == "show_text" else StyledNode.text(value)
            return Style(hover_event=HoverEvent(action, hover))
        if name == "insert" and tag.args:
            return Style(insertion=ARG_SEPARATOR.join(tag.args))
        if name == "font" and tag.args:
            return Style(font=ARG_SEPARATOR.join(tag.args))
        return None


def _gradient_effect(tag: TagToken) -> NodeEffect:
    if tag.name == "rainbow":
        reverse = bool(tag.args) and tag.args[0].startswith("!")

        def palette(count: int) -> list[TextColor]:
            return rainbow_colors(count, reverse)

    else:
        stops = [color for color in map(resolve_color, tag.args) if color is not None]
        if not stops:
            stops = list(DEFAULT_GRADIENT)

        def palette(count: int) -> list[TextColor]:
            return gradient_colors(stops, count)

    def effect(node: StyledNode) -> StyledNode:
        colors = iter(palette(len(node.plain_text())))
        return _recolor(node, colors)

    return effect


def _recolor(node: StyledNode, colors: Iterable[TextColor]) -> StyledNode:
    """Split content into one node per character, each with the next palette color."""
    color_iter = iter(colors)
    char_nodes = tuple(
        StyledNode.text(ch, Style(color=next(color_iter, None))) for ch in node.content
    )
    children = tuple(_recolor(child, color_iter) for child in node.children)
    return StyledNode(style=node.style, children=char_nodes + children)
