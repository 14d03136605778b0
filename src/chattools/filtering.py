"""Markup filter engine.

Filtering runs in three stages:

1. Legacy ``&`` codes are translated (legacy enabled) or stripped.
2. The markup is tokenized and every tag whose category is disabled, or
   whose resolved value is blocked, is dropped. Surviving tokens keep
   their raw text, so the filtered string reproduces them exactly.
3. For tree output, the filtered string is parsed and blocked
   decorations, blocked colors and dark colors are cleared from the
   tree's own styles.
"""

from __future__ import annotations

from dataclasses import replace

from .colors import TextColor, is_close, luminance
from .components import StyledNode
from .config import FilterConfig
from .legacy import strip_legacy, translate_legacy
from .logger import checks_enabled, get_logger
from .markup import (
    TagCategory,
    TagToken,
    TextToken,
    Token,
    categorize,
    escape_tag_opens,
    serialize,
    tag_color,
    tag_decoration,
    tag_key,
    tokenize,
)
from .parser import MarkupParser

COLOR_CATEGORIES = (TagCategory.HEX_COLOR, TagCategory.STANDARD_COLOR)


class MarkupFilter:
    """Apply a FilterConfig to markup strings.

    The filter holds only its (immutable) configuration, so one instance
    can serve any number of callers.
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        self.config = config if config is not None else FilterConfig.standard()

    def mm_string(self, markup: str) -> str:
        """Return the filtered markup string."""
        return serialize(self._filter_tokens(tokenize(self._apply_legacy(markup))))

    def mm_parse(self, markup: str) -> StyledNode:
        """Filter, parse and return the resolved styled tree."""
        parser = MarkupParser(
            self.config.placeholder_resolver,
            advanced_transformations=self.config.advanced_transformations_enabled,
        )
        tree = parser.parse(self.mm_string(markup))
        return apply_style_filters(tree, self.config)

    def _apply_legacy(self, markup: str) -> str:
        if self.config.legacy_colors_enabled:
            return translate_legacy(markup)
        return strip_legacy(markup)

    def _filter_tokens(self, tokens: list[Token]) -> list[Token]:
        logger = get_logger()
        kept: list[Token] = []
        # Per tag key, whether each still-open opener was kept
        open_tags: dict[str, list[bool]] = {}

        for token in tokens:
            if isinstance(token, TextToken):
                kept.append(token)
                continue

            category = categorize(token)
            if category is TagCategory.RESET:
                open_tags.clear()
                kept.append(token)
                continue

            key = tag_key(token)
            if token.closing:
                stack = open_tags.get(key)
                keep = stack.pop() if stack else self._category_enabled(category)
            else:
                keep = self._category_enabled(category) and self._value_allowed(token, category)
                open_tags.setdefault(key, []).append(keep)

            if keep:
                kept.append(token)
            else:
                logger.checks(f"Stripped tag {token.raw}")
                # The text on either side is now joined; a bare "<" before could open a tag
                if kept and isinstance(kept[-1], TextToken):
                    kept[-1] = TextToken(escape_tag_opens(kept[-1].raw))
        return kept

    def _category_enabled(self, category: TagCategory | None) -> bool:
        if category is TagCategory.GRADIENT:
            return self.config.gradients_enabled
        if category is TagCategory.HEX_COLOR:
            return self.config.hex_colors_enabled
        if category is TagCategory.STANDARD_COLOR:
            return self.config.standard_colors_enabled
        # Decorations, resets, unknown tags and (in string form) advanced tags pass
        return True

    def _value_allowed(self, tag: TagToken, category: TagCategory | None) -> bool:
        if category in COLOR_CATEGORIES:
            color = tag_color(tag)
            return color is None or not color_blocked(color, self.config)
        if category is TagCategory.DECORATION:
            resolved = tag_decoration(tag)
            if resolved is None:
                return True
            decoration, state = resolved
            return not (state and decoration in self.config.blocked_decorations)
        return True


def color_blocked(color: TextColor, config: FilterConfig) -> bool:
    """Check a color against the blocked colors and the luminance threshold."""
    if color in config.blocked_colors:
        return True
    if config.block_close_hex and any(is_close(color, b) for b in config.blocked_colors):
        return True
    return luminance(color) < config.luminance_threshold


def apply_style_filters(tree: StyledNode, config: FilterConfig) -> StyledNode:
    """Clear blocked decorations and colors from every node of a tree.

    The root additionally gets every blocked decoration set to explicit
    False, so the effective style of all text reads "off".
    """
    root_style = tree.style
    for decoration in config.blocked_decorations:
        root_style = root_style.with_decoration(decoration, False)
    return _filter_node(tree.with_style(root_style), config)


def _filter_node(node: StyledNode, config: FilterConfig) -> StyledNode:
    style = node.style
    for decoration in config.blocked_decorations:
        if style.decoration(decoration):
            style = style.with_decoration(decoration, False)
    if style.color is not None and color_blocked(style.color, config):
        if checks_enabled():
            get_logger().checks(f"Cleared color {style.color} from '{node.plain_text()}'")
        style = style.with_color(None)
    children = tuple(_filter_node(child, config) for child in node.children)
    return replace(node, style=style, children=children)


def filter_markup(markup: str, config: FilterConfig | None = None) -> str:
    """Filter a markup string (legacy codes first, then disabled categories).

    Args:
        markup: The markup to filter
        config: Filter configuration, FilterConfig.standard() when omitted

    Returns:
        The filtered markup string
    """
    return MarkupFilter(config).mm_string(markup)


def parse_filtered(markup: str, config: FilterConfig | None = None) -> StyledNode:
    """Filter a markup string and parse it into a filtered styled tree."""
    return MarkupFilter(config).mm_parse(markup)
