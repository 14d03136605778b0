"""Filtering, legacy translation and segmentation for styled chat markup."""

from chattools.colors import TextColor
from chattools.components import ClickEvent, HoverEvent, Style, StyledNode, TextDecoration
from chattools.config import FilterConfig, FilterConfigBuilder, load_filter_config
from chattools.exceptions import ChatToolsError, InvalidConfigError, ParseError
from chattools.filtering import MarkupFilter, apply_style_filters, filter_markup, parse_filtered
from chattools.legacy import strip_legacy, translate_legacy
from chattools.parser import MarkupParser, placeholders
from chattools.segmenter import TextSegmenter, segment

__all__ = [
    "ChatToolsError",
    "ClickEvent",
    "FilterConfig",
    "FilterConfigBuilder",
    "HoverEvent",
    "InvalidConfigError",
    "MarkupFilter",
    "MarkupParser",
    "ParseError",
    "Style",
    "StyledNode",
    "TextColor",
    "TextDecoration",
    "TextSegmenter",
    "apply_style_filters",
    "filter_markup",
    "load_filter_config",
    "parse_filtered",
    "placeholders",
    "segment",
    "strip_legacy",
    "translate_legacy",
]
