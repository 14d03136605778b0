"""Color values, named color tables and color math."""

from __future__ import annotations

import colorsys
import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from PIL import ImageColor

# Constants for color calculations
HEX_COLOR_SHORT_LENGTH = 3  # Length of shorthand hex colors (#RGB)
HEX_COLOR_FULL_LENGTH = 6  # Length of full hex colors (#RRGGBB)
LUMINANCE_RED = 0.2126
LUMINANCE_GREEN = 0.7152
LUMINANCE_BLUE = 0.0722
CLOSE_CHANNEL_DISTANCE = 32  # Max per-channel difference for "close" colors

HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class TextColor:
    """An RGB text color.

    Equality and hashing only consider the RGB value, so a named color and
    the hex color with the same value are interchangeable.
    """

    value: int
    name: str | None = field(default=None, compare=False)

    @classmethod
    def from_rgb(cls, red: int, green: int, blue: int) -> TextColor:
        """Build a color from 8-bit channel values."""
        return cls((red & 0xFF) << 16 | (green & 0xFF) << 8 | (blue & 0xFF))

    @property
    def red(self) -> int:
        return (self.value >> 16) & 0xFF

    @property
    def green(self) -> int:
        return (self.value >> 8) & 0xFF

    @property
    def blue(self) -> int:
        return self.value & 0xFF

    @property
    def rgb(self) -> RGB:
        return (self.red, self.green, self.blue)

    def as_hex_string(self) -> str:
        """Return the color as '#rrggbb'."""
        return f"#{self.value:06x}"

    def __str__(self) -> str:
        return self.name or self.as_hex_string()


# The 16 standard named colors
BLACK = TextColor(0x000000, "black")
DARK_BLUE = TextColor(0x0000AA, "dark_blue")
DARK_GREEN = TextColor(0x00AA00, "dark_green")
DARK_AQUA = TextColor(0x00AAAA, "dark_aqua")
DARK_RED = TextColor(0xAA0000, "dark_red")
DARK_PURPLE = TextColor(0xAA00AA, "dark_purple")
GOLD = TextColor(0xFFAA00, "gold")
GRAY = TextColor(0xAAAAAA, "gray")
DARK_GRAY = TextColor(0x555555, "dark_gray")
BLUE = TextColor(0x5555FF, "blue")
GREEN = TextColor(0x55FF55, "green")
AQUA = TextColor(0x55FFFF, "aqua")
RED = TextColor(0xFF5555, "red")
LIGHT_PURPLE = TextColor(0xFF55FF, "light_purple")
YELLOW = TextColor(0xFFFF55, "yellow")
WHITE = TextColor(0xFFFFFF, "white")

NAMED_COLORS: dict[str, TextColor] = {
    str(color): color
    for color in (
        BLACK,
        DARK_BLUE,
        DARK_GREEN,
        DARK_AQUA,
        DARK_RED,
        DARK_PURPLE,
        GOLD,
        GRAY,
        DARK_GRAY,
        BLUE,
        GREEN,
        AQUA,
        RED,
        LIGHT_PURPLE,
        YELLOW,
        WHITE,
    )
}
NAMED_COLOR_ALIASES = {"grey": "gray", "dark_grey": "dark_gray"}


def luminance(color: TextColor | RGB) -> int:
    """Compute perceptual luminance on a 0-255 scale.

    Args:
        color: A TextColor or an (r, g, b) triple of 8-bit channels

    Returns:
        round(0.2126*R + 0.7152*G + 0.0722*B)
    """
    red, green, blue = color.rgb if isinstance(color, TextColor) else color
    return round(LUMINANCE_RED * red + LUMINANCE_GREEN * green + LUMINANCE_BLUE * blue)


def is_close(a: TextColor | RGB, b: TextColor | RGB) -> bool:
    """Check whether two colors are within CLOSE_CHANNEL_DISTANCE on every channel."""
    rgb_a = a.rgb if isinstance(a, TextColor) else a
    rgb_b = b.rgb if isinstance(b, TextColor) else b
    return all(abs(x - y) <= CLOSE_CHANNEL_DISTANCE for x, y in zip(rgb_a, rgb_b, strict=True))


def expand_short_hex(digits: str) -> str:
    """Expand shorthand hex (RGB -> RRGGBB)."""
    return "".join(c * 2 for c in digits)


def is_hex_digits(text: str) -> bool:
    return bool(text) and all(c in HEX_DIGITS for c in text)


def parse_hex(text: str) -> TextColor | None:
    """Parse '#rrggbb' or '#rgb' (leading '#' optional) into a TextColor.

    Returns None for anything else.
    """
    match = _HEX_PATTERN.match(text)
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == HEX_COLOR_SHORT_LENGTH:
        digits = expand_short_hex(digits)
    return TextColor(int(digits, 16))


def named_color(name: str) -> TextColor | None:
    """Look up one of the 16 standard named colors (aliases included)."""
    key = name.lower()
    return NAMED_COLORS.get(NAMED_COLOR_ALIASES.get(key, key))


def css_color(name: str) -> TextColor | None:
    """Look up a CSS named color (e.g. 'aliceblue')."""
    key = name.lower()
    if key not in ImageColor.colormap:
        return None
    red, green, blue = ImageColor.getrgb(key)[:3]
    return TextColor(red << 16 | green << 8 | blue, key)


def resolve_color(text: str) -> TextColor | None:
    """Resolve a color argument: hex, standard name, then CSS name."""
    if text.startswith("#"):
        return parse_hex(text)
    return named_color(text) or css_color(text)


def interpolate(a: TextColor, b: TextColor, t: float) -> TextColor:
    """Linearly interpolate between two colors (t in [0, 1])."""
    t = min(max(t, 0.0), 1.0)
    channels = [round(x + (y - x) * t) for x, y in zip(a.rgb, b.rgb, strict=True)]
    return TextColor.from_rgb(*channels)


def gradient_colors(stops: Sequence[TextColor], count: int) -> list[TextColor]:
    """Spread `count` colors evenly across a multi-stop gradient."""
    if count <= 0:
        return []
    if len(stops) == 1:
        return [stops[0]] * count

    segments = len(stops) - 1
    colors: list[TextColor] = []
    for index in range(count):
        progress = 0.0 if count == 1 else index / (count - 1)
        position = progress * segments
        segment = min(int(position), segments - 1)
        colors.append(interpolate(stops[segment], stops[segment + 1], position - segment))
    return colors


def rainbow_colors(count: int, reverse: bool = False) -> list[TextColor]:
    """Spread `count` fully saturated hues around the color wheel."""
    colors: list[TextColor] = []
    for index in range(count):
        hue = index / count
        if reverse:
            hue = 1.0 - hue
        red, green, blue = colorsys.hsv_to_rgb(hue % 1.0, 1.0, 1.0)
        colors.append(TextColor.from_rgb(round(red * 255), round(green * 255), round(blue * 255)))
    return colors
