"""Filter configuration: immutable model, builder, presets and YAML loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .colors import TextColor
from .components import TextDecoration
from .exceptions import InvalidConfigError, ParseError
from .parser import PlaceholderResolver
from .schemas import FilterConfigSchema

MIN_LUMINANCE_THRESHOLD = 0
MAX_LUMINANCE_THRESHOLD = 255


class FilterConfig(BaseModel):
    """Which markup a filter lets through.

    Instances are frozen; create them with FilterConfig.builder() or one of
    the presets and share them freely.
    """

    model_config = ConfigDict(frozen=True)

    gradients_enabled: bool = True
    hex_colors_enabled: bool = True
    standard_colors_enabled: bool = True
    legacy_colors_enabled: bool = False
    advanced_transformations_enabled: bool = False
    blocked_decorations: frozenset[TextDecoration] = frozenset()
    blocked_colors: frozenset[TextColor] = frozenset()
    block_close_hex: bool = False  # Also block colors close to a blocked color
    luminance_threshold: int = Field(
        default=MIN_LUMINANCE_THRESHOLD, ge=MIN_LUMINANCE_THRESHOLD, le=MAX_LUMINANCE_THRESHOLD
    )  # Colors with luminance below this are cleared; 0 disables
    placeholder_resolver: PlaceholderResolver | None = None

    @classmethod
    def builder(cls) -> FilterConfigBuilder:
        """Create a builder with the default options.

        Defaults: gradients, hex and standard colors on; legacy colors and
        advanced transformations off; nothing blocked; luminance threshold 0.
        """
        return FilterConfigBuilder()

    @classmethod
    def standard(cls) -> FilterConfig:
        """Every modern category on, legacy codes off, nothing blocked."""
        return STANDARD

    @classmethod
    def legacy(cls) -> FilterConfig:
        """Modern categories except advanced transformations, plus legacy codes."""
        return LEGACY

    def to_builder(self) -> FilterConfigBuilder:
        """Create a builder pre-filled with this configuration."""
        return FilterConfigBuilder(self)


class FilterConfigBuilder:
    """Chaining builder for FilterConfig.

    Every setter returns the builder. Values are validated once, by build().
    """

    def __init__(self, config: FilterConfig | None = None) -> None:
        source = config if config is not None else FilterConfig()
        self._values: dict[str, Any] = {
            name: getattr(source, name) for name in FilterConfig.model_fields
        }

    def gradients(self, parse: bool) -> FilterConfigBuilder:
        """Whether gradient and rainbow tags are parsed."""
        self._values["gradients_enabled"] = parse
        return self

    def hex_colors(self, parse: bool) -> FilterConfigBuilder:
        """Whether hex color tags are parsed."""
        self._values["hex_colors_enabled"] = parse
        return self

    def standard_colors(self, parse: bool) -> FilterConfigBuilder:
        """Whether named (standard and CSS) color tags are parsed."""
        self._values["standard_colors_enabled"] = parse
        return self

    def legacy_colors(self, parse: bool) -> FilterConfigBuilder:
        """Whether legacy '&' codes are translated (True) or stripped (False)."""
        self._values["legacy_colors_enabled"] = parse
        return self

    def advanced_transformations(self, parse: bool) -> FilterConfigBuilder:
        """Whether click, hover, insertion, font, key and lang tags are parsed."""
        self._values["advanced_transformations_enabled"] = parse
        return self

    def blocked_decorations(self, *decorations: TextDecoration) -> FilterConfigBuilder:
        """Replace the set of decorations forced off."""
        self._values["blocked_decorations"] = frozenset(decorations)
        return self

    def remove_text_decorations(self, *decorations: TextDecoration) -> FilterConfigBuilder:
        """Add decorations to the set forced off."""
        self._values["blocked_decorations"] = self._values["blocked_decorations"] | set(
            decorations
        )
        return self

    def blocked_colors(self, *colors: TextColor) -> FilterConfigBuilder:
        """Replace the set of blocked colors."""
        self._values["blocked_colors"] = frozenset(colors)
        return self

    def block_close_hex(self, block: bool) -> FilterConfigBuilder:
        """Whether colors close to a blocked color are blocked too."""
        self._values["block_close_hex"] = block
        return self

    def remove_colors(self, block_close_hex: bool, *colors: TextColor) -> FilterConfigBuilder:
        """Add blocked colors and set whether close colors are blocked too."""
        self._values["blocked_colors"] = self._values["blocked_colors"] | set(colors)
        self._values["block_close_hex"] = block_close_hex
        return self

    def luminance_threshold(self, threshold: int) -> FilterConfigBuilder:
        """Clear colors whose luminance (0-255) is below threshold."""
        self._values["luminance_threshold"] = threshold
        return self

    def prevent_luminance_below(self, threshold: int) -> FilterConfigBuilder:
        """Alias of luminance_threshold().

        Standard black has luminance 0, so any threshold above 0 also clears it.
        """
        return self.luminance_threshold(threshold)

    def placeholder_resolver(self, resolver: PlaceholderResolver | None) -> FilterConfigBuilder:
        """Set the resolver used for placeholder tags at parse time."""
        self._values["placeholder_resolver"] = resolver
        return self

    def build(self) -> FilterConfig:
        """Validate the options and build the immutable FilterConfig.

        Raises:
            InvalidConfigError: If a value is outside its domain
        """
        try:
            return FilterConfig(**self._values)
        except PydanticValidationError as e:
            raise InvalidConfigError(f"Invalid filter configuration: {e}") from e


STANDARD = FilterConfig(advanced_transformations_enabled=True)
LEGACY = FilterConfig(legacy_colors_enabled=True)


def load_filter_config(config_path: Path | str) -> FilterConfig:
    """Load a filter configuration from a YAML file.

    Args:
        config_path: Path to the YAML file

    Returns:
        The validated FilterConfig

    Raises:
        ParseError: If the file is missing or is not valid YAML
        InvalidConfigError: If a value is outside its domain
    """
    path = Path(config_path)
    if not path.exists():
        raise ParseError(f"Config file not found: {config_path}")

    try:
        with path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ParseError("YAML must contain a dictionary at the root level")

    try:
        schema = FilterConfigSchema.model_validate(data)
    except PydanticValidationError as e:
        raise InvalidConfigError(f"Invalid filter configuration: {e}") from e

    return (
        FilterConfig.builder()
        .gradients(schema.gradients)
        .hex_colors(schema.hex_colors)
        .standard_colors(schema.standard_colors)
        .legacy_colors(schema.legacy_colors)
        .advanced_transformations(schema.advanced_transformations)
        .blocked_decorations(*schema.blocked_decorations)
        .blocked_colors(*schema.blocked_colors)
        .block_close_hex(schema.block_close_hex)
        .luminance_threshold(schema.luminance_threshold)
        .build()
    )
