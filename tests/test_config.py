"""Tests for filter configuration, the builder and YAML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from chattools.colors import BLACK, RED, TextColor
from chattools.components import TextDecoration
from chattools.config import FilterConfig, load_filter_config
from chattools.exceptions import InvalidConfigError, ParseError
from chattools.parser import placeholders

EXAMPLE_CONFIG = Path(__file__).parent.parent / "examples" / "filter_config.yaml"


class TestPresets:
    """Tests for the builder defaults and the presets."""

    def test_builder_defaults(self) -> None:
        """Test the options of a fresh builder."""
        config = FilterConfig.builder().build()
        assert config.gradients_enabled
        assert config.hex_colors_enabled
        assert config.standard_colors_enabled
        assert not config.legacy_colors_enabled
        assert not config.advanced_transformations_enabled
        assert config.blocked_decorations == frozenset()
        assert config.blocked_colors == frozenset()
        assert not config.block_close_hex
        assert config.luminance_threshold == 0
        assert config.placeholder_resolver is None

    def test_standard(self) -> None:
        """Test that the standard preset enables every modern category."""
        config = FilterConfig.standard()
        assert config.advanced_transformations_enabled
        assert not config.legacy_colors_enabled
        assert config.gradients_enabled

    def test_legacy(self) -> None:
        """Test that the legacy preset enables legacy codes but not advanced tags."""
        config = FilterConfig.legacy()
        assert config.legacy_colors_enabled
        assert not config.advanced_transformations_enabled


class TestBuilder:
    """Tests for FilterConfigBuilder."""

    def test_setters_chain(self) -> None:
        """Test that every setter returns the builder."""
        resolver = placeholders(name="Bob")
        config = (
            FilterConfig.builder()
            .gradients(False)
            .hex_colors(False)
            .standard_colors(False)
            .legacy_colors(True)
            .advanced_transformations(True)
            .blocked_decorations(TextDecoration.BOLD)
            .blocked_colors(RED)
            .block_close_hex(True)
            .luminance_threshold(16)
            .placeholder_resolver(resolver)
            .build()
        )
        assert not config.gradients_enabled
        assert not config.hex_colors_enabled
        assert not config.standard_colors_enabled
        assert config.legacy_colors_enabled
        assert config.advanced_transformations_enabled
        assert config.blocked_decorations == frozenset({TextDecoration.BOLD})
        assert config.blocked_colors == frozenset({RED})
        assert config.block_close_hex
        assert config.luminance_threshold == 16
        assert config.placeholder_resolver is resolver

    def test_removal_conveniences_accumulate(self) -> None:
        """Test remove_text_decorations, remove_colors and prevent_luminance_below."""
        config = (
            FilterConfig.builder()
            .remove_text_decorations(TextDecoration.BOLD)
            .remove_text_decorations(TextDecoration.ITALIC)
            .remove_colors(False, RED)
            .remove_colors(True, BLACK)
            .prevent_luminance_below(16)
            .build()
        )
        assert config.blocked_decorations == {TextDecoration.BOLD, TextDecoration.ITALIC}
        assert config.blocked_colors == {RED, BLACK}
        assert config.block_close_hex
        assert config.luminance_threshold == 16

    def test_to_builder_copies(self) -> None:
        """Test that to_builder starts from the config and leaves it untouched."""
        original = FilterConfig.standard()
        changed = original.to_builder().gradients(False).build()
        assert original.gradients_enabled
        assert not changed.gradients_enabled
        assert changed.advanced_transformations_enabled
        assert original.to_builder().build() == original

    def test_config_is_frozen(self) -> None:
        """Test that a built config cannot be modified."""
        config = FilterConfig.standard()
        with pytest.raises(ValidationError):
            config.gradients_enabled = False  # type: ignore[misc]

    @pytest.mark.parametrize("threshold", [-1, 256, 1000])
    def test_luminance_out_of_range(self, threshold: int) -> None:
        """Test that build rejects luminance thresholds outside 0-255."""
        with pytest.raises(InvalidConfigError):
            FilterConfig.builder().luminance_threshold(threshold).build()

    def test_luminance_bounds_accepted(self) -> None:
        """Test that both ends of the range are valid."""
        assert FilterConfig.builder().luminance_threshold(0).build().luminance_threshold == 0
        assert FilterConfig.builder().luminance_threshold(255).build().luminance_threshold == 255

    def test_non_callable_resolver(self) -> None:
        """Test that build rejects a resolver that cannot be called."""
        with pytest.raises(InvalidConfigError):
            FilterConfig.builder().placeholder_resolver("nope").build()  # type: ignore[arg-type]


class TestLoadFilterConfig:
    """Tests for load_filter_config."""

    def test_load(self, tmp_path: Path) -> None:
        """Test loading every supported key."""
        config_file = tmp_path / "filter.yaml"
        config_file.write_text(
            """
gradients: false
hex_colors: true
standard_colors: false
legacy_colors: true
advanced_transformations: true
blocked_decorations: [b, obfuscated]
blocked_colors: [red, "#101010", aliceblue]
block_close_hex: true
luminance_threshold: 16
""",
            encoding="utf-8",
        )

        config = load_filter_config(config_file)

        assert not config.gradients_enabled
        assert config.hex_colors_enabled
        assert not config.standard_colors_enabled
        assert config.legacy_colors_enabled
        assert config.advanced_transformations_enabled
        assert config.blocked_decorations == {TextDecoration.BOLD, TextDecoration.OBFUSCATED}
        assert config.blocked_colors == {RED, TextColor(0x101010), TextColor(0xF0F8FF)}
        assert config.block_close_hex
        assert config.luminance_threshold == 16

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        """Test that an empty file yields the builder defaults."""
        config_file = tmp_path / "filter.yaml"
        config_file.write_text("", encoding="utf-8")
        assert load_filter_config(config_file) == FilterConfig.builder().build()

    def test_example_config(self) -> None:
        """Test that the shipped example loads."""
        config = load_filter_config(EXAMPLE_CONFIG)
        assert not config.gradients_enabled
        assert BLACK in config.blocked_colors
        assert config.luminance_threshold == 16

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing file is a ParseError."""
        with pytest.raises(ParseError, match="not found"):
            load_filter_config(tmp_path / "missing.yaml")

    @pytest.mark.parametrize("content", ["gradients: [", "- just\n- a list\n"])
    def test_malformed_yaml(self, tmp_path: Path, content: str) -> None:
        """Test that unreadable YAML is a ParseError."""
        config_file = tmp_path / "filter.yaml"
        config_file.write_text(content, encoding="utf-8")
        with pytest.raises(ParseError):
            load_filter_config(config_file)

    @pytest.mark.parametrize(
        "content",
        [
            "blocked_decorations: [sparkly]",
            "blocked_colors: [not_a_color]",
            "luminance_threshold: 300",
            "gradients: maybe",
        ],
    )
    def test_invalid_values(self, tmp_path: Path, content: str) -> None:
        """Test that out-of-domain values are an InvalidConfigError."""
        config_file = tmp_path / "filter.yaml"
        config_file.write_text(content, encoding="utf-8")
        with pytest.raises(InvalidConfigError):
            load_filter_config(config_file)
