"""Tests for legacy '&' code translation and stripping."""

from io import StringIO

import pytest

from chattools.legacy import strip_legacy, translate_legacy
from chattools.logger import setup_logger


class TestTranslateLegacy:
    """Tests for translate_legacy."""

    def test_colors_decorations_and_bukkit_hex(self) -> None:
        """Test the mixed example with a Bukkit-style hex code."""
        assert (
            translate_legacy("&9&lMajek&b&odor&x&f&a&c&a&d&e!")
            == "<blue><bold>Majek<aqua><italic>dor<#facade>!"
        )

    @pytest.mark.parametrize(
        ("legacy", "expected"),
        [
            ("&cRed", "<red>Red"),
            ("&CRed", "<red>Red"),
            ("&kx&mx&nx&rx", "<obfuscated>x<strikethrough>x<underlined>x<reset>x"),
            ("&0&7&8&f", "<black><gray><dark_gray><white>"),
        ],
    )
    def test_single_codes(self, legacy: str, expected: str) -> None:
        """Test single-character codes, case-insensitively."""
        assert translate_legacy(legacy) == expected

    def test_hex_forms(self) -> None:
        """Test six-digit, three-digit and Bukkit hex codes."""
        assert translate_legacy("&#336633Majek") == "<#336633>Majek"
        assert translate_legacy("&#363Majek") == "<#336633>Majek"
        assert translate_legacy("&X&F&A&C&A&D&E!") == "<#FACADE>!"

    def test_six_digit_form_wins(self) -> None:
        """Test that six hex digits are not read as a short code plus text."""
        assert translate_legacy("&#363abcdef") == "<#363abc>def"

    def test_short_form_before_text(self) -> None:
        """Test that three hex digits followed by a non-hex character are a short code."""
        assert translate_legacy("&#f00Majek") == "<#ff0000>Majek"

    def test_escape(self) -> None:
        """Test that an escaped code becomes a literal '&' code."""
        assert (
            translate_legacy("&bMajekdor with this color code \\&b")
            == "<aqua>Majekdor with this color code &b"
        )

    @pytest.mark.parametrize(
        "text",
        [
            "&zfoo",
            "trailing &",
            "&#12",
            "&#ggg",
            "&#1234Majek",
            "&#12345x",
            "a & b",
            "no codes at all",
        ],
    )
    def test_malformed_passes_through(self, text: str) -> None:
        """Test that anything not a code is emitted verbatim."""
        assert translate_legacy(text) == text

    def test_truncated_bukkit_hex(self) -> None:
        """Test that a truncated Bukkit code leaves its '&x' alone."""
        assert translate_legacy("&x&f&a") == "&x<white><green>"

    def test_logs_translation_count(self) -> None:
        """Test that translations are reported at changes verbosity."""
        output = StringIO()
        setup_logger(1, stream=output)

        translate_legacy("&c&lHi")

        assert "Translated 2 legacy code(s)" in output.getvalue()


class TestStripLegacy:
    """Tests for strip_legacy."""

    def test_strips_codes(self) -> None:
        """Test that every single-character code is removed."""
        assert strip_legacy("&9&lMajek&b&odor&x&f&a&c&a&d&e!") == "Majekdor!"

    def test_keeps_hex_forms_and_escapes(self) -> None:
        """Test that hex forms and escaped codes are left alone."""
        assert strip_legacy("&#336633Majek<blue>dor&a!") == "&#336633Majek<blue>dor!"
        assert strip_legacy("\\&cred") == "\\&cred"

    def test_strips_codes_revealed_by_stripping(self) -> None:
        """Test that stripping leaves no code behind."""
        assert strip_legacy("&&cc!") == "!"

    def test_silent_by_default(self) -> None:
        """Test that nothing is logged at verbosity 0."""
        output = StringIO()
        setup_logger(0, stream=output)

        strip_legacy("&cHi")

        assert output.getvalue() == ""
