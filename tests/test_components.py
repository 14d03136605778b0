"""Tests for the styled node tree and style model."""

from chattools.colors import BLUE, RED
from chattools.components import (
    EMPTY_STYLE,
    ClickEvent,
    Style,
    StyledNode,
    TextDecoration,
)


class TestTextDecoration:
    """Tests for decoration name lookup."""

    def test_from_name(self) -> None:
        """Test full names, aliases and unknown names."""
        assert TextDecoration.from_name("bold") is TextDecoration.BOLD
        assert TextDecoration.from_name("EM") is TextDecoration.ITALIC
        assert TextDecoration.from_name("st") is TextDecoration.STRIKETHROUGH
        assert TextDecoration.from_name("obf") is TextDecoration.OBFUSCATED
        assert TextDecoration.from_name("blue") is None


class TestStyle:
    """Tests for Style."""

    def test_merge_child_wins(self) -> None:
        """Test that set attributes win and unset ones are inherited."""
        parent = Style(color=RED, bold=False, font="uniform")
        child = Style(bold=True, italic=False)
        assert child.merge(parent) == Style(color=RED, bold=True, italic=False, font="uniform")

    def test_merge_keeps_explicit_false(self) -> None:
        """Test that an explicit False is not replaced by the parent's True."""
        assert Style(bold=False).merge(Style(bold=True)).bold is False

    def test_with_decoration_and_color(self) -> None:
        """Test the copy-with helpers."""
        style = EMPTY_STYLE.with_decoration(TextDecoration.UNDERLINED, True).with_color(BLUE)
        assert style == Style(color=BLUE, underlined=True)
        assert style.decoration(TextDecoration.UNDERLINED) is True
        assert EMPTY_STYLE.is_empty()
        assert not style.is_empty()

    def test_describe(self) -> None:
        """Test the short textual summary."""
        style = Style(color=RED, bold=True, italic=False, click_event=ClickEvent("open_url", "x"))
        assert style.describe() == "color=red bold !italic click=open_url:x"
        assert EMPTY_STYLE.describe() == ""


class TestStyledNode:
    """Tests for StyledNode."""

    def test_append_returns_new_node(self) -> None:
        """Test that nodes are never mutated."""
        root = StyledNode.text("a")
        extended = root.append(StyledNode.text("b"))
        assert root.children == ()
        assert extended.plain_text() == "ab"

    def test_iter_runs_resolves_effective_styles(self) -> None:
        """Test that runs carry styles merged down from the root."""
        tree = StyledNode(
            style=Style(bold=True),
            children=(
                StyledNode.text("red ", Style(color=RED)),
                StyledNode(style=Style(italic=True), children=(StyledNode.text("both"),)),
            ),
        )
        assert list(tree.iter_runs()) == [
            ("red ", Style(color=RED, bold=True)),
            ("both", Style(bold=True, italic=True)),
        ]

    def test_flatten_merges_equal_neighbours(self) -> None:
        """Test that adjacent runs with the same style are joined."""
        tree = StyledNode(
            children=(
                StyledNode.text("I am "),
                StyledNode(children=(StyledNode.text("Majekdor"),)),
                StyledNode.text("!", Style(color=RED)),
            )
        )
        assert tree.flatten() == [("I am Majekdor", EMPTY_STYLE), ("!", Style(color=RED))]

    def test_flatten_skips_empty_content(self) -> None:
        """Test that structural nodes do not produce runs."""
        assert StyledNode().flatten() == []
