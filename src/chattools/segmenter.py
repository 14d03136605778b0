"""Split a styled text tree into length-bounded chunks."""

from __future__ import annotations

from .components import EMPTY_STYLE, Style, StyledNode
from .logger import get_logger

SPACE = " "
HYPHEN = "-"


class _SegmentRun:
    """Working state of a single segmentation call."""

    def __init__(self, cut_length: int, max_length: int) -> None:
        self.cut_length = cut_length
        self.max_length = max_length
        self.styles: list[Style] = [EMPTY_STYLE]
        self.chunk: list[StyledNode] = []
        self.current_length = 0
        self.chunks: list[StyledNode] = []

    def visit(self, node: StyledNode) -> None:
        effective = node.style.merge(self.styles[-1])
        self.styles.append(effective)
        if node.content:
            self._scan(node.content, effective)
        for child in node.children:
            self.visit(child)
        self.styles.pop()

    def finish(self) -> list[StyledNode]:
        self._finish_chunk()
        if not self.chunks:
            self.chunks.append(StyledNode())
        return self.chunks

    def _scan(self, content: str, style: Style) -> None:
        logger = get_logger()
        buffer: list[str] = []
        for ch in content:
            self.current_length += 1
            # Leave room for the hyphen.
            hard = self.current_length > 1 and self.current_length >= self.max_length

            if ch == SPACE and (hard or self.current_length > self.cut_length):
                logger.debug(f"Soft cut after {self.current_length - 1} characters")
                self._append(buffer, style)
                self._finish_chunk()
                buffer = []
                continue

            if hard:
                logger.debug(f"Hard cut after {self.current_length - 1} characters")
                buffer.append(HYPHEN)
                self._append(buffer, style)
                self._finish_chunk()
                buffer = [ch]
                self.current_length = 1
                continue

            buffer.append(ch)

        self._append(buffer, style)

    def _append(self, buffer: list[str], style: Style) -> None:
        if buffer:
            self.chunk.append(StyledNode.text("".join(buffer), style))

    def _finish_chunk(self) -> None:
        if self.chunk:
            self.chunks.append(StyledNode(children=tuple(self.chunk)))
        self.chunk = []
        self.current_length = 0


class TextSegmenter:
    """Split styled trees into chunks of bounded length.

    A chunk is cut softly at a space once it holds more than ``cut_length``
    characters (the space is dropped), and hard, with a trailing hyphen, so
    that text and hyphen together stay within ``max_length`` characters. A
    space at the hard-cut point is dropped like a soft cut. Every text node
    of a chunk carries its fully resolved effective style.
    A ``max_length`` below 2 still allows one character and its hyphen.

    Length is counted per code point, so a multi-code-point glyph may be
    split across chunks.

    Args:
        cut_length: Length after which the next space ends the chunk
        max_length: Maximum number of characters in a chunk, hyphen included

    Raises:
        ValueError: If either length is negative
    """

    def __init__(self, cut_length: int, max_length: int) -> None:
        if cut_length < 0 or max_length < 0:
            raise ValueError(
                f"Lengths must be non-negative (cut_length={cut_length}, max_length={max_length})"
            )
        self.cut_length = cut_length
        self.max_length = max_length

    def segment(self, tree: StyledNode) -> list[StyledNode]:
        """Segment a tree; always returns at least one chunk."""
        run = _SegmentRun(self.cut_length, self.max_length)
        run.visit(tree)
        chunks = run.finish()
        get_logger().debug(f"Segmented into {len(chunks)} chunk(s)")
        return chunks


def segment(tree: StyledNode, cut_length: int, max_length: int) -> list[StyledNode]:
    """Split a styled tree into chunks, see TextSegmenter."""
    return TextSegmenter(cut_length, max_length).segment(tree)
