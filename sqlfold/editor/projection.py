"""Projection of a document onto its folded display form."""
from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from sqlfold.editor.folding import FoldManager

FOLD_INDICATOR = " ⋯ ({count} lines hidden)"


@dataclass(frozen=True)
class FoldedView:
    """Display text with hidden lines removed.

    ``line_map[i]`` is the original line shown at display line ``i``.
    """

    display_text: str
    line_map: List[int]

    def to_original(self, display_line: int) -> int:
        if display_line < 0:
            raise IndexError(display_line)
        return self.line_map[display_line]

    def to_display(self, original_line: int) -> int:
        """Display line showing ``original_line``, or its collapsed header."""

        return max(0, bisect_right(self.line_map, original_line) - 1)


def apply_folds_to_text(text: str, manager: "FoldManager") -> FoldedView:
    if not text or not manager.regions:
        lines = text.split("\n") if text else [""]
        return FoldedView(text or "", list(range(len(lines))))

    lines = text.split("\n")
    display: List[str] = []
    line_map: List[int] = []
    for index in manager.get_visible_lines(len(lines)):
        line = lines[index]
        region = manager.get_region_at_line(index)
        if region is not None and region.collapsed:
            line += FOLD_INDICATOR.format(count=region.end_line - region.start_line)
        display.append(line)
        line_map.append(index)
    return FoldedView("\n".join(display), line_map)
