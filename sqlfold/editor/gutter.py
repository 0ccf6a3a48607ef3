"""Helpers for fold gutter rendering and interactions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from PySide6.QtCore import QRect

from sqlfold.editor.folding import FoldManager

EXPAND_ICON = "expand_more"
COLLAPSED_ICON = "chevron_right"
COLLAPSED_GLYPH = "▸"
EXPANDED_GLYPH = "▾"


@dataclass
class GutterCell:
    line: int
    icon: str | None = None
    tooltip: str | None = None
    collapsed: bool = False
    fold_line: bool = False

    @property
    def glyph(self) -> str:
        if self.icon is None:
            return ""
        return COLLAPSED_GLYPH if self.collapsed else EXPANDED_GLYPH


def render_fold_gutter(line: int, manager: FoldManager) -> GutterCell | None:
    """Describe the fold gutter cell for ``line``.

    Lines where a region starts get a toggle icon; lines strictly inside an
    expanded region get a continuation rule; every other line gets nothing.
    """

    region = manager.get_region_at_line(line)
    if region is None:
        inside = any(
            not r.collapsed and r.start_line < line < r.end_line
            for r in manager.get_regions_containing_line(line)
        )
        return GutterCell(line, fold_line=True) if inside else None

    if region.collapsed:
        return GutterCell(
            line,
            icon=COLLAPSED_ICON,
            tooltip=f"Click to expand ({region.line_count} lines)",
            collapsed=True,
        )
    return GutterCell(line, icon=EXPAND_ICON, tooltip="Click to collapse")


def marker_rect(area_width: int, top: int, height: int) -> QRect:
    radius = 5
    return QRect(area_width - 2 * radius - 2, top, radius * 2, height)


def handle_gutter_click(line: int | None, manager: FoldManager, handler: Callable[[int], None]) -> bool:
    """Forward a click on ``line`` to ``handler`` when a region starts there."""

    if line is None or manager.get_region_at_line(line) is None:
        return False
    handler(line)
    return True
