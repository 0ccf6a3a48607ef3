from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtCore")

from sqlfold.editor.folding import FoldManager  # noqa: E402
from sqlfold.editor.gutter import (  # noqa: E402
    COLLAPSED_ICON,
    EXPAND_ICON,
    handle_gutter_click,
    marker_rect,
    render_fold_gutter,
)

TEXT = "CASE\n WHEN a THEN 1\n WHEN b THEN 2\nEND\nFROM t"


@pytest.fixture()
def manager() -> FoldManager:
    manager = FoldManager()
    manager.detect_regions(TEXT)
    return manager


def test_expanded_region_header(manager: FoldManager) -> None:
    cell = render_fold_gutter(0, manager)

    assert cell is not None
    assert cell.icon == EXPAND_ICON
    assert cell.tooltip == "Click to collapse"
    assert cell.glyph == "▾"


def test_collapsed_region_header(manager: FoldManager) -> None:
    manager.toggle_fold(0)
    cell = render_fold_gutter(0, manager)

    assert cell is not None
    assert cell.icon == COLLAPSED_ICON
    assert cell.tooltip == "Click to expand (4 lines)"
    assert cell.collapsed and cell.glyph == "▸"


def test_interior_lines_of_expanded_region(manager: FoldManager) -> None:
    cell = render_fold_gutter(1, manager)

    assert cell is not None and cell.fold_line and cell.icon is None
    assert render_fold_gutter(3, manager) is None
    assert render_fold_gutter(4, manager) is None


def test_collapsed_region_has_no_continuation(manager: FoldManager) -> None:
    manager.fold_all()

    assert render_fold_gutter(1, manager) is None


def test_gutter_click_only_toggles_headers(manager: FoldManager) -> None:
    clicked: list[int] = []

    assert handle_gutter_click(0, manager, clicked.append) is True
    assert handle_gutter_click(2, manager, clicked.append) is False
    assert handle_gutter_click(None, manager, clicked.append) is False
    assert clicked == [0]


def test_marker_rect_hugs_right_edge() -> None:
    rect = marker_rect(40, 12, 16)

    assert (rect.x(), rect.y(), rect.width(), rect.height()) == (28, 12, 10, 16)
