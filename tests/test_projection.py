from __future__ import annotations

import pytest

from sqlfold.editor.folding import FoldManager
from sqlfold.editor.projection import FoldedView, apply_folds_to_text

NESTED = "SELECT (\n  SELECT (\n    SELECT 1\n  ) a\n) b\nFROM t"


def _manager(text: str) -> FoldManager:
    manager = FoldManager()
    manager.detect_regions(text)
    return manager


def test_without_collapsed_regions_text_is_unchanged() -> None:
    manager = _manager(NESTED)
    view = manager.apply_folds_to_text(NESTED)

    assert manager.regions
    assert view.display_text == NESTED
    assert view.line_map == list(range(6))


def test_without_regions_map_is_identity() -> None:
    view = apply_folds_to_text("a\nb", FoldManager())

    assert view == FoldedView("a\nb", [0, 1])


def test_empty_text() -> None:
    assert apply_folds_to_text("", FoldManager()) == FoldedView("", [0])


def test_collapsed_region_is_replaced_by_indicator() -> None:
    text = "SELECT (\n  SELECT 1\n) x\nWHERE 1"
    manager = _manager(text)
    manager.toggle_fold(0)

    view = manager.apply_folds_to_text(text)

    assert view.display_text == "SELECT ( ⋯ (2 lines hidden)\nWHERE 1"
    assert view.line_map == [0, 3]


def test_outer_fold_hides_inner_regions() -> None:
    manager = _manager(NESTED)
    manager.toggle_fold(1)
    manager.toggle_fold(0)

    view = manager.apply_folds_to_text(NESTED)

    assert view.display_text == "SELECT ( ⋯ (4 lines hidden)\nFROM t"
    assert view.line_map == [0, 5]


def test_inner_fold_only() -> None:
    manager = _manager(NESTED)
    manager.toggle_fold(1)

    view = manager.apply_folds_to_text(NESTED)

    assert view.display_text.split("\n") == [
        "SELECT (",
        "  SELECT ( ⋯ (2 lines hidden)",
        ") b",
        "FROM t",
    ]
    assert view.line_map == [0, 1, 4, 5]


def test_trailing_newline_is_kept() -> None:
    text = "CASE\n x\nEND\n"
    manager = _manager(text)
    manager.fold_all()

    view = manager.apply_folds_to_text(text)

    assert view.display_text == "CASE ⋯ (2 lines hidden)\n"
    assert view.line_map == [0, 3]


def test_coordinate_mapping() -> None:
    text = "SELECT (\n  SELECT 1\n) x\nWHERE 1"
    manager = _manager(text)
    manager.toggle_fold(0)
    view = manager.apply_folds_to_text(text)

    assert view.to_original(1) == 3
    assert view.to_display(0) == 0
    assert view.to_display(2) == 0
    assert view.to_display(3) == 1
    with pytest.raises(IndexError):
        view.to_original(2)
    with pytest.raises(IndexError):
        view.to_original(-1)
