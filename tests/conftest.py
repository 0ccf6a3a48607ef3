"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import pytest


@pytest.fixture(scope="session")
def qt_app():
    """Provide a shared QApplication instance for widget tests."""

    qt_widgets = pytest.importorskip("PySide6.QtWidgets")
    return qt_widgets.QApplication.instance() or qt_widgets.QApplication([])


@pytest.fixture()
def subquery_sql() -> str:
    return "SELECT (\n  SELECT 1\n) x"
