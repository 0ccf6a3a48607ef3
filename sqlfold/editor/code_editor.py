"""Query editor widget with a fold gutter."""
from __future__ import annotations

from PySide6.QtCore import QRect, QSize, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter
from PySide6.QtWidgets import QPlainTextEdit, QWidget

from sqlfold.core.config import ConfigManager, FoldingSettings
from sqlfold.core.logging import get_logger
from sqlfold.editor.folding import FoldManager
from sqlfold.editor.gutter import handle_gutter_click, marker_rect, render_fold_gutter
from sqlfold.editor.projection import FoldedView


class FoldGutter(QWidget):
    """Side widget that paints fold markers."""

    def __init__(self, editor: "QueryEditor") -> None:
        super().__init__(editor)
        self.query_editor = editor

    def sizeHint(self) -> QSize:  # type: ignore[override]
        return QSize(self.query_editor.fold_gutter_width(), 0)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        self.query_editor._paint_fold_gutter(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        self.query_editor.toggle_fold_from_gutter(event)


class QueryEditor(QPlainTextEdit):
    """Plain text SQL editor owning one ``FoldManager``.

    Detection runs after a debounce on text changes; block visibility is then
    synced with the manager so collapsed regions keep only their header line.
    """

    foldsChanged = Signal()

    def __init__(self, parent=None, *, config: ConfigManager | dict | None = None) -> None:
        super().__init__(parent)
        self.config = config
        self.settings = FoldingSettings.from_config(config)
        self.fold_manager = FoldManager(preview_width=self.settings.preview_width)
        self.logger = get_logger(__name__)

        self._detect_timer = QTimer(self)
        self._detect_timer.setSingleShot(True)
        self._detect_timer.setInterval(self.settings.debounce_ms)
        self._detect_timer.timeout.connect(self.refresh_folds)

        self.fold_gutter = FoldGutter(self)
        self.blockCountChanged.connect(self._update_margins)
        self.updateRequest.connect(self._update_fold_gutter)
        self.textChanged.connect(self._schedule_detection)
        self._update_margins()

    # Document plumbing -------------------------------------------------
    def set_sql(self, text: str) -> None:
        """Load a document, dropping fold state that belonged to the previous one."""

        self._detect_timer.stop()
        self.fold_manager.clear()
        self.setPlainText(text)
        self._detect_timer.stop()
        self.refresh_folds()
        self.logger.debug("Loaded %d lines, %d fold regions", self.blockCount(), len(self.fold_manager.regions))
        if self.settings.fold_all_on_open:
            self.fold_all()

    def _schedule_detection(self) -> None:
        if self.settings.enabled:
            self._detect_timer.start()

    def refresh_folds(self, force: bool = False) -> None:
        if not self.settings.enabled:
            return
        self.fold_manager.detect_regions(self.toPlainText(), force=force)
        self._apply_visibility()

    # Fold commands -----------------------------------------------------
    def toggle_fold_at_line(self, line: int) -> bool:
        region = self.fold_manager.toggle_fold(line)
        if region is None:
            return False
        self._apply_visibility()
        return True

    def fold_all(self) -> None:
        self.fold_manager.fold_all()
        self._apply_visibility()

    def unfold_all(self) -> None:
        self.fold_manager.unfold_all()
        self._apply_visibility()

    def folded_view(self) -> FoldedView:
        return self.fold_manager.apply_folds_to_text(self.toPlainText())

    def _apply_visibility(self) -> None:
        document = self.document()
        block = document.firstBlock()
        while block.isValid():
            block.setVisible(not self.fold_manager.is_line_hidden(block.blockNumber()))
            block = block.next()
        document.markContentsDirty(0, document.characterCount())
        self.viewport().update()
        self.fold_gutter.update()
        self.foldsChanged.emit()

    # Gutter ------------------------------------------------------------
    def fold_gutter_width(self) -> int:
        return 8 + self.fontMetrics().horizontalAdvance("9") * 2

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        cr = self.contentsRect()
        self.fold_gutter.setGeometry(QRect(cr.left(), cr.top(), self.fold_gutter_width(), cr.height()))

    def _update_margins(self, _=None) -> None:
        self.setViewportMargins(self.fold_gutter_width(), 0, 0, 0)

    def _update_fold_gutter(self, rect, dy) -> None:
        if dy:
            self.fold_gutter.scroll(0, dy)
        else:
            self.fold_gutter.update(0, rect.y(), self.fold_gutter.width(), rect.height())

    def _paint_fold_gutter(self, event) -> None:
        painter = QPainter(self.fold_gutter)
        painter.fillRect(event.rect(), QColor(30, 30, 30))

        block = self.firstVisibleBlock()
        top = int(self.blockBoundingGeometry(block).translated(self.contentOffset()).top())
        bottom = top + int(self.blockBoundingRect(block).height())
        width = self.fold_gutter.width()
        height = self.fontMetrics().height()

        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                cell = render_fold_gutter(block.blockNumber(), self.fold_manager)
                if cell is not None and cell.icon:
                    painter.setPen(QColor(198, 198, 198))
                    painter.drawText(marker_rect(width, top, height), Qt.AlignCenter, cell.glyph)
                elif cell is not None:
                    painter.setPen(QColor(80, 80, 80))
                    painter.drawLine(width - 7, top, width - 7, bottom)
            block = block.next()
            top = bottom
            bottom = top + int(self.blockBoundingRect(block).height())
        painter.end()

    def _line_at_position(self, y: float) -> int | None:
        block = self.firstVisibleBlock()
        top = int(self.blockBoundingGeometry(block).translated(self.contentOffset()).top())
        bottom = top + int(self.blockBoundingRect(block).height())
        while block.isValid() and top <= y:
            if block.isVisible() and bottom >= y:
                return block.blockNumber()
            block = block.next()
            top = bottom
            bottom = top + int(self.blockBoundingRect(block).height())
        return None

    def toggle_fold_from_gutter(self, event: QMouseEvent) -> None:
        line = self._line_at_position(event.position().y())
        handle_gutter_click(line, self.fold_manager, self.toggle_fold_at_line)
