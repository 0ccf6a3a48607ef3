"""Folding manager for the SQL query editor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from sqlfold.core.logging import get_logger
from sqlfold.editor.detectors import DETECTORS
from sqlfold.editor.projection import FoldedView, apply_folds_to_text
from sqlfold.editor.regions import FoldRegion, FoldType

PREVIEW_WIDTH = 40
ELLIPSIS = "..."

__all__ = ["FoldManager", "FoldMarker", "FoldRegion", "FoldType", "PREVIEW_WIDTH"]


@dataclass(frozen=True)
class FoldMarker:
    """Gutter-facing projection of a region."""

    line: int
    collapsed: bool
    type: FoldType
    end_line: int
    preview: str


def content_fingerprint(text: str) -> str:
    return f"{len(text)}:{text[:100]}{text[-100:]}"


class FoldManager:
    """Detects foldable regions and tracks which of them are collapsed.

    ``regions`` is rebuilt on every detection pass. ``collapsed_regions`` holds
    region ids and lives as long as the manager, so a region found again with
    the same span and type comes back collapsed. A manager belongs to a single
    editor buffer.
    """

    def __init__(self, preview_width: int = PREVIEW_WIDTH) -> None:
        self.regions: List[FoldRegion] = []
        self.collapsed_regions: set[str] = set()
        self.preview_width = max(len(ELLIPSIS) + 1, preview_width)
        self._last_fingerprint = ""
        self.logger = get_logger(__name__)

    # Detection ---------------------------------------------------------
    def detect_regions(self, text: object, force: bool = False) -> List[FoldRegion]:
        if not isinstance(text, str) or not text:
            if not isinstance(text, str):
                self.logger.debug("Ignoring non-text input of type %s", type(text).__name__)
            self.regions = []
            self._last_fingerprint = ""
            return self.regions

        fingerprint = content_fingerprint(text)
        if not force and fingerprint == self._last_fingerprint and self.regions:
            return self.regions
        self._last_fingerprint = fingerprint

        lines = text.split("\n")
        regions: List[FoldRegion] = []
        for detector in DETECTORS:
            regions.extend(detector(text, lines))
        regions.sort(key=lambda region: (region.start_line, -region.end_line))

        for region in regions:
            if region.id in self.collapsed_regions:
                region.collapsed = True
            region.preview = self._preview(lines, region)

        self.regions = regions
        self.logger.debug("Detected %d fold regions over %d lines", len(regions), len(lines))
        return regions

    def _preview(self, lines: List[str], region: FoldRegion) -> str:
        first = lines[region.start_line].strip() if region.start_line < len(lines) else ""
        if len(first) > self.preview_width:
            return first[: self.preview_width - len(ELLIPSIS)] + ELLIPSIS
        return first

    # Queries -----------------------------------------------------------
    def get_region_at_line(self, line: int) -> Optional[FoldRegion]:
        """Innermost region whose header is ``line``."""

        matching = [region for region in self.regions if region.start_line == line]
        if not matching:
            return None
        return min(matching, key=lambda region: region.line_count)

    def get_regions_containing_line(self, line: int) -> List[FoldRegion]:
        return [region for region in self.regions if region.contains_line(line)]

    def is_line_hidden(self, line: int) -> bool:
        # The header line of a collapsed region stays visible.
        return any(
            region.collapsed and region.start_line < line <= region.end_line
            for region in self.regions
        )

    def get_visible_lines(self, total_lines: int) -> List[int]:
        return [line for line in range(total_lines) if not self.is_line_hidden(line)]

    def get_fold_markers(self) -> List[FoldMarker]:
        return [
            FoldMarker(
                line=region.start_line,
                collapsed=region.collapsed,
                type=region.type,
                end_line=region.end_line,
                preview=region.preview,
            )
            for region in self.regions
        ]

    # Fold state --------------------------------------------------------
    def toggle_fold(self, line: int) -> Optional[FoldRegion]:
        region = self.get_region_at_line(line)
        if region is None:
            return None
        region.collapsed = not region.collapsed
        if region.collapsed:
            self.collapsed_regions.add(region.id)
        else:
            self.collapsed_regions.discard(region.id)
        self.logger.debug("Toggled %s -> collapsed=%s", region.id, region.collapsed)
        return region

    def fold_all(self) -> None:
        for region in self.regions:
            region.collapsed = True
            self.collapsed_regions.add(region.id)

    def unfold_all(self) -> None:
        for region in self.regions:
            region.collapsed = False
        self.collapsed_regions.clear()

    def clear(self) -> None:
        self.regions = []
        self.collapsed_regions.clear()

    def apply_folds_to_text(self, text: str) -> FoldedView:
        return apply_folds_to_text(text, self)
