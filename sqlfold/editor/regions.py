"""Data model for foldable SQL regions."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FoldType(str, Enum):
    """Kinds of foldable regions the detectors can produce."""

    SUBQUERY = "subquery"
    CASE_END = "case_end"
    BEGIN_END = "begin_end"
    COMMENT_BLOCK = "comment_block"


def region_id(start_line: int, end_line: int, fold_type: FoldType) -> str:
    return f"fold_{start_line}_{end_line}_{fold_type.value}"


@dataclass
class FoldRegion:
    """A contiguous, 0-indexed and inclusive line span that can be collapsed.

    ``id`` is derived from the span and the type only, so two detection passes
    that find the same span agree on it while a span whose boundary lines move
    gets a new identity.
    """

    start_line: int
    end_line: int
    type: FoldType
    start_col: int = 0
    end_col: int = 0
    collapsed: bool = False
    preview: str = ""
    id: str = field(init=False)

    def __post_init__(self) -> None:
        self.id = region_id(self.start_line, self.end_line, self.type)

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def contains_region(self, other: "FoldRegion") -> bool:
        return self.start_line <= other.start_line and self.end_line >= other.end_line

    def span(self) -> tuple[int, int, FoldType]:
        return (self.start_line, self.end_line, self.type)
