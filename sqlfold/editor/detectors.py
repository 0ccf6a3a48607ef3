"""Detectors producing candidate fold regions from SQL text.

Each detector is an independent pass over the document and keeps its own
explicit LIFO stack of open tokens, so nesting depth is bounded only by the
input. Unmatched closing tokens are ignored and unmatched openings never
produce a region; none of the detectors raise on malformed SQL.
"""
from __future__ import annotations

import re
from typing import Callable, List, Sequence

from sqlfold.editor.regions import FoldRegion, FoldType
from sqlfold.editor.scanner import SqlScanner, starts_subquery

_CASE_RE = re.compile(r"\bCASE\b", re.IGNORECASE)
_BEGIN_RE = re.compile(r"\bBEGIN\b", re.IGNORECASE)
_END_BLOCK_RE = re.compile(r"\bEND\b(?!\s+(?:IF|LOOP|WHILE|FOR)\b)", re.IGNORECASE)
_END_BEGIN_RE = re.compile(r"\bEND\b(?!\s+(?:IF|LOOP|WHILE|FOR)\b)\s*;?", re.IGNORECASE)
_END_WORD_RE = re.compile(r"\bEND\b")
_CASE_WORD_RE = re.compile(r"\bCASE\b")

Detector = Callable[[str, Sequence[str]], List[FoldRegion]]


def detect_subqueries(text: str, lines: Sequence[str]) -> List[FoldRegion]:
    """Parenthesised ``SELECT`` subqueries spanning at least two lines."""

    regions: List[FoldRegion] = []
    stack: list[tuple[int, int, bool]] = []
    for token in SqlScanner(text).structural("()"):
        if token.char == "(":
            stack.append((token.line, token.column, starts_subquery(text, token.index)))
        elif stack:
            line, column, is_subquery = stack.pop()
            if is_subquery and token.line > line:
                regions.append(
                    FoldRegion(line, token.line, FoldType.SUBQUERY, column, token.column + 1)
                )
    return regions


def _commented_out(line: str, position: int) -> bool:
    """Same-line heuristic: is ``position`` after ``--`` or an open ``/*``?"""

    before = line[:position]
    if "--" in before:
        return True
    return before.rfind("/*") > before.rfind("*/")


def _keyword_events(line: str, opener: re.Pattern[str], closer: re.Pattern[str]):
    """Return (start, end, is_open) tuples for keyword matches in line order."""

    events = [(m.start(), m.end(), True) for m in opener.finditer(line)]
    events.extend((m.start(), m.end(), False) for m in closer.finditer(line))
    events.sort(key=lambda event: event[0])
    return [event for event in events if not _commented_out(line, event[0])]


def detect_case_blocks(text: str, lines: Sequence[str]) -> List[FoldRegion]:
    """``CASE ... END`` expressions spanning at least two lines."""

    regions: List[FoldRegion] = []
    stack: list[tuple[int, int]] = []
    for line_index, line in enumerate(lines):
        for start, end, is_open in _keyword_events(line, _CASE_RE, _END_BLOCK_RE):
            if is_open:
                stack.append((line_index, start))
            elif stack:
                open_line, open_col = stack.pop()
                if line_index > open_line:
                    regions.append(
                        FoldRegion(open_line, line_index, FoldType.CASE_END, open_col, end)
                    )
    return regions


def _closes_case(line: str, position: int) -> bool:
    """True when an ``END`` at ``position`` follows an unclosed ``CASE`` on its line."""

    before = line[:position].upper()
    cases = [m.start() for m in _CASE_WORD_RE.finditer(before)]
    if not cases:
        return False
    ends = [m.start() for m in _END_WORD_RE.finditer(before)]
    return not ends or cases[-1] > ends[-1]


def detect_begin_blocks(text: str, lines: Sequence[str]) -> List[FoldRegion]:
    """``BEGIN ... END`` blocks spanning at least two lines.

    ``END`` is shared with ``CASE`` expressions; an ``END`` that closes a
    ``CASE`` opened earlier on the same line is left to the CASE pass.
    """

    regions: List[FoldRegion] = []
    stack: list[tuple[int, int]] = []
    for line_index, line in enumerate(lines):
        for start, end, is_open in _keyword_events(line, _BEGIN_RE, _END_BEGIN_RE):
            if is_open:
                stack.append((line_index, start))
            elif stack and not _closes_case(line, start):
                open_line, open_col = stack.pop()
                if line_index > open_line:
                    regions.append(
                        FoldRegion(open_line, line_index, FoldType.BEGIN_END, open_col, end)
                    )
    return regions


def detect_block_comments(text: str, lines: Sequence[str]) -> List[FoldRegion]:
    """``/* ... */`` comments whose closing line is two or more lines below the opening."""

    regions: List[FoldRegion] = []
    pending: tuple[int, int] | None = None
    for line_index, line in enumerate(lines):
        if pending is None:
            start = line.find("/*")
            if start != -1 and line.find("*/", start + 2) == -1:
                pending = (line_index, start)
            continue
        end = line.find("*/")
        if end == -1:
            continue
        open_line, open_col = pending
        if line_index > open_line + 1:
            regions.append(
                FoldRegion(open_line, line_index, FoldType.COMMENT_BLOCK, open_col, end + 2)
            )
        pending = None
    return regions


DETECTORS: tuple[Detector, ...] = (
    detect_subqueries,
    detect_case_blocks,
    detect_begin_blocks,
    detect_block_comments,
)
