from __future__ import annotations

from sqlfold.editor.scanner import SqlScanner, starts_subquery


def _positions(text: str) -> list[tuple[str, int, int]]:
    return [(c.char, c.line, c.column) for c in SqlScanner(text).structural()]


def test_parens_inside_strings_and_comments_are_skipped() -> None:
    text = "a (b) 'x(' -- (\n/* ( */ )"

    assert _positions(text) == [("(", 0, 2), (")", 0, 4), (")", 1, 8)]


def test_all_quote_styles_are_tracked() -> None:
    text = '"a(" `b)` (c)'

    assert [c.char for c in SqlScanner(text).structural()] == ["(", ")"]


def test_backslash_escaped_quote_does_not_close_string() -> None:
    text = "'it\\'s (' (x)"

    tokens = list(SqlScanner(text).structural())
    assert [t.char for t in tokens] == ["(", ")"]
    assert [t.column for t in tokens] == [10, 12]


def test_line_comment_ends_at_newline() -> None:
    text = "-- (\n(\n)"

    assert _positions(text) == [("(", 1, 0), (")", 2, 0)]


def test_token_index_points_into_source() -> None:
    text = "x\n  (y)"

    tokens = list(SqlScanner(text).structural())
    assert [text[t.index] for t in tokens] == ["(", ")"]


def test_unterminated_string_swallows_rest_of_input() -> None:
    scanner = SqlScanner("SELECT '(\n)")

    assert list(scanner.structural()) == []
    assert scanner.in_string
    assert scanner.line == 1


def test_unterminated_block_comment_swallows_rest_of_input() -> None:
    scanner = SqlScanner("/* (\n)")

    assert list(scanner.structural()) == []
    assert scanner.in_block_comment


def test_starts_subquery_lookahead() -> None:
    assert starts_subquery("(  select 1", 0)
    assert starts_subquery("x (\n\tSELECT", 2)
    assert not starts_subquery("(SELEC", 0)
    assert not starts_subquery("(a, b)", 0)
    assert not starts_subquery("(" + " " * 25 + "SELECT", 0)
