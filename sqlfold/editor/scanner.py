"""Character level SQL scanner aware of string literals and comments."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

QUOTE_CHARS = ("'", '"', "`")


@dataclass(frozen=True)
class ScannedChar:
    """A structural character found outside strings and comments."""

    char: str
    index: int
    line: int
    column: int


class SqlScanner:
    """Walks SQL text one character at a time.

    The scanner tracks the current line and column together with three
    lexical states: inside a quoted literal (``'``, ``"`` or a backtick, with
    backslash escapes), inside a ``--`` line comment and inside a ``/* */``
    block comment. Characters found in any of those states are never reported
    as structural. Unterminated literals and comments simply keep their state
    until the end of the input.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.line = 0
        self.column = 0
        self.string_char: str | None = None
        self.in_line_comment = False
        self.in_block_comment = False

    @property
    def in_string(self) -> bool:
        return self.string_char is not None

    def structural(self, targets: str = "()") -> Iterator[ScannedChar]:
        """Yield every character from ``targets`` that sits in plain code."""

        text = self.text
        length = len(text)
        i = 0
        while i < length:
            char = text[i]
            next_char = text[i + 1] if i + 1 < length else ""
            prev_char = text[i - 1] if i > 0 else ""

            if char == "\n":
                self.line += 1
                self.column = 0
                self.in_line_comment = False
                i += 1
                continue
            column = self.column
            self.column += 1

            if self.in_line_comment:
                i += 1
                continue
            if not self.in_string and not self.in_block_comment and char == "-" and next_char == "-":
                self.in_line_comment = True
                i += 1
                continue

            if self.in_block_comment:
                if char == "*" and next_char == "/":
                    self.in_block_comment = False
                    self.column += 1
                    i += 2
                else:
                    i += 1
                continue
            if not self.in_string and char == "/" and next_char == "*":
                self.in_block_comment = True
                self.column += 1
                i += 2
                continue

            if char in QUOTE_CHARS and prev_char != "\\":
                if self.string_char is None:
                    self.string_char = char
                elif char == self.string_char:
                    self.string_char = None
                i += 1
                continue
            if self.in_string:
                i += 1
                continue

            if char in targets:
                yield ScannedChar(char, i, self.line, column)
            i += 1


def starts_subquery(text: str, open_index: int, lookahead: int = 19) -> bool:
    """Return True when the text after an opening paren begins with SELECT."""

    following = text[open_index + 1 : open_index + 1 + lookahead]
    return following.strip().upper().startswith("SELECT")
