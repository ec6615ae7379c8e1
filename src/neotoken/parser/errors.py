# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Diagnostics recorded while tokenizing a document."""

import enum
from dataclasses import dataclass

from neotoken.parser.lexer import LINE_BREAK

# ###############
# Public Interface
# ###############


class ErrorKind(enum.Enum):
    """Categories of grammar failures."""

    UNRECOGNIZED_KEYWORD = "unrecognized-keyword"
    MALFORMED_ATTRIBUTE = "malformed-attribute"
    MISSING_SEPARATOR = "missing-separator"
    EMPTY_BODY = "empty-body"
    UNEXPECTED_TEXT = "unexpected-text"
    EXPECTED_SECTION = "expected-section"


@dataclass(frozen=True)
class ParseError:
    """A grammar failure at a position in the source.

    Errors are collected, not raised: the tokenizer records them and carries on
    with the rest of the document.

    Attributes:
        kind: Category of the failure.
        offset: Offset in the source where the failure was detected; a UTF-8
            byte offset in errors returned by ``tokenize``.
        message: Human-readable description of what was expected.
    """

    kind: ErrorKind
    offset: int
    message: str

    def location(self, source: str) -> tuple[int, int]:
        """Return the 1-based ``(line, column)`` of the error within ``source``.

        ``offset`` is a UTF-8 byte offset; the column counts characters. Line
        breaks are ``\\r\\n``, ``\\n`` or a lone ``\\r``, as in the grammar.
        """
        data = source.encode("utf-8", errors="surrogatepass")
        prefix = data[: self.offset].decode("utf-8", errors="ignore")
        line_start = 0
        line = 1
        for line_break in LINE_BREAK.finditer(prefix):
            line += 1
            line_start = line_break.end()
        return line, len(prefix) - line_start + 1

    def __str__(self) -> str:
        return f"Offset {self.offset}: {self.message}"
