# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical primitives and word assembly for neopolitan documents.

Every primitive takes the full source text and a start offset and returns a
Match (the tokens it produced and the offset just past them) or None when it
does not apply at that offset. Nothing here keeps state between calls.

Offsets inside the grammar are character offsets into the ``str``;
``tokenize`` reports UTF-8 byte offsets through ByteOffsets.
"""

import dataclasses
import enum
import itertools
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

# ###############
# Public Interface
# ###############

MARKER = "<"
DECORATOR = "--"
BULLET = "-"

# Same line breaks as match_newline
LINE_BREAK = re.compile(r"\r\n|\r|\n")


class TokenKind(enum.Enum):
    """All token kinds. Values are the editor-protocol semantic token type names."""

    CLASS = "class"
    COMMENT = "comment"
    DECORATOR = "decorator"
    ENUM = "enum"
    ENUM_MEMBER = "enumMember"
    EVENT = "event"
    FUNCTION = "function"
    INTERFACE = "interface"
    KEYWORD = "keyword"
    MACRO = "macro"
    METHOD = "method"
    MODIFIER = "modifier"
    NAMESPACE = "namespace"
    NUMBER = "number"
    OPERATOR = "operator"
    PARAMETER = "parameter"
    PROPERTY = "property"
    REGEXP = "regexp"
    STRING = "string"
    STRUCT = "struct"
    TYPE = "type"
    TYPE_PARAMETER = "typeParameter"
    VARIABLE = "variable"

    # Bullet of a list item
    LIST_BULLET = "listBullet"

    # Separators; only used while parsing, never emitted
    WHITESPACE = "whitespace"

    @property
    def is_emitted(self) -> bool:
        """Return True if tokens of this kind appear in the final token stream."""
        return self is not TokenKind.WHITESPACE


@dataclass(frozen=True)
class Token:
    """A kinded slice of the source text.

    Attributes:
        kind: The kind of token.
        text: The exact source text covered by the token.
        start: Offset of the first character. Tokens returned by ``tokenize``
            carry UTF-8 byte offsets.
        end: Offset just past the last character.
    """

    kind: TokenKind
    text: str
    start: int
    end: int

    @property
    def span(self) -> tuple[int, int]:
        """The half-open ``(start, end)`` range of the token."""
        return (self.start, self.end)

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Match:
    """Result of a successful grammar match.

    Attributes:
        tokens: Tokens produced by the match, in source order.
        end: Offset just past the matched text.
    """

    tokens: list[Token] = field(default_factory=list)
    end: int = 0


def emitted(tokens: Iterable[Token]) -> list[Token]:
    """Drop separator tokens, keeping only kinds that belong in the output."""
    return [tok for tok in tokens if tok.kind.is_emitted]


def is_hspace(ch: str) -> bool:
    """Return True for horizontal whitespace (space or tab)."""
    return ch != "" and ch in _HSPACE


def is_marker(ch: str) -> bool:
    return ch == MARKER


def is_word_char(ch: str) -> bool:
    """Return True for any character that can be part of a word."""
    return ch != "" and ch not in _WHITESPACE


def is_plain_char(ch: str) -> bool:
    """Return True for a word character other than the marker."""
    return is_word_char(ch) and not is_marker(ch)


def match_hspace(source: str, pos: int) -> Match | None:
    """Match a run of one or more spaces and tabs."""
    end = skip_hspace(source, pos)
    if end == pos:
        return None
    return separator_match(source, pos, end)


def skip_hspace(source: str, pos: int) -> int:
    """Return the offset after any spaces and tabs at ``pos``."""
    while pos < len(source) and is_hspace(source[pos]):
        pos += 1
    return pos


def match_newline(source: str, pos: int) -> Match | None:
    """Match a single line break: ``\\r\\n``, ``\\n`` or a lone ``\\r``."""
    if source.startswith("\r\n", pos):
        return separator_match(source, pos, pos + 2)
    if pos < len(source) and source[pos] in "\r\n":
        return separator_match(source, pos, pos + 1)
    return None


def match_line_end(source: str, pos: int) -> Match | None:
    """Match optional trailing spaces followed by a line break or end of input.

    The line break itself is not consumed.
    """
    end = skip_hspace(source, pos)
    if end < len(source) and source[end] not in "\r\n":
        return None
    return separator_match(source, pos, end)


def match_blank_line(source: str, pos: int) -> Match | None:
    """Match a blank-line separator: a line break, an empty line, and any further empty lines.

    A run of blank lines collapses into a single separator.
    """
    first = match_newline(source, pos)
    if first is None:
        return None
    second = match_newline(source, skip_hspace(source, first.end))
    if second is None:
        return None
    end = second.end
    while True:
        more = match_newline(source, skip_hspace(source, end))
        if more is None:
            break
        end = more.end
    return separator_match(source, pos, end)


def match_blank_gap(source: str, pos: int) -> Match | None:
    """Match the space between two blocks.

    Trailing spaces on the last line of the first block, a blank-line separator,
    and the indentation of the first line of the next block.
    """
    blank = match_blank_line(source, skip_hspace(source, pos))
    if blank is None:
        return None
    return separator_match(source, pos, skip_hspace(source, blank.end))


def match_decorator(source: str, pos: int) -> Match | None:
    """Match ``--`` followed by one or more spaces.

    Only the two dashes become a DECORATOR token; the spaces are consumed.
    """
    if not source.startswith(DECORATOR, pos):
        return None
    dashes_end = pos + len(DECORATOR)
    gap = match_hspace(source, dashes_end)
    if gap is None:
        return None
    return Match(
        [Token(TokenKind.DECORATOR, DECORATOR, pos, dashes_end), *gap.tokens],
        gap.end,
    )


def word_end(source: str, pos: int) -> int:
    """Return the offset just past the run of word characters at ``pos``."""
    while pos < len(source) and is_word_char(source[pos]):
        pos += 1
    return pos


def split_word(text: str, start: int) -> list[Token]:
    """Decompose one word into STRING tokens.

    A leading marker becomes its own token and the rule is applied again to the
    rest. A single character is one token. Anything longer becomes its first
    character followed by the remaining characters.

    Args:
        text: The word; must not contain whitespace.
        start: Offset of the word's first character in the source.

    Returns:
        The word's tokens, in order. Empty only for an empty word.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(text) and is_marker(text[pos]):
        tokens.append(Token(TokenKind.STRING, MARKER, start + pos, start + pos + 1))
        pos += 1
    if pos < len(text) and is_plain_char(text[pos]):
        tokens.append(Token(TokenKind.STRING, text[pos], start + pos, start + pos + 1))
        pos += 1
    if pos < len(text):
        tokens.append(Token(TokenKind.STRING, text[pos:], start + pos, start + len(text)))
    return tokens


def match_word(source: str, pos: int) -> Match | None:
    """Match the longest run of non-whitespace characters at ``pos``."""
    end = word_end(source, pos)
    if end == pos:
        return None
    return Match(split_word(source[pos:end], pos), end)


def match_bullet(source: str, pos: int) -> Match | None:
    """Match a list bullet: ``-`` followed by one or more spaces."""
    if not source.startswith(BULLET, pos):
        return None
    bullet_end = pos + len(BULLET)
    gap = match_hspace(source, bullet_end)
    if gap is None:
        return None
    return Match(
        [Token(TokenKind.LIST_BULLET, BULLET, pos, bullet_end), *gap.tokens],
        gap.end,
    )


def separator_match(source: str, start: int, end: int) -> Match:
    """Build a match holding one WHITESPACE token (or none, if nothing was consumed)."""
    if start == end:
        return Match([], end)
    return Match([Token(TokenKind.WHITESPACE, source[start:end], start, end)], end)


class ByteOffsets:
    """Translates character offsets in ``source`` to UTF-8 byte offsets.

    The grammar indexes the ``str`` by character; editors address the document
    by byte. The prefix table is built once per document, and not at all for
    ASCII text, where both offsets are equal.
    """

    def __init__(self, source: str) -> None:
        self._table: list[int] | None = None
        if not source.isascii():
            widths = (len(ch.encode("utf-8", errors="surrogatepass")) for ch in source)
            self._table = [0, *itertools.accumulate(widths)]

    def __getitem__(self, pos: int) -> int:
        if self._table is None:
            return pos
        return self._table[pos]

    def token(self, tok: Token) -> Token:
        """Return ``tok`` with its span in byte offsets."""
        if self._table is None:
            return tok
        return dataclasses.replace(tok, start=self[tok.start], end=self[tok.end])


# ################
# Implementation
# ################

_HSPACE = " \t"
_WHITESPACE = frozenset(" \t\r\n")
