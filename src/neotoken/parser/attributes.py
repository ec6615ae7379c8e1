# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Attribute lines inside a section header.

An attribute line is ``-- key: value`` or ``-- flag``. The decorator is a
DECORATOR token; key, colon and value (or the flag) are COMMENT tokens.
"""

from dataclasses import dataclass, field

from neotoken.parser.lexer import (
    Match,
    Token,
    TokenKind,
    match_decorator,
    match_newline,
    skip_hspace,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Attribute:
    """One section attribute. A missing value marks a boolean flag."""

    key: str
    value: str | None = None


@dataclass(frozen=True)
class AttributeMatch:
    """A line that starts with an attribute decorator.

    Attributes:
        attribute: The parsed attribute, or None if the line is malformed.
        tokens: Tokens of the line; empty for a malformed line.
        end: Offset of the end of the line (before its line break).
        content_start: Offset of the first character after the decorator.
    """

    attribute: Attribute | None
    tokens: list[Token]
    end: int
    content_start: int


@dataclass
class AttributeBlock:
    """The attribute lines that follow a section header.

    Attributes:
        attributes: Parsed attributes in source order.
        tokens: Tokens of all attribute lines.
        end: Offset of the end of the last attribute line.
        malformed_at: Offset of the first malformed attribute, if any. The
            block stops there.
    """

    attributes: list[Attribute] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)
    end: int = 0
    malformed_at: int | None = None


def match_attribute(source: str, pos: int) -> AttributeMatch | None:
    """Match an attribute line starting at ``pos``.

    Key/value form is tried first; a line without an unescaped ``:`` is a
    boolean flag.

    Returns:
        None if the line does not start with ``--`` and a space; otherwise an
        AttributeMatch, marked malformed when the content is empty or the key
        before the colon is empty.
    """
    decorator = match_decorator(source, pos)
    if decorator is None:
        return None
    content_start = decorator.end
    content_end = _line_content_end(source, content_start)

    colon = _find_colon(source, content_start, content_end)
    if colon is not None:
        pair = _key_value(source, content_start, colon, content_end)
        if pair is None:
            return AttributeMatch(None, [], content_end, content_start)
        attribute, match = pair
        return AttributeMatch(attribute, decorator.tokens + match.tokens, content_end, content_start)

    if content_end == content_start:
        return AttributeMatch(None, [], content_end, content_start)
    flag = source[content_start:content_end]
    return AttributeMatch(
        Attribute(flag),
        [*decorator.tokens, Token(TokenKind.COMMENT, flag, content_start, content_end)],
        content_end,
        content_start,
    )


def match_attribute_block(source: str, pos: int) -> AttributeBlock:
    """Match the attribute lines that follow the line ending at ``pos``.

    Attribute lines sit on consecutive lines; the first line that is not an
    attribute line ends the block. Never fails: a block may be empty.
    """
    block = AttributeBlock(end=pos)
    while True:
        newline = match_newline(source, block.end)
        if newline is None:
            break
        line = match_attribute(source, newline.end)
        if line is None:
            break
        if line.attribute is None:
            block.malformed_at = line.content_start
            break
        block.attributes.append(line.attribute)
        block.tokens.extend(newline.tokens)
        block.tokens.extend(line.tokens)
        block.end = line.end
    return block


# ################
# Implementation
# ################


def _line_content_end(source: str, pos: int) -> int:
    """Return the offset of the next line break, or the end of input."""
    while pos < len(source) and source[pos] not in "\r\n":
        pos += 1
    return pos


def _find_colon(source: str, start: int, end: int) -> int | None:
    """Return the offset of the first ``:`` not preceded by a backslash."""
    pos = source.find(":", start, end)
    while pos != -1:
        if pos == start or source[pos - 1] != "\\":
            return pos
        pos = source.find(":", pos + 1, end)
    return None


def _key_value(source: str, start: int, colon: int, end: int) -> tuple[Attribute, Match] | None:
    """Build the tokens of ``key: value``; None if the key is empty."""
    if colon == start:
        return None
    key = source[start:colon]
    tokens = [
        Token(TokenKind.COMMENT, key, start, colon),
        Token(TokenKind.COMMENT, ":", colon, colon + 1),
    ]
    value_start = min(skip_hspace(source, colon + 1), end)
    value = source[value_start:end]
    if value:
        tokens.append(Token(TokenKind.COMMENT, value, value_start, end))
    return Attribute(key, value), Match(tokens, end)
