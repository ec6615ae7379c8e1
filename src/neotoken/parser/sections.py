# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Section grammar.

A section is a ``-- <keyword>`` header, optional attribute lines, a blank line
and a body. The keyword alone decides the shape of the body, so dispatch is a
table lookup rather than trying every section form in turn.
"""

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from neotoken.parser.attributes import Attribute, match_attribute_block
from neotoken.parser.errors import ErrorKind, ParseError
from neotoken.parser.lexer import (
    Match,
    Token,
    TokenKind,
    emitted,
    match_blank_gap,
    match_bullet,
    match_decorator,
    match_line_end,
    skip_hspace,
    word_end,
)
from neotoken.parser.paragraphs import match_paragraph_run

# ###############
# Public Interface
# ###############


class BodyPolicy(enum.Enum):
    """What a section expects after its header and attributes."""

    PARAGRAPHS = "paragraphs"
    CODE = "code"
    LIST = "list"
    ATTRIBUTES = "attributes"


SECTION_KEYWORDS: Mapping[str, BodyPolicy] = MappingProxyType(
    {
        "title": BodyPolicy.PARAGRAPHS,
        "h1": BodyPolicy.PARAGRAPHS,
        "h2": BodyPolicy.PARAGRAPHS,
        "h3": BodyPolicy.PARAGRAPHS,
        "h4": BodyPolicy.PARAGRAPHS,
        "h5": BodyPolicy.PARAGRAPHS,
        "h6": BodyPolicy.PARAGRAPHS,
        "p": BodyPolicy.PARAGRAPHS,
        "aside": BodyPolicy.PARAGRAPHS,
        "blockquote": BodyPolicy.PARAGRAPHS,
        "bookmark": BodyPolicy.PARAGRAPHS,
        "footnote": BodyPolicy.PARAGRAPHS,
        "hr": BodyPolicy.PARAGRAPHS,
        "image": BodyPolicy.PARAGRAPHS,
        "note": BodyPolicy.PARAGRAPHS,
        "reference": BodyPolicy.PARAGRAPHS,
        "subtitle": BodyPolicy.PARAGRAPHS,
        "vimeo": BodyPolicy.PARAGRAPHS,
        "warning": BodyPolicy.PARAGRAPHS,
        "youtube": BodyPolicy.PARAGRAPHS,
        "code": BodyPolicy.CODE,
        "css": BodyPolicy.CODE,
        "pre": BodyPolicy.CODE,
        "script": BodyPolicy.CODE,
        "list": BodyPolicy.LIST,
        "notes": BodyPolicy.LIST,
        "warnings": BodyPolicy.LIST,
        "metadata": BodyPolicy.ATTRIBUTES,
        "categories": BodyPolicy.ATTRIBUTES,
        "group": BodyPolicy.ATTRIBUTES,
    }
)


@dataclass
class Section:
    """A section while it is being tokenized.

    Attributes:
        name: The section keyword.
        policy: Body policy selected by the keyword.
        start: Offset of the section's decorator.
        attributes: Attributes from the header area.
        tokens: All tokens of the section, separators included.
    """

    name: str
    policy: BodyPolicy
    start: int
    attributes: list[Attribute] = field(default_factory=list)
    tokens: list[Token] = field(default_factory=list)


@dataclass(frozen=True)
class SectionMatch:
    """Outcome of parsing one section.

    Attributes:
        section: The section, or None if no keyword was recognized.
        end: Offset where parsing stopped.
        error: The failure that stopped the section, if any. Tokens gathered
            before the failure are kept in ``section``.
        separated: True if a blank line after the section was consumed.
    """

    section: Section | None
    end: int
    error: ParseError | None = None
    separated: bool = False

    @property
    def tokens(self) -> list[Token]:
        """Output tokens of the section, separators removed."""
        if self.section is None:
            return []
        return emitted(self.section.tokens)


def parse_section(
    source: str,
    pos: int,
    keywords: Mapping[str, BodyPolicy] = SECTION_KEYWORDS,
) -> SectionMatch:
    """Parse the section starting at ``pos``.

    Args:
        source: Full document text.
        pos: Offset where the section header should start.
        keywords: Keyword to body policy table.

    Returns:
        A SectionMatch. On failure ``error`` is set and ``end`` is the offset
        of the failure.
    """
    return _SectionParser(source, keywords).parse(pos)


# ################
# Implementation
# ################


class _SectionParser:
    """Parses one section; holds no state beyond the source and keyword table."""

    def __init__(self, source: str, keywords: Mapping[str, BodyPolicy]) -> None:
        self._source = source
        self._keywords = keywords

    def parse(self, pos: int) -> SectionMatch:
        source = self._source
        decorator = match_decorator(source, pos)
        if decorator is None:
            return _failed(None, ErrorKind.EXPECTED_SECTION, pos, "expected section header '-- <name>'")

        name_start = decorator.end
        name_end = word_end(source, name_start)
        name = source[name_start:name_end]
        policy = self._keywords.get(name)
        if policy is None:
            message = f"unrecognized section keyword {name!r}" if name else "missing section keyword"
            return _failed(None, ErrorKind.UNRECOGNIZED_KEYWORD, name_start, message)

        section = Section(name=name, policy=policy, start=pos)
        section.tokens.extend(decorator.tokens)
        section.tokens.append(Token(TokenKind.CLASS, name, name_start, name_end))

        line_end = match_line_end(source, name_end)
        if line_end is None:
            return _failed(
                section,
                ErrorKind.UNEXPECTED_TEXT,
                skip_hspace(source, name_end),
                f"unexpected text after section keyword {name!r}",
            )
        section.tokens.extend(line_end.tokens)

        block = match_attribute_block(source, line_end.end)
        section.attributes.extend(block.attributes)
        section.tokens.extend(block.tokens)
        if block.malformed_at is not None:
            return _failed(
                section,
                ErrorKind.MALFORMED_ATTRIBUTE,
                block.malformed_at,
                "malformed attribute, expected '<key>: <value>' or '<flag>'",
            )

        end = block.end
        if policy is not BodyPolicy.ATTRIBUTES:
            gap = match_blank_gap(source, end)
            if gap is None:
                return _failed(
                    section,
                    ErrorKind.MISSING_SEPARATOR,
                    end,
                    f"expected blank line before the body of '{name}' section",
                )
            body = self._body(section, gap.end)
            if isinstance(body, ParseError):
                return SectionMatch(section, body.offset, body)
            if body.tokens:
                section.tokens.extend(gap.tokens)
                section.tokens.extend(body.tokens)
                end = body.end

        trailing = match_blank_gap(source, end)
        if trailing is None:
            return SectionMatch(section, end)
        section.tokens.extend(trailing.tokens)
        return SectionMatch(section, trailing.end, separated=True)

    # ------------------------------------------------------------------
    # Bodies
    # ------------------------------------------------------------------

    def _body(self, section: Section, pos: int) -> Match | ParseError:
        """Dispatch on the section's body policy."""
        if section.policy is BodyPolicy.LIST:
            return self._list_items(section, pos)
        run = match_paragraph_run(self._source, pos)
        if run is None:
            return ParseError(
                ErrorKind.EMPTY_BODY,
                pos,
                f"expected paragraph text in '{section.name}' section",
            )
        return run

    def _list_items(self, section: Section, pos: int) -> Match | ParseError:
        """Match zero or more list items separated by blank lines.

        Items gathered before a failing item are added to the section so they
        still get highlighted.
        """
        first = self._list_item(pos)
        if first is None:
            return Match([], pos)
        if isinstance(first, ParseError):
            return first

        tokens = list(first.tokens)
        end = first.end
        while True:
            gap = match_blank_gap(self._source, end)
            if gap is None:
                break
            item = self._list_item(gap.end)
            if item is None:
                break
            if isinstance(item, ParseError):
                section.tokens.extend(tokens)
                return item
            tokens.extend(gap.tokens)
            tokens.extend(item.tokens)
            end = item.end
        return Match(tokens, end)

    def _list_item(self, pos: int) -> Match | ParseError | None:
        """Match ``- `` followed by a paragraph run; None if there is no bullet."""
        bullet = match_bullet(self._source, pos)
        if bullet is None:
            return None
        run = match_paragraph_run(self._source, bullet.end, stop_at_bullet=True)
        if run is None:
            return ParseError(ErrorKind.EMPTY_BODY, bullet.end, "expected text after list bullet")
        return Match(bullet.tokens + run.tokens, run.end)


def _failed(section: Section | None, kind: ErrorKind, offset: int, message: str) -> SectionMatch:
    return SectionMatch(section, offset, ParseError(kind, offset, message))
