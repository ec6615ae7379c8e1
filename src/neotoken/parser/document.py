# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Document-level tokenizer.

A document is a sequence of sections separated by blank lines. A section that
fails to parse is recorded as an error and skipped, so one mistake only costs
the highlighting of the region around it.
"""

import dataclasses
import enum
from collections.abc import Mapping
from typing import NamedTuple

from neotoken.parser.errors import ErrorKind, ParseError
from neotoken.parser.lexer import DECORATOR, ByteOffsets, Token, match_blank_line, skip_hspace
from neotoken.parser.sections import SECTION_KEYWORDS, BodyPolicy, parse_section
from neotoken.utils.logger import get_logger

logger = get_logger(__name__)

# ###############
# Public Interface
# ###############


class ParseStatus(enum.Enum):
    """Overall outcome of tokenizing a document."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class ParseResult(NamedTuple):
    """Tokens and diagnostics of one document.

    Attributes:
        tokens: Output tokens in source order.
        errors: Grammar failures in source order; empty on a clean parse.
    """

    tokens: list[Token]
    errors: list[ParseError]

    @property
    def status(self) -> ParseStatus:
        """SUCCESS without errors, PARTIAL with errors and tokens, FAILED otherwise."""
        if not self.errors:
            return ParseStatus.SUCCESS
        if self.tokens:
            return ParseStatus.PARTIAL
        return ParseStatus.FAILED


def tokenize(source: str, keywords: Mapping[str, BodyPolicy] | None = None) -> ParseResult:
    """Tokenize a neopolitan document for semantic highlighting.

    Never raises on malformed input: failures are returned as errors together
    with the tokens of every section that could be read. Token spans and error
    offsets are UTF-8 byte offsets into the document.

    Args:
        source: The full document text.
        keywords: Section keyword table; defaults to the built-in keywords.

    Returns:
        A ParseResult with the output tokens and any errors.
    """
    table = SECTION_KEYWORDS if keywords is None else keywords
    return _DocumentParser(source, table).parse()


# ################
# Implementation
# ################


class _DocumentParser:
    """Walks the document one section at a time."""

    def __init__(self, source: str, keywords: Mapping[str, BodyPolicy]) -> None:
        self._source = source
        self._keywords = keywords
        self._offsets = ByteOffsets(source)
        self._tokens: list[Token] = []
        self._errors: list[ParseError] = []

    def parse(self) -> ParseResult:
        """Parse every section and return the collected tokens and errors."""
        source = self._source
        pos = _skip_whitespace(source, 0)
        while pos < len(source):
            match = parse_section(source, pos, self._keywords)
            self._tokens.extend(self._offsets.token(tok) for tok in match.tokens)

            if match.error is not None:
                self._record(match.error)
                pos = self._resync(match.error.offset, pos)
                continue

            assert match.section is not None
            logger.debug(
                "Matched '%s' section at offset %d-%d",
                match.section.name,
                match.section.start,
                match.end,
            )
            section_start = pos
            pos = match.end
            rest = _skip_whitespace(source, pos)
            if rest >= len(source):
                break
            if not match.separated:
                self._record(
                    ParseError(
                        ErrorKind.MISSING_SEPARATOR,
                        rest,
                        f"expected blank line after '{match.section.name}' section",
                    )
                )
                pos = self._resync(rest, section_start)

        return ParseResult(self._tokens, self._errors)

    def _record(self, error: ParseError) -> None:
        error = dataclasses.replace(error, offset=self._offsets[error.offset])
        logger.debug("Recorded %s at offset %d: %s", error.kind.value, error.offset, error.message)
        self._errors.append(error)

    def _resync(self, offset: int, section_start: int) -> int:
        """Return the offset to resume section matching after an error.

        A section header at the start of the failing line is retried directly;
        otherwise everything up to the next blank line is skipped.
        """
        source = self._source
        if offset > section_start and _at_line_start(source, offset) and source.startswith(DECORATOR, offset):
            logger.debug("Resuming at section header at offset %d", offset)
            return offset

        pos = offset
        while pos < len(source):
            blank = match_blank_line(source, pos)
            if blank is not None:
                resume = skip_hspace(source, blank.end)
                logger.debug("Skipped offsets %d-%d after error", offset, resume)
                return resume
            pos += 1
        return len(source)


def _skip_whitespace(source: str, pos: int) -> int:
    while pos < len(source) and source[pos] in " \t\r\n":
        pos += 1
    return pos


def _at_line_start(source: str, pos: int) -> bool:
    return pos == 0 or source[pos - 1] in "\r\n"
