# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Paragraph assembly: words joined into paragraphs, paragraphs into runs."""

from neotoken.parser.lexer import (
    DECORATOR,
    Match,
    match_blank_gap,
    match_bullet,
    match_newline,
    match_word,
    separator_match,
    skip_hspace,
)

# ###############
# Public Interface
# ###############


def match_word_break(source: str, pos: int) -> Match | None:
    """Match the whitespace between two words of one paragraph.

    Spaces and tabs, at most one line break, and the indentation after it.
    Never spans an empty line.
    """
    end = skip_hspace(source, pos)
    newline = match_newline(source, end)
    if newline is not None:
        end = skip_hspace(source, newline.end)
    if end == pos:
        return None
    return separator_match(source, pos, end)


def match_paragraph(source: str, pos: int, *, stop_at_bullet: bool = False) -> Match | None:
    """Match one paragraph: a word followed by any number of (break, word) pairs.

    A paragraph never starts with ``--``, so it cannot swallow the header of
    the following section.

    Args:
        source: Full document text.
        pos: Offset where the paragraph should start.
        stop_at_bullet: Also refuse to start at a list bullet (``-`` and a space).

    Returns:
        The paragraph's tokens, or None if no paragraph starts at ``pos``.
    """
    if source.startswith(DECORATOR, pos):
        return None
    if stop_at_bullet and match_bullet(source, pos) is not None:
        return None
    first = match_word(source, pos)
    if first is None:
        return None

    tokens = list(first.tokens)
    end = first.end
    while True:
        gap = match_word_break(source, end)
        if gap is None:
            break
        word = match_word(source, gap.end)
        if word is None:
            break
        tokens.extend(gap.tokens)
        tokens.extend(word.tokens)
        end = word.end
    return Match(tokens, end)


def match_paragraph_run(source: str, pos: int, *, stop_at_bullet: bool = False) -> Match | None:
    """Match one or more paragraphs separated by blank lines.

    Returns None if not even one paragraph starts at ``pos``. A trailing blank
    line that is not followed by another paragraph is left unconsumed.
    """
    first = match_paragraph(source, pos, stop_at_bullet=stop_at_bullet)
    if first is None:
        return None

    tokens = list(first.tokens)
    end = first.end
    while True:
        gap = match_blank_gap(source, end)
        if gap is None:
            break
        paragraph = match_paragraph(source, gap.end, stop_at_bullet=stop_at_bullet)
        if paragraph is None:
            break
        tokens.extend(gap.tokens)
        tokens.extend(paragraph.tokens)
        end = paragraph.end
    return Match(tokens, end)
