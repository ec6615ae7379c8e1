# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the section grammar."""

import pytest

from neotoken.parser.attributes import Attribute
from neotoken.parser.errors import ErrorKind
from neotoken.parser.lexer import Token, TokenKind
from neotoken.parser.sections import SECTION_KEYWORDS, BodyPolicy, SectionMatch, parse_section

# ###############
# Test Helpers
# ###############


def _decorator(start: int) -> Token:
    return Token(TokenKind.DECORATOR, "--", start, start + 2)


def _class(text: str, start: int) -> Token:
    return Token(TokenKind.CLASS, text, start, start + len(text))


def _comment(text: str, start: int, end: int) -> Token:
    return Token(TokenKind.COMMENT, text, start, end)


def _string(text: str, start: int, end: int) -> Token:
    return Token(TokenKind.STRING, text, start, end)


def _bullet(start: int) -> Token:
    return Token(TokenKind.LIST_BULLET, "-", start, start + 1)


def _parse_ok(source: str, pos: int = 0) -> SectionMatch:
    match = parse_section(source, pos)
    assert match.error is None, match.error
    assert match.section is not None
    return match


def _texts(tokens: list[Token]) -> list[str]:
    return [tok.text for tok in tokens]


# ###############
# Keyword Table
# ###############


class TestKeywordTable:
    @pytest.mark.parametrize(
        ("keyword", "policy"),
        [
            ("title", BodyPolicy.PARAGRAPHS),
            ("h6", BodyPolicy.PARAGRAPHS),
            ("youtube", BodyPolicy.PARAGRAPHS),
            ("pre", BodyPolicy.CODE),
            ("script", BodyPolicy.CODE),
            ("notes", BodyPolicy.LIST),
            ("metadata", BodyPolicy.ATTRIBUTES),
            ("group", BodyPolicy.ATTRIBUTES),
        ],
    )
    def test_builtin_keywords(self, keyword: str, policy: BodyPolicy) -> None:
        assert SECTION_KEYWORDS[keyword] is policy

    def test_table_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            SECTION_KEYWORDS["custom"] = BodyPolicy.CODE  # type: ignore[index]

    def test_every_policy_is_used(self) -> None:
        assert set(SECTION_KEYWORDS.values()) == set(BodyPolicy)


# ###############
# Paragraph Sections
# ###############


class TestParagraphSection:
    def test_title(self) -> None:
        match = _parse_ok("-- title\n\nAlfa")
        assert match.tokens == [
            _decorator(0),
            _class("title", 3),
            _string("A", 10, 11),
            _string("lfa", 11, 14),
        ]
        assert match.end == 14
        assert not match.separated

    def test_section_record(self) -> None:
        match = _parse_ok("-- h1\n\nAlfa")
        assert match.section is not None
        assert match.section.name == "h1"
        assert match.section.policy is BodyPolicy.PARAGRAPHS
        assert match.section.start == 0
        assert match.section.attributes == []

    def test_boolean_attribute(self) -> None:
        match = _parse_ok("-- h1\n-- b\n\nAlfa")
        assert match.tokens == [
            _decorator(0),
            _class("h1", 3),
            _decorator(6),
            _comment("b", 9, 10),
            _string("A", 12, 13),
            _string("lfa", 13, 16),
        ]
        assert match.section is not None
        assert match.section.attributes == [Attribute("b")]

    def test_several_attributes(self) -> None:
        match = _parse_ok("-- image\n-- src: a.png\n-- inline\n\nCaption")
        assert match.section is not None
        assert match.section.attributes == [Attribute("src", "a.png"), Attribute("inline")]
        assert _texts(match.tokens)[-2:] == ["C", "aption"]

    def test_multiple_paragraphs(self) -> None:
        match = _parse_ok("-- p\n\nalfa bravo\n\ncharlie")
        assert _texts(match.tokens) == ["--", "p", "a", "lfa", "b", "ravo", "c", "harlie"]

    def test_trailing_spaces_after_keyword(self) -> None:
        match = _parse_ok("-- title   \n\nAlfa")
        assert match.tokens[-2:] == [_string("A", 13, 14), _string("lfa", 14, 17)]

    def test_trailing_blank_line_marks_section_separated(self) -> None:
        match = _parse_ok("-- title\n\nAlfa\n\n-- h2")
        assert match.separated
        assert match.end == 16

    def test_parse_from_offset(self) -> None:
        match = _parse_ok("-- title\n\nAlfa\n\n-- h2\n\nBravo", 16)
        assert match.tokens[:2] == [_decorator(16), _class("h2", 19)]


# ###############
# Code Sections
# ###############


class TestCodeSection:
    def test_body_is_tokenized_as_words(self) -> None:
        match = _parse_ok("-- code\n\n<bar> baz")
        assert match.tokens[2:] == [
            _string("<", 9, 10),
            _string("b", 10, 11),
            _string("ar>", 11, 14),
            _string("b", 15, 16),
            _string("az", 16, 18),
        ]


# ###############
# List Sections
# ###############


class TestListSection:
    def test_single_item(self) -> None:
        match = _parse_ok("-- list\n\n- Alfa")
        assert match.tokens == [
            _decorator(0),
            _class("list", 3),
            _bullet(9),
            _string("A", 11, 12),
            _string("lfa", 12, 15),
        ]

    def test_two_items(self) -> None:
        match = _parse_ok("-- list\n\n- Alfa\n\n- Bravo")
        assert match.tokens[5:] == [_bullet(17), _string("B", 19, 20), _string("ravo", 20, 24)]
        assert match.end == 24

    def test_item_with_several_paragraphs(self) -> None:
        match = _parse_ok("-- notes\n\n- alfa\n\n  bravo\n\n- charlie")
        kinds = [tok.kind for tok in match.tokens]
        assert kinds.count(TokenKind.LIST_BULLET) == 2
        assert _texts(match.tokens[2:]) == ["-", "a", "lfa", "b", "ravo", "-", "c", "harlie"]

    def test_empty_list_is_allowed(self) -> None:
        match = _parse_ok("-- list\n\n-- title\n\nAlfa")
        assert match.tokens == [_decorator(0), _class("list", 3)]
        assert match.end == 9
        assert match.separated

    def test_empty_item_is_an_error(self) -> None:
        match = parse_section("-- list\n\n- \n\nx", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.EMPTY_BODY
        assert match.error.offset == 11

    def test_items_before_failing_item_are_kept(self) -> None:
        match = parse_section("-- list\n\n- a\n\n- ", 0)
        assert match.error is not None
        assert match.error.offset == 16
        assert match.tokens == [_decorator(0), _class("list", 3), _bullet(9), _string("a", 11, 12)]


# ###############
# Attribute-only Sections
# ###############


class TestAttributeSection:
    def test_metadata(self) -> None:
        match = _parse_ok("-- metadata\n-- id: asdf")
        assert match.tokens == [
            _decorator(0),
            _class("metadata", 3),
            _decorator(12),
            _comment("id", 15, 17),
            _comment(":", 17, 18),
            _comment("asdf", 19, 23),
        ]
        assert match.end == 23

    def test_no_attributes(self) -> None:
        match = _parse_ok("-- metadata\n\n-- title")
        assert match.tokens == [_decorator(0), _class("metadata", 3)]
        assert match.end == 13
        assert match.separated

    def test_followed_by_section(self) -> None:
        match = _parse_ok("-- metadata\n-- id: a\n\n-- title\n\nAlfa")
        assert match.end == 22
        assert match.separated

    def test_text_after_attributes_is_not_consumed(self) -> None:
        match = _parse_ok("-- metadata\n-- id: a\nAlfa")
        assert match.end == 20
        assert not match.separated


# ###############
# Failures
# ###############


class TestSectionFailures:
    def test_unrecognized_keyword(self) -> None:
        match = parse_section("-- bogus\n\nAlfa", 0)
        assert match.section is None
        assert match.tokens == []
        assert match.error is not None
        assert match.error.kind is ErrorKind.UNRECOGNIZED_KEYWORD
        assert match.error.offset == 3
        assert "bogus" in match.error.message

    def test_keyword_must_match_whole_word(self) -> None:
        match = parse_section("-- titles\n\nAlfa", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.UNRECOGNIZED_KEYWORD

    def test_missing_keyword(self) -> None:
        match = parse_section("-- \n\nAlfa", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.UNRECOGNIZED_KEYWORD
        assert match.error.message == "missing section keyword"

    def test_not_a_header(self) -> None:
        match = parse_section("Alfa", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.EXPECTED_SECTION
        assert match.error.offset == 0

    def test_text_after_keyword(self) -> None:
        match = parse_section("-- title x\n\nAlfa", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.UNEXPECTED_TEXT
        assert match.error.offset == 9
        assert match.tokens == [_decorator(0), _class("title", 3)]

    def test_missing_blank_line_before_body(self) -> None:
        match = parse_section("-- title\nAlfa", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.MISSING_SEPARATOR
        assert match.error.offset == 8

    def test_empty_body(self) -> None:
        match = parse_section("-- title\n\n", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.EMPTY_BODY
        assert match.error.offset == 10

    def test_body_cannot_start_with_header(self) -> None:
        match = parse_section("-- title\n\n-- h2\n\nBravo", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.EMPTY_BODY

    def test_malformed_attribute(self) -> None:
        match = parse_section("-- title\n-- \n\nAlfa", 0)
        assert match.error is not None
        assert match.error.kind is ErrorKind.MALFORMED_ATTRIBUTE
        assert match.error.offset == 12
        assert match.tokens == [_decorator(0), _class("title", 3)]


# ###############
# Custom Keywords
# ###############


class TestCustomKeywords:
    def test_custom_table(self) -> None:
        match = parse_section("-- callout\n\nHi", 0, {"callout": BodyPolicy.PARAGRAPHS})
        assert match.error is None
        assert match.tokens == [_decorator(0), _class("callout", 3), _string("H", 12, 13), _string("i", 13, 14)]

    def test_custom_table_replaces_builtin(self) -> None:
        match = parse_section("-- title\n\nAlfa", 0, {"callout": BodyPolicy.PARAGRAPHS})
        assert match.error is not None
        assert match.error.kind is ErrorKind.UNRECOGNIZED_KEYWORD
