# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Grammar and tokenizer for neopolitan documents."""

from neotoken.parser.attributes import Attribute
from neotoken.parser.document import ParseResult, ParseStatus, tokenize
from neotoken.parser.errors import ErrorKind, ParseError
from neotoken.parser.lexer import Token, TokenKind
from neotoken.parser.sections import SECTION_KEYWORDS, BodyPolicy, Section

__all__ = [
    "Attribute",
    "BodyPolicy",
    "ErrorKind",
    "ParseError",
    "ParseResult",
    "ParseStatus",
    "SECTION_KEYWORDS",
    "Section",
    "Token",
    "TokenKind",
    "tokenize",
]
