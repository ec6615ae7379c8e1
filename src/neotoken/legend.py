# Copyright 2026 Neotoken Contributors
# SPDX-License-Identifier: Apache-2.0

"""Token kind legend for editor protocols.

Editors identify semantic token types by their index in a legend announced
when the session starts. The legend is a value handed to the encoder, so one
process can serve clients with different legends.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from neotoken.parser.lexer import Token, TokenKind

# ###############
# Public Interface
# ###############

DEFAULT_LEGEND: tuple[TokenKind, ...] = (
    TokenKind.CLASS,
    TokenKind.COMMENT,
    TokenKind.DECORATOR,
    TokenKind.ENUM,
    TokenKind.ENUM_MEMBER,
    TokenKind.EVENT,
    TokenKind.FUNCTION,
    TokenKind.INTERFACE,
    TokenKind.KEYWORD,
    TokenKind.MACRO,
    TokenKind.METHOD,
    TokenKind.MODIFIER,
    TokenKind.NAMESPACE,
    TokenKind.NUMBER,
    TokenKind.OPERATOR,
    TokenKind.PARAMETER,
    TokenKind.PROPERTY,
    TokenKind.REGEXP,
    TokenKind.STRING,
    TokenKind.STRUCT,
    TokenKind.TYPE,
    TokenKind.TYPE_PARAMETER,
    TokenKind.VARIABLE,
    TokenKind.LIST_BULLET,
)


@dataclass(frozen=True)
class SemanticToken:
    """A token as the editor sees it: position, length and legend index."""

    start: int
    length: int
    token_type: int


class Legend:
    """An ordered set of token kinds.

    Args:
        kinds: Kinds in legend order. Defaults to DEFAULT_LEGEND.

    Raises:
        ValueError: If a kind appears twice or the internal WHITESPACE kind is listed.
    """

    def __init__(self, kinds: Sequence[TokenKind] = DEFAULT_LEGEND) -> None:
        self._kinds = tuple(kinds)
        self._indices: dict[TokenKind, int] = {}
        for index, kind in enumerate(self._kinds):
            if not kind.is_emitted:
                raise ValueError(f"Token kind {kind.value!r} cannot be part of a legend")
            if kind in self._indices:
                raise ValueError(f"Duplicate token kind {kind.value!r} in legend")
            self._indices[kind] = index

    @property
    def names(self) -> list[str]:
        """Protocol names of the kinds, in legend order."""
        return [kind.value for kind in self._kinds]

    def index(self, kind: TokenKind) -> int | None:
        """Return the legend index of ``kind``, or None if it is not in the legend."""
        return self._indices.get(kind)

    def encode(self, tokens: Iterable[Token]) -> list[SemanticToken]:
        """Map tokens to legend indices, skipping kinds the legend does not list."""
        encoded: list[SemanticToken] = []
        for tok in tokens:
            index = self._indices.get(tok.kind)
            if index is None:
                continue
            encoded.append(SemanticToken(start=tok.start, length=tok.length, token_type=index))
        return encoded

    def __len__(self) -> int:
        return len(self._kinds)

    def __repr__(self) -> str:
        return f"Legend({self.names!r})"
