"""Lexers that rewrite the tokens produced by another lexer."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator

from hilite.types import Token, TokenType


class RemappingLexer:
    """Wraps a lexer and maps each token it emits to zero or more tokens."""

    def __init__(self, lexer: Any, mapper: Callable[[Token], list[Token]]) -> None:
        self.lexer = lexer
        self.mapper = mapper

    def __str__(self) -> str:
        return str(self.lexer)

    @property
    def config(self) -> Any:
        return self.lexer.config

    @property
    def registry(self) -> Any:
        return self.lexer.registry

    def analyse_text(self, text: str) -> float:
        return self.lexer.analyse_text(text)

    def set_analyser(self, analyser: Callable[[str], float]) -> RemappingLexer:
        self.lexer.set_analyser(analyser)
        return self

    def set_registry(self, registry: Any) -> RemappingLexer:
        self.lexer.set_registry(registry)
        return self

    def tokenise(self, options: Any, text: str) -> Iterator[Token]:
        """Tokenise with the wrapped lexer, remapping every token."""
        tokens = self.lexer.tokenise(options, text)
        return self._remap(tokens)

    def _remap(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for token in tokens:
            yield from self.mapper(token)


@dataclass(frozen=True)
class TypeMapping:
    """Maps tokens of ``from_type`` to ``to_type``; with no words, all of them."""

    from_type: TokenType
    to_type: TokenType
    words: tuple[str, ...] = ()


def type_remapping_lexer(lexer: Any, mapping: Iterable[TypeMapping]) -> RemappingLexer:
    """Wrap ``lexer`` so token types are remapped according to ``mapping``."""
    table: dict[TokenType, dict[str, TokenType]] = {}
    for entry in mapping:
        by_word = table.setdefault(entry.from_type, {})
        if not entry.words:
            by_word[""] = entry.to_type
        else:
            for word in entry.words:
                by_word[word] = entry.to_type

    def mapper(token: Token) -> list[Token]:
        by_word = table.get(token.type)
        if by_word is not None:
            new_type = by_word.get(token.value, by_word.get(""))
            if new_type is not None:
                token = dataclasses.replace(token, type=new_type)
        return [token]

    return RemappingLexer(lexer, mapper)