from hilite.lexer import Config, Rules, new_lexer
from hilite.mutators import Rule
from hilite.remap import RemappingLexer, TypeMapping, type_remapping_lexer
from hilite.types import Token, TokenType


def _words_lexer():
    return new_lexer(
        None,
        lambda: Rules(
            {
                "root": [
                    Rule(r"\s+", TokenType.WHITESPACE),
                    Rule(r"\w+", TokenType.NAME),
                ]
            }
        ),
    )


def test_remapping_lexer():
    lexer = type_remapping_lexer(
        _words_lexer(),
        [TypeMapping(TokenType.NAME, TokenType.KEYWORD, ("if", "else"))],
    )
    actual = list(lexer.tokenise(None, "if true then print else end"))
    ws = TokenType.TEXT_WHITESPACE
    expected = [
        Token(TokenType.KEYWORD, "if"), Token(ws, " "), Token(TokenType.NAME, "true"),
        Token(ws, " "), Token(TokenType.NAME, "then"), Token(ws, " "),
        Token(TokenType.NAME, "print"), Token(ws, " "), Token(TokenType.KEYWORD, "else"),
        Token(ws, " "), Token(TokenType.NAME, "end"),
    ]
    assert actual == expected


def test_mapping_without_words_remaps_all():
    lexer = type_remapping_lexer(
        _words_lexer(),
        [TypeMapping(TokenType.NAME, TokenType.NAME_FUNCTION)],
    )
    actual = list(lexer.tokenise(None, "a b"))
    assert actual == [
        Token(TokenType.NAME_FUNCTION, "a"),
        Token(TokenType.TEXT_WHITESPACE, " "),
        Token(TokenType.NAME_FUNCTION, "b"),
    ]


def test_specific_words_take_precedence_over_catch_all():
    lexer = type_remapping_lexer(
        _words_lexer(),
        [
            TypeMapping(TokenType.NAME, TokenType.NAME_FUNCTION),
            TypeMapping(TokenType.NAME, TokenType.KEYWORD, ("if",)),
        ],
    )
    actual = [t.type for t in lexer.tokenise(None, "if x")]
    assert actual == [TokenType.KEYWORD, TokenType.TEXT_WHITESPACE, TokenType.NAME_FUNCTION]


def test_mapper_can_drop_and_split_tokens():
    def mapper(token):
        if token.type == TokenType.TEXT_WHITESPACE:
            return []
        return [Token(token.type, c) for c in token.value]

    lexer = RemappingLexer(_words_lexer(), mapper)
    actual = list(lexer.tokenise(None, "ab c"))
    assert actual == [
        Token(TokenType.NAME, "a"),
        Token(TokenType.NAME, "b"),
        Token(TokenType.NAME, "c"),
    ]


def test_delegates_config_and_analyser():
    inner = new_lexer(Config(name="Inner"), lambda: Rules({"root": [Rule(r".+", TokenType.TEXT)]}))
    lexer = RemappingLexer(inner, lambda t: [t])
    assert lexer.set_analyser(lambda text: 0.75) is lexer
    assert lexer.analyse_text("x") == 0.75
    assert lexer.config.name == "Inner"
    marker = object()
    assert lexer.set_registry(marker) is lexer
    assert inner.registry is marker