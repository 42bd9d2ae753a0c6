import pytest

from hilite.types import (
    EOF,
    STANDARD_TYPES,
    Token,
    TokenType,
    token_type_from_string,
    token_type_strings,
    token_type_values,
)


def test_values_fixed_by_source():
    assert token_type_from_string("NameVariable") == 2200
    assert token_type_from_string("Ignore") == -14
    assert token_type_from_string("TextPunctuation") == 8003


def test_labels():
    assert str(token_type_from_string("namevariable")) == "NameVariable"
    assert str(token_type_from_string("linetabletd")) == "LineTableTD"
    assert str(token_type_from_string("eoftype")) == "EOFType"
    assert f"{token_type_from_string('textwhitespace')}" == "TextWhitespace"


def test_aliases_share_members():
    assert token_type_from_string("TextWhitespace") is TokenType.WHITESPACE
    assert token_type_from_string("LiteralString") is TokenType.STRING
    assert token_type_from_string("LiteralNumberOct") is TokenType.NUMBER_OCT


def test_from_string_exact_and_lowercase():
    assert token_type_from_string("NameVariable") is TokenType.NAME_VARIABLE
    assert token_type_from_string("namevariable") is TokenType.NAME_VARIABLE
    assert token_type_from_string("NAMEVARIABLE") is TokenType.NAME_VARIABLE


def test_from_string_unknown():
    with pytest.raises(ValueError, match="does not belong to TokenType values"):
        token_type_from_string("Bogus")


def test_string_round_trip():
    for value in token_type_values():
        assert token_type_from_string(str(value)) is value


def test_values_ascending_without_aliases():
    values = token_type_values()
    assert values[0] is TokenType.IGNORE
    assert values[-1] is TokenType.TEXT_PUNCTUATION
    assert values == sorted(values)
    assert len(values) == len(set(values))


def test_strings_match_values():
    assert token_type_strings() == [str(v) for v in token_type_values()]


def test_parent():
    assert TokenType.NAME_VARIABLE_GLOBAL.parent() is TokenType.NAME_VARIABLE
    assert TokenType.NAME_VARIABLE.parent() is TokenType.NAME
    assert TokenType.NAME.parent() is TokenType.EOF_TYPE
    assert TokenType.IGNORE.parent() is TokenType.EOF_TYPE


def test_category_and_sub_category():
    assert TokenType.LITERAL_STRING_DOUBLE.category() is TokenType.LITERAL
    assert TokenType.LITERAL_STRING_DOUBLE.sub_category() is TokenType.LITERAL_STRING
    assert TokenType.COMMENT_PREPROC_FILE.category() is TokenType.COMMENT
    assert TokenType.BACKGROUND.category() is TokenType.EOF_TYPE


def test_in_category():
    assert TokenType.KEYWORD_TYPE.in_category(TokenType.KEYWORD)
    assert not TokenType.KEYWORD_TYPE.in_category(TokenType.NAME)
    assert TokenType.NAME_BUILTIN_PSEUDO.in_sub_category(TokenType.NAME_BUILTIN)
    assert not TokenType.NAME_BUILTIN.in_sub_category(TokenType.NAME)


def test_emit():
    emitted = list(TokenType.KEYWORD.emit(["if", "i"], None))
    assert emitted == [Token(TokenType.KEYWORD, "if")]
    assert TokenType.KEYWORD.emitter_kind() == "token"


def test_eof_token():
    assert EOF == Token(TokenType.EOF_TYPE, "")


def test_standard_types():
    assert STANDARD_TYPES[token_type_from_string("NameVariable")] == "nv"
    assert STANDARD_TYPES[token_type_from_string("TextWhitespace")] == "w"
    assert STANDARD_TYPES[token_type_from_string("PreWrapper")] == "chroma"