from dataclasses import dataclass, field

import pytest

from hilite.mutators import (
    CombinedMutator,
    IncludeMutator,
    MultiMutator,
    PopMutator,
    PushMutator,
    Rule,
    combined,
    default,
    include,
    mutators,
    pop,
    push,
    stringify,
)
from hilite.types import Token, TokenType


@dataclass
class _State:
    stack: list = field(default_factory=list)
    state: str = "root"


def test_include():
    rule = include("other")
    actual = {
        "root": [rule],
        "other": [
            Rule("//.+", TokenType.COMMENT),
            Rule('"[^"]*"', TokenType.STRING),
        ],
    }
    rule.mutator.mutate_lexer(actual, "root", 0)
    expected = {
        "root": [
            Rule("//.+", TokenType.COMMENT),
            Rule('"[^"]*"', TokenType.STRING),
        ],
        "other": [
            Rule("//.+", TokenType.COMMENT),
            Rule('"[^"]*"', TokenType.STRING),
        ],
    }
    assert actual == expected


def test_include_invalid_state():
    rules = {"root": [include("missing")]}
    with pytest.raises(ValueError, match="invalid include state"):
        rules["root"][0].mutator.mutate_lexer(rules, "root", 0)


def test_include_mutate_is_unreachable():
    with pytest.raises(RuntimeError):
        IncludeMutator("string").mutate(_State())


def test_combine():
    rules = {
        "root": [Rule("hello", TokenType.STRING, combined("world", "bye", "space"))],
        "world": [Rule("world", TokenType.NAME)],
        "bye": [Rule("bye", TokenType.NAME)],
        "space": [Rule(r"\s+", TokenType.WHITESPACE)],
    }
    rules["root"][0].mutator.mutate_lexer(rules, "root", 0)
    name = "__combined_world__bye__space"
    assert rules[name] == [
        Rule("world", TokenType.NAME),
        Rule("bye", TokenType.NAME),
        Rule(r"\s+", TokenType.WHITESPACE),
    ]
    assert rules["root"][0].mutator == push(name)


def test_combine_invalid_state():
    rules = {"root": [Rule("x", TokenType.NAME, combined("nope"))]}
    with pytest.raises(ValueError, match="invalid combine state"):
        rules["root"][0].mutator.mutate_lexer(rules, "root", 0)


def test_combined_mutate_is_unreachable():
    with pytest.raises(RuntimeError):
        CombinedMutator(["a"]).mutate(_State())


def test_push_states():
    state = _State(stack=["root"])
    push("a", "b").mutate(state)
    assert state.stack == ["root", "a", "b"]


def test_push_without_states_repushes_current():
    state = _State(stack=["root"], state="root")
    push().mutate(state)
    assert state.stack == ["root", "root"]


def test_push_pop_marker():
    state = _State(stack=["root", "x"])
    push("#pop", "y").mutate(state)
    assert state.stack == ["root", "y"]


def test_pop():
    state = _State(stack=["root", "a", "b"])
    pop(2).mutate(state)
    assert state.stack == ["root"]


def test_pop_empty_stack():
    with pytest.raises(IndexError, match="nothing to pop"):
        pop(1).mutate(_State())


def test_multi_mutator_applies_in_order():
    state = _State(stack=["root"])
    mutators(push("a"), push("b"), pop(1)).mutate(state)
    assert state.stack == ["root", "a"]


def test_default_rule():
    rule = default(push("quote"), pop(1))
    assert rule.pattern == ""
    assert rule.type is None
    assert rule.mutator == MultiMutator([PushMutator(["quote"]), PopMutator(1)])


def test_mutator_kinds():
    assert include("s").mutator.mutator_kind() == "include"
    assert combined("a", "b").mutator_kind() == "combined"
    assert mutators().mutator_kind() == "mutators"
    assert push("x").mutator_kind() == "push"
    assert pop(1).mutator_kind() == "pop"


def test_stringify():
    tokens = [Token(TokenType.KEYWORD, "if"), Token(TokenType.WHITESPACE, " "), Token(TokenType.NAME, "x")]
    assert stringify(*tokens) == "if x"
    assert stringify() == ""