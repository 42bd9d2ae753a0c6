# hilite

A small library for building regex-based lexers for syntax highlighting.

A lexer is a state machine. Each state holds an ordered list of rules; a rule
pairs a regular expression with an emitter (usually a `TokenType`) and,
optionally, a mutator that changes the state stack (`push`, `pop`, `include`,
`combined`). Lexing turns text into a stream of `Token` values, each with a
`type` and a `value`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Defining and running a lexer

```python
from hilite.lexer import Config, Rules, new_lexer, tokenise
from hilite.mutators import Rule, pop, push
from hilite.types import TokenType


def rules():
    return Rules({
        "root": [
            Rule(r"\s+", TokenType.TEXT_WHITESPACE),
            Rule(r"^-", TokenType.PUNCTUATION, push("directive")),
            Rule(r"->", TokenType.OPERATOR),
        ],
        "directive": [
            Rule(r"module", TokenType.NAME_ENTITY, pop(1)),
        ],
    })


lexer = new_lexer(Config(name="Example"), rules)
for token in tokenise(lexer, None, "-module ->"):
    print(token.type, repr(token.value))
```

This prints `Punctuation '-'`, `NameEntity 'module'`, `TextWhitespace ' '`
and `Operator '->'`.

- `new_lexer(config, rules_func)` checks the filename globs in `config` and
  returns a `RegexLexer`. The rules function is only called, and the patterns
  only compiled, the first time the lexer is used. A missing `"root"` state or
  a pattern that does not compile raises `ValueError`.
- `RegexLexer.tokenise(options, text)` returns an iterator of tokens;
  `tokenise(lexer, options, text)` collects them into a list.
- Text that no rule matches comes out as `TokenType.ERROR` tokens, one
  character at a time. A newline that no rule matches sends the lexer back to
  its starting state. If the state stack is emptied, the rest of the text is
  one `ERROR` token.
- Tokens of type `TokenType.IGNORE` are dropped from the output.
- `include(state)` splices the rules of another state in place of itself;
  `combined(*states)` builds an anonymous state from several states and pushes
  it; `push()` with no arguments pushes the current state again, and the name
  `"#pop"` inside `push(...)` pops one. `default(*mutators)` is a rule that
  applies mutators; `mutators(*mutators)` applies several in order.
- Within a rule's mutators, `LexerState.set(key, value)` and
  `LexerState.get(key)` keep per-lex context; `state.groups` and
  `state.named_groups` hold the current match.

`Config` fields: `name`, `aliases`, `filenames`, `alias_filenames`,
`mime_types`, `priority`, and the pattern flags `case_insensitive`, `dot_all`
and `not_multiline` (patterns are multiline unless this is set). With
`ensure_nl`, a newline is added to input that lacks one (not for nested
lexing).

`TokeniseOptions` fields: `state` (the starting state, `"root"`),
`ensure_lf` (on by default: `\r\n` and lone `\r` become `\n`, as
`ensure_lf(text)` does) and `nested`.

`Rules` is a `dict` with `clone()`, `merge(other)` and
`rename(old, new)`, each returning a new `Rules`.

`words(prefix, suffix, *words)` builds a pattern matching any of the given
literal words, longest first, with regex metacharacters escaped.

`RegexLexer.set_analyser(func)` sets a function scoring text between 0.0 and
1.0, used by `analyse_text`; `set_trace(True)` prints each step to standard
error.

## Token types

`TokenType` is an `IntEnum` grouped by category (thousands) and sub-category
(hundreds). Members are upper case (`TokenType.NAME_VARIABLE_GLOBAL`), with
short aliases such as `TokenType.STRING` and `TokenType.WHITESPACE`; `str()`
of a member gives its CamelCase name, such as `NameVariableGlobal`.

```python
TokenType.NAME_VARIABLE_GLOBAL.category()      # TokenType.NAME
TokenType.NAME_VARIABLE_GLOBAL.sub_category()  # TokenType.NAME_VARIABLE
TokenType.NAME_VARIABLE_GLOBAL.parent()        # TokenType.NAME_VARIABLE
```

`in_category(other)` and `in_sub_category(other)` compare groups.
`token_type_from_string(name)` looks a type up by its CamelCase name,
case-insensitively, and raises `ValueError` for an unknown name.
`token_type_values()` and `token_type_strings()` list all types in ascending
order. `STANDARD_TYPES` maps token types to their short CSS class names.
`stringify(*tokens)` joins the text of tokens.

## Registry

`LexerRegistry` (in `hilite.registry`) holds lexers:

- `register(lexer)` adds a lexer, replacing one of the same name.
- `get(name)` finds a lexer by name or alias (exact, then lower case), then by
  file extension or file name.
- `match(filename)` matches the base name against each lexer's `filenames`
  globs, then its `alias_filenames`; backup and template suffixes such as `~`,
  `.bak`, `.orig`, `.rpmnew` or `.in` are ignored.
- `match_mime_type(mime_type)` matches on MIME type.
- `analyse(text)` returns the lexer whose analyser scores the text highest,
  or `None` if none scores above zero.
- `names(with_aliases)` and `aliases(skip_without_aliases)` list sorted names.

Where several lexers match, the highest `priority` wins (an unset priority
counts as 1), then the name in alphabetical order.

## Remapping tokens

`type_remapping_lexer` wraps a lexer and changes the types of selected tokens:

```python
from hilite.remap import TypeMapping, type_remapping_lexer

lexer = type_remapping_lexer(
    lexer,
    [TypeMapping(TokenType.NAME, TokenType.KEYWORD, ("if", "else"))],
)
```

A `TypeMapping` with no words remaps every token of its `from_type`.
`RemappingLexer(lexer, mapper)` takes any function from a token to a list of
tokens, so tokens can also be split or dropped.

## What this package does not do

It provides the lexing machinery only. It ships no lexers for particular
languages, no output formatters (HTML, terminal or otherwise), no colour
styles, and no command-line program: you define the rules, and turning tokens
into highlighted output is up to you.