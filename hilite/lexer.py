"""The regex state-machine lexer."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

import regex

from hilite.mutators import Mutator, Rule
from hilite.types import EOF, Token, TokenType

_MATCH_TIMEOUT = 0.25
_REGEX_META = frozenset("\\.+*?()|[]{}^$")


@dataclass
class Config:
    """Static configuration of a lexer."""

    name: str = ""
    aliases: list[str] = field(default_factory=list)
    filenames: list[str] = field(default_factory=list)
    alias_filenames: list[str] = field(default_factory=list)
    mime_types: list[str] = field(default_factory=list)
    case_insensitive: bool = False
    dot_all: bool = False
    not_multiline: bool = False
    ensure_nl: bool = False
    priority: float = 0.0


@dataclass
class TokeniseOptions:
    """Options controlling a single tokenisation."""

    state: str = "root"
    ensure_lf: bool = True
    nested: bool = False


class Rules(dict):
    """Maps a state name to its sequence of rules."""

    def rename(self, old_rule: str, new_rule: str) -> Rules:
        """A clone with the state ``old_rule`` renamed to ``new_rule``."""
        out = self.clone()
        out[new_rule] = out.pop(old_rule, None)
        return out

    def clone(self) -> Rules:
        """A copy whose rule lists can be changed independently."""
        return Rules({state: list(rules) for state, rules in self.items()})

    def merge(self, rules: Rules) -> Rules:
        """A clone of these rules with ``rules`` merged over it."""
        out = self.clone()
        out.update(Rules(rules).clone())
        return out


@dataclass(eq=False)
class CompiledRule:
    """A rule together with its lazily compiled regular expression."""

    pattern: str = ""
    type: Any = None
    mutator: Mutator | None = None
    regexp: Any = None
    flags: str = ""

    @classmethod
    def from_rule(cls, rule: Rule, flags: str = "") -> CompiledRule:
        return cls(rule.pattern, rule.type, rule.mutator, None, flags)


@dataclass
class LexerState:
    """The state of a single lex, iterable for its tokens."""

    lexer: Any = None
    registry: Any = None
    text: str = ""
    pos: int = 0
    rules: dict[str, list[CompiledRule]] = field(default_factory=dict)
    stack: list[str] = field(default_factory=list)
    state: str = ""
    rule: int = 0
    groups: list[str] = field(default_factory=list)
    named_groups: dict[str, str] = field(default_factory=dict)
    mutator_context: dict[Any, Any] = field(default_factory=dict)
    options: TokeniseOptions = field(default_factory=TokeniseOptions)
    newline_added: bool = False

    def set(self, key: Any, value: Any) -> None:
        """Store a value in the mutator context."""
        self.mutator_context[key] = value

    def get(self, key: Any) -> Any:
        """Fetch a value from the mutator context, or None."""
        return self.mutator_context.get(key)

    def __iter__(self) -> Iterator[Token]:
        end = len(self.text) - 1 if self.newline_added else len(self.text)
        root = self.options.state
        tracing = bool(self.lexer is not None and getattr(self.lexer, "trace", False))
        while self.pos < end and self.stack:
            self.state = self.stack[-1]
            if tracing:
                print(
                    f"{self.state}: pos={self.pos}, text={self.text[self.pos:]!r}",
                    file=sys.stderr,
                )
            selected = self.rules.get(self.state)
            if selected is None:
                raise ValueError(f"unknown state {self.state}")
            found = _match_rules(self.text, self.pos, selected)
            if found is None:
                # A newline that nothing matches resets the stack to the root state.
                if self.text[self.pos] == "\n" and self.state != root:
                    self.stack = [root]
                    continue
                self.pos += 1
                yield Token(TokenType.ERROR, self.text[self.pos - 1])
                continue
            index, rule, groups, named = found
            self.rule = index
            self.groups = groups
            self.named_groups = named
            self.pos += len(groups[0])
            if rule.mutator is not None:
                rule.mutator.mutate(self)
            if rule.type is not None:
                yield from _visible(rule.type.emit(self.groups, self))
        if self.pos != len(self.text) and not self.stack:
            value = self.text[self.pos:]
            self.pos = len(self.text)
            yield Token(TokenType.ERROR, value)


def _visible(tokens: Iterable[Token]) -> Iterator[Token]:
    for token in tokens:
        if token == EOF:
            return
        if token.type == TokenType.IGNORE:
            continue
        yield token


def _match_rules(
    text: str, pos: int, rules: list[CompiledRule]
) -> tuple[int, CompiledRule, list[str], dict[str, str]] | None:
    for index, rule in enumerate(rules):
        try:
            match = rule.regexp.match(text, pos, timeout=_MATCH_TIMEOUT)
        except TimeoutError:
            continue
        if match is None:
            continue
        groups = [match.group(0)] + [g if g is not None else "" for g in match.groups()]
        named = {str(i): value for i, value in enumerate(groups)}
        for name, value in match.groupdict().items():
            named[name] = value if value is not None else ""
        return index, rule, groups, named
    return None


class RegexLexer:
    """A lexer driven by a state machine of regular-expression rules."""

    def __init__(self, config: Config, rules_func: Callable[[], Rules]) -> None:
        self._config = config
        self._rules_func = rules_func
        self._registry: Any = None
        self._analyser: Callable[[str], float] | None = None
        self.trace = False
        self._lock = threading.Lock()
        self._fetched = False
        self._fetch_error: Exception | None = None
        self._compiled = False
        self._raw_rules: Rules | None = None
        self._compiled_rules: dict[str, list[CompiledRule]] = {}

    def __str__(self) -> str:
        return self._config.name

    @property
    def config(self) -> Config:
        return self._config

    @property
    def registry(self) -> Any:
        return self._registry

    def set_trace(self, enabled: bool) -> RegexLexer:
        """Enable or disable debug tracing to stderr."""
        self.trace = enabled
        return self

    def rules(self) -> Rules:
        """The rules of this lexer, as given."""
        self._need_rules()
        return self._raw_rules

    def set_registry(self, registry: Any) -> RegexLexer:
        """Set the registry used to look up other lexers."""
        self._registry = registry
        return self

    def set_analyser(self, analyser: Callable[[str], float]) -> RegexLexer:
        """Set the function used to score text content."""
        self._analyser = analyser
        return self

    def analyse_text(self, text: str) -> float:
        """Score between 0.0 and 1.0 how likely ``text`` suits this lexer."""
        if self._analyser is not None:
            return self._analyser(text)
        return 0.0

    def set_config(self, config: Config) -> RegexLexer:
        """Replace the configuration of this lexer."""
        self._config = config
        return self

    def tokenise(self, options: TokeniseOptions | None, text: str) -> Iterator[Token]:
        """Tokenise ``text``, returning an iterator of tokens."""
        self._need_rules()
        if options is None:
            options = TokeniseOptions()
        if options.ensure_lf:
            text = ensure_lf(text)
        newline_added = False
        if not options.nested and self._config.ensure_nl and not text.endswith("\n"):
            text += "\n"
            newline_added = True
        state = LexerState(
            lexer=self,
            registry=self._registry,
            text=text,
            rules=self._compiled_rules,
            stack=[options.state],
            options=options,
            newline_added=newline_added,
        )
        return iter(state)

    def _need_rules(self) -> None:
        with self._lock:
            if not self._fetched:
                self._fetched = True
                try:
                    self._fetch_rules()
                except ValueError as err:
                    self._fetch_error = err
            if self._fetch_error is not None:
                raise self._fetch_error
            self._maybe_compile()

    def _fetch_rules(self) -> None:
        rules = Rules(self._rules_func())
        if "root" not in rules:
            raise ValueError('no "root" state')
        flags = ""
        if not self._config.not_multiline:
            flags += "m"
        if self._config.case_insensitive:
            flags += "i"
        if self._config.dot_all:
            flags += "s"
        self._raw_rules = rules
        self._compiled_rules = {
            state: [CompiledRule.from_rule(rule, flags) for rule in state_rules]
            for state, state_rules in rules.items()
        }

    def _maybe_compile(self) -> None:
        if self._compiled:
            return
        for state, rules in self._compiled_rules.items():
            for index, rule in enumerate(rules):
                if rule.regexp is not None:
                    continue
                pattern = "(?:" + rule.pattern + ")"
                if rule.flags:
                    pattern = f"(?{rule.flags})" + pattern
                try:
                    rule.regexp = regex.compile(pattern)
                except regex.error as err:
                    raise ValueError(
                        f"failed to compile rule {state}.{index}: {err}"
                    ) from err
        # Each lexer mutator may add or remove rules, so rescan after every one.
        while self._apply_next_lexer_mutator():
            pass
        for state, rules in self._compiled_rules.items():
            for rule in rules:
                validate = getattr(rule.type, "validate_emitter", None)
                if validate is None:
                    continue
                try:
                    validate(rule)
                except Exception as err:
                    raise ValueError(
                        f"{self._config.name}: {state}: {rule.pattern}: {err}"
                    ) from err
        self._compiled = True

    def _apply_next_lexer_mutator(self) -> bool:
        rules = self._compiled_rules
        for state in list(rules):
            for index, rule in enumerate(rules[state]):
                mutate_lexer = getattr(rule.mutator, "mutate_lexer", None)
                if mutate_lexer is not None:
                    mutate_lexer(rules, state, index)
                    return True
        return False


def _quote_meta(word: str) -> str:
    return "".join("\\" + c if c in _REGEX_META else c for c in word)


def words(prefix: str, suffix: str, *args: str) -> str:
    """A pattern matching any of the given literal words, longest first."""
    ordered = sorted(args, key=len, reverse=True)
    return prefix + "(" + "|".join(_quote_meta(w) for w in ordered) + ")" + suffix


def tokenise(lexer: Any, options: TokeniseOptions | None, text: str) -> list[Token]:
    """Tokenise ``text`` with ``lexer``, returning a list of tokens."""
    return list(lexer.tokenise(options, text))


def _class_char(glob: str, i: int) -> int:
    if i >= len(glob) or glob[i] in "-]":
        raise ValueError("syntax error in pattern")
    if glob[i] == "\\":
        if i + 1 >= len(glob):
            raise ValueError("syntax error in pattern")
        return i + 2
    return i + 1


def _validate_glob(glob: str) -> None:
    i, n = 0, len(glob)
    while i < n:
        c = glob[i]
        if c == "\\":
            if i + 1 >= n:
                raise ValueError("syntax error in pattern")
            i += 2
        elif c == "[":
            i += 1
            if i < n and glob[i] == "^":
                i += 1
            first = True
            while True:
                if i >= n:
                    raise ValueError("syntax error in pattern")
                if glob[i] == "]" and not first:
                    i += 1
                    break
                i = _class_char(glob, i)
                if i < n and glob[i] == "-":
                    i = _class_char(glob, i + 1)
                first = False
        else:
            i += 1


def new_lexer(config: Config | None, rules_func: Callable[[], Rules]) -> RegexLexer:
    """Create a regex lexer whose rules are generated on first use."""
    if config is None:
        config = Config()
    for glob in [*config.filenames, *config.alias_filenames]:
        try:
            _validate_glob(glob)
        except ValueError as err:
            raise ValueError(
                f"{config.name}: {glob!r} is not a valid glob: {err}"
            ) from err
    return RegexLexer(config, rules_func)


def ensure_lf(text: str) -> str:
    """Replace ``\\r\\n`` and lone ``\\r`` with ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")