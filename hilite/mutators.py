"""Rules and the mutators that change lexer state as rules match."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from hilite.types import Token


@dataclass
class Rule:
    """The matching unit of the regex lexer state machine."""

    pattern: str = ""
    type: Any = None
    mutator: Mutator | None = None


class Mutator(ABC):
    """Modifies the lexer state machine as it processes text."""

    @abstractmethod
    def mutate(self, state: Any) -> None:
        """Mutate the running lexer state."""

    @abstractmethod
    def mutator_kind(self) -> str:
        """The name this mutator is known by."""


@dataclass
class MultiMutator(Mutator):
    """Applies a sequence of mutators in order."""

    mutators: list[Mutator] = field(default_factory=list)

    def mutate(self, state: Any) -> None:
        for mutator in self.mutators:
            mutator.mutate(state)

    def mutator_kind(self) -> str:
        return "mutators"


@dataclass
class IncludeMutator(Mutator):
    """Splices the rules of another state in place of this rule."""

    state: str

    def mutate(self, state: Any) -> None:
        raise RuntimeError(f"should never reach here Include({self.state!r})")

    def mutate_lexer(self, rules: dict[str, list], state: str, rule: int) -> None:
        if self.state not in rules:
            raise ValueError(f"invalid include state {self.state!r}")
        current = rules[state]
        rules[state] = current[:rule] + list(rules[self.state]) + current[rule + 1 :]

    def mutator_kind(self) -> str:
        return "include"


@dataclass
class CombinedMutator(Mutator):
    """Creates an anonymous state from several states and pushes it."""

    states: list[str] = field(default_factory=list)

    def mutate(self, state: Any) -> None:
        raise RuntimeError(f"should never reach here Combined({self.states})")

    def mutate_lexer(self, rules: dict[str, list], state: str, rule: int) -> None:
        name = "__combined_" + "__".join(self.states)
        if name not in rules:
            combined_rules: list = []
            for source in self.states:
                if source not in rules:
                    raise ValueError(f"invalid combine state {source!r}")
                combined_rules.extend(rules[source])
            rules[name] = combined_rules
        rules[state][rule].mutator = push(name)

    def mutator_kind(self) -> str:
        return "combined"


@dataclass
class PushMutator(Mutator):
    """Pushes states onto the stack; with none, re-pushes the current state."""

    states: list[str] = field(default_factory=list)

    def mutate(self, state: Any) -> None:
        if not self.states:
            state.stack.append(state.state)
            return
        for name in self.states:
            if name == "#pop":
                state.stack.pop()
            else:
                state.stack.append(name)

    def mutator_kind(self) -> str:
        return "push"


@dataclass
class PopMutator(Mutator):
    """Pops a number of states from the stack."""

    depth: int = 1

    def mutate(self, state: Any) -> None:
        if not state.stack:
            raise IndexError("nothing to pop")
        if self.depth > len(state.stack):
            raise IndexError(
                f"cannot pop {self.depth} states from a stack of {len(state.stack)}"
            )
        del state.stack[len(state.stack) - self.depth :]

    def mutator_kind(self) -> str:
        return "pop"


def mutators(*args: Mutator) -> MultiMutator:
    """A mutator applying each of the given mutators in order."""
    return MultiMutator(list(args))


def include(state: str) -> Rule:
    """A rule that includes the rules of the given state."""
    return Rule(mutator=IncludeMutator(state))


def combined(*args: str) -> CombinedMutator:
    """A mutator that pushes a state combined from the given states."""
    return CombinedMutator(list(args))


def push(*args: str) -> PushMutator:
    """A mutator that pushes the given states onto the stack."""
    return PushMutator(list(args))


def pop(n: int) -> PopMutator:
    """A mutator that pops ``n`` states when the rule matches."""
    return PopMutator(n)


def default(*args: Mutator) -> Rule:
    """A rule that applies the given mutators without matching text."""
    return Rule(mutator=mutators(*args))


def stringify(*args: Token) -> str:
    """The raw text of a sequence of tokens."""
    return "".join(token.value for token in args)