"""A registry of lexers, searchable by name, alias, filename, MIME type or content."""

from __future__ import annotations

import posixpath
import re
from functools import lru_cache
from typing import Any

# Backup and template suffixes that still select the lexer of the underlying file.
IGNORED_SUFFIXES: tuple[str, ...] = (
    # Editor backups
    "~",
    ".bak",
    ".old",
    ".orig",
    # Debian and derivatives apt/dpkg/ucf backups
    ".dpkg-dist",
    ".dpkg-old",
    ".ucf-dist",
    ".ucf-new",
    ".ucf-old",
    # Red Hat and derivatives rpm backups
    ".rpmnew",
    ".rpmorig",
    ".rpmsave",
    # Build system input/template files
    ".in",
)


def _class_char(glob: str, i: int) -> tuple[str, int]:
    if i >= len(glob) or glob[i] in "-]":
        raise ValueError(f"syntax error in pattern {glob!r}")
    if glob[i] == "\\":
        if i + 1 >= len(glob):
            raise ValueError(f"syntax error in pattern {glob!r}")
        return glob[i + 1], i + 2
    return glob[i], i + 1


@lru_cache(maxsize=None)
def _compile_glob(glob: str) -> re.Pattern[str]:
    """Compile a shell glob where ``*`` and ``?`` never match a path separator."""
    out: list[str] = []
    i, n = 0, len(glob)
    while i < n:
        c = glob[i]
        if c == "*":
            out.append("[^/]*")
            i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "\\":
            if i + 1 >= n:
                raise ValueError(f"syntax error in pattern {glob!r}")
            out.append(re.escape(glob[i + 1]))
            i += 2
        elif c == "[":
            i += 1
            negate = i < n and glob[i] == "^"
            if negate:
                i += 1
            items: list[str] = []
            while True:
                if i >= n:
                    raise ValueError(f"syntax error in pattern {glob!r}")
                if glob[i] == "]" and items:
                    i += 1
                    break
                lo, i = _class_char(glob, i)
                hi = lo
                if i < n and glob[i] == "-":
                    hi, i = _class_char(glob, i + 1)
                if hi < lo:
                    raise ValueError(f"syntax error in pattern {glob!r}")
                items.append(re.escape(lo) if lo == hi else f"{re.escape(lo)}-{re.escape(hi)}")
            body = "".join(items)
            out.append(f"[^/{body}]" if negate else f"[{body}]")
        else:
            out.append(re.escape(c))
            i += 1
    return re.compile("".join(out) + r"\Z", re.DOTALL)


def _glob_match(glob: str, name: str) -> bool:
    return _compile_glob(glob).match(name) is not None


def _base_name(path: str) -> str:
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else "."
    return posixpath.basename(stripped)


def _priority(lexer: Any) -> float:
    # An unset priority counts as 1.
    return lexer.config.priority or 1.0


def _prioritised(lexers: list[Any]) -> list[Any]:
    return sorted(lexers, key=lambda lexer: (-_priority(lexer), lexer.config.name))


class LexerRegistry:
    """A collection of lexers with lookup by several keys."""

    def __init__(self) -> None:
        self.lexers: list[Any] = []
        self._by_name: dict[str, Any] = {}
        self._by_alias: dict[str, Any] = {}

    def names(self, with_aliases: bool) -> list[str]:
        """Sorted names of all lexers, optionally with their aliases."""
        out: list[str] = []
        for lexer in self.lexers:
            config = lexer.config
            out.append(config.name)
            if with_aliases:
                out.extend(config.aliases)
        return sorted(out)

    def aliases(self, skip_without_aliases: bool) -> list[str]:
        """Sorted aliases; lexers without any give their name unless skipped."""
        out: list[str] = []
        for lexer in self.lexers:
            config = lexer.config
            if not config.aliases:
                if skip_without_aliases:
                    continue
                out.append(config.name)
            out.extend(config.aliases)
        return sorted(out)

    def get(self, name: str) -> Any:
        """A lexer by name, alias, file extension or filename, or None."""
        lowered = name.lower()
        for table, key in (
            (self._by_name, name),
            (self._by_alias, name),
            (self._by_name, lowered),
            (self._by_alias, lowered),
        ):
            lexer = table.get(key)
            if lexer is not None:
                return lexer
        candidates = [
            lexer
            for lexer in (self.match("filename." + name), self.match(name))
            if lexer is not None
        ]
        if not candidates:
            return None
        return _prioritised(candidates)[0]

    def match_mime_type(self, mime_type: str) -> Any:
        """The highest priority lexer for a MIME type, or None."""
        matched = [
            lexer
            for lexer in self.lexers
            for candidate in lexer.config.mime_types
            if candidate == mime_type
        ]
        if not matched:
            return None
        return _prioritised(matched)[0]

    def match(self, filename: str) -> Any:
        """The best lexer for a filename: primary globs first, then alias globs."""
        base = _base_name(filename)
        for attribute in ("filenames", "alias_filenames"):
            matched = [
                lexer
                for lexer in self.lexers
                for glob in getattr(lexer.config, attribute)
                if _glob_matches_with_suffix(glob, base)
            ]
            if matched:
                return _prioritised(matched)[0]
        return None

    def analyse(self, text: str) -> Any:
        """The lexer scoring ``text`` highest, or None if none scores above zero."""
        picked = None
        highest = 0.0
        for lexer in self.lexers:
            analyse_text = getattr(lexer, "analyse_text", None)
            if analyse_text is None:
                continue
            weight = analyse_text(text)
            if weight > highest:
                picked = lexer
                highest = weight
        return picked

    def register(self, lexer: Any) -> Any:
        """Add a lexer, replacing any registered lexer of the same name."""
        lexer.set_registry(self)
        config = lexer.config
        self._by_name[config.name] = lexer
        self._by_name[config.name.lower()] = lexer
        for alias in config.aliases:
            self._by_alias[alias] = lexer
            self._by_alias[alias.lower()] = lexer
        for index, existing in enumerate(self.lexers):
            if existing is not None and existing.config.name == config.name:
                self.lexers[index] = lexer
                break
        else:
            self.lexers.append(lexer)
        return lexer


def _glob_matches_with_suffix(glob: str, name: str) -> bool:
    if _glob_match(glob, name):
        return True
    return any(_glob_match(glob + suffix, name) for suffix in IGNORED_SUFFIXES)