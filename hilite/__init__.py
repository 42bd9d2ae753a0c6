"""Regex-driven state-machine lexers: token types, rule mutators, a lexer registry and token remapping."""

__version__ = "0.1.0"

__all__ = ["types", "mutators", "lexer", "registry", "remap"]