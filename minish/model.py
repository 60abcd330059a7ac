"""Data types shared by the tokenizer, parser and executor."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class TokenType(enum.Enum):
    """Kinds of lexical tokens produced from a command line."""

    WORD = enum.auto()
    PIPE = enum.auto()
    REDIR_IN = enum.auto()
    REDIR_OUT = enum.auto()
    REDIR_APPEND = enum.auto()
    HEREDOC = enum.auto()


@dataclass(frozen=True)
class Token:
    """One piece of a tokenized command line."""

    value: str
    type: TokenType

    def __str__(self) -> str:
        return f"Type={self.type.name}, Value='{self.value}'"


@dataclass(frozen=True)
class Redirection:
    """An I/O redirection attached to a command."""

    file: str
    type: TokenType


@dataclass
class Command:
    """A single command of a pipeline with its arguments and redirections."""

    args: list[str] = field(default_factory=list)
    redirections: list[Redirection] = field(default_factory=list)