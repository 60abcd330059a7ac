"""Split a command line into words, quoted strings and operators."""

from __future__ import annotations

import re
from collections.abc import Iterable

from .model import Token, TokenType

_TOKEN_RE = re.compile(
    r"""
    (?P<space>[\x20\t\n\v\f\r]+)
  | (?P<assign>[A-Za-z_][A-Za-z0-9_]*=(?:"[^"]*"?|'[^']*'?))
  | "(?P<dq>[^"]*)"?
  | '(?P<sq>[^']*)'?
  | (?P<op>>>|<<|[|<>])
  | (?P<word>[^\x20\t\n\v\f\r|<>"']+)
    """,
    re.VERBOSE,
)

_OPERATORS = {
    ">>": TokenType.REDIR_APPEND,
    "<<": TokenType.HEREDOC,
    ">": TokenType.REDIR_OUT,
    "<": TokenType.REDIR_IN,
    "|": TokenType.PIPE,
}


def tokenize(text: str) -> list[Token]:
    """Return the tokens of a command line.

    Quoted text becomes a single word without its quotes; an unterminated
    quote runs to the end of the line. An assignment whose value starts with
    a quote (``VAR="a b"``) is kept whole, quotes included.
    """
    tokens: list[Token] = []
    for match in _TOKEN_RE.finditer(text):
        kind = match.lastgroup
        if kind == "space":
            continue
        if kind == "op":
            tokens.append(Token(match.group("op"), _OPERATORS[match.group("op")]))
        elif kind in ("dq", "sq"):
            tokens.append(Token(match.group(kind), TokenType.WORD))
        else:
            tokens.append(Token(match.group(kind), TokenType.WORD))
    return tokens


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens one per line for debugging."""
    return "".join(f"Token {index}: {token}\n" for index, token in enumerate(tokens))