"""The shell's private copy of the environment and its session state."""

from __future__ import annotations

import os
import string
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CHARS = _IDENT_START | frozenset(string.digits)


def is_valid_identifier(text: str) -> bool:
    """Tell whether text names a variable; anything after '=' is ignored."""
    if not text or text[0] not in _IDENT_START:
        return False
    name = text.partition("=")[0]
    return all(char in _IDENT_CHARS for char in name[1:])


class Environment:
    """An ordered list of ``KEY=VALUE`` (or bare ``KEY``) entries."""

    def __init__(self, entries: Iterable[str] = ()) -> None:
        self._entries = list(entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> Environment:
        """Build an environment from a mapping such as ``os.environ``."""
        return cls(f"{key}={value}" for key, value in mapping.items())

    def index(self, key: str) -> int:
        """Return the position of the entry for key, or raise KeyError."""
        size = len(key)
        for position, entry in enumerate(self._entries):
            if entry.startswith(key) and (len(entry) == size or entry[size] == "="):
                return position
        raise KeyError(key)

    def get(self, key: str) -> str | None:
        """Return the value of key, or None if it is unset or has no value."""
        try:
            entry = self._entries[self.index(key)]
        except KeyError:
            return None
        if len(entry) == len(key):
            return None
        return entry[len(key) + 1 :]

    def set(self, key: str, value: str | None) -> None:
        """Add or replace key; a value of None stores the bare name."""
        entry = key if value is None else f"{key}={value}"
        try:
            self._entries[self.index(key)] = entry
        except KeyError:
            self.add(entry)

    def add(self, entry: str) -> None:
        """Append a raw entry."""
        self._entries.append(entry)

    def remove(self, key: str) -> None:
        """Remove the entry for key if there is one."""
        if key in self:
            del self._entries[self.index(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            self.index(key)
        except KeyError:
            return False
        return True

    def __repr__(self) -> str:
        return f"Environment({self._entries!r})"


@dataclass
class ShellState:
    """State that lives for the whole shell session."""

    environment: Environment = field(default_factory=Environment)
    last_exit_status: int = 0
    pwd: str | None = None
    old_pwd: str | None = None

    @classmethod
    def create(cls, environ: Mapping[str, str] | None = None) -> ShellState:
        """Start a session from environ (default: the process environment)."""
        source = os.environ if environ is None else environ
        try:
            cwd: str | None = os.getcwd()
        except OSError:
            cwd = None
        return cls(environment=Environment.from_mapping(source), pwd=cwd)