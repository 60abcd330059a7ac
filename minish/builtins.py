"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import sys
from typing import Sequence, TextIO

from .environment import ShellState, is_valid_identifier

_DIGITS = frozenset("0123456789")


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell session with a status."""

    def __init__(self, status: int) -> None:
        super().__init__(status)
        self.status = status


def _stream(stream: TextIO | None, default: TextIO) -> TextIO:
    return default if stream is None else stream


def echo(args: Sequence[str], out: TextIO | None = None) -> int:
    """Write the arguments separated by spaces; ``-n`` first drops the newline."""
    out = _stream(out, sys.stdout)
    words = list(args[1:])
    newline = True
    if words and words[0] == "-n":
        newline = False
        words = words[1:]
    out.write(" ".join(words))
    if newline:
        out.write("\n")
    return 0


def pwd(out: TextIO | None = None, err: TextIO | None = None) -> int:
    """Write the current working directory."""
    out = _stream(out, sys.stdout)
    err = _stream(err, sys.stderr)
    try:
        cwd = os.getcwd()
    except OSError as exc:
        err.write(f"minishell: pwd: {exc.strerror}\n")
        return 1
    out.write(f"{cwd}\n")
    return 0


def cd(args: Sequence[str], shell: ShellState, err: TextIO | None = None) -> int:
    """Change directory to the argument or to $HOME, updating PWD and OLDPWD."""
    err = _stream(err, sys.stderr)
    try:
        current = os.getcwd()
    except OSError as exc:
        err.write(f"minishell: cd: {exc.strerror}\n")
        return 1

    path = args[1] if len(args) > 1 else os.environ.get("HOME")
    if path is None:
        err.write("minishell: cd: HOME not set\n")
        return 1

    try:
        os.chdir(path)
    except OSError:
        err.write(f"minishell: cd: {path}: No such file or directory\n")
        return 1

    shell.old_pwd = current
    shell.environment.set("OLDPWD", current)
    try:
        new_cwd = os.getcwd()
    except OSError:
        return 0
    shell.pwd = new_cwd
    shell.environment.set("PWD", new_cwd)
    return 0


def env(shell: ShellState, out: TextIO | None = None) -> int:
    """Write every environment entry that has a value."""
    out = _stream(out, sys.stdout)
    for entry in shell.environment:
        if "=" in entry:
            out.write(f"{entry}\n")
    return 0


def export(
    args: Sequence[str],
    shell: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Set variables, or list them sorted when called without arguments."""
    out = _stream(out, sys.stdout)
    err = _stream(err, sys.stderr)
    if len(args) < 2:
        for entry in sorted(shell.environment):
            out.write(f"declare -x {entry}\n")
        return 0

    status = 0
    for arg in args[1:]:
        if not is_valid_identifier(arg):
            err.write(f"minishell: export: `{arg}': not a valid identifier\n")
            status = 1
            continue
        key, sep, value = arg.partition("=")
        if sep:
            shell.environment.set(key, value)
        elif key not in shell.environment:
            shell.environment.set(key, None)
    return status


def unset(args: Sequence[str], shell: ShellState, err: TextIO | None = None) -> int:
    """Remove the named variables from the environment."""
    err = _stream(err, sys.stderr)
    status = 0
    for arg in args[1:]:
        if not is_valid_identifier(arg):
            err.write(f"minishell: unset: `{arg}': not a valid identifier\n")
            status = 1
        else:
            shell.environment.remove(arg)
    return status


def _is_numeric(text: str) -> bool:
    if text[:1] in ("-", "+"):
        text = text[1:]
    return bool(text) and all(char in _DIGITS for char in text)


def exit_shell(
    args: Sequence[str],
    shell: ShellState,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """End the session by raising ShellExit.

    With more than one argument nothing is ended: the error is reported and
    1 is returned and stored as the last exit status.
    """
    out = _stream(out, sys.stdout)
    err = _stream(err, sys.stderr)
    out.write("exit\n")

    status = shell.last_exit_status
    if len(args) > 1:
        arg = args[1]
        if not _is_numeric(arg):
            err.write(f"minishell: exit: {arg}: numeric argument required\n")
            raise ShellExit(255)
        if len(args) > 2:
            err.write("minishell: exit: too many arguments\n")
            shell.last_exit_status = 1
            return 1
        status = int(arg) % 256
    raise ShellExit(status)