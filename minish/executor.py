"""Run parsed commands: builtins in-process, other programs as child processes."""

from __future__ import annotations

import errno
import os
import subprocess
import sys
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import IO, Any

from . import builtins
from .environment import Environment, ShellState
from .model import Command, Redirection, TokenType

_FILE_MODE = 0o644

_BuiltinRunner = Callable[[Sequence[str], ShellState, "IO[str] | None"], int]

_BUILTINS: dict[str, _BuiltinRunner] = {
    "echo": lambda args, shell, out: builtins.echo(args, out),
    "cd": lambda args, shell, out: builtins.cd(args, shell),
    "pwd": lambda args, shell, out: builtins.pwd(out),
    "export": lambda args, shell, out: builtins.export(args, shell, out),
    "unset": lambda args, shell, out: builtins.unset(args, shell),
    "env": lambda args, shell, out: builtins.env(shell, out),
    "exit": lambda args, shell, out: builtins.exit_shell(args, shell, out),
}


def is_builtin(name: str) -> bool:
    """Tell whether name is a command the shell runs itself."""
    return name in _BUILTINS


def find_command(name: str, environment: Environment) -> str | None:
    """Return the path that runs name, searching PATH, or None if none does.

    A name starting with '/' is returned unchanged without any check.
    """
    if name.startswith("/"):
        return name
    search_path = environment.get("PATH")
    if search_path is None:
        return None
    for directory in filter(None, search_path.split(":")):
        candidate = f"{directory}/{name}"
        if os.access(candidate, os.F_OK | os.X_OK):
            return candidate
    return None


@dataclass
class _Streams:
    stdin: IO[str] | None = None
    stdout: IO[str] | None = None


@contextmanager
def open_redirections(redirections: Iterable[Redirection]) -> Iterator[_Streams]:
    """Open the files of a command's redirections.

    Yields the streams that replace standard input and output; the last
    redirection in each direction wins. Here-documents are ignored. Raises
    OSError if a file cannot be opened. All files are closed on exit.
    """
    streams = _Streams()
    opened: list[IO[str]] = []
    try:
        for redirection in redirections:
            if redirection.type is TokenType.REDIR_IN:
                fd = os.open(redirection.file, os.O_RDONLY)
                handle = os.fdopen(fd, "r")
                opened.append(handle)
                streams.stdin = handle
            elif redirection.type in (TokenType.REDIR_OUT, TokenType.REDIR_APPEND):
                flags = os.O_WRONLY | os.O_CREAT
                if redirection.type is TokenType.REDIR_OUT:
                    flags |= os.O_TRUNC
                else:
                    flags |= os.O_APPEND
                fd = os.open(redirection.file, flags, _FILE_MODE)
                handle = os.fdopen(fd, "w")
                opened.append(handle)
                streams.stdout = handle
        yield streams
    finally:
        for handle in opened:
            handle.close()


def _report_redirection_error(exc: OSError) -> None:
    sys.stderr.write(f"minishell: {exc.filename}: {exc.strerror}\n")


def _report_execution_error(name: str, exc: OSError) -> None:
    if exc.errno == errno.ENOENT:
        sys.stderr.write(f"minishell: {name}: No such file or directory\n")
    elif exc.errno == errno.EACCES:
        sys.stderr.write(f"minishell: {name}: Permission denied\n")
    else:
        sys.stderr.write(f"minishell: {exc.strerror}\n")


def execute_builtin(command: Command, shell: ShellState) -> int:
    """Run a builtin command with its redirections and return its status.

    ``exit`` ends the session by letting ShellExit propagate.
    """
    runner = _BUILTINS[command.args[0]]
    with ExitStack() as stack:
        try:
            streams = stack.enter_context(open_redirections(command.redirections))
        except OSError as exc:
            _report_redirection_error(exc)
            return 1
        return runner(command.args, shell, streams.stdout)


def _process_environment(environment: Environment) -> dict[str, str]:
    variables: dict[str, str] = {}
    for entry in environment:
        key, sep, value = entry.partition("=")
        if sep:
            variables[key] = value
    return variables


def _release(stream: Any) -> None:
    if hasattr(stream, "close"):
        stream.close()


def _exit_status(process: subprocess.Popen) -> int:
    code = process.wait()
    return 128 - code if code < 0 else code


def execute_external(commands: Sequence[Command], shell: ShellState) -> int:
    """Run external commands joined by pipes and return the last one's status.

    A command that is not found yields 127, one whose redirections fail
    yields 1 and one that cannot be executed yields 126.
    """
    variables = _process_environment(shell.environment)
    previous: Any = None
    status = 0
    started: list[subprocess.Popen] = []
    try:
        for position, command in enumerate(commands):
            last = position == len(commands) - 1
            name = command.args[0]
            path = find_command(name, shell.environment)
            if path is None:
                sys.stderr.write(f"minishell: {name}: command not found\n")
                status = 127
                continue

            after_failure = None if last else subprocess.DEVNULL
            with ExitStack() as stack:
                try:
                    streams = stack.enter_context(open_redirections(command.redirections))
                except OSError as exc:
                    _report_redirection_error(exc)
                    status = 1
                    _release(previous)
                    previous = after_failure
                    continue

                stdin = streams.stdin if streams.stdin is not None else previous
                if streams.stdout is not None:
                    stdout: Any = streams.stdout
                else:
                    stdout = None if last else subprocess.PIPE
                sys.stdout.flush()
                try:
                    process = subprocess.Popen(
                        list(command.args),
                        executable=path,
                        stdin=stdin,
                        stdout=stdout,
                        env=variables,
                    )
                except OSError as exc:
                    _report_execution_error(name, exc)
                    status = 126
                    _release(previous)
                    previous = after_failure
                    continue

            _release(previous)
            started.append(process)
            if stdout is subprocess.PIPE:
                previous = process.stdout
            else:
                previous = after_failure
            if last:
                status = _exit_status(process)
    finally:
        _release(previous)
        for process in started:
            process.wait()
    return status


def execute(commands: Iterable[Command], shell: ShellState) -> int:
    """Run a pipeline of commands and record its status in the shell state."""
    commands = list(commands)
    if not commands or not commands[0].args:
        return 0

    status = 0
    pending: list[Command] = []
    for command in commands:
        if not command.args:
            continue
        if is_builtin(command.args[0]):
            if pending:
                status = execute_external(pending, shell)
                pending = []
            status = execute_builtin(command, shell)
        else:
            pending.append(command)
    if pending:
        status = execute_external(pending, shell)

    shell.last_exit_status = status
    return status