# minish

`minish` is the core of a small POSIX-style shell, provided as a Python
library. It has four modules:

- `minish.model` defines the data types: `TokenType`, `Token`, `Redirection`
  and `Command`.
- `minish.tokenizer` splits a command line into tokens.
- `minish.environment` holds the shell's own copy of the environment and its
  session state.
- `minish.builtins` contains the commands the shell runs itself.
- `minish.executor` runs commands. Builtins run in-process. Other programs
  run as child processes, connected by pipes.

The package has no runtime dependencies beyond the standard library.

## Tokenizing a line

```python
from minish.tokenizer import tokenize, format_tokens

tokens = tokenize('echo "hello world" | cat > out.txt')
print(format_tokens(tokens), end="")
# Token 0: Type=WORD, Value='echo'
# Token 1: Type=WORD, Value='hello world'
# Token 2: Type=PIPE, Value='|'
# Token 3: Type=WORD, Value='cat'
# Token 4: Type=REDIR_OUT, Value='>'
# Token 5: Type=WORD, Value='out.txt'
```

The tokenizer follows these rules:

- Whitespace separates words.
- `|`, `<`, `>`, `>>` and `<<` are operators, even when nothing separates
  them from the surrounding text.
- Text inside single or double quotes becomes one `WORD` token, with the
  quotes removed. If a quote is never closed, the word runs to the end of
  the line.
- An assignment whose value starts with a quote is kept as a single token,
  quotes included. For example, `NAME="some value"` produces one token.

## Environment and session state

`Environment` is an ordered list of entries. Each entry is either
`KEY=VALUE` or a bare `KEY`, which is what `export KEY` with no value
creates.

```python
from minish.environment import Environment, ShellState, is_valid_identifier

environment = Environment.from_mapping({"HOME": "/home/demo", "PATH": "/usr/bin:/bin"})
environment.set("GREETING", "hello")
environment.get("GREETING")      # "hello"
environment.set("FLAG", None)    # stored as the bare entry "FLAG"
environment.get("FLAG")          # None
"FLAG" in environment            # True
environment.remove("GREETING")
environment.index("PATH")        # 1; raises KeyError for unknown keys

is_valid_identifier("MY_VAR=1")  # True: anything after '=' is ignored
is_valid_identifier("1BAD")      # False
```

`ShellState` holds the following:

- `environment`
- `last_exit_status`
- `pwd`
- `old_pwd`

`ShellState.create(environ)` builds the state from a mapping. With no
argument it uses the process environment. It sets `pwd` to the current
working directory.

## Builtins

The functions in `minish.builtins` take the argument list, with the command
name first. They write to the streams you pass in, or to standard output
and standard error when you pass none. Each one returns an exit status.

| Function | What it does |
| --- | --- |
| `echo(args, out)` | Joins the arguments with spaces. A leading `-n` drops the trailing newline. |
| `pwd(out, err)` | Prints the current directory. |
| `cd(args, shell, err)` | Changes to `args[1]`, or to `$HOME` from the process environment. Updates `PWD` and `OLDPWD` in the shell state. |
| `env(shell, out)` | Prints the entries that have a value. |
| `export(args, shell, out, err)` | Sets `KEY=VALUE` or a bare `KEY`. With no arguments it prints the entries sorted, each as `declare -x ENTRY`. |
| `unset(args, shell, err)` | Removes the named variables. |
| `exit_shell(args, shell, out, err)` | Prints `exit` and raises `ShellExit` with a status. |

Invalid identifiers passed to `export` and `unset` are reported on the
error stream, and the function returns 1.

`exit_shell` chooses the status as follows:

- With no argument, it uses the last exit status.
- With a numeric argument, it uses that number modulo 256.
- With a non-numeric argument, it reports the error and uses 255.
- With more than one argument, it does not raise. It reports
  `too many arguments`, records 1 as the last exit status and returns 1.

## Running commands

```python
from minish.environment import ShellState
from minish.executor import execute
from minish.model import Command, Redirection, TokenType

shell = ShellState.create()
status = execute(
    [
        Command(["printf", "b\\na\\n"]),
        Command(["sort"], [Redirection("sorted.txt", TokenType.REDIR_OUT)]),
    ],
    shell,
)
```

`execute(commands, shell)` runs one pipeline. It returns the exit status and
stores it in `shell.last_exit_status`.

- Consecutive external commands are connected by pipes.
- A builtin in the list runs in-process at its position. It is not connected
  to those pipes.
- A command that is not found on `PATH` gives status 127.
- A command whose redirection file cannot be opened gives status 1.
- A command that cannot be executed gives status 126.
- A child process killed by a signal gives status 128 plus the signal
  number.
- `exit` propagates `ShellExit` to the caller.

The executor also provides these functions:

- `is_builtin(name)` tells whether a name is handled in-process.
- `find_command(name, environment)` searches the environment's `PATH`. A
  name that starts with `/` is returned unchanged.
- `open_redirections(redirections)` is a context manager. It opens the files
  for `<`, `>` and `>>` and yields the replacement stdin and stdout. In each
  direction, the last redirection wins.
- `execute_builtin(command, shell)` runs a single builtin.
- `execute_external(commands, shell)` runs a sequence of external commands.

## What is not included

The package provides no interactive prompt or command to start a shell
session. You call it from your own code.

It has no parser that turns tokens into `Command` objects. You build the
`Command` and `Redirection` objects yourself.

It does not expand variables, and here-documents (`<<`) are tokenized but
ignored when commands run.