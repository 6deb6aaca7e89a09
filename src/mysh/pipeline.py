"""Parse and execute a command line with I/O redirection and one pipe."""

import logging
import subprocess
import sys
from dataclasses import dataclass

from mysh.builtins import EXIT
from mysh.expansion import expand_globs
from mysh.process import (
    CommandNotFoundError,
    RedirectionError,
    Stream,
    open_pipe,
    release,
    spawn,
    wait,
)
from mysh.resolver import ProgramResolver
from mysh.tokenizer import PIPE, REDIRECT_IN

log = logging.getLogger(__name__)


@dataclass
class Command:
    """A single pipeline stage with its redirections."""

    argv: list[str]
    stdin_file: str | None = None
    stdout_file: str | None = None


def parse_command_line(tokens: list[str]) -> list[Command]:
    """Extract redirections and split on the first '|'.

    Example: ['cat', '<', 'in', '|', 'wc', '>', 'out'] ->
    [Command(['cat'], stdin_file='in'), Command(['wc'], stdout_file='out')]

    Only the first '|' splits; later ones are arguments of the second
    stage. Redirections may appear anywhere on the line: input always
    feeds the first stage, output always takes the last. When an
    operator repeats, the last one wins.

    Raises ValueError if the syntax is invalid.
    """
    stages: list[list[str]] = [[]]
    stdin_file: str | None = None
    stdout_file: str | None = None

    i = 0
    while i < len(tokens):
        token = tokens[i]

        match token:
            case "<" | ">":
                if i + 1 >= len(tokens):
                    raise ValueError("syntax error near unexpected token `newline'")
                if token == REDIRECT_IN:
                    stdin_file = tokens[i + 1]
                else:
                    stdout_file = tokens[i + 1]
                i += 2
                continue
            case "|" if len(stages) == 1:
                if not stages[0]:
                    raise ValueError(f"syntax error near unexpected token `{PIPE}'")
                stages.append([])
            case _:
                stages[-1].append(token)
        i += 1

    if not stages[-1]:
        if len(stages) > 1:
            raise ValueError(f"syntax error near unexpected token `{PIPE}'")
        raise ValueError("syntax error: missing command")

    commands = [Command(argv=argv) for argv in stages]
    commands[0].stdin_file = stdin_file
    commands[-1].stdout_file = stdout_file
    return commands


def expand_commands(commands: list[Command]) -> list[Command]:
    """Glob-expand each stage's argument vector."""
    for cmd in commands:
        cmd.argv = expand_globs(cmd.argv)
    return commands


def execute_pipeline(commands: list[Command], resolver: ProgramResolver) -> int:
    """Execute one command or a two-stage pipeline, returning the last exit code.

    Raises SpawnError if a pipe or process cannot be created.
    """
    log.debug("executing %s", commands)
    if len(commands) == 1:
        return _execute_single(commands[0], resolver)
    if len(commands) == 2:
        return _execute_pair(commands[0], commands[1], resolver)
    raise ValueError(f"expected one or two commands, got {len(commands)}")


def _execute_single(cmd: Command, resolver: ProgramResolver) -> int:
    """Execute a single command (no pipe)."""
    stage = _start(cmd, resolver, Stream.file(cmd.stdin_file), Stream.file(cmd.stdout_file))
    return _finish(stage)


def _execute_pair(first: Command, second: Command, resolver: ProgramResolver) -> int:
    """Execute two commands joined by a pipe.

    Both stages are started before either is waited on, so a writer that
    fills the pipe buffer is never blocked on a reader that does not exist.
    """
    read_fd, write_fd = open_pipe()

    try:
        head = _start(first, resolver, Stream.file(first.stdin_file), Stream.pipe(write_fd))
    except BaseException:
        release(Stream.pipe(read_fd))
        raise

    try:
        tail = _start(second, resolver, Stream.pipe(read_fd), Stream.file(second.stdout_file))
    except BaseException:
        if isinstance(head, subprocess.Popen):
            head.kill()
            head.wait()
        raise

    _finish(head)
    return _finish(tail)


def _start(
    cmd: Command, resolver: ProgramResolver, stdin: Stream, stdout: Stream
) -> subprocess.Popen | int:
    """Start a stage, or return its exit status if it could not be started.

    The stage's pipe ends are always released in the parent.
    """
    if cmd.argv[0] == EXIT:
        release(stdin, stdout)
        return 0

    try:
        return spawn(cmd.argv, resolver, stdin=stdin, stdout=stdout)
    except RedirectionError as e:
        print(f"mysh: {e}", file=sys.stderr)
        return 1
    except CommandNotFoundError as e:
        print(f"mysh: {e}", file=sys.stderr)
        return 127


def _finish(stage: subprocess.Popen | int) -> int:
    if isinstance(stage, int):
        return stage
    return wait(stage)
