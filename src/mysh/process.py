"""Launch programs with their standard streams bound to files or pipe ends."""

import errno
import logging
import os
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum

from mysh.resolver import ProgramResolver

log = logging.getLogger(__name__)

# Launch failures that mean "this path cannot be run", as opposed to the
# system being unable to create a process at all.
_NOT_EXECUTABLE = {errno.ENOENT, errno.EACCES, errno.ENOTDIR, errno.ENOEXEC}

_WRITE_FLAGS = os.O_WRONLY | os.O_CREAT | os.O_TRUNC


class ShellError(Exception):
    """Base class for errors raised while running a command line."""


class RedirectionError(ShellError):
    """A redirection target could not be opened."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class CommandNotFoundError(ShellError):
    """Neither the host lookup nor the resolver found a runnable program."""

    def __init__(self, name: str) -> None:
        super().__init__(f"command not found: {name}")
        self.name = name


class SpawnError(ShellError):
    """Pipe or process creation failed; the interpreter cannot go on."""


class StreamKind(Enum):
    INHERIT = "inherit"
    FILE = "file"
    PIPE = "pipe"


@dataclass(frozen=True)
class Stream:
    """Where a child's stdin or stdout comes from or goes to."""

    kind: StreamKind = StreamKind.INHERIT
    path: str | None = None
    fd: int | None = None

    @classmethod
    def file(cls, path: str | None) -> "Stream":
        """Bind to *path*, or inherit when no path is given."""
        if path is None:
            return INHERIT
        return cls(StreamKind.FILE, path=path)

    @classmethod
    def pipe(cls, fd: int) -> "Stream":
        return cls(StreamKind.PIPE, fd=fd)


INHERIT = Stream()


def release(*streams: Stream) -> None:
    """Close the pipe descriptors carried by *streams*."""
    for stream in streams:
        if stream.kind is StreamKind.PIPE and stream.fd is not None:
            os.close(stream.fd)


def open_pipe() -> tuple[int, int]:
    """Create a pipe, returning (read_fd, write_fd)."""
    try:
        return os.pipe()
    except OSError as e:
        raise SpawnError(f"pipe creation failed: {e.strerror}") from e


def spawn(
    argv: list[str],
    resolver: ProgramResolver,
    stdin: Stream = INHERIT,
    stdout: Stream = INHERIT,
) -> subprocess.Popen:
    """Start *argv* with the given stream bindings and return its handle.

    Pipe descriptors passed in are owned by this call: they are closed in
    the parent before it returns or raises, so only the child keeps them.

    Raises RedirectionError, CommandNotFoundError or SpawnError.
    """
    opened: list[int] = []
    try:
        stdin_fd = _bind(stdin, os.O_RDONLY, opened)
        stdout_fd = _bind(stdout, _WRITE_FLAGS, opened)
        sys.stdout.flush()
        proc = _launch(argv, resolver, stdin_fd, stdout_fd)
        log.debug("started %s as pid %d", argv, proc.pid)
        return proc
    finally:
        for fd in opened:
            os.close(fd)
        release(stdin, stdout)


def wait(proc: subprocess.Popen) -> int:
    """Wait for *proc* and return a shell-style exit status."""
    code = proc.wait()
    if code < 0:
        log.debug("pid %d killed by signal %d", proc.pid, -code)
        return 128 - code
    log.debug("pid %d exited with %d", proc.pid, code)
    return code


def _bind(stream: Stream, flags: int, opened: list[int]) -> int | None:
    match stream.kind:
        case StreamKind.INHERIT:
            return None
        case StreamKind.PIPE:
            return stream.fd
        case StreamKind.FILE:
            try:
                fd = os.open(stream.path, flags, 0o666)
            except OSError as e:
                raise RedirectionError(stream.path, e.strerror) from e
            opened.append(fd)
            return fd


def _launch(
    argv: list[str],
    resolver: ProgramResolver,
    stdin_fd: int | None,
    stdout_fd: int | None,
) -> subprocess.Popen:
    """Run *argv* via the host lookup, falling back to the resolver."""
    try:
        return subprocess.Popen(argv, stdin=stdin_fd, stdout=stdout_fd)
    except OSError as e:
        if e.errno not in _NOT_EXECUTABLE:
            raise SpawnError(f"cannot start {argv[0]}: {e.strerror}") from e
        log.debug("host lookup failed for %s: %s", argv[0], e.strerror)

    path = resolver.resolve(argv[0])
    if path is None:
        raise CommandNotFoundError(argv[0])

    try:
        return subprocess.Popen(argv, executable=path, stdin=stdin_fd, stdout=stdout_fd)
    except OSError as e:
        if e.errno in _NOT_EXECUTABLE:
            raise CommandNotFoundError(argv[0]) from e
        raise SpawnError(f"cannot start {path}: {e.strerror}") from e
