"""Readline tab completion for builtins, programs and paths."""

import os
import readline

from mysh.builtins import BUILTIN_REGISTRY
from mysh.resolver import ProgramResolver
from mysh.tokenizer import PIPE


class Completer:
    """Complete the word under the cursor.

    The first word of a stage (start of line or after '|') completes to
    builtins, programs the resolver can find, and paths; any other word
    completes to paths only.
    """

    def __init__(self, resolver: ProgramResolver) -> None:
        self.resolver = resolver
        self._programs: frozenset[str] | None = None
        self._candidates: list[str] = []

    @property
    def programs(self) -> frozenset[str]:
        if self._programs is None:
            self._programs = frozenset(self.resolver.programs())
        return self._programs

    def __call__(self, text: str, state: int) -> str | None:
        if state == 0:
            head = readline.get_line_buffer()[: readline.get_begidx()]
            self._candidates = self.candidates(text, starts_stage(head))
        return self._candidates[state] if state < len(self._candidates) else None

    def candidates(self, text: str, command_position: bool) -> list[str]:
        found = set(complete_path(text))
        if command_position:
            found.update(n for n in BUILTIN_REGISTRY if n.startswith(text))
            found.update(n for n in self.programs if n.startswith(text))
        return sorted(found)


def starts_stage(head: str) -> bool:
    """True if the word after *head* is a command name."""
    head = head.rstrip()
    return not head or head.endswith(PIPE)


def complete_path(text: str) -> list[str]:
    """Paths beginning with *text*; directories end in '/'."""
    dirname, prefix = os.path.split(text)
    try:
        with os.scandir(dirname or ".") as entries:
            return sorted(
                os.path.join(dirname, e.name) + ("/" if e.is_dir() else "")
                for e in entries
                if e.name.startswith(prefix)
            )
    except OSError:
        return []


def setup_completion(resolver: ProgramResolver) -> Completer:
    """Install a Completer for *resolver* into readline."""
    completer = Completer(resolver)
    readline.set_completer(completer)
    readline.set_completer_delims(" \t\n|><")
    readline.parse_and_bind("tab: complete")
    return completer
