"""Interpreter settings."""

from dataclasses import dataclass

from mysh.resolver import DEFAULT_SEARCH_DIRS


@dataclass
class ShellConfig:
    """Settings for one interpreter session."""

    prompt: str = "mysh> "
    banner: str = "Welcome to my shell!"
    search_dirs: tuple[str, ...] = DEFAULT_SEARCH_DIRS
    # None keeps every token; an int drops tokens past that count.
    max_tokens: int | None = None
