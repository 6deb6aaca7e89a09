"""Main shell loop: prompt, read, parse, dispatch, repeat."""

import argparse
import logging
import sys
from collections.abc import Iterable

from mysh.builtins import BUILTIN_REGISTRY, EXIT, builtin_exit
from mysh.completion import setup_completion
from mysh.config import ShellConfig
from mysh.pipeline import execute_pipeline, expand_commands, parse_command_line
from mysh.process import SpawnError
from mysh.resolver import ProgramResolver
from mysh.tokenizer import has_operators, tokenize

log = logging.getLogger(__name__)


class Shell:
    """Shell state and read loops."""

    def __init__(self, config: ShellConfig | None = None) -> None:
        self.config = config or ShellConfig()
        self.resolver = ProgramResolver(self.config.search_dirs)
        self.last_exit_code: int = 0

    def run_command(self, line: str) -> None:
        """Full processing pipeline:

        1. Tokenize on whitespace
        2. Dispatch builtins (cd, pwd, which, plain exit)
        3. Extract redirections and split on the pipe
        4. Expand globs in each stage
        5. Spawn, wait, and honour a trailing exit

        Raises SpawnError when no process can be created.
        """
        tokens = tokenize(line, self.config.max_tokens)
        if not tokens or tokens[0].startswith("#"):
            return

        name = tokens[0]
        if name in BUILTIN_REGISTRY and not (name == EXIT and has_operators(tokens)):
            self.last_exit_code = BUILTIN_REGISTRY[name](tokens[1:], self)
            return

        try:
            commands = parse_command_line(tokens)
        except ValueError as e:
            print(f"mysh: {e}", file=sys.stderr)
            self.last_exit_code = 2
            return

        commands = expand_commands(commands)
        self.last_exit_code = execute_pipeline(commands, self.resolver)
        log.debug("line finished with status %d", self.last_exit_code)

        # exit on a line with operators only takes effect once the line ran
        if commands[0].argv[0] == EXIT:
            builtin_exit(commands[0].argv[1:], self)

    def run_lines(self, lines: Iterable[str]) -> None:
        """Batch mode: run each line without prompting."""
        for line in lines:
            self.run_command(line)

    def run(self) -> None:
        """Interactive loop."""
        setup_completion(self.resolver)
        print(self.config.banner)

        while True:
            try:
                line = input(self.config.prompt)
            except (EOFError, KeyboardInterrupt):
                print()
                break

            self.run_command(line)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = _ArgumentParser(
        prog="mysh",
        description="mysh - a small command interpreter",
    )
    parser.add_argument(
        "script",
        nargs="?",
        help="run commands from this file instead of prompting",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="log tokenization, lookups and process starts to stderr",
    )
    return parser.parse_args(args)


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="mysh: %(name)s: %(message)s",
        stream=sys.stderr,
    )

    shell = Shell()
    try:
        if args.script is None:
            shell.run()
        else:
            try:
                script = open(  # noqa: SIM115
                    args.script,
                    encoding=sys.getfilesystemencoding(),
                    errors="surrogateescape",
                )
            except OSError as e:
                print(f"mysh: {args.script}: {e.strerror}", file=sys.stderr)
                sys.exit(1)
            with script:
                shell.run_lines(script)
    except SpawnError as e:
        print(f"mysh: {e}", file=sys.stderr)
        sys.exit(1)
