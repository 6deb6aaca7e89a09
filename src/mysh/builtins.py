"""Built-in shell commands."""

import os
import sys
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mysh.shell import Shell

BuiltinHandler = Callable[[list[str], "Shell"], int]

EXIT = "exit"


def _wrong_arguments(name: str) -> int:
    print(f"{name}: wrong number of arguments", file=sys.stderr)
    return 1


def builtin_cd(args: list[str], shell: "Shell") -> int:
    if len(args) != 1:
        return _wrong_arguments("cd")
    target = args[0]
    try:
        os.chdir(target)
    except OSError as e:
        print(f"cd: {e.strerror}: {target}", file=sys.stderr)
        return 1
    return 0


def builtin_pwd(args: list[str], shell: "Shell") -> int:
    if args:
        return _wrong_arguments("pwd")
    try:
        print(os.getcwd())
    except OSError as e:
        print(f"pwd: {e.strerror}", file=sys.stderr)
        return 1
    return 0


def builtin_which(args: list[str], shell: "Shell") -> int:
    if len(args) != 1:
        return _wrong_arguments("which")
    name = args[0]
    path = shell.resolver.resolve(name)
    if path is None:
        print(f"which: command not found: {name}", file=sys.stderr)
        return 1
    print(path)
    return 0


def builtin_exit(args: list[str], shell: "Shell") -> int:
    print("mysh: exiting")
    sys.exit(0)


BUILTIN_REGISTRY: dict[str, BuiltinHandler] = {
    "cd": builtin_cd,
    "pwd": builtin_pwd,
    "which": builtin_which,
    "exit": builtin_exit,
}
