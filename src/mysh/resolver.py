"""Map program names to executable paths over a fixed directory list."""

import logging
import os
from collections.abc import Iterable

log = logging.getLogger(__name__)

DEFAULT_SEARCH_DIRS: tuple[str, ...] = ("/usr/local/bin", "/usr/bin", "/bin")


def is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


class ProgramResolver:
    """Look up programs in an ordered list of directories.

    PATH is never consulted; the directory list is the only search
    path. A result is only known to be executable at lookup time.
    """

    def __init__(self, search_dirs: Iterable[str] = DEFAULT_SEARCH_DIRS) -> None:
        self.search_dirs: tuple[str, ...] = tuple(search_dirs)

    def resolve(self, name: str) -> str | None:
        """Return an executable path for *name*, or None if there is none.

        Names containing a path separator are checked as given.
        """
        if not name:
            return None

        if os.sep in name:
            return name if is_executable(name) else None

        for directory in self.search_dirs:
            candidate = os.path.join(directory, name)
            log.debug("probing %s", candidate)
            if is_executable(candidate):
                return candidate
        return None

    def programs(self) -> set[str]:
        """Names of every executable found in the search directories."""
        names: set[str] = set()
        for directory in self.search_dirs:
            try:
                entries = os.listdir(directory)
            except OSError:
                continue
            names.update(e for e in entries if is_executable(os.path.join(directory, e)))
        return names
