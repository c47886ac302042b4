# roadmap_render/logger.py
# Print-based diagnostics shared by the CLI, the interactive view and the API.
# - info/warn can be silenced (--quiet); errors always go out
# - debug only prints in verbose mode (interaction state changes, fades)
# - child("api") gives a scoped prefix like "[ROADMAP:api]" that follows the parent's switches

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Optional, TextIO


@dataclass
class Logger:
    enabled: bool = True
    verbose: bool = False
    prefix: str = "[ROADMAP]"
    out: Optional[TextIO] = None
    err: Optional[TextIO] = None
    parent: Optional["Logger"] = field(default=None, repr=False)

    def _root(self) -> "Logger":
        return self.parent._root() if self.parent is not None else self

    def _emit(self, line: str, to_err: bool) -> None:
        root = self._root()
        stream = (root.err or sys.stderr) if to_err else (root.out or sys.stdout)
        print(f"{self.prefix} {line}", file=stream)

    def debug(self, msg: str) -> None:
        root = self._root()
        if root.enabled and root.verbose:
            self._emit(f"debug: {msg}", to_err=False)

    def info(self, msg: str) -> None:
        if self._root().enabled:
            self._emit(msg, to_err=False)

    def warn(self, msg: str) -> None:
        if self._root().enabled:
            self._emit(f"WARNING: {msg}", to_err=True)

    def error(self, msg: str) -> None:
        self._emit(f"ERROR: {msg}", to_err=True)

    def child(self, scope: str) -> "Logger":
        base = self.prefix[:-1] if self.prefix.endswith("]") else self.prefix
        return Logger(prefix=f"{base}:{scope}]", parent=self)


LOGGER = Logger()


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def set_verbose(flag: bool) -> None:
    LOGGER.verbose = bool(flag)


def get_logger(scope: str = "") -> Logger:
    return LOGGER.child(scope) if scope else LOGGER
