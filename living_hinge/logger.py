# living_hinge/logger.py
# Print-based logging for the generator.
# One global logger; hinge instances log through a child that carries their name,
# so interleaved output from several instances stays readable.

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Logger:
    enabled: bool = True
    verbose: bool = False
    prefix: str = "[HINGE]"
    parent: Optional["Logger"] = field(default=None, repr=False)

    def _on(self) -> bool:
        return self.parent._on() if self.parent is not None else self.enabled

    def _loud(self) -> bool:
        return self.parent._loud() if self.parent is not None else self.verbose

    def child(self, name: str) -> "Logger":
        """Logger sharing this one's switches, with `name` appended to the prefix."""
        base = self.prefix[:-1] if self.prefix.endswith("]") else self.prefix
        return Logger(prefix=f"{base}:{name}]", parent=self)

    def debug(self, msg: str) -> None:
        if self._on() and self._loud():
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def info(self, msg: str) -> None:
        if self._on():
            print(f"{self.prefix} {msg}", file=sys.stdout)

    def warn(self, msg: str) -> None:
        if self._on():
            print(f"{self.prefix} WARNING: {msg}", file=sys.stderr)

    def error(self, msg: str) -> None:
        print(f"{self.prefix} ERROR: {msg}", file=sys.stderr)


LOGGER = Logger(enabled=True)


def set_enabled(flag: bool) -> None:
    LOGGER.enabled = bool(flag)


def set_verbose(flag: bool) -> None:
    LOGGER.verbose = bool(flag)


def get_logger(name: Optional[str] = None) -> Logger:
    return LOGGER.child(name) if name else LOGGER
