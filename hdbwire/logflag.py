"""A boolean flag that switches logging output of a logger on or off."""

from __future__ import annotations

import logging
import sys
from typing import Optional

_TRUE_STRINGS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_STRINGS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


def _parse_bool(s: str) -> bool:
    if s in _TRUE_STRINGS:
        return True
    if s in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean syntax: {s!r}")


class LogFlag:
    """Enables logging of a logger to standard error, or discards its output."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger
        self._handler: Optional[logging.Handler] = None

    @property
    def enabled(self) -> bool:
        return self._logger is not None and not self._logger.disabled

    def __str__(self) -> str:
        return "true" if self.enabled else "false"

    def is_bool_flag(self) -> bool:
        return True

    def set(self, s: str) -> None:
        """Parse s as a boolean and enable or disable the logger accordingly."""
        value = _parse_bool(s)
        if self._logger is None:
            raise ValueError("log flag has no logger")
        if value:
            if self._handler is None:
                self._handler = logging.StreamHandler(sys.stderr)
                self._logger.addHandler(self._handler)
            self._logger.disabled = False
        else:
            if self._handler is not None:
                self._logger.removeHandler(self._handler)
                self._handler = None
            self._logger.disabled = True