"""Errors reported by the database server and decoding errors."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional

from .encoding import Decoder

HDB_WARNING = 0
HDB_ERROR = 1
HDB_FATAL_ERROR = 2

HDB_ERR_AUTHENTICATION_FAILED = 10

SQL_STATE_SIZE = 5
# Fixed length fields (4 + 4 + 4 + 1 + 5 = 18 bytes) modulo 8.
_FIX_LENGTH = 2
_ALIGNMENT = 8


class FatalError(Exception):
    """Signals that the connection is broken and must not be used further."""


class ErrorLevel(IntEnum):
    WARNING = 0
    ERROR = 1
    FATAL_ERROR = 2

    def __str__(self) -> str:
        return _LEVEL_NAMES[self]


_LEVEL_NAMES = {
    ErrorLevel.WARNING: "Warning",
    ErrorLevel.ERROR: "Error",
    ErrorLevel.FATAL_ERROR: "Fatal Error",
}


def _level_name(level: int) -> str:
    try:
        return str(ErrorLevel(level))
    except ValueError:
        return ""


def _pad_bytes(size: int) -> int:
    rest = size % _ALIGNMENT
    return _ALIGNMENT - rest if rest else 0


@dataclass
class HdbError:
    """A single error sent by the database server."""

    code: int = 0
    position: int = 0
    text_length: int = 0
    level: int = 0
    sql_state: bytes = b"\x00" * SQL_STATE_SIZE
    stmt_no: int = 0
    text: bytes = b""

    def __str__(self) -> str:
        text = self.text.decode("utf-8", "replace")
        level = _level_name(self.level)
        if self.stmt_no != -1:
            return f"SQL {level} {self.code} - {text} (statement no: {self.stmt_no})"
        return f"SQL {level} {self.code} - {text}"


class HdbErrors(Exception):
    """The collection of errors returned by the server; accessors refer to the current index."""

    def __init__(self, errors: Optional[List[HdbError]] = None) -> None:
        super().__init__()
        self.errors: List[HdbError] = list(errors or [])
        self.idx = 0

    def __str__(self) -> str:
        return str(self.errors[self.idx]) if self.errors else ""

    def __iter__(self) -> Iterator[HdbError]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    @property
    def num_error(self) -> int:
        return len(self.errors)

    @property
    def _current(self) -> HdbError:
        return self.errors[self.idx]

    @property
    def stmt_no(self) -> int:
        return self._current.stmt_no

    @property
    def code(self) -> int:
        return self._current.code

    @property
    def position(self) -> int:
        return self._current.position

    @property
    def level(self) -> int:
        return self._current.level

    @property
    def text(self) -> str:
        return self._current.text.decode("utf-8", "replace")

    @property
    def is_warning(self) -> bool:
        return self._current.level == ErrorLevel.WARNING

    @property
    def is_error(self) -> bool:
        return self._current.level == ErrorLevel.ERROR

    @property
    def is_fatal(self) -> bool:
        return self._current.level == ErrorLevel.FATAL_ERROR

    def set_idx(self, idx: int) -> None:
        """Select the current error, clamping idx into the valid range."""
        if idx < 0:
            self.idx = 0
        elif idx >= self.num_error:
            self.idx = self.num_error - 1
        else:
            self.idx = idx

    def set_stmt_no(self, idx: int, no: int) -> None:
        if 0 <= idx < self.num_error:
            self.errors[idx].stmt_no = no

    def set_stmts_no_ofs(self, ofs: int) -> None:
        """Add an offset to the statement numbers of all errors (bulk operations)."""
        for err in self.errors:
            err.stmt_no += ofs

    def has_warnings(self) -> bool:
        """Return True if every error in the collection is a warning."""
        return all(err.level == ErrorLevel.WARNING for err in self.errors)

    def decode(self, dec: Decoder, num_arg: int) -> None:
        """Decode num_arg errors from dec, replacing the current collection."""
        self.idx = 0
        self.errors = []
        for _ in range(num_arg):
            err = HdbError()
            err.code = dec.int32()
            err.position = dec.int32()
            err.text_length = dec.int32()
            err.level = dec.int8()
            err.sql_state = dec.bytes(SQL_STATE_SIZE)
            # Read as raw bytes: some server messages hold invalid CESU-8.
            err.text = dec.bytes(err.text_length)
            self.errors.append(err)
            if num_arg == 1:
                # A single error is followed by one extra byte rather than padding.
                dec.skip(1)
                break
            pad = _pad_bytes(_FIX_LENGTH + err.text_length)
            if pad:
                dec.skip(pad)


class DecodeError(Exception):
    """An error decoding a field value of a result row."""

    def __init__(self, row: int, field_name: str, text: str) -> None:
        super().__init__(row, field_name, text)
        self.row = row
        self.field_name = field_name
        self.text = text

    def __str__(self) -> str:
        return f"decode error: {self.text} row: {self.row} fieldname: {self.field_name}"


class DecodeErrors(List[DecodeError]):
    """A list of decoding errors."""

    def row_error(self, row: int) -> Optional[DecodeError]:
        """Return the first error assigned to row, or None."""
        return next((err for err in self if err.row == row), None)