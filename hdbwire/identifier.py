"""Identifiers such as schema or table names in hdb SQL statements."""

from __future__ import annotations

import re
import secrets
import string

_SIMPLE = re.compile(r"[_A-Z][_#$A-Z0-9]*")
_ALPHANUM = string.ascii_letters + string.digits

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote_char(ch: str) -> str:
    escaped = _ESCAPES.get(ch)
    if escaped is not None:
        return escaped
    if ch.isprintable():
        return ch
    cp = ord(ch)
    if cp < 0x80:
        return f"\\x{cp:02x}"
    if cp < 0x10000:
        return f"\\u{cp:04x}"
    return f"\\U{cp:08x}"


def _quote(s: str) -> str:
    return '"' + "".join(_quote_char(ch) for ch in s) + '"'


class Identifier(str):
    """A SQL identifier; renders unquoted when simple, double quoted otherwise."""

    def __str__(self) -> str:
        s = str.__str__(self)
        if _SIMPLE.fullmatch(s):
            return s
        return _quote(s)

    def __format__(self, format_spec: str) -> str:
        return format(str(self), format_spec)

    def __repr__(self) -> str:
        return f"Identifier({str.__repr__(self)})"


def random_identifier(prefix: str) -> Identifier:
    """Return an identifier made of prefix and 16 random alphanumeric characters."""
    return Identifier(prefix + "".join(secrets.choice(_ALPHANUM) for _ in range(16)))