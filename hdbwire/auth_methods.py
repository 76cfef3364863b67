"""Authentication parameters and the JWT and session cookie authentication methods."""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple, Union

from .encoding import (
    INTEGER_FIELD_SIZE,
    SMALLINT_FIELD_SIZE,
    Decoder,
    Encoder,
    cesu8_size,
    var_field_size,
)

# Authentication method types.
MT_SCRAMSHA256 = "SCRAMSHA256"
MT_SCRAMPBKDF2SHA256 = "SCRAMPBKDF2SHA256"
MT_X509 = "X509"
MT_JWT = "JWT"
MT_SESSION_COOKIE = "SessionCookie"

# Authentication method orders (lower values are offered first).
MO_SESSION_COOKIE = 0
MO_X509 = 1
MO_JWT = 2
MO_SCRAMPBKDF2SHA256 = 3
MO_SCRAMSHA256 = 4

_MAX_SUB_PRMS_SIZE_1_BYTE = 245
_SUB_PRMS_SIZE_2_BYTE_INDICATOR = 255
_MAX_UINT16 = 0xFFFF
_MAX_INT16 = 0x7FFF


class AuthError(Exception):
    """Raised when authentication data is invalid or cannot be encoded."""


def _check_method_type(mt: str, expected: str) -> None:
    if mt != expected:
        raise AuthError(f"invalid method {mt} - expected {expected}")


def _encode_sub_prms_size(enc: Encoder, size: int) -> None:
    if size <= _MAX_SUB_PRMS_SIZE_1_BYTE:
        enc.byte(size)
    elif size <= _MAX_UINT16:
        enc.byte(_SUB_PRMS_SIZE_2_BYTE_INDICATOR)
        enc.uint16(size, True)
    else:
        raise AuthError(f"invalid subparameter size {size} - maximum {_MAX_UINT16}")


PrmValue = Union[bytes, str, "Prms"]


class Prms:
    """An ordered list of authentication parameters.

    Byte strings are sent as raw bytes, text as CESU-8 and nested Prms as
    sub parameters prefixed by their size.
    """

    def __init__(self) -> None:
        self._items: List[PrmValue] = []

    def __repr__(self) -> str:
        return f"Prms({self._items!r})"

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[PrmValue]:
        return iter(self._items)

    def add_cesu8_string(self, s: str) -> None:
        """Add a unicode string parameter, sent CESU-8 encoded."""
        self._items.append(s)

    def add_empty(self) -> None:
        self._items.append(b"")

    def add_bytes(self, b: bytes) -> None:
        self._items.append(bytes(b))

    def add_string(self, s: str) -> None:
        """Add a string parameter sent as plain bytes."""
        self._items.append(s.encode("utf-8"))

    def add_prms(self) -> "Prms":
        """Add and return a nested parameter list."""
        prms = Prms()
        self._items.append(prms)
        return prms

    def size(self) -> int:
        """Return the encoded size in bytes."""
        total = SMALLINT_FIELD_SIZE
        for item in self._items:
            if isinstance(item, (bytes, bytearray)):
                total += var_field_size(len(item))
            elif isinstance(item, str):
                total += var_field_size(cesu8_size(item))
            elif isinstance(item, Prms):
                sub_size = item.size()
                field_size = 3 if sub_size > _MAX_SUB_PRMS_SIZE_1_BYTE else 1
                total += sub_size + field_size
            else:
                raise TypeError(f"invalid parameter {item!r}")
        return total

    def encode(self, enc: Encoder) -> None:
        num = len(self._items)
        if num > _MAX_INT16:
            raise AuthError(f"invalid number of parameters {num} - maximum {_MAX_INT16}")
        enc.int16(num)
        for item in self._items:
            if isinstance(item, (bytes, bytearray)):
                enc.li_bytes(bytes(item))
            elif isinstance(item, str):
                enc.cesu8_li_string(item)
            elif isinstance(item, Prms):
                _encode_sub_prms_size(enc, item.size())
                item.encode(enc)
            else:
                raise TypeError(f"invalid parameter {item!r}")


class AuthDecoder:
    """Reads authentication parameters from a protocol decoder."""

    def __init__(self, dec: Decoder) -> None:
        self._dec = dec

    def num_prm(self, expected: int) -> None:
        """Read the parameter count and raise AuthError if it differs from expected."""
        num = self._dec.int16()
        if num != expected:
            raise AuthError(f"invalid number of parameters {num} - expected {expected}")

    def string(self) -> str:
        _, s = self._dec.li_string()
        return s

    def cesu8_string(self) -> str:
        _, s = self._dec.cesu8_li_string()
        return s

    def bytes(self) -> bytes:
        _, b = self._dec.li_bytes()
        return b if b is not None else b""

    def big_uint32(self) -> int:
        """Read a size prefixed big endian uint32."""
        size = self._dec.byte()
        if size != INTEGER_FIELD_SIZE:
            raise AuthError(f"invalid auth uint32 size {size} - expected {INTEGER_FIELD_SIZE}")
        return self._dec.uint32(True)

    def sub_size(self) -> int:
        """Read the size of a following sub parameter list."""
        b = self._dec.byte()
        if b <= _MAX_SUB_PRMS_SIZE_1_BYTE:
            return b
        if b == _SUB_PRMS_SIZE_2_BYTE_INDICATOR:
            return self._dec.uint16(True)
        raise AuthError(f"invalid sub parameter size indicator {b}")


class JWT:
    """JSON web token authentication."""

    typ = MT_JWT
    order = MO_JWT

    def __init__(self, token: str) -> None:
        self.token = token
        self.logonname = ""
        self._cookie: Optional[bytes] = None

    def __str__(self) -> str:
        return f"method type {self.typ} token {self.token}"

    @property
    def cookie(self) -> Tuple[str, Optional[bytes]]:
        """The logon name and session cookie returned by the server."""
        return self.logonname, self._cookie

    def prepare_init_req(self, prms: Prms) -> None:
        prms.add_string(self.typ)
        prms.add_string(self.token)

    def init_rep_decode(self, d: AuthDecoder) -> None:
        self.logonname = d.string()

    def prepare_final_req(self, prms: Prms) -> None:
        prms.add_cesu8_string(self.logonname)
        prms.add_string(self.typ)
        prms.add_empty()

    def final_rep_decode(self, d: AuthDecoder) -> None:
        d.num_prm(2)
        _check_method_type(d.string(), self.typ)
        self._cookie = d.bytes()


class SessionCookie:
    """Session cookie authentication used to reconnect."""

    typ = MT_SESSION_COOKIE
    order = MO_SESSION_COOKIE

    def __init__(self, cookie: bytes, logonname: str, client_id: str) -> None:
        self.cookie = bytes(cookie)
        self.logonname = logonname
        self.client_id = client_id
        self.init_replied = False

    def __str__(self) -> str:
        return f"method type {self.typ} cookie {list(self.cookie)}"

    def prepare_init_req(self, prms: Prms) -> None:
        prms.add_string(self.typ)
        prms.add_bytes(self.cookie + self.client_id.encode("utf-8"))

    def init_rep_decode(self, d: AuthDecoder) -> None:
        """Record the init reply; the server sends no method data to read."""
        self.init_replied = True

    def prepare_final_req(self, prms: Prms) -> None:
        prms.add_cesu8_string(self.logonname)
        prms.add_string(self.typ)
        prms.add_empty()

    def final_rep_decode(self, d: AuthDecoder) -> None:
        d.num_prm(2)
        _check_method_type(d.string(), self.typ)
        d.bytes()