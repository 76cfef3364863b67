"""Encoding and decoding of the primitive field types of the hdb wire protocol."""

from __future__ import annotations

import re
import struct
from typing import BinaryIO, Callable, Optional, Tuple, Union

# Field sizes in bytes.
BOOLEAN_FIELD_SIZE = 1
TINYINT_FIELD_SIZE = 1
SMALLINT_FIELD_SIZE = 2
INTEGER_FIELD_SIZE = 4
BIGINT_FIELD_SIZE = 8
REAL_FIELD_SIZE = 4
DOUBLE_FIELD_SIZE = 8
DATE_FIELD_SIZE = 4
TIME_FIELD_SIZE = 4
TIMESTAMP_FIELD_SIZE = DATE_FIELD_SIZE + TIME_FIELD_SIZE
LONGDATE_FIELD_SIZE = 8
SECONDDATE_FIELD_SIZE = 8
DAYDATE_FIELD_SIZE = 4
SECONDTIME_FIELD_SIZE = 4
DECIMAL_FIELD_SIZE = 16
FIXED8_FIELD_SIZE = 8
FIXED12_FIELD_SIZE = 12
FIXED16_FIELD_SIZE = 16

# Length indicators of variable sized fields.
BYTES_LEN_IND_NULL_VALUE = 255
BYTES_LEN_IND_SMALL = 245
BYTES_LEN_IND_MEDIUM = 246
BYTES_LEN_IND_BIG = 247

_MAX_INT16 = (1 << 15) - 1
_MAX_INT32 = (1 << 31) - 1

DEC128_BIAS = 6176
_DEC_SIZE = 16
_SCRATCH_SIZE = 4096

_SUPPLEMENTARY = re.compile("[\U00010000-\U0010FFFF]")

Transform = Callable[[bytes], bytes]


def _split_surrogates(match: "re.Match[str]") -> str:
    cp = ord(match.group()) - 0x10000
    return chr(0xD800 + (cp >> 10)) + chr(0xDC00 + (cp & 0x3FF))


def utf8_to_cesu8(data: bytes) -> bytes:
    """Convert UTF-8 bytes into CESU-8 bytes."""
    text = data.decode("utf-8")
    return _SUPPLEMENTARY.sub(_split_surrogates, text).encode("utf-8", "surrogatepass")


def cesu8_to_utf8(data: bytes) -> bytes:
    """Convert CESU-8 bytes into UTF-8 bytes; raises UnicodeDecodeError on invalid input."""
    text = data.decode("utf-8", "surrogatepass")
    joined = text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")
    return joined.encode("utf-8")


def cesu8_size(s: Union[str, bytes]) -> int:
    """Return the number of bytes of the CESU-8 encoding of s (str or UTF-8 bytes)."""
    if isinstance(s, (bytes, bytearray)):
        s = bytes(s).decode("utf-8")
    size = 0
    for ch in s:
        cp = ord(ch)
        if cp < 0x80:
            size += 1
        elif cp < 0x800:
            size += 2
        elif cp < 0x10000:
            size += 3
        else:
            size += 6
    return size


def var_field_size(size: int) -> int:
    """Return the encoded size of a variable field holding size bytes of data."""
    if size <= BYTES_LEN_IND_SMALL:
        return size + 1
    if size <= _MAX_INT16:
        return size + 3
    if size <= _MAX_INT32:
        return size + 5
    raise ValueError(f"invalid variable field size {size}")


class Decoder:
    """Decodes hdb protocol data types from a binary stream."""

    def __init__(self, stream: BinaryIO, transform: Optional[Transform] = None):
        self._stream = stream
        self._transform = transform or cesu8_to_utf8
        self._count = 0
        self.dfv = 0

    @property
    def count(self) -> int:
        """Number of bytes read since creation or the last reset."""
        return self._count

    def reset_count(self) -> None:
        self._count = 0

    def _read(self, size: int) -> bytes:
        chunks = []
        remaining = size
        while remaining > 0:
            chunk = self._stream.read(remaining)
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
            self._count += len(chunk)
        data = b"".join(chunks)
        if len(data) < size:
            raise EOFError(f"unexpected end of data: read {len(data)} of {size} bytes")
        return data

    def skip(self, cnt: int) -> None:
        """Skip cnt bytes."""
        while cnt > 0:
            step = min(cnt, _SCRATCH_SIZE)
            self._read(step)
            cnt -= step

    def byte(self) -> int:
        return self._read(1)[0]

    def bytes(self, size: int) -> bytes:
        return self._read(size)

    def bool(self) -> bool:
        return self.byte() != 0

    def int8(self) -> int:
        return struct.unpack("<b", self._read(1))[0]

    def int16(self) -> int:
        return struct.unpack("<h", self._read(2))[0]

    def uint16(self, big_endian: bool = False) -> int:
        return struct.unpack(">H" if big_endian else "<H", self._read(2))[0]

    def int32(self) -> int:
        return struct.unpack("<i", self._read(4))[0]

    def uint32(self, big_endian: bool = False) -> int:
        return struct.unpack(">I" if big_endian else "<I", self._read(4))[0]

    def int64(self) -> int:
        return struct.unpack("<q", self._read(8))[0]

    def uint64(self) -> int:
        return struct.unpack("<Q", self._read(8))[0]

    def float32(self) -> float:
        return struct.unpack("<f", self._read(4))[0]

    def float64(self) -> float:
        return struct.unpack("<d", self._read(8))[0]

    def decimal(self) -> Optional[Tuple[int, int]]:
        """Decode a decimal128 value as (mantissa, exponent), or None for null."""
        bs = bytearray(self._read(_DEC_SIZE))
        if bs[15] & 0x70 == 0x70:
            return None
        if bs[15] & 0x60 == 0x60:
            raise ValueError(f"decimal: format (infinity, nan, ...) not supported: {bytes(bs)!r}")
        neg = bs[15] & 0x80 != 0
        exp = ((((bs[15] << 8) | bs[14]) << 1) & 0xFFFF) >> 2
        exp -= DEC128_BIAS
        bs[14] &= 0x01
        m = int.from_bytes(bs[:15], "little")
        return (-m if neg else m), exp

    def fixed(self, size: int) -> int:
        """Decode a two's complement fixed decimal mantissa of size bytes."""
        return int.from_bytes(self._read(size), "little", signed=True)

    def cesu8_bytes(self, size: int) -> bytes:
        """Read size bytes of CESU-8 data and return them transformed (UTF-8 by default)."""
        return self._transform(self._read(size))

    def _var_field_ind(self) -> Tuple[int, int, bool]:
        ind = self.byte()
        if ind == BYTES_LEN_IND_NULL_VALUE:
            return 1, 0, True
        if ind <= BYTES_LEN_IND_SMALL:
            return 1, ind, False
        if ind == BYTES_LEN_IND_MEDIUM:
            return 3, self.int16(), False
        if ind == BYTES_LEN_IND_BIG:
            return 5, self.int32(), False
        return 1, 0, False

    def li_bytes(self) -> Tuple[int, Optional[bytes]]:
        """Decode bytes with length indicator; returns (bytes consumed, data or None)."""
        n, size, null = self._var_field_ind()
        if null:
            return n, None
        return n + size, self._read(size)

    def li_string(self) -> Tuple[int, str]:
        n, b = self.li_bytes()
        return n, (b or b"").decode("utf-8", "surrogateescape")

    def cesu8_li_bytes(self) -> Tuple[int, Optional[bytes]]:
        n, size, null = self._var_field_ind()
        if null:
            return n, None
        return n + size, self.cesu8_bytes(size)

    def cesu8_li_string(self) -> Tuple[int, str]:
        n, b = self.cesu8_li_bytes()
        return n, (b or b"").decode("utf-8", "surrogateescape")


class Encoder:
    """Encodes hdb protocol data types into a binary stream."""

    def __init__(self, stream: BinaryIO, transform: Optional[Transform] = None):
        self._stream = stream
        self._transform = transform or utf8_to_cesu8

    def zeroes(self, cnt: int) -> None:
        while cnt > 0:
            step = min(cnt, _SCRATCH_SIZE)
            self._stream.write(bytes(step))
            cnt -= step

    def bytes(self, p: bytes) -> None:
        self._stream.write(p)

    def byte(self, b: int) -> None:
        self._stream.write(bytes((b & 0xFF,)))

    def bool(self, v: bool) -> None:
        self.byte(1 if v else 0)

    def int8(self, i: int) -> None:
        self._stream.write(struct.pack("<b", i))

    def int16(self, i: int) -> None:
        self._stream.write(struct.pack("<h", i))

    def uint16(self, i: int, big_endian: bool = False) -> None:
        self._stream.write(struct.pack(">H" if big_endian else "<H", i))

    def int32(self, i: int) -> None:
        self._stream.write(struct.pack("<i", i))

    def uint32(self, i: int) -> None:
        self._stream.write(struct.pack("<I", i))

    def int64(self, i: int) -> None:
        self._stream.write(struct.pack("<q", i))

    def uint64(self, i: int) -> None:
        self._stream.write(struct.pack("<Q", i))

    def float32(self, f: float) -> None:
        self._stream.write(struct.pack("<f", f))

    def float64(self, f: float) -> None:
        self._stream.write(struct.pack("<d", f))

    def decimal(self, m: int, exp: int) -> None:
        """Encode mantissa m and exponent exp as decimal128."""
        b = bytearray(abs(m).to_bytes(_DEC_SIZE, "little"))
        exp += DEC128_BIAS
        b[14] |= (exp << 1) & 0xFF
        b[15] = ((exp & 0xFFFF) >> 7) & 0xFF
        if m < 0:
            b[15] |= 0x80
        self._stream.write(bytes(b))

    def fixed(self, m: int, size: int) -> None:
        """Encode m as a two's complement little endian integer of size bytes."""
        mask = (1 << (8 * size)) - 1
        self._stream.write((m & mask).to_bytes(size, "little"))

    def string(self, s: str) -> None:
        self._stream.write(s.encode("utf-8"))

    def cesu8_bytes(self, p: bytes) -> int:
        """Write UTF-8 bytes as CESU-8 and return the number of bytes written."""
        data = self._transform(bytes(p))
        self._stream.write(data)
        return len(data)

    def cesu8_string(self, s: str) -> int:
        return self.cesu8_bytes(s.encode("utf-8"))

    def _var_field_ind(self, size: int) -> None:
        if size <= BYTES_LEN_IND_SMALL:
            self.byte(size)
        elif size <= _MAX_INT16:
            self.byte(BYTES_LEN_IND_MEDIUM)
            self.int16(size)
        elif size <= _MAX_INT32:
            self.byte(BYTES_LEN_IND_BIG)
            self.int32(size)
        else:
            raise ValueError(f"max argument length {size} of string exceeded")

    def li_bytes(self, p: bytes) -> None:
        self._var_field_ind(len(p))
        self.bytes(p)

    def li_string(self, s: str) -> None:
        data = s.encode("utf-8")
        self._var_field_ind(len(data))
        self.bytes(data)

    def cesu8_li_bytes(self, p: bytes) -> None:
        self._var_field_ind(cesu8_size(p))
        self.cesu8_bytes(p)

    def cesu8_li_string(self, s: str) -> None:
        self._var_field_ind(cesu8_size(s))
        self.cesu8_string(s)