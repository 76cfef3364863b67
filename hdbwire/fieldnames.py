"""Field names of result sets and parameters, addressed by offset."""

from __future__ import annotations

import bisect
from typing import Iterator, List, Tuple

from .encoding import Decoder

NO_FIELD_NAME = 0xFFFFFFFF


class FieldNames:
    """A sorted set of name offsets whose names are decoded in one pass."""

    def __init__(self) -> None:
        self._offsets: List[int] = []
        self._names: List[str] = []

    def __len__(self) -> int:
        return len(self._offsets)

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return iter(zip(self._offsets, self._names))

    def insert(self, ofs: int) -> None:
        """Register an offset; duplicates and the no-name marker are ignored."""
        if ofs == NO_FIELD_NAME:
            return
        i = bisect.bisect_left(self._offsets, ofs)
        if i < len(self._offsets) and self._offsets[i] == ofs:
            return
        self._offsets.insert(i, ofs)
        self._names.insert(i, "")

    def name(self, ofs: int) -> str:
        """Return the name at the first offset not below ofs, or an empty string."""
        i = bisect.bisect_left(self._offsets, ofs)
        return self._names[i] if i < len(self._names) else ""

    def decode(self, dec: Decoder) -> None:
        """Read the names of all registered offsets in ascending order."""
        pos = 0
        for i, ofs in enumerate(self._offsets):
            diff = ofs - pos
            if diff > 0:
                dec.skip(diff)
            n, s = dec.cesu8_li_string()
            self._names[i] = s
            pos += n + diff