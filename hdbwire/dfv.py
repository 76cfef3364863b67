"""Data format versions of the hdb protocol."""

from __future__ import annotations

from typing import List

DFV_LEVEL0 = 0  # base data format
DFV_LEVEL1 = 1  # eval types support all data types
DFV_LEVEL2 = 2  # reserved, broken, do not use
DFV_LEVEL3 = 3  # additional types longdate, seconddate, daydate, secondtime
DFV_LEVEL4 = 4  # generic support for new date/time types
DFV_LEVEL5 = 5  # spatial types on request
DFV_LEVEL6 = 6  # BINTEXT
DFV_LEVEL7 = 7  # with boolean support
DFV_LEVEL8 = 8  # with FIXED8/12/16 support

_DEFAULT_DFVS = (DFV_LEVEL8,)
_SUPPORTED_DFVS = (DFV_LEVEL1, DFV_LEVEL4, DFV_LEVEL6, DFV_LEVEL8)


def supported_dfvs(default_only: bool = False) -> List[int]:
    """Return the default data format version only, or all supported ones."""
    return list(_DEFAULT_DFVS if default_only else _SUPPORTED_DFVS)


def is_supported_dfv(dfv: int) -> bool:
    """Return True if the data format version is supported by the driver."""
    return dfv in _SUPPORTED_DFVS