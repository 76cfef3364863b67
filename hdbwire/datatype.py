"""Data types of hdb fields and the Python types values are scanned into."""

from __future__ import annotations

from datetime import datetime
from enum import IntEnum
from typing import Dict, Optional


class DataType(IntEnum):
    """The data types supported by the driver."""

    UNKNOWN = 0
    BOOLEAN = 1
    TINYINT = 2
    SMALLINT = 3
    INTEGER = 4
    BIGINT = 5
    REAL = 6
    DOUBLE = 7
    DECIMAL = 8
    TIME = 9
    STRING = 10
    BYTES = 11
    LOB = 12
    ROWS = 13

    def scan_type(self) -> type:
        """Return the Python type values of this data type are scanned into."""
        st = _scan_types.get(self)
        if st is None:
            raise LookupError(f"scan type for data type {self.name} not registered")
        return st


_scan_types: Dict[DataType, Optional[type]] = {
    DataType.UNKNOWN: object,
    DataType.BOOLEAN: bool,
    DataType.TINYINT: int,
    DataType.SMALLINT: int,
    DataType.INTEGER: int,
    DataType.BIGINT: int,
    DataType.REAL: float,
    DataType.DOUBLE: float,
    DataType.TIME: datetime,
    DataType.STRING: str,
    DataType.BYTES: bytes,
    DataType.DECIMAL: None,  # registered by the driver
    DataType.LOB: None,  # registered by the driver
    DataType.ROWS: list,
}


def register_scan_type(dt: DataType, scan_type: Optional[type]) -> bool:
    """Register the scan type of a driver owned data type (e.g. decimal, lob)."""
    _scan_types[DataType(dt)] = scan_type
    return True