"""
Weight tables for the n-tuple network and their binary file format.

Layout (little-endian):

    uint32              number of tables
    per table:
        uint64          number of entries
        float32 * n     entries
"""
import struct
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np

WEIGHT_DTYPE = np.dtype('<f4')

_COUNT = struct.Struct('<I')
_LENGTH = struct.Struct('<Q')


def new_table(size: int) -> np.ndarray:
    """Allocate a zero-initialized weight table."""
    if size <= 0:
        raise ValueError(f"Weight table size must be positive, got {size}")
    return np.zeros(size, dtype=WEIGHT_DTYPE)


def serialize_table(table: np.ndarray) -> bytes:
    """Encode one table as its length followed by its entries."""
    data = np.ascontiguousarray(table, dtype=WEIGHT_DTYPE)
    return _LENGTH.pack(data.size) + data.tobytes()


def deserialize_table(data: bytes, offset: int = 0) -> Tuple[np.ndarray, int]:
    """
    Decode one table from `data` starting at `offset`.

    Returns:
        Tuple of (table, offset just past the table)

    Raises:
        ValueError: If the data ends before the table does
    """
    if len(data) < offset + _LENGTH.size:
        raise ValueError("Truncated weight data: missing table length")
    (length,) = _LENGTH.unpack_from(data, offset)
    offset += _LENGTH.size
    end = offset + length * WEIGHT_DTYPE.itemsize
    if len(data) < end:
        raise ValueError(f"Truncated weight data: table of {length} entries is incomplete")
    table = np.frombuffer(data, dtype=WEIGHT_DTYPE, count=length, offset=offset).copy()
    return table, end


def serialize_weights(tables: Sequence[np.ndarray]) -> bytes:
    return _COUNT.pack(len(tables)) + b''.join(serialize_table(t) for t in tables)


def deserialize_weights(data: bytes) -> List[np.ndarray]:
    if len(data) < _COUNT.size:
        raise ValueError("Truncated weight data: missing table count")
    (count,) = _COUNT.unpack_from(data, 0)
    offset = _COUNT.size
    tables = []
    for _ in range(count):
        table, offset = deserialize_table(data, offset)
        tables.append(table)
    if offset != len(data):
        raise ValueError(f"Unexpected {len(data) - offset} trailing bytes in weight data")
    return tables


def save_weights(path: Union[str, Path], tables: Sequence[np.ndarray]) -> Path:
    """
    Write all tables to `path`, replacing any existing file.

    Raises:
        OSError: If the file cannot be opened for writing
    """
    path = Path(path)
    with open(path, 'wb') as f:
        f.write(serialize_weights(tables))
    return path


def load_weights(path: Union[str, Path]) -> List[np.ndarray]:
    """
    Read every table stored in `path`.

    Raises:
        OSError: If the file cannot be opened
        ValueError: If the file is truncated or has trailing data
    """
    with open(path, 'rb') as f:
        data = f.read()
    return deserialize_weights(data)
