"""A single-file store of numbered variable-length records.

Layout (little-endian 32-bit integers)::

    count, capacity, capacity * record offset, records...

Each record is a flag byte (0 dead, 1 live), a length and the data.
Rewriting a record marks the old copy dead and appends a new copy.
"""

from __future__ import annotations

import os
import struct
from typing import Iterator

_ADDR = struct.Struct("<i")
_LEN = struct.Struct("<i")
_HEADER = struct.Struct("<ii")

_FLAG_NULL = 0
_FLAG_REAL = 1

MAX_FILE_SIZE = 128 * 1024 * 1024
_MIN_CAPACITY = 8


class RecordFileError(Exception):
    """The record file is malformed or cannot grow further."""


class RecordFile:
    """Indexed record file; created empty if the path does not exist."""

    def __init__(self, path) -> None:
        self.path = os.fspath(path)
        if not os.path.exists(self.path):
            with open(self.path, "wb") as fresh:
                fresh.write(_HEADER.pack(0, 0))
        self._file = open(self.path, "r+b")
        try:
            self._load()
        except BaseException:
            self._file.close()
            raise

    def _load(self) -> None:
        header = self._file.read(_HEADER.size)
        if len(header) != _HEADER.size:
            raise RecordFileError("truncated header")
        count, capacity = _HEADER.unpack(header)
        if count < 0 or capacity < count:
            raise RecordFileError("bad header")
        raw = self._file.read(count * _ADDR.size)
        if len(raw) != count * _ADDR.size:
            raise RecordFileError("truncated index")
        self._index = [off for (off,) in _ADDR.iter_unpack(raw)]
        self._capacity = capacity

    def __enter__(self) -> "RecordFile":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __len__(self) -> int:
        return len(self._index)

    def __getitem__(self, index: int) -> bytes:
        return self.read(index)

    def __iter__(self) -> Iterator[bytes]:
        for i in range(len(self)):
            yield self.read(i)

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def _size(self) -> int:
        self._file.seek(0, os.SEEK_END)
        return self._file.tell()

    def _read_at(self, offset: int, size: int) -> bytes:
        self._file.seek(offset)
        data = self._file.read(size)
        if len(data) != size:
            raise RecordFileError(f"short read at offset {offset}")
        return data

    def _write_at(self, offset: int, data: bytes) -> None:
        self._file.seek(offset)
        self._file.write(data)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._index):
            raise IndexError(f"record {index} out of range")

    @staticmethod
    def _record(data: bytes) -> bytes:
        return bytes([_FLAG_REAL]) + _LEN.pack(len(data)) + data

    def read(self, index: int) -> bytes:
        """Data of record ``index``; a dead or unset record reads as empty."""
        self._check_index(index)
        offset = self._index[index]
        if offset == 0:
            return b""
        flag = self._read_at(offset, 1)[0]
        if flag == _FLAG_NULL:
            return b""
        if flag != _FLAG_REAL:
            raise RecordFileError(f"bad record flag {flag} at offset {offset}")
        (length,) = _LEN.unpack(self._read_at(offset + 1, _LEN.size))
        if length < 0:
            raise RecordFileError(f"bad record length at offset {offset}")
        return self._read_at(offset + 1 + _LEN.size, length)

    def write(self, index: int, data: bytes) -> None:
        """Replace record ``index`` with ``data``."""
        self._check_index(index)
        data = bytes(data)
        old = self._index[index]
        if old:
            self._write_at(old, bytes([_FLAG_NULL]))
        offset = self._size()
        self._write_at(offset, self._record(data))
        self._index[index] = offset
        self._write_at(self.index_offset(index), _ADDR.pack(offset))
        self._file.flush()

    def append(self, data: bytes) -> int:
        """Add a record at the end and return its number."""
        data = bytes(data)
        if len(self._index) >= self._capacity:
            self.extend()
        offset = self._size()
        self._write_at(offset, self._record(data))
        self._index.append(offset)
        number = len(self._index) - 1
        self._write_at(self.index_offset(number), _ADDR.pack(offset))
        self._write_at(0, _ADDR.pack(len(self._index)))
        self._file.flush()
        return number

    def extend(self) -> None:
        """Grow the index area, moving the record data behind it."""
        size = self._size()
        if size >= MAX_FILE_SIZE:
            raise RecordFileError("record file too large to extend")
        start = self.data_offset()
        tail = self._read_at(start, size - start)
        new_capacity = max(_MIN_CAPACITY, len(self._index) * 2)
        shift = (new_capacity - self._capacity) * _ADDR.size
        self._index = [off + shift if off else 0 for off in self._index]
        self._capacity = new_capacity
        self._write_at(_ADDR.size, _ADDR.pack(new_capacity))
        slots = self._index + [0] * (new_capacity - len(self._index))
        self._write_at(self.index_offset(0), b"".join(_ADDR.pack(o) for o in slots))
        self._write_at(self.data_offset(), tail)
        self._file.flush()

    def find(self, data: bytes) -> int:
        """Number of the first record equal to ``data``."""
        data = bytes(data)
        for i, record in enumerate(self):
            if record == data:
                return i
        raise ValueError("record not found")

    def data_offset(self) -> int:
        """File offset where record data begins."""
        return self._capacity * _ADDR.size + _HEADER.size

    @staticmethod
    def index_offset(index: int) -> int:
        """File offset of the index slot for record ``index``."""
        return _HEADER.size + _ADDR.size * index