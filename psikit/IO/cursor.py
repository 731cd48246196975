# -*- coding: utf-8 -*-
"""
Byte Cursor - Seekable, endianness-aware binary reader.

Wraps a file path, an open binary file object, or a bytes-like buffer
and exposes typed fixed-width reads (integers, IEEE floats, fixed-length
strings) plus absolute positioning.  The cursor carries no format
knowledge; parsers set the byte order and issue reads against it.

Every read is bounds-checked against the stream length, so a truncated
file surfaces as a ``CursorError`` instead of a short read.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import io
import os
import struct
from pathlib import Path
from typing import BinaryIO, Union

# psikit internal
from psikit.exceptions import CursorError

Source = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]

_BYTE_ORDER_PREFIX = {'little': '<', 'big': '>'}


class ByteCursor:
    """Random-access typed reader over a binary stream.

    Parameters
    ----------
    source : str, Path, bytes-like, or binary file object
        Backing data.  Paths are opened (and owned) by the cursor;
        buffers are wrapped in ``io.BytesIO``; file objects are used as
        given and must be seekable.
    order : str
        Byte order for multi-byte reads, ``'little'`` or ``'big'``.
        Default ``'little'``.

    Examples
    --------
    >>> with ByteCursor(b'psi\\x01\\x00') as cur:
    ...     cur.read_string(3)
    ...     cur.read_uint16()
    'psi'
    1
    """

    def __init__(self, source: Source, order: str = 'little') -> None:
        self._owns_handle = False
        if isinstance(source, (str, Path)):
            self._handle: BinaryIO = open(str(source), 'rb')
            self._owns_handle = True
        elif isinstance(source, (bytes, bytearray, memoryview)):
            self._handle = io.BytesIO(bytes(source))
        else:
            if not source.seekable():
                raise CursorError("Backing stream must be seekable")
            self._handle = source

        self._handle.seek(0, os.SEEK_END)
        self._length = self._handle.tell()
        self._handle.seek(0)
        self.order = order

    # ----------------------------------------------------------------
    # Configuration
    # ----------------------------------------------------------------

    @property
    def order(self) -> str:
        """Byte order used by multi-byte reads."""
        return self._order

    @order.setter
    def order(self, value: str) -> None:
        if value not in _BYTE_ORDER_PREFIX:
            raise ValueError(
                f"Byte order must be 'little' or 'big', got {value!r}"
            )
        self._order = value
        self._prefix = _BYTE_ORDER_PREFIX[value]

    # ----------------------------------------------------------------
    # Positioning
    # ----------------------------------------------------------------

    def length(self) -> int:
        """Total stream length in bytes."""
        return self._length

    def offset(self) -> int:
        """Current absolute position."""
        return self._handle.tell()

    def remaining(self) -> int:
        """Bytes between the current position and the end of stream."""
        return self._length - self.offset()

    def seek(self, offset: int) -> None:
        """Move to an absolute position.

        Seeking to ``length()`` is allowed (end of stream); anything
        beyond or before the stream raises ``CursorError``.
        """
        if offset < 0 or offset > self._length:
            raise CursorError(
                f"Seek to offset {offset} outside stream of length "
                f"{self._length}"
            )
        self._handle.seek(offset)

    def skip(self, count: int) -> None:
        """Advance the position by ``count`` bytes."""
        self.seek(self.offset() + count)

    # ----------------------------------------------------------------
    # Raw reads
    # ----------------------------------------------------------------

    def read_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` bytes.

        Raises
        ------
        CursorError
            If fewer than ``count`` bytes remain.
        """
        if count < 0:
            raise CursorError(f"Negative read size {count}")
        start = self.offset()
        if start + count > self._length:
            raise CursorError(
                f"Read of {count} bytes at offset {start} exceeds stream "
                f"length {self._length}"
            )
        return self._handle.read(count)

    def read_string(self, count: int) -> str:
        """Read a fixed-width string of ``count`` bytes.

        The field is not assumed to be null-terminated; bytes are
        decoded as latin-1 and trailing NULs are stripped.
        """
        return self.read_bytes(count).decode('latin-1').rstrip('\x00')

    def _unpack(self, code: str):
        size = struct.calcsize(code)
        return struct.unpack(self._prefix + code, self.read_bytes(size))[0]

    # ----------------------------------------------------------------
    # Typed reads
    # ----------------------------------------------------------------

    def read_int8(self) -> int:
        return self._unpack('b')

    def read_uint8(self) -> int:
        return self._unpack('B')

    def read_int16(self) -> int:
        return self._unpack('h')

    def read_uint16(self) -> int:
        return self._unpack('H')

    def read_int32(self) -> int:
        return self._unpack('i')

    def read_uint32(self) -> int:
        return self._unpack('I')

    def read_int64(self) -> int:
        return self._unpack('q')

    def read_uint64(self) -> int:
        return self._unpack('Q')

    def read_float(self) -> float:
        """Read an IEEE 754 single-precision value."""
        return self._unpack('f')

    def read_double(self) -> float:
        """Read an IEEE 754 double-precision value."""
        return self._unpack('d')

    # ----------------------------------------------------------------
    # Resource management
    # ----------------------------------------------------------------

    def close(self) -> None:
        """Close the backing handle if this cursor opened it."""
        if self._owns_handle and not self._handle.closed:
            self._handle.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    def __repr__(self) -> str:
        return (
            f"ByteCursor(offset={self.offset()}, length={self._length}, "
            f"order={self._order!r})"
        )
