# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Bounds-checked access to an in-memory file buffer

Every read in jpegexif goes through ByteReader. Reads that would cross the
end of the buffer raise OutOfBoundsError instead of returning a short slice.

Copyright 2025 DNAi inc.
"""

import struct
from enum import Enum

from jpegexif.exceptions import OutOfBoundsError


class ByteOrder(Enum):
    """TIFF byte order, valued by its struct prefix."""
    LITTLE_ENDIAN = '<'
    BIG_ENDIAN = '>'

    @property
    def label(self) -> str:
        if self is ByteOrder.LITTLE_ENDIAN:
            return 'Little-endian (Intel, II)'
        return 'Big-endian (Motorola, MM)'


class ByteReader:
    """
    Read-only view over a file buffer.
    
    The buffer is copied into an immutable bytes object once, so the
    caller's data is never mutated.
    """
    
    def __init__(self, data: bytes):
        self._data = bytes(data)
    
    def __len__(self) -> int:
        return len(self._data)
    
    def check(self, offset: int, length: int) -> None:
        """
        Ensure that ``length`` bytes starting at ``offset`` are inside the buffer.
        
        Raises:
            OutOfBoundsError: If the range is negative or ends past the buffer
        """
        if offset < 0 or length < 0 or offset + length > len(self._data):
            raise OutOfBoundsError(offset, length, len(self._data))
    
    def read_bytes(self, offset: int, length: int) -> bytes:
        self.check(offset, length)
        return self._data[offset:offset + length]
    
    def read_uint8(self, offset: int) -> int:
        self.check(offset, 1)
        return self._data[offset]
    
    def read_uint16(self, offset: int, byte_order: ByteOrder = ByteOrder.BIG_ENDIAN) -> int:
        self.check(offset, 2)
        return struct.unpack_from(f'{byte_order.value}H', self._data, offset)[0]
    
    def read_uint32(self, offset: int, byte_order: ByteOrder = ByteOrder.BIG_ENDIAN) -> int:
        self.check(offset, 4)
        return struct.unpack_from(f'{byte_order.value}I', self._data, offset)[0]
    
    def read_ascii(self, offset: int, length: int) -> str:
        """
        Read a NUL-terminated ASCII string of at most ``length`` bytes.
        
        Bytes outside the ASCII range are replaced rather than rejected.
        """
        raw = self.read_bytes(offset, length)
        null_pos = raw.find(b'\x00')
        if null_pos >= 0:
            raw = raw[:null_pos]
        return raw.decode('ascii', errors='replace')
