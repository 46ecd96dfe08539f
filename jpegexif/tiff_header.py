# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
TIFF header reader

EXIF data reuses the TIFF structure: a byte order mark ("II" or "MM"),
the magic number 42 and the offset of IFD0. All offsets found later in
the EXIF payload are relative to the start of this header.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass

from jpegexif.byte_reader import ByteReader, ByteOrder
from jpegexif.exceptions import InvalidTiffHeaderError

LITTLE_ENDIAN_MARK = 0x4949  # "II"
TIFF_MAGIC = 42


@dataclass(frozen=True)
class TiffHeader:
    byte_order: ByteOrder
    tiff_start: int
    ifd0_offset: int

    def absolute(self, relative_offset: int) -> int:
        """Convert an offset relative to the TIFF header into a buffer offset."""
        return self.tiff_start + relative_offset


def read_tiff_header(reader: ByteReader, tiff_start: int) -> TiffHeader:
    """
    Read the TIFF header at ``tiff_start``.
    
    "II" selects little-endian; any other mark is read as big-endian.
    
    Raises:
        InvalidTiffHeaderError: If the magic number is not 42
        OutOfBoundsError: If the header is truncated
    """
    if reader.read_uint16(tiff_start, ByteOrder.BIG_ENDIAN) == LITTLE_ENDIAN_MARK:
        byte_order = ByteOrder.LITTLE_ENDIAN
    else:
        byte_order = ByteOrder.BIG_ENDIAN
    
    magic = reader.read_uint16(tiff_start + 2, byte_order)
    if magic != TIFF_MAGIC:
        raise InvalidTiffHeaderError(f"Invalid TIFF magic number: {magic}")
    
    ifd0_offset = reader.read_uint32(tiff_start + 4, byte_order)
    return TiffHeader(byte_order=byte_order, tiff_start=tiff_start, ifd0_offset=ifd0_offset)
