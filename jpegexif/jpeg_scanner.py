# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
JPEG marker scanner

Walks the marker segments that follow the SOI marker and locates the APP1
segment carrying the "Exif" header. Scanning stops at the first marker that
is not an APPn segment, since EXIF data must precede the image data.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from jpegexif.byte_reader import ByteReader, ByteOrder
from jpegexif.exceptions import NotAJpegError, NoExifDataError

logger = logging.getLogger(__name__)

SOI_MARKER = 0xFFD8
APP0_MARKER = 0xFFE0
APP1_MARKER = 0xFFE1
APP15_MARKER = 0xFFEF
EXIF_SIGNATURE = 0x45786966  # "Exif"

# "Exif" followed by two padding bytes
EXIF_HEADER_SIZE = 6


@dataclass(frozen=True)
class Segment:
    """
    A JPEG marker segment.
    
    Attributes:
        marker: Two-byte marker value (e.g. 0xFFE1)
        length: Segment length, including the two length bytes
        payload_offset: Offset of the first byte after the length field
    """
    marker: int
    length: int
    payload_offset: int

    @property
    def tiff_start(self) -> int:
        """Offset of the TIFF header inside an Exif APP1 segment."""
        return self.payload_offset + EXIF_HEADER_SIZE


class ScanState(Enum):
    SCANNING = 'scanning'
    FOUND = 'found'
    NOT_FOUND = 'not_found'


def is_app_marker(marker: int) -> bool:
    return APP0_MARKER <= marker <= APP15_MARKER


def has_exif_signature(reader: ByteReader, segment: Segment) -> bool:
    """Check for the "Exif" literal; a segment too short to hold it does not match."""
    if segment.marker != APP1_MARKER or segment.payload_offset + 4 > len(reader):
        return False
    return reader.read_uint32(segment.payload_offset) == EXIF_SIGNATURE


def find_exif_segment(reader: ByteReader) -> Segment:
    """
    Locate the APP1 segment holding EXIF data.
    
    Args:
        reader: Reader over the complete JPEG file
        
    Returns:
        The matching APP1 Segment
        
    Raises:
        NotAJpegError: If the buffer does not start with 0xFFD8
        NoExifDataError: If a non-APPn marker is reached first
        OutOfBoundsError: If a segment length field is truncated
    """
    if len(reader) < 2 or reader.read_uint16(0, ByteOrder.BIG_ENDIAN) != SOI_MARKER:
        raise NotAJpegError("Not a valid JPEG file.")
    
    state = ScanState.SCANNING
    segment = None
    offset = 2
    
    while state is ScanState.SCANNING:
        if offset + 2 > len(reader):
            state = ScanState.NOT_FOUND
            continue
        
        marker = reader.read_uint16(offset, ByteOrder.BIG_ENDIAN)
        if not is_app_marker(marker):
            logger.debug("Stopped scanning at marker 0x%04X (offset %d)", marker, offset)
            state = ScanState.NOT_FOUND
            continue
        
        length = reader.read_uint16(offset + 2, ByteOrder.BIG_ENDIAN)
        if length < 2:
            # A length below 2 would not advance past the length field
            logger.debug("Malformed APP segment length %d at offset %d", length, offset)
            state = ScanState.NOT_FOUND
            continue
        
        candidate = Segment(marker=marker, length=length, payload_offset=offset + 4)
        if has_exif_signature(reader, candidate):
            segment = candidate
            state = ScanState.FOUND
        else:
            logger.debug("Skipping APP%d segment at offset %d", marker - APP0_MARKER, offset)
            offset += 2 + length
    
    if state is ScanState.NOT_FOUND:
        raise NoExifDataError("No EXIF data found in the image.")
    return segment
