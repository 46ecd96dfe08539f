# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF metadata reader

This module ties the pipeline together: it finds the Exif APP1 segment,
reads the TIFF header, parses IFD0 and follows the EXIF, GPS and
Interoperability pointers into their sub-directories. The result is one
flat mapping from tag name to decoded value.

Copyright 2025 DNAi inc.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Dict, Iterator, Optional, Union

from jpegexif.byte_reader import ByteReader
from jpegexif.exceptions import MetadataReadError, OutOfBoundsError
from jpegexif.exif_tags import (
    EXIF_TAG_NAMES,
    GPS_TAG_NAMES,
    INTEROP_TAG_NAMES,
    EXIF_IFD_POINTER,
    GPS_IFD_POINTER,
    INTEROP_IFD_POINTER,
    POINTER_TAGS,
)
from jpegexif.ifd_parser import parse_ifd
from jpegexif.jpeg_scanner import find_exif_segment
from jpegexif.tiff_header import TiffHeader, read_tiff_header
from jpegexif.value_decoder import DecodedValue, NumberValue

logger = logging.getLogger(__name__)


class ExifMetadata(Mapping):
    """
    Read-only, insertion-ordered mapping of tag name to decoded value.
    
    Values are TextValue or NumberValue; use to_dict() for plain
    str/int/float values.
    
    Example:
        >>> metadata = read_exif(data)
        >>> metadata['Orientation']
        NumberValue(number=1)
        >>> metadata.to_dict()
        {'Orientation': 1}
    """
    
    def __init__(self, tags: Optional[Dict[str, DecodedValue]] = None):
        self._tags = dict(tags or {})
    
    def __getitem__(self, key: str) -> DecodedValue:
        return self._tags[key]
    
    def __iter__(self) -> Iterator[str]:
        return iter(self._tags)
    
    def __len__(self) -> int:
        return len(self._tags)
    
    def __repr__(self) -> str:
        return f"ExifMetadata({self._tags!r})"
    
    def to_dict(self) -> Dict[str, Union[str, int, float]]:
        return {name: decoded.value for name, decoded in self._tags.items()}


class ExifReader:
    """
    Reader for EXIF metadata embedded in a JPEG file.
    
    The decode is a pure function of the buffer: all state lives in the
    read() call, so one reader (or many) can be used from any thread.
    
    Example:
        >>> metadata = ExifReader(file_path='photo.jpg').read()
        >>> metadata['Make']
        TextValue(text='Canon')
    """
    
    def __init__(self, file_path: Optional[Union[str, Path]] = None, file_data: Optional[bytes] = None):
        """
        Initialize the EXIF reader.
        
        Args:
            file_path: Path to the JPEG file
            file_data: Raw file data (alternative to file_path)
        """
        self.file_path = Path(file_path) if file_path else None
        self.file_data = file_data
    
    def read(self) -> ExifMetadata:
        """
        Read EXIF metadata.
        
        Returns:
            ExifMetadata; empty when the EXIF segment holds no usable tags
            
        Raises:
            NotAJpegError: If the data is not a JPEG file
            NoExifDataError: If the file has no EXIF segment
            OutOfBoundsError: If IFD0 lies outside the data
            MetadataReadError: If no data was given or the file cannot be read
        """
        if self.file_path:
            try:
                data = self.file_path.read_bytes()
            except OSError as e:
                raise MetadataReadError(f"Failed to read {self.file_path}: {e}")
        elif self.file_data is not None:
            data = self.file_data
        else:
            raise MetadataReadError("No file path or file data provided")
        
        return read_exif(data)


def _pointer_offset(tags: Dict[str, DecodedValue], pointer: str) -> Optional[int]:
    decoded = tags.get(pointer)
    if isinstance(decoded, NumberValue) and decoded.number:
        return int(decoded.number)
    return None


def _parse_sub_directory(
    reader: ByteReader,
    header: TiffHeader,
    pointer: str,
    offset: Optional[int],
    tag_names: Mapping
) -> Dict[str, DecodedValue]:
    if offset is None:
        return {}
    try:
        return parse_ifd(reader, header, offset, tag_names)
    except OutOfBoundsError as e:
        logger.debug("Skipping %s sub-directory at %d: %s", pointer, offset, e)
        return {}


def _assemble(reader: ByteReader, header: TiffHeader) -> ExifMetadata:
    ifd0 = parse_ifd(reader, header, header.ifd0_offset, EXIF_TAG_NAMES)
    exif_ifd = _parse_sub_directory(
        reader, header, EXIF_IFD_POINTER, _pointer_offset(ifd0, EXIF_IFD_POINTER), EXIF_TAG_NAMES
    )
    gps_ifd = _parse_sub_directory(
        reader, header, GPS_IFD_POINTER, _pointer_offset(ifd0, GPS_IFD_POINTER), GPS_TAG_NAMES
    )
    
    # EXIF and GPS pointers are only honoured in IFD0. The Interoperability
    # pointer belongs to the EXIF sub-IFD; IFD0 is the fallback.
    interop_offset = _pointer_offset(exif_ifd, INTEROP_IFD_POINTER)
    if interop_offset is None:
        interop_offset = _pointer_offset(ifd0, INTEROP_IFD_POINTER)
    interop_ifd = _parse_sub_directory(
        reader, header, INTEROP_IFD_POINTER, interop_offset, INTEROP_TAG_NAMES
    )
    
    all_tags = {}
    for directory in (ifd0, exif_ifd, gps_ifd, interop_ifd):
        all_tags.update(directory)
    
    return ExifMetadata({
        name: decoded for name, decoded in all_tags.items()
        if name not in POINTER_TAGS and not decoded.is_empty()
    })


def read_exif(data: bytes) -> ExifMetadata:
    """
    Decode the EXIF metadata of a JPEG file held in memory.
    
    Args:
        data: Complete contents of the JPEG file
        
    Returns:
        ExifMetadata mapping tag names to TextValue / NumberValue
        
    Raises:
        NotAJpegError: If ``data`` does not start with 0xFFD8
        NoExifDataError: If no Exif APP1 segment is found
        OutOfBoundsError: If a structural offset exceeds the buffer
    """
    reader = ByteReader(data)
    segment = find_exif_segment(reader)
    header = read_tiff_header(reader, segment.tiff_start)
    logger.debug(
        "EXIF segment at %d, TIFF header at %d (%s)",
        segment.payload_offset, header.tiff_start, header.byte_order.label
    )
    return _assemble(reader, header)
