# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
jpegexif - Pure Python EXIF reader for JPEG files

Decodes the EXIF/TIFF tags embedded in a JPEG image directly from an
in-memory byte buffer, with no external parsing library.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from jpegexif.exceptions import (
    JpegExifError,
    MetadataReadError,
    NotAJpegError,
    NoExifDataError,
    InvalidTiffHeaderError,
    OutOfBoundsError,
    ValueDecodeError,
    UnsupportedFormatError,
)
from jpegexif.value_decoder import DecodedValue, NumberValue, TextValue
from jpegexif.exif_reader import ExifMetadata, ExifReader, read_exif

__all__ = [
    "read_exif",
    "ExifReader",
    "ExifMetadata",
    "DecodedValue",
    "TextValue",
    "NumberValue",
    "JpegExifError",
    "MetadataReadError",
    "NotAJpegError",
    "NoExifDataError",
    "InvalidTiffHeaderError",
    "OutOfBoundsError",
    "ValueDecodeError",
    "UnsupportedFormatError",
]
