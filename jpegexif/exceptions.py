# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Exception classes for jpegexif

Structural errors (not a JPEG, no EXIF segment, offsets past the end of
the buffer) abort a decode. Value errors only ever affect a single
directory entry and are handled inside the IFD parser.

Copyright 2025 DNAi inc.
"""


class JpegExifError(Exception):
    """
    Base exception for failed EXIF decodes.
    
    Anything raised out of read_exif() derives from this class, so a
    caller can catch it and show "no metadata found". The text is kept in
    ``message`` for display.
    """
    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


class MetadataReadError(JpegExifError):
    """
    Raised when metadata cannot be read from a buffer or file.
    
    Callers are expected to catch this and report "no metadata found"
    rather than crash.
    """
    pass


class NotAJpegError(MetadataReadError):
    """Raised when the buffer does not start with the 0xFFD8 SOI marker."""
    pass


class NoExifDataError(MetadataReadError):
    """
    Raised when no APP1/Exif segment precedes the first non-APPn marker.
    """
    pass


class InvalidTiffHeaderError(NoExifDataError):
    """Raised when the Exif payload does not carry a valid TIFF header."""
    pass


class OutOfBoundsError(MetadataReadError):
    """
    Raised when a read would go past the end of the buffer.
    
    Attributes:
        offset: Requested start offset
        length: Requested number of bytes
        size: Total buffer size
    """
    def __init__(self, offset: int, length: int, size: int):
        self.offset = offset
        self.length = length
        self.size = size
        super().__init__(
            f"Read of {length} byte(s) at offset {offset} exceeds buffer size {size}"
        )


class ValueDecodeError(JpegExifError):
    """
    Raised when a single tag value cannot be decoded.
    
    This exception is raised when:
    - A RATIONAL value has a zero denominator
    - The value's format code is not supported
    """
    pass


class UnsupportedFormatError(ValueDecodeError):
    """Raised for format codes outside ASCII, SHORT, LONG and RATIONAL."""
    pass
