# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
EXIF value decoding

Turns the raw bytes of a directory entry into a TextValue or a
NumberValue. Only the ASCII, SHORT, LONG and RATIONAL formats are decoded;
numeric fields with more than one component yield their first component.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union

from jpegexif.byte_reader import ByteReader, ByteOrder
from jpegexif.exceptions import ValueDecodeError, UnsupportedFormatError


class ExifFormat(IntEnum):
    """EXIF tag data types"""
    ASCII = 2
    SHORT = 3
    LONG = 4
    RATIONAL = 5


# EXIF component sizes in bytes
TAG_SIZES = {
    ExifFormat.ASCII: 1,
    ExifFormat.SHORT: 2,
    ExifFormat.LONG: 4,
    ExifFormat.RATIONAL: 8,
}


@dataclass(frozen=True)
class TextValue:
    text: str

    @property
    def value(self) -> str:
        return self.text

    def is_empty(self) -> bool:
        return self.text == ''

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class NumberValue:
    number: Union[int, float]

    @property
    def value(self) -> Union[int, float]:
        return self.number

    def is_empty(self) -> bool:
        return False

    def __str__(self) -> str:
        return str(self.number)


DecodedValue = Union[TextValue, NumberValue]


def to_format(format_code: int) -> ExifFormat:
    """
    Map a raw format code to ExifFormat.
    
    Raises:
        UnsupportedFormatError: For any code other than 2, 3, 4 or 5
    """
    try:
        return ExifFormat(format_code)
    except ValueError:
        raise UnsupportedFormatError(f"Unsupported format code: {format_code}")


def component_size(format_code: int) -> int:
    return TAG_SIZES[to_format(format_code)]


def decode_value(
    reader: ByteReader,
    offset: int,
    format_code: int,
    count: int,
    byte_order: ByteOrder
) -> DecodedValue:
    """
    Decode the value of an EXIF tag.
    
    Args:
        reader: Reader over the file buffer
        offset: Absolute offset of the value data
        format_code: Raw format code from the directory entry
        count: Number of components
        byte_order: Byte order of the TIFF header
        
    Returns:
        TextValue for ASCII, NumberValue otherwise
        
    Raises:
        UnsupportedFormatError: If the format code is not supported
        ValueDecodeError: If a RATIONAL has a zero denominator
        OutOfBoundsError: If the value lies outside the buffer
    """
    tag_format = to_format(format_code)
    
    if tag_format == ExifFormat.ASCII:
        return TextValue(reader.read_ascii(offset, count))
    
    if count < 1:
        raise ValueDecodeError("Numeric value has no components")
    
    if tag_format == ExifFormat.SHORT:
        return NumberValue(reader.read_uint16(offset, byte_order))
    
    if tag_format == ExifFormat.LONG:
        return NumberValue(reader.read_uint32(offset, byte_order))
    
    # RATIONAL
    numerator = reader.read_uint32(offset, byte_order)
    denominator = reader.read_uint32(offset + 4, byte_order)
    if denominator == 0:
        raise ValueDecodeError(f"Rational {numerator}/0 has a zero denominator")
    return NumberValue(numerator / denominator)
