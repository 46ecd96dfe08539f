# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
IFD (Image File Directory) parser

A directory is a 2-byte entry count followed by 12-byte entries:
tag id (2), format code (2), component count (4) and a 4-byte value
field. When the value fits in 4 bytes it is stored in that field;
otherwise the field holds an offset, relative to the TIFF header, to
the value data.

Copyright 2025 DNAi inc.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, Mapping

from jpegexif.byte_reader import ByteReader
from jpegexif.exceptions import OutOfBoundsError, ValueDecodeError
from jpegexif.tiff_header import TiffHeader
from jpegexif.value_decoder import DecodedValue, component_size, decode_value

logger = logging.getLogger(__name__)

ENTRY_SIZE = 12
INLINE_VALUE_SIZE = 4


@dataclass(frozen=True)
class DirectoryEntry:
    tag_id: int
    format_code: int
    component_count: int
    value_field: int
    entry_offset: int

    @property
    def inline_offset(self) -> int:
        return self.entry_offset + 8


def read_entries(reader: ByteReader, header: TiffHeader, directory_offset: int) -> Iterator[DirectoryEntry]:
    """
    Yield the entries of the directory at ``directory_offset``.
    
    Args:
        reader: Reader over the file buffer
        header: TIFF header of the EXIF payload
        directory_offset: Directory offset relative to the TIFF header
        
    Raises:
        OutOfBoundsError: If the entry count cannot be read
    """
    ifd_offset = header.absolute(directory_offset)
    byte_order = header.byte_order
    num_entries = reader.read_uint16(ifd_offset, byte_order)
    
    for i in range(num_entries):
        entry_offset = ifd_offset + 2 + i * ENTRY_SIZE
        try:
            reader.check(entry_offset, ENTRY_SIZE)
        except OutOfBoundsError:
            logger.debug("Directory at %d truncated after %d of %d entries", ifd_offset, i, num_entries)
            break
        
        yield DirectoryEntry(
            tag_id=reader.read_uint16(entry_offset, byte_order),
            format_code=reader.read_uint16(entry_offset + 2, byte_order),
            component_count=reader.read_uint32(entry_offset + 4, byte_order),
            value_field=reader.read_uint32(entry_offset + 8, byte_order),
            entry_offset=entry_offset,
        )


def read_entry_value(reader: ByteReader, header: TiffHeader, entry: DirectoryEntry) -> DecodedValue:
    """
    Decode one entry, following its value field when the data is not inline.
    
    Raises:
        ValueDecodeError: If the format is unsupported or the value is invalid
        OutOfBoundsError: If the value data lies outside the buffer
    """
    total_size = component_size(entry.format_code) * entry.component_count
    
    if total_size > INLINE_VALUE_SIZE:
        data_offset = header.absolute(entry.value_field)
    else:
        data_offset = entry.inline_offset
    
    reader.check(data_offset, total_size)
    return decode_value(reader, data_offset, entry.format_code, entry.component_count, header.byte_order)


def parse_ifd(
    reader: ByteReader,
    header: TiffHeader,
    directory_offset: int,
    tag_names: Mapping[int, str]
) -> Dict[str, DecodedValue]:
    """
    Parse an IFD into a flat name -> value dictionary.
    
    Entries whose tag id is not in ``tag_names`` are skipped without
    decoding. Entries that fail to decode are left out; they never abort
    the rest of the directory.
    
    Args:
        reader: Reader over the file buffer
        header: TIFF header of the EXIF payload
        directory_offset: Directory offset relative to the TIFF header
        tag_names: Tag table of the directory's namespace
        
    Returns:
        Dictionary of parsed tags
        
    Raises:
        OutOfBoundsError: If the directory itself cannot be read
    """
    metadata = {}
    
    for entry in read_entries(reader, header, directory_offset):
        tag_name = tag_names.get(entry.tag_id)
        if tag_name is None:
            continue
        
        try:
            metadata[tag_name] = read_entry_value(reader, header, entry)
        except (ValueDecodeError, OutOfBoundsError) as e:
            logger.debug("Skipping %s (tag 0x%04X): %s", tag_name, entry.tag_id, e)
    
    return metadata
