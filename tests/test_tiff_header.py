import pytest

from jpegexif.byte_reader import ByteOrder, ByteReader
from jpegexif.exceptions import InvalidTiffHeaderError, NoExifDataError, OutOfBoundsError
from jpegexif.tiff_header import read_tiff_header


def test_little_endian_header():
    header = read_tiff_header(ByteReader(b'xxII*\x00\x08\x00\x00\x00'), 2)
    assert header.byte_order is ByteOrder.LITTLE_ENDIAN
    assert header.tiff_start == 2
    assert header.ifd0_offset == 8
    assert header.absolute(8) == 10


def test_big_endian_header():
    header = read_tiff_header(ByteReader(b'MM\x00*\x00\x00\x00\x10'), 0)
    assert header.byte_order is ByteOrder.BIG_ENDIAN
    assert header.ifd0_offset == 16


def test_unknown_mark_is_read_as_big_endian():
    header = read_tiff_header(ByteReader(b'XX\x00*\x00\x00\x00\x08'), 0)
    assert header.byte_order is ByteOrder.BIG_ENDIAN


def test_bad_magic_is_rejected():
    with pytest.raises(InvalidTiffHeaderError):
        read_tiff_header(ByteReader(b'II+\x00\x08\x00\x00\x00'), 0)


def test_bad_magic_counts_as_missing_exif():
    with pytest.raises(NoExifDataError):
        read_tiff_header(ByteReader(b'MM*\x00\x00\x00\x00\x08'), 0)


def test_truncated_header():
    with pytest.raises(OutOfBoundsError):
        read_tiff_header(ByteReader(b'II*\x00\x08'), 0)
