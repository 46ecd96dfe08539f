import pytest

from jpegexif import read_exif
from jpegexif.byte_reader import ByteReader
from jpegexif.exceptions import OutOfBoundsError
from jpegexif.exif_tags import EXIF_TAG_NAMES, GPS_TAG_NAMES
from jpegexif.ifd_parser import parse_ifd, read_entries
from jpegexif.tiff_header import read_tiff_header
from jpegexif.value_decoder import NumberValue, TextValue
from tests.builders import jpeg_with_exif


def parse(builder, entries, tag_names=EXIF_TAG_NAMES):
    tiff = builder.build([entries])
    reader = ByteReader(tiff)
    header = read_tiff_header(reader, 0)
    return parse_ifd(reader, header, header.ifd0_offset, tag_names)


def test_inline_values(builder):
    tags = parse(builder, [
        builder.short(0x0112, 6),
        builder.long(0x0100, 4000),
        builder.ascii(0x010F, 'LG'),
    ])
    assert tags == {
        'Orientation': NumberValue(6),
        'ImageWidth': NumberValue(4000),
        'Make': TextValue('LG'),
    }


def test_indirect_values(builder):
    tags = parse(builder, [
        builder.ascii(0x0110, 'Canon EOS 5D Mark IV'),
        builder.rational(0x011A, 72, 1),
    ])
    assert tags == {
        'Model': TextValue('Canon EOS 5D Mark IV'),
        'XResolution': NumberValue(72.0),
    }


def test_four_byte_ascii_is_inline(le_builder):
    tags = parse(le_builder, [le_builder.ascii(0x013B, 'Bob')])
    assert tags == {'Artist': TextValue('Bob')}


def test_unknown_tag_is_skipped(builder):
    tags = parse(builder, [
        builder.short(0xBEEF, 3),
        builder.short(0x0112, 1),
    ])
    assert tags == {'Orientation': NumberValue(1)}


def test_unknown_tag_is_not_decoded(le_builder):
    # Offset far outside the buffer would fail if the value were read
    tags = parse(le_builder, [
        le_builder.raw(0xBEEF, 2, 100, 0xFFFFFF),
        le_builder.short(0x0112, 3),
    ])
    assert tags == {'Orientation': NumberValue(3)}


def test_out_of_range_value_offset_skips_only_that_entry(builder):
    tags = parse(builder, [
        builder.raw(0x010F, 2, 20, 0x7FFFFFF0),
        builder.short(0x0112, 8),
        builder.raw(0x011A, 5, 1, 0x10000),
    ])
    assert tags == {'Orientation': NumberValue(8)}


def test_unsupported_format_is_skipped(builder):
    tags = parse(builder, [
        builder.raw(0x0112, 9, 1, 1),  # SLONG
        builder.raw(0x0100, 7, 4, 0),  # UNDEFINED
        builder.short(0x0101, 3000),
    ])
    assert tags == {'ImageHeight': NumberValue(3000)}


def test_zero_denominator_is_skipped(builder):
    tags = parse(builder, [
        builder.rational(0x829A, 1, 0),
        builder.short(0x8827, 400),
    ])
    assert tags == {'ISOSpeedRatings': NumberValue(400)}


def test_gps_table_decodes_gps_namespace(builder):
    entries = [builder.ascii(0x0001, 'N'), builder.rationals(0x0002, (48, 1), (51, 1), (0, 1))]
    assert parse(builder, entries, GPS_TAG_NAMES) == {
        'GPSLatitudeRef': TextValue('N'),
        'GPSLatitude': NumberValue(48.0),
    }
    # Same ids mean nothing in the main namespace
    assert parse(builder, entries, EXIF_TAG_NAMES) == {}


def test_truncated_directory_keeps_complete_entries(le_builder):
    tiff = le_builder.build([[le_builder.short(0x0112, 1), le_builder.short(0x0100, 640)]])
    # Cut the buffer inside the second entry
    tiff = tiff[:8 + 2 + 12 + 6]
    reader = ByteReader(tiff)
    header = read_tiff_header(reader, 0)
    assert parse_ifd(reader, header, header.ifd0_offset, EXIF_TAG_NAMES) == {
        'Orientation': NumberValue(1),
    }


def test_unreadable_directory_raises(le_builder):
    reader = ByteReader(le_builder.build([[]]))
    header = read_tiff_header(reader, 0)
    with pytest.raises(OutOfBoundsError):
        parse_ifd(reader, header, 0x1000, EXIF_TAG_NAMES)


def test_large_directory_in_range_is_parsed(le_builder):
    entries = [le_builder.short(0x0112, 1)] + [le_builder.short(0xC000 + i, i) for i in range(1000)]
    tags = parse(le_builder, entries)
    assert tags == {'Orientation': NumberValue(1)}


def test_large_directory_decodes_from_jpeg(le_builder):
    entries = [le_builder.short(0xC000 + i, i) for i in range(1000)] + [le_builder.short(0x0128, 2)]
    assert read_exif(jpeg_with_exif(le_builder, entries)).to_dict() == {'ResolutionUnit': 2}


def test_read_entries_reports_raw_fields(le_builder):
    reader = ByteReader(le_builder.build([[le_builder.raw(0x8769, 4, 1, 0x1A)]]))
    header = read_tiff_header(reader, 0)
    (entry,) = list(read_entries(reader, header, header.ifd0_offset))
    assert (entry.tag_id, entry.format_code, entry.component_count, entry.value_field) == (0x8769, 4, 1, 0x1A)
    assert entry.entry_offset == 10
    assert entry.inline_offset == 18
