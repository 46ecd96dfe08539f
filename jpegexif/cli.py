# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for jpegexif

Prints the EXIF metadata of one or more JPEG files as text, JSON or CSV.

Copyright 2025 DNAi inc.
"""

import argparse
import csv
import io
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from jpegexif import __version__
from jpegexif.exceptions import JpegExifError
from jpegexif.exif_reader import ExifMetadata, ExifReader


def format_output(metadata: ExifMetadata, format_type: str = "text") -> str:
    """
    Render decoded metadata as 'text' (one "Tag: value" row per tag, sorted
    by name), 'json' (an object of plain values) or 'csv' (quoted Tag,Value rows).
    """
    if format_type == "json":
        return json.dumps(metadata.to_dict(), indent=2, ensure_ascii=False)
    
    rows = sorted((name, str(decoded)) for name, decoded in metadata.items())
    if format_type == "csv":
        buffer = io.StringIO()
        buffer.write("Tag,Value\n")
        csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n").writerows(rows)
        return buffer.getvalue().rstrip("\n")
    return "\n".join(f"{name}: {text}" for name, text in rows)


def read_metadata(file_path: Path, format_type: str = "text") -> str:
    """
    Read and format the metadata of one file.
    
    Raises:
        JpegExifError: If the file has no readable EXIF data
    """
    metadata = ExifReader(file_path=file_path).read()
    if not metadata:
        return "No metadata found"
    return format_output(metadata, format_type)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='jpegexif',
        description='Read EXIF metadata from JPEG files',
    )
    parser.add_argument('files', nargs='+', type=Path, help='JPEG file(s) to read')
    output = parser.add_mutually_exclusive_group()
    output.add_argument('-j', '--json', action='store_true', help='Output metadata in JSON format')
    output.add_argument('-csv', action='store_true', help='Output metadata in CSV format')
    parser.add_argument('-v', '--verbose', action='store_true', help='Log skipped tags and directories')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)
    
    logging.basicConfig(stream=sys.stderr, level=logging.WARNING,
                        format='%(asctime)s %(levelname)-7s %(message)s', datefmt='%Y-%m-%d %H:%M:%S')
    if args.verbose:
        logging.getLogger('jpegexif').setLevel(logging.DEBUG)
    
    format_type = 'json' if args.json else 'csv' if args.csv else 'text'
    failed = False
    
    for file_path in args.files:
        if len(args.files) > 1:
            print(f"======== {file_path}")
        try:
            print(read_metadata(file_path, format_type))
        except JpegExifError as e:
            failed = True
            print(f"No metadata found: {e.message}")
    
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
