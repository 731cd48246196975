# -*- coding: utf-8 -*-
"""
PSI Metadata Dump - Extract and save all header fields from a PSI file.

Reads a PSI file via ``PSIReader`` and writes a text dump of the survey
fields, both image blocks, payload layout, and the raw header table to a
text file for inspection.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

# Standard library
import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

# psikit
sys.path.insert(0, str(Path(__file__).resolve().parents[3]))
from psikit.IO.psi import PSIReader


def dump_metadata(filepath: Path, output: Optional[Path] = None) -> str:
    """Read PSI metadata and produce a formatted text dump.

    Parameters
    ----------
    filepath : Path
        Path to the PSI file.
    output : Path, optional
        Path to write the dump. If None, writes to
        ``<psi_basename>.metadata.txt`` alongside the PSI file.

    Returns
    -------
    str
        The formatted metadata text.
    """
    if output is None:
        output = filepath.with_suffix('.metadata.txt')

    with PSIReader(filepath) as reader:
        meta = reader.metadata
        lines = []

        def _line(text: str = '') -> None:
            lines.append(text)

        def _header(title: str) -> None:
            _line()
            _line('=' * 70)
            _line(f'  {title}')
            _line('=' * 70)

        def _field(label: str, value, width: int = 30) -> None:
            _line(f'  {label:<{width}} : {value}')

        # ── Title ──
        _line('PSI METADATA DUMP')
        _line(f'File: {filepath}')
        _line(f'Version: {meta.version}')

        # ── Survey ──
        _header('SURVEY')
        _field('Software Version', meta.software_version)
        _field('State', meta.state)
        _field('Route', meta.route)
        _field('Lane Index', meta.lane_index)
        _field('Heading (deg)', f'{meta.heading:.3f}')
        _field('GPS Latitude (deg)', f'{meta.gps_latitude:.8f}')
        _field('GPS Longitude (deg)', f'{meta.gps_longitude:.8f}')
        _field('DMI', meta.dmi)
        _field('Date', meta.date)
        _field('Time', meta.time)
        _field('Timestamp', meta.timestamp)
        _field('Speed', meta.speed)
        _field('Reference Range', meta.reference_range)

        # ── Crew ──
        _header('CREW AND EQUIPMENT')
        _field('Vehicle', meta.vehicle)
        _field('Operator', meta.operator)
        _field('Contractor', meta.contractor)
        _field('Sensor System', meta.sensor_system)
        _field('Serial Number', meta.serial_number)

        # ── Images ──
        for name, info in (('2D', meta.image_2d), ('3D', meta.image_3d)):
            _header(f'{name} IMAGE')
            if not info.is_present:
                _line('  (no payload)')
                continue
            _field('Width x Length', f'{info.width} x {info.length}')
            _field('Bit Depth', info.bit_depth.value)
            _field('Storage Order', info.storage_order.name)
            _field('Codec', info.codec.name)
            _field('Longitudinal Resolution', info.longitudinal_resolution)
            _field('Transverse Resolution', info.transverse_resolution)
            if name == '3D':
                _field('Vertical Resolution', info.vertical_resolution)
                _field('Registration', info.registration.name)
            _field('Compression Quality', info.compression_quality)
            _field('Data Size (bytes)', info.data_size)
            _field('Payload Offset', meta.payload_offset(name))

        # ── Layout ──
        _header('LAYOUT')
        _field('File Size (bytes)', meta.file_size)
        _field('2D Offset', meta.offset_2d)
        _field('3D Offset', meta.offset_3d)
        _field('Metadata Offset', meta.metadata_offset)
        _field('Metadata Size (bytes)', meta.metadata_size)

        # ── Raw table ──
        _header('HEADER TABLE')
        for key, value in meta.table.items():
            _field(key, value)

    text = '\n'.join(lines) + '\n'
    output.write_text(text)
    return text


def main() -> None:
    parser = argparse.ArgumentParser(
        description='Dump PSI header metadata to a text file.',
    )
    parser.add_argument('filepath', type=Path, help='PSI file to read')
    parser.add_argument(
        '-o', '--output', type=Path, default=None,
        help='Output text file (default: <file>.metadata.txt)',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable debug logging',
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    text = dump_metadata(args.filepath, args.output)
    print(text)


if __name__ == '__main__':
    main()
