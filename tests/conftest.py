# -*- coding: utf-8 -*-
"""
Shared fixtures - Synthetic PSI containers for reader tests.

Builds byte-exact PSI files with ``struct`` so tests never need real
survey data.  Payload samples are ``arange`` ramps laid out in the
block's storage order, so any decoded region can be checked against
``sample_grid(...)[y:y + h, x:x + w]``.

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
import struct
from pathlib import Path
from typing import Any, Dict, Optional

# Third-party
import numpy as np
import pytest


# ===================================================================
# Layout
# ===================================================================

_SURVEY_FMT = '<3s5s9s3s13sfBIddf9s7s'           # 78 bytes
_IMAGE_2D_FMT = '<BBffiiBIf'                       # 27 bytes
_IMAGE_3D_FMT = '<BBfffiiBIfB'                     # 32 bytes
_TAIL_FMT = '<fIfq33s33s33s33s'                    # 152 bytes
_RESERVED = b'\x00' * 256

HEADER_LENGTH = 545

GLOBAL_DEFAULTS: Dict[str, Any] = {
    'version': '1.00x',
    'software_version': 'LCMS4.0.1',
    'state': 'TX',
    'route': 'IH0035-NB',
    'heading': 87.5,
    'lane_index': 2,
    'serial_number': 4242,
    'gps_longitude': -97.7431,
    'gps_latitude': 30.2672,
    'dmi': 1523.25,
    'date': '20261019',
    'time': '142530',
    'reference_range': 100.0,
    'speed': 55.5,
    'timestamp': 1792425930000,
    'vehicle': 'Survey Van 3',
    'operator': 'R. Alvarez',
    'contractor': 'Pavement Labs',
    'sensor_system': 'LCMS-2',
}

IMAGE_2D_DEFAULTS: Dict[str, Any] = {
    'storage_order': 0,
    'codec': 0,
    'longitudinal_resolution': 1.0,
    'transverse_resolution': 1.0,
    'width': 8,
    'length': 6,
    'bit_depth': 8,
    'data_size': None,
    'compression_quality': 0.0,
}

IMAGE_3D_DEFAULTS: Dict[str, Any] = {
    'storage_order': 0,
    'codec': 0,
    'longitudinal_resolution': 1.0,
    'transverse_resolution': 1.0,
    'vertical_resolution': 0.5,
    'width': 8,
    'length': 6,
    'bit_depth': 16,
    'data_size': None,
    'compression_quality': 0.0,
    'registration': 1,
}

ABSENT_IMAGE_2D: Dict[str, Any] = {
    'storage_order': 0,
    'codec': 0,
    'longitudinal_resolution': 0.0,
    'transverse_resolution': 0.0,
    'width': 0,
    'length': 0,
    'bit_depth': 0,
    'data_size': 0,
    'compression_quality': 0.0,
}


def _b(value) -> bytes:
    if isinstance(value, bytes):
        return value
    return str(value).encode('latin-1')


def sample_grid(width: int, length: int, bit_depth: int) -> np.ndarray:
    """Row-major ``(length, width)`` ramp used as payload content."""
    dtype = np.dtype('<u2') if bit_depth == 16 else np.dtype('u1')
    count = width * length
    modulus = 1 << (8 * dtype.itemsize)
    return (np.arange(count) % modulus).astype(dtype).reshape(length, width)


def _payload(fields: Dict[str, Any]) -> bytes:
    """Ramp payload in the block's storage order, sized to data_size."""
    width, length = fields['width'], fields['length']
    data_size = fields['data_size']
    raw = b''
    if width > 0 and length > 0 and int(fields['bit_depth']) in (8, 16):
        grid = sample_grid(width, length, int(fields['bit_depth']))
        if int(fields['storage_order']) == 1:
            grid = grid.T
        raw = np.ascontiguousarray(grid).tobytes()
    return raw[:data_size].ljust(data_size, b'\x00')


def _image_fields(
    defaults: Dict[str, Any],
    overrides: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    fields = dict(defaults)
    fields.update(overrides or {})
    if fields['data_size'] is None:
        fields['data_size'] = (
            (int(fields['bit_depth']) // 8)
            * max(fields['width'], 0) * max(fields['length'], 0)
        )
    return fields


def build_psi_bytes(
    image_2d: Optional[Dict[str, Any]] = None,
    image_3d: Optional[Dict[str, Any]] = None,
    metadata_block: bytes = b'<survey section="1"/>',
    metadata_size: Optional[int] = None,
    signature=b'psi',
    trailer: bytes = b'@@@@',
    slack: bytes = b'',
    **overrides: Any,
) -> bytes:
    """Assemble a complete PSI file.

    Parameters
    ----------
    image_2d, image_3d : dict, optional
        Overrides for the image blocks.  ``data_size`` left as ``None``
        is computed from the geometry.
    metadata_block : bytes
        Trailing metadata block content.
    metadata_size : int, optional
        Declared metadata size.  Defaults to ``len(metadata_block)``.
    signature, trailer : bytes
        Framing markers.
    slack : bytes
        Extra bytes inserted before the trailer, making the physical
        length disagree with the header.
    **overrides
        Global field overrides (see ``GLOBAL_DEFAULTS``).
    """
    g = dict(GLOBAL_DEFAULTS)
    g.update(overrides)
    f2 = _image_fields(IMAGE_2D_DEFAULTS, image_2d)
    f3 = _image_fields(IMAGE_3D_DEFAULTS, image_3d)
    if metadata_size is None:
        metadata_size = len(metadata_block)

    header = struct.pack(
        _SURVEY_FMT,
        _b(signature), _b(g['version']), _b(g['software_version']),
        _b(g['state']), _b(g['route']), g['heading'], g['lane_index'],
        g['serial_number'], g['gps_longitude'], g['gps_latitude'],
        g['dmi'], _b(g['date']), _b(g['time']),
    )
    header += struct.pack(
        _IMAGE_2D_FMT,
        f2['storage_order'], f2['codec'], f2['longitudinal_resolution'],
        f2['transverse_resolution'], f2['width'], f2['length'],
        f2['bit_depth'], f2['data_size'], f2['compression_quality'],
    )
    header += struct.pack(
        _IMAGE_3D_FMT,
        f3['storage_order'], f3['codec'], f3['longitudinal_resolution'],
        f3['transverse_resolution'], f3['vertical_resolution'],
        f3['width'], f3['length'], f3['bit_depth'], f3['data_size'],
        f3['compression_quality'], f3['registration'],
    )
    header += struct.pack(
        _TAIL_FMT,
        g['reference_range'], metadata_size, g['speed'], g['timestamp'],
        _b(g['vehicle']), _b(g['operator']), _b(g['contractor']),
        _b(g['sensor_system']),
    )
    header += _RESERVED
    assert len(header) == HEADER_LENGTH

    return (
        header + _payload(f2) + _payload(f3)
        + metadata_block + slack + trailer
    )


# ===================================================================
# Fixtures
# ===================================================================

@pytest.fixture
def build_psi():
    """Factory returning PSI file bytes; see ``build_psi_bytes``."""
    return build_psi_bytes


@pytest.fixture
def write_psi(tmp_path):
    """Factory writing a synthetic PSI file and returning its path."""
    counter = {'n': 0}

    def _write(name: Optional[str] = None, **kwargs) -> Path:
        counter['n'] += 1
        path = tmp_path / (name or f"section_{counter['n']:04d}.psi")
        path.write_bytes(build_psi_bytes(**kwargs))
        return path

    return _write


@pytest.fixture
def psi_file(write_psi):
    """Default synthetic file: 8x6 8-bit 2D and 8x6 16-bit 3D."""
    return write_psi()


@pytest.fixture
def only_3d_bytes():
    """10x5 16-bit 3D payload, 2D block all zero, version ``1.00x``."""
    return build_psi_bytes(
        image_2d=ABSENT_IMAGE_2D,
        image_3d={'width': 10, 'length': 5, 'bit_depth': 16,
                  'data_size': 100, 'codec': 0},
    )


@pytest.fixture
def ramp():
    """Expected sample grid for a block; see ``sample_grid``."""
    return sample_grid
