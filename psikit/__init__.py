# -*- coding: utf-8 -*-
"""
psikit - Reader for PSI pavement-survey imagery containers.

Decodes PSI files, which pair a 2D intensity raster and a 3D range
raster of a pavement section with survey metadata (GPS position, lane,
vehicle and crew identifiers, timestamps).  Provides framing checks,
validated header parsing, and random-access sub-region decoding.

Dependencies
------------
numpy

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

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from psikit.exceptions import (
    PsiError,
    FramingError,
    FormatError,
    VersionFormatError,
    EnumValueError,
    DimensionError,
    DataSizeMismatchError,
    MissingPayloadError,
    FileLengthMismatchError,
    RangeError,
    UnsupportedCodecError,
    CursorError,
)
from psikit.vocabulary import (
    ImageSelector,
    PixelStorageOrder,
    Codec2D,
    Codec3D,
    BitDepth2D,
    BitDepth3D,
    Registration,
)

__all__ = [
    'PsiError',
    'FramingError',
    'FormatError',
    'VersionFormatError',
    'EnumValueError',
    'DimensionError',
    'DataSizeMismatchError',
    'MissingPayloadError',
    'FileLengthMismatchError',
    'RangeError',
    'UnsupportedCodecError',
    'CursorError',
    'ImageSelector',
    'PixelStorageOrder',
    'Codec2D',
    'Codec3D',
    'BitDepth2D',
    'BitDepth3D',
    'Registration',
]
