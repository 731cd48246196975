# -*- coding: utf-8 -*-
"""
PSI Reader - Pavement-survey 2D/3D raster container reader.

A PSI file stores a 2D intensity image and a 3D range image of the same
pavement section, preceded by a fixed-layout little-endian header of
survey metadata (position, vehicle, crew, timestamps) and followed by an
opaque metadata block and a ``@@@@`` trailer::

    "psi" | header (542 bytes) | 2D payload | 3D payload | metadata | "@@@@"

This module provides the three decode stages, each usable on its own:

* ``is_psi`` -- cheap framing check (signature and trailer).
* ``parse_header`` -- single forward pass over the header producing a
  validated, immutable ``PSIMetadata``.  Each field is checked the
  moment its preconditions are known, so the first offending field is
  the one reported.
* ``read_plane`` / ``decode_plane`` -- random-access extraction of a
  rectangular region from either payload.  Only the uncompressed codec
  is decoded.

``PSIReader`` wraps all three behind the standard ``ImageReader``
interface.

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

# Standard library
import logging
import re
from operator import methodcaller
from pathlib import Path
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple, Type, Union

# Third-party
import numpy as np

# psikit internal
from psikit.exceptions import (
    DataSizeMismatchError,
    DimensionError,
    EnumValueError,
    FileLengthMismatchError,
    FramingError,
    MissingPayloadError,
    RangeError,
    UnsupportedCodecError,
    VersionFormatError,
)
from psikit.IO.base import ImageReader
from psikit.IO.cursor import ByteCursor, Source
from psikit.IO.models.common import Region
from psikit.IO.models.psi import PSIMetadata, PSIMetadataBuilder
from psikit.vocabulary import (
    BitDepth2D,
    BitDepth3D,
    Codec2D,
    Codec3D,
    ImageSelector,
    PixelStorageOrder,
    Registration,
)

logger = logging.getLogger(__name__)


# ===================================================================
# Layout constants
# ===================================================================

SIGNATURE = 'psi'
TRAILER = '@@@@'
SIGNATURE_LENGTH = 3
TRAILER_LENGTH = 4
VERSION_LENGTH = 5
NAME_LENGTH = 33
RESERVED_LENGTH = 256

# Everything after the signature up to the start of the 2D payload
FIXED_HEADER_LENGTH = 542
HEADER_LENGTH = SIGNATURE_LENGTH + FIXED_HEADER_LENGTH  # 545

_VERSION_PATTERN = re.compile(r'\d\.\d\d')


class _Field(NamedTuple):
    """One fixed-width header field."""

    name: str
    label: str
    read: Callable[[ByteCursor], Any]
    enum: Optional[Type] = None


def _string(width: int) -> Callable[[ByteCursor], str]:
    return methodcaller('read_string', width)


_u8 = methodcaller('read_uint8')
_u32 = methodcaller('read_uint32')
_i32 = methodcaller('read_int32')
_i64 = methodcaller('read_int64')
_f32 = methodcaller('read_float')
_f64 = methodcaller('read_double')

# Offsets 8..78, after signature and version
_SURVEY_FIELDS = (
    _Field('software_version', 'Software Version', _string(9)),
    _Field('state', 'State', _string(3)),
    _Field('route', 'Route', _string(13)),
    _Field('heading', 'Heading', _f32),
    _Field('lane_index', 'Lane Index', _u8),
    _Field('serial_number', 'Serial Number', _u32),
    _Field('gps_longitude', 'GPS Longitude', _f64),
    _Field('gps_latitude', 'GPS Latitude', _f64),
    _Field('dmi', 'DMI', _f32),
    _Field('date', 'Date', _string(9)),
    _Field('time', 'Time', _string(7)),
)

# Image blocks are split where the data size becomes known, which is
# when geometry and size consistency can first be checked.
_IMAGE_2D_FIELDS = (
    _Field('storage_order', 'Pixel Storage Order', _u8, PixelStorageOrder),
    _Field('codec', 'Codec', _u8, Codec2D),
    _Field('longitudinal_resolution', 'Longitudinal Resolution', _f32),
    _Field('transverse_resolution', 'Transverse Resolution', _f32),
    _Field('width', 'Width', _i32),
    _Field('length', 'Length', _i32),
    _Field('bit_depth', 'Bit Depth', _u8, BitDepth2D),
    _Field('data_size', 'Data Size', _u32),
)
_IMAGE_2D_TAIL = (
    _Field('compression_quality', 'Compression Quality', _f32),
)

_IMAGE_3D_FIELDS = (
    _Field('storage_order', 'Pixel Storage Order', _u8, PixelStorageOrder),
    _Field('codec', 'Codec', _u8, Codec3D),
    _Field('longitudinal_resolution', 'Longitudinal Resolution', _f32),
    _Field('transverse_resolution', 'Transverse Resolution', _f32),
    _Field('vertical_resolution', 'Vertical Resolution', _f32),
    _Field('width', 'Width', _i32),
    _Field('length', 'Length', _i32),
    _Field('bit_depth', 'Bit Depth', _u8, BitDepth3D),
    _Field('data_size', 'Data Size', _u32),
)
_IMAGE_3D_TAIL = (
    _Field('compression_quality', 'Compression Quality', _f32),
    _Field('registration', 'Registration', _u8, Registration),
)

_SECTION_FIELDS = (
    _Field('reference_range', 'Reference Range', _f32),
    _Field('metadata_size', 'Metadata Size', _u32),
)

_CREW_FIELDS = (
    _Field('speed', 'Speed', _f32),
    _Field('timestamp', 'Timestamp', _i64),
    _Field('vehicle', 'Vehicle', _string(NAME_LENGTH)),
    _Field('operator', 'Operator', _string(NAME_LENGTH)),
    _Field('contractor', 'Contractor', _string(NAME_LENGTH)),
    _Field('sensor_system', 'Sensor System', _string(NAME_LENGTH)),
)


# ===================================================================
# Format sniffer
# ===================================================================

def is_psi(source: Union[ByteCursor, Source]) -> bool:
    """Check whether a stream is framed as a PSI container.

    Looks for the ``psi`` signature at the start and the ``@@@@``
    trailer at the end.  Nothing else is validated, so a stream can pass
    here and still fail ``parse_header``.

    Parameters
    ----------
    source : ByteCursor, path, bytes-like, or binary file object
        Stream to probe.  The position of a cursor or file object is
        restored afterwards; non-seekable streams give ``False``.

    Returns
    -------
    bool
        ``False`` for streams too short to hold either marker; never
        raises for short input.
    """
    if isinstance(source, (str, Path, bytes, bytearray, memoryview)):
        with ByteCursor(source) as cursor:
            return is_psi(cursor)
    if not isinstance(source, ByteCursor):
        # Borrowed file object: the cursor rewinds it, so put it back
        if not source.seekable():
            return False
        handle_position = source.tell()
        try:
            return is_psi(ByteCursor(source))
        finally:
            source.seek(handle_position)

    position = source.offset()
    try:
        length = source.length()
        if length < SIGNATURE_LENGTH:
            return False
        source.seek(0)
        if not source.read_string(SIGNATURE_LENGTH).startswith(SIGNATURE):
            return False
        if length < TRAILER_LENGTH:
            return False
        source.seek(length - TRAILER_LENGTH)
        return source.read_string(TRAILER_LENGTH).startswith(TRAILER)
    finally:
        source.seek(position)


# ===================================================================
# Header parser
# ===================================================================

def _read_fields(
    cursor: ByteCursor,
    builder: PSIMetadataBuilder,
    layout: Tuple[_Field, ...],
    image: Optional[ImageSelector] = None,
) -> None:
    """Read ``layout`` in order, validating enum fields as they arrive."""
    for spec in layout:
        value = spec.read(cursor)
        if spec.enum is not None:
            prefix = f'{image.value} ' if image is not None else ''
            value = spec.enum.from_byte(value, f'{prefix}{spec.label}')
        if image is None:
            builder.set_field(spec.name, value, spec.label)
        else:
            builder.set_image_field(image, spec.name, value, spec.label)


def _check_payload_geometry(
    image: ImageSelector,
    fields: Dict[str, Any],
) -> None:
    """Validate dimensions and size of one image block.

    Raises
    ------
    EnumValueError
        If a non-empty payload has no bit depth.
    DimensionError
        If a non-empty payload has a non-positive width, length, or
        longitudinal/transverse resolution.
    DataSizeMismatchError
        If an uncompressed payload's size is not
        ``bit_depth / 8 * width * length``.
    """
    name = image.value
    data_size = fields['data_size']
    bit_depth = fields['bit_depth']

    if data_size > 0:
        if bit_depth.value == 0:
            raise EnumValueError(
                f"{name} bit depth 0 is only legal for an empty payload "
                f"(data size {data_size})",
                field=f'{name} Bit Depth',
            )
        for key, label in (
            ('width', 'Width'),
            ('length', 'Length'),
            ('longitudinal_resolution', 'Longitudinal Resolution'),
            ('transverse_resolution', 'Transverse Resolution'),
        ):
            if not fields[key] > 0:
                raise DimensionError(
                    f"{name} {label.lower()} must be positive when the "
                    f"{name} data size is nonzero, got {fields[key]}",
                    field=f'{name} {label}',
                )

    if fields['codec'].is_uncompressed:
        expected = (bit_depth.value // 8) * fields['width'] * fields['length']
        if data_size != expected:
            raise DataSizeMismatchError(
                f"{name} uncompressed data size {data_size} does not match "
                f"bit depth {bit_depth.value} x width {fields['width']} x "
                f"length {fields['length']} = {expected} bytes",
                field=f'{name} Data Size',
            )


def _read_image_block(
    cursor: ByteCursor,
    builder: PSIMetadataBuilder,
    image: ImageSelector,
    head: Tuple[_Field, ...],
    tail: Tuple[_Field, ...],
) -> None:
    _read_fields(cursor, builder, head, image)
    _check_payload_geometry(image, dict(builder.image_fields(image)))
    _read_fields(cursor, builder, tail, image)


def parse_header(cursor: ByteCursor) -> PSIMetadata:
    """Parse and validate the header of a PSI stream.

    Reads every header field from offset 0 in file order, little-endian,
    then skips the reserved region.  The cursor is left at the start of
    the 2D payload.

    Parameters
    ----------
    cursor : ByteCursor
        Cursor over the whole file.  Its byte order is set to little
        endian.

    Returns
    -------
    PSIMetadata
        Fully populated, immutable record with payload offsets.

    Raises
    ------
    FramingError
        If the signature is not ``psi``.
    VersionFormatError
        If the version does not match ``D.DD``.
    EnumValueError
        If an enumerated field holds an undefined value.
    DimensionError
        If a non-empty payload has non-positive geometry.
    DataSizeMismatchError
        If an uncompressed payload size disagrees with its geometry.
    MissingPayloadError
        If both payloads are empty.
    FileLengthMismatchError
        If the stream length disagrees with the declared sections.
    CursorError
        If the stream ends inside the header.
    """
    cursor.order = 'little'
    cursor.seek(0)
    file_size = cursor.length()
    builder = PSIMetadataBuilder()

    signature = cursor.read_string(SIGNATURE_LENGTH)
    if signature != SIGNATURE:
        raise FramingError(
            f"Invalid PSI signature: {signature!r} (expected {SIGNATURE!r})"
        )
    builder.set_field('signature', signature, 'Signature')

    version = cursor.read_string(VERSION_LENGTH)
    if not _VERSION_PATTERN.match(version):
        raise VersionFormatError(
            f"Invalid PSI version {version!r}: expected digit, '.', "
            f"two digits",
            field='Version',
        )
    builder.set_field('version', version, 'Version')

    _read_fields(cursor, builder, _SURVEY_FIELDS)

    _read_image_block(
        cursor, builder, ImageSelector.IMAGE_2D,
        _IMAGE_2D_FIELDS, _IMAGE_2D_TAIL,
    )
    _read_image_block(
        cursor, builder, ImageSelector.IMAGE_3D,
        _IMAGE_3D_FIELDS, _IMAGE_3D_TAIL,
    )

    size_2d = builder.image_fields(ImageSelector.IMAGE_2D)['data_size']
    size_3d = builder.image_fields(ImageSelector.IMAGE_3D)['data_size']
    if size_2d == 0 and size_3d == 0:
        raise MissingPayloadError(
            "PSI file declares neither a 2D nor a 3D payload",
            field='Data Size',
        )

    _read_fields(cursor, builder, _SECTION_FIELDS)

    metadata_size = builder.get_field('metadata_size')
    expected = (
        SIGNATURE_LENGTH + FIXED_HEADER_LENGTH + size_2d + size_3d
        + metadata_size + TRAILER_LENGTH
    )
    if file_size != expected:
        raise FileLengthMismatchError(
            f"File length {file_size} does not match declared sections: "
            f"header {HEADER_LENGTH} + 2D {size_2d} + 3D {size_3d} + "
            f"metadata {metadata_size} + trailer {TRAILER_LENGTH} = "
            f"{expected} bytes",
            field='Metadata Size',
        )

    _read_fields(cursor, builder, _CREW_FIELDS)
    cursor.skip(RESERVED_LENGTH)

    metadata = builder.build(offset_2d=cursor.offset(), file_size=file_size)
    logger.debug(
        "Parsed PSI header: version=%s 2D=%d bytes at %d, 3D=%d bytes at %d",
        metadata.version, size_2d, metadata.offset_2d,
        size_3d, metadata.offset_3d,
    )
    return metadata


# ===================================================================
# Plane decoder
# ===================================================================

def decode_plane(
    cursor: ByteCursor,
    metadata: PSIMetadata,
    image: Union[ImageSelector, str],
    region: Region,
) -> np.ndarray:
    """Decode a rectangular region of one payload into an array.

    Parameters
    ----------
    cursor : ByteCursor
        Cursor over the file ``metadata`` was parsed from.
    metadata : PSIMetadata
        Parsed header.  The header is not re-read.
    image : ImageSelector or str
        ``'2D'`` or ``'3D'``.
    region : Region
        Window within ``[0, width) x [0, length)`` of the image.

    Returns
    -------
    np.ndarray
        Array of shape ``(region.height, region.width)`` in row order,
        dtype ``uint8`` (2D) or little-endian ``uint16`` (3D),
        regardless of the payload's storage order.

    Raises
    ------
    RangeError
        If the image is empty or the region leaves its extent.
    UnsupportedCodecError
        If the payload codec is not uncompressed.
    """
    selector = ImageSelector.coerce(image)
    info = metadata.image(selector)

    if not info.is_present:
        raise RangeError(
            f"{selector.value} image has no payload (data size 0)"
        )
    if not region.in_bounds(info.width, info.length):
        raise RangeError(
            f"Region {region} outside {selector.value} image extent "
            f"width={info.width}, length={info.length}"
        )
    if not info.is_uncompressed:
        raise UnsupportedCodecError(
            f"{selector.value} codec {info.codec.name} ({info.codec.value}) "
            f"cannot be decoded; only uncompressed payloads are supported"
        )

    dtype = info.sample_dtype
    sample_size = dtype.itemsize
    base = metadata.payload_offset(selector)

    if info.storage_order is PixelStorageOrder.ROW_MAJOR:
        result = np.empty((region.height, region.width), dtype=dtype)
        for i, row in enumerate(range(region.y, region.y_end)):
            cursor.seek(base + (row * info.width + region.x) * sample_size)
            raw = cursor.read_bytes(region.width * sample_size)
            result[i] = np.frombuffer(raw, dtype=dtype)
        return result

    # Column-major: read each column's run of rows, then transpose
    columns = np.empty((region.width, region.height), dtype=dtype)
    for j, col in enumerate(range(region.x, region.x_end)):
        cursor.seek(base + (col * info.length + region.y) * sample_size)
        raw = cursor.read_bytes(region.height * sample_size)
        columns[j] = np.frombuffer(raw, dtype=dtype)
    return np.ascontiguousarray(columns.T)


def read_plane(
    cursor: ByteCursor,
    metadata: PSIMetadata,
    image: Union[ImageSelector, str],
    region: Region,
) -> bytes:
    """Decode a rectangular region of one payload into raw sample bytes.

    Same contract as ``decode_plane``; returns
    ``region.width * region.height * bit_depth / 8`` bytes of
    little-endian samples in row order.
    """
    return decode_plane(cursor, metadata, image, region).tobytes()


# ===================================================================
# PSIReader
# ===================================================================

class PSIReader(ImageReader):
    """Read PSI pavement-survey containers.

    The header is parsed on open; pixel data is decoded per chip.  Chip
    reads address one of the two images -- by default the primary image
    (3D when present, otherwise 2D).

    Parameters
    ----------
    filepath : str or Path
        Path to the ``.psi`` file.
    image : ImageSelector or str, optional
        Image addressed by ``read_chip``, ``get_shape`` and
        ``get_dtype``.  Default is the primary image.

    Attributes
    ----------
    metadata : PSIMetadata
        Validated header.
    image : ImageSelector
        Image addressed by chip reads.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    FramingError
        If the file lacks the PSI signature or trailer.
    FormatError
        If the header is structurally invalid.
    RangeError
        If ``image`` selects an image with no payload.

    Examples
    --------
    >>> from psikit.IO import PSIReader
    >>> with PSIReader('section_0001.psi') as reader:
    ...     print(reader.metadata.route, reader.get_shape())
    ...     chip = reader.read_chip(0, 100, 0, 200)
    ...     intensity = reader.read_plane(Region(0, 0, 64, 64), image='2D')
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        image: Optional[Union[ImageSelector, str]] = None,
    ) -> None:
        self._requested_image = image
        self._cursor: Optional[ByteCursor] = None
        super().__init__(filepath)

    @classmethod
    def is_format(cls, filepath: Union[str, Path]) -> bool:
        """Sniff a file for the PSI signature and trailer."""
        filepath = Path(filepath)
        if not filepath.is_file():
            return False
        return is_psi(filepath)

    def _load_metadata(self) -> None:
        """Frame-check and parse the header."""
        self._cursor = ByteCursor(self.filepath)
        try:
            if not is_psi(self._cursor):
                raise FramingError(
                    f"Not a PSI file (missing '{SIGNATURE}' signature or "
                    f"'{TRAILER}' trailer): {self.filepath}"
                )
            self.metadata = parse_header(self._cursor)

            if self._requested_image is None:
                self.image = self.metadata.primary_image
            else:
                self.image = ImageSelector.coerce(self._requested_image)
                if not self.metadata.image(self.image).is_present:
                    raise RangeError(
                        f"{self.image.value} image has no payload in "
                        f"{self.filepath}"
                    )
        except Exception:
            self.close()
            raise

        logger.debug("Opened %s (%s image)", self.filepath, self.image.value)

    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[int]] = None,
    ) -> np.ndarray:
        """Read a spatial chip from the selected image.

        Parameters
        ----------
        row_start : int
            Starting row index (inclusive).
        row_end : int
            Ending row index (exclusive).
        col_start : int
            Starting column index (inclusive).
        col_end : int
            Ending column index (exclusive).
        bands : Optional[List[int]]
            Ignored; PSI images are single-band.

        Returns
        -------
        np.ndarray
            Chip with shape ``(row_end - row_start, col_end - col_start)``.

        Raises
        ------
        RangeError
            If indices are out of bounds.
        UnsupportedCodecError
            If the image is compressed.
        """
        region = Region(
            x=col_start, y=row_start,
            width=col_end - col_start, height=row_end - row_start,
        )
        return decode_plane(self._cursor, self.metadata, self.image, region)

    def read_plane(
        self,
        region: Region,
        image: Optional[Union[ImageSelector, str]] = None,
    ) -> bytes:
        """Read raw sample bytes for a region of either image.

        Parameters
        ----------
        region : Region
            Window to decode.
        image : ImageSelector or str, optional
            Image to read.  Defaults to the reader's selected image.

        Returns
        -------
        bytes
        """
        selector = self.image if image is None else image
        return read_plane(self._cursor, self.metadata, selector, region)

    def read_metadata_block(self) -> bytes:
        """Return the trailing metadata block, uninterpreted."""
        self._cursor.seek(self.metadata.metadata_offset)
        return self._cursor.read_bytes(self.metadata.metadata_size)

    def get_shape(self) -> Tuple[int, int]:
        """Get dimensions of the selected image.

        Returns
        -------
        Tuple[int, int]
            ``(length, width)``.
        """
        return self.metadata.image(self.image).shape

    def get_dtype(self) -> np.dtype:
        """Get the sample type of the selected image.

        Returns
        -------
        np.dtype
            ``uint8`` for 2D, ``uint16`` for 3D.
        """
        return self.metadata.image(self.image).sample_dtype

    def get_geolocation(self) -> Optional[Dict[str, Any]]:
        """Get the survey position recorded in the header.

        Returns
        -------
        Dict[str, Any]
            ``'crs'``, ``'gps'`` (``LatLon``), and ``'heading'``.
        """
        return {
            'crs': 'EPSG:4326',
            'gps': self.metadata.gps,
            'heading': self.metadata.heading,
        }

    def close(self) -> None:
        """Close the underlying file."""
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


# ===================================================================
# Convenience function
# ===================================================================

def open_psi(
    filepath: Union[str, Path],
    image: Optional[Union[ImageSelector, str]] = None,
) -> PSIReader:
    """Open a PSI file.

    Parameters
    ----------
    filepath : str or Path
        Path to the ``.psi`` file.
    image : ImageSelector or str, optional
        Image addressed by chip reads.  Default is the primary image.

    Returns
    -------
    PSIReader

    Examples
    --------
    >>> from psikit.IO import open_psi
    >>> reader = open_psi('section_0001.psi', image='3D')
    >>> ranges = reader.read_full()
    >>> reader.close()
    """
    return PSIReader(filepath, image=image)
