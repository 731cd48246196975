# -*- coding: utf-8 -*-
"""
PSI Metadata - Typed metadata for PSI pavement-survey containers.

Provides frozen dataclasses for the parsed header of a PSI file: one
sub-record per embedded image (``PSIImage2D``, ``PSIImage3D``) and the
file-level ``PSIMetadata`` record, plus ``PSIMetadataBuilder``, the only
way the parser assembles a record.  The builder accumulates validated
fields and yields a record only once every field is present, so a
failed parse never exposes a partially populated record.

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
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

# Third-party
import numpy as np

# psikit internal
from psikit.IO.models.base import ImageMetadata
from psikit.IO.models.common import LatLon
from psikit.vocabulary import (
    BitDepth2D,
    BitDepth3D,
    Codec2D,
    Codec3D,
    ImageSelector,
    PixelStorageOrder,
    Registration,
)


class _PayloadGeometry:
    """Derived properties shared by both image sub-records."""

    @property
    def is_present(self) -> bool:
        """Whether the payload declares any data."""
        return self.data_size > 0

    @property
    def is_uncompressed(self) -> bool:
        return self.codec.is_uncompressed

    @property
    def bytes_per_sample(self) -> int:
        return self.bit_depth.value // 8

    @property
    def sample_dtype(self) -> np.dtype:
        """Little-endian unsigned dtype matching the bit depth."""
        return np.dtype(f'<u{max(self.bytes_per_sample, 1)}')

    @property
    def shape(self) -> tuple:
        """``(length, width)`` -- rows are longitudinal."""
        return (self.length, self.width)


@dataclass(frozen=True)
class PSIImage2D(_PayloadGeometry):
    """Header block describing the 2D (intensity) image.

    Attributes
    ----------
    storage_order : PixelStorageOrder
        Row- or column-major sample order.
    codec : Codec2D
        Payload encoding.
    longitudinal_resolution : float
        Sample spacing along the direction of travel.
    transverse_resolution : float
        Sample spacing across the direction of travel.
    width : int
        Samples per row.
    length : int
        Number of rows.
    bit_depth : BitDepth2D
        Bits per sample.
    data_size : int
        Declared payload size in bytes.
    compression_quality : float
        Encoder quality setting (informational for uncompressed data).
    """

    storage_order: PixelStorageOrder
    codec: Codec2D
    longitudinal_resolution: float
    transverse_resolution: float
    width: int
    length: int
    bit_depth: BitDepth2D
    data_size: int
    compression_quality: float


@dataclass(frozen=True)
class PSIImage3D(_PayloadGeometry):
    """Header block describing the 3D (range) image.

    Same layout as ``PSIImage2D`` with an added vertical resolution and
    a registration flag.
    """

    storage_order: PixelStorageOrder
    codec: Codec3D
    longitudinal_resolution: float
    transverse_resolution: float
    vertical_resolution: float
    width: int
    length: int
    bit_depth: BitDepth3D
    data_size: int
    compression_quality: float
    registration: Registration


PSIImage = Union[PSIImage2D, PSIImage3D]


@dataclass(frozen=True)
class PSIMetadata(ImageMetadata):
    """Validated header of one PSI file.

    ``rows``, ``cols`` and ``dtype`` describe the primary image: the 3D
    image when it carries data, otherwise the 2D image.  Every scalar
    read from the header is also available by its display label through
    dict-like access (e.g. ``meta['2D Width']``).

    Attributes
    ----------
    signature : str
        Always ``'psi'``.
    version : str
        Format version, ``D.DD`` followed by one free byte.
    software_version, state, route : str
        Acquisition software and survey location identifiers.
    heading : float
        Vehicle heading in degrees.
    lane_index : int
        Surveyed lane.
    serial_number : int
        Sensor serial number.
    gps_longitude, gps_latitude : float
        Position at the start of the section, in degrees.
    dmi : float
        Distance measuring instrument reading.
    date, time : str
        Acquisition date and time as recorded.
    image_2d : PSIImage2D
        2D block.
    image_3d : PSIImage3D
        3D block.
    reference_range : float
        Reference range value.
    metadata_size : int
        Size of the trailing metadata block in bytes.
    speed : float
        Vehicle speed.
    timestamp : int
        Acquisition timestamp.
    vehicle, operator, contractor, sensor_system : str
        Survey crew and equipment identifiers.
    offset_2d : int
        Byte offset of the 2D payload.
    offset_3d : int
        Byte offset of the 3D payload.
    file_size : int
        Stream length the record was validated against.
    table : Mapping[str, Any]
        Read-only display-label table of every header value, in read
        order.
    """

    signature: str
    version: str
    software_version: str
    state: str
    route: str
    heading: float
    lane_index: int
    serial_number: int
    gps_longitude: float
    gps_latitude: float
    dmi: float
    date: str
    time: str
    image_2d: PSIImage2D
    image_3d: PSIImage3D
    reference_range: float
    metadata_size: int
    speed: float
    timestamp: int
    vehicle: str
    operator: str
    contractor: str
    sensor_system: str
    offset_2d: int
    offset_3d: int
    file_size: int
    table: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}),
        compare=False, repr=False,
    )

    def _table(self) -> Mapping[str, Any]:
        return self.table

    def image(self, selector: Union[ImageSelector, str]) -> PSIImage:
        """Return the sub-record for ``'2D'`` or ``'3D'``."""
        selector = ImageSelector.coerce(selector)
        if selector is ImageSelector.IMAGE_2D:
            return self.image_2d
        return self.image_3d

    def payload_offset(self, selector: Union[ImageSelector, str]) -> int:
        """Byte offset of the selected payload."""
        selector = ImageSelector.coerce(selector)
        if selector is ImageSelector.IMAGE_2D:
            return self.offset_2d
        return self.offset_3d

    @property
    def primary_image(self) -> ImageSelector:
        """3D when it carries data, otherwise 2D."""
        if self.image_3d.is_present:
            return ImageSelector.IMAGE_3D
        return ImageSelector.IMAGE_2D

    @property
    def metadata_offset(self) -> int:
        """Byte offset of the trailing metadata block."""
        return self.offset_3d + self.image_3d.data_size

    @property
    def gps(self) -> LatLon:
        return LatLon(lat=self.gps_latitude, lon=self.gps_longitude)


class PSIMetadataBuilder:
    """Accumulates parsed header fields and yields a ``PSIMetadata``.

    The parser validates each value before handing it over; the builder
    only records it, together with a display label for the metadata
    table.

    Examples
    --------
    >>> builder = PSIMetadataBuilder()
    >>> builder.set_field('signature', 'psi', 'Signature')
    >>> builder.set_image_field('2D', 'width', 640, 'Width')
    >>> builder.image_fields('2D')['width']
    640
    """

    def __init__(self) -> None:
        self._fields: Dict[str, Any] = {}
        self._images: Dict[ImageSelector, Dict[str, Any]] = {
            ImageSelector.IMAGE_2D: {},
            ImageSelector.IMAGE_3D: {},
        }
        self._table: Dict[str, Any] = {}

    def set_field(self, name: str, value: Any, label: str) -> None:
        """Record a file-level field."""
        self._fields[name] = value
        self._table[label] = value

    def set_image_field(
        self,
        image: Union[ImageSelector, str],
        name: str,
        value: Any,
        label: str,
    ) -> None:
        """Record a field of the 2D or 3D block.

        The table label is prefixed with the image name, e.g.
        ``'3D Width'``.
        """
        image = ImageSelector.coerce(image)
        self._images[image][name] = value
        self._table[f'{image.value} {label}'] = value

    def image_fields(self, image: Union[ImageSelector, str]) -> Mapping[str, Any]:
        """Read-only view of the fields recorded so far for one image."""
        return MappingProxyType(self._images[ImageSelector.coerce(image)])

    def get_field(self, name: str) -> Any:
        """Value of a file-level field recorded so far."""
        return self._fields[name]

    def build(self, offset_2d: int, file_size: int) -> PSIMetadata:
        """Freeze the accumulated fields into a ``PSIMetadata``.

        Parameters
        ----------
        offset_2d : int
            Offset of the 2D payload (end of the fixed header).
        file_size : int
            Physical stream length.

        Returns
        -------
        PSIMetadata

        Raises
        ------
        TypeError
            If a required field was never recorded.
        """
        image_2d = PSIImage2D(**self._images[ImageSelector.IMAGE_2D])
        image_3d = PSIImage3D(**self._images[ImageSelector.IMAGE_3D])
        primary = image_3d if image_3d.is_present else image_2d

        return PSIMetadata(
            format='PSI',
            rows=primary.length,
            cols=primary.width,
            dtype=primary.sample_dtype.name,
            image_2d=image_2d,
            image_3d=image_3d,
            offset_2d=offset_2d,
            offset_3d=offset_2d + image_2d.data_size,
            file_size=file_size,
            table=MappingProxyType(dict(self._table)),
            **self._fields,
        )
