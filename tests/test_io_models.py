# -*- coding: utf-8 -*-
"""
IO Models Tests - Unit tests for metadata dataclasses and Region.

Verifies typed attribute access, read-only dict-like access, label-table
lookups, immutability, and Region window arithmetic.

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
import dataclasses
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

# Third-party
import pytest

# psikit internal
from psikit.IO.cursor import ByteCursor
from psikit.IO.models import (
    ImageMetadata,
    LatLon,
    PSIMetadataBuilder,
    Region,
)
from psikit.IO.psi import parse_header
from psikit.vocabulary import ImageSelector


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def basic_meta():
    """ImageMetadata with only required fields."""
    return ImageMetadata(format='PSI', rows=6, cols=8, dtype='uint16')


@pytest.fixture
def psi_meta(build_psi):
    """Parsed PSIMetadata from the default synthetic file."""
    with ByteCursor(build_psi()) as cursor:
        return parse_header(cursor)


@dataclass(frozen=True)
class MockTableMetadata(ImageMetadata):
    """Subclass exposing an optional field and a label table."""

    sensor: Optional[str] = None
    labels: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({'Lane Index': 3}),
        compare=False,
    )

    def _table(self):
        return self.labels


# ---------------------------------------------------------------------------
# ImageMetadata
# ---------------------------------------------------------------------------

def test_required_fields(basic_meta):
    """Required fields accessible as attributes."""
    assert basic_meta.format == 'PSI'
    assert basic_meta.rows == 6
    assert basic_meta.cols == 8
    assert basic_meta.dtype == 'uint16'


def test_dict_access_typed_field(basic_meta):
    assert basic_meta['rows'] == 6


def test_dict_access_keyerror(basic_meta):
    """Dict access raises KeyError for missing keys."""
    with pytest.raises(KeyError):
        basic_meta['missing_key']


def test_immutable(basic_meta):
    """Metadata records cannot be modified."""
    with pytest.raises(dataclasses.FrozenInstanceError):
        basic_meta.rows = 10
    with pytest.raises(TypeError):
        basic_meta['rows'] = 10


def test_keys_and_len(basic_meta):
    assert basic_meta.keys() == ['format', 'rows', 'cols', 'dtype']
    assert len(basic_meta) == 4


def test_to_dict(basic_meta):
    assert basic_meta.to_dict() == {
        'format': 'PSI', 'rows': 6, 'cols': 8, 'dtype': 'uint16',
    }
    assert dict(basic_meta) == basic_meta.to_dict()


def test_get_with_default(basic_meta):
    assert basic_meta.get('nope', 42) == 42
    assert basic_meta.get('cols') == 8


def test_subclass_none_fields_hidden():
    """None-valued typed fields are absent from contains and keys."""
    meta = MockTableMetadata(format='X', rows=1, cols=1, dtype='uint8')
    assert 'sensor' not in meta
    assert 'sensor' not in meta.keys()
    assert meta.get('sensor', 'none') == 'none'


def test_subclass_table_lookup():
    """Table entries follow typed fields; the table field is hidden."""
    meta = MockTableMetadata(format='X', rows=1, cols=1, dtype='uint8',
                             sensor='LCMS')
    assert meta['Lane Index'] == 3
    assert 'Lane Index' in meta
    assert meta.keys() == ['format', 'rows', 'cols', 'dtype', 'sensor',
                           'Lane Index']
    assert 'labels' not in meta.keys()


# ---------------------------------------------------------------------------
# PSIMetadata
# ---------------------------------------------------------------------------

class TestPSIMetadata:
    """Derived accessors of a parsed record."""

    def test_image_selector(self, psi_meta):
        assert psi_meta.image('2D') is psi_meta.image_2d
        assert psi_meta.image(ImageSelector.IMAGE_3D) is psi_meta.image_3d

    def test_payload_offset(self, psi_meta):
        assert psi_meta.payload_offset('2D') == psi_meta.offset_2d
        assert psi_meta.payload_offset('3D') == psi_meta.offset_3d

    def test_gps(self, psi_meta):
        assert psi_meta.gps == LatLon(lat=30.2672, lon=-97.7431)

    def test_image_geometry(self, psi_meta):
        img = psi_meta.image_3d
        assert img.is_present
        assert img.is_uncompressed
        assert img.bytes_per_sample == 2
        assert img.shape == (6, 8)

    def test_frozen(self, psi_meta):
        with pytest.raises(dataclasses.FrozenInstanceError):
            psi_meta.route = 'US0183'
        with pytest.raises(dataclasses.FrozenInstanceError):
            psi_meta.image_2d.width = 1

    def test_table_read_only(self, psi_meta):
        with pytest.raises(TypeError):
            psi_meta.table['Route'] = 'US0183'

    def test_typed_field_before_table(self, psi_meta):
        """Typed names resolve to attributes, labels to the table."""
        assert psi_meta['route'] == psi_meta['Route'] == 'IH0035-NB'

    def test_table_in_keys(self, psi_meta):
        keys = psi_meta.keys()
        assert keys.index('file_size') < keys.index('Signature')
        assert '3D Vertical Resolution' in keys


class TestMetadataBuilder:
    """Builder bookkeeping."""

    def test_image_field_labels(self):
        builder = PSIMetadataBuilder()
        builder.set_image_field('3D', 'width', 640, 'Width')
        assert builder.image_fields('3D') == {'width': 640}
        assert builder.image_fields('2D') == {}

    def test_get_field(self):
        builder = PSIMetadataBuilder()
        builder.set_field('metadata_size', 21, 'Metadata Size')
        assert builder.get_field('metadata_size') == 21

    def test_incomplete_build(self):
        """A record cannot be built from a partial header."""
        builder = PSIMetadataBuilder()
        builder.set_field('signature', 'psi', 'Signature')
        with pytest.raises(TypeError):
            builder.build(offset_2d=545, file_size=1000)


# ---------------------------------------------------------------------------
# Region
# ---------------------------------------------------------------------------

class TestRegion:
    """Pixel window helpers."""

    def test_ends(self):
        r = Region(x=2, y=1, width=4, height=3)
        assert (r.x_end, r.y_end) == (6, 4)

    def test_full(self):
        assert Region.full(10, 5) == Region(0, 0, 10, 5)

    def test_in_bounds(self):
        assert Region(0, 0, 8, 6).in_bounds(8, 6)
        assert Region(7, 5, 1, 1).in_bounds(8, 6)
        assert not Region(7, 5, 2, 1).in_bounds(8, 6)
        assert not Region(-1, 0, 1, 1).in_bounds(8, 6)

    def test_empty_window_out_of_bounds(self):
        assert not Region(0, 0, 0, 1).in_bounds(8, 6)
        assert not Region(0, 0, 1, -1).in_bounds(8, 6)

    def test_contains(self):
        outer = Region(0, 0, 10, 10)
        assert outer.contains(Region(2, 2, 3, 3))
        assert not outer.contains(Region(8, 8, 3, 1))


def test_import_from_io_package():
    """Models are importable from psikit.IO."""
    from psikit.IO import ImageMetadata as M, Region as R
    assert M is ImageMetadata
    assert R is Region
