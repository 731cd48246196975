# -*- coding: utf-8 -*-
"""
IO Models - Typed metadata containers for imagery readers.

Re-exports all metadata classes from submodules for convenient access:

    from psikit.IO.models import PSIMetadata, Region

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

# Base
from psikit.IO.models.base import ImageMetadata

# Common primitives
from psikit.IO.models.common import LatLon, Region

# PSI
from psikit.IO.models.psi import (
    PSIMetadata,
    PSIImage2D,
    PSIImage3D,
    PSIMetadataBuilder,
)

__all__ = [
    # Base
    'ImageMetadata',
    # Common
    'LatLon',
    'Region',
    # PSI
    'PSIMetadata',
    'PSIImage2D',
    'PSIImage3D',
    'PSIMetadataBuilder',
]
