# -*- coding: utf-8 -*-
"""
IO Models Common - Reusable primitive types for metadata dataclasses.

Provides building-block dataclasses shared by readers: a WGS-84 point
(``LatLon``) and a rectangular pixel window (``Region``) used to
request planes.

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
from dataclasses import dataclass


@dataclass(frozen=True)
class LatLon:
    """WGS-84 geographic point (2D).

    Parameters
    ----------
    lat : float
        Latitude in degrees.
    lon : float
        Longitude in degrees.
    """

    lat: float = 0.0
    lon: float = 0.0


@dataclass(frozen=True)
class Region:
    """Rectangular pixel window within an image.

    The window covers columns ``[x, x + width)`` and rows
    ``[y, y + height)``.

    Parameters
    ----------
    x : int
        First column (inclusive).
    y : int
        First row (inclusive).
    width : int
        Number of columns.
    height : int
        Number of rows.

    Examples
    --------
    >>> r = Region(x=2, y=1, width=4, height=3)
    >>> r.x_end, r.y_end
    (6, 4)
    >>> r.in_bounds(width=8, length=6)
    True
    """

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def full(cls, width: int, length: int) -> 'Region':
        """Window covering an entire ``width`` x ``length`` image."""
        return cls(x=0, y=0, width=width, height=length)

    @property
    def x_end(self) -> int:
        """One past the last column."""
        return self.x + self.width

    @property
    def y_end(self) -> int:
        """One past the last row."""
        return self.y + self.height

    def contains(self, other: 'Region') -> bool:
        """Whether ``other`` lies entirely within this window."""
        return (
            other.x >= self.x and other.y >= self.y
            and other.x_end <= self.x_end and other.y_end <= self.y_end
        )

    def in_bounds(self, width: int, length: int) -> bool:
        """Whether this is a non-empty window inside ``[0, width) x [0, length)``."""
        if self.width <= 0 or self.height <= 0:
            return False
        return Region.full(width, length).contains(self)
