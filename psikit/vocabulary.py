# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for PSI header fields.

Defines the single source of truth for every enumerated value a PSI
header may carry: pixel storage order, per-image codec, per-image bit
depth, and 3D registration.  Each enum is closed; ``from_byte`` rejects
any value the format does not define instead of coercing it.

Author
------
Steven Siebert

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

from enum import Enum, IntEnum

from psikit.exceptions import EnumValueError


class _HeaderEnum(IntEnum):
    """Integer-valued header enum with strict lookup."""

    @classmethod
    def from_byte(cls, value: int, field: str) -> '_HeaderEnum':
        """Look up a raw header value.

        Parameters
        ----------
        value : int
            Raw value read from the stream.
        field : str
            Header field name, used in the error message.

        Returns
        -------
        _HeaderEnum
            Matching member.

        Raises
        ------
        EnumValueError
            If ``value`` is not a member of this enum.
        """
        try:
            return cls(value)
        except ValueError:
            legal = ', '.join(str(m.value) for m in cls)
            raise EnumValueError(
                f"Unrecognized {field} value {value}; "
                f"expected one of [{legal}]",
                field=field,
            ) from None


class PixelStorageOrder(_HeaderEnum):
    """Sample order of an image payload."""

    ROW_MAJOR = 0
    COLUMN_MAJOR = 1


class _CodecEnum(_HeaderEnum):
    """Payload codec; every codec enum defines ``UNCOMPRESSED``."""

    @property
    def is_uncompressed(self) -> bool:
        return self is type(self).UNCOMPRESSED


class Codec2D(_CodecEnum):
    """Encoding of the 2D (intensity) payload.

    Only ``UNCOMPRESSED`` has a decode path.
    """

    UNCOMPRESSED = 0
    JPEG = 1


class Codec3D(_CodecEnum):
    """Encoding of the 3D (range) payload.

    Only ``UNCOMPRESSED`` has a decode path.
    """

    UNCOMPRESSED = 0
    LOSSLESS = 1


class BitDepth2D(_HeaderEnum):
    """Bits per sample of the 2D payload.

    ``NONE`` is only legal on a block whose data size is zero.
    """

    NONE = 0
    BITS_8 = 8


class BitDepth3D(_HeaderEnum):
    """Bits per sample of the 3D payload.

    ``NONE`` is only legal on a block whose data size is zero.
    """

    NONE = 0
    BITS_16 = 16


class Registration(_HeaderEnum):
    """Whether the 3D image is registered to the 2D image."""

    UNREGISTERED = 0
    REGISTERED = 1


class ImageSelector(Enum):
    """Selects which of the two embedded images to decode."""

    IMAGE_2D = "2D"
    IMAGE_3D = "3D"

    @classmethod
    def coerce(cls, value) -> 'ImageSelector':
        """Accept an ``ImageSelector`` or its ``'2D'``/``'3D'`` string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise ValueError(
                f"Unknown image selector {value!r}; expected '2D' or '3D'"
            ) from None
