# -*- coding: utf-8 -*-
"""
psikit Exception Hierarchy - Domain-specific exceptions for PSI decoding.

Provides a small exception hierarchy that lets downstream consumers catch
PSI-specific errors distinctly from Python built-in exceptions. All psikit
exceptions subclass both ``PsiError`` and the appropriate built-in
exception, so ``except ValueError`` keeps working for callers that do not
know about psikit.

Every exception is a hard, non-retryable failure: a structurally invalid
file cannot become valid on retry.

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

from typing import Optional


class PsiError(Exception):
    """Base exception for all psikit errors."""


class FramingError(PsiError, ValueError):
    """Signature or trailer missing or mismatched.

    Raised when a stream is handed to the parser or a reader but does
    not start with the ``psi`` signature or end with the ``@@@@``
    trailer.
    """


class FormatError(PsiError, ValueError):
    """Header content violates a PSI structural rule.

    Parameters
    ----------
    message : str
        Description of the violated rule.
    field : str, optional
        Name of the first offending header field.
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class VersionFormatError(FormatError):
    """Version string does not match the ``D.DD`` pattern."""


class EnumValueError(FormatError):
    """Enumerated header field holds a value the format does not define."""


class DimensionError(FormatError):
    """Non-positive width, length, or resolution on a non-empty payload."""


class DataSizeMismatchError(FormatError):
    """Uncompressed payload size disagrees with width x length x bit depth."""


class MissingPayloadError(FormatError):
    """Neither the 2D nor the 3D payload declares any data."""


class FileLengthMismatchError(FormatError):
    """Physical file length disagrees with the sum of declared sections."""


class RangeError(PsiError, ValueError):
    """Requested plane region falls outside the selected image.

    Regions are never clamped; any out-of-extent request is rejected
    before payload bytes are read.
    """


class UnsupportedCodecError(PsiError, NotImplementedError):
    """Payload codec has no decode path.

    Only the uncompressed codec is decoded. Compressed codec identifiers
    are legal in the header but cannot be read as planes.
    """


class CursorError(PsiError, IOError):
    """Read or seek beyond the bounds of the underlying stream."""
