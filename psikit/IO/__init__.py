# -*- coding: utf-8 -*-
"""
IO Module - Input operations for pavement-survey imagery.

Holds the reader base class, the PSI container reader, and a small
reader registry.  Readers are registered by format key and imported
lazily; ``open_image`` asks each registered reader's ``is_format`` hook
whether it recognizes a file and opens the first that does.

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
import importlib
import logging
from pathlib import Path
from typing import Dict, Type, Union

# Base classes and models
from psikit.IO.base import ImageReader
from psikit.IO.cursor import ByteCursor
from psikit.IO.models import ImageMetadata, PSIMetadata, Region

# PSI container
from psikit.IO.psi import (
    PSIReader,
    decode_plane,
    is_psi,
    open_psi,
    parse_header,
    read_plane,
)

logger = logging.getLogger(__name__)


# Reader registry: maps format strings to (module_path, class_name)
_READER_REGISTRY: Dict[str, tuple] = {
    'psi': ('psikit.IO.psi', 'PSIReader'),
}

# Extension-to-format mapping for auto-detection
_EXTENSION_MAP: Dict[str, str] = {
    '.psi': 'psi',
}


def register_reader(
    format: str,
    module_path: str,
    class_name: str,
    extensions: tuple = (),
) -> None:
    """Register an ``ImageReader`` subclass under a format key.

    The module is not imported until the reader is requested.

    Parameters
    ----------
    format : str
        Format key (case-insensitive).
    module_path : str
        Dotted module path, e.g. ``'mypkg.readers'``.
    class_name : str
        Reader class name within the module.
    extensions : tuple of str, optional
        File extensions (with leading dot) that map to this format.
    """
    key = format.lower()
    _READER_REGISTRY[key] = (module_path, class_name)
    for ext in extensions:
        _EXTENSION_MAP[ext.lower()] = key


def _reader_class(format: str) -> Type[ImageReader]:
    key = format.lower()
    if key not in _READER_REGISTRY:
        raise ValueError(
            f"Unknown reader format: {format!r}. "
            f"Supported formats: {sorted(_READER_REGISTRY.keys())}"
        )
    module_path, class_name = _READER_REGISTRY[key]
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def get_reader(format: str, filepath: Union[str, Path]) -> ImageReader:
    """Create an ImageReader for the given format.

    Parameters
    ----------
    format : str
        Registered format key, e.g. ``'psi'``.
    filepath : str or Path
        File to open.

    Returns
    -------
    ImageReader
        Concrete reader instance.

    Raises
    ------
    ValueError
        If *format* is not a registered format string.

    Examples
    --------
    >>> from psikit.IO import get_reader
    >>> reader = get_reader('psi', 'section_0001.psi')
    """
    return _reader_class(format)(filepath)


def open_image(filepath: Union[str, Path]) -> ImageReader:
    """Open any supported image file.

    Readers registered for the file's extension are tried first, then
    every other registered reader, in registration order.  A reader is
    used when its ``is_format`` hook accepts the file.

    Parameters
    ----------
    filepath : str or Path
        Path to the image file.

    Returns
    -------
    ImageReader
        Appropriate reader instance.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If no registered reader recognizes the file.

    Examples
    --------
    >>> from psikit.IO import open_image
    >>> with open_image('section_0001.psi') as reader:
    ...     chip = reader.read_chip(0, 512, 0, 512)
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    candidates = list(_READER_REGISTRY.keys())
    preferred = _EXTENSION_MAP.get(filepath.suffix.lower())
    if preferred in candidates:
        candidates.remove(preferred)
        candidates.insert(0, preferred)

    for key in candidates:
        reader_cls = _reader_class(key)
        if reader_cls.is_format(filepath):
            logger.debug("open_image: %s recognized as %s", filepath, key)
            return reader_cls(filepath)

    raise ValueError(
        f"Could not open {filepath}. No registered reader recognizes it. "
        f"Registered formats: {sorted(_READER_REGISTRY.keys())}"
    )


__all__ = [
    # Base classes and models
    'ImageReader',
    'ByteCursor',
    'ImageMetadata',
    'PSIMetadata',
    'Region',
    # PSI
    'PSIReader',
    'is_psi',
    'parse_header',
    'read_plane',
    'decode_plane',
    'open_psi',
    # Registry
    'register_reader',
    'get_reader',
    'open_image',
]
