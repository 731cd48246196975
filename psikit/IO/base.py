# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interface for imagery readers.

Defines the abstract base class every psikit format reader inherits
from, plus the ``is_format`` sniffing hook the reader registry uses to
discover a reader for an arbitrary file.

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

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from psikit.IO.models.base import ImageMetadata


class ImageReader(ABC):
    """
    Abstract base class for all imagery readers.

    Concrete implementations provide format-specific logic for header
    parsing and sub-region decoding.

    Attributes
    ----------
    filepath : Path
        Path to the image file
    metadata : ImageMetadata
        Image metadata extracted from the file

    Notes
    -----
    Implementations parse the header eagerly and decode pixel data
    lazily, one chip at a time.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        """
        Initialize the image reader.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the image file

        Raises
        ------
        FileNotFoundError
            If the specified filepath does not exist
        """
        self.filepath = Path(filepath)
        if not self.filepath.exists():
            raise FileNotFoundError(f"File not found: {self.filepath}")

        self.metadata: Optional[ImageMetadata] = None
        self._load_metadata()

    @classmethod
    def is_format(cls, filepath: Union[str, Path]) -> bool:
        """
        Cheap structural check of whether this reader can open a file.

        Default implementation accepts nothing. Readers that take part in
        ``open_image`` auto-detection override this.

        Parameters
        ----------
        filepath : Union[str, Path]
            Path to the candidate file

        Returns
        -------
        bool
        """
        return False

    @abstractmethod
    def _load_metadata(self) -> None:
        """
        Load metadata from the image file.

        This method should populate self.metadata with format-specific
        metadata including image dimensions and data type.
        """
        pass

    @abstractmethod
    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[int]] = None
    ) -> np.ndarray:
        """
        Read a spatial subset (chip) of the image.

        Parameters
        ----------
        row_start : int
            Starting row index (inclusive)
        row_end : int
            Ending row index (exclusive)
        col_start : int
            Starting column index (inclusive)
        col_end : int
            Ending column index (exclusive)
        bands : Optional[List[int]], default=None
            List of band indices to read. If None, read all bands.

        Returns
        -------
        np.ndarray
            Image data with shape (rows, cols)

        Raises
        ------
        ValueError
            If indices are out of bounds or invalid
        """
        pass

    def read_full(self, bands: Optional[List[int]] = None) -> np.ndarray:
        """
        Read the entire image.

        Parameters
        ----------
        bands : Optional[List[int]], default=None
            List of band indices to read. If None, read all bands.

        Returns
        -------
        np.ndarray
            Full image data

        Notes
        -----
        Use with caution for large images as this loads the entire
        dataset into memory.
        """
        shape = self.get_shape()
        rows, cols = shape[0], shape[1]
        return self.read_chip(0, rows, 0, cols, bands=bands)

    @abstractmethod
    def get_shape(self) -> Tuple[int, ...]:
        """
        Get the shape of the image.

        Returns
        -------
        Tuple[int, ...]
            Shape tuple (rows, cols)
        """
        pass

    @abstractmethod
    def get_dtype(self) -> np.dtype:
        """
        Get the data type of the image.

        Returns
        -------
        np.dtype
            NumPy data type of the image pixels
        """
        pass

    def get_geolocation(self) -> Optional[Dict[str, Any]]:
        """
        Get geolocation information for the image.

        Returns
        -------
        Optional[Dict[str, Any]]
            Dictionary of geolocation metadata, or None if the format
            carries none.
        """
        return None

    def close(self) -> None:
        """
        Close the reader and release resources.

        Default implementation does nothing. Override if the reader
        maintains open file handles or other resources.
        """
        pass

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
