# -*- coding: utf-8 -*-
"""
IO Models Base - Read-only typed metadata container for imagery readers.

Provides ``ImageMetadata``, a frozen dataclass that stores universal
image metadata (format, rows, cols, dtype) as typed attributes while
supporting dict-like *read* access.  Format-specific subclasses add
typed fields and may expose a key/value table of raw header values
through ``_table()``; dict-like lookups check typed fields first and
the table second.

Records are immutable once constructed, so there is no item
assignment.

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
from dataclasses import dataclass, fields as dc_fields
from typing import Any, Dict, Iterator, List, Mapping


@dataclass(frozen=True)
class ImageMetadata:
    """Typed, immutable metadata for imagery read by psikit readers.

    Parameters
    ----------
    format : str
        Format identifier (e.g., ``'PSI'``).
    rows : int
        Number of image rows (lines) of the primary image.
    cols : int
        Number of image columns (samples) of the primary image.
    dtype : str
        NumPy dtype string of the primary image (e.g., ``'uint16'``).

    Examples
    --------
    >>> meta = ImageMetadata(format='PSI', rows=512, cols=1024,
    ...                      dtype='uint8')
    >>> meta['rows']
    512
    >>> 'rows' in meta
    True
    """

    format: str
    rows: int
    cols: int
    dtype: str

    def _table(self) -> Mapping[str, Any]:
        """Key/value table consulted after typed fields.

        Subclasses override to expose raw header values.
        """
        return {}

    def _field_names(self) -> List[str]:
        return [f.name for f in dc_fields(self) if f.compare]

    # ----------------------------------------------------------------
    # Dict-like read access
    # ----------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        """Access metadata by key, checking typed fields then the table.

        Raises
        ------
        KeyError
            If key is not found in typed fields or the table.
        """
        if key in self._field_names():
            return getattr(self, key)
        table = self._table()
        if key in table:
            return table[key]
        raise KeyError(key)

    def __contains__(self, key: str) -> bool:
        """Check if key exists and has a non-None value."""
        if key in self._field_names():
            return getattr(self, key) is not None
        return key in self._table()

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by key with a default, like ``dict.get()``."""
        try:
            val = self[key]
        except KeyError:
            return default
        return default if val is None else val

    def keys(self) -> List[str]:
        """Typed fields with non-None values, then table keys."""
        result = [
            name for name in self._field_names()
            if getattr(self, name) is not None
        ]
        result.extend(k for k in self._table() if k not in result)
        return result

    def values(self) -> List[Any]:
        return [self[k] for k in self.keys()]

    def items(self) -> List[tuple]:
        return [(k, self[k]) for k in self.keys()]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary.

        Typed fields with None values are excluded.  Table entries are
        merged into the top level after typed fields.

        Returns
        -------
        Dict[str, Any]
        """
        return dict(self.items())

    def __iter__(self) -> Iterator[str]:
        """Iterate over available keys for ``dict(metadata)`` compat."""
        return iter(self.keys())

    def __len__(self) -> int:
        """Number of available metadata keys."""
        return len(self.keys())
