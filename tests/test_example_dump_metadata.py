# -*- coding: utf-8 -*-
"""
Example Script Tests - dump_psi_metadata text dump.

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
import importlib.util
from pathlib import Path

# Third-party
import pytest


_SCRIPT = (
    Path(__file__).resolve().parents[1]
    / 'psikit' / 'example' / 'IO' / 'dump_psi_metadata.py'
)


@pytest.fixture(scope='module')
def dump_module():
    spec = importlib.util.spec_from_file_location('dump_psi_metadata', _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_default_output_path(dump_module, psi_file):
    """Dump lands next to the input as <name>.metadata.txt."""
    text = dump_module.dump_metadata(psi_file)
    output = psi_file.with_suffix('.metadata.txt')
    assert output.read_text() == text
    assert 'PSI METADATA DUMP' in text
    assert 'IH0035-NB' in text
    assert '8 x 6' in text


def test_explicit_output(dump_module, tmp_path, only_3d_bytes):
    src = tmp_path / 'only3d.psi'
    src.write_bytes(only_3d_bytes)
    out = tmp_path / 'dump.txt'
    text = dump_module.dump_metadata(src, out)
    assert out.exists()
    assert '(no payload)' in text
    assert '10 x 5' in text
