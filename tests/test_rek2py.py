"""Tests for loading .rek volumes into numpy arrays."""

from __future__ import annotations

import numpy as np
import pytest

from rekheader.common_exceptions import SizeMismatchError
from rekheader.common_types import SAMPLEFORMAT
from rekheader.raw2rek import raw2rek
from rekheader.rek2py import rek2py
from rekheader.rek_header import RekHeader


def test_load_converted_volume(tmp_path, float32_volume) -> None:
    raw_file = tmp_path / 'volume.raw'
    raw_file.write_bytes(float32_volume.tobytes())
    header = RekHeader(3, 2, 2, SAMPLEFORMAT.FLOAT32, 0.5, 0.5)
    raw2rek(raw_file, tmp_path / 'volume.rek', header)

    loaded_header, volume = rek2py(tmp_path / 'volume.rek')
    assert loaded_header == header
    assert volume.shape == (3, 2, 2)
    assert volume.dtype == np.float32
    assert np.array_equal(volume.ravel(), float32_volume)


def test_switch_order(raw_file, rek_file, int16_volume) -> None:
    raw2rek(raw_file, rek_file, RekHeader(4, 2, 2, SAMPLEFORMAT.INT16, 1.0, 1.0))
    _, volume = rek2py(rek_file, switch_order=True)
    assert volume.shape == (2, 2, 4)
    assert volume.dtype == np.uint16
    assert np.array_equal(volume, int16_volume.reshape(2, 2, 4))


def test_not_a_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        rek2py(tmp_path / 'missing.rek')


def test_truncated_payload(rek_file) -> None:
    header = RekHeader(4, 4, 1, SAMPLEFORMAT.INT16, 1.0, 1.0)
    rek_file.write_bytes(header.tobytes() + bytes(30))
    with pytest.raises(SizeMismatchError):
        rek2py(rek_file)
