"""Shared pytest fixtures for the rekheader tests."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest


@pytest.fixture()
def int16_volume() -> np.ndarray:
    """A 4 x 4 x 1 volume of 16 bit samples (32 bytes)."""
    return np.arange(16, dtype='<u2')


@pytest.fixture()
def float32_volume() -> np.ndarray:
    """A 3 x 2 x 2 volume of 32 bit float samples (48 bytes)."""
    return np.linspace(0.0, 1.0, 12, dtype='<f4')


@pytest.fixture()
def raw_file(tmp_path: Path, int16_volume: np.ndarray) -> Path:
    """Headerless raw file holding the int16 volume."""
    path = tmp_path / 'a.raw'
    path.write_bytes(int16_volume.tobytes())
    return path


@pytest.fixture()
def rek_file(tmp_path: Path) -> Path:
    """Target path of the .rek file (not created)."""
    return tmp_path / 'a.rek'
