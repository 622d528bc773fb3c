# rekheader
# __________________
#
# Copyright (c) Kirill Gavrilov, 2020
#
# This file is part of the rekheader project, a tool generating a REK file header (Fraunhofer EZRT raw format)
# for raw volume data without any header.
#
# This code is licensed under MIT license (see LICENSE.txt for details).


from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .common_types import SAMPLEFORMAT, REK_HEADER_LENGTH, REK_RESERVED_1_LENGTH, REK_RESERVED_2_LENGTH


def to_float32(value: float) -> float:
    """Round a Python float to the precision of a 32 bit header field (values out of range become +-inf)."""
    with np.errstate(over='ignore'):
        return float(np.float32(value))


@dataclass(frozen=True)
class RekHeader:
    """REK volume header (Fraunhofer EZRT raw volume format, 2048 bytes)."""
    width: int = 0
    height: int = 0
    depth: int = 0
    sample_format: SAMPLEFORMAT | int = SAMPLEFORMAT.UNDEFINED
    voxel_size_in_um: float = 0.0
    slice_step_in_um: float = 0.0

    def __post_init__(self):
        for name in ('width', 'height', 'depth', 'sample_format'):
            value = int(getattr(self, name))
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f'{name} must fit into an unsigned 16 bit field (got {value})')
            object.__setattr__(self, name, value)
        object.__setattr__(self, 'sample_format', SAMPLEFORMAT.from_code(self.sample_format))
        object.__setattr__(self, 'voxel_size_in_um', to_float32(self.voxel_size_in_um))
        object.__setattr__(self, 'slice_step_in_um', to_float32(self.slice_step_in_um))

    def __len__(self):
        return REK_HEADER_LENGTH

    def __str__(self):
        return '### REK HEADER ###\n'\
            + '# VOLUME\n'\
            + f' - size (W x H x D) @ format: {self.width} x {self.height} x {self.depth}'\
            + f' @ {self.format_tag}\n'\
            + f' - payload size [bytes]: {self.payload_size if self.has_valid_format else "-"}\n'\
            + '# GEOMETRY\n'\
            + f' - voxel size [µm]: {self.voxel_size_in_um}\n'\
            + f' - slice step [µm]: {self.slice_step_in_um}'

    @property
    def has_valid_format(self) -> bool:
        return self.sample_format in (SAMPLEFORMAT.INT16, SAMPLEFORMAT.FLOAT32)

    @property
    def format_tag(self) -> str:
        if self.has_valid_format:
            return SAMPLEFORMAT(self.sample_format).tag
        return f'unknown ({int(self.sample_format)})'

    @property
    def number_of_voxels(self) -> int:
        return self.width * self.height * self.depth

    @property
    def payload_size(self) -> int:
        """Expected size of the raw volume data following the header in bytes."""
        if not self.has_valid_format:
            raise ValueError(f'sample format {int(self.sample_format)} not supported (must be 16 or 32)')
        return SAMPLEFORMAT(self.sample_format).bytes_per_sample * self.number_of_voxels

    @classmethod
    def frombuffer(cls, buffer: bytes) -> RekHeader:
        """
        Create new header instance from buffer (byte array).

        :param buffer: buffer / bytearray with header information (only the first 2048 bytes are used)
        """
        if len(buffer) < REK_HEADER_LENGTH:
            raise ValueError(f'wrong input byte buffer size (must be >= {REK_HEADER_LENGTH})')

        offset = 0
        width = np.frombuffer(buffer, dtype='<u2', count=1, offset=offset)[0]
        offset += 2
        height = np.frombuffer(buffer, dtype='<u2', count=1, offset=offset)[0]
        offset += 2
        sample_format = np.frombuffer(buffer, dtype='<u2', count=1, offset=offset)[0]
        offset += 2
        depth = np.frombuffer(buffer, dtype='<u2', count=1, offset=offset)[0]
        offset += 2
        # reserved gap and reserved float field
        offset += REK_RESERVED_1_LENGTH + 4
        voxel_size_in_um = np.frombuffer(buffer, dtype='<f4', count=1, offset=offset)[0]
        offset += 4
        slice_step_in_um = np.frombuffer(buffer, dtype='<f4', count=1, offset=offset)[0]
        offset += 4
        offset += REK_RESERVED_2_LENGTH

        if offset != REK_HEADER_LENGTH:
            raise ValueError('offset does not match header length - file may be corrupted')

        return cls(int(width), int(height), int(depth), int(sample_format),
                   float(voxel_size_in_um), float(slice_step_in_um))

    @classmethod
    def fromfile(cls, filename: Path | str) -> RekHeader:
        """
        Create new header instance from file.

        :param filename: path to file
        """
        with open(filename, 'rb') as fd:
            buffer = fd.read(REK_HEADER_LENGTH)

        return cls.frombuffer(buffer)

    @staticmethod
    def convert_to_numpy_dtype(sample_format: SAMPLEFORMAT | int):
        if sample_format == SAMPLEFORMAT.INT16:
            return np.dtype('<u2')
        elif sample_format == SAMPLEFORMAT.FLOAT32:
            return np.dtype('<f4')
        raise ValueError('sample format not supported')

    def tobytes(self) -> bytes:
        """
        Convert header to byte array according to the REK header layout (little endian).

        :return: byte representation of header
        """
        raw_bytes = bytearray()

        # -----------------------------------volume-----------------------------
        raw_bytes += np.array(self.width, dtype='<u2').tobytes()
        raw_bytes += np.array(self.height, dtype='<u2').tobytes()
        raw_bytes += np.array(int(self.sample_format), dtype='<u2').tobytes()
        raw_bytes += np.array(self.depth, dtype='<u2').tobytes()

        # ----------------------------------reserved----------------------------
        raw_bytes += bytes(REK_RESERVED_1_LENGTH)
        raw_bytes += np.array(0.0, dtype='<f4').tobytes()

        # ----------------------------------geometry----------------------------
        raw_bytes += np.array(self.voxel_size_in_um, dtype='<f4').tobytes()
        raw_bytes += np.array(self.slice_step_in_um, dtype='<f4').tobytes()

        # ----------------------------------reserved----------------------------
        raw_bytes += bytes(REK_RESERVED_2_LENGTH)

        if len(raw_bytes) != REK_HEADER_LENGTH:
            raise ValueError(f'wrong header length: {len(raw_bytes)} vs. {REK_HEADER_LENGTH}')

        return bytes(raw_bytes)



class RekHeaderBuilder:
    """Accumulates header fields one option at a time; build() returns the immutable RekHeader."""

    def __init__(self):
        self.width: int = 0
        self.height: int = 0
        self.depth: int = 0
        self.sample_format: SAMPLEFORMAT | int = SAMPLEFORMAT.UNDEFINED
        self.voxel_size_in_um: float = 0.0
        self.slice_step_in_um: float = 0.0

    @staticmethod
    def _truncate_to_16_bit(value: int) -> int:
        return int(value) & 0xFFFF

    def set_width(self, width: int) -> RekHeaderBuilder:
        self.width = self._truncate_to_16_bit(width)
        return self

    def set_height(self, height: int) -> RekHeaderBuilder:
        self.height = self._truncate_to_16_bit(height)
        return self

    def set_depth(self, depth: int) -> RekHeaderBuilder:
        self.depth = self._truncate_to_16_bit(depth)
        return self

    def set_sample_format(self, sample_format: SAMPLEFORMAT) -> RekHeaderBuilder:
        self.sample_format = sample_format
        return self

    def set_voxel_size(self, voxel_size_in_um: float) -> RekHeaderBuilder:
        """
        Set the voxel size; the slice step follows it as long as no slice step was set before.

        :param voxel_size_in_um: voxel edge length in the XY plane in microns
        """
        self.voxel_size_in_um = to_float32(voxel_size_in_um)
        if self.slice_step_in_um == 0.0:
            self.slice_step_in_um = self.voxel_size_in_um
        return self

    def set_slice_step(self, slice_step_in_um: float) -> RekHeaderBuilder:
        self.slice_step_in_um = to_float32(slice_step_in_um)
        return self

    def build(self) -> RekHeader:
        return RekHeader(self.width, self.height, self.depth, self.sample_format,
                         self.voxel_size_in_um, self.slice_step_in_um)
