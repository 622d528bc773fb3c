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

from enum import IntEnum


# total header size of a .rek volume file
REK_HEADER_LENGTH = 2048
# reserved gaps of the REK header layout
REK_RESERVED_1_LENGTH = 572
REK_RESERVED_2_LENGTH = 1456


class SAMPLEFORMAT(IntEnum):
    """Voxel sample formats supported by the REK header (value is the code stored in the header)."""
    UNDEFINED = 0
    INT16 = 16
    FLOAT32 = 32

    @property
    def bytes_per_sample(self) -> int:
        if self == SAMPLEFORMAT.INT16:
            return 2
        if self == SAMPLEFORMAT.FLOAT32:
            return 4
        raise ValueError('sample format undefined - no sample size available')

    @property
    def tag(self) -> str:
        """Short human readable name as printed in the conversion summary."""
        if self == SAMPLEFORMAT.INT16:
            return 'int16'
        if self == SAMPLEFORMAT.FLOAT32:
            return 'float32'
        return 'undefined'

    @classmethod
    def from_code(cls, code: int) -> SAMPLEFORMAT | int:
        """
        Map a raw header code to the enum; unknown codes are returned unchanged.

        :param code: 16 bit sample format code read from a header
        :return: matching SAMPLEFORMAT member or the plain int for unknown codes
        """
        try:
            return cls(int(code))
        except ValueError:
            return int(code)
