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

from pathlib import Path

import numpy as np

from .common_types import REK_HEADER_LENGTH
from .common_exceptions import SizeMismatchError
from .rek_header import RekHeader


def rek2py(filepath: Path | str, switch_order: bool = False) -> tuple[RekHeader, np.ndarray]:
    """
    Read a .rek volume file into an internal Python representation (3-dim numpy array) and its header.

    :param filepath: file path to .rek file
    :param switch_order: toggle order of numpy array shape (True: (D, H, W); False (W, H, D))
    :return: tuple with RekHeader object and 3D numpy array representation of .rek file
    """
    filepath = Path(filepath)
    if not filepath.is_file():
        raise FileNotFoundError(f'given path is not a file [{filepath}]')

    with open(filepath, 'rb') as f:
        raw_file_data = f.read()

    rek_header = RekHeader.frombuffer(raw_file_data[:REK_HEADER_LENGTH])
    dtype = RekHeader.convert_to_numpy_dtype(rek_header.sample_format)
    payload_size = len(raw_file_data) - REK_HEADER_LENGTH
    if payload_size != rek_header.payload_size:
        raise SizeMismatchError(payload_size, rek_header.payload_size)

    # import volume payload data to numpy array (excluding header)
    volume = np.frombuffer(raw_file_data, dtype=dtype, offset=REK_HEADER_LENGTH)
    if switch_order:
        shape = rek_header.depth, rek_header.height, rek_header.width
    else:
        shape = rek_header.width, rek_header.height, rek_header.depth
    return rek_header, volume.reshape(shape)
