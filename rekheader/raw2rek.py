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

import os
from pathlib import Path

from .common_exceptions import SizeMismatchError
from .rek_header import RekHeader


def read_raw_payload(filepath: Path | str) -> bytes:
    """
    Read a headerless .raw volume file completely into memory.

    :param filepath: path to the raw file
    :return: file content
    """
    try:
        with open(filepath, 'rb') as fd:
            file_size = os.fstat(fd.fileno()).st_size
            payload = fd.read()
    except OSError as e:
        raise IOError(f"unable to read file '{filepath}' ({e.strerror})") from e

    if len(payload) < file_size:
        raise IOError(f"unable to read file '{filepath}' ({len(payload)} of {file_size} bytes read)")
    return payload


def raw2rek(input_path: Path | str, output_path: Path | str, header: RekHeader) -> int:
    """
    Prepend a REK header to a headerless raw volume file and save the result as .rek volume file.

    The summary line is printed before the payload size is checked. On a size mismatch the output file is not
    touched. A failing write may leave a truncated output file behind.

    :param input_path: headerless raw volume file
    :param output_path: .rek file to create (overwritten if it exists)
    :param header: header describing the raw volume
    :return: number of bytes written
    """
    payload = read_raw_payload(input_path)
    expected_size = header.payload_size

    print(f"Output: '{output_path}' {header.width}x{header.height}x{header.depth}@{header.format_tag}.")
    if len(payload) != expected_size:
        raise SizeMismatchError(len(payload), expected_size)

    try:
        with open(output_path, 'wb') as fd:
            written = fd.write(header.tobytes())
            written += fd.write(payload)
    except OSError as e:
        raise IOError(f"unable to write result file '{output_path}' ({e.strerror})") from e

    return written
