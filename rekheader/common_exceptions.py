# rekheader
# __________________
#
# Copyright (c) Kirill Gavrilov, 2020
#
# This file is part of the rekheader project, a tool generating a REK file header (Fraunhofer EZRT raw format)
# for raw volume data without any header.
#
# This code is licensed under MIT license (see LICENSE.txt for details).


class RekHeaderException(Exception):
    """rekheader exception"""


class ArgumentError(RekHeaderException):
    """Command line argument exception."""


class SizeMismatchError(RekHeaderException):
    """Raw payload size does not match the declared volume dimensions."""

    def __init__(self, actual_size: int, expected_size: int):
        super().__init__(f'unexpected input file size {actual_size} (expected: {expected_size} bytes)')
        self.actual_size = actual_size
        self.expected_size = expected_size
