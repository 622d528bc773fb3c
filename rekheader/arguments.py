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

import math
import re
import warnings
from dataclasses import dataclass, field

from .common_types import SAMPLEFORMAT
from .common_exceptions import ArgumentError
from .rek_header import RekHeader, RekHeaderBuilder, to_float32


USAGE = 'Usage: rekheader -i input.raw -o output.rek\n'\
    + '                 [-float32|-int16] -sizeX Size -sizeY Size -sizeZ Size\n'\
    + '                 -pixelSize Microns [-sliceStep Microns]'

HELP_OPTIONS = ('-help', '--help')
FLOAT32_OPTIONS = ('-float', '-float32')
INT16_OPTIONS = ('-int', '-int16')
WIDTH_OPTIONS = ('-width', '-sizex', '-x')
HEIGHT_OPTIONS = ('-height', '-sizey', '-y')
DEPTH_OPTIONS = ('-depth', '-sizez', '-z')
VOXEL_SIZE_OPTIONS = ('-pixelsize',)
SLICE_STEP_OPTIONS = ('-slicedist', '-slicestep')
INPUT_OPTIONS = ('-i', '-input')
OUTPUT_OPTIONS = ('-o', '-output')

_INT_PREFIX = re.compile(r'\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))', re.IGNORECASE)


@dataclass
class ConversionArguments:
    input_path: str = ''
    output_path: str = ''
    header_builder: RekHeaderBuilder = field(default_factory=RekHeaderBuilder)
    help_requested: bool = False

    @property
    def header(self) -> RekHeader:
        return self.header_builder.build()


def parse_int(text: str, option: str = '') -> int:
    """
    Parse the leading integer of a text the permissive way (like C atoi).

    Text without a leading number yields 0, trailing characters are ignored. Both cases issue a warning.

    :param text: option value as given on the command line
    :param option: option name (only used for the warning message)
    :return: parsed integer
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        warnings.warn(f'option {option} expects an integer, got "{text}" - using 0')
        return 0
    if match.group(1) != text.strip():
        warnings.warn(f'option {option} expects an integer, got "{text}" - using {int(match.group(1))}')
    return int(match.group(1))


def parse_float(text: str, option: str = '') -> float:
    """
    Parse the leading floating point number of a text the permissive way (like C atof).

    :param text: option value as given on the command line
    :param option: option name (only used for the warning message)
    :return: parsed number (0.0 if the text does not start with a number)
    """
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        warnings.warn(f'option {option} expects a number, got "{text}" - using 0.0')
        return 0.0
    value = float(match.group(1))
    if match.group(1) != text.strip():
        warnings.warn(f'option {option} expects a number, got "{text}" - using {value}')
    if math.isfinite(value) and not math.isfinite(to_float32(value)):
        warnings.warn(f'option {option} value "{text}" exceeds the 32 bit float range')
    return value


def parse_arguments(argv: list[str]) -> ConversionArguments:
    """
    Parse the command line into input / output path and header fields.

    Option names are case insensitive. Options taking a value only do so if a value follows, otherwise they are
    handled like a bare token: the first bare token is the input path, the second the output path. A help option
    ends the parsing immediately, even if an unknown argument was seen before.

    :param argv: command line arguments without program name
    :return: parsed arguments (not validated yet)
    """
    arguments = ConversionArguments()
    builder = arguments.header_builder
    unknown_argument = None

    index = 0
    while index < len(argv):
        argument = argv[index]
        option = argument.lower()
        has_value = index + 1 < len(argv)

        if option in HELP_OPTIONS:
            arguments.help_requested = True
            return arguments
        elif option in FLOAT32_OPTIONS:
            builder.set_sample_format(SAMPLEFORMAT.FLOAT32)
        elif option in INT16_OPTIONS:
            builder.set_sample_format(SAMPLEFORMAT.INT16)
        elif has_value and option in WIDTH_OPTIONS:
            index += 1
            builder.set_width(parse_int(argv[index], argument))
        elif has_value and option in HEIGHT_OPTIONS:
            index += 1
            builder.set_height(parse_int(argv[index], argument))
        elif has_value and option in DEPTH_OPTIONS:
            index += 1
            builder.set_depth(parse_int(argv[index], argument))
        elif has_value and option in VOXEL_SIZE_OPTIONS:
            index += 1
            builder.set_voxel_size(parse_float(argv[index], argument))
        elif has_value and option in SLICE_STEP_OPTIONS:
            index += 1
            builder.set_slice_step(parse_float(argv[index], argument))
        elif has_value and option in INPUT_OPTIONS:
            index += 1
            arguments.input_path = argv[index]
        elif has_value and option in OUTPUT_OPTIONS:
            index += 1
            arguments.output_path = argv[index]
        elif arguments.input_path == '':
            arguments.input_path = argument
        elif arguments.output_path == '':
            arguments.output_path = argument
        elif unknown_argument is None:
            unknown_argument = argument

        index += 1

    if unknown_argument is not None:
        raise ArgumentError(f"unknown argument '{unknown_argument}'")

    return arguments


def validate_arguments(arguments: ConversionArguments) -> RekHeader:
    """
    Check parsed arguments for completeness and consistency (no file access).

    :param arguments: parsed command line arguments
    :return: the header to write
    """
    header = arguments.header
    if arguments.input_path == '' or arguments.output_path == '':
        raise ArgumentError('wrong number of arguments')
    if arguments.input_path == arguments.output_path:
        raise ArgumentError('input and output should not match')
    if header.width == 0 or header.height == 0 or header.depth == 0:
        raise ArgumentError('undefined dimensions')
    if not header.has_valid_format:
        raise ArgumentError('undefined pixel format')
    if not (header.voxel_size_in_um > 0.0 and math.isfinite(header.voxel_size_in_um)):
        raise ArgumentError('undefined pixel size')

    return header
