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

import sys

from .arguments import USAGE, parse_arguments, validate_arguments
from .common_exceptions import ArgumentError, SizeMismatchError
from .raw2rek import raw2rek


def print_help():
    print(USAGE)


def main(argv: list[str] | None = None) -> int:
    """
    Command line entry point: add a REK header to a headerless raw volume file.

    :param argv: command line arguments without program name (default: sys.argv[1:])
    :return: exit status (0 on success or help, 1 on any error)
    """
    if argv is None:
        argv = sys.argv[1:]

    if len(argv) == 0:
        print('Syntax error: wrong number of arguments', file=sys.stderr)
        print_help()
        return 1

    try:
        arguments = parse_arguments(argv)
        if arguments.help_requested:
            print_help()
            return 0
        header = validate_arguments(arguments)
    except ArgumentError as e:
        print(f'Syntax error: {e}', file=sys.stderr)
        return 1

    try:
        raw2rek(arguments.input_path, arguments.output_path, header)
    except SizeMismatchError as e:
        print(f'Error: {e}.', file=sys.stderr)
        return 1
    except OSError as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
