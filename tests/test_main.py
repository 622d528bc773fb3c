"""End-to-end tests of the rekheader command line."""

from __future__ import annotations

import os
import struct
import warnings

import pytest

from rekheader.__main__ import main
from rekheader.arguments import USAGE
from rekheader.common_types import REK_HEADER_LENGTH


def example_argv(raw_file, rek_file) -> list[str]:
    return ['-i', str(raw_file), '-o', str(rek_file), '-int16', '-x', '4', '-y', '4', '-z', '1', '-pixelSize', '2.0']


class TestSuccess:

    def test_example(self, raw_file, rek_file, capsys) -> None:
        assert main(example_argv(raw_file, rek_file)) == 0
        content = rek_file.read_bytes()
        assert len(content) == 2080
        assert struct.unpack_from('<HHHH', content, 0) == (4, 4, 16, 1)
        assert struct.unpack_from('<ff', content, 584) == (2.0, 2.0)
        captured = capsys.readouterr()
        assert captured.out == f"Output: '{rek_file}' 4x4x1@int16.\n"
        assert captured.err == ''

    def test_positional_paths_and_explicit_slice_step(self, tmp_path, float32_volume) -> None:
        raw_file = tmp_path / 'scan.raw'
        raw_file.write_bytes(float32_volume.tobytes())
        rek_file = tmp_path / 'scan.rek'
        argv = ['-SLICESTEP', '7.5', str(raw_file), '-Float32', '-sizeX', '3', '-sizeY', '2', '-sizeZ', '2',
                '-pixelSize', '0.5', str(rek_file)]
        assert main(argv) == 0
        content = rek_file.read_bytes()
        assert len(content) == REK_HEADER_LENGTH + 48
        assert struct.unpack_from('<HHHH', content, 0) == (3, 2, 32, 2)
        assert struct.unpack_from('<ff', content, 584) == (0.5, 7.5)


class TestHelp:

    @pytest.mark.parametrize('argv', [['-help'], ['--help'], ['-x', 'abc', 'a', 'b', 'c', '-HELP']])
    def test_help(self, argv, tmp_path, capsys) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            assert main(argv) == 0
        captured = capsys.readouterr()
        assert captured.out == USAGE + '\n'
        assert captured.err == ''
        assert list(tmp_path.iterdir()) == []

    def test_no_arguments(self, capsys) -> None:
        assert main([]) == 1
        captured = capsys.readouterr()
        assert 'wrong number of arguments' in captured.err
        assert captured.out == USAGE + '\n'


class TestErrors:

    def test_unknown_argument(self, capsys) -> None:
        assert main(['a.raw', 'a.rek', 'bogus']) == 1
        assert capsys.readouterr().err == "Syntax error: unknown argument 'bogus'\n"

    def test_same_input_and_output(self, raw_file, capsys) -> None:
        before = raw_file.read_bytes()
        argv = example_argv(raw_file, raw_file)
        assert main(argv) == 1
        assert capsys.readouterr().err == 'Syntax error: input and output should not match\n'
        assert raw_file.read_bytes() == before

    @pytest.mark.parametrize('option, value, message', [('-z', '0', 'undefined dimensions'),
                                                        ('-pixelSize', '-2', 'undefined pixel size')])
    def test_invalid_header(self, raw_file, rek_file, option, value, message, capsys) -> None:
        assert main(example_argv(raw_file, rek_file) + [option, value]) == 1
        captured = capsys.readouterr()
        assert captured.err == f'Syntax error: {message}\n'
        assert captured.out == ''
        assert not rek_file.exists()

    def test_missing_format(self, raw_file, rek_file, capsys) -> None:
        argv = [argument for argument in example_argv(raw_file, rek_file) if argument != '-int16']
        assert main(argv) == 1
        assert capsys.readouterr().err == 'Syntax error: undefined pixel format\n'

    def test_size_mismatch(self, raw_file, rek_file, capsys) -> None:
        argv = example_argv(raw_file, rek_file) + ['-z', '2']
        assert main(argv) == 1
        captured = capsys.readouterr()
        assert captured.out == f"Output: '{rek_file}' 4x4x2@int16.\n"
        assert captured.err == 'Error: unexpected input file size 32 (expected: 64 bytes).\n'
        assert not rek_file.exists()

    def test_missing_input(self, tmp_path, rek_file, capsys) -> None:
        assert main(example_argv(tmp_path / 'missing.raw', rek_file)) == 1
        err = capsys.readouterr().err
        assert err.startswith(f"Error: unable to read file '{tmp_path / 'missing.raw'}'")
        assert not rek_file.exists()

    def test_unwritable_output(self, raw_file, tmp_path, capsys) -> None:
        rek_file = tmp_path / 'no_such_dir' / 'a.rek'
        assert main(example_argv(raw_file, rek_file)) == 1
        assert capsys.readouterr().err.startswith(f"Error: unable to write result file '{rek_file}'")

    @pytest.mark.skipif(not os.path.exists('/dev/full'), reason='/dev/full not available')
    def test_disk_full(self, raw_file, capsys) -> None:
        assert main(example_argv(raw_file, '/dev/full')) == 1
        assert capsys.readouterr().err.startswith("Error: unable to write result file '/dev/full'")
