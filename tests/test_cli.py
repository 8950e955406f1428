# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0

import pathlib

import pytest
from click import testing as clitest

from scopedxml import __main__ as cli_main

INPUT = '<a xmlns="urn:x"><b xmlns="urn:x"><c xmlns=""/></b></a>'
EXPECTED = '<a xmlns="urn:x"><b><c xmlns=""/></b></a>'
DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


@pytest.fixture
def input_file(tmp_path: pathlib.Path) -> pathlib.Path:
    path = tmp_path / "input.xml"
    path.write_text(INPUT, encoding="utf-8")
    return path


def test_reformat_is_listed_as_command():
    runner = clitest.CliRunner()

    result = runner.invoke(cli_main.main, ["--help"])

    assert result.exit_code == 0
    assert "reformat" in result.output


def test_reformat_writes_to_an_output_file(
    tmp_path: pathlib.Path, input_file: pathlib.Path
):
    output_file = tmp_path / "output.xml"
    runner = clitest.CliRunner()

    result = runner.invoke(
        cli_main.main,
        ["reformat", str(input_file), f"-o{output_file}", "--declaration"],
    )

    assert result.exit_code == 0, f"CLI returned code {result.exit_code}"
    assert output_file.read_text(encoding="utf-8") == DECLARATION + EXPECTED


def test_reformat_writes_to_stdout(input_file: pathlib.Path):
    runner = clitest.CliRunner()

    result = runner.invoke(cli_main.main, ["reformat", str(input_file)])

    assert result.exit_code == 0, f"CLI returned code {result.exit_code}"
    assert result.stdout == EXPECTED + "\n"


def test_reformat_reads_options_from_the_environment(
    tmp_path: pathlib.Path, input_file: pathlib.Path
):
    output_file = tmp_path / "output.xml"
    runner = clitest.CliRunner(
        env={"SCOPEDXML_ENCODING": "UTF-16", "SCOPEDXML_DECLARATION": "1"}
    )

    result = runner.invoke(
        cli_main.main, ["reformat", str(input_file), f"-o{output_file}"]
    )

    assert result.exit_code == 0, f"CLI returned code {result.exit_code}"
    assert output_file.read_text(encoding="utf-16") == (
        '<?xml version="1.0" encoding="UTF-16" standalone="yes"?>' + EXPECTED
    )


def test_reformat_rejects_malformed_input(tmp_path: pathlib.Path):
    path = tmp_path / "broken.xml"
    path.write_text("<a><b></a>", encoding="utf-8")
    runner = clitest.CliRunner()

    result = runner.invoke(cli_main.main, ["reformat", str(path)])

    assert result.exit_code == 1
    assert "Cannot parse" in result.output


def test_reformat_rejects_unknown_encodings(input_file: pathlib.Path):
    runner = clitest.CliRunner()

    result = runner.invoke(
        cli_main.main,
        ["reformat", str(input_file), "--encoding", "no-such-encoding"],
    )

    assert result.exit_code == 2


def test_verbose_flag_is_accepted_before_the_command(
    input_file: pathlib.Path,
):
    runner = clitest.CliRunner()

    result = runner.invoke(cli_main.main, ["-vv", "reformat", str(input_file)])

    assert result.exit_code == 0, f"CLI returned code {result.exit_code}"
    assert EXPECTED in result.stdout
