from __future__ import annotations

import shutil

import pytest

from pdfrenderx.exceptions import ToolInvocationError
from pdfrenderx.runner import CommandResult, run_tool

requires_sh = pytest.mark.skipif(shutil.which("sh") is None, reason="sh not available")


@requires_sh
def test_zero_exit_is_ok() -> None:
    result = run_tool("sh", ["-c", "exit 0"])

    assert result.ok
    assert result.error is None
    assert result.check() is result


@requires_sh
def test_non_zero_exit_is_tagged_with_command() -> None:
    result = run_tool("sh", ["-c", "exit 3"])

    assert not result.ok
    assert result.returncode == 3
    assert result.error == "invalid_sh"


@requires_sh
def test_stderr_is_merged_into_output() -> None:
    result = run_tool("sh", ["-c", "echo out; echo err 1>&2"])

    assert "out" in result.output
    assert "err" in result.output


@requires_sh
def test_error_kind_uses_logical_name_not_executable() -> None:
    result = run_tool("wkhtmltopdf", ["-c", "exit 1"], executable="sh")
    assert result.error == "invalid_wkhtmltopdf"


def test_launch_failure_is_reported(tmp_path) -> None:
    missing = str(tmp_path / "no-such-tool")
    result = run_tool("qpdf", ["--version"], executable=missing)

    assert result.returncode is None
    assert not result.ok
    assert result.error == "invalid_qpdf"


def test_check_raises_tool_invocation_error() -> None:
    result = CommandResult("exiftool", 2, "Error: bad tag")

    with pytest.raises(ToolInvocationError) as excinfo:
        result.check()

    assert excinfo.value.kind == "invalid_exiftool"
    assert excinfo.value.returncode == 2
    assert excinfo.value.output == "Error: bad tag"
