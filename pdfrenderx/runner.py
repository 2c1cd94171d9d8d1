"""Synchronous execution of the external tools."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

from .exceptions import ToolInvocationError, tool_error_kind

_LOGGER = logging.getLogger("pdfrenderx")


@dataclass(frozen=True)
class CommandResult:
    """Exit status and combined stdout/stderr of one tool run.

    ``returncode`` is ``None`` when the process could not be started.
    """

    command: str
    returncode: int | None
    output: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def error(self) -> str | None:
        return None if self.ok else tool_error_kind(self.command)

    def check(self) -> "CommandResult":
        """Raise :class:`ToolInvocationError` unless the run succeeded."""

        if not self.ok:
            raise ToolInvocationError(self.command, self.returncode, self.output)
        return self


def run_tool(command: str, args: Sequence[str], *, executable: str | None = None) -> CommandResult:
    """Run *command* with *args* and wait for it to exit.

    *command* is the logical tool name used for error reporting; *executable*
    overrides the program actually launched. No timeout is applied.
    """

    argv = [executable or command, *args]
    _LOGGER.debug("Executing command: %s", " ".join(argv))
    try:
        completed = subprocess.run(
            argv,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=False,
            text=True,
        )
    except OSError as exc:
        _LOGGER.warning("Failed to execute %s: %s", command, exc)
        return CommandResult(command, None, str(exc))

    result = CommandResult(command, completed.returncode, completed.stdout or "")
    if not result.ok:
        _LOGGER.warning(
            "%s failed with code %s: %s", command, result.returncode, result.output.strip()
        )
    return result


__all__ = ["CommandResult", "run_tool"]
