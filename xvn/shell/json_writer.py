"""Collects PowerShell commands and emits them as marked JSON."""

from __future__ import annotations

import sys
from typing import TextIO

from xvn.shell.protocol import CommandOutput

START_MARKER = "__XVN_COMMANDS_START__"
END_MARKER = "__XVN_COMMANDS_END__"


def escape_powershell(value: str) -> str:
    """Escape backticks, dollar signs and double quotes for PowerShell."""
    return value.replace("`", "``").replace("$", "`$").replace('"', '`"')


class JsonCommandWriter:
    """Buffers PowerShell commands for the JSON output protocol."""

    def __init__(self) -> None:
        self._commands: list[str] = []

    @property
    def commands(self) -> tuple[str, ...]:
        """The commands collected so far, in order."""
        return tuple(self._commands)

    def export_env(self, key: str, value: str) -> None:
        """Queue ``$env:KEY = "value"`` with the value escaped."""
        self._commands.append(f'$env:{key} = "{escape_powershell(value)}"')

    def prepend_path(self, path: str) -> None:
        """Queue a command that puts ``path`` at the front of PATH."""
        self._commands.append(f'$env:PATH = "{escape_powershell(path)};" + $env:PATH')

    def add_command(self, command: str) -> None:
        """Queue a raw PowerShell command; the caller ensures it is safe."""
        self._commands.append(command)

    def write(self, stream: TextIO | None = None) -> None:
        """Write the commands as JSON between marker lines.

        Nothing is written when no commands have been queued.
        """
        if not self._commands:
            return
        out = sys.stdout if stream is None else stream
        payload = CommandOutput(commands=list(self._commands)).to_json()
        out.write(f"{START_MARKER}\n{payload}\n{END_MARKER}\n")
        out.flush()