"""How activation commands are handed back to the calling shell."""

from __future__ import annotations

import enum
import json
import os
import sys
from dataclasses import dataclass, field


class OutputProtocol(enum.Enum):
    """Channel used to pass commands to the shell."""

    FD3 = "fd3"
    """Unix file descriptor 3 protocol (bash/zsh)."""
    JSON = "json"
    """JSON protocol for PowerShell."""

    @classmethod
    def detect(cls) -> OutputProtocol:
        """Choose the protocol from the platform alone."""
        return cls.JSON if sys.platform == "win32" else cls.FD3

    @classmethod
    def from_env(cls) -> OutputProtocol:
        """Choose JSON on Windows or when running under PowerShell."""
        if sys.platform == "win32" or "PSModulePath" in os.environ:
            return cls.JSON
        return cls.FD3


@dataclass
class CommandOutput:
    """The JSON document of commands read by the PowerShell integration."""

    commands: list[str] = field(default_factory=list)

    def to_json(self) -> str:
        """Serialise to compact JSON: ``{"commands":[...]}``."""
        return json.dumps({"commands": list(self.commands)}, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> CommandOutput:
        """Parse a JSON document produced by :meth:`to_json`.

        Raises ValueError if the document does not have that shape.
        """
        data = json.loads(text)
        if not isinstance(data, dict) or "commands" not in data:
            raise ValueError("expected an object with a 'commands' field")
        commands = data["commands"]
        if not isinstance(commands, list) or not all(isinstance(c, str) for c in commands):
            raise ValueError("'commands' must be a list of strings")
        return cls(commands=list(commands))