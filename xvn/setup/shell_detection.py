"""Detecting the user's shell and its profile files."""

from __future__ import annotations

import enum
import logging
import os
from pathlib import Path, PurePath

log = logging.getLogger(__name__)


class ShellDetectionError(RuntimeError):
    """The current shell could not be determined or is not supported."""


class Shell(enum.Enum):
    """A supported interactive shell; the value is its program name."""

    BASH = "bash"
    ZSH = "zsh"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def detect(cls) -> Shell:
        """Determine the shell from ``$SHELL``."""
        shell_path = os.environ.get("SHELL")
        if shell_path is None:
            raise ShellDetectionError(
                "Could not detect shell. Please set $SHELL environment variable."
            )
        log.debug("Detected shell from $SHELL: %s", shell_path)
        return cls.from_path(shell_path)

    @classmethod
    def from_path(cls, path: str) -> Shell:
        """Determine the shell from the path of its executable."""
        shell_name = PurePath(path).name
        if not shell_name:
            raise ShellDetectionError("Invalid shell path")
        try:
            return cls(shell_name)
        except ValueError:
            raise ShellDetectionError(
                f"Unsupported shell: {shell_name}. xvn currently supports bash and zsh."
            ) from None

    def profile_files(self, home: str | Path) -> list[Path]:
        """Return candidate profile files in priority order."""
        home = Path(home)
        if self is Shell.BASH:
            return [home / ".bashrc", home / ".bash_profile", home / ".profile"]
        return [home / ".zshrc", home / ".zprofile"]