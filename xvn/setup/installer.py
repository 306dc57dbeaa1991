"""Installing the shell integration into the user's profile."""

from __future__ import annotations

import logging
from pathlib import Path

from xvn.setup import profile_modification
from xvn.setup.shell_detection import Shell

log = logging.getLogger(__name__)


class SetupInstaller:
    """Adds the shell integration block to the right profile file.

    ``home`` defaults to the user's home directory and ``shell`` to the one
    named by ``$SHELL``.
    """

    def __init__(self, home: str | Path | None = None, shell: Shell | None = None) -> None:
        self.home = Path.home() if home is None else Path(home)
        self.shell = Shell.detect() if shell is None else shell
        log.debug("Detected shell: %s", self.shell)
        log.debug("Home directory: %s", self.home)

    def __repr__(self) -> str:
        return f"SetupInstaller(home={self.home!r}, shell={self.shell!r})"

    def find_profile(self) -> Path:
        """Return the first existing profile file, or the preferred one to create."""
        candidates = self.shell.profile_files(self.home)
        for candidate in candidates:
            if candidate.exists():
                log.debug("Found existing profile: %s", candidate)
                return candidate
        default = candidates[0]
        log.warning("No existing profile found, will create: %s", default)
        return default

    def install(self) -> Path:
        """Install or update the integration and return the profile written."""
        log.info("Setting up xvn shell integration for %s", self.shell)
        profile = self.find_profile()
        profile_modification.add_to_profile(profile)
        return profile