"""Interface shared by Node.js version manager plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod

_SAFE_PUNCTUATION = frozenset("-_=/,.+")


class PluginCommandError(RuntimeError):
    """A version manager command could not be run or exited with a failure."""


def _is_safe(ch: str) -> bool:
    return (ch.isascii() and ch.isalnum()) or ch in _SAFE_PUNCTUATION


def shell_escape(value: str) -> str:
    """Quote ``value`` so a POSIX shell reads it as one literal word.

    Strings made only of letters, digits and ``-_=/,.+`` are returned as-is;
    anything else is wrapped in single quotes, with ``'`` and ``!`` escaped.
    """
    if value and all(_is_safe(ch) for ch in value):
        return value
    parts = ["'"]
    for ch in value:
        if ch in "'!":
            parts.append(f"'\\{ch}'")
        else:
            parts.append(ch)
    parts.append("'")
    return "".join(parts)


class VersionManagerPlugin(ABC):
    """A Node.js version manager such as nvm or fnm.

    ``name`` identifies the plugin; ``version_files`` lists the version file
    names it is able to read (informational only).
    """

    name: str = ""
    version_files: tuple[str, ...] = ()

    @abstractmethod
    def is_available(self) -> bool:
        """Return whether the version manager is installed and usable."""

    @abstractmethod
    def has_version(self, version: str) -> bool:
        """Return whether ``version`` is installed by this manager."""

    @abstractmethod
    def activate_command(self, version: str) -> str:
        """Return the shell command that switches to ``version``."""

    @abstractmethod
    def install_command(self, version: str) -> str:
        """Return the shell command that installs ``version``."""

    def resolve_version(self, version: str) -> str:
        """Resolve an alias to a concrete version; unchanged by default."""
        return version

    def list_versions(self) -> list[str]:
        """Return the installed versions; empty by default."""
        return []

    def default_version(self) -> str | None:
        """Return the manager's configured default version, if any."""
        return None