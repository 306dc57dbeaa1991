"""In-memory plugin whose availability and versions are set by the caller."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import ClassVar

from xvn.plugins.base import VersionManagerPlugin


@dataclass
class MockPlugin(VersionManagerPlugin):
    """Plugin for tests that need no real version manager."""

    name: str = ""
    available: bool = True
    installed_versions: set[str] = field(default_factory=set)
    available_versions: list[str] = field(default_factory=list)
    default: str | None = None

    version_files: ClassVar[tuple[str, ...]] = (".nvmrc",)

    def with_availability(self, available: bool) -> MockPlugin:
        """Return a copy with the given availability."""
        return replace(self, available=available, installed_versions=set(self.installed_versions))

    def with_version(self, version: str) -> MockPlugin:
        """Return a copy with ``version`` marked as installed."""
        return replace(self, installed_versions=self.installed_versions | {version})

    def with_versions(self, versions: Iterable[str]) -> MockPlugin:
        """Return a copy with all of ``versions`` marked as installed."""
        return replace(self, installed_versions=self.installed_versions | set(versions))

    def with_default(self, version: str) -> MockPlugin:
        """Return a copy whose default version is ``version``."""
        return replace(self, default=version, installed_versions=set(self.installed_versions))

    def is_available(self) -> bool:
        return self.available

    def has_version(self, version: str) -> bool:
        return version in self.installed_versions

    def activate_command(self, version: str) -> str:
        return f"{self.name} use {version}"

    def install_command(self, version: str) -> str:
        return f"{self.name} install {version}"

    def list_versions(self) -> list[str]:
        return list(self.available_versions)

    def default_version(self) -> str | None:
        return self.default