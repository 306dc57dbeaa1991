"""Plugin for the fnm (Fast Node Manager) command-line tool."""

from __future__ import annotations

import subprocess
import threading

from xvn.plugins.base import PluginCommandError, VersionManagerPlugin, shell_escape


class FnmPlugin(VersionManagerPlugin):
    """Drives fnm, which runs as a standalone binary without shell sourcing."""

    name = "fnm"
    version_files = (".nvmrc", ".node-version")

    def __init__(self) -> None:
        self._available: bool | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"FnmPlugin(available={self._available!r})"

    @staticmethod
    def _run(*args: str) -> str:
        try:
            result = subprocess.run(["fnm", *args], capture_output=True, check=False)
        except OSError as exc:
            raise PluginCommandError("Failed to execute fnm command") from exc
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise PluginCommandError(f"fnm command failed: {stderr}")
        return result.stdout.decode("utf-8", errors="replace").strip()

    @staticmethod
    def _version_token(line: str) -> str:
        words = line.lstrip("*").split()
        return words[0] if words else ""

    @staticmethod
    def parse_list(output: str, version: str) -> bool:
        """Return whether ``fnm list`` output mentions ``version``.

        The version may be given with or without a leading ``v``.
        """
        without_v = version.lstrip("v")
        with_v = version if version.startswith("v") else f"v{version}"
        for raw in output.splitlines():
            line = raw.strip()
            if line == "system":
                continue
            token = FnmPlugin._version_token(line)
            if token == with_v or token.lstrip("v") == without_v:
                return True
        return False

    def is_available(self) -> bool:
        with self._lock:
            if self._available is None:
                try:
                    result = subprocess.run(
                        ["fnm", "--version"], capture_output=True, check=False
                    )
                    self._available = result.returncode == 0
                except OSError:
                    self._available = False
            return self._available

    def has_version(self, version: str) -> bool:
        if not self.is_available():
            return False
        try:
            output = self._run("list")
        except PluginCommandError:
            return False
        return self.parse_list(output, version)

    def activate_command(self, version: str) -> str:
        return f"fnm use {shell_escape(version)}"

    def install_command(self, version: str) -> str:
        return f"fnm install {shell_escape(version)}"

    def resolve_version(self, version: str) -> str:
        # fnm has no alias resolution of its own.
        return version

    def default_version(self) -> str | None:
        try:
            output = self._run("list")
        except PluginCommandError:
            return None
        for raw in output.splitlines():
            line = raw.strip()
            if "default" not in line:
                continue
            token = self._version_token(line)
            if token and token != "system":
                return token.lstrip("v")
        return None