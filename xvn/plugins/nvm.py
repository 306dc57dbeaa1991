"""Plugin for nvm, the shell-sourced Node Version Manager."""

from __future__ import annotations

import os
import subprocess
import threading
from pathlib import Path

from xvn.plugins.base import PluginCommandError, VersionManagerPlugin, shell_escape


class NvmPlugin(VersionManagerPlugin):
    """Drives nvm by sourcing ``nvm.sh`` in a bash subprocess."""

    name = "nvm"
    version_files = (".nvmrc",)

    def __init__(self) -> None:
        self._available: bool | None = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        return f"NvmPlugin(available={self._available!r})"

    def nvm_sh_path(self) -> Path:
        """Locate ``nvm.sh``, trying ``$NVM_DIR`` first and then ``~/.nvm``."""
        nvm_dir = os.environ.get("NVM_DIR")
        if nvm_dir is not None:
            candidate = Path(nvm_dir) / "nvm.sh"
            if candidate.exists():
                return candidate

        try:
            home = Path.home()
        except RuntimeError as exc:
            raise PluginCommandError("Could not determine home directory") from exc

        candidate = home / ".nvm" / "nvm.sh"
        if candidate.exists():
            return candidate
        raise PluginCommandError("nvm.sh not found in $NVM_DIR or ~/.nvm")

    def _run(self, *args: str) -> str:
        nvm_sh = self.nvm_sh_path()
        words = " ".join(shell_escape(arg) for arg in args)
        script = f"source {shell_escape(str(nvm_sh))} && nvm {words}"
        try:
            result = subprocess.run(
                ["bash", "-c", script], capture_output=True, check=False
            )
        except OSError as exc:
            raise PluginCommandError("Failed to execute nvm command") from exc
        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", errors="replace")
            raise PluginCommandError(f"nvm command failed: {stderr}")
        return result.stdout.decode("utf-8", errors="replace").strip()

    def is_available(self) -> bool:
        with self._lock:
            if self._available is None:
                try:
                    self.nvm_sh_path()
                    self._available = True
                except PluginCommandError:
                    self._available = False
            return self._available

    def has_version(self, version: str) -> bool:
        try:
            output = self._run("which", version)
        except PluginCommandError:
            return False
        return bool(output) and "N/A" not in output

    def activate_command(self, version: str) -> str:
        return f"nvm use {shell_escape(version)}"

    def install_command(self, version: str) -> str:
        return f"nvm install {shell_escape(version)}"

    def resolve_version(self, version: str) -> str:
        try:
            resolved = self._run("version", version)
        except PluginCommandError:
            return version
        if resolved.startswith("v"):
            return resolved.lstrip("v")
        if resolved == "N/A":
            return version
        return resolved

    def default_version(self) -> str | None:
        try:
            resolved = self._run("version", "default")
        except PluginCommandError:
            return None
        if not resolved or resolved == "N/A":
            return None
        if resolved.startswith("v"):
            return resolved.lstrip("v")
        return resolved