"""Locating and reading Node.js version files up a directory tree."""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from xvn.version_file.package_json import PackageJson, PackageJsonError

log = logging.getLogger(__name__)

_PACKAGE_JSON = "package.json"


class VersionFileError(RuntimeError):
    """A version file or the search start directory could not be read."""


class VersionFileSource(enum.Enum):
    """The kind of file a version was read from."""

    NVMRC = ".nvmrc"
    NODE_VERSION = ".node-version"
    PACKAGE_JSON = "package.json"
    TOOL_VERSIONS = ".tool-versions"
    OTHER = "other"


def detect_source(filename: str) -> VersionFileSource:
    """Map a version file name to its source kind."""
    try:
        return VersionFileSource(filename)
    except ValueError:
        return VersionFileSource.OTHER


def parse_version_file(path: str | Path) -> str:
    """Return the first non-empty, non-comment line of ``path``, stripped.

    Raises VersionFileError if the file cannot be read or holds no version.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise VersionFileError(f"failed to read file: {path}: {exc}") from exc

    for line in content.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            return stripped

    raise VersionFileError(f"version file is empty or contains only comments: {path}")


def _home() -> Path | None:
    try:
        return Path.home()
    except RuntimeError:
        return None


@dataclass(frozen=True)
class VersionFile:
    """A version file found on disk and the version it names."""

    path: Path
    version: str
    source: VersionFileSource

    @classmethod
    def find(cls, start_dir: str | Path, filenames: Iterable[str]) -> VersionFile | None:
        """Search ``start_dir`` and its parents for the first matching file.

        ``filenames`` are tried in priority order in each directory. The
        search stops at the home directory or at the filesystem root. A
        package.json without ``engines.node`` (or that cannot be parsed) is
        skipped. Returns None when nothing is found.
        """
        names = list(filenames)
        log.debug("Searching for version file in %s", start_dir)
        log.debug("Looking for: %s", names)

        home = _home()
        try:
            directory = Path(start_dir).resolve(strict=True)
        except (OSError, RuntimeError) as exc:
            raise VersionFileError(f"failed to canonicalize start directory: {exc}") from exc

        while True:
            log.debug("Checking directory: %s", directory)
            found = cls._find_in(directory, names)
            if found is not None:
                return found

            if home is not None and directory == home:
                log.debug("Reached HOME directory, stopping search")
                break
            parent = directory.parent
            if parent == directory:
                log.debug("Reached filesystem root, stopping search")
                break
            directory = parent

        log.debug("No version file found")
        return None

    @classmethod
    def _find_in(cls, directory: Path, names: list[str]) -> VersionFile | None:
        for filename in names:
            file_path = directory / filename
            if not file_path.is_file():
                continue
            log.debug("Found version file: %s", file_path)

            if filename == _PACKAGE_JSON:
                try:
                    package = PackageJson.parse(file_path)
                except PackageJsonError:
                    log.debug("Failed to parse package.json, skipping")
                    continue
                node_version = package.node_version()
                if node_version is None:
                    log.debug("package.json has no engines.node field, skipping")
                    continue
                return cls(file_path, node_version, VersionFileSource.PACKAGE_JSON)

            try:
                version = parse_version_file(file_path)
            except VersionFileError as exc:
                raise VersionFileError(
                    f"failed to parse version file: {file_path}: {exc}"
                ) from exc
            return cls(file_path, version, detect_source(filename))
        return None