"""Reading the Node.js requirement out of a package.json file."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)


class PackageJsonError(ValueError):
    """A package.json file could not be read or is not valid."""


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise TypeError(f"field '{key}' must be a string, got {type(value).__name__}")


@dataclass(frozen=True)
class EnginesField:
    """The ``engines`` object of a package.json file."""

    node: str | None = None
    npm: str | None = None

    @classmethod
    def _from_mapping(cls, data: Any) -> EnginesField:
        if not isinstance(data, Mapping):
            raise TypeError(f"field 'engines' must be an object, got {type(data).__name__}")
        return cls(node=_optional_str(data, "node"), npm=_optional_str(data, "npm"))


@dataclass
class PackageJson:
    """The fields of a package.json file that matter for version selection."""

    path: Path | None = None
    engines: EnginesField | None = None
    name: str | None = None
    version: str | None = None

    @classmethod
    def parse(cls, path: str | Path) -> PackageJson:
        """Read and parse the package.json file at ``path``.

        Raises PackageJsonError if the file cannot be read or is not valid JSON
        of the expected shape.
        """
        path = Path(path)
        log.debug("Parsing package.json: %s", path)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise PackageJsonError(f"failed to read package.json: {path}: {exc}") from exc

        try:
            data = json.loads(content)
            if not isinstance(data, Mapping):
                raise TypeError(f"expected an object, got {type(data).__name__}")
            raw_engines = data.get("engines")
            engines = None if raw_engines is None else EnginesField._from_mapping(raw_engines)
            package = cls(
                path=path,
                engines=engines,
                name=_optional_str(data, "name"),
                version=_optional_str(data, "version"),
            )
        except (ValueError, TypeError) as exc:
            raise PackageJsonError(f"invalid JSON in package.json: {path}: {exc}") from exc

        log.debug("Parsed package.json: engines=%r", package.engines)
        return package

    def node_version(self) -> str | None:
        """Return the ``engines.node`` requirement, if present."""
        return self.engines.node if self.engines is not None else None

    def has_node_version(self) -> bool:
        """Return whether the file states a Node.js version requirement."""
        return self.node_version() is not None