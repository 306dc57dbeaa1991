"""Semantic versions, version requirements and range resolution."""

from __future__ import annotations

import enum
import functools
import logging
import re
from dataclasses import dataclass

from xvn.plugins.base import VersionManagerPlugin

log = logging.getLogger(__name__)

_MAX_NUMBER = 2**64 - 1
_MAX_COMPARATORS = 32
_WILDCARDS = frozenset("*xX")
_DIGITS = re.compile(r"[0-9]+")
_IDENTIFIER_RUN = re.compile(r"[0-9A-Za-z.-]*")
_OPERATOR = re.compile(r">=|<=|>|<|=|~|\^")


class SemverError(ValueError):
    """Text is not a valid semantic version or version requirement."""


def _describe(text: str) -> str:
    return repr(text[0]) if text else "end of input"


def _number(text: str, position: str) -> tuple[int, str]:
    match = _DIGITS.match(text)
    if match is None:
        raise SemverError(f"expected {position} version number, found {_describe(text)}")
    digits = match.group()
    if len(digits) > 1 and digits[0] == "0":
        raise SemverError(f"invalid leading zero in {position} version number")
    value = int(digits)
    if value > _MAX_NUMBER:
        raise SemverError(f"{position} version number is too large")
    return value, text[match.end():]


def _identifiers(text: str, position: str, *, leading_zeros: bool) -> tuple[tuple[str, ...], str]:
    match = _IDENTIFIER_RUN.match(text)
    parts = tuple(match.group().split("."))
    if any(not part for part in parts):
        raise SemverError(f"empty identifier segment in {position}")
    if not leading_zeros:
        for part in parts:
            if part.isdigit() and len(part) > 1 and part[0] == "0":
                raise SemverError(f"invalid leading zero in {position} identifier")
    return parts, text[match.end():]


def _identifier_key(identifier: str) -> tuple[int, int | str]:
    return (0, int(identifier)) if identifier.isdigit() else (1, identifier)


def _pre_key(pre: tuple[str, ...]) -> tuple:
    # A version without a pre-release sorts after any pre-release of it.
    if not pre:
        return (1,)
    return (0, tuple(_identifier_key(part) for part in pre))


@functools.total_ordering
@dataclass(frozen=True)
class Version:
    """A strict ``major.minor.patch[-pre][+build]`` semantic version."""

    major: int
    minor: int
    patch: int
    pre: tuple[str, ...] = ()
    build: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> Version:
        """Parse ``text`` as a semantic version, raising SemverError if invalid."""
        if not text:
            raise SemverError("empty string, expected a semver version")
        major, rest = _number(text, "major")
        rest = cls._dot(rest, "major")
        minor, rest = _number(rest, "minor")
        rest = cls._dot(rest, "minor")
        patch, rest = _number(rest, "patch")

        pre: tuple[str, ...] = ()
        if rest.startswith("-"):
            pre, rest = _identifiers(rest[1:], "pre-release", leading_zeros=False)
        build: tuple[str, ...] = ()
        if rest.startswith("+"):
            build, rest = _identifiers(rest[1:], "build metadata", leading_zeros=True)
        if rest:
            raise SemverError(f"unexpected character {rest[0]!r} in version {text!r}")
        return cls(major, minor, patch, pre, build)

    @staticmethod
    def _dot(text: str, after: str) -> str:
        if not text.startswith("."):
            raise SemverError(f"expected '.' after {after} version number, found {_describe(text)}")
        return text[1:]

    def _sort_key(self) -> tuple:
        return (
            self.major,
            self.minor,
            self.patch,
            _pre_key(self.pre),
            tuple(_identifier_key(part) for part in self.build),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.pre:
            text += "-" + ".".join(self.pre)
        if self.build:
            text += "+" + ".".join(self.build)
        return text


class _Op(enum.Enum):
    EXACT = "="
    GREATER = ">"
    GREATER_EQ = ">="
    LESS = "<"
    LESS_EQ = "<="
    TILDE = "~"
    CARET = "^"
    WILDCARD = "*"


@dataclass(frozen=True)
class _Comparator:
    op: _Op
    major: int
    minor: int | None
    patch: int | None
    pre: tuple[str, ...]

    def matches(self, ver: Version) -> bool:
        op = self.op
        if op in (_Op.EXACT, _Op.WILDCARD):
            return self._exact(ver)
        if op is _Op.GREATER:
            return self._greater(ver)
        if op is _Op.GREATER_EQ:
            return self._exact(ver) or self._greater(ver)
        if op is _Op.LESS:
            return self._less(ver)
        if op is _Op.LESS_EQ:
            return self._exact(ver) or self._less(ver)
        if op is _Op.TILDE:
            return self._tilde(ver)
        return self._caret(ver)

    def pre_is_compatible(self, ver: Version) -> bool:
        return (
            self.major == ver.major
            and self.minor == ver.minor
            and self.patch == ver.patch
            and bool(self.pre)
        )

    def _exact(self, ver: Version) -> bool:
        if ver.major != self.major:
            return False
        if self.minor is not None and ver.minor != self.minor:
            return False
        if self.patch is not None and ver.patch != self.patch:
            return False
        return ver.pre == self.pre

    def _greater(self, ver: Version) -> bool:
        if ver.major != self.major:
            return ver.major > self.major
        if self.minor is None:
            return False
        if ver.minor != self.minor:
            return ver.minor > self.minor
        if self.patch is None:
            return False
        if ver.patch != self.patch:
            return ver.patch > self.patch
        return _pre_key(ver.pre) > _pre_key(self.pre)

    def _less(self, ver: Version) -> bool:
        if ver.major != self.major:
            return ver.major < self.major
        if self.minor is None:
            return False
        if ver.minor != self.minor:
            return ver.minor < self.minor
        if self.patch is None:
            return False
        if ver.patch != self.patch:
            return ver.patch < self.patch
        return _pre_key(ver.pre) < _pre_key(self.pre)

    def _tilde(self, ver: Version) -> bool:
        if ver.major != self.major:
            return False
        if self.minor is not None and ver.minor != self.minor:
            return False
        if self.patch is not None and ver.patch != self.patch:
            return ver.patch > self.patch
        return _pre_key(ver.pre) >= _pre_key(self.pre)

    def _caret(self, ver: Version) -> bool:
        if ver.major != self.major:
            return False
        minor = self.minor
        if minor is None:
            return True
        patch = self.patch
        if patch is None:
            return ver.minor >= minor if self.major > 0 else ver.minor == minor
        if self.major > 0:
            if ver.minor != minor:
                return ver.minor > minor
            if ver.patch != patch:
                return ver.patch > patch
        elif minor > 0:
            if ver.minor != minor:
                return False
            if ver.patch != patch:
                return ver.patch > patch
        elif ver.minor != minor or ver.patch != patch:
            return False
        return _pre_key(ver.pre) >= _pre_key(self.pre)


def _is_wildcard(text: str) -> bool:
    return bool(text) and text[0] in _WILDCARDS


def _parse_comparator(text: str) -> tuple[_Comparator, str]:
    match = _OPERATOR.match(text)
    default_op = match is None
    op = _Op.CARET if match is None else _Op(match.group())
    text = (text if match is None else text[match.end():]).lstrip(" ")

    major, text = _number(text, "major")
    minor: int | None = None
    patch: int | None = None
    has_wildcard = False

    if text.startswith("."):
        text = text[1:]
        if _is_wildcard(text):
            has_wildcard = True
            if default_op:
                op = _Op.WILDCARD
            text = text[1:]
        else:
            minor, text = _number(text, "minor")

    if text.startswith("."):
        text = text[1:]
        if _is_wildcard(text):
            if default_op:
                op = _Op.WILDCARD
            text = text[1:]
        elif has_wildcard:
            raise SemverError("unexpected character after wildcard in version req")
        else:
            patch, text = _number(text, "patch")

    pre: tuple[str, ...] = ()
    if patch is not None and text.startswith("-"):
        pre, text = _identifiers(text[1:], "pre-release", leading_zeros=False)
    if patch is not None and text.startswith("+"):
        _, text = _identifiers(text[1:], "build metadata", leading_zeros=True)

    return _Comparator(op, major, minor, patch, pre), text.lstrip(" ")


@dataclass(frozen=True)
class VersionReq:
    """A comma-separated list of version comparators that must all hold.

    A requirement with no comparators (``*``) matches every release version.
    """

    comparators: tuple[_Comparator, ...] = ()

    @classmethod
    def parse(cls, text: str) -> VersionReq:
        """Parse a requirement such as ``>=1.2, <2``, raising SemverError if invalid."""
        text = text.lstrip(" ")
        if _is_wildcard(text):
            rest = text[1:].lstrip(" ")
            if not rest:
                return cls()
            if rest.startswith(","):
                raise SemverError(
                    f"wildcard req ({text[0]}) must be the only comparator in the version req"
                )
            raise SemverError("unexpected character after wildcard in version req")
        if not text:
            raise SemverError("empty string, expected a semver version")

        comparators: list[_Comparator] = []
        rest = text
        while True:
            try:
                comparator, rest = _parse_comparator(rest)
            except SemverError:
                if _is_wildcard(rest):
                    after = rest[1:].lstrip(" ")
                    if not after or after.startswith(","):
                        raise SemverError(
                            f"wildcard req ({rest[0]}) must be the only comparator "
                            "in the version req"
                        ) from None
                raise
            comparators.append(comparator)
            if not rest:
                break
            if not rest.startswith(","):
                raise SemverError(
                    f"expected comma after version requirement, found {rest[0]!r}"
                )
            if len(comparators) == _MAX_COMPARATORS:
                raise SemverError("excessive number of version comparators")
            rest = rest[1:].lstrip(" ")
        return cls(tuple(comparators))

    def matches(self, version: Version) -> bool:
        """Return whether ``version`` satisfies every comparator.

        A pre-release version only matches if some comparator names the same
        ``major.minor.patch`` with a pre-release of its own.
        """
        if not all(comparator.matches(version) for comparator in self.comparators):
            return False
        if not version.pre:
            return True
        return any(comparator.pre_is_compatible(version) for comparator in self.comparators)


class SemverResolver:
    """Turns version ranges into the best matching installed version."""

    def __init__(self, version_manager: VersionManagerPlugin) -> None:
        self._version_manager = version_manager

    def resolve(self, spec: str) -> str:
        """Resolve ``spec`` to the highest installed version that satisfies it.

        Exact versions, specs that are not semver ranges (aliases such as
        ``lts/hydrogen``) and ranges with no installed match come back unchanged.
        Errors from listing installed versions propagate.
        """
        log.debug("Resolving semver range: %s", spec)

        try:
            Version.parse(spec)
        except SemverError:
            pass
        else:
            log.debug("Exact version specified: %s", spec)
            return spec

        try:
            requirement = VersionReq.parse(spec)
        except SemverError as exc:
            log.debug("Not a valid semver range (%s), passing through: %s", exc, spec)
            return spec

        installed = self._version_manager.list_versions()
        log.debug("Found %d installed versions", len(installed))
        if not installed:
            log.debug("No versions installed, returning original range")
            return spec

        best = self._best_match(requirement, installed)
        if best is None:
            log.debug("No installed version matches %s, returning original", spec)
            return spec
        log.debug("Resolved %s -> %s", spec, best)
        return best

    @staticmethod
    def _best_match(requirement: VersionReq, versions: list[str]) -> str | None:
        candidates: list[tuple[Version, str]] = []
        for original in versions:
            try:
                parsed = Version.parse(original.lstrip("v"))
            except SemverError as exc:
                log.debug("Skipping non-semver version %s: %s", original, exc)
                continue
            if requirement.matches(parsed):
                candidates.append((parsed, original))
        if not candidates:
            return None
        return max(candidates, key=lambda pair: pair[0])[1]