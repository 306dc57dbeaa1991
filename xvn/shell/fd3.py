"""Hands shell commands to the parent shell over file descriptor 3."""

from __future__ import annotations

import logging
import os

log = logging.getLogger(__name__)

DEFAULT_FD = 3


def _is_fd_open(fd: int) -> bool:
    try:
        os.fstat(fd)
    except OSError:
        return False
    return True


class CommandWriter:
    """Writes commands to a descriptor the calling shell captures and evaluates.

    The shell invokes the tool as ``xvn activate <path> 3>&1 1>&2 2>&3`` and
    runs ``eval`` on whatever arrives on descriptor 3. When the descriptor is
    not open, commands are silently discarded. Commands must already be
    escaped by the caller.
    """

    def __init__(self, fd: int = DEFAULT_FD) -> None:
        if _is_fd_open(fd):
            log.debug("File descriptor %d is available", fd)
            self._fd: int | None = fd
        else:
            log.debug("File descriptor %d is not available, commands will be discarded", fd)
            self._fd = None

    def __repr__(self) -> str:
        return f"CommandWriter(fd={self._fd!r})"

    def write_command(self, command: str) -> None:
        """Write ``command`` followed by a newline.

        Raises OSError if the descriptor is open but the write fails.
        """
        log.debug("Writing command to FD:3: %s", command)
        if self._fd is None:
            log.debug("FD:3 not available, command discarded")
            return
        data = f"{command}\n".encode("utf-8")
        while data:
            written = os.write(self._fd, data)
            data = data[written:]

    def is_available(self) -> bool:
        """Return whether commands reach the descriptor rather than being dropped."""
        return self._fd is not None