"""Adding and removing the shell integration block in profile files."""

from __future__ import annotations

import logging
from pathlib import Path

log = logging.getLogger(__name__)

XVN_MARKER_START = "# >>> xvn initialize >>>"
XVN_MARKER_END = "# <<< xvn initialize <<<"

SETUP_LINES = """\
# xvn shell integration
export XVN_DIR="$HOME/.xvn"
export PATH="$XVN_DIR/bin:$PATH"

# Try npm installation location first
if [ -s "$XVN_DIR/current/lib/xvn.sh" ]; then
  . "$XVN_DIR/current/lib/xvn.sh"
# Try Homebrew installation location
elif command -v brew >/dev/null 2>&1 && [ -s "$(brew --prefix xvn 2>/dev/null)/lib/xvn.sh" ]; then
  . "$(brew --prefix xvn)/lib/xvn.sh"
fi
"""


def remove_xvn_block(content: str) -> str:
    """Return ``content`` with the marked initialisation block removed."""
    start = content.find(XVN_MARKER_START)
    if start == -1:
        return content
    end = content.find(XVN_MARKER_END)
    if end == -1:
        return content

    newline = content.find("\n", end)
    end_line_end = len(content) if newline == -1 else newline + 1

    # Drop the newline before the block too, so no blank line is left behind.
    if start > 0 and content[start - 1] == "\n":
        start -= 1

    return content[:start] + content[end_line_end:]


def add_to_profile(profile: str | Path) -> None:
    """Write a fresh initialisation block to ``profile``, replacing any old one."""
    profile = Path(profile)
    log.debug("Updating xvn config in profile: %s", profile)

    content = remove_xvn_block(profile.read_text(encoding="utf-8")) if profile.exists() else ""
    if content and not content.endswith("\n"):
        content += "\n"

    content += f"\n{XVN_MARKER_START}\n{SETUP_LINES.strip()}\n{XVN_MARKER_END}\n"
    profile.write_text(content, encoding="utf-8")


def remove_from_profile(profile: str | Path) -> bool:
    """Remove the initialisation block from ``profile``.

    Returns True if a block was found and removed, False otherwise.
    """
    profile = Path(profile)
    if not profile.exists():
        return False
    content = profile.read_text(encoding="utf-8")
    if XVN_MARKER_START not in content:
        return False
    profile.write_text(remove_xvn_block(content), encoding="utf-8")
    return True