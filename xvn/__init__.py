"""Automatic Node.js version switching on top of nvm and fnm."""

__version__ = "1.7.0"
__all__ = ["plugins", "setup", "shell", "version_file"]