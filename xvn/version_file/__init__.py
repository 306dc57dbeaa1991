"""Discovery and parsing of Node.js version files and semver ranges."""

__all__ = ["finder", "package_json", "resolver"]