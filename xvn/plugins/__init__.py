"""Node.js version manager plugins, a mock plugin and the registry that orders them."""

__all__ = ["base", "fnm", "mock", "nvm", "registry"]