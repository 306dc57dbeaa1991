"""Shell detection and profile setup for xvn integration."""

__all__ = ["installer", "profile_modification", "shell_detection"]