"""Protocols for handing activation commands to the parent shell."""

__all__ = ["fd3", "json_writer", "protocol"]