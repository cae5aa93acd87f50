"""Interactive FTP client that mirrors local filesystem operations."""

__version__ = "0.1.0"
