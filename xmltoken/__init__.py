"""Encoding detection, conversion and XML declaration parsing for raw XML bytes."""

__version__ = "0.1.0"
__all__ = ["chars", "convert", "encoding", "xmldecl"]