"""Protocol Buffers well-known Timestamp and Duration types, with calendar and RFC 3339 helpers."""

__version__ = "0.13.5"
__all__ = ["calendar", "rfc3339", "timestamp", "duration"]