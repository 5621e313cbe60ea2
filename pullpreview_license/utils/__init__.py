"""Shared helpers."""

from .logging_security import fingerprint_for_log, sanitize_error_message_for_log, sanitize_for_log

__all__ = [
    "fingerprint_for_log",
    "sanitize_error_message_for_log",
    "sanitize_for_log",
]
