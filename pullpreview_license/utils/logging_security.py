"""
Security Logging Utilities for license handling
Prevents log injection (CWE-117) and keeps license blobs and key material
out of log output.

SECURITY FEATURES:
- Command names and labels stripped to a safe character set
- License blobs logged only as a short fingerprint
- Key material and long encoded runs redacted from error messages
"""

import hashlib
import re
from typing import Any, Optional

# CR/LF (raw, URL-encoded or escaped), NUL and other control characters
LOG_INJECTION_PATTERN = re.compile(r"[\r\n]|%0[ad]|\\[rn]|[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]", re.IGNORECASE)

# Everything outside the characters used by command names and labels
UNSAFE_CHARACTERS = re.compile(r"[^a-zA-Z0-9._@\-\s]")

# Applied in order; PEM blocks go first so their base64 bodies disappear whole
SENSITIVE_PATTERNS = [
    (re.compile(r"-----BEGIN [^-]+-----.*?(-----END [^-]+-----|$)", re.IGNORECASE | re.DOTALL), "[PEM_REDACTED]"),
    (re.compile(r"key[=:\s]+[^\s]+", re.IGNORECASE), "key=[REDACTED]"),
    (re.compile(r"[a-zA-Z0-9+/]{40,}={0,2}"), "[BASE64_REDACTED]"),
    (re.compile(r"[0-9a-fA-F]{32,}"), "[HEX_REDACTED]"),
]


def sanitize_for_log(
    value: Optional[Any], max_length: int = 100, allow_special: bool = False
) -> str:
    """
    Make a value safe to interpolate into a log line.

    Args:
        value: Value to sanitize (command name, label, exception, ...)
        max_length: Length after which the value is cut and marked with "..."
        allow_special: Keep punctuation; only injection characters are removed

    Returns:
        str: Sanitized string, or "[sanitized]" when nothing printable is left
    """
    if value is None:
        return "null"

    text = LOG_INJECTION_PATTERN.sub("", str(value))
    if not allow_special:
        text = UNSAFE_CHARACTERS.sub("", text)

    text = text.strip()
    if not text:
        return "[sanitized]"

    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def fingerprint_for_log(data: Optional[Any]) -> str:
    """
    Describe license data by length and digest instead of content.

    Args:
        data: License text or bytes

    Returns:
        str: e.g. ``"[412 chars, sha256:1f2e3d4c5b6a]"``
    """
    if not data:
        return "[no_license_data]"

    if isinstance(data, bytes):
        raw, unit = data, "bytes"
    else:
        raw, unit = str(data).encode("utf-8"), "chars"

    digest = hashlib.sha256(raw).hexdigest()[:12]
    return f"[{len(data)} {unit}, sha256:{digest}]"


def sanitize_error_message_for_log(error_msg: Optional[Any]) -> str:
    """
    Redact key material from an error message before it is logged.

    Exceptions raised while importing a license may quote PEM blocks or
    pieces of the license blob; those are replaced by placeholders.

    Args:
        error_msg: Error message (or exception) to sanitize

    Returns:
        str: Redacted message
    """
    if not error_msg:
        return "[no_error_message]"

    message = str(error_msg)
    for pattern, replacement in SENSITIVE_PATTERNS:
        message = pattern.sub(replacement, message)

    return sanitize_for_log(message, max_length=500, allow_special=True)
