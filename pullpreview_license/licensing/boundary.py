"""
Boundary framing for license blobs.

Wraps binary license data in PEM-style text markers so it survives
environment variables, files and copy-paste:

    -----BEGIN PULLPREVIEW LICENSE-----
    <base64, 64 columns per line>
    -----END PULLPREVIEW LICENSE-----

Framing is purely syntactic; it carries no cryptographic meaning.
"""

import base64
import binascii
import re
from typing import Optional

from .exceptions import FramingError

DEFAULT_BOUNDARY_LABEL = "PULLPREVIEW LICENSE"
LINE_WIDTH = 64

# Dashes and line breaks would make the markers ambiguous
LABEL_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9 _.]*$")

BEGIN_MARKER = "-----BEGIN {label}-----"
END_MARKER = "-----END {label}-----"

FRAME_PATTERN = re.compile(
    r"-----BEGIN (?P<begin>[^\r\n-]+)-----[ \t]*\r?\n"
    r"(?P<body>.*?)"
    r"-----END (?P<end>[^\r\n-]+)-----",
    re.DOTALL,
)
BEGIN_PATTERN = re.compile(r"-----BEGIN [^\r\n-]+-----")


def normalize_label(label: str) -> str:
    """
    Upper-case and validate a boundary label.

    Raises:
        FramingError: If the label is empty or contains marker characters
    """
    if not label or not label.strip():
        raise FramingError("Boundary label must not be empty")

    normalized = label.strip().upper()
    if not LABEL_PATTERN.match(normalized):
        raise FramingError(
            "Boundary label may only contain letters, digits, spaces, "
            "underscores and dots",
            details=f"label={normalized[:40]!r}",
        )
    return normalized


def add_boundary(data: bytes, label: str = DEFAULT_BOUNDARY_LABEL) -> str:
    """
    Frame ``data`` between begin/end markers embedding ``label``.

    Args:
        data: Binary payload (may be empty)
        label: Boundary label, e.g. ``"PULLPREVIEW LICENSE"``

    Returns:
        Framed text ending in a newline
    """
    label = normalize_label(label)
    encoded = encode_bare(data)
    lines = [encoded[i:i + LINE_WIDTH] for i in range(0, len(encoded), LINE_WIDTH)]

    return "\n".join(
        [BEGIN_MARKER.format(label=label), *lines, END_MARKER.format(label=label)]
    ) + "\n"


def remove_boundary(text: Optional[str], label: Optional[str] = None) -> bytes:
    """
    Extract the binary payload from framed text.

    Text outside the markers is ignored. The label is informational unless
    ``label`` is given, in which case it must match.

    Args:
        text: Framed license text
        label: Optional expected label

    Returns:
        The payload exactly as passed to :func:`add_boundary`

    Raises:
        FramingError: If input is missing, markers are absent or disagree,
            or the interior is not valid base64
    """
    if text is None or not text.strip():
        raise FramingError("No license data provided")

    match = FRAME_PATTERN.search(text)
    if match is None:
        raise FramingError("License data is missing its BEGIN/END boundary markers")

    begin_label = match.group("begin").strip()
    end_label = match.group("end").strip()
    if begin_label != end_label:
        raise FramingError(
            "License boundary markers do not match",
            details=f"begin={begin_label!r}, end={end_label!r}",
        )
    if label is not None and begin_label != normalize_label(label):
        raise FramingError(
            "Unexpected license boundary label",
            details=f"expected={normalize_label(label)!r}, found={begin_label!r}",
        )

    return decode_bare(match.group("body"), allow_empty=True)


def has_boundary(text: Optional[str]) -> bool:
    """Return True if ``text`` contains a begin marker."""
    return bool(text) and BEGIN_PATTERN.search(text) is not None


def encode_bare(data: bytes) -> str:
    """Encode ``data`` as a single unframed base64 line."""
    return base64.b64encode(data).decode("ascii")


def decode_bare(text: Optional[str], allow_empty: bool = False) -> bytes:
    """
    Decode unframed base64 text, ignoring embedded whitespace.

    Raises:
        FramingError: If the text is missing or not valid base64
    """
    if text is None:
        raise FramingError("No license data provided")

    compact = "".join(text.split())
    if not compact and not allow_empty:
        raise FramingError("No license data provided")

    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as e:
        raise FramingError("License data is not valid base64") from e
