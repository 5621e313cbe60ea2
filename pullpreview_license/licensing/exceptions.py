"""
License Exceptions

Exception classes for the license codec. Each failure state of an
import/export cycle has its own type so callers can tell a missing key file
from a tampered blob or a record that fails business rules.

This module defines:
- LicenseError: Base class for all license codec errors
- KeySourceError: Key material missing, unreadable or malformed
- FramingError: Boundary markers missing or malformed
- ParseError: Decrypted payload is not well-formed license JSON
- LicenseValidationError: Record fails the license type rules

Decryption failures are raised as
``pullpreview_license.encryption.DecryptionError`` and re-exported from
``pullpreview_license.licensing``.

Security Considerations:
- Messages never contain key material or decrypted license data

Usage:
    from pullpreview_license.licensing.exceptions import LicenseError

    try:
        record = codec.import_license(data)
    except LicenseError as e:
        logger.error(f"License import failed: {e}")
"""

from typing import Optional


class LicenseError(Exception):
    """
    Base exception for license codec errors.

    Attributes:
        message: Human-readable error description
        details: Additional context for debugging (never secret data)
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, details={self.details!r})"


class KeySourceError(LicenseError):
    """
    Raised when license key material cannot be obtained.

    Covers:
    - Key file not found or unreadable
    - PEM data that does not parse
    - A key that is not an RSA key

    Attributes:
        capability: "private" or "public", the key that was requested
    """

    def __init__(
        self,
        message: str,
        capability: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.capability = capability
        super().__init__(message, details)

    def __str__(self) -> str:
        if self.capability:
            return f"{super().__str__()} (capability: {self.capability})"
        return super().__str__()


class FramingError(LicenseError):
    """Raised when boundary markers are missing or the framed payload is malformed."""

    pass


class ParseError(LicenseError):
    """Raised when decrypted license data is not a well-formed JSON object."""

    pass


class LicenseValidationError(LicenseError):
    """
    Raised when a license record fails its type rules.

    Attributes:
        reason: The first failing validation rule
    """

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"License is invalid: {reason}")
