"""
PullPreview license codec.

Public API:
    - LicenseCodec / LicenseKeyContext / FileKeySource: export and import licenses
    - LicenseRecord: license data model and validation rules
    - check_license: policy check returning a structured outcome
    - create_license_codec: codec wired from Settings
"""

from .licensing import (
    DecryptionError,
    FileKeySource,
    FramingError,
    KeyCapability,
    KeySourceError,
    LicenseCheckOutcome,
    LicenseCheckResult,
    LicenseCodec,
    LicenseError,
    LicenseKeyContext,
    LicenseRecord,
    LicenseType,
    LicenseValidationError,
    ParseError,
    add_boundary,
    check_license,
    remove_boundary,
)
from .config import Settings, get_settings
from .licensing.factory import create_license_codec

__all__ = [
    "DecryptionError",
    "FileKeySource",
    "FramingError",
    "KeyCapability",
    "KeySourceError",
    "LicenseCheckOutcome",
    "LicenseCheckResult",
    "LicenseCodec",
    "LicenseError",
    "LicenseKeyContext",
    "LicenseRecord",
    "LicenseType",
    "LicenseValidationError",
    "ParseError",
    "Settings",
    "add_boundary",
    "check_license",
    "create_license_codec",
    "get_settings",
    "remove_boundary",
]

__version__ = "1.0.0"
