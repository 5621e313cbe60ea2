"""
PullPreview Licensing

Issues and verifies time-limited licenses. A license record is serialized
to JSON, encrypted with the issuer's RSA key, and framed as text; client
software decrypts it with the public key and checks its expiration.

Usage:
    from pullpreview_license.licensing import LicenseCodec, LicenseKeyContext, FileKeySource

    codec = LicenseCodec(LicenseKeyContext(FileKeySource("/etc/pullpreview")))
    record = codec.import_license(os.environ["PULLPREVIEW_LICENSE"])
    record.validate()
    if record.is_expired():
        ...

    # Or let check_license decide
    result = check_license("github-sync", codec, license_data)
    if result.outcome is LicenseCheckOutcome.EXPIRED:
        ...
"""

from ..encryption import DecryptionError
from .boundary import DEFAULT_BOUNDARY_LABEL, add_boundary, has_boundary, remove_boundary
from .exceptions import (
    FramingError,
    KeySourceError,
    LicenseError,
    LicenseValidationError,
    ParseError,
)
from .key_source import FileKeySource, KeyCapability, KeySource, load_rsa_key
from .keys import LicenseKeyContext
from .models import (
    DEFAULT_ALLOWED_ATTRIBUTES,
    DEFAULT_DATE_ATTRIBUTES,
    LICENSE_SCHEMAS,
    LicenseRecord,
    LicenseSchema,
    LicenseType,
    SchemaField,
)
from .service import LicenseCheckOutcome, LicenseCheckResult, LicenseCodec, check_license

__all__ = [
    # Framing
    "DEFAULT_BOUNDARY_LABEL",
    "add_boundary",
    "has_boundary",
    "remove_boundary",
    # Keys
    "FileKeySource",
    "KeyCapability",
    "KeySource",
    "LicenseKeyContext",
    "load_rsa_key",
    # Records
    "DEFAULT_ALLOWED_ATTRIBUTES",
    "DEFAULT_DATE_ATTRIBUTES",
    "LICENSE_SCHEMAS",
    "LicenseRecord",
    "LicenseSchema",
    "LicenseType",
    "SchemaField",
    # Codec
    "LicenseCheckOutcome",
    "LicenseCheckResult",
    "LicenseCodec",
    "check_license",
    # Exceptions
    "DecryptionError",
    "FramingError",
    "KeySourceError",
    "LicenseError",
    "LicenseValidationError",
    "ParseError",
]
