"""
License Service Implementation

Ties the boundary framer, the encryptor and the license record together:

    export: record → validate → JSON → encrypt → frame → text
    import: text → unframe → decrypt → JSON → record

Import does not validate or check expiration; callers do that explicitly,
or use :func:`check_license` which turns the whole cycle into an outcome.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Iterable, Mapping, Optional

from ..encryption import DecryptionError, EncryptionError
from ..utils.logging_security import fingerprint_for_log, sanitize_error_message_for_log, sanitize_for_log
from .boundary import add_boundary, decode_bare, encode_bare, has_boundary, remove_boundary
from .codec import dump_attributes, load_attributes
from .exceptions import LicenseError
from .keys import LicenseKeyContext
from .key_source import KeyCapability
from .models import DEFAULT_ALLOWED_ATTRIBUTES, DEFAULT_DATE_ATTRIBUTES, LicenseRecord

logger = logging.getLogger(__name__)

DEFAULT_ENFORCED_COMMANDS = ("github-sync",)


class LicenseCodec:
    """
    Encodes license records to transport text and back.

    The codec owns its key context; two codecs never share key state. The
    attribute allow-list and the date-typed fields are parameters so that
    schemas can grow without touching the pipeline.

    Example:
        >>> codec = LicenseCodec(LicenseKeyContext(FileKeySource("keys")))
        >>> text = codec.export_license(
        ...     codec.build({"type": "trial", "expires_at": date(2030, 1, 1)}),
        ...     boundary="PULLPREVIEW LICENSE",
        ... )
        >>> codec.import_license(text).attributes["expires_at"]
        datetime.date(2030, 1, 1)
    """

    def __init__(
        self,
        context: LicenseKeyContext,
        allowed_attributes: Iterable[str] = DEFAULT_ALLOWED_ATTRIBUTES,
        date_attributes: Iterable[str] = DEFAULT_DATE_ATTRIBUTES,
    ) -> None:
        self.context = context
        self.allowed_attributes = tuple(allowed_attributes)
        self.date_attributes = tuple(date_attributes)

    def build(self, attributes: Optional[Mapping[str, Any]]) -> LicenseRecord:
        """Construct a record filtered to this codec's allow-list."""
        return LicenseRecord(attributes, allowed_attributes=self.allowed_attributes)

    def export_license(self, record: LicenseRecord, boundary: Optional[str] = None) -> str:
        """
        Encrypt a valid record into transport text.

        Args:
            record: License record; must pass validation
            boundary: Optional label; when given the blob is framed with
                BEGIN/END markers, otherwise it is a single base64 line

        Returns:
            License text

        Raises:
            LicenseValidationError: If the record is invalid
            KeySourceError: If the private key cannot be loaded
            EncryptionError: If encryption fails
            FramingError: If the boundary label is invalid
        """
        record.validate()

        blob = self.context.encrypt(dump_attributes(record.attributes))

        if boundary:
            return add_boundary(blob, boundary)
        return encode_bare(blob)

    def import_license(self, data: Optional[str]) -> LicenseRecord:
        """
        Decrypt license text into a record.

        Accepts framed text (any label) or a bare base64 blob. The record is
        not validated here.

        Raises:
            KeySourceError: If the public key cannot be loaded
            FramingError: If the input is missing or not decodable
            DecryptionError: If the blob is corrupt, tampered or for another key
            ParseError: If the decrypted payload is not a JSON object
        """
        with self.context.lock:
            self.context.load_key(KeyCapability.PUBLIC)

            blob = remove_boundary(data) if has_boundary(data) else decode_bare(data)
            payload = self.context.decrypt(blob)

        record = self.build(load_attributes(payload, self.date_attributes))

        logger.info("Imported license:\n%s", record)
        return record


class LicenseCheckOutcome(Enum):
    """Result kinds of a license check."""

    SKIPPED = "skipped"  # command does not require a license
    VALID = "valid"
    EXPIRED = "expired"
    UNRESOLVED = "unresolved"  # missing, undecryptable or invalid license


@dataclass
class LicenseCheckResult:
    """Outcome of :func:`check_license` plus what led to it."""

    command: str
    outcome: LicenseCheckOutcome
    record: Optional[LicenseRecord] = None
    reason: Optional[str] = None

    @property
    def is_expired(self) -> bool:
        return self.outcome is LicenseCheckOutcome.EXPIRED


def check_license(
    command: str,
    codec: LicenseCodec,
    license_data: Optional[str],
    enforced_commands: Iterable[str] = DEFAULT_ENFORCED_COMMANDS,
    today: Optional[date] = None,
) -> LicenseCheckResult:
    """
    Decide whether ``command`` may run under the given license.

    Commands outside ``enforced_commands`` are skipped without importing
    anything. Import failures and invalid records are logged and reported
    as ``UNRESOLVED``; only a valid record can be ``EXPIRED``. This function
    never terminates the process.

    Args:
        command: Name of the command about to run
        codec: Codec used to import the license
        license_data: License text from the environment (may be None)
        enforced_commands: Commands that require an unexpired license
        today: Reference date (defaults to the current date)

    Returns:
        LicenseCheckResult
    """
    if command not in tuple(enforced_commands):
        logger.debug("No license check for command %s", sanitize_for_log(command))
        return LicenseCheckResult(command=command, outcome=LicenseCheckOutcome.SKIPPED)

    if not license_data:
        logger.error("Missing PULLPREVIEW_LICENSE environment variable.")
        return LicenseCheckResult(
            command=command,
            outcome=LicenseCheckOutcome.UNRESOLVED,
            reason="no license data",
        )

    try:
        record = codec.import_license(license_data)
    except DecryptionError as e:
        logger.error(
            "License data %s could not be decrypted: %s",
            fingerprint_for_log(license_data),
            sanitize_error_message_for_log(e),
        )
        return LicenseCheckResult(command=command, outcome=LicenseCheckOutcome.UNRESOLVED, reason=str(e))
    except (LicenseError, EncryptionError) as e:
        logger.error(
            "License data %s could not be imported: %s",
            fingerprint_for_log(license_data),
            sanitize_error_message_for_log(e),
        )
        return LicenseCheckResult(command=command, outcome=LicenseCheckOutcome.UNRESOLVED, reason=str(e))

    reason = record.validation_error()
    if reason is not None:
        logger.error("Imported license is invalid: %s", reason)
        return LicenseCheckResult(
            command=command,
            outcome=LicenseCheckOutcome.UNRESOLVED,
            record=record,
            reason=reason,
        )

    if record.is_expired(today):
        return LicenseCheckResult(
            command=command,
            outcome=LicenseCheckOutcome.EXPIRED,
            record=record,
            reason=f"expired on {record.expires_at}",
        )

    return LicenseCheckResult(command=command, outcome=LicenseCheckOutcome.VALID, record=record)
