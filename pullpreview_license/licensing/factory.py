"""Builds a license codec from application settings."""

import logging
from typing import Optional

from ..config import Settings, get_settings
from ..encryption import EncryptionConfig
from .key_source import FileKeySource
from .keys import LicenseKeyContext
from .service import LicenseCodec

logger = logging.getLogger(__name__)


def create_license_codec(
    settings: Optional[Settings] = None,
    config: Optional[EncryptionConfig] = None,
) -> LicenseCodec:
    """
    Factory function to create a LicenseCodec wired to the configured key files.

    Args:
        settings: Application settings (defaults to ``get_settings()``)
        config: Optional encryption configuration

    Returns:
        LicenseCodec with its own LicenseKeyContext; no key is read until
        the first export or import
    """
    settings = settings or get_settings()
    key_source = FileKeySource(
        settings.key_dir,
        private_key_file=settings.private_key_file,
        public_key_file=settings.public_key_file,
    )
    logger.debug("License keys will be read from %s", settings.key_dir)

    return LicenseCodec(
        LicenseKeyContext(key_source, config=config),
        allowed_attributes=settings.allowed_attributes,
        date_attributes=settings.date_attributes,
    )
