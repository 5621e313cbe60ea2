"""
Tests for custom encryption exceptions.
"""

import pytest

from pullpreview_license.encryption import ConfigurationError, DecryptionError, EncryptionError, InvalidDataError


class TestExceptionHierarchy:
    """Test exception class hierarchy"""

    def test_decryption_error_inherits_from_encryption_error(self):
        exc = DecryptionError("decryption failed")
        assert isinstance(exc, EncryptionError)
        assert str(exc) == "decryption failed"

    def test_invalid_data_error_is_a_decryption_error(self):
        """Test structural failures are caught by DecryptionError handlers"""
        exc = InvalidDataError("invalid data format")
        assert isinstance(exc, DecryptionError)
        assert isinstance(exc, EncryptionError)

    def test_configuration_error_inherits_from_encryption_error(self):
        exc = ConfigurationError("invalid config")
        assert isinstance(exc, EncryptionError)
        assert isinstance(exc, ValueError)


class TestExceptionCatching:
    """Test exception catching patterns"""

    def test_catch_base_encryption_error(self):
        """Test catching base EncryptionError catches all subtypes"""
        exceptions = [
            DecryptionError("decrypt failed"),
            InvalidDataError("invalid format"),
            ConfigurationError("bad config"),
            EncryptionError("generic error"),
        ]

        for exc in exceptions:
            with pytest.raises(EncryptionError):
                raise exc
