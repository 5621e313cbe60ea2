"""
Tests for log sanitization helpers.
"""

import pytest

from pullpreview_license.utils import (
    fingerprint_for_log,
    sanitize_error_message_for_log,
    sanitize_for_log,
)


class TestSanitizeForLog:
    """Test log injection protection"""

    def test_none(self):
        assert sanitize_for_log(None) == "null"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("github-sync", "github-sync"),
            ("github-sync\nFAKE ENTRY", "github-syncFAKE ENTRY"),
            ("github-sync\r\n", "github-sync"),
            ("cmd; rm -rf /", "cmd rm -rf"),
        ],
    )
    def test_strips_injection(self, value, expected):
        assert sanitize_for_log(value) == expected

    def test_truncates(self):
        assert sanitize_for_log("x" * 150) == "x" * 100 + "..."

    def test_nothing_left(self):
        assert sanitize_for_log("\n\n") == "[sanitized]"


class TestFingerprintForLog:
    """Test license data fingerprints"""

    def test_text(self):
        assert fingerprint_for_log("abc") == "[3 chars, sha256:ba7816bf8f01]"

    def test_bytes(self):
        assert fingerprint_for_log(b"abc") == "[3 bytes, sha256:ba7816bf8f01]"

    @pytest.mark.parametrize("data", [None, "", b""])
    def test_empty(self, data):
        assert fingerprint_for_log(data) == "[no_license_data]"

    def test_content_not_leaked(self):
        text = "-----BEGIN PULLPREVIEW LICENSE-----\nQUJD\n-----END PULLPREVIEW LICENSE-----\n"

        assert "QUJD" not in fingerprint_for_log(text)


class TestSanitizeErrorMessageForLog:
    """Test redaction of key material in error messages"""

    def test_empty(self):
        assert sanitize_error_message_for_log(None) == "[no_error_message]"

    def test_pem_redacted(self):
        message = "bad key -----BEGIN PUBLIC KEY-----\nMIIBIjANBg\n-----END PUBLIC KEY-----"

        result = sanitize_error_message_for_log(message)

        assert "MIIBIjANBg" not in result
        assert "[PEM_REDACTED]" in result

    def test_base64_redacted(self):
        result = sanitize_error_message_for_log("blob " + "QUJD" * 15 + " rejected")

        assert result == "blob [BASE64_REDACTED] rejected"

    def test_hex_redacted(self):
        result = sanitize_error_message_for_log("digest 0123456789abcdef0123456789abcdef")

        assert result == "digest [HEX_REDACTED]"

    def test_key_value_redacted(self):
        assert sanitize_error_message_for_log("Key: hunter2") == "key=[REDACTED]"

    def test_accepts_exceptions(self):
        assert sanitize_error_message_for_log(ValueError("plain failure")) == "plain failure"
