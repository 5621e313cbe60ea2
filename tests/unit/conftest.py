"""
Unit test fixtures and helpers.

Provides lightweight fixtures for unit testing: RSA keypairs, key files in a
temporary directory, and codecs wired to them. No network or environment
state is required.
"""

import os
from datetime import date, timedelta

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from pullpreview_license.config import get_settings
from pullpreview_license.licensing import FileKeySource, LicenseCodec, LicenseKeyContext


def _pem_private(key: rsa.RSAPrivateKey) -> bytes:
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


def _pem_public(key: rsa.RSAPrivateKey) -> bytes:
    return key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    """Issuer keypair shared by the whole test session."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    """An unrelated keypair for wrong-key tests."""
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def private_pem(private_key) -> bytes:
    return _pem_private(private_key)


@pytest.fixture
def public_pem(private_key) -> bytes:
    return _pem_public(private_key)


@pytest.fixture
def key_dir(tmp_path, private_pem, public_pem):
    """Directory laid out like a deployment: license_key + license_key.pub."""
    (tmp_path / "license_key").write_bytes(private_pem)
    (tmp_path / "license_key.pub").write_bytes(public_pem)
    return tmp_path


@pytest.fixture
def public_key_dir(tmp_path, public_pem):
    """Client-side directory holding only the public key."""
    client_dir = tmp_path / "client"
    client_dir.mkdir()
    (client_dir / "license_key.pub").write_bytes(public_pem)
    return client_dir


@pytest.fixture
def issuer_codec(key_dir) -> LicenseCodec:
    """Codec able to export (reads license_key)."""
    return LicenseCodec(LicenseKeyContext(FileKeySource(key_dir)))


@pytest.fixture
def client_codec(public_key_dir) -> LicenseCodec:
    """Codec that only has the public key, like shipped client software."""
    return LicenseCodec(LicenseKeyContext(FileKeySource(public_key_dir)))


@pytest.fixture
def trial_attributes():
    return {"type": "trial", "expires_at": date.today() + timedelta(days=30)}


@pytest.fixture
def expired_attributes():
    return {"type": "trial", "expires_at": date.today() - timedelta(days=1)}


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    """Clear PULLPREVIEW_* variables and the settings cache around a test."""
    for name in list(os.environ):
        if name.startswith("PULLPREVIEW_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
