"""
Key sources for license RSA key material.

A key source only returns raw PEM bytes for a requested capability; parsing
into key objects happens in :func:`load_rsa_key`.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import load_pem_private_key, load_pem_public_key

from ..encryption import RSAKey
from .exceptions import KeySourceError

logger = logging.getLogger(__name__)

DEFAULT_PRIVATE_KEY_FILE = "license_key"
DEFAULT_PUBLIC_KEY_FILE = "license_key.pub"


class KeyCapability(Enum):
    """What a loaded key must be able to do."""

    PUBLIC = "public"  # decrypt / verify (import)
    PRIVATE = "private"  # encrypt / sign (export)


class KeySource(Protocol):
    """Provider of raw key material bytes."""

    def read(self, capability: KeyCapability) -> bytes:
        ...


class FileKeySource:
    """
    Reads PEM key material from a fixed directory.

    The private key lives in ``license_key`` and the matching public key in
    ``license_key.pub`` unless other file names are given.
    """

    def __init__(
        self,
        key_dir: Union[str, Path],
        private_key_file: str = DEFAULT_PRIVATE_KEY_FILE,
        public_key_file: str = DEFAULT_PUBLIC_KEY_FILE,
    ) -> None:
        self.key_dir = Path(key_dir)
        self.private_key_file = private_key_file
        self.public_key_file = public_key_file

    def path_for(self, capability: KeyCapability) -> Path:
        if capability is KeyCapability.PRIVATE:
            return self.key_dir / self.private_key_file
        return self.key_dir / self.public_key_file

    def read(self, capability: KeyCapability) -> bytes:
        """
        Read key material for ``capability``.

        Raises:
            KeySourceError: If the key file is missing or unreadable
        """
        path = self.path_for(capability)
        if not path.is_file():
            raise KeySourceError(
                f"License key file not found: {path.name}",
                capability=capability.value,
            )

        try:
            data = path.read_bytes()
        except OSError as e:
            raise KeySourceError(
                f"License key file could not be read: {path.name}",
                capability=capability.value,
                details=type(e).__name__,
            ) from e

        logger.debug("Read %s key material from %s", capability.value, path.name)
        return data


def load_rsa_key(data: bytes, capability: KeyCapability) -> RSAKey:
    """
    Parse PEM ``data`` into an RSA key object.

    Private keys are parsed for ``PRIVATE``; for ``PUBLIC`` either a public
    key or a full private key is accepted.

    Raises:
        KeySourceError: If the data is empty, malformed or not an RSA key
    """
    if not data or not data.strip():
        raise KeySourceError("License key material is empty", capability=capability.value)

    try:
        if capability is KeyCapability.PRIVATE or b"PRIVATE KEY" in data:
            key = load_pem_private_key(data, password=None)
        else:
            key = load_pem_public_key(data)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        # Parser messages may echo key bytes
        raise KeySourceError(
            "License key material is malformed",
            capability=capability.value,
            details=type(e).__name__,
        ) from e

    if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
        raise KeySourceError(
            "License key is not an RSA key",
            capability=capability.value,
            details=type(key).__name__,
        )

    return key
