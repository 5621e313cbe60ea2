"""
Caller-owned RSA key context for the license codec.

A ``LicenseKeyContext`` holds exactly one active key and the encryptor built
from it. Nothing here is module-level state: every codec gets its own
context, and all access to the key slot goes through one re-entrant lock.
"""

import logging
import threading
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import rsa

from ..encryption import EncryptionConfig, HybridEncryptor, RSAKey, create_encryptor
from .exceptions import KeySourceError
from .key_source import KeyCapability, KeySource, load_rsa_key

logger = logging.getLogger(__name__)


class LicenseKeyContext:
    """
    Active license key plus its cached encryptor.

    Keys are loaded lazily from ``key_source`` the first time an operation
    needs a given capability. A loaded private key satisfies both
    capabilities; a loaded public key only satisfies ``PUBLIC``.

    Example:
        >>> context = LicenseKeyContext(FileKeySource("/etc/pullpreview"))
        >>> context.load_key(KeyCapability.PUBLIC)
        >>> plaintext = context.decrypt(blob)
    """

    def __init__(
        self,
        key_source: Optional[KeySource] = None,
        encryption_key: Optional[RSAKey] = None,
        config: Optional[EncryptionConfig] = None,
    ) -> None:
        self.key_source = key_source
        self.config = config
        self.lock = threading.RLock()
        self._encryption_key: Optional[RSAKey] = None
        self._encryptor: Optional[HybridEncryptor] = None
        self.encryption_key = encryption_key

    @property
    def encryption_key(self) -> Optional[RSAKey]:
        return self._encryption_key

    @encryption_key.setter
    def encryption_key(self, key: Optional[RSAKey]) -> None:
        if key is not None and not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
            raise TypeError("No RSA encryption key provided.")

        with self.lock:
            self._encryption_key = key
            self._encryptor = None

    @property
    def encryptor(self) -> HybridEncryptor:
        """Encryptor for the active key, created on first use."""
        with self.lock:
            if self._encryption_key is None:
                raise TypeError("No RSA encryption key provided.")
            if self._encryptor is None:
                self._encryptor = create_encryptor(self._encryption_key, self.config)
            return self._encryptor

    def has_capability(self, capability: KeyCapability) -> bool:
        key = self._encryption_key
        if capability is KeyCapability.PRIVATE:
            return isinstance(key, rsa.RSAPrivateKey)
        # Every RSA key, private or public, can decrypt
        return key is not None

    def load_key(self, capability: KeyCapability) -> None:
        """
        Make sure a key with ``capability`` is active.

        Idempotent: nothing is read when the active key already qualifies.

        Raises:
            KeySourceError: If no key source is configured or it fails
        """
        with self.lock:
            if self.has_capability(capability):
                return

            if self.key_source is None:
                raise KeySourceError("No license key source configured", capability=capability.value)

            data = self.key_source.read(capability)
            self.encryption_key = load_rsa_key(data, capability)
            logger.info("Loaded %s license key", capability.value)

    def encrypt(self, data: bytes) -> bytes:
        with self.lock:
            self.load_key(KeyCapability.PRIVATE)
            return self.encryptor.encrypt(data)

    def decrypt(self, data: bytes) -> bytes:
        with self.lock:
            self.load_key(KeyCapability.PUBLIC)
            return self.encryptor.decrypt(data)
