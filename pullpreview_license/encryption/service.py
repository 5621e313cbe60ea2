"""
Hybrid encryption for license blobs using RSA and AES-256-GCM.

The license issuer holds the RSA private key; client software ships only the
public key. Every blob therefore has to be decryptable with the public key
while being producible only with the private key.
"""
import os
import struct
import logging
from typing import Optional, Union

from cryptography.exceptions import InvalidSignature, InvalidTag
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.asymmetric import utils as asym_utils
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from .config import EncryptionConfig
from .exceptions import ConfigurationError, DecryptionError, EncryptionError, InvalidDataError

logger = logging.getLogger(__name__)

RSAKey = Union[rsa.RSAPrivateKey, rsa.RSAPublicKey]


class HybridEncryptor:
    """
    License blob encryptor using RSA key wrapping and AES-256-GCM.

    Features:
    - Payloads of any size (bulk data is symmetric-encrypted)
    - Fresh random AES key and nonce per call (non-deterministic output)
    - AES key wrapped with the private key, recoverable with the public key
    - RSA-PSS signature over the whole blob (tamper detection)

    Blob format:
        version (1) + wrapped_key_len (2, big-endian) + wrapped_key
        + nonce (12) + ciphertext_with_tag + signature

    Both ``wrapped_key`` and ``signature`` are exactly as long as the RSA
    modulus. The header (version, length, wrapped key) is bound to the
    ciphertext as GCM associated data.

    Example:
        >>> encryptor = HybridEncryptor(private_key)
        >>> blob = encryptor.encrypt(b'{"type":"trial"}')
        >>> HybridEncryptor(private_key.public_key()).decrypt(blob)
        b'{"type":"trial"}'
    """

    def __init__(self, key: RSAKey, config: Optional[EncryptionConfig] = None):
        """
        Initialize the encryptor.

        Args:
            key: RSA private key (encrypt and decrypt) or public key (decrypt only)
            config: Optional configuration (uses secure defaults if not provided)

        Raises:
            TypeError: If ``key`` is not an RSA key object
            ConfigurationError: If the key is smaller than ``config.min_rsa_key_size``
        """
        if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
            raise TypeError("No RSA encryption key provided.")

        self.config = config or EncryptionConfig()
        if key.key_size < self.config.min_rsa_key_size:
            raise ConfigurationError(
                f"RSA key size ({key.key_size}) is below the configured minimum "
                f"of {self.config.min_rsa_key_size} bits"
            )

        self.key = key

        logger.debug(
            f"HybridEncryptor initialized with {key.key_size}-bit "
            f"{'private' if self.can_encrypt else 'public'} key, "
            f"{self.config.signature_hash.value} signatures"
        )

    @property
    def can_encrypt(self) -> bool:
        """Whether the loaded key can produce blobs (private key loaded)."""
        return isinstance(self.key, rsa.RSAPrivateKey)

    @property
    def public_key(self) -> rsa.RSAPublicKey:
        if isinstance(self.key, rsa.RSAPrivateKey):
            return self.key.public_key()
        return self.key

    @property
    def modulus_bytes(self) -> int:
        return (self.key.key_size + 7) // 8

    def encrypt(self, data: bytes) -> bytes:
        """
        Encrypt ``data`` into a single opaque blob.

        Args:
            data: Plaintext bytes to encrypt

        Returns:
            Blob bytes (see class docstring for the layout)

        Raises:
            EncryptionError: If no private key is loaded or encryption fails
        """
        if not self.can_encrypt:
            raise EncryptionError("Encryption requires a private key")

        try:
            aes_key = os.urandom(self.config.key_length)
            nonce = os.urandom(self.config.nonce_length)

            # PKCS#1 v1.5 with message recovery: only the private key can
            # produce it, any public key holder can recover the AES key.
            wrapped_key = self.key.sign(
                aes_key, padding.PKCS1v15(), asym_utils.Prehashed(hashes.SHA256())
            )

            header = struct.pack("!BH", self.config.format_version, len(wrapped_key)) + wrapped_key
            ciphertext = AESGCM(aes_key).encrypt(nonce, data, header)

            signed = header + nonce + ciphertext
            signature = self.key.sign(signed, self._pss_padding(), self.config.signature_hash.algorithm())

            encrypted_data = signed + signature

            logger.debug(
                f"Encrypted {len(data)} bytes → {len(encrypted_data)} bytes "
                f"(modulus={self.modulus_bytes}, nonce={self.config.nonce_length})"
            )

            return encrypted_data

        except Exception as e:
            logger.error(f"Encryption failed: {type(e).__name__}")
            raise EncryptionError("Encryption failed") from e

    def decrypt(self, encrypted_data: bytes) -> bytes:
        """
        Decrypt a blob produced by :meth:`encrypt`.

        Args:
            encrypted_data: Blob bytes

        Returns:
            Decrypted plaintext bytes

        Raises:
            InvalidDataError: If the blob is structurally invalid (truncated, bad header)
            DecryptionError: If verification or decryption fails (wrong key, tampering)
        """
        modulus_bytes = self.modulus_bytes
        min_length = self.config.min_encrypted_data_length(modulus_bytes)
        if len(encrypted_data) < min_length:
            error_msg = (
                f"Encrypted data too short: {len(encrypted_data)} < {min_length} bytes"
            )
            logger.error(error_msg)
            raise InvalidDataError(error_msg)

        version, wrapped_key_length = struct.unpack("!BH", encrypted_data[: self.config.header_length])
        if version != self.config.format_version:
            error_msg = f"Unsupported license blob version: {version}"
            logger.error(error_msg)
            raise InvalidDataError(error_msg)
        if wrapped_key_length != modulus_bytes:
            error_msg = (
                f"Wrapped key segment is {wrapped_key_length} bytes, "
                f"expected {modulus_bytes} for the loaded key"
            )
            logger.error(error_msg)
            raise InvalidDataError(error_msg)

        header_end = self.config.header_length + wrapped_key_length
        nonce_end = header_end + self.config.nonce_length
        signed = encrypted_data[:-modulus_bytes]
        signature = encrypted_data[-modulus_bytes:]
        header = encrypted_data[:header_end]
        wrapped_key = encrypted_data[self.config.header_length:header_end]
        nonce = encrypted_data[header_end:nonce_end]
        ciphertext = encrypted_data[nonce_end:-modulus_bytes]

        public_key = self.public_key
        try:
            public_key.verify(signature, signed, self._pss_padding(), self.config.signature_hash.algorithm())
            aes_key = public_key.recover_data_from_signature(
                wrapped_key, padding.PKCS1v15(), hashes.SHA256()
            )
            plaintext = AESGCM(aes_key).decrypt(nonce, ciphertext, header)

        except InvalidSignature as e:
            logger.error("Decryption failed: license signature verification failed")
            raise DecryptionError("License signature verification failed") from e
        except InvalidTag as e:
            logger.error("Decryption failed: authentication tag mismatch")
            raise DecryptionError("Decryption failed") from e
        except Exception as e:
            logger.error(f"Decryption failed: {type(e).__name__}")
            raise DecryptionError("Decryption failed") from e

        logger.debug(f"Decrypted {len(encrypted_data)} bytes → {len(plaintext)} bytes")

        return plaintext

    def _pss_padding(self) -> padding.PSS:
        algorithm = self.config.signature_hash.algorithm()
        return padding.PSS(mgf=padding.MGF1(algorithm), salt_length=algorithm.digest_size)


def create_encryptor(
    key: RSAKey,
    config: Optional[EncryptionConfig] = None
) -> HybridEncryptor:
    """
    Factory function to create a HybridEncryptor instance.

    Args:
        key: RSA private or public key
        config: Optional configuration (uses defaults if not provided)

    Returns:
        HybridEncryptor instance
    """
    return HybridEncryptor(key, config)
