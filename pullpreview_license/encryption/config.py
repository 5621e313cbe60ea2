"""
Encryption configuration for license blobs.

Provides configurable parameters for the hybrid RSA + AES-256-GCM scheme,
with presets for production and high-security deployments.
"""

from dataclasses import dataclass
from enum import Enum

from cryptography.hazmat.primitives import hashes

from .exceptions import ConfigurationError


class SignatureHash(Enum):
    """Supported hash algorithms for the RSA-PSS blob signature"""

    SHA256 = "SHA256"
    SHA512 = "SHA512"

    def algorithm(self) -> hashes.HashAlgorithm:
        if self is SignatureHash.SHA512:
            return hashes.SHA512()
        return hashes.SHA256()


@dataclass
class EncryptionConfig:
    """
    Configuration for the hybrid license encryptor.

    Attributes:
        format_version: Leading version byte written into every blob
        nonce_length: Length of random nonce in bytes (must be 12 for GCM)
        key_length: Symmetric key length in bytes (32 for AES-256)
        signature_hash: Hash algorithm for the RSA-PSS signature
        min_rsa_key_size: Smallest RSA modulus (bits) accepted by the encryptor

    Example:
        >>> config = EncryptionConfig()
        >>> strict = EncryptionConfig(
        ...     signature_hash=SignatureHash.SHA512,
        ...     min_rsa_key_size=3072,
        ... )
    """

    format_version: int = 1
    """Blob format version byte"""

    nonce_length: int = 12
    """Length of random nonce in bytes (GCM standard is 12 bytes)"""

    key_length: int = 32
    """Symmetric key length in bytes (32 bytes = 256 bits for AES-256)"""

    signature_hash: SignatureHash = SignatureHash.SHA256
    """Hash algorithm for the RSA-PSS signature over the blob"""

    min_rsa_key_size: int = 2048
    """Minimum RSA modulus size in bits"""

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ConfigurationError: If any parameter fails validation
        """
        if not 0 < self.format_version < 256:
            raise ConfigurationError(
                f"Format version ({self.format_version}) must fit in one byte (1-255)"
            )

        # GCM nonce size (NIST SP 800-38D)
        if self.nonce_length != 12:
            raise ConfigurationError(
                f"Nonce length ({self.nonce_length}) must be exactly 12 bytes "
                f"for AES-GCM mode (NIST SP 800-38D)"
            )

        # The wrapped key is recovered as a SHA-256 sized digest
        if self.key_length != 32:
            raise ConfigurationError(
                f"Key length ({self.key_length}) must be 32 bytes (AES-256)"
            )

        if self.min_rsa_key_size < 2048:
            raise ConfigurationError(
                f"Minimum RSA key size ({self.min_rsa_key_size}) must be >= 2048 bits"
            )

    @property
    def header_length(self) -> int:
        """Version byte plus the two-byte wrapped key length."""
        return 1 + 2

    def min_encrypted_data_length(self, modulus_bytes: int) -> int:
        """
        Minimum length of a valid blob for an RSA key of ``modulus_bytes``.

        Format: header + wrapped_key + nonce + tag + signature
        Tag is 16 bytes for GCM mode.
        """
        return self.header_length + modulus_bytes + self.nonce_length + 16 + modulus_bytes

    def __post_init__(self):
        """Validate configuration on initialization"""
        self.validate()


# Predefined configurations for common scenarios
DEFAULT_CONFIG = EncryptionConfig()
"""Default production configuration (RSA >= 2048, SHA256 signature)"""

HIGH_SECURITY_CONFIG = EncryptionConfig(
    signature_hash=SignatureHash.SHA512, min_rsa_key_size=3072
)
"""High-security configuration (RSA >= 3072, SHA512 signature)"""
