"""
Encryption module for license blobs.

Provides hybrid RSA + AES-256-GCM encryption with configurable parameters
and no global state: the caller owns the key and the encryptor.

Public API:
    - HybridEncryptor: Main encryptor class
    - EncryptionConfig: Configuration dataclass
    - create_encryptor: Factory function
    - SignatureHash: Supported signature hash algorithms enum
    - Exception classes: EncryptionError, DecryptionError, InvalidDataError

Quick Start:
    >>> from cryptography.hazmat.primitives.asymmetric import rsa
    >>> from pullpreview_license.encryption import HybridEncryptor
    >>>
    >>> private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    >>> issuer = HybridEncryptor(private_key)
    >>> client = HybridEncryptor(private_key.public_key())
    >>>
    >>> blob = issuer.encrypt(b"license payload")
    >>> assert client.decrypt(blob) == b"license payload"

Error Handling:
    >>> from pullpreview_license.encryption import DecryptionError, InvalidDataError
    >>>
    >>> try:
    ...     client.decrypt(blob)
    ... except InvalidDataError as e:
    ...     print(f"Invalid data format: {e}")
    ... except DecryptionError as e:
    ...     print(f"Decryption failed: {e}")
"""

from .service import HybridEncryptor, RSAKey, create_encryptor
from .config import (
    EncryptionConfig,
    SignatureHash,
    DEFAULT_CONFIG,
    HIGH_SECURITY_CONFIG,
)
from .exceptions import (
    EncryptionError,
    DecryptionError,
    InvalidDataError,
    ConfigurationError,
)

__all__ = [
    # Main encryptor
    "HybridEncryptor",
    "RSAKey",
    "create_encryptor",
    # Configuration
    "EncryptionConfig",
    "SignatureHash",
    "DEFAULT_CONFIG",
    "HIGH_SECURITY_CONFIG",
    # Exceptions
    "EncryptionError",
    "DecryptionError",
    "InvalidDataError",
    "ConfigurationError",
]
