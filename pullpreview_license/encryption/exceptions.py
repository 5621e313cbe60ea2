"""
Custom exceptions for license encryption operations.

Provides specific exception types for the different ways a license blob can
fail to encrypt or decrypt, so callers never see low-level crypto errors.
"""


class EncryptionError(Exception):
    """
    Base exception for license blob encryption and decryption.

    Catching it covers every failure of :class:`HybridEncryptor`, whether
    the blob was truncated, tampered with, or produced for another key.

    Example:
        >>> try:
        ...     blob = encryptor.encrypt(payload)
        ... except EncryptionError:
        ...     logger.error("Could not produce license blob")
        ...     raise
    """

    pass


class DecryptionError(EncryptionError):
    """
    Raised when a license blob cannot be decrypted.

    This typically indicates:
    - Wrong public key
    - Corrupted or tampered ciphertext
    - Signature verification failure
    - Authentication tag verification failure (GCM)

    Messages are generic on purpose: they never carry key material or
    partial plaintext.
    """

    pass


class InvalidDataError(DecryptionError):
    """
    Raised when the encrypted blob is structurally invalid.

    This indicates problems detected before any cryptography runs:
    - Data too short (truncated)
    - Unknown format version
    - Wrapped key segment of the wrong size

    Being a DecryptionError subclass, it is caught by handlers that only
    care whether decryption succeeded.

    Example:
        >>> try:
        ...     encryptor.decrypt(b"invalid")
        ... except InvalidDataError as e:
        ...     logger.error(f"Invalid data format: {e}")
    """

    pass


class ConfigurationError(EncryptionError, ValueError):
    """
    Raised when encryption configuration is invalid.

    This indicates problems with EncryptionConfig parameters:
    - Nonce length other than 12 bytes
    - Symmetric key length other than 32 bytes
    - RSA key below the configured minimum size
    """

    pass
