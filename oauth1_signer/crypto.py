"""
Cryptographic primitives used to build OAuth 1.0a signatures.

Signatures are RSASSA-PKCS1-v1_5 over a SHA-256 digest (RSA-SHA256).
"""

import hashlib
from typing import Any

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from oauth1_signer.errors import SigningKeyError


def sha256(data: bytes) -> bytes:
    """Return the raw SHA-256 digest of data."""
    return hashlib.sha256(data).digest()


def sign(data: bytes, private_key: Any) -> bytes:
    """
    Sign data with an RSA private key.

    The data is digested with SHA-256 and the digest signed with
    PKCS#1 v1.5 padding.

    Args:
        data: The bytes to sign
        private_key: An RSA private key object

    Returns:
        The raw signature bytes

    Raises:
        SigningKeyError: If the key is missing, not an RSA private key,
            or the signing operation fails
    """
    if private_key is None:
        raise SigningKeyError("No signing key provided")
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SigningKeyError(
            f"Key type mismatch: expected RSA private key, got {type(private_key).__name__}"
        )

    try:
        return private_key.sign(data, padding.PKCS1v15(), hashes.SHA256())
    except Exception as e:
        raise SigningKeyError(f"Failed to sign data: {e}") from e
