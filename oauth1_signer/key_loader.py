"""
Loading of RSA signing keys from PKCS#12 containers.
"""

import logging
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from oauth1_signer.errors import SigningKeyError

log = logging.getLogger(__name__)


def _read_file(file_path: str) -> bytes:
    with open(file_path, "rb") as f:
        return f.read()


def load_signing_key(file_path: str, password: Optional[str]) -> rsa.RSAPrivateKey:
    """
    Load an RSA private key out of a PKCS#12 (.p12) container.

    Args:
        file_path: Path of the PKCS#12 file
        password: Password protecting the container (None if unprotected)

    Returns:
        The RSA private key stored in the container

    Raises:
        OSError: If the file cannot be read
        SigningKeyError: If the container cannot be decoded or holds no RSA key
    """
    data = _read_file(file_path)
    secret = password.encode("utf-8") if password is not None else None

    try:
        private_key, _, _ = pkcs12.load_key_and_certificates(data, secret)
    except ValueError as e:
        raise SigningKeyError(f"Unable to decode PKCS#12 container {file_path}: {e}") from e

    if private_key is None:
        raise SigningKeyError(f"No private key found in {file_path}")
    if not isinstance(private_key, rsa.RSAPrivateKey):
        raise SigningKeyError(f"Expected an RSA private key in {file_path}")

    log.debug("Loaded %d-bit RSA signing key from %s", private_key.key_size, file_path)
    return private_key
