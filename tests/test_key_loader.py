"""
Unit tests for the RSA signing primitive and PKCS#12 key loading.
"""

import os
import shutil
import tempfile
import unittest

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, padding, rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from oauth1_signer import crypto
from oauth1_signer.errors import SigningKeyError
from oauth1_signer.key_loader import load_signing_key


def write_pkcs12(path, private_key, password):
    data = pkcs12.serialize_key_and_certificates(
        name=b"test",
        key=private_key,
        cert=None,
        cas=None,
        encryption_algorithm=serialization.BestAvailableEncryption(password),
    )
    with open(path, "wb") as f:
        f.write(data)


class TestCryptoSign(unittest.TestCase):
    """Test RSA PKCS#1 v1.5 signing."""

    @classmethod
    def setUpClass(cls):
        cls.private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

    def test_sha256(self):
        self.assertEqual(len(crypto.sha256(b"data")), 32)

    def test_sign_and_verify(self):
        signature = crypto.sign(b"data", self.private_key)

        self.assertEqual(len(signature), 256)
        self.private_key.public_key().verify(
            signature, b"data", padding.PKCS1v15(), hashes.SHA256()
        )

    def test_sign_without_key(self):
        with self.assertRaises(SigningKeyError):
            crypto.sign(b"data", None)

    def test_sign_with_non_rsa_key(self):
        with self.assertRaises(SigningKeyError) as ctx:
            crypto.sign(b"data", ed25519.Ed25519PrivateKey.generate())
        self.assertIn("expected RSA private key", str(ctx.exception))

    def test_sign_with_garbage_key(self):
        with self.assertRaises(SigningKeyError):
            crypto.sign(b"data", "not a key")

    def test_signing_key_error_is_runtime_error(self):
        with self.assertRaises(RuntimeError):
            crypto.sign(b"data", None)


class TestLoadSigningKey(unittest.TestCase):
    """Test loading signing keys out of PKCS#12 containers."""

    @classmethod
    def setUpClass(cls):
        cls.private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

    def setUp(self):
        self.tmp_dir = tempfile.mkdtemp()
        self.key_path = os.path.join(self.tmp_dir, "test_key_container.p12")
        write_pkcs12(self.key_path, self.private_key, b"Password1")

    def tearDown(self):
        shutil.rmtree(self.tmp_dir)

    def test_load_signing_key(self):
        signing_key = load_signing_key(self.key_path, "Password1")

        self.assertIsInstance(signing_key, rsa.RSAPrivateKey)
        self.assertEqual(
            signing_key.private_numbers(), self.private_key.private_numbers()
        )

    def test_wrong_password(self):
        with self.assertRaises(SigningKeyError):
            load_signing_key(self.key_path, "WrongPassword")

    def test_missing_file(self):
        with self.assertRaises(OSError):
            load_signing_key(os.path.join(self.tmp_dir, "missing.p12"), "Password1")

    def test_not_a_pkcs12_file(self):
        path = os.path.join(self.tmp_dir, "garbage.p12")
        with open(path, "wb") as f:
            f.write(b"this is not a key store")

        with self.assertRaises(SigningKeyError):
            load_signing_key(path, "Password1")

    def test_non_rsa_key(self):
        path = os.path.join(self.tmp_dir, "ec.p12")
        write_pkcs12(path, ec.generate_private_key(ec.SECP256R1()), b"Password1")

        with self.assertRaises(SigningKeyError):
            load_signing_key(path, "Password1")


if __name__ == "__main__":
    unittest.main()
