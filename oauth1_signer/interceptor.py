"""
Integration with the requests library.

OAuth1Auth plugs a Signer into requests so that every request sent by a
session carries a freshly computed OAuth 1.0a Authorization header.
"""

from typing import Optional

import requests
from requests.auth import AuthBase

from oauth1_signer.signer import Signer


class OAuth1Auth(AuthBase):
    """
    requests authentication hook signing each prepared request.

    Usage:
        auth = OAuth1Auth(Signer(consumer_key, private_key))
        requests.post(url, json=payload, auth=auth)
    """

    def __init__(self, signer: Signer):
        self.signer = signer

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        return self.signer.sign(r)


def get_session(
    consumer_key: str,
    file_path: str,
    password: Optional[str],
) -> requests.Session:
    """
    Create a requests Session that signs every outgoing request.

    Args:
        consumer_key: The consumer key identifying the client
        file_path: Path of a PKCS#12 file holding the RSA private key
        password: Password protecting the PKCS#12 file

    Returns:
        A Session with OAuth1Auth installed

    Raises:
        OSError: If the key file cannot be read
        SigningKeyError: If the key cannot be decoded
    """
    session = requests.Session()
    session.auth = OAuth1Auth(Signer.from_pkcs12(consumer_key, file_path, password))
    return session
