"""
OAuth 1.0a Request Signing Library with body hash support.

Computes RSA-SHA256 signed OAuth 1.0a Authorization headers for outgoing
HTTP requests. The request body is bound to the signature through the
oauth_body_hash parameter, so JSON, XML and binary payloads are covered.

Basic Usage:
    from oauth1_signer import get_authorization_header, load_signing_key

    signing_key = load_signing_key("key.p12", "keystorepassword")
    header = get_authorization_header(
        url="https://api.example.com/service?format=JSON",
        method="POST",
        payload=b'{"data": "value"}',
        consumer_key="my-consumer-key",
        signing_key=signing_key,
    )

Signing requests:
    from oauth1_signer import OAuth1Auth, Signer

    signer = Signer(consumer_key="my-consumer-key", signing_key=signing_key)
    requests.post(url, json={"data": "value"}, auth=OAuth1Auth(signer))

    # Or let a session sign everything
    session = get_session("my-consumer-key", "key.p12", "keystorepassword")
"""

from oauth1_signer.encoding import percent_encode

from oauth1_signer.errors import (
    BodyReadError,
    OAuthSignerError,
    SignerConfigurationError,
    SigningKeyError,
)

from oauth1_signer.oauth import (
    AUTHORIZATION_HEADER_NAME,
    get_authorization_header,
    get_base_url_string,
    get_signature_base_string,
    to_oauth_param_string,
)

from oauth1_signer.key_loader import load_signing_key

from oauth1_signer.signer import Signer

from oauth1_signer.interceptor import (
    OAuth1Auth,
    get_session,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Encoding
    "percent_encode",
    # Errors
    "BodyReadError",
    "OAuthSignerError",
    "SignerConfigurationError",
    "SigningKeyError",
    # Signature
    "AUTHORIZATION_HEADER_NAME",
    "get_authorization_header",
    "get_base_url_string",
    "get_signature_base_string",
    "to_oauth_param_string",
    # Keys
    "load_signing_key",
    # Signing requests
    "Signer",
    "OAuth1Auth",
    "get_session",
]
