"""
OAuth 1.0a signature generation with body hash support.

Builds the signature base string described in RFC 5849 section 3.4.1,
extended with the oauth_body_hash parameter so that non form-encoded
payloads (JSON, XML, binary) are covered by the signature, and assembles
the resulting Authorization header.
"""

import base64
import logging
import random
import re
import secrets
import time
from typing import Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, unquote_plus, unquote_to_bytes, urlsplit

from oauth1_signer import crypto
from oauth1_signer.encoding import percent_encode

log = logging.getLogger(__name__)

AUTHORIZATION_HEADER_NAME = "Authorization"
AUTHORIZATION_PREFIX = "OAuth "  # trailing space is required

NONCE_LENGTH = 16
ALPHANUMERIC_CHARS = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

OAUTH_CONSUMER_KEY_PARAM = "oauth_consumer_key"
OAUTH_NONCE_PARAM = "oauth_nonce"
OAUTH_SIGNATURE_PARAM = "oauth_signature"
OAUTH_SIGNATURE_METHOD_PARAM = "oauth_signature_method"
OAUTH_TIMESTAMP_PARAM = "oauth_timestamp"
OAUTH_VERSION_PARAM = "oauth_version"
OAUTH_BODY_HASH_PARAM = "oauth_body_hash"

OAUTH_VERSION = "1.0"
SIGNATURE_METHOD = "RSA-SHA256"

_DEFAULT_PORTS = {"http": "80", "https": "443"}

# Characters allowed verbatim in a path, "%" included so existing escapes survive
_PATH_SAFE = "/%:@!$&'()*+,;="
_STRAY_PERCENT = re.compile(r"%(?![0-9A-Fa-f]{2})")

_system_random = secrets.SystemRandom()

OAuthParams = Mapping[str, Union[str, Iterable[str]]]


def _byte_order(value: str) -> bytes:
    return value.encode("utf-8", "surrogatepass")


def _is_pre_escaped(raw_query: str) -> bool:
    """Whether the raw query string already carries escapes that parsing decodes."""
    return unquote_plus(raw_query) != raw_query


def _split_query(raw_query: str) -> Iterator[Tuple[str, str]]:
    """Yield raw name/value pairs; a field without "=" has an empty value."""
    for field in raw_query.split("&"):
        if not field:
            continue
        name, _, value = field.partition("=")
        yield name, value


def _reencode(component: str) -> str:
    """Decode a query component to its exact bytes and percent-encode them."""
    return percent_encode(unquote_to_bytes(component.replace("+", " ")))


def extract_query_params(url: str) -> Dict[str, List[str]]:
    """
    Extract query parameters from a URL.

    Duplicate keys are kept in order of appearance and a parameter without
    a value maps to an empty string. When the query string was supplied
    already escaped, names and values are percent-encoded again so that
    escaped and unescaped URLs naming the same value sign identically.

    Args:
        url: Absolute request URL

    Returns:
        Dictionary of parameter name -> list of values
    """
    raw_query = urlsplit(url).query
    must_encode = _is_pre_escaped(raw_query)

    query_params: Dict[str, List[str]] = {}
    # Without escapes the raw pair is already the decoded pair
    for name, value in _split_query(raw_query):
        if must_encode:
            name = _reencode(name)
            value = _reencode(value)
        query_params.setdefault(name, []).append(value)

    return query_params


def get_body_hash(payload: Optional[bytes]) -> str:
    """Return the base64-encoded SHA-256 digest of the request payload."""
    return base64.b64encode(crypto.sha256(payload or b"")).decode("ascii")


def get_nonce(rng: Optional[random.Random] = None) -> str:
    """
    Generate a random alphanumeric nonce for replay protection.

    See https://tools.ietf.org/html/rfc5849#section-3.3
    """
    rng = rng or _system_random
    return "".join(rng.choice(ALPHANUMERIC_CHARS) for _ in range(NONCE_LENGTH))


def get_timestamp(clock: Optional[Callable[[], float]] = None) -> str:
    """Return the current UNIX timestamp in whole seconds."""
    clock = clock or time.time
    return str(int(clock()))


def get_oauth_params(
    consumer_key: str,
    payload: Optional[bytes],
    clock: Optional[Callable[[], float]] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, str]:
    """
    Build a fresh set of OAuth protocol parameters for one request.

    Args:
        consumer_key: The consumer key identifying the client
        payload: The raw request body (None for bodiless requests)
        clock: Callable returning the current UNIX time (default: time.time)
        rng: Random source used for the nonce (default: secrets.SystemRandom)

    Returns:
        Dictionary of oauth_* parameter name -> value
    """
    return {
        OAUTH_CONSUMER_KEY_PARAM: consumer_key,
        OAUTH_NONCE_PARAM: get_nonce(rng),
        OAUTH_SIGNATURE_METHOD_PARAM: SIGNATURE_METHOD,
        OAUTH_TIMESTAMP_PARAM: get_timestamp(clock),
        OAUTH_VERSION_PARAM: OAUTH_VERSION,
        OAUTH_BODY_HASH_PARAM: get_body_hash(payload),
    }


def to_oauth_param_string(
    query_params: Mapping[str, Iterable[str]],
    oauth_params: OAuthParams,
) -> str:
    """
    Combine query and OAuth parameters into the normalized parameter string.

    Names are sorted by byte value, values sharing a name likewise, and
    pairs are joined with "&". No encoding happens here: values are
    expected to be encoded already. See
    https://tools.ietf.org/html/rfc5849#section-3.4.1.3.2

    Args:
        query_params: Dictionary of name -> list of values from the URL
        oauth_params: Dictionary of name -> value (or list of values)

    Returns:
        The parameter string, empty if there are no parameters
    """
    consolidated: Dict[str, List[str]] = {
        name: list(values) for name, values in query_params.items()
    }

    # A name present in both sets keeps every value
    for name, value in oauth_params.items():
        values = [value] if isinstance(value, str) else list(value)
        consolidated.setdefault(name, []).extend(values)

    pairs = []
    for name in sorted(consolidated, key=_byte_order):
        for value in sorted(consolidated[name], key=_byte_order):
            pairs.append(f"{name}={value}")

    return "&".join(pairs)


def get_base_url_string(url: str) -> str:
    """
    Normalize a URL into the base string URI.

    Scheme and host are lower-cased, a default port is dropped, query
    and fragment are removed and an empty path becomes "/". The path is
    kept in its escaped form. See
    https://tools.ietf.org/html/rfc5849#section-3.4.1.2
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()

    host = parts.netloc.rpartition("@")[2].lower()
    hostname, sep, port = host.rpartition(":")
    if sep and port.isdigit() and _DEFAULT_PORTS.get(scheme) == port:
        host = hostname

    path = _STRAY_PERCENT.sub("%25", quote(parts.path, safe=_PATH_SAFE)) or "/"

    return f"{scheme}://{host}{path}"


def get_signature_base_string(method: str, base_url: str, param_string: str) -> str:
    """
    Build the signature base string.

    See https://tools.ietf.org/html/rfc5849#section-3.4.1.1 and
    https://tools.ietf.org/id/draft-eaton-oauth-bodyhash-00.html
    """
    return "&".join(
        [
            method.upper(),
            percent_encode(base_url),
            percent_encode(param_string),
        ]
    )


def sign_signature_base_string(signature_base_string: str, signing_key) -> str:
    """
    Sign the signature base string with RSA-SHA256.

    Returns:
        The base64-encoded signature

    Raises:
        SigningKeyError: If the signing key is missing or unusable
    """
    signature = crypto.sign(signature_base_string.encode("utf-8"), signing_key)
    return base64.b64encode(signature).decode("ascii")


def get_authorization_string(oauth_params: Mapping[str, str]) -> str:
    """
    Render OAuth parameters as an Authorization header value.

    Parameters appear in the order of the mapping. See
    https://tools.ietf.org/html/rfc5849#section-3.5.1
    """
    return AUTHORIZATION_PREFIX + ", ".join(
        f'{name}="{value}"' for name, value in oauth_params.items()
    )


def get_authorization_header(
    url: str,
    method: str,
    payload: Optional[bytes],
    consumer_key: str,
    signing_key,
    clock: Optional[Callable[[], float]] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """
    Create an OAuth 1.0a Authorization header value for a request.

    Args:
        url: Absolute request URL, query string included
        method: HTTP method
        payload: Raw request body (None for bodiless requests)
        consumer_key: The consumer key identifying the client
        signing_key: RSA private key used to sign
        clock: Callable returning the current UNIX time (default: time.time)
        rng: Random source used for the nonce (default: secrets.SystemRandom)

    Returns:
        The header value, starting with "OAuth "

    Raises:
        SigningKeyError: If the signing key is missing or unusable
    """
    query_params = extract_query_params(url)
    oauth_params = get_oauth_params(consumer_key, payload, clock=clock, rng=rng)

    param_string = to_oauth_param_string(query_params, oauth_params)
    base_url = get_base_url_string(url)
    signature_base_string = get_signature_base_string(method, base_url, param_string)
    log.debug("Signature base string: %s", signature_base_string)

    signature = sign_signature_base_string(signature_base_string, signing_key)
    oauth_params[OAUTH_SIGNATURE_PARAM] = percent_encode(signature)

    return get_authorization_string(oauth_params)
