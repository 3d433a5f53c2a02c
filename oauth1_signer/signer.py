"""
Request signer holding the consumer key and RSA signing key.

A Signer computes the OAuth 1.0a Authorization header for an outgoing
request and sets it on the request's headers. It keeps no state between
calls and can be shared between threads.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Optional

from oauth1_signer.errors import BodyReadError, SignerConfigurationError
from oauth1_signer.key_loader import load_signing_key
from oauth1_signer.oauth import AUTHORIZATION_HEADER_NAME, get_authorization_header

log = logging.getLogger(__name__)


def _is_seekable(stream: Any) -> bool:
    seekable = getattr(stream, "seekable", None)
    if seekable is not None:
        return bool(seekable())
    return callable(getattr(stream, "seek", None)) and callable(getattr(stream, "tell", None))


def get_request_body(body: Any) -> bytes:
    """
    Return the content of a request body without consuming it.

    Args:
        body: None, str, bytes-like or a seekable file-like object

    Returns:
        The body bytes (empty for None)

    Raises:
        BodyReadError: If the body is a stream that cannot be re-read
    """
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body)

    if not callable(getattr(body, "read", None)):
        raise BodyReadError(f"Unsupported request body type: {type(body).__name__}")

    # Closed streams raise ValueError
    try:
        seekable = _is_seekable(body)
        if seekable:
            position = body.tell()
            data = body.read()
            body.seek(position)
    except (OSError, ValueError) as e:
        raise BodyReadError(f"Unable to read request body: {e}") from e

    if not seekable:
        raise BodyReadError("Request body stream cannot be re-read")

    if isinstance(data, str):
        data = data.encode("utf-8")
    return data


@dataclass(frozen=True)
class Signer:
    """
    Signs HTTP requests with an OAuth 1.0a RSA-SHA256 Authorization header.

    Usage:
        signer = Signer(consumer_key="my-consumer-key", signing_key=private_key)
        signer.sign(prepared_request)

    The clock and rng capabilities default to time.time and
    secrets.SystemRandom; tests can substitute deterministic sources.
    """

    consumer_key: str
    signing_key: Any
    clock: Optional[Callable[[], float]] = None
    rng: Optional[random.Random] = None

    @classmethod
    def from_pkcs12(
        cls,
        consumer_key: str,
        file_path: str,
        password: Optional[str],
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> "Signer":
        """Create a Signer whose key is loaded from a PKCS#12 container."""
        return cls(
            consumer_key=consumer_key,
            signing_key=load_signing_key(file_path, password),
            clock=clock,
            rng=rng,
        )

    def _check_configuration(self, request: Any) -> None:
        if not self.consumer_key:
            raise SignerConfigurationError("signer: provide valid consumer key")
        if self.signing_key is None:
            raise SignerConfigurationError("signer: provide valid signing key")
        if request is None:
            raise SignerConfigurationError("signer: no request provided")

    def get_authorization_header(self, url: str, method: str, payload: Optional[bytes]) -> str:
        """Compute the Authorization header value for the given request parts."""
        return get_authorization_header(
            url,
            method,
            payload,
            self.consumer_key,
            self.signing_key,
            clock=self.clock,
            rng=self.rng,
        )

    def sign(self, request: Any) -> Any:
        """
        Sign a request in place.

        Args:
            request: Object exposing method, url, body and a mutable headers
                mapping, such as requests.PreparedRequest

        Returns:
            The same request, with the Authorization header set

        Raises:
            SignerConfigurationError: If consumer key, signing key or request is missing
            BodyReadError: If the body cannot be re-read
            SigningKeyError: If the signing key is unusable
        """
        self._check_configuration(request)

        payload = get_request_body(request.body)
        auth_header = self.get_authorization_header(request.url, request.method, payload)

        request.headers[AUTHORIZATION_HEADER_NAME] = auth_header
        log.debug("Signed %s request to %s", request.method, request.url)
        return request
