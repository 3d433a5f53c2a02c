"""
Percent-encoding as defined by RFC 3986 section 2.1.

Only the unreserved characters (ALPHA, DIGIT, "-", ".", "_", "~") are left
untouched. Everything else, including "%", is escaped byte by byte.
"""

from typing import Union

_UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~"
)


def percent_encode(value: Union[str, bytes]) -> str:
    """
    Percent-encode a string or byte sequence.

    Args:
        value: Text (encoded as UTF-8 first) or raw bytes

    Returns:
        The encoded string, using uppercase hex digits
    """
    if isinstance(value, str):
        value = value.encode("utf-8")

    return "".join(
        chr(byte) if byte in _UNRESERVED else f"%{byte:02X}" for byte in value
    )
