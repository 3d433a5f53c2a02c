"""Exceptions raised while producing OAuth 1.0a signatures."""


class OAuthSignerError(Exception):
    """Base class for all signing failures."""


class SignerConfigurationError(OAuthSignerError, ValueError):
    """Consumer key, signing key or request is missing."""


class SigningKeyError(OAuthSignerError, RuntimeError):
    """The signing key is unusable or the RSA signing operation failed."""


class BodyReadError(OAuthSignerError, OSError):
    """The request body could not be re-read for hashing."""
