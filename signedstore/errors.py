"""Error types raised by the signed store and its consumers."""
from __future__ import annotations

from .config import INVALID_BODY_MESSAGE, INVALID_SIGNATURE_MESSAGE


class SignedStoreError(Exception):
    """Base class for every error this package raises on purpose.

    ``status_code`` is what the HTTP layer answers with when the error
    escapes a request handler.
    """

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidSignatureError(SignedStoreError):
    """A write was rejected: the signature is absent, malformed, or does not
    match the candidate value under the current public key.

    Always recoverable. The store is left untouched.
    """

    status_code = 400

    def __init__(self, message: str = INVALID_SIGNATURE_MESSAGE) -> None:
        super().__init__(message)


class MalformedRequestError(SignedStoreError):
    status_code = 400

    def __init__(self, message: str = INVALID_BODY_MESSAGE) -> None:
        super().__init__(message)


class MalformedPublicKeyError(SignedStoreError):
    """The exported public key text could not be imported as an RSA key."""


class MissingVerificationMaterialError(SignedStoreError):
    """Local verification was attempted before the public key or a signature was fetched."""

    def __init__(self, message: str = "Public key or signature not available.") -> None:
        super().__init__(message)
