from __future__ import annotations

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from .encoding import canonical_bytes, decode_signature
from .errors import MalformedPublicKeyError


class VerifyingKey:
    """An imported public key that can check signatures and do nothing else."""

    __slots__ = ("_public_key",)

    def __init__(self, public_key: rsa.RSAPublicKey) -> None:
        self._public_key = public_key

    @property
    def key_size(self) -> int:
        return self._public_key.key_size

    def verify(self, payload: bytes, signature: bytes) -> bool:
        try:
            self._public_key.verify(signature, payload, padding.PKCS1v15(), hashes.SHA256())
        except (InvalidSignature, ValueError):
            return False
        return True


def import_public_key(pem: str) -> VerifyingKey:
    if not isinstance(pem, str) or not pem.strip():
        raise MalformedPublicKeyError("Public key text is empty")
    try:
        public_key = load_pem_public_key(pem.strip().encode("ascii"))
    except (ValueError, UnicodeEncodeError) as e:
        raise MalformedPublicKeyError(f"Could not parse public key: {e}") from e
    if not isinstance(public_key, rsa.RSAPublicKey):
        raise MalformedPublicKeyError("Public key is not an RSA key")
    return VerifyingKey(public_key)


def verify_locally(key: VerifyingKey, value: str, signature_b64: str) -> bool:
    signature = decode_signature(signature_b64)
    if signature is None:
        return False
    return key.verify(canonical_bytes(value), signature)
