from __future__ import annotations

import logging
import threading
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from .config import RSA_KEY_SIZE, RSA_MIN_KEY_SIZE, RSA_PUBLIC_EXPONENT

logger = logging.getLogger(__name__)


class KeyAuthority:
    """Sole holder of the process's RSA private key.

    Every signature the server issues and every signature it checks goes
    through one of these. Signatures are RSASSA-PKCS1-v1_5 over SHA-256.
    """

    def __init__(self, private_key: rsa.RSAPrivateKey) -> None:
        if private_key is None:
            raise TypeError("KeyAuthority requires a private key")
        self._private_key = private_key
        self._public_key = private_key.public_key()
        self._public_key_pem: Optional[str] = None
        self._pem_lock = threading.Lock()

    @classmethod
    def generate(cls, key_size: int = RSA_KEY_SIZE) -> "KeyAuthority":
        if key_size < RSA_MIN_KEY_SIZE:
            raise ValueError(f"RSA modulus must be at least {RSA_MIN_KEY_SIZE} bits, got {key_size}")
        private_key = rsa.generate_private_key(public_exponent=RSA_PUBLIC_EXPONENT, key_size=key_size)
        logger.info("Generated RSA-%d key pair", key_size)
        return cls(private_key)

    @property
    def key_size(self) -> int:
        return self._private_key.key_size

    def export_public_key(self) -> str:
        with self._pem_lock:
            if self._public_key_pem is None:
                self._public_key_pem = self._public_key.public_bytes(
                    encoding=serialization.Encoding.PEM,
                    format=serialization.PublicFormat.SubjectPublicKeyInfo,
                ).decode("ascii")
            return self._public_key_pem

    def sign(self, payload: bytes) -> bytes:
        if not isinstance(payload, (bytes, bytearray)):
            raise TypeError("payload must be bytes")
        return self._private_key.sign(bytes(payload), padding.PKCS1v15(), hashes.SHA256())

    def verify(self, payload: bytes, signature: bytes) -> bool:
        if not isinstance(payload, (bytes, bytearray)):
            raise TypeError("payload must be bytes")
        if not isinstance(signature, (bytes, bytearray)):
            raise TypeError("signature must be bytes")
        try:
            self._public_key.verify(bytes(signature), bytes(payload), padding.PKCS1v15(), hashes.SHA256())
            return True
        except (InvalidSignature, ValueError):
            return False
