from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict

from .config import SEED_VALUE
from .encoding import canonical_bytes, encode_signature
from .errors import InvalidSignatureError
from .keys import KeyAuthority

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedValue:
    value: str
    signature: bytes

    @property
    def signature_b64(self) -> str:
        return encode_signature(self.signature)

    def as_json(self) -> Dict[str, str]:
        return {"data": self.value, "signature": self.signature_b64}


class SignedStore:
    """Holds exactly one value and only replaces it on a verified write.

    Reads return the value with a signature made at read time, so the
    caller can check it independently with the exported public key.
    """

    def __init__(self, authority: KeyAuthority, seed: str = SEED_VALUE) -> None:
        if authority is None:
            raise TypeError("SignedStore requires a KeyAuthority")
        canonical_bytes(seed)
        self._authority = authority
        self._value = seed
        self._write_lock = threading.Lock()

    @property
    def authority(self) -> KeyAuthority:
        return self._authority

    def read(self) -> SignedValue:
        value = self._value
        return SignedValue(value=value, signature=self._authority.sign(canonical_bytes(value)))

    def request_signature(self, candidate: str) -> bytes:
        signature = self._authority.sign(canonical_bytes(candidate))
        logger.debug("Issued signature for candidate (%d chars)", len(candidate))
        return signature

    def write(self, candidate: str, signature: bytes) -> bool:
        payload = canonical_bytes(candidate)
        # Verification and commit must not interleave with another write.
        with self._write_lock:
            if not self._authority.verify(payload, signature):
                logger.warning("Rejected write: signature does not match candidate (%d chars)", len(candidate))
                return False
            self._value = candidate
        logger.info("Committed new value (%d chars)", len(candidate))
        return True

    def commit(self, candidate: str, signature: bytes) -> None:
        if not self.write(candidate, signature):
            raise InvalidSignatureError()
