from __future__ import annotations

import base64
import binascii
from typing import Optional


def canonical_bytes(value: str) -> bytes:
    # The signed representation of a stored value is its UTF-8 encoding, nothing else.
    if not isinstance(value, str):
        raise TypeError(f"value must be str, not {type(value).__name__}")
    return value.encode("utf-8")


def encode_signature(signature: bytes) -> str:
    return base64.b64encode(signature).decode("ascii")


def decode_signature(signature_b64: object) -> Optional[bytes]:
    """Strict base64 decode. Returns None for anything that is not valid base64 text."""
    if not isinstance(signature_b64, str) or not signature_b64:
        return None
    try:
        return base64.b64decode(signature_b64.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError):
        return None
