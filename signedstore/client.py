from __future__ import annotations

import logging
from typing import Optional

import httpx

from .config import DEFAULT_API_URL, TAMPERED_SIGNATURE
from .errors import MissingVerificationMaterialError
from .verifier import VerifyingKey, import_public_key, verify_locally

logger = logging.getLogger(__name__)


class SignedStoreClient:
    """Consumer of the signed store's HTTP API.

    Holds the last fetched value and signature locally, the way a UI would,
    and checks them with the server's public key without asking the server
    to do the verification.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ) -> None:
        self._owns_http = http is None
        self._http = http if http is not None else httpx.Client(base_url=base_url, timeout=timeout)
        self.data: str = ""
        self.signature: str = ""
        self.public_key: Optional[VerifyingKey] = None

    def __enter__(self) -> "SignedStoreClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def get_data(self) -> str:
        response = self._http.get("/")
        response.raise_for_status()
        body = response.json()
        self.data = body["data"]
        self.signature = body["signature"]
        return self.data

    def fetch_public_key(self) -> VerifyingKey:
        response = self._http.get("/public-key")
        response.raise_for_status()
        self.public_key = import_public_key(response.text)
        return self.public_key

    def request_signature(self, value: str) -> str:
        response = self._http.post("/sign", json={"data": value})
        response.raise_for_status()
        return response.json()["signature"]

    def submit(self, value: str, signature: str) -> bool:
        response = self._http.post("/", json={"data": value, "signature": signature})
        if response.status_code == 400:
            logger.warning("Server rejected write: %s", response.text)
            return False
        response.raise_for_status()
        return True

    def update_data(self, value: str) -> bool:
        """Ask the server to sign ``value``, then write it with that signature."""
        signature = self.request_signature(value)
        if not self.submit(value, signature):
            return False
        self.get_data()
        return True

    def verify_data_integrity(self) -> bool:
        if self.public_key is None or not self.signature:
            raise MissingVerificationMaterialError()
        ok = verify_locally(self.public_key, self.data, self.signature)
        if ok:
            logger.info("Data integrity verified")
        else:
            logger.warning("Data has been tampered with")
        return ok

    def tamper(self, signature: str = TAMPERED_SIGNATURE) -> None:
        # Only the locally held copy changes; the server never sees this.
        self.signature = signature

    def recover(self) -> str:
        return self.get_data()
