from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

APP_NAME = "SignedStore v0.1"

SEED_VALUE = "Hello World"

RSA_KEY_SIZE = 2048
RSA_MIN_KEY_SIZE = 2048
RSA_PUBLIC_EXPONENT = 65537

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_API_URL = f"http://localhost:{DEFAULT_PORT}"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ORIGINS = ("*",)

INVALID_SIGNATURE_MESSAGE = "Invalid signature"
INVALID_BODY_MESSAGE = "Invalid request body"

# What the demo "tamper" action puts in place of a held signature.
TAMPERED_SIGNATURE = "othersignature"


def _split_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_CORS_ORIGINS
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or DEFAULT_CORS_ORIGINS


@dataclass(frozen=True)
class ServerSettings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cors_origins: Tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = DEFAULT_LOG_LEVEL
    seed_value: str = SEED_VALUE

    @classmethod
    def from_env(cls, environ=None) -> "ServerSettings":
        env = os.environ if environ is None else environ
        port_str = (env.get("PORT") or "").strip()
        try:
            port = int(port_str) if port_str else DEFAULT_PORT
        except ValueError:
            raise ValueError(f"PORT must be an integer, got {port_str!r}")
        return cls(
            host=(env.get("SIGNEDSTORE_HOST") or DEFAULT_HOST).strip(),
            port=port,
            cors_origins=_split_origins(env.get("SIGNEDSTORE_CORS_ORIGINS")),
            log_level=(env.get("SIGNEDSTORE_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper(),
            seed_value=env.get("SIGNEDSTORE_SEED", SEED_VALUE),
        )
