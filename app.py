# app.py
# SignedStore: Flask HTTP surface for the signed single-value store.
#
# Run:
#   pip install -e .
#   python app.py
#
# Endpoints:
#   GET  /            -> {"data", "signature"}
#   GET  /public-key  -> PEM (SPKI) public key, text/plain
#   POST /sign        {"data"} -> {"signature"}
#   POST /            {"data", "signature"} -> 200, or 400 {"error": "Invalid signature"}

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from flask import Flask, Response, g, jsonify, request
from flask_cors import CORS

from signedstore.config import APP_NAME, ServerSettings
from signedstore.encoding import decode_signature, encode_signature
from signedstore.errors import InvalidSignatureError, MalformedRequestError, SignedStoreError
from signedstore.keys import KeyAuthority
from signedstore.store import SignedStore

logger = logging.getLogger(__name__)


def _json_body() -> Dict[str, Any]:
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise MalformedRequestError()
    return body


def _data_field(body: Dict[str, Any]) -> str:
    data = body.get("data")
    if not isinstance(data, str):
        raise MalformedRequestError()
    try:
        data.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates survive JSON decoding but have no UTF-8 form.
        raise MalformedRequestError()
    return data


def create_app(store: Optional[SignedStore] = None, settings: Optional[ServerSettings] = None) -> Flask:
    settings = settings or ServerSettings.from_env()
    if store is None:
        store = SignedStore(KeyAuthority.generate(), seed=settings.seed_value)

    app = Flask(__name__)
    CORS(app, origins=list(settings.cors_origins))

    @app.before_request
    def start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response: Response) -> Response:
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000.0 if started is not None else 0.0
        logger.info("%s %s %d %.3f ms", request.method, request.path, response.status_code, elapsed_ms)
        return response

    @app.errorhandler(SignedStoreError)
    def handle_store_error(err: SignedStoreError):
        return jsonify(err.to_dict()), err.status_code

    @app.get("/")
    def read_value():
        return jsonify(store.read().as_json())

    @app.post("/")
    def write_value():
        body = _json_body()
        data = _data_field(body)
        signature = decode_signature(body.get("signature"))
        if signature is None:
            logger.warning("Rejected write: signature missing or not base64")
            raise InvalidSignatureError()
        store.commit(data, signature)
        return "", 200

    @app.get("/public-key")
    def public_key():
        return Response(store.authority.export_public_key(), mimetype="text/plain")

    @app.post("/sign")
    def sign():
        data = _data_field(_json_body())
        return jsonify({"signature": encode_signature(store.request_signature(data))})

    return app


if __name__ == "__main__":
    settings = ServerSettings.from_env()
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)

    logger.info("%s running on http://%s:%d", APP_NAME, settings.host, settings.port)
    app.run(host=settings.host, port=settings.port)
