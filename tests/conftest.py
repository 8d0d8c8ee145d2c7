from __future__ import annotations

import pytest

from app import create_app
from signedstore.config import ServerSettings
from signedstore.keys import KeyAuthority
from signedstore.store import SignedStore


@pytest.fixture(scope="session")
def authority() -> KeyAuthority:
    # RSA generation is slow enough to share one key pair across the run.
    return KeyAuthority.generate()


@pytest.fixture(scope="session")
def other_authority() -> KeyAuthority:
    return KeyAuthority.generate()


@pytest.fixture()
def store(authority) -> SignedStore:
    return SignedStore(authority)


@pytest.fixture()
def app(store):
    flask_app = create_app(store=store, settings=ServerSettings())
    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture()
def client(app):
    return app.test_client()
