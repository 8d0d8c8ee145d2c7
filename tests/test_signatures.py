from __future__ import annotations

import pytest

from signedstore.keys import KeyAuthority


@pytest.mark.parametrize("value", ["Hello World", "", "New Value", "ünïcødé ✓", "x" * 5000])
def test_sign_then_verify_round_trips(authority, value):
    payload = value.encode("utf-8")
    assert authority.verify(payload, authority.sign(payload)) is True


def test_signatures_are_deterministic(authority):
    assert authority.sign(b"Hello World") == authority.sign(b"Hello World")
    assert len(authority.sign(b"Hello World")) == authority.key_size // 8


def test_signature_for_other_value_is_rejected(authority):
    sig_other = authority.sign(b"New Value")
    assert authority.verify(b"Hello World", sig_other) is False


def test_signature_from_other_key_is_rejected(authority, other_authority):
    sig = other_authority.sign(b"Hello World")
    assert authority.verify(b"Hello World", sig) is False


@pytest.mark.parametrize("garbage", [b"", b"nonsense", b"\x00" * 256, b"\xff" * 300])
def test_malformed_signature_is_not_an_error(authority, garbage):
    assert authority.verify(b"Hello World", garbage) is False


def test_flipped_bit_is_rejected(authority):
    sig = bytearray(authority.sign(b"Hello World"))
    sig[10] ^= 0x01
    assert authority.verify(b"Hello World", bytes(sig)) is False


def test_contract_violations_raise(authority):
    with pytest.raises(TypeError):
        KeyAuthority(None)
    with pytest.raises(TypeError):
        authority.sign("not bytes")
    with pytest.raises(TypeError):
        authority.verify(b"Hello World", "not bytes")


def test_small_keys_are_refused():
    with pytest.raises(ValueError):
        KeyAuthority.generate(key_size=1024)


def test_public_key_export_is_cached_spki_pem(authority):
    pem = authority.export_public_key()
    assert pem.startswith("-----BEGIN PUBLIC KEY-----")
    assert pem.rstrip().endswith("-----END PUBLIC KEY-----")
    assert authority.export_public_key() is pem
    assert authority.key_size >= 2048
