from __future__ import annotations

import json
from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from builders import ec_key, ec_point, ec_sign, gen1_certificate, gen2_certificate, rsa_key, rsa_sign
from conftest import HOLDER_1, HOLDER_2, MEMBER_STATE_1, MEMBER_STATE_2, ROOT_1, ROOT_2
from tachoparse.core.base.errors import CertificateError, MalformedError
from tachoparse.core.base.types import AuthStatus, Generation
from tachoparse.core.pki import (
    CURVES,
    Certificate,
    CertificateStore,
    EcKey,
    RsaKey,
    chain,
    default_store,
    load_store,
    parse_dataset,
    verify,
)
from tachoparse.core.pki import gen1, gen2

# -- Gen1 --------------------------------------------------------------------------


def _rsa(key) -> RsaKey:
    numbers = key.public_key().public_numbers()
    return RsaKey(numbers.n, numbers.e)


def test_gen1_recover_round_trip() -> None:
    signer, subject = rsa_key(), rsa_key()
    cert = gen1.recover(gen1_certificate(subject, signer, HOLDER_1, ROOT_1), _rsa(signer))
    assert cert.key_id == HOLDER_1
    assert cert.authority == ROOT_1
    assert cert.key == _rsa(subject)
    assert cert.generation is Generation.GEN1
    assert cert.expires is None


def test_gen1_recover_expiry() -> None:
    signer, subject = rsa_key(), rsa_key()
    data = gen1_certificate(subject, signer, HOLDER_1, ROOT_1, expiry=(2019686400).to_bytes(4, "big"))
    cert = gen1.recover(data, _rsa(signer))
    assert cert.expires == datetime(2034, 1, 1, tzinfo=timezone.utc)


def test_gen1_recover_with_wrong_key() -> None:
    signer, subject = rsa_key(), rsa_key()
    data = gen1_certificate(subject, signer, HOLDER_1, ROOT_1)
    with pytest.raises(CertificateError):
        gen1.recover(data, _rsa(rsa_key()))


def test_gen1_recover_tampered_remainder() -> None:
    signer, subject = rsa_key(), rsa_key()
    data = bytearray(gen1_certificate(subject, signer, HOLDER_1, ROOT_1))
    data[150] ^= 0x01
    with pytest.raises(CertificateError, match="hash"):
        gen1.recover(bytes(data), _rsa(signer))


def test_gen1_certificate_length() -> None:
    with pytest.raises(CertificateError):
        gen1.authority_reference(b"\x00" * 193)


def test_gen1_root_key() -> None:
    key = rsa_key()
    numbers = key.public_key().public_numbers()
    data = ROOT_1 + numbers.n.to_bytes(128, "big") + numbers.e.to_bytes(8, "big")
    cert = gen1.root_key(data)
    assert cert.key_id == ROOT_1
    assert cert.key == _rsa(key)
    with pytest.raises(CertificateError):
        gen1.root_key(data[:-1])


def test_gen1_signature() -> None:
    key = rsa_key()
    signature = rsa_sign(key, b"payload")
    assert gen1.verify_signature(_rsa(key), b"payload", signature)
    assert not gen1.verify_signature(_rsa(key), b"payloaD", signature)
    assert not gen1.verify_signature(_rsa(key), b"payload", signature[:64])


# -- Gen2 --------------------------------------------------------------------------


def test_gen2_parse_certificate() -> None:
    signer, subject = ec_key(), ec_key()
    parsed = gen2.parse_certificate(gen2_certificate(subject, signer, HOLDER_2, ROOT_2))
    cert = parsed.certificate
    assert cert.key_id == HOLDER_2
    assert cert.authority == ROOT_2
    assert cert.key.curve is CURVES["brainpoolP256r1"]
    assert cert.key.point == ec_point(subject)
    assert cert.effective == datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert cert.expires == datetime(2034, 1, 1, tzinfo=timezone.utc)
    assert parsed.profile == 0
    assert gen2.verify_certificate(parsed, EcKey(CURVES["brainpoolP256r1"], ec_point(signer)))
    assert not gen2.verify_certificate(parsed, EcKey(CURVES["brainpoolP256r1"], ec_point(subject)))


def test_gen2_parse_ignores_padding() -> None:
    key = ec_key()
    data = gen2_certificate(key, key, HOLDER_2, HOLDER_2) + b"\x00" * 40
    assert gen2.parse_certificate(data).certificate.key_id == HOLDER_2


@pytest.mark.parametrize(
    "data",
    [
        b"\x30\x03\x02\x01\x00",
        b"\x7F\x21\x02\x42\x00",
        b"\x7F\x21\x40\x00",
    ],
)
def test_gen2_invalid_certificate(data: bytes) -> None:
    with pytest.raises(CertificateError):
        gen2.parse_certificate(data)


def test_gen2_unsupported_curve() -> None:
    key = ec_key()
    data = gen2_certificate(key, key, HOLDER_2, HOLDER_2, oid=bytes.fromhex("2A8648CE3D030199"))
    with pytest.raises(CertificateError, match="curve"):
        gen2.parse_certificate(data)


def test_gen2_describe() -> None:
    key = ec_key()
    value = gen2.describe(gen2_certificate(key, key, HOLDER_2, ROOT_2))
    assert value["holder_reference"] == HOLDER_2
    assert value["authority_reference"] == ROOT_2
    assert value["curve"] == "brainpoolP256r1"
    assert len(value["signature"]) == 64
    with pytest.raises(MalformedError):
        gen2.describe(b"\x00\x00")


def test_gen2_signature() -> None:
    key = ec_key()
    public = EcKey(CURVES["brainpoolP256r1"], ec_point(key))
    signature = ec_sign(key, b"payload")
    assert gen2.verify_signature(public, b"payload", signature)
    assert not gen2.verify_signature(public, b"payloaD", signature)
    assert not gen2.verify_signature(public, b"payload", signature[:-1])
    assert not gen2.verify_signature(EcKey(public.curve, b"\x04" + b"\x01" * 64), b"payload", signature)


# -- store ---------------------------------------------------------------------------


def _store() -> CertificateStore:
    return CertificateStore([
        Certificate(ROOT_1, Generation.GEN1, RsaKey(0xC0FFEE, 3)),
        Certificate(ROOT_2, Generation.GEN2_V1, EcKey(CURVES["brainpoolP256r1"], b"\x04")),
    ], version="test")


def test_store_lookup() -> None:
    store = _store()
    assert store.lookup(Generation.GEN1, ROOT_1).key == RsaKey(0xC0FFEE, 3)
    assert store.lookup(Generation.GEN1, ROOT_1) is store.lookup(Generation.GEN1, ROOT_1)
    assert store.lookup(Generation.GEN2_V2, ROOT_2) is store.lookup(Generation.GEN2_V1, ROOT_2)
    assert store.lookup(Generation.GEN1, ROOT_2) is None
    assert store.lookup(Generation.GEN2_V1, MEMBER_STATE_2) is None
    assert store.count(Generation.GEN1) == 1
    assert store.version == "test"


def test_store_extended_leaves_original() -> None:
    store = _store()
    extra = Certificate(MEMBER_STATE_1, Generation.GEN1, RsaKey(0xBEEF, 3))
    bigger = store.extended([extra])
    assert len(bigger) == 3
    assert len(store) == 2
    assert store.lookup(Generation.GEN1, MEMBER_STATE_1) is None
    assert bigger.lookup(Generation.GEN1, MEMBER_STATE_1) is extra
    assert bigger.version == "test"


def test_certificate_is_frozen() -> None:
    cert = _store().lookup(Generation.GEN1, ROOT_1)
    with pytest.raises(FrozenInstanceError):
        cert.key_id = b"\x00" * 8


def test_load_store(tmp_path) -> None:
    path = tmp_path / "certificates.json"
    path.write_text(json.dumps({
        "version": "2026-01",
        "gen1": [{"key_id": ROOT_1.hex(), "modulus": "C0FFEE", "exponent": "03"}],
        "gen2": [{"key_id": ROOT_2.hex(), "curve": "brainpoolP256r1", "point": "04AA"}],
    }))
    store = load_store(path)
    assert store.version == "2026-01"
    assert store.lookup(Generation.GEN1, ROOT_1).key == RsaKey(0xC0FFEE, 3)
    assert store.lookup(Generation.GEN2_V1, ROOT_2).key.point == b"\x04\xAA"


@pytest.mark.parametrize(
    "doc",
    [
        {"gen1": [{"key_id": "00"}]},
        {"gen2": [{"key_id": "00", "curve": "nope", "point": "04"}]},
        {"gen1": [{"key_id": "zz", "modulus": "01", "exponent": "03"}]},
    ],
)
def test_parse_dataset_rejects_bad_entries(doc: dict) -> None:
    with pytest.raises(CertificateError):
        parse_dataset(doc)


def test_load_store_bad_json(tmp_path) -> None:
    path = tmp_path / "certificates.json"
    path.write_text("{")
    with pytest.raises(CertificateError):
        load_store(path)


def test_default_store_is_shared() -> None:
    assert default_store() is default_store()
    assert isinstance(default_store(), CertificateStore)


# -- verify and chain ---------------------------------------------------------------------


def test_verify_outcomes() -> None:
    root = ec_key()
    store = CertificateStore([
        Certificate(ROOT_2, Generation.GEN2_V1, EcKey(CURVES["brainpoolP256r1"], ec_point(root))),
    ])
    signature = ec_sign(root, b"data")
    assert verify(store, Generation.GEN2_V2, ROOT_2, b"data", signature) is AuthStatus.VALID
    assert verify(store, Generation.GEN2_V1, ROOT_2, b"Data", signature) is AuthStatus.INVALID
    assert verify(store, Generation.GEN2_V1, HOLDER_2, b"data", signature) is AuthStatus.KEY_NOT_FOUND


def test_chain_gen1(gen1_chain) -> None:
    data = [gen1_chain.member_state_certificate, gen1_chain.holder_certificate]
    extended, opened = chain(gen1_chain.store, Generation.GEN1, data)
    assert [c.key_id for c in opened] == [MEMBER_STATE_1, HOLDER_1]
    assert extended.lookup(Generation.GEN1, HOLDER_1) is not None
    assert gen1_chain.store.lookup(Generation.GEN1, HOLDER_1) is None


def test_chain_gen2(gen2_chain) -> None:
    data = [gen2_chain.member_state_certificate, gen2_chain.holder_certificate]
    extended, opened = chain(gen2_chain.store, Generation.GEN2_V1, data)
    assert [c.key_id for c in opened] == [MEMBER_STATE_2, HOLDER_2]
    assert len(extended) == len(gen2_chain.store) + 2


def test_chain_keeps_positions(gen2_chain) -> None:
    data = [gen2_chain.holder_certificate, gen2_chain.member_state_certificate, b"\x00" * 10]
    _, opened = chain(gen2_chain.store, Generation.GEN2_V1, data)
    assert opened[0] is None
    assert opened[1].key_id == MEMBER_STATE_2
    assert opened[2] is None


def test_chain_rejects_forged_certificate(gen2_chain) -> None:
    forger = ec_key()
    forged = gen2_certificate(ec_key(), forger, HOLDER_2, ROOT_2)
    extended, opened = chain(gen2_chain.store, Generation.GEN2_V1, [forged])
    assert opened == [None]
    assert extended.lookup(Generation.GEN2_V1, HOLDER_2) is None
