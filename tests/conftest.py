from __future__ import annotations

from dataclasses import dataclass

import pytest

from builders import ec_key, ec_point, gen1_certificate, gen2_certificate, rsa_key
from tachoparse.core.base.types import Generation
from tachoparse.core.pki import CURVES, Certificate, CertificateStore, EcKey, RsaKey

ROOT_1 = bytes.fromhex("FD45432001FFFF01")
MEMBER_STATE_1 = bytes.fromhex("0D4D53200001FF01")
HOLDER_1 = bytes.fromhex("0D00000000000101")

ROOT_2 = bytes.fromhex("FD45432002FFFF02")
MEMBER_STATE_2 = bytes.fromhex("0D4D53200002FF02")
HOLDER_2 = bytes.fromhex("0D00000000000202")


@dataclass
class Chain:
    """A root key in a store and two certificates chained off it."""

    store: CertificateStore
    member_state_certificate: bytes
    holder_certificate: bytes
    holder_key: object


@pytest.fixture(scope="session")
def gen1_chain() -> Chain:
    root, member_state, holder = rsa_key(), rsa_key(), rsa_key()
    numbers = root.public_key().public_numbers()
    store = CertificateStore([
        Certificate(ROOT_1, Generation.GEN1, RsaKey(numbers.n, numbers.e)),
    ])
    return Chain(
        store=store,
        member_state_certificate=gen1_certificate(member_state, root, MEMBER_STATE_1, ROOT_1),
        holder_certificate=gen1_certificate(holder, member_state, HOLDER_1, MEMBER_STATE_1),
        holder_key=holder,
    )


@pytest.fixture(scope="session")
def gen2_chain() -> Chain:
    root, member_state, holder = ec_key(), ec_key(), ec_key()
    store = CertificateStore([
        Certificate(
            ROOT_2, Generation.GEN2_V1, EcKey(CURVES["brainpoolP256r1"], ec_point(root)),
        ),
    ])
    return Chain(
        store=store,
        member_state_certificate=gen2_certificate(member_state, root, MEMBER_STATE_2, ROOT_2),
        holder_certificate=gen2_certificate(holder, member_state, HOLDER_2, MEMBER_STATE_2),
        holder_key=holder,
    )
