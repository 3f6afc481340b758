import hashlib
import io

import cbor2
import pytest
from hypothesis import given
from hypothesis import strategies as st

from dan_wallet.errors import BuilderMisuse, EncodingFault, MalformedInput
from dan_wallet.hashing import (
    ENGINE_HASH_DOMAIN,
    DomainSeparatedHasher,
    EngineHashDomainLabel,
    HashDomain,
    Hasher32,
    Hasher64,
    hasher,
    hasher32,
    hasher64,
    template_hasher32,
    _HashWriter,
    template_hasher64,
)
from dan_wallet.types.core import Hash

# BLAKE2b-256 / BLAKE2b-512 over u64_le(30) || "com.tari.dan.engine.v0.Template"
EMPTY_TEMPLATE_32 = "63c8df0a7141786371d48b79e365088696becde65fa16ddae08bced03b8433ad"
EMPTY_TEMPLATE_64 = (
    "38bdde2023d94d6a857232bb51facbe69d94e952b192903649bf45c121ea8e78"
    "1ce8b14db70b566339790aeff4ae6fd37da0bbc138f289a4908f6dd5dd875f37"
)
# Same construction under ComponentAddress, fed the CBOR byte string b"abc".
ABC_COMPONENT_32 = "6d7838e1fced4d165567fcc509b8555082bf290953df762e6dc096338e56c740"
ABC_COMPONENT_64 = (
    "a86d45ca5859e8795297ab371f581885fd773f567016a938e1a84a9d46c7df4b"
    "283c529a9de3bee32611587011439dc1f6d1566f3d1c9b5dd281722bc486358b"
)

values = st.one_of(
    st.binary(max_size=64),
    st.text(max_size=32),
    st.integers(min_value=-(2**63), max_value=2**64 - 1),
    st.lists(st.binary(max_size=16), max_size=4),
)
labels = st.sampled_from(list(EngineHashDomainLabel))


def test_separation_tag_layout():
    tag = ENGINE_HASH_DOMAIN.separation_tag("ComponentAddress")
    text = b"com.tari.dan.engine.v0.ComponentAddress"
    assert tag == len(text).to_bytes(8, "little") + text
    assert HashDomain("x.y", 3).tag() == "x.y.v3"


def test_known_digests_for_both_widths():
    assert template_hasher32().result().hex() == EMPTY_TEMPLATE_32
    assert template_hasher64().result().hex() == EMPTY_TEMPLATE_64
    assert hasher32(EngineHashDomainLabel.ComponentAddress).digest(b"abc").hex() == ABC_COMPONENT_32
    assert hasher64(EngineHashDomainLabel.ComponentAddress).digest(b"abc").hex() == ABC_COMPONENT_64


def test_widths_are_independent():
    short = hasher32(EngineHashDomainLabel.Output).digest(b"payload")
    long = hasher64(EngineHashDomainLabel.Output).digest(b"payload")
    assert isinstance(short, Hash) and len(bytes(short)) == 32
    assert isinstance(long, bytes) and len(long) == 64
    assert long[:32] != bytes(short)


def test_labels_are_unique_and_stable():
    strings = [label.as_label() for label in EngineHashDomainLabel]
    assert len(strings) == len(set(strings))
    assert EngineHashDomainLabel.ComponentAddress.as_label() == "ComponentAddress"
    assert EngineHashDomainLabel.InstructionSignature.as_label() == "InstructionSignature"
    assert EngineHashDomainLabel.Transaction.as_label() == "Transaction"


def test_hasher_alias_is_short_width():
    assert hasher is hasher32
    assert isinstance(hasher(EngineHashDomainLabel.Template), Hasher32)
    assert isinstance(hasher64(EngineHashDomainLabel.Template), Hasher64)


def test_update_and_chain_agree():
    a = hasher32(EngineHashDomainLabel.RandomBytes)
    a.update(b"x")
    a.update(7)
    b = hasher32(EngineHashDomainLabel.RandomBytes).chain(b"x").chain(7)
    assert a.result() == b.result()


def test_copy_forks_state():
    base = hasher32(EngineHashDomainLabel.UuidOutput).chain(b"prefix")
    fork = base.copy()
    assert fork.chain(b"a").result() != base.chain(b"b").result()


def test_finalized_hasher_rejects_reuse():
    h = hasher32(EngineHashDomainLabel.Template)
    h.result()
    with pytest.raises(BuilderMisuse):
        h.update(b"more")
    with pytest.raises(BuilderMisuse):
        h.result()


def test_unencodable_value_is_encoding_fault():
    with pytest.raises(EncodingFault):
        hasher32(EngineHashDomainLabel.Template).update(object())


def test_domain_separated_hasher_length_prefixes_inputs():
    d = HashDomain("com.example", 1)
    split_a = DomainSeparatedHasher(d, "t").chain(b"ab").chain(b"c").finalize()
    split_b = DomainSeparatedHasher(d, "t").chain(b"a").chain(b"bc").finalize()
    assert split_a != split_b
    assert len(split_a) == 64
    h = DomainSeparatedHasher(d, "t", digest_size=32)
    assert len(h.finalize()) == 32
    with pytest.raises(BuilderMisuse):
        h.finalize()


@given(values)
def test_determinism(v):
    label = EngineHashDomainLabel.Output
    assert hasher32(label).chain(v).result() == hasher32(label).chain(v).result()
    assert hasher64(label).chain(v).result() == hasher64(label).chain(v).result()


@given(labels, labels, values)
def test_domain_separation(l1, l2, v):
    if l1 is l2:
        return
    assert hasher32(l1).chain(v).result() != hasher32(l2).chain(v).result()


@given(values, values)
def test_order_sensitivity(a, b):
    if a == b:
        return
    label = EngineHashDomainLabel.Template
    assert hasher32(label).chain(a).chain(b).result() != hasher32(label).chain(b).chain(a).result()


@given(labels, labels, values)
def test_domain_separation_long_width(l1, l2, v):
    if l1 is l2:
        return
    assert hasher64(l1).chain(v).result() != hasher64(l2).chain(v).result()


@given(values, values)
def test_order_sensitivity_long_width(a, b):
    if a == b:
        return
    label = EngineHashDomainLabel.Template
    assert hasher64(label).chain(a).chain(b).result() != hasher64(label).chain(b).chain(a).result()


def test_hash_writer_is_a_writable_raw_stream():
    state = hashlib.blake2b(digest_size=32)
    writer = _HashWriter(state)
    assert isinstance(writer, io.RawIOBase)
    assert writer.writable()
    cbor2.dump({"k": [b"abc", 7]}, writer, canonical=True)
    expected = hashlib.blake2b(cbor2.dumps({"k": [b"abc", 7]}, canonical=True), digest_size=32)
    assert state.digest() == expected.digest()


@pytest.mark.parametrize("label", ["ComponentAddress", None, 3])
def test_hashers_only_take_registered_labels(label):
    with pytest.raises(MalformedInput):
        Hasher32(label)
    with pytest.raises(MalformedInput):
        Hasher64(label)
