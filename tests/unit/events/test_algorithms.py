"""Unit tests for hash and signature algorithm tables."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from eiffel_broadcaster.errors import UnsupportedAlgorithmError
from eiffel_broadcaster.events import HashAlgorithm, SignatureAlgorithm


@pytest.fixture(scope="module")
def ec_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="module")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


class TestHashAlgorithm:
    @pytest.mark.parametrize(
        ("value", "member", "bits"),
        [("SHA-256", HashAlgorithm.SHA_256, 256), ("SHA-384", HashAlgorithm.SHA_384, 384), ("SHA-512", HashAlgorithm.SHA_512, 512)],
    )
    def test_from_string(self, value: str, member: HashAlgorithm, bits: int) -> None:
        assert HashAlgorithm.from_string(value) is member
        assert member.bits == bits
        assert member.hash_instance().digest_size * 8 == bits
        assert str(member) == value

    def test_unknown_lists_choices(self) -> None:
        with pytest.raises(ValueError, match="Please choose one of the following: SHA-256, SHA-384, SHA-512"):
            HashAlgorithm.from_string("SHA-1")


class TestSignatureAlgorithmTable:
    @pytest.mark.parametrize(
        ("hash_alg", "expected"),
        [(HashAlgorithm.SHA_256, "ES256"), (HashAlgorithm.SHA_384, "ES384"), (HashAlgorithm.SHA_512, "ES512")],
    )
    def test_ec_keys(self, ec_key: ec.EllipticCurvePrivateKey, hash_alg: HashAlgorithm, expected: str) -> None:
        assert SignatureAlgorithm.for_key(ec_key, hash_alg).value == expected

    @pytest.mark.parametrize(
        ("hash_alg", "expected"),
        [(HashAlgorithm.SHA_256, "RS256"), (HashAlgorithm.SHA_384, "RS384"), (HashAlgorithm.SHA_512, "RS512")],
    )
    def test_rsa_keys(self, rsa_key: rsa.RSAPrivateKey, hash_alg: HashAlgorithm, expected: str) -> None:
        assert SignatureAlgorithm.for_key(rsa_key, hash_alg).value == expected

    def test_other_keys_are_unsupported(self) -> None:
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            SignatureAlgorithm.for_key(ed25519.Ed25519PrivateKey.generate(), HashAlgorithm.SHA_256)
        assert "Ed25519" in (exc_info.value.key_type or "")

    def test_family_and_hash(self) -> None:
        assert SignatureAlgorithm.PS384.family == "PS"
        assert SignatureAlgorithm.PS384.hash_algorithm is HashAlgorithm.SHA_384


class TestSignAndVerify:
    @pytest.mark.parametrize("alg", [SignatureAlgorithm.RS256, SignatureAlgorithm.PS256, SignatureAlgorithm.PS512])
    def test_rsa_round_trip(self, rsa_key: rsa.RSAPrivateKey, alg: SignatureAlgorithm) -> None:
        signature = alg.sign(rsa_key, b"payload")
        assert alg.verify(rsa_key.public_key(), b"payload", signature)
        assert not alg.verify(rsa_key.public_key(), b"payloae", signature)

    def test_ec_round_trip(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        signature = SignatureAlgorithm.ES256.sign(ec_key, b"payload")
        assert SignatureAlgorithm.ES256.verify(ec_key.public_key(), b"payload", signature)

    def test_hmac_is_reserved(self, rsa_key: rsa.RSAPrivateKey) -> None:
        with pytest.raises(UnsupportedAlgorithmError):
            SignatureAlgorithm.HS256.sign(rsa_key, b"payload")

    def test_key_family_mismatch(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        with pytest.raises(UnsupportedAlgorithmError):
            SignatureAlgorithm.RS256.sign(ec_key, b"payload")

    def test_verify_with_wrong_key_type(self, ec_key: ec.EllipticCurvePrivateKey) -> None:
        with pytest.raises(UnsupportedAlgorithmError):
            SignatureAlgorithm.RS256.verify(ec_key.public_key(), b"payload", b"sig")
