"""Events – hash strengths and signature algorithm identifiers.

``SignatureAlgorithm`` mirrors the ``meta.security.integrityProtection.alg``
enumeration of the Eiffel protocol (JWA names).  The signer only ever picks
ES* or RS*; PS* can be verified, HS* is reserved.

ECDSA signatures are DER-encoded, matching ``SHA256withECDSA`` style
signatures produced by JCA-based Eiffel tooling.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from eiffel_broadcaster.errors import SignatureFailedError, UnsupportedAlgorithmError


class HashAlgorithm(str, Enum):
    """The supported hash strengths when signing events."""

    SHA_256 = "SHA-256"
    SHA_384 = "SHA-384"
    SHA_512 = "SHA-512"

    @classmethod
    def from_string(cls, value: str) -> "HashAlgorithm":
        for member in cls:
            if member.value == value:
                return member
        choices = ", ".join(m.value for m in cls)
        raise ValueError(
            f'The string "{value}" isn\'t a supported hash algorithm. '
            f"Please choose one of the following: {choices}"
        )

    @property
    def bits(self) -> int:
        return int(self.value.split("-")[1])

    def hash_instance(self) -> hashes.HashAlgorithm:
        return {256: hashes.SHA256, 384: hashes.SHA384, 512: hashes.SHA512}[self.bits]()

    def __str__(self) -> str:
        return self.value


class SignatureAlgorithm(str, Enum):
    """Eiffel ``integrityProtection.alg`` identifiers."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    PS256 = "PS256"
    PS384 = "PS384"
    PS512 = "PS512"

    @property
    def family(self) -> str:
        return self.value[:2]

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return HashAlgorithm(f"SHA-{self.value[2:]}")

    @classmethod
    def for_key(cls, key: Any, hash_algorithm: HashAlgorithm) -> "SignatureAlgorithm":
        """Select the algorithm implied by *key*'s type and *hash_algorithm*.

        Raises:
            UnsupportedAlgorithmError: for keys other than EC and RSA.
        """
        if isinstance(key, ec.EllipticCurvePrivateKey):
            family = "ES"
        elif isinstance(key, rsa.RSAPrivateKey):
            family = "RS"
        else:
            raise UnsupportedAlgorithmError(
                f"Keys of type {type(key).__name__} can't be used to sign events",
                key_type=type(key).__name__,
                hash_algorithm=hash_algorithm.value,
            )
        return cls(f"{family}{hash_algorithm.bits}")

    def sign(self, key: Any, payload: bytes) -> bytes:
        """Sign *payload* with the private *key*.

        Raises:
            UnsupportedAlgorithmError: when *key* does not fit this algorithm.
            SignatureFailedError: when the primitive fails.
        """
        digest = self.hash_algorithm.hash_instance()
        try:
            if self.family == "ES" and isinstance(key, ec.EllipticCurvePrivateKey):
                return key.sign(payload, ec.ECDSA(digest))
            if self.family == "RS" and isinstance(key, rsa.RSAPrivateKey):
                return key.sign(payload, padding.PKCS1v15(), digest)
            if self.family == "PS" and isinstance(key, rsa.RSAPrivateKey):
                return key.sign(payload, self._pss_padding(), digest)
        except (ValueError, TypeError) as exc:
            raise SignatureFailedError(f"Signing with {self.value} failed: {exc}", cause=exc) from exc
        raise UnsupportedAlgorithmError(
            f"{self.value} can't be used with a key of type {type(key).__name__}",
            key_type=type(key).__name__,
            hash_algorithm=self.hash_algorithm.value,
        )

    def verify(self, public_key: Any, payload: bytes, signature: bytes) -> bool:
        """Return ``True`` if *signature* over *payload* matches *public_key*."""
        digest = self.hash_algorithm.hash_instance()
        try:
            if self.family == "ES" and isinstance(public_key, ec.EllipticCurvePublicKey):
                public_key.verify(signature, payload, ec.ECDSA(digest))
            elif self.family == "RS" and isinstance(public_key, rsa.RSAPublicKey):
                public_key.verify(signature, payload, padding.PKCS1v15(), digest)
            elif self.family == "PS" and isinstance(public_key, rsa.RSAPublicKey):
                public_key.verify(signature, payload, self._pss_padding(), digest)
            else:
                raise UnsupportedAlgorithmError(
                    f"{self.value} can't be verified with a key of type {type(public_key).__name__}",
                    key_type=type(public_key).__name__,
                )
        except InvalidSignature:
            return False
        return True

    def _pss_padding(self) -> padding.PSS:
        return padding.PSS(
            mgf=padding.MGF1(self.hash_algorithm.hash_instance()),
            salt_length=self.hash_algorithm.bits // 8,
        )


__all__ = ["HashAlgorithm", "SignatureAlgorithm"]
