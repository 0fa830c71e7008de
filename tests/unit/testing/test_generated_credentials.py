"""Unit tests for the testing helpers: generated credentials and RecordingDeliveryEngine."""
from __future__ import annotations

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, rsa
from cryptography.hazmat.primitives.serialization import pkcs12

from eiffel_broadcaster.clock import FrozenClock
from eiffel_broadcaster.credentials import CredentialScope
from eiffel_broadcaster.delivery import ConnectionSettings, OutboundMessage
from eiffel_broadcaster.testing import RecordingDeliveryEngine, generate_credential, generate_private_key


class TestGenerateCredential:
    def test_defaults(self) -> None:
        generated = generate_credential()
        assert generated.credential.id == "signing-cert"
        assert generated.credential.scope is CredentialScope.GLOBAL
        assert isinstance(generated.private_key, ec.EllipticCurvePrivateKey)
        assert generated.identity == "O=Example,CN=eiffel-broadcaster-test"

    def test_keystore_opens_with_password(self) -> None:
        generated = generate_credential(password="s3cret")
        key, certificate, _ = pkcs12.load_key_and_certificates(generated.credential.keystore, b"s3cret")
        assert certificate == generated.certificate
        assert key is not None

    def test_keystore_without_password(self) -> None:
        generated = generate_credential(password=None)
        _, certificate, _ = pkcs12.load_key_and_certificates(generated.credential.keystore, None)
        assert certificate == generated.certificate

    @pytest.mark.parametrize(("size", "curve"), [(256, "secp256r1"), (384, "secp384r1"), (521, "secp521r1")])
    def test_ec_curves(self, size: int, curve: str) -> None:
        assert generate_private_key("EC", size).curve.name == curve

    def test_rsa(self) -> None:
        key = generate_private_key("rsa", 2048)
        assert isinstance(key, rsa.RSAPrivateKey)
        assert key.key_size == 2048

    def test_unknown_key_type(self) -> None:
        with pytest.raises(ValueError, match="Unsupported key type"):
            generate_private_key("DSA")


class TestRecordingDeliveryEngine:
    def test_never_starts_a_worker(self) -> None:
        engine = RecordingDeliveryEngine()
        engine.initialize(ConnectionSettings("amqp://mq"))
        engine.enqueue(OutboundMessage("eiffel", "rk", b"{}", FrozenClock().now()))
        assert engine._thread is None
        assert engine.pending() == 1

    def test_drain_is_fifo(self) -> None:
        engine = RecordingDeliveryEngine()
        for n in range(3):
            engine.enqueue(OutboundMessage("eiffel", f"rk.{n}", b"{}", FrozenClock().now()))
        assert [m.routing_key for m in engine.drain()] == ["rk.0", "rk.1", "rk.2"]
        assert engine.drain() == []
