"""Testing helpers – generated credentials, fakes and pytest fixtures."""
from eiffel_broadcaster.testing.credentials import (
    GeneratedCredential,
    build_keystore,
    generate_credential,
    generate_private_key,
    self_signed_certificate,
)
from eiffel_broadcaster.testing.fakes import RecordingDeliveryEngine

__all__ = [
    "GeneratedCredential",
    "RecordingDeliveryEngine",
    "build_keystore",
    "generate_credential",
    "generate_private_key",
    "self_signed_certificate",
]
