"""Signing – key extraction, key cache and event signers."""
from eiffel_broadcaster.signing.cache import SigningKeyCache
from eiffel_broadcaster.signing.keys import SigningInfo, extract_signing_info
from eiffel_broadcaster.signing.signer import EventSigner, SystemEventSigner, UserEventSigner, sign_event
from eiffel_broadcaster.signing.verify import verify_event

__all__ = [
    "EventSigner",
    "SigningInfo",
    "SigningKeyCache",
    "SystemEventSigner",
    "UserEventSigner",
    "extract_signing_info",
    "sign_event",
    "verify_event",
]
