"""Events – object model, canonical form, algorithm tables and factory."""
from eiffel_broadcaster.events.algorithms import HashAlgorithm, SignatureAlgorithm
from eiffel_broadcaster.events.canonical import canonicalize, canonicalize_document, format_number
from eiffel_broadcaster.events.factory import (
    PARIS_EDITION_VERSIONS,
    EventFactory,
    EventVersionResolver,
    StaticVersionResolver,
)
from eiffel_broadcaster.events.model import (
    Event,
    IntegrityProtection,
    Link,
    LinkType,
    Meta,
    Security,
    SequenceProtection,
    Source,
)
from eiffel_broadcaster.events.source import HostSourceProvider, SourceProvider

__all__ = [
    "PARIS_EDITION_VERSIONS",
    "Event",
    "EventFactory",
    "EventVersionResolver",
    "HashAlgorithm",
    "HostSourceProvider",
    "IntegrityProtection",
    "Link",
    "LinkType",
    "Meta",
    "Security",
    "SequenceProtection",
    "SignatureAlgorithm",
    "Source",
    "SourceProvider",
    "StaticVersionResolver",
    "canonicalize",
    "canonicalize_document",
    "format_number",
]
