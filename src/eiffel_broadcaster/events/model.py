"""Events – the Eiffel event object model.

An event has three regions: ``meta`` (identity, type, version, time and the
optional ``source``/``security`` blocks), ``links`` (typed references to other
events) and a type-specific ``data`` payload.  ``to_dict`` produces the wire
form; ``from_dict`` accepts any event document, including ones authored by
hand for event types without a dedicated factory entry.
"""
from __future__ import annotations

import dataclasses
import json
from collections import Counter
from enum import Enum
from typing import Any
from uuid import uuid4

from eiffel_broadcaster.clock import epoch_millis
from eiffel_broadcaster.errors import InvariantViolationError


class LinkType(str, Enum):
    """Link types defined by the Eiffel vocabulary."""

    ACTIVITY_EXECUTION = "ACTIVITY_EXECUTION"
    ARTIFACT = "ARTIFACT"
    CAUSE = "CAUSE"
    COMPOSITION = "COMPOSITION"
    CONFIGURATION = "CONFIGURATION"
    CONTEXT = "CONTEXT"
    DERESOLVED_ISSUE = "DERESOLVED_ISSUE"
    ELEMENT = "ELEMENT"
    ENVIRONMENT = "ENVIRONMENT"
    FLOW_CONTEXT = "FLOW_CONTEXT"
    IUT = "IUT"
    MODIFIED_ANNOUNCEMENT = "MODIFIED_ANNOUNCEMENT"
    PARTIALLY_RESOLVED_ISSUE = "PARTIALLY_RESOLVED_ISSUE"
    PREVIOUS_ACTIVITY_EXECUTION = "PREVIOUS_ACTIVITY_EXECUTION"
    PREVIOUS_VERSION = "PREVIOUS_VERSION"
    RESOLVED_ISSUE = "RESOLVED_ISSUE"
    REUSED_ARTIFACT = "REUSED_ARTIFACT"
    SUBJECT = "SUBJECT"
    TERC = "TERC"
    TEST_CASE_EXECUTION = "TEST_CASE_EXECUTION"
    TEST_SUITE_EXECUTION = "TEST_SUITE_EXECUTION"
    VERIFICATION_BASIS = "VERIFICATION_BASIS"


def _drop_empty(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None and v != [] and v != {}}


def _link_multiset(links: list["Link"]) -> Counter[tuple[tuple[str, Any], ...]]:
    return Counter(tuple(sorted(link.to_dict().items())) for link in links)


@dataclasses.dataclass(frozen=True)
class Link:
    """A typed reference to another event.  Duplicates are allowed."""

    type: str
    target: str
    domain_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        link_type = self.type.value if isinstance(self.type, LinkType) else self.type
        return _drop_empty({"type": link_type, "target": self.target, "domainId": self.domain_id})

    @classmethod
    def from_dict(cls, document: dict[str, Any]) -> "Link":
        return cls(type=document["type"], target=document["target"], domain_id=document.get("domainId"))


@dataclasses.dataclass
class Source:
    """Describes the system that produced an event."""

    domain_id: str | None = None
    host: str | None = None
    name: str | None = None
    serializer: str | None = None
    uri: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _drop_empty({
            "domainId": self.domain_id,
            "host": self.host,
            "name": self.name,
            "serializer": self.serializer,
            "uri": self.uri,
        })

    @classmethod
    def from_dict(cls, document: dict[str, Any]) -> "Source":
        return cls(
            domain_id=document.get("domainId"),
            host=document.get("host"),
            name=document.get("name"),
            serializer=document.get("serializer"),
            uri=document.get("uri"),
        )


@dataclasses.dataclass
class SequenceProtection:
    sequence_name: str
    position: int

    def to_dict(self) -> dict[str, Any]:
        return {"sequenceName": self.sequence_name, "position": self.position}


@dataclasses.dataclass
class IntegrityProtection:
    """Signature, algorithm and optional public key of a signed event.

    ``signature`` is base64 and is the empty string while the canonical
    payload is computed.
    """

    alg: str
    signature: str = ""
    public_key: str | None = None

    def to_dict(self) -> dict[str, Any]:
        alg = self.alg.value if isinstance(self.alg, Enum) else self.alg
        values: dict[str, Any] = {"signature": self.signature, "alg": alg}
        if self.public_key:
            values["publicKey"] = self.public_key
        return values


@dataclasses.dataclass
class Security:
    """The ``meta.security`` block.  Its presence means the event was signed."""

    author_identity: str
    integrity_protection: IntegrityProtection | None = None
    sequence_protection: list[SequenceProtection] = dataclasses.field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return _drop_empty({
            "authorIdentity": self.author_identity,
            "integrityProtection": self.integrity_protection.to_dict() if self.integrity_protection else None,
            "sequenceProtection": [s.to_dict() for s in self.sequence_protection],
        })

    @classmethod
    def from_dict(cls, document: dict[str, Any]) -> "Security":
        protection = document.get("integrityProtection")
        return cls(
            author_identity=document.get("authorIdentity", ""),
            integrity_protection=IntegrityProtection(
                alg=protection.get("alg", ""),
                signature=protection.get("signature", ""),
                public_key=protection.get("publicKey"),
            ) if protection else None,
            sequence_protection=[
                SequenceProtection(s["sequenceName"], s["position"])
                for s in document.get("sequenceProtection", [])
            ],
        )


@dataclasses.dataclass
class Meta:
    """Event metadata.  ``id``, ``type`` and ``version`` are write-once."""

    type: str
    version: str
    id: str = dataclasses.field(default_factory=lambda: str(uuid4()))
    time: int = dataclasses.field(default_factory=epoch_millis)
    tags: list[str] = dataclasses.field(default_factory=list)
    source: Source | None = None
    security: Security | None = None
    schema_uri: str | None = None

    _WRITE_ONCE = frozenset({"id", "type", "version"})

    def __post_init__(self) -> None:
        if not self.type:
            raise InvariantViolationError("meta.type must be a non-empty string")
        if not self.version:
            raise InvariantViolationError("meta.version must be a non-empty string")

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self._WRITE_ONCE and name in self.__dict__:
            raise InvariantViolationError(f"meta.{name} can't be changed after construction")
        super().__setattr__(name, value)

    def to_dict(self) -> dict[str, Any]:
        return _drop_empty({
            "id": self.id,
            "time": self.time,
            "type": self.type,
            "version": self.version,
            "tags": list(self.tags),
            "source": (self.source.to_dict() or None) if self.source else None,
            "security": self.security.to_dict() if self.security else None,
            "schemaUri": self.schema_uri,
        })


@dataclasses.dataclass(eq=False)
class Event:
    """An Eiffel event.

    Equality compares links as a multiset: their order matters for display
    but not for identity of content.
    """

    meta: Meta
    data: dict[str, Any] = dataclasses.field(default_factory=dict)
    links: list[Link] = dataclasses.field(default_factory=list)

    __hash__ = None  # type: ignore[assignment]

    @property
    def type(self) -> str:
        return self.meta.type

    @property
    def version(self) -> str:
        return self.meta.version

    @property
    def id(self) -> str:
        return self.meta.id

    def add_link(self, link_type: str, target: str, domain_id: str | None = None) -> Link:
        link = Link(link_type, target, domain_id)
        self.links.append(link)
        return link

    def to_dict(self) -> dict[str, Any]:
        return {
            "meta": self.meta.to_dict(),
            "links": [link.to_dict() for link in self.links],
            "data": self.data,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, document: dict[str, Any]) -> "Event":
        """Build an event from its JSON form.

        Missing ``meta.id``/``meta.time`` are generated; missing
        ``meta.type``/``meta.version`` raise :class:`InvariantViolationError`.
        """
        if not isinstance(document, dict) or not isinstance(document.get("meta"), dict):
            raise InvariantViolationError("An event document must be an object with a meta object")
        raw_meta = document["meta"]
        meta_kwargs: dict[str, Any] = {
            "type": raw_meta.get("type", ""),
            "version": raw_meta.get("version", ""),
            "tags": list(raw_meta.get("tags", [])),
            "source": Source.from_dict(raw_meta["source"]) if raw_meta.get("source") else None,
            "security": Security.from_dict(raw_meta["security"]) if raw_meta.get("security") else None,
            "schema_uri": raw_meta.get("schemaUri"),
        }
        if raw_meta.get("id"):
            meta_kwargs["id"] = raw_meta["id"]
        if raw_meta.get("time") is not None:
            meta_kwargs["time"] = raw_meta["time"]
        return cls(
            meta=Meta(**meta_kwargs),
            data=dict(document.get("data") or {}),
            links=[Link.from_dict(link) for link in document.get("links") or []],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Event):
            return NotImplemented
        return (
            self.meta.to_dict() == other.meta.to_dict()
            and self.data == other.data
            and _link_multiset(self.links) == _link_multiset(other.links)
        )


__all__ = [
    "Event",
    "IntegrityProtection",
    "Link",
    "LinkType",
    "Meta",
    "Security",
    "SequenceProtection",
    "Source",
]
