"""Unit tests for canonical JSON serialisation."""

from __future__ import annotations

import json
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from eiffel_broadcaster.errors import CanonicalizationError
from eiffel_broadcaster.events import (
    Event,
    IntegrityProtection,
    Meta,
    Security,
    canonicalize,
    canonicalize_document,
    format_number,
)

json_scalars = st.none() | st.booleans() | st.integers(-(2**63), 2**63) | st.text() | st.floats(
    allow_nan=False, allow_infinity=False
)
json_values = st.recursive(
    json_scalars,
    lambda children: st.lists(children, max_size=4) | st.dictionaries(st.text(), children, max_size=4),
    max_leaves=20,
)


def _reversed_insertion(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _reversed_insertion(value[k]) for k in reversed(list(value))}
    if isinstance(value, list):
        return [_reversed_insertion(v) for v in value]
    return value


def _event(data: dict[str, Any]) -> Event:
    return Event(
        meta=Meta(type="EiffelActivityTriggeredEvent", version="4.0.0", id="d0f6f9f8-3c2b-4f0e-9a52-6f1b0c7e8a11", time=1),
        data=data,
    )


class TestCanonicalizeDocument:
    def test_sorted_keys_without_whitespace(self) -> None:
        assert canonicalize_document({"b": 1, "a": [1, 2], "c": {"z": None, "y": True}}) == (
            b'{"a":[1,2],"b":1,"c":{"y":true,"z":null}}'
        )

    def test_non_ascii_is_utf8(self) -> None:
        assert canonicalize_document({"name": "bygge-åäö"}) == '{"name":"bygge-åäö"}'.encode()

    def test_integral_floats_become_integers(self) -> None:
        assert canonicalize_document({"n": 2.0, "m": 2.5}) == b'{"m":2.5,"n":2}'

    def test_booleans_are_not_numbers(self) -> None:
        assert canonicalize_document([True, False, 1]) == b"[true,false,1]"

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), object(), {1: "int key"}])
    def test_unencodable_values(self, value: Any) -> None:
        with pytest.raises(CanonicalizationError):
            canonicalize_document({"v": value})

    def test_keys_are_ordered_by_utf16_code_units(self) -> None:
        # U+1F600 is encoded as the surrogate pair D83D DE00, which sorts before U+E000.
        document = {"\ue000": 1, "\U0001F600": 2, "a": 3}
        assert canonicalize_document(document) == '{"a":3,"\U0001F600":2,"\ue000":1}'.encode()

    def test_control_characters_are_escaped(self) -> None:
        assert canonicalize_document(["\n\u0001\"\\"]) == b'["\\n\\u0001\\"\\\\"]'

    def test_numbers_use_ecmascript_form(self) -> None:
        assert canonicalize_document({"a": 1e-7, "b": 1e16, "c": -0.0}) == b'{"a":1e-7,"b":10000000000000000,"c":0}'

    def test_large_integers_are_written_as_doubles(self) -> None:
        assert canonicalize_document([2**53 - 1, 2**70]) == b"[9007199254740991,1.1805916207174113e+21]"

    @given(json_values)
    def test_output_is_valid_json(self, value: Any) -> None:
        json.loads(canonicalize_document(value))

    @given(st.dictionaries(st.text(), json_values, max_size=6))
    def test_insertion_order_does_not_matter(self, data: dict[str, Any]) -> None:
        assert canonicalize(_event(data)) == canonicalize(_event(_reversed_insertion(data)))


class TestCanonicalizeEvent:
    def test_requires_empty_signature(self) -> None:
        event = _event({"name": "build"})
        event.meta.security = Security(
            author_identity="CN=test",
            integrity_protection=IntegrityProtection(alg="ES256", signature="c2lnbmF0dXJl"),
        )
        with pytest.raises(CanonicalizationError, match="must be empty"):
            canonicalize(event)

    def test_empty_signature_is_included(self) -> None:
        event = _event({"name": "build"})
        event.meta.security = Security(
            author_identity="CN=test",
            integrity_protection=IntegrityProtection(alg="ES256"),
        )
        payload = json.loads(canonicalize(event))
        assert payload["meta"]["security"]["integrityProtection"] == {"alg": "ES256", "signature": ""}

    def test_unsigned_event(self) -> None:
        payload = canonicalize(_event({"name": "build"}))
        assert payload.startswith(b'{"data":{"name":"build"},"links":[],"meta":{')


class TestFormatNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0.0, "0"),
            (-0.0, "0"),
            (1.0, "1"),
            (-2.5, "-2.5"),
            (0.001, "0.001"),
            (0.000001, "0.000001"),
            (1e-7, "1e-7"),
            (123.456, "123.456"),
            (1.5e16, "15000000000000000"),
            (1e20, "100000000000000000000"),
            (1e21, "1e+21"),
            (1.25e22, "1.25e+22"),
            (-3.4e-10, "-3.4e-10"),
            (5e-324, "5e-324"),
            (1.7976931348623157e308, "1.7976931348623157e+308"),
            (333333333.33333329, "333333333.3333333"),
        ],
    )
    def test_ecmascript_formatting(self, value: float, expected: str) -> None:
        assert format_number(value) == expected

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_round_trips(self, value: float) -> None:
        assert float(format_number(value)) == value

    def test_infinity_rejected(self) -> None:
        with pytest.raises(ValueError):
            format_number(float("inf"))
