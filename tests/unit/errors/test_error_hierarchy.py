"""Unit tests for the broadcaster error hierarchy."""

from __future__ import annotations

import json

import pytest

from eiffel_broadcaster.config.validation import ConfigError, InvalidSettingValueError, MissingRequiredSettingError
from eiffel_broadcaster.errors import (
    BroadcasterError,
    BrokerConnectionError,
    CanonicalizationError,
    ConfigurationError,
    CredentialNotFoundError,
    CryptoError,
    EventValidationFailedError,
    InvalidCredentialConfigurationError,
    InvalidKeyError,
    InvariantViolationError,
    SchemaUnavailableError,
    SignatureFailedError,
    TransportError,
    UnsupportedAlgorithmError,
    ValidationError,
)


class TestBroadcasterError:
    def test_message_is_stored(self) -> None:
        err = BroadcasterError("something went wrong")
        assert err.message == "something went wrong"

    def test_default_code(self) -> None:
        assert BroadcasterError("m").code == "broadcaster_error"

    def test_custom_code(self) -> None:
        assert BroadcasterError("m", code="custom").code == "custom"

    def test_to_dict_basic(self) -> None:
        err = BroadcasterError("m", code="my_code", detail={"key": "val"})
        assert err.to_dict() == {
            "error": "BroadcasterError",
            "code": "my_code",
            "message": "m",
            "retryable": False,
            "detail": {"key": "val"},
        }

    def test_to_dict_omits_empty_detail(self) -> None:
        assert "detail" not in TransportError("m").to_dict()
        assert TransportError("m").to_dict()["retryable"] is True

    def test_to_dict_includes_cause(self) -> None:
        err = BroadcasterError("wrapper", cause=ValueError("original"))
        assert err.to_dict()["cause"] == "ValueError: original"

    def test_cause_is_chained(self) -> None:
        cause = ValueError("original")
        assert BroadcasterError("wrapper", cause=cause).__cause__ is cause

    def test_detail_is_copied(self) -> None:
        detail = {"n": 1}
        BroadcasterError("m", detail=detail).detail["n"] = 2
        assert detail == {"n": 1}

    def test_str_has_code_and_message(self) -> None:
        assert str(InvalidKeyError("bad password")) == "[invalid_key] bad password"

    def test_to_json(self) -> None:
        parsed = json.loads(BroadcasterError("m", detail={"n": 1}).to_json())
        assert parsed["message"] == "m"
        assert parsed["detail"] == {"n": 1}

    def test_repr(self) -> None:
        assert repr(InvalidKeyError("bad")) == "InvalidKeyError(code='invalid_key', message='bad')"


class TestHierarchy:
    @pytest.mark.parametrize(
        ("error_cls", "parent"),
        [
            (InvalidCredentialConfigurationError, ConfigurationError),
            (CredentialNotFoundError, ConfigurationError),
            (ConfigError, ConfigurationError),
            (UnsupportedAlgorithmError, CryptoError),
            (InvalidKeyError, CryptoError),
            (SignatureFailedError, CryptoError),
            (CanonicalizationError, CryptoError),
            (SchemaUnavailableError, ValidationError),
            (EventValidationFailedError, ValidationError),
            (BrokerConnectionError, TransportError),
            (InvariantViolationError, BroadcasterError),
        ],
    )
    def test_subclass(self, error_cls: type, parent: type) -> None:
        assert issubclass(error_cls, parent)
        assert issubclass(error_cls, BroadcasterError)

    def test_only_transport_errors_are_retryable(self) -> None:
        assert TransportError.retryable is True
        assert BrokerConnectionError.retryable is True
        for error_cls in (ConfigurationError, CryptoError, ValidationError, InvariantViolationError):
            assert error_cls.retryable is False


class TestSpecificErrors:
    def test_credential_not_found_message(self) -> None:
        err = CredentialNotFoundError("abc")
        assert err.credential_id == "abc"
        assert err.message == "No credentials with the id abc could be found"

    def test_unsupported_algorithm_attributes(self) -> None:
        err = UnsupportedAlgorithmError("nope", key_type="Ed25519PrivateKey", hash_algorithm="SHA-256")
        assert err.key_type == "Ed25519PrivateKey"
        assert err.hash_algorithm == "SHA-256"

    def test_schema_unavailable_default_message(self) -> None:
        err = SchemaUnavailableError("EiffelFooEvent", "1.0.0")
        assert "EiffelFooEvent@1.0.0" in err.message
        assert (err.event_type, err.event_version) == ("EiffelFooEvent", "1.0.0")

    def test_validation_failed_carries_all_errors_and_document(self) -> None:
        errors = [{"message": "a"}, {"message": "b"}]
        document = {"meta": {}}
        err = EventValidationFailedError(errors, document)
        assert err.errors == errors
        assert err.document is document
        assert "a; b" in err.message
        assert err.to_dict()["errors"] == errors

    def test_broker_connection_error_uri(self) -> None:
        err = BrokerConnectionError("amqp://broker")
        assert err.uri == "amqp://broker"
        assert "amqp://broker" in err.message

    def test_invalid_setting_value(self) -> None:
        err = InvalidSettingValueError("server_uri", "http://x", "bad scheme")
        assert err.setting_name == "server_uri"
        assert err.reason == "bad scheme"
        assert err.detail == {"setting": "server_uri", "reason": "bad scheme"}
        assert "'http://x'" in err.message
        assert isinstance(err, ConfigurationError)

    def test_invalid_password_value_is_masked(self) -> None:
        err = InvalidSettingValueError("EIFFEL_USER_PASSWORD", "hunter2", "too short")
        assert "hunter2" not in err.message
        assert "hunter2" not in err.to_json()

    def test_missing_required_setting(self) -> None:
        err = MissingRequiredSettingError("EIFFEL_SERVER_URI")
        assert err.setting_name == "EIFFEL_SERVER_URI"
        assert "EIFFEL_SERVER_URI" in err.message
        assert err.code == "missing_required_setting"
