"""Error hierarchy – public re-export surface.

Hierarchy::

    BroadcasterError
    ├── ConfigurationError              (configuration.py)
    │   ├── InvalidCredentialConfigurationError
    │   └── CredentialNotFoundError
    ├── CryptoError                     (crypto.py)
    │   ├── UnsupportedAlgorithmError
    │   ├── InvalidKeyError
    │   ├── SignatureFailedError
    │   └── CanonicalizationError
    ├── ValidationError                 (validation.py)
    │   ├── SchemaUnavailableError
    │   └── EventValidationFailedError
    ├── TransportError                  (transport.py)
    │   └── BrokerConnectionError
    └── InvariantViolationError         (base.py)

Only ``TransportError`` is ``retryable``; everything else signals a problem
that repeating the same call will not fix.
"""

from eiffel_broadcaster.errors.base import BroadcasterError, InvariantViolationError
from eiffel_broadcaster.errors.configuration import (
    ConfigurationError,
    CredentialNotFoundError,
    InvalidCredentialConfigurationError,
)
from eiffel_broadcaster.errors.crypto import (
    CanonicalizationError,
    CryptoError,
    InvalidKeyError,
    SignatureFailedError,
    UnsupportedAlgorithmError,
)
from eiffel_broadcaster.errors.transport import BrokerConnectionError, TransportError
from eiffel_broadcaster.errors.validation import (
    EventValidationFailedError,
    SchemaUnavailableError,
    ValidationError,
)

__all__ = [
    "BroadcasterError",
    "BrokerConnectionError",
    "CanonicalizationError",
    "ConfigurationError",
    "CredentialNotFoundError",
    "CryptoError",
    "EventValidationFailedError",
    "InvalidCredentialConfigurationError",
    "InvalidKeyError",
    "InvariantViolationError",
    "SchemaUnavailableError",
    "SignatureFailedError",
    "TransportError",
    "UnsupportedAlgorithmError",
    "ValidationError",
]
