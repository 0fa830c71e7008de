"""Delivery – one-shot broker connection check."""
from __future__ import annotations

import asyncio
import dataclasses
import logging

from eiffel_broadcaster.delivery.engine import _require_aio_pika
from eiffel_broadcaster.delivery.settings import ConnectionSettings, has_amqp_scheme

logger = logging.getLogger(__name__)

CONNECTION_CHECK_TIMEOUT = 10.0
INVALID_URI = "Invalid Uri"
AUTHENTICATION_FAILURE = "Authentication Failure"


@dataclasses.dataclass(frozen=True)
class ConnectionCheckResult:
    ok: bool
    message: str = ""

    def __bool__(self) -> bool:
        return self.ok


def check_connection(
    settings: ConnectionSettings,
    timeout: float = CONNECTION_CHECK_TIMEOUT,
) -> ConnectionCheckResult:
    """Try to open and close one connection with *settings*.

    Meant for an administrator's "test connection" action; it never raises
    for broker problems and reports them in the result message instead.
    """
    if not has_amqp_scheme(settings.uri):
        return ConnectionCheckResult(False, INVALID_URI)
    aio_pika = _require_aio_pika()

    async def _try_connect() -> None:
        connection = await aio_pika.connect(settings.url(), timeout=timeout)
        await connection.close()

    try:
        asyncio.run(_try_connect())
    except (aio_pika.exceptions.AuthenticationError, aio_pika.exceptions.ProbableAuthenticationError):
        logger.info("delivery.check_failed uri=%s reason=authentication", settings.redacted_uri())
        return ConnectionCheckResult(False, AUTHENTICATION_FAILURE)
    except ValueError:
        return ConnectionCheckResult(False, INVALID_URI)
    except Exception as exc:
        logger.info("delivery.check_failed uri=%s error=%r", settings.redacted_uri(), exc)
        return ConnectionCheckResult(False, str(exc) or type(exc).__name__)
    return ConnectionCheckResult(True, "Connection successful")


__all__ = [
    "AUTHENTICATION_FAILURE",
    "INVALID_URI",
    "ConnectionCheckResult",
    "check_connection",
]
