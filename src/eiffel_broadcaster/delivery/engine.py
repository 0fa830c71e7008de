"""Delivery – DeliveryEngine.

One engine owns the broker connection, a bounded queue of outbound messages
and a background worker thread.  The worker runs a private asyncio loop with
aio-pika and is the only code that touches the connection and channel;
callers interact through ``initialize``, ``enqueue`` and ``shutdown``.

Worker cycle::

    obtain channel ──fail──▶ pause CONNECTION_WAIT ──▶ obtain channel
         │ ok
    poll queue ──empty──▶ sleep POLL_TIMEOUT ──▶ obtain channel
         │ message
    passive-declare exchange, publish

Messages stay in the queue while no channel can be opened, so an outage
only costs the messages that overflow the queue.
"""
from __future__ import annotations

import asyncio
import logging
import queue
import threading
from enum import Enum
from typing import Any

from eiffel_broadcaster.delivery.message import OutboundMessage
from eiffel_broadcaster.delivery.settings import ConnectionSettings
from eiffel_broadcaster.errors import BrokerConnectionError, TransportError

logger = logging.getLogger(__name__)

HEARTBEAT_INTERVAL = 30
MESSAGE_QUEUE_SIZE = 1000
POLL_TIMEOUT = 0.1
CONNECTION_WAIT = 10.0


def _require_aio_pika() -> Any:
    try:
        import aio_pika  # type: ignore[import-untyped]
        return aio_pika
    except ImportError as exc:
        raise ImportError("Install 'aio-pika' to deliver events to RabbitMQ") from exc


class ConnectionState(str, Enum):
    DISCONNECTED = "DISCONNECTED"
    CONNECTING = "CONNECTING"
    CONNECTED = "CONNECTED"
    SHUTTING_DOWN = "SHUTTING_DOWN"


class DeliveryEngine:
    """Queue plus worker thread that publishes messages to an AMQP broker.

    The queue capacity and the timing parameters default to the module
    constants; tests pass smaller values.
    """

    def __init__(
        self,
        queue_size: int = MESSAGE_QUEUE_SIZE,
        *,
        heartbeat: int = HEARTBEAT_INTERVAL,
        poll_timeout: float = POLL_TIMEOUT,
        connection_wait: float = CONNECTION_WAIT,
    ) -> None:
        self._queue: queue.Queue[OutboundMessage] = queue.Queue(maxsize=queue_size)
        self._heartbeat = heartbeat
        self._poll_timeout = poll_timeout
        self._connection_wait = connection_wait

        # Swapped whole by initialize(); the worker compares generations.
        self._snapshot: tuple[ConnectionSettings, int] | None = None
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None
        self._state = ConnectionState.DISCONNECTED

        # Owned by the worker thread.
        self._connection: Any = None
        self._channel: Any = None
        self._exchanges: dict[str, Any] = {}
        self._active_generation = -1

    # ------------------------------------------------------------------
    # Caller-facing API
    # ------------------------------------------------------------------

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._snapshot is not None

    @property
    def capacity(self) -> int:
        return self._queue.maxsize

    def pending(self) -> int:
        """Number of messages waiting for the worker."""
        return self._queue.qsize()

    def initialize(self, settings: ConnectionSettings) -> None:
        """Apply new connection parameters and make sure the worker runs.

        The current connection, if any, is replaced on the worker's next
        channel acquisition; messages already queued are kept.
        """
        with self._lock:
            generation = self._snapshot[1] + 1 if self._snapshot is not None else 0
            self._snapshot = (settings, generation)
            self._stop.clear()
        logger.info("delivery.initialized uri=%s generation=%s", settings.redacted_uri(), generation)
        self._ensure_worker()

    def enqueue(self, message: OutboundMessage) -> bool:
        """Queue *message* without blocking.

        Returns ``False`` and logs an error when the queue is full; the
        message is dropped.
        """
        self._ensure_worker()
        try:
            self._queue.put_nowait(message)
        except queue.Full:
            logger.error(
                "delivery.queue_full capacity=%s exchange=%s routing_key=%s",
                self._queue.maxsize,
                message.exchange,
                message.routing_key,
            )
            return False
        return True

    def shutdown(self, timeout: float | None = 5.0) -> None:
        """Stop the worker and close the connection.

        Queued messages that weren't handed to the broker are left in the
        queue and are published if the engine is initialized again.
        """
        with self._lock:
            thread = self._thread
            if thread is not None and thread.is_alive():
                self._state = ConnectionState.SHUTTING_DOWN
            self._stop.set()
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                logger.warning("delivery.shutdown_timeout timeout=%s", timeout)
                return
        self._state = ConnectionState.DISCONNECTED
        logger.info("delivery.stopped pending=%s", self.pending())

    def _ensure_worker(self) -> bool:
        with self._lock:
            if self._snapshot is None or self._stop.is_set():
                return False
            if self._thread is not None and self._thread.is_alive():
                return False
            self._thread = threading.Thread(target=self._run, name="eiffel-delivery", daemon=True)
            self._thread.start()
        logger.info("delivery.worker_started")
        return True

    # ------------------------------------------------------------------
    # Worker
    # ------------------------------------------------------------------

    def _run(self) -> None:
        try:
            asyncio.run(self._worker())
        except Exception:
            logger.exception("delivery.worker_crashed")
        finally:
            self._state = ConnectionState.DISCONNECTED

    async def _worker(self) -> None:
        aio_pika = _require_aio_pika()
        try:
            while not self._stop.is_set():
                channel = await self._obtain_channel(aio_pika)
                if channel is None:
                    await self._pause(self._connection_wait)
                    continue
                try:
                    message = self._queue.get_nowait()
                except queue.Empty:
                    await asyncio.sleep(self._poll_timeout)
                    continue
                await self._publish(aio_pika, channel, message)
        finally:
            await self._close_connection()

    async def _pause(self, seconds: float) -> None:
        await asyncio.to_thread(self._stop.wait, seconds)

    async def _obtain_channel(self, aio_pika: Any) -> Any:
        """Return an open channel, connecting first if needed, or ``None``."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        settings, generation = snapshot
        if generation != self._active_generation and self._connection is not None:
            logger.info("delivery.reconfigured generation=%s", generation)
            await self._close_connection()

        if self._channel is not None and not self._channel.is_closed:
            return self._channel

        if self._connection is None or self._connection.is_closed:
            self._state = ConnectionState.CONNECTING
            try:
                connection = await aio_pika.connect(
                    settings.url(),
                    heartbeat=self._heartbeat,
                    timeout=self._connection_wait,
                )
            except Exception as exc:
                error = BrokerConnectionError(settings.redacted_uri(), cause=exc)
                logger.warning("delivery.connect_failed uri=%s error=%r", error.uri, exc)
                self._connection = None
                self._state = ConnectionState.DISCONNECTED
                return None
            connection.close_callbacks.add(self._on_connection_closed)
            self._connection = connection
            self._active_generation = generation

        try:
            channel = await self._connection.channel()
        except Exception as exc:
            error = TransportError("Cannot create channel", cause=exc)
            logger.error("delivery.channel_failed error=%s", error.message, exc_info=exc)
            self._channel = None
            return None
        channel.close_callbacks.add(self._on_channel_closed)
        self._channel = channel
        self._exchanges = {}
        self._state = ConnectionState.CONNECTED
        logger.info("delivery.connected uri=%s", settings.redacted_uri())
        return channel

    async def _publish(self, aio_pika: Any, channel: Any, message: OutboundMessage) -> None:
        if not message.exchange:
            logger.error("delivery.invalid_exchange routing_key=%s", message.routing_key)
            return
        try:
            exchange = self._exchanges.get(message.exchange)
            if exchange is None:
                exchange = await channel.get_exchange(message.exchange, ensure=True)
                self._exchanges[message.exchange] = exchange
            await exchange.publish(
                aio_pika.Message(
                    body=message.body,
                    content_type=message.content_type,
                    delivery_mode=message.delivery_mode,
                    app_id=message.app_id,
                    timestamp=message.timestamp,
                ),
                routing_key=message.routing_key,
            )
        except Exception as exc:
            error = TransportError("Cannot publish message", cause=exc)
            logger.error(
                "delivery.publish_failed exchange=%s routing_key=%s error=%s",
                message.exchange,
                message.routing_key,
                error.message,
                exc_info=exc,
            )
            return
        logger.debug("delivery.published exchange=%s routing_key=%s", message.exchange, message.routing_key)

    async def _close_connection(self) -> None:
        connection, self._connection = self._connection, None
        self._channel = None
        self._exchanges = {}
        self._active_generation = -1
        if connection is not None and not connection.is_closed:
            try:
                await connection.close()
            except Exception as exc:
                logger.warning("delivery.close_failed error=%r", exc)
        if self._state is not ConnectionState.SHUTTING_DOWN:
            self._state = ConnectionState.DISCONNECTED

    def _on_connection_closed(self, sender: Any, exc: BaseException | None = None) -> None:
        """Connection close callback.

        ``exc`` is ``None`` (or a cancellation) when this engine closed the
        connection.  Anything else is a hard error: drop the reference so
        the next cycle reconnects.
        """
        if exc is None or isinstance(exc, asyncio.CancelledError):
            logger.debug("delivery.connection_closed")
            return
        logger.warning("delivery.connection_lost error=%r", exc)
        if sender is self._connection or self._connection is None:
            self._connection = None
            self._channel = None
            self._exchanges = {}
            self._state = ConnectionState.DISCONNECTED

    def _on_channel_closed(self, sender: Any, exc: BaseException | None = None) -> None:  # noqa: ARG002
        if exc is None or isinstance(exc, asyncio.CancelledError):
            return
        logger.warning("delivery.channel_lost error=%r", exc)


__all__ = [
    "CONNECTION_WAIT",
    "HEARTBEAT_INTERVAL",
    "MESSAGE_QUEUE_SIZE",
    "POLL_TIMEOUT",
    "ConnectionState",
    "DeliveryEngine",
]
