"""MongoDB connection lifecycle: connect, retry, recover from drops, release.

The :class:`ConnectionManager` owns the single ``AsyncMongoClient`` shared by
the bootstrap sequence and every request handler.  It is created by the
application lifespan and stored on ``app.state.store``; handlers reach the
database through the :func:`get_db` dependency.

State machine
-------------
::

    DISCONNECTED --attempt--> CONNECTING --ping ok--> CONNECTED
         ^                        |                      |
         +------ failure ---------+                      |
         +------ all servers lost ------------------------+

Every failure schedules another attempt after ``reconnect_delay`` seconds,
forever.  The first-connect hook fires once per manager, never on reconnects.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from contextlib import suppress
from enum import StrEnum
from typing import Any

from fastapi import Request
from pymongo import AsyncMongoClient, monitoring
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError, PyMongoError

from bookstore.config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Collection names
# ---------------------------------------------------------------------------

CATALOGS = "catalogs"
PRODUCTS = "products"
USERS = "users"
COUPONS = "coupons"
INVOICES = "invoices"
ORDERS = "orders"
REVIEWS = "reviews"

TRACKED_COLLECTIONS: tuple[str, ...] = (
    CATALOGS,
    PRODUCTS,
    USERS,
    COUPONS,
    INVOICES,
    ORDERS,
    REVIEWS,
)

FirstConnectHook = Callable[[AsyncDatabase], Awaitable[None]]
ClientFactory = Callable[..., Any]
SleepFunc = Callable[[float], Awaitable[None]]


class ConnectionState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"


class StoreUnavailableError(RuntimeError):
    """Raised when the store is needed before any client has connected."""


# ---------------------------------------------------------------------------
# Driver event listeners
# ---------------------------------------------------------------------------


class _TopologyWatcher(monitoring.TopologyListener):
    """Report loss of every known server as a *disconnected* transition.

    A replica-set primary stepping down while secondaries stay reachable is
    not a disconnect; the driver fails over on its own.
    """

    def __init__(
        self,
        manager: "ConnectionManager",
        generation: int,
        loop: asyncio.AbstractEventLoop,
    ) -> None:
        self._manager = manager
        self._generation = generation
        self._loop = loop

    def opened(self, event: monitoring.TopologyOpenedEvent) -> None:
        pass

    def description_changed(self, event: monitoring.TopologyDescriptionChangedEvent) -> None:
        was_up = event.previous_description.has_known_servers
        is_up = event.new_description.has_known_servers
        if was_up and not is_up:
            # Driver monitors may run off the event loop thread.
            self._loop.call_soon_threadsafe(
                self._manager.notify_disconnected, self._generation
            )

    def closed(self, event: monitoring.TopologyClosedEvent) -> None:
        pass


class _HeartbeatWatcher(monitoring.ServerHeartbeatListener):
    """Log heartbeat failures.  These never trigger a reconnect on their own."""

    def started(self, event: monitoring.ServerHeartbeatStartedEvent) -> None:
        pass

    def succeeded(self, event: monitoring.ServerHeartbeatSucceededEvent) -> None:
        pass

    def failed(self, event: monitoring.ServerHeartbeatFailedEvent) -> None:
        logger.warning("MongoDB connection error on %s: %s", event.connection_id, event.reply)


# ---------------------------------------------------------------------------
# Connection manager
# ---------------------------------------------------------------------------


class ConnectionManager:
    """Own the MongoDB client and keep it connected."""

    def __init__(
        self,
        uri: str | None,
        db_name: str,
        *,
        server_selection_timeout_ms: int = 5000,
        socket_timeout_ms: int = 45000,
        reconnect_delay: float = 5.0,
        on_first_connect: FirstConnectHook | None = None,
        client_factory: ClientFactory = AsyncMongoClient,
        sleep: SleepFunc = asyncio.sleep,
    ) -> None:
        self.uri = uri
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self.socket_timeout_ms = socket_timeout_ms
        self.reconnect_delay = reconnect_delay
        self.state = ConnectionState.DISCONNECTED
        self.retries = 0
        self.bootstrap_task: asyncio.Task[None] | None = None

        self._on_first_connect = on_first_connect
        self._client_factory = client_factory
        self._sleep = sleep
        self._client: Any = None
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._bootstrapped = False
        self._closing = False

    @classmethod
    def from_settings(cls, on_first_connect: FirstConnectHook | None = None) -> "ConnectionManager":
        return cls(
            settings.mongodb_uri,
            settings.mongodb_db_name,
            server_selection_timeout_ms=settings.server_selection_timeout_ms,
            socket_timeout_ms=settings.socket_timeout_ms,
            reconnect_delay=settings.reconnect_delay_seconds,
            on_first_connect=on_first_connect,
        )

    @property
    def database(self) -> AsyncDatabase:
        """Return the application database.  Raises :exc:`StoreUnavailableError` if no client."""
        if self._client is None:
            raise StoreUnavailableError("MongoDB client is not available")
        return self._client.get_default_database(default=self.db_name)

    def start(self) -> asyncio.Task[None]:
        """Run :meth:`connect` in the background and return its task."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.connect(), name="store-connect")
        return self._task

    async def connect(self) -> None:
        """Attempt to connect until one attempt succeeds.  Never raises on store errors."""
        while not self._closing:
            if await self._attempt():
                return
            logger.info("Retrying MongoDB connection in %s seconds", self.reconnect_delay)
            self.retries += 1
            await self._sleep(self.reconnect_delay)

    async def _attempt(self) -> bool:
        self.state = ConnectionState.CONNECTING
        self._generation += 1
        logger.info("Connecting to MongoDB...")

        client: Any = None
        try:
            if not self.uri:
                raise ConfigurationError("MongoDB URI is not configured")
            client = self._client_factory(
                self.uri,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms,
                socketTimeoutMS=self.socket_timeout_ms,
                tz_aware=True,
                event_listeners=self._listeners(self._generation),
            )
            await client.admin.command("ping")
        except PyMongoError as exc:
            self.state = ConnectionState.DISCONNECTED
            logger.error("MongoDB connection failed: %s", exc)
            if client is not None:
                await client.close()
            return False
        except asyncio.CancelledError:
            if client is not None:
                await client.close()
            raise

        self._client = client
        self.state = ConnectionState.CONNECTED
        logger.info("MongoDB connected")

        if not self._bootstrapped:
            self._bootstrapped = True
            if self._on_first_connect is not None:
                self.bootstrap_task = asyncio.create_task(
                    self._on_first_connect(self.database), name="store-bootstrap"
                )
        return True

    def _listeners(self, generation: int) -> list[Any]:
        loop = asyncio.get_running_loop()
        return [_TopologyWatcher(self, generation, loop), _HeartbeatWatcher()]

    def notify_disconnected(self, generation: int | None = None) -> None:
        """Handle the live client losing every server: drop it and retry from scratch.

        Events from a client that has already been replaced are ignored.
        """
        if self._closing or self.state is not ConnectionState.CONNECTED:
            return
        if generation is not None and generation != self._generation:
            return

        logger.warning("MongoDB disconnected")
        self.state = ConnectionState.DISCONNECTED
        stale, self._client = self._client, None
        self._task = asyncio.create_task(self._recover(stale), name="store-reconnect")

    async def _recover(self, stale: Any) -> None:
        if stale is not None:
            await stale.close()
        await self.connect()

    async def close(self) -> None:
        """Cancel any pending retry and release the client."""
        self._closing = True
        if self._task is not None and not self._task.done():
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
        if self._client is not None:
            await self._client.close()
            self._client = None
        self.state = ConnectionState.DISCONNECTED
        logger.info("MongoDB connection closed")


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def get_store(request: Request) -> ConnectionManager:
    return request.app.state.store


async def get_db(request: Request) -> AsyncDatabase:
    """Return the shared database handle for the current request."""
    return get_store(request).database
