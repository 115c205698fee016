"""Provider session lifecycle for the two server instances.

A session is the one process-wide handle to an initialized capability
provider. It is created before the transport accepts requests, handed by
reference to every handler call, and closed on shutdown.

Document-store state machine:
    UNINITIALIZED -> CONNECTING -> READY -> CLOSING -> CLOSED
    CONNECTING -> CLOSED when the connection cannot be established; open()
    then raises StartupFailure and the server must not start.

The filesystem provider is stateless, so its session is always ready.
"""

import enum
import logging
from typing import Any, Callable, Optional

from pymongo import AsyncMongoClient

from .config import DocumentStoreConfig
from .handler_wrappers import ProviderFailure, StartupFailure
from .providers.filesystem import FilesystemProvider

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONNECTING = "connecting"
    READY = "ready"
    CLOSING = "closing"
    CLOSED = "closed"


class FilesystemSession:
    """Session for the file-system server. Nothing to open or close."""

    def __init__(self, provider: Optional[FilesystemProvider] = None) -> None:
        self.provider = provider or FilesystemProvider()

    @property
    def state(self) -> SessionState:
        return SessionState.READY

    @property
    def is_ready(self) -> bool:
        return True

    async def open(self) -> None:
        return None

    async def close(self) -> None:
        return None

    async def __aenter__(self) -> "FilesystemSession":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        return None


class DocumentStoreSession:
    """Owns the MongoDB client and the bound database handle.

    Usage:
        >>> session = DocumentStoreSession(DocumentStoreConfig())
        >>> async with session:
        ...     names = await session.database.list_collection_names()

    Attributes:
        config: Connection URI, database name and connect timeout.
        _client_factory: Callable building the client; AsyncMongoClient by
            default, replaceable in tests.
        _client: The open client (None unless CONNECTING/READY/CLOSING).
        _database: The bound database (None unless READY).
    """

    def __init__(
        self,
        config: DocumentStoreConfig,
        client_factory: Callable[..., Any] = AsyncMongoClient,
    ) -> None:
        self.config = config
        self._client_factory = client_factory
        self._client: Any = None
        self._database: Any = None
        self._state = SessionState.UNINITIALIZED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_ready(self) -> bool:
        return self._state is SessionState.READY

    @property
    def database_name(self) -> str:
        return self.config.database

    @property
    def database(self) -> Any:
        """The bound database handle. Raises ProviderFailure unless READY."""
        if not self.is_ready:
            raise ProviderFailure(f"Session not ready (state: {self._state.value})")
        return self._database

    async def open(self) -> None:
        """Connect, verify the server answers, and bind the database.

        Raises:
            StartupFailure: If the store cannot be reached. The session is
                CLOSED afterwards.
            RuntimeError: If open() is called more than once.
        """
        if self._state is not SessionState.UNINITIALIZED:
            raise RuntimeError(f"Session cannot be opened from state {self._state.value}")

        self._state = SessionState.CONNECTING
        logger.info("Connecting to MongoDB (database %s)", self.config.database)
        try:
            self._client = self._client_factory(
                self.config.uri,
                serverSelectionTimeoutMS=self.config.connect_timeout_ms,
            )
            # Clients connect lazily; ping forces a round trip to the server
            await self._client.admin.command("ping")
            self._database = self._client[self.config.database]
        except Exception as e:
            logger.error("MongoDB connection error: %s", e)
            await self._release_client()
            self._state = SessionState.CLOSED
            raise StartupFailure(f"MongoDB connection error: {e}") from e

        self._state = SessionState.READY
        logger.info("Connected to MongoDB")

    async def close(self) -> None:
        """Release the client. Safe to call more than once."""
        if self._state is SessionState.CLOSED:
            return
        if self._state is SessionState.UNINITIALIZED:
            self._state = SessionState.CLOSED
            return

        self._state = SessionState.CLOSING
        try:
            await self._release_client()
        finally:
            self._state = SessionState.CLOSED
        logger.info("MongoDB connection closed")

    async def _release_client(self) -> None:
        client, self._client, self._database = self._client, None, None
        if client is not None:
            await client.close()

    async def __aenter__(self) -> "DocumentStoreSession":
        await self.open()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
