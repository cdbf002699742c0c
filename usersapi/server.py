"""
HTTP server assembly and lifecycle.

The Server is the single assembly point: it opens the storage
connection from the resolved settings, builds repository, service and
application in that order, binds the configured address and serves it
with uvicorn. Failures are raised to the caller; deciding whether the
process exits is left to the entrypoint.

Lifecycle: UNCONFIGURED -> ASSEMBLING -> SERVING -> STOPPED.
STOPPED is terminal; a fresh Server is needed to serve again.
"""

import logging
import socket
from enum import Enum
from typing import Callable, Optional

import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import Engine

from usersapi.application.users.user_service import UserService
from usersapi.core.config import Settings
from usersapi.domain.users.ports import UserRepository
from usersapi.infrastructure.database import open_engine
from usersapi.infrastructure.users.in_memory_repository import InMemoryUserRepository
from usersapi.infrastructure.users.user_repository import SqlAlchemyUserRepository
from usersapi.main import create_app

logger = logging.getLogger(__name__)


class ServerState(Enum):
    """Lifecycle states of a Server."""

    UNCONFIGURED = "unconfigured"
    ASSEMBLING = "assembling"
    SERVING = "serving"
    STOPPED = "stopped"


class ServerError(Exception):
    """Raised when the server cannot be assembled, bound or served."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class Server:
    """Owns the storage engine and the HTTP transport for one process.

    Args:
        settings: Resolved application settings.
        engine_factory: Opens the storage connection. Raises
            StorageConnectionError when the database is unreachable.
    """

    def __init__(
        self,
        settings: Settings,
        engine_factory: Callable[[Settings], Engine] = open_engine,
    ) -> None:
        self._settings = settings
        self._engine_factory = engine_factory
        self._engine: Optional[Engine] = None
        self._app: Optional[FastAPI] = None
        self.state = ServerState.UNCONFIGURED

    @property
    def app(self) -> FastAPI:
        if self._app is None:
            raise ServerError("Server has not been assembled")
        return self._app

    def assemble(self) -> FastAPI:
        """Open the storage backend and build every layer above it.

        Returns:
            The wired FastAPI application.

        Raises:
            StorageConnectionError: If the database cannot be reached.
            ServerError: If the server was already assembled or stopped.
        """
        if self.state is not ServerState.UNCONFIGURED:
            raise ServerError(f"Cannot assemble a server in state {self.state.value}")

        self.state = ServerState.ASSEMBLING
        try:
            repository = self._build_repository()
        except Exception:
            self.state = ServerState.STOPPED
            raise

        service = UserService(repository)
        self._app = create_app(self._settings, service)
        logger.info("Server assembled.")
        return self._app

    def _build_repository(self) -> UserRepository:
        if self._settings.storage_backend == "memory":
            logger.warning("Using the in-memory user store; data is lost on exit.")
            return InMemoryUserRepository()
        self._engine = self._engine_factory(self._settings)
        return SqlAlchemyUserRepository(self._engine)

    def _bind(self) -> socket.socket:
        host, port = self._settings.host, self._settings.port
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError as exc:
            sock.close()
            raise ServerError(f"Could not bind {host}:{port}: {exc.strerror or exc}") from exc
        return sock

    def start(self) -> None:
        """Bind the configured port and serve until interrupted.

        An interrupt (Ctrl-C) is a normal stop and returns without error.

        Assembles the server first if that has not happened yet.

        Raises:
            StorageConnectionError: If assembly fails to reach the database.
            ServerError: If binding or serving fails, or the server is
                already serving or stopped.
        """
        if self.state is ServerState.UNCONFIGURED:
            self.assemble()
        if self.state is not ServerState.ASSEMBLING:
            raise ServerError(f"Cannot start a server in state {self.state.value}")

        try:
            sock = self._bind()
        except ServerError:
            self.stop()
            raise

        config = uvicorn.Config(
            self.app,
            log_config=None,
            log_level=self._settings.log_level.lower(),
        )
        self.state = ServerState.SERVING
        logger.info("Listening on %s:%d.", self._settings.host, self._settings.port)
        try:
            uvicorn.Server(config).run(sockets=[sock])
        except KeyboardInterrupt:
            logger.info("Interrupted; shutting down.")
        except SystemExit as exc:
            raise ServerError(f"HTTP server exited during startup (status {exc.code})") from exc
        finally:
            sock.close()
            self.stop()

    def stop(self) -> None:
        """Release the storage engine. The server cannot be restarted."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        if self.state is not ServerState.STOPPED:
            logger.info("Server stopped.")
        self.state = ServerState.STOPPED
