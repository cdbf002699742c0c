"""
Tests for server assembly, lifecycle and the storage connection.

The engine factory is replaced by an in-memory SQLite engine so no
database server is needed.
"""

import socket
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from usersapi.core.config import Settings
from usersapi.domain.users.errors import StorageConnectionError
from usersapi.infrastructure.database import open_engine
from usersapi.server import Server, ServerError, ServerState


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class TestAssemble:
    """Tests for Server.assemble."""

    def test_starts_unconfigured(self, settings: Settings) -> None:
        assert Server(settings).state is ServerState.UNCONFIGURED

    def test_assembled_app_serves_users(self, settings: Settings, sqlite_engine) -> None:
        server = Server(settings, engine_factory=lambda _settings: sqlite_engine)

        app = server.assemble()

        assert server.state is ServerState.ASSEMBLING
        client = TestClient(app)
        created = client.post("/users", json={"name": "John Doe", "email": "john@example.com"})
        assert created.status_code == 201
        assert client.get(f"/users/{created.json()['id']}").json() == created.json()

    def test_engine_factory_receives_settings(self, settings: Settings, sqlite_engine) -> None:
        factory = MagicMock(return_value=sqlite_engine)
        Server(settings, engine_factory=factory).assemble()
        factory.assert_called_once_with(settings)

    def test_connection_failure_is_raised_and_stops(self, settings: Settings) -> None:
        def unreachable(_settings: Settings):
            raise StorageConnectionError("connection refused")

        server = Server(settings, engine_factory=unreachable)

        with pytest.raises(StorageConnectionError):
            server.assemble()
        assert server.state is ServerState.STOPPED

    def test_memory_backend_skips_database(self, settings: Settings) -> None:
        memory = settings.model_copy(update={"storage_backend": "memory"})
        factory = MagicMock()
        server = Server(memory, engine_factory=factory)

        client = TestClient(server.assemble())
        created = client.post("/users", json={"name": "Ada", "email": "ada@example.com"})

        factory.assert_not_called()
        assert created.status_code == 201
        assert client.get("/users").json() == [created.json()]

    def test_app_before_assembly_is_an_error(self, settings: Settings) -> None:
        with pytest.raises(ServerError):
            Server(settings).app

    def test_cannot_assemble_twice(self, settings: Settings, sqlite_engine) -> None:
        server = Server(settings, engine_factory=lambda _settings: sqlite_engine)
        server.assemble()
        with pytest.raises(ServerError):
            server.assemble()


class TestLifecycle:
    """Tests for Server.start and Server.stop."""

    def test_stop_disposes_engine_and_is_terminal(self, settings: Settings) -> None:
        engine = MagicMock()
        server = Server(settings, engine_factory=lambda _settings: engine)
        server.assemble()

        server.stop()

        engine.dispose.assert_called_once()
        assert server.state is ServerState.STOPPED
        with pytest.raises(ServerError):
            server.start()

    def test_bind_failure_is_surfaced(self, settings: Settings, sqlite_engine) -> None:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as taken:
            taken.bind(("127.0.0.1", 0))
            taken.listen()
            busy = settings.model_copy(
                update={"host": "127.0.0.1", "port": taken.getsockname()[1]}
            )
            server = Server(busy, engine_factory=lambda _settings: sqlite_engine)

            with pytest.raises(ServerError) as excinfo:
                server.start()

        assert "Could not bind" in excinfo.value.message
        assert server.state is ServerState.STOPPED

    def test_start_serves_then_stops(self, settings: Settings, sqlite_engine) -> None:
        local = settings.model_copy(update={"host": "127.0.0.1", "port": _free_port()})
        server = Server(local, engine_factory=lambda _settings: sqlite_engine)
        states = []

        def fake_run(self, sockets=None):
            states.append(server.state)
            assert sockets[0].getsockname()[1] == local.port

        with patch("usersapi.server.uvicorn.Server.run", fake_run):
            server.start()

        assert states == [ServerState.SERVING]
        assert server.state is ServerState.STOPPED

    def test_interrupt_is_a_clean_stop(self, settings: Settings, sqlite_engine) -> None:
        local = settings.model_copy(update={"host": "127.0.0.1", "port": _free_port()})
        server = Server(local, engine_factory=lambda _settings: sqlite_engine)

        def interrupted_run(self, sockets=None):
            raise KeyboardInterrupt

        with patch("usersapi.server.uvicorn.Server.run", interrupted_run):
            server.start()

        assert server.state is ServerState.STOPPED


class TestOpenEngine:
    """Tests for the storage connection factory."""

    def test_unreachable_database_raises(self, settings: Settings) -> None:
        closed = settings.model_copy(
            update={"db_host": "127.0.0.1", "db_port": str(_free_port()), "db_connect_timeout": 2}
        )
        with pytest.raises(StorageConnectionError) as excinfo:
            open_engine(closed)
        assert "secret" not in excinfo.value.message
