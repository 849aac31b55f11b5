"""
Shared pytest fixtures for the bootcamp server test suite.
"""
import os
import socket
import threading

import httpx
import pytest

from bootcamp_server.config import settings as settings_module
from bootcamp_server.config.settings import Settings
from bootcamp_server.server import create_server

# ── Constants ──────────────────────────────────────────────────────────────
CONFIG_ENV_VARS = ("PORT", "BOOTCAMP_VARIANT", "LOG_LEVEL", "LOG_JSON")


# ── Environment isolation ───────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """
    Run every test in an empty working directory with no configuration
    variables set. The whole environment is restored afterwards, including
    variables a dotenv file loaded during the test.
    """
    saved = os.environ.copy()
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(settings_module, "_settings", None)
    yield
    os.environ.clear()
    os.environ.update(saved)


# ── Ports ───────────────────────────────────────────────────────────────────

@pytest.fixture
def free_port():
    """A TCP port that was free at the time of the call."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def occupied_port():
    """A port held by a listening socket on all interfaces for the test."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        s.bind(("0.0.0.0", 0))
        s.listen(1)
        yield s.getsockname()[1]


# ── Running server ──────────────────────────────────────────────────────────

@pytest.fixture
def start_server():
    """
    Factory fixture: start a server for the given settings in a background
    thread and return its base URL. Every started server is shut down at
    teardown.
    """
    servers = []

    def _start(settings: Settings | None = None) -> str:
        server = create_server(settings or Settings(port=0))
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        servers.append((server, thread))
        return f"http://127.0.0.1:{server.server_address[1]}"

    yield _start

    for server, thread in servers:
        server.shutdown()
        server.server_close()
        thread.join(timeout=5)


@pytest.fixture
def base_url(start_server):
    """Base URL of a server running with default (env variant) settings."""
    return start_server()


@pytest.fixture
def http_client():
    """HTTP client that ignores proxy settings from the environment."""
    with httpx.Client(trust_env=False, timeout=5.0) as client:
        yield client
