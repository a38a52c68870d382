"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ip_reflector.config import Settings
from ip_reflector.core.app_factory import create_app


@pytest.fixture
def settings():
    """Settings using the packaged page template."""
    return Settings(addr="127.0.0.1", port=8080)


@pytest.fixture
def app(settings) -> FastAPI:
    """Application built from test settings."""
    return create_app(settings)


@pytest.fixture
def test_client(app):
    """FastAPI test client with lifespan context."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def template_dir(tmp_path) -> Callable[[str], Path]:
    """Write an index.html with the given source and return its directory."""

    def write(source: str) -> Path:
        (tmp_path / "index.html").write_text(source, encoding="utf-8")
        return tmp_path

    return write


@pytest.fixture
def fetch_as() -> Callable:
    """Issue a request against an app as if it came from the given peer address.

    A peer of None simulates a server that reports no client address.
    """

    async def fetch(
        app: FastAPI, peer: tuple[str, int] | None, path: str = "/", method: str = "GET"
    ) -> httpx.Response:
        transport = httpx.ASGITransport(app=app, client=peer)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            return await client.request(method, path)

    return fetch
