"""
Pytest Configuration and Shared Fixtures
=========================================

Provides an API client and raw ASGI requests for guard tests.
"""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from starlette.requests import Request

from jsonguard.services.notes import note_store
from main import app


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide a test client with an empty note store."""
    note_store.clear()
    with TestClient(app) as test_client:
        yield test_client
    note_store.clear()


def make_request(
    body: bytes,
    content_type: str | None = "application/json",
    chunk_size: int | None = None,
) -> tuple[Request, list[dict]]:
    """
    Build a POST request whose body arrives in chunks.

    Returns the request and the list of ASGI messages not yet received,
    so tests can check how much of the body was consumed.
    """
    if chunk_size is None:
        chunks = [body]
    else:
        chunks = [body[i : i + chunk_size] for i in range(0, len(body), chunk_size)] or [b""]

    messages = [
        {"type": "http.request", "body": chunk, "more_body": index < len(chunks) - 1}
        for index, chunk in enumerate(chunks)
    ]

    async def receive() -> dict:
        if messages:
            return messages.pop(0)
        return {"type": "http.disconnect"}

    headers = []
    if content_type is not None:
        headers.append((b"content-type", content_type.encode("latin-1")))

    scope = {
        "type": "http",
        "method": "POST",
        "scheme": "http",
        "server": ("testserver", 80),
        "path": "/api/notes",
        "raw_path": b"/api/notes",
        "root_path": "",
        "query_string": b"",
        "headers": headers,
    }
    return Request(scope, receive), messages
