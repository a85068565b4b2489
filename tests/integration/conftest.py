"""Integration test fixtures for Vocalize.

Provides an async HTTP client over the real FastAPI app with the LLM and
STT providers replaced through ``dependency_overrides``.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from vocalize.api.app import create_app
from vocalize.api.dependencies import get_llm, get_stt


@pytest.fixture
def app(mock_llm, mock_stt):
    """Create a fresh FastAPI application with mocked providers."""
    application = create_app()
    application.dependency_overrides[get_llm] = lambda: mock_llm
    application.dependency_overrides[get_stt] = lambda: mock_stt
    return application


@pytest.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
