"""Shared fixtures for HTTP API integration tests

These tests drive the FastAPI app through TestClient. The rerank endpoint is
replaced with httpx.MockTransport where a response is needed, so no real
LLM service is contacted.

To skip integration tests explicitly:
    pytest tests/unit/                    # Only unit tests
    pytest -m 'not integration'
"""

import httpx
import pytest
from fastapi.testclient import TestClient

import kb_search.main as main_module
from kb_search.config import Settings
from kb_search.main import app, orchestrator
from kb_search.reranking import LLMReranker


@pytest.fixture(autouse=True)
def default_settings(monkeypatch):
    """Ignore rerank settings from the developer's .env.local"""
    monkeypatch.setattr(main_module, "settings", Settings())


@pytest.fixture
def client():
    """TestClient without lifespan (no log files written)"""
    return TestClient(app)


@pytest.fixture
def mock_llm(monkeypatch):
    """
    Route rerank calls to a scripted chat-completions handler.

    Usage:
        mock_llm(lambda request: httpx.Response(200, json={...}))
    """
    requests = []

    def install(handler):
        def recording_handler(request):
            requests.append(request)
            return handler(request)

        def factory(config, timeout):
            http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
            return LLMReranker(config, timeout=timeout, http_client=http_client)

        monkeypatch.setattr(orchestrator, "reranker_factory", factory)
        return requests

    return install


@pytest.fixture
def guide_payload(guides):
    """Guides as the store would post them (camelCase step bodies)"""
    return [guide.model_dump(by_alias=True) for guide in guides]
