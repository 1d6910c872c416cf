"""Unit test configuration - isolate tests from the developer's rerank settings"""

import pytest


@pytest.fixture(autouse=True)
def clear_rerank_env(monkeypatch):
    """
    Remove RERANK_* variables so RerankConfig.from_env() sees defaults.

    A local .env.local with a real endpoint must never make unit tests
    reach the network.
    """
    for name in ("RERANK_ENABLED", "RERANK_ENDPOINT", "RERANK_API_KEY", "RERANK_MODEL"):
        monkeypatch.delenv(name, raising=False)
    yield
