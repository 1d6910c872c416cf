"""
Reranking module for KB Search.

Usage:
    from kb_search.reranking import get_reranker

    reranker = get_reranker(config)
    if reranker:
        outcome = await reranker.rerank(query, keyword_results)
"""

from typing import Optional

from ..config import DEFAULT_RERANK_TIMEOUT, RerankConfig
from .base import BaseReranker, RerankError, RerankErrorKind, RerankOutcome
from .llm import LLMReranker, extract_id_list, reorder


def get_reranker(
    config: Optional[RerankConfig],
    timeout: float = DEFAULT_RERANK_TIMEOUT,
) -> Optional[BaseReranker]:
    """
    Create a reranker for this config snapshot.

    Returns None if reranking is disabled or endpoint/api_key is missing.
    """
    if config is None or not config.is_configured:
        return None
    return LLMReranker(config, timeout=timeout)


__all__ = [
    "BaseReranker",
    "RerankError",
    "RerankErrorKind",
    "RerankOutcome",
    "LLMReranker",
    "extract_id_list",
    "reorder",
    "get_reranker",
]
