"""
KB Search - local knowledge-base search over step-by-step guides.

Usage:
    from kb_search import Guide, RerankConfig, search

    guides = [Guide(**record) for record in store.list_guides()]
    results = await search("reset password", guides, RerankConfig.from_env())
"""

from .config import RerankConfig, Settings
from .models import Guide, Highlight, ScoredGuide, Step
from .orchestrator import SearchOrchestrator, SearchResult, search
from .search import RelevanceScorer, rank, rank_scored

__all__ = [
    "Guide",
    "Step",
    "Highlight",
    "ScoredGuide",
    "RerankConfig",
    "Settings",
    "RelevanceScorer",
    "rank",
    "rank_scored",
    "SearchOrchestrator",
    "SearchResult",
    "search",
]
