"""
Search orchestrator: keyword ranking with optional LLM reranking.

Flow:
    keyword ranking (always) -> baseline
    rerank configured?  no  -> baseline[:max_results]
                        yes -> rerank ok     -> reranked[:max_results]
                               rerank failed -> baseline[:max_results]

search() never raises because of the rerank stage: every failure is logged
and converted into the keyword fallback.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from .config import DEFAULT_MAX_RESULTS, DEFAULT_RERANK_TIMEOUT, RerankConfig
from .models import Guide, ScoredGuide
from .reranking import BaseReranker, RerankErrorKind, get_reranker
from .search import RelevanceScorer, rank_scored

logger = logging.getLogger(__name__)

RerankerFactory = Callable[[RerankConfig, float], Optional[BaseReranker]]


@dataclass
class SearchResult:
    """Final ordered guides plus how they were produced"""
    guides: List[Guide]
    reranked: bool = False
    rerank_error: Optional[RerankErrorKind] = None
    # Keyword pass behind the baseline (scores, highlights if requested)
    scored: List[ScoredGuide] = field(default_factory=list)


class SearchOrchestrator:
    """
    Entry point for guide search.

    Holds no per-search state; concurrent searches are independent.
    """

    def __init__(
        self,
        scorer: Optional[RelevanceScorer] = None,
        reranker_factory: RerankerFactory = get_reranker,
        max_results: int = DEFAULT_MAX_RESULTS,
        rerank_timeout: float = DEFAULT_RERANK_TIMEOUT,
    ):
        self.scorer = scorer or RelevanceScorer()
        self.reranker_factory = reranker_factory
        self.max_results = max_results
        self.rerank_timeout = rerank_timeout

    async def search(
        self,
        query: Optional[str],
        guides: Sequence[Guide],
        config: Optional[RerankConfig] = None,
    ) -> List[Guide]:
        """
        Search guides, reranking with the LLM when configured.

        Args:
            query: Raw user query (blank returns the collection as-is)
            guides: Guide collection snapshot (not modified)
            config: Rerank settings for this call (None = keyword only)

        Returns:
            At most max_results guides, best first
        """
        result = await self.run(query, guides, config)
        return result.guides

    async def run(
        self,
        query: Optional[str],
        guides: Sequence[Guide],
        config: Optional[RerankConfig] = None,
        highlights: bool = False,
    ) -> SearchResult:
        """
        Same as search(), also reporting whether the rerank stage was used.

        With highlights=True the keyword pass in `SearchResult.scored` also
        carries highlight snippets.
        """
        scored = rank_scored(query, guides, self.scorer, highlights=highlights)
        baseline = [item.guide for item in scored]

        def keyword_result(rerank_error: Optional[RerankErrorKind] = None) -> SearchResult:
            return SearchResult(guides=baseline[:self.max_results], rerank_error=rerank_error, scored=scored)

        if config is None or not config.is_configured:
            if config is not None and config.enabled:
                logger.debug("Reranking enabled but endpoint or API key missing, skipping")
            return keyword_result()

        # The UI shows the whole collection for a blank query and never searches
        # it, so a blank query does not call the reranker.
        if not baseline or not (query or "").strip():
            return keyword_result()

        reranker = None
        try:
            reranker = self.reranker_factory(config, self.rerank_timeout)
            if reranker is None:
                return keyword_result()

            outcome = await reranker.rerank(query, baseline)
        except Exception:
            logger.exception("Unexpected reranker error - falling back to keyword results")
            return keyword_result(RerankErrorKind.INTERNAL)
        finally:
            if reranker is not None:
                await self._close(reranker)

        if outcome.ok:
            return SearchResult(guides=outcome.guides[:self.max_results], reranked=True, scored=scored)

        logger.warning(
            f"Rerank failed ({outcome.error_kind.value}): {outcome.error_message} "
            f"- falling back to keyword results"
        )
        return keyword_result(outcome.error_kind)

    @staticmethod
    async def _close(reranker: BaseReranker):
        try:
            await reranker.close()
        except Exception as e:
            logger.warning(f"Failed to close reranker: {e}")


_default_orchestrator = SearchOrchestrator()


async def search(
    query: Optional[str],
    guides: Sequence[Guide],
    config: Optional[RerankConfig] = None,
) -> List[Guide]:
    """Search with default scorer weights and limits (see SearchOrchestrator.search)."""
    return await _default_orchestrator.search(query, guides, config)
