"""
Keyword ranking over a guide collection.

Blank query: the collection is returned unchanged (identity).
Otherwise every guide is scored, non-matches (score 0) are dropped and the
rest sorted by score descending. Python's sort is stable, so guides with
equal scores keep their input order.
"""

import logging
from typing import List, Optional, Sequence

from ..models import Guide, ScoredGuide
from .scorer import RelevanceScorer
from .tokenizer import normalize, tokenize

logger = logging.getLogger(__name__)

_default_scorer = RelevanceScorer()


def rank_scored(
    query: Optional[str],
    guides: Sequence[Guide],
    scorer: Optional[RelevanceScorer] = None,
    highlights: bool = True,
) -> List[ScoredGuide]:
    """
    Rank guides and keep their scores and highlights.

    Args:
        query: Raw user query
        guides: Guide collection snapshot (not modified)
        scorer: Scorer to use (default weights if omitted)
        highlights: Extract highlight snippets for matched guides

    Returns:
        ScoredGuide list, best match first. For a blank query every guide
        is returned in input order with score 0 and no highlights.
    """
    guides = list(guides or [])
    normalized_query = normalize(query)
    if not normalized_query:
        return [ScoredGuide(guide=guide, score=0.0) for guide in guides]

    scorer = scorer or _default_scorer
    query_tokens = list(tokenize(normalized_query))

    results = []
    for guide in guides:
        score = scorer.score(normalized_query, query_tokens, guide)
        if score > 0:
            results.append(ScoredGuide(
                guide=guide,
                score=score,
                highlights=scorer.get_highlights(normalized_query, guide) if highlights else [],
            ))

    results.sort(key=lambda r: r.score, reverse=True)

    logger.debug(
        f"Keyword ranking: query={normalized_query!r}, "
        f"matched {len(results)}/{len(guides)} guides"
    )
    return results


def rank(
    query: Optional[str],
    guides: Sequence[Guide],
    scorer: Optional[RelevanceScorer] = None,
) -> List[Guide]:
    """
    Rank guides by keyword relevance.

    Examples:
        >>> [g.id for g in rank("vpn", guides)]
        ['vpn-setup', 'remote-access']

        >>> rank("   ", guides) == list(guides)
        True
    """
    if not normalize(query):
        return list(guides or [])
    return [result.guide for result in rank_scored(query, guides, scorer, highlights=False)]
