"""
Keyword search over step-by-step guides.

Components:
- tokenizer: normalization, tokenization and markup stripping
- scorer: weighted multi-field relevance scoring and highlight extraction
- ranker: scores the whole collection, filters non-matches, stable sort
- filters: category/tag filtering and facet listings

Everything here is pure and synchronous; no network access.
"""

from .tokenizer import normalize, tokenize, strip_markup, count_occurrences, find_span
from .scorer import RelevanceScorer, readable_text
from .ranker import rank, rank_scored
from .filters import filter_by_category, filter_by_tags, get_categories, get_tags

__all__ = [
    "normalize",
    "tokenize",
    "strip_markup",
    "count_occurrences",
    "find_span",
    "RelevanceScorer",
    "readable_text",
    "rank",
    "rank_scored",
    "filter_by_category",
    "filter_by_tags",
    "get_categories",
    "get_tags",
]
