"""
Weighted multi-field relevance scorer for guides.

Additive scoring, fields evaluated in a fixed order:
    title    +10 if it contains the query, +5 more if it starts with it
    tags     +5 per tag containing the query,
             +2 per (tag, token) pair for multi-token queries
    summary  +4 if it contains the query
    steps    +2 per step title containing the query,
             +1 per stripped step body containing the query,
             plus min(occurrences * 0.5, 3) for that body
    tokens   multi-token queries only, per token:
             +1 title, +0.5 summary, +0.3 per step body containing it

A guide scoring 0 is not a match. Scoring never raises on missing fields.

Example:
    Guide "Password Reset Procedure" tagged ["password", "active-directory"],
    summary "Step-by-step guide to reset user passwords" and one step body
    "<p>password password</p>", query "password":
    10 + 5 + 5 + 4 + 1 + 1 = 26
"""

from typing import List, Optional, Sequence

from ..models import Guide, Highlight, ScoredGuide
from .tokenizer import count_occurrences, find_span, normalize, strip_markup, tokenize

# Characters of context kept on each side of the first body match
SNIPPET_CONTEXT = 40
ELLIPSIS = "..."


def readable_text(guide: Guide) -> str:
    """
    Flattened readable content of a guide.

    Uses the store-provided `content` when present, otherwise joins the
    summary, step titles and markup-free step bodies.
    """
    if guide.content:
        return guide.content
    parts = [guide.summary]
    for step in guide.steps:
        parts.append(step.title)
        parts.append(strip_markup(step.body_rich))
    return " ".join(part for part in parts if part)


class RelevanceScorer:
    """
    Keyword relevance scorer over title, tags, summary and steps.

    Stateless apart from its weights; safe to share between searches.
    """

    def __init__(
        self,
        title_match: float = 10,
        title_prefix: float = 5,
        tag_match: float = 5,
        tag_token: float = 2,
        summary_match: float = 4,
        step_title_match: float = 2,
        step_body_match: float = 1,
        occurrence_bonus: float = 0.5,
        occurrence_cap: float = 3,
        token_title: float = 1,
        token_summary: float = 0.5,
        token_step_body: float = 0.3,
    ):
        """
        Initialize scorer weights.

        Args:
            title_match: Query substring found in title
            title_prefix: Extra when the title starts with the query
            tag_match: Per tag containing the query
            tag_token: Per (tag, query token) pair, multi-token queries only
            summary_match: Query substring found in summary
            step_title_match: Per step title containing the query
            step_body_match: Per stripped step body containing the query
            occurrence_bonus: Per occurrence of the query in a step body
            occurrence_cap: Maximum occurrence bonus per step body
            token_title: Per query token found in title
            token_summary: Per query token found in summary
            token_step_body: Per (step body, query token) pair
        """
        self.title_match = title_match
        self.title_prefix = title_prefix
        self.tag_match = tag_match
        self.tag_token = tag_token
        self.summary_match = summary_match
        self.step_title_match = step_title_match
        self.step_body_match = step_body_match
        self.occurrence_bonus = occurrence_bonus
        self.occurrence_cap = occurrence_cap
        self.token_title = token_title
        self.token_summary = token_summary
        self.token_step_body = token_step_body

    def score(
        self,
        normalized_query: str,
        query_tokens: Sequence[str],
        guide: Guide,
    ) -> float:
        """
        Compute relevance score of one guide.

        Args:
            normalized_query: Lowercased, trimmed query (see normalize())
            query_tokens: Tokens of the query (see tokenize())
            guide: Guide to score

        Returns:
            Non-negative score (0 = no match)
        """
        if not normalized_query or guide is None:
            return 0.0

        multi_token = len(query_tokens) > 1
        score = 0.0

        title = guide.title.lower()
        if normalized_query in title:
            score += self.title_match
            if title.startswith(normalized_query):
                score += self.title_prefix

        for tag in guide.tags:
            tag = tag.lower()
            if normalized_query in tag:
                score += self.tag_match
            if multi_token:
                for token in query_tokens:
                    if token in tag:
                        score += self.tag_token

        summary = guide.summary.lower()
        if normalized_query in summary:
            score += self.summary_match

        # Stripped bodies are reused by the token pass below
        bodies = []
        for step in guide.steps:
            if normalized_query in step.title.lower():
                score += self.step_title_match

            body = strip_markup(step.body_rich).lower()
            bodies.append(body)
            if normalized_query in body:
                score += self.step_body_match
                occurrences = count_occurrences(body, normalized_query)
                score += min(occurrences * self.occurrence_bonus, self.occurrence_cap)

        if multi_token:
            for token in query_tokens:
                if token in title:
                    score += self.token_title
                if token in summary:
                    score += self.token_summary
                for body in bodies:
                    if token in body:
                        score += self.token_step_body

        return score

    def get_highlights(self, normalized_query: str, guide: Guide) -> List[Highlight]:
        """
        Extract highlight snippets for a matched guide.

        Emits the full title when it contains the query, and one snippet
        with SNIPPET_CONTEXT characters around the first match in the
        guide's readable content. Best effort: may return an empty list.
        """
        highlights: List[Highlight] = []
        if not normalized_query or guide is None:
            return highlights

        if normalized_query in guide.title.lower():
            highlights.append(Highlight(field="title", text=guide.title))

        content = readable_text(guide)
        span = find_span(content, normalized_query)
        if span is not None:
            start = max(0, span[0] - SNIPPET_CONTEXT)
            end = min(len(content), span[1] + SNIPPET_CONTEXT)
            snippet = content[start:end]
            if start > 0:
                snippet = ELLIPSIS + snippet
            if end < len(content):
                snippet = snippet + ELLIPSIS
            highlights.append(Highlight(field="body", text=snippet))

        return highlights

    def score_guide(self, query: Optional[str], guide: Guide) -> ScoredGuide:
        """Normalize and tokenize a raw query, then score and highlight one guide."""
        normalized_query = normalize(query)
        query_tokens = list(tokenize(normalized_query))
        score = self.score(normalized_query, query_tokens, guide)
        highlights = self.get_highlights(normalized_query, guide) if score > 0 else []
        return ScoredGuide(guide=guide, score=score, highlights=highlights)
