"""
LLM-based reranker using an OpenAI-compatible chat-completions endpoint.

Sends the top keyword candidates (id, title, summary, tags only; step bodies
are never transmitted) in a single prompt and asks the model for a JSON array
of candidate ids ordered by relevance.

Endpoint: POST <config.endpoint>
Request:  {"model": ..., "messages": [{"role": "user", "content": <prompt>}],
           "temperature": 0.3, "max_tokens": 500}
Response: {"choices": [{"message": {"content": "[\"id3\", \"id1\"]"}}]}

Every failure (timeout, transport, status, parse, shape) is returned as a
failed RerankOutcome; nothing is retried.
"""

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from ..config import DEFAULT_RERANK_TIMEOUT, RerankConfig
from ..models import Guide
from .base import BaseReranker, RerankError, RerankErrorKind, RerankOutcome

logger = logging.getLogger(__name__)

MAX_CANDIDATES = 20
MAX_RANKED_IDS = 10
TEMPERATURE = 0.3
MAX_TOKENS = 500


def extract_id_list(text: str) -> List[str]:
    """
    Extract the list of guide ids from the model's reply.

    The first bracketed span ("[" up to the first following "]") is parsed as
    JSON, which tolerates prose around the array. Nested arrays inside
    explanatory text are not supported.

    Raises:
        RerankError(PARSE): no bracketed span, or it is not valid JSON
        RerankError(FORMAT): parsed value is not an array of ids

    Examples:
        >>> extract_id_list('Here you go: ["vpn", "mfa"] hope it helps')
        ['vpn', 'mfa']
    """
    start = text.find("[") if text else -1
    end = text.find("]", start + 1) if start != -1 else -1
    if start == -1 or end == -1:
        raise RerankError(RerankErrorKind.PARSE, "No JSON array found in model response")

    try:
        parsed = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise RerankError(RerankErrorKind.PARSE, f"Invalid JSON array in model response: {e}")

    if not isinstance(parsed, list):
        raise RerankError(RerankErrorKind.FORMAT, f"Expected JSON array, got: {type(parsed).__name__}")

    ids = []
    for item in parsed:
        # bool is an int subclass but never a valid id
        if isinstance(item, bool) or not isinstance(item, (str, int)):
            raise RerankError(RerankErrorKind.FORMAT, f"Expected guide id, got: {item!r}")
        ids.append(str(item))
    return ids


def reorder(ids: Sequence[str], candidates: Sequence[Guide]) -> List[Guide]:
    """
    Order candidates by the model's id list.

    Listed candidates come first in model order (unknown and repeated ids are
    skipped), followed by unlisted candidates in their keyword order. The
    result is always a permutation of `candidates`.

    Examples:
        >>> [g.id for g in reorder(["c", "a"], [a, b, c])]
        ['c', 'a', 'b']
    """
    by_id: Dict[str, Guide] = {}
    for guide in candidates:
        by_id.setdefault(guide.id, guide)

    ordered: List[Guide] = []
    used = set()
    for guide_id in ids:
        if guide_id in by_id and guide_id not in used:
            used.add(guide_id)
            ordered.append(by_id[guide_id])

    for guide in candidates:
        if guide.id not in used:
            ordered.append(guide)
    return ordered


class LLMReranker(BaseReranker):
    """
    Reranker backed by a chat-completions LLM endpoint.

    Usage:
        reranker = LLMReranker(config)
        outcome = await reranker.rerank("reset password", keyword_results)
        if outcome.ok:
            results = outcome.guides
    """

    PROMPT_TEMPLATE = """You are a search assistant for an internal knowledge base of step-by-step guides.

Rank the guides below by how well they answer the user's query.

Query: {query}

Guides (JSON):
{guides}

Respond with ONLY a JSON array of the ids of the most relevant guides, most relevant first, at most {max_ids} ids.
Example: ["guide-id-1", "guide-id-2"]"""

    def __init__(
        self,
        config: RerankConfig,
        timeout: float = DEFAULT_RERANK_TIMEOUT,
        max_candidates: int = MAX_CANDIDATES,
        max_ids: int = MAX_RANKED_IDS,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize LLM reranker.

        Args:
            config: Rerank settings snapshot (endpoint, api_key, model)
            timeout: Hard deadline for the whole HTTP call, in seconds
            max_candidates: Number of top keyword results sent to the model
            max_ids: Maximum ids the model is asked to return
            http_client: Shared client to use (a new one per call if omitted)
        """
        self.config = config
        self.timeout = timeout
        self.max_candidates = max_candidates
        self.max_ids = max_ids
        self._http_client = http_client

    def build_prompt(self, query: str, candidates: Sequence[Guide]) -> str:
        """Compose the single user message; only id/title/summary/tags are included."""
        payload = [
            {
                "id": guide.id,
                "title": guide.title,
                "summary": guide.summary,
                "tags": list(guide.tags),
            }
            for guide in candidates
        ]
        return self.PROMPT_TEMPLATE.format(
            query=query,
            guides=json.dumps(payload, ensure_ascii=False, indent=2),
            max_ids=self.max_ids,
        )

    def build_request_body(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.config.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    async def _post(self, body: Dict[str, Any]) -> httpx.Response:
        """
        POST the request under a hard deadline.

        asyncio.wait_for cancels the in-flight request when the deadline
        passes, so a late response can never be observed.
        """
        client = self._http_client or httpx.AsyncClient(timeout=self.timeout)
        try:
            return await asyncio.wait_for(
                client.post(self.config.endpoint, json=body, headers=self._headers()),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise RerankError(
                RerankErrorKind.TIMEOUT,
                f"No response from rerank endpoint within {self.timeout}s",
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            # InvalidURL (malformed endpoint) is not an HTTPError subclass
            raise RerankError(RerankErrorKind.TRANSPORT, f"HTTP error calling rerank endpoint: {e}") from e
        finally:
            if self._http_client is None:
                await client.aclose()

    @staticmethod
    def _message_content(response: httpx.Response) -> str:
        if not response.is_success:
            raise RerankError(
                RerankErrorKind.STATUS,
                f"Rerank endpoint returned status {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RerankError(RerankErrorKind.PARSE, f"Response body is not JSON: {e}") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise RerankError(RerankErrorKind.FORMAT, "Response has no choices[0].message.content") from e

        if not isinstance(content, str):
            raise RerankError(RerankErrorKind.FORMAT, f"Message content is not text: {type(content).__name__}")
        return content

    async def rerank(self, query: str, guides: Sequence[Guide]) -> RerankOutcome:
        """
        Rerank the top keyword candidates with the LLM.

        Args:
            query: Raw user query
            guides: Keyword-ranked guides (only the first max_candidates are used)

        Returns:
            RerankOutcome with a permutation of the candidate set, or a failure
        """
        candidates = list(guides)[:self.max_candidates]
        if not candidates:
            return RerankOutcome.success([])

        logger.info(
            f"Reranking {len(candidates)} candidates with {self.config.model} "
            f"(timeout={self.timeout}s)"
        )

        try:
            prompt = self.build_prompt(query, candidates)
            response = await self._post(self.build_request_body(prompt))
            content = self._message_content(response)
            logger.debug(f"Rerank raw response (first 500 chars): {content[:500]}")
            ids = extract_id_list(content)
        except RerankError as e:
            return RerankOutcome.failure(e.kind, str(e))

        reordered = reorder(ids, candidates)
        logger.info(f"Rerank complete: model listed {len(ids)} ids for {len(candidates)} candidates")
        return RerankOutcome.success(reordered)

    def get_model_info(self) -> dict:
        """Get information about the LLM reranker."""
        return {
            "name": self.config.model,
            "type": "llm-chat",
            "endpoint": self.config.endpoint,
            "timeout": self.timeout,
            "max_candidates": self.max_candidates,
        }

    async def close(self):
        """Close the shared HTTP client, if one was supplied."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None
