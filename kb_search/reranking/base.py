"""
Abstract base class and result types for reranking implementations.

Rerankers report expected failures as values (RerankOutcome) rather than
raising, so the search orchestrator can fall back to keyword results.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from ..models import Guide


class RerankErrorKind(str, Enum):
    """Recoverable rerank failure categories"""
    TIMEOUT = "timeout"        # no response within the deadline
    TRANSPORT = "transport"    # connection / protocol failure
    STATUS = "status"          # non-success HTTP status
    PARSE = "parse"            # no JSON array found, or invalid JSON
    FORMAT = "format"          # JSON of an unexpected shape
    INTERNAL = "internal"      # unexpected exception inside the reranker


class RerankError(Exception):
    """Raised inside a reranker; converted to a RerankOutcome before returning."""

    def __init__(self, kind: RerankErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


@dataclass
class RerankOutcome:
    """Result of one rerank attempt: reordered guides, or an error kind"""
    guides: List[Guide] = field(default_factory=list)
    error_kind: Optional[RerankErrorKind] = None
    error_message: str = ""

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, guides: List[Guide]) -> "RerankOutcome":
        return cls(guides=guides)

    @classmethod
    def failure(cls, kind: RerankErrorKind, message: str) -> "RerankOutcome":
        return cls(error_kind=kind, error_message=message)


class BaseReranker(ABC):
    """
    Abstract base class for reranking implementations.

    All rerankers must implement this interface to be swappable.
    """

    @abstractmethod
    async def rerank(self, query: str, guides: Sequence[Guide]) -> RerankOutcome:
        """
        Rerank keyword-ranked guides by semantic relevance.

        Args:
            query: Raw user query
            guides: Keyword-ranked guides, best first

        Returns:
            RerankOutcome. On success `guides` is a permutation of the
            candidate set; on failure `error_kind` is set and `guides` is empty.
        """
        pass

    @abstractmethod
    def get_model_info(self) -> dict:
        """
        Get information about the reranker model.

        Returns:
            Dict with keys: name, type, endpoint
        """
        pass

    async def close(self):
        """Optional cleanup (close HTTP clients, etc.)"""
        pass
