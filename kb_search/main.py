"""
KB Search - FastAPI application for guide search

Exposes the search core to a UI process:
- Keyword ranking over the posted guide collection (always)
- Optional LLM reranking via an OpenAI-compatible endpoint, with fallback
  to keyword results on any failure

The service is stateless: every request carries its own guide snapshot.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .config import DEFAULT_RERANK_MODEL, RerankConfig, Settings, load_environment
from .logging_config import setup_logging
from .models import Guide
from .orchestrator import SearchOrchestrator

load_environment()
settings = Settings.from_env()

logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"
APP_START_TIME = datetime.now(timezone.utc)

orchestrator = SearchOrchestrator(
    max_results=settings.max_results,
    rerank_timeout=settings.rerank_timeout,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup"""
    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(
        log_file=settings.log_file,
        console_level=console_level,
        file_level=logging.DEBUG  # Always DEBUG in file for troubleshooting
    )
    logger.info(
        f"KB Search {APP_VERSION} started "
        f"(rerank={'on' if settings.rerank.is_configured else 'off'}, max_results={settings.max_results})"
    )
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="KB Search API",
    description="Keyword search over step-by-step guides with optional LLM reranking",
    version=APP_VERSION,
    lifespan=lifespan,
)

# CORS middleware for the browser UI
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class HealthResponse(BaseModel):
    status: str
    version: str
    rerank_configured: bool
    started_at: str
    uptime_seconds: float


class RerankSettings(BaseModel):
    enabled: bool = False
    endpoint: str = ""
    api_key: str = ""
    model: str = DEFAULT_RERANK_MODEL

    def to_config(self) -> RerankConfig:
        return RerankConfig(
            enabled=self.enabled,
            endpoint=self.endpoint.strip(),
            api_key=self.api_key.strip(),
            model=self.model.strip() or DEFAULT_RERANK_MODEL,
        )


class SearchRequest(BaseModel):
    query: str = Field(default="", description="Free-text query (blank returns all guides)")
    guides: List[Guide] = Field(default_factory=list, description="Guide collection snapshot")
    rerank: Optional[RerankSettings] = Field(
        default=None,
        description="Per-request rerank settings (server environment settings if omitted)"
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "query": "reset password",
                    "guides": [
                        {
                            "id": "pw-reset",
                            "title": "Password Reset Procedure",
                            "summary": "Step-by-step guide to reset user passwords",
                            "tags": ["password", "active-directory"],
                            "steps": [{"title": "Verify User Identity", "bodyRich": "<p>Ask for employee ID</p>"}],
                        }
                    ],
                }
            ]
        }
    }


class HighlightItem(BaseModel):
    field: str
    text: str


class SearchResultItem(BaseModel):
    guide: Guide
    score: float
    highlights: List[HighlightItem] = Field(default_factory=list)


class SearchResponse(BaseModel):
    query: str
    total: int
    reranked: bool
    results: List[SearchResultItem]


# Routes
@app.get("/", response_model=dict)
async def root():
    """Root endpoint"""
    return {
        "service": "KB Search API",
        "version": APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint"""
    uptime = (datetime.now(timezone.utc) - APP_START_TIME).total_seconds()
    return HealthResponse(
        status="healthy",
        version=APP_VERSION,
        rerank_configured=settings.rerank.is_configured,
        started_at=APP_START_TIME.isoformat(),
        uptime_seconds=round(uptime, 2),
    )


@app.post("/v1/search", response_model=SearchResponse)
async def search_guides(request: SearchRequest):
    """
    Search the posted guides.

    Scores and highlights come from keyword ranking; the order is the
    reranked order when the LLM stage succeeded.
    """
    config = request.rerank.to_config() if request.rerank is not None else settings.rerank

    result = await orchestrator.run(request.query, request.guides, config, highlights=True)

    # Side channel: keyword scores/highlights keyed by guide id
    scored = {item.guide.id: item for item in result.scored}

    items = []
    for guide in result.guides:
        keyword = scored.get(guide.id)
        items.append(SearchResultItem(
            guide=guide,
            score=keyword.score if keyword else 0.0,
            highlights=[
                HighlightItem(field=h.field, text=h.text)
                for h in (keyword.highlights if keyword else [])
            ],
        ))

    logger.info(
        f"Search query={request.query!r}: {len(items)} results "
        f"(reranked={result.reranked}, rerank_error={result.rerank_error})"
    )
    return SearchResponse(
        query=request.query,
        total=len(items),
        reranked=result.reranked,
        results=items,
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler"""
    logger.exception(f"Unhandled error on {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc),
        },
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "kb_search.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=True,  # Development only
    )
