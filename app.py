"""
PostLens FastAPI Application

A REST API server for browsing a corpus of posts.
Provides endpoints for faceted filtering, tag listing, post detail with
reconstructed content blocks, and replacing the corpus.
"""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from postlens.config import Config
from postlens.core.corpus import CorpusStore
from postlens.models import FilterCriteria
from postlens.services import PostBrowser, PostDetail, PostListing, TagGroups
from postlens.utils import CorpusLoadError, NotFoundError, get_logger, setup_logging

# Global service instances
store: CorpusStore | None = None
browser: PostBrowser | None = None
logger = get_logger(__name__)


# Pydantic models for API
class UploadCorpusRequest(BaseModel):
    """Request model for replacing the corpus."""

    text: str = Field(..., description="Raw corpus text (JSONL or JSON)")
    filename: str | None = Field(
        default=None, description="Source file name; a .jsonl suffix forces line-delimited decoding"
    )


class CorpusStatusResponse(BaseModel):
    """Corpus generation status."""

    generation: int
    posts: int
    source: str | None
    loaded_at: str | None
    last_error: str | None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    corpus_generation: int
    corpus_size: int


def _corpus_status() -> CorpusStatusResponse:
    current = store.current
    return CorpusStatusResponse(
        generation=current.generation,
        posts=len(current),
        source=current.source,
        loaded_at=current.loaded_at.isoformat() if current.loaded_at else None,
        last_error=store.last_error,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown."""
    global store, browser

    # Load configuration from environment or use defaults
    config = Config.from_env()

    setup_logging(config.logging)

    logger.info("Starting PostLens server")
    logger.info(
        f"Configuration: corpus={config.corpus.path}, "
        f"load_on_startup={config.corpus.load_on_startup}"
    )

    store = CorpusStore()
    browser = PostBrowser(store, config)

    if config.corpus.load_on_startup:
        corpus_path = Path(config.corpus.path)
        if corpus_path.exists():
            try:
                await store.load_file(corpus_path)
            except CorpusLoadError:
                # Uploads can still replace the empty corpus
                logger.warning("Serving an empty corpus")
        else:
            store.last_error = f"Corpus file not found: {corpus_path}"
            logger.warning(store.last_error)

    yield

    logger.info("Shutting down PostLens server")
    store = None
    browser = None


# Create FastAPI app
app = FastAPI(
    title="PostLens API",
    description="Faceted browsing of authored posts with reconstructed content layout",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    if not store:
        return HealthResponse(status="initializing", corpus_generation=0, corpus_size=0)
    current = store.current
    return HealthResponse(
        status="healthy",
        corpus_generation=current.generation,
        corpus_size=len(current),
    )


@app.get("/tags", response_model=TagGroups)
async def get_tags():
    """
    List every facet value in the corpus.

    Values are sorted per group. Each carries its raw id (used for filtering)
    and a display label with underscores rendered as spaces.
    """
    if not browser:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return browser.tag_groups()


@app.get("/posts", response_model=PostListing)
async def list_posts(
    title: str = Query(default="", description="Title substring"),
    author: str = Query(default="", description="Author substring"),
    models: list[str] | None = Query(default=None, description="Selected model ids"),
    topics: list[str] | None = Query(default=None, description="Selected topic ids"),
    assignments: list[str] | None = Query(default=None, description="Selected assignment ids"),
):
    """
    List posts matching the filters.

    Text filters are case-insensitive substring matches. Facet values are
    OR-ed within a group and groups are AND-ed together. Results keep
    corpus order.
    """
    if not browser:
        raise HTTPException(status_code=503, detail="Service not initialized")

    criteria = FilterCriteria(
        title_query=title,
        author_query=author,
        selected_models=frozenset(models or ()),
        selected_topics=frozenset(topics or ()),
        selected_assignments=frozenset(assignments or ()),
    )
    return browser.list_posts(criteria)


@app.get("/posts/{index}", response_model=PostDetail)
async def get_post(index: int):
    """
    Retrieve one post with its reconstructed content.

    Content blocks are paragraphs and images in reading order, followed by
    link blocks and then file blocks. When no block could be produced,
    `empty_message` carries the fallback text.
    """
    if not browser:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        return browser.get_detail(index)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message) from e


@app.get("/corpus", response_model=CorpusStatusResponse)
async def get_corpus_status():
    """Current corpus generation and the last load error, if any."""
    if not store:
        raise HTTPException(status_code=503, detail="Service not initialized")
    return _corpus_status()


@app.post("/corpus", response_model=CorpusStatusResponse)
async def upload_corpus(request: UploadCorpusRequest):
    """
    Replace the whole corpus.

    The text is decoded completely before it replaces the current corpus.
    On a decoding failure the current corpus stays installed and the
    error is returned.
    """
    if not store:
        raise HTTPException(status_code=503, detail="Service not initialized")

    try:
        store.load_text(request.text, source_name=request.filename)
    except CorpusLoadError as e:
        raise HTTPException(status_code=400, detail=e.message) from e

    return _corpus_status()


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "PostLens API",
        "version": "1.0.0",
        "description": "Faceted browsing of authored posts with reconstructed content layout",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True, log_level="info")
