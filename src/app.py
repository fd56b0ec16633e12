"""Ratings FastAPI application.

Web server that processes review commands synchronously via HTTP. Every
request runs inside the ``ratings`` domain context.

Usage:
    uvicorn src.app:app --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# The domain is initialized at module level so uvicorn workers share it.
# PROTEAN_ENV controls which config overlay is applied (see domain.toml).
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers
from ratings.domain import ratings
from ratings.utils.logging import add_context, clear_context

ratings.init()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Ratings API",
    description="Provider reviews, rating summaries and moderation",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the ratings domain context and fresh log context for each request."""
    clear_context()
    add_context(method=request.method, path=request.url.path)
    with ratings.domain_context():
        response = await call_next(request)
    return response


# ---------------------------------------------------------------------------
# Routers and error rendering
# ---------------------------------------------------------------------------
from ratings.api import admin_router, provider_router, register_error_handlers, review_router  # noqa: E402

app.include_router(review_router)
app.include_router(provider_router)
app.include_router(admin_router)

register_exception_handlers(app)
register_error_handlers(app)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": {"name": ratings.name}})
