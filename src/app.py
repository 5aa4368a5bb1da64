"""TechMarket FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
``techmarket`` domain context and carries a request id in its log lines.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Initialized at module level so uvicorn workers share it. init_domain() imports
# the nested element modules before init() so their handlers register.
# PROTEAN_ENV selects the config overlay in domain.toml ("test", "production").
import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from techmarket.elements import init_domain
from techmarket.errors import register_exception_handlers
from techmarket.utils.logging import add_context, clear_context

techmarket = init_domain()

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="TechMarket API",
    description="Product catalogue, shopping carts and product reviews",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the domain context and bind a request id for each request."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        with techmarket.domain_context():
            response = await call_next(request)
    finally:
        clear_context()
    response.headers["X-Request-ID"] = request_id
    return response


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from techmarket.cart.api import cart_router  # noqa: E402
from techmarket.catalogue.api import category_router, product_router  # noqa: E402
from techmarket.identity.api import user_router  # noqa: E402
from techmarket.reviews.api import review_router  # noqa: E402

app.include_router(category_router)
app.include_router(product_router)
app.include_router(user_router)
app.include_router(cart_router)
app.include_router(review_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": techmarket.name})
