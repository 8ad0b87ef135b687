"""Sasya Mantra storefront API.

Serves the identity (accounts, sessions, roles) and ordering (orders,
tracking, administration) domains over JSON/HTTP. Each request is wrapped in
the domain context that owns its URL prefix.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay (memory stores by default, SQLite
# under "production").
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from identity.domain import identity  # noqa: E402
from ordering.domain import ordering  # noqa: E402

from shared.errors import register_exception_handlers
from shared.web import install_domain_context

identity.init()
ordering.init()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
ROUTE_DOMAIN_MAP = {
    "/auth": identity,
    "/users": identity,
    "/orders": ordering,
    "/track": ordering,
}

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Sasya Mantra Storefront API",
    description="Herbal hair-oil storefront: accounts, orders, tracking and administration",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_domain_context(app, ROUTE_DOMAIN_MAP)
register_exception_handlers(app)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from identity.api import auth_router, users_router  # noqa: E402
from ordering.api import order_router, tracking_router  # noqa: E402

app.include_router(auth_router)
app.include_router(users_router)
app.include_router(order_router)
app.include_router(tracking_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "identity": {"name": identity.name},
                "ordering": {"name": ordering.name},
            },
        }
    )
