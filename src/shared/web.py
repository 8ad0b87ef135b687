"""Request plumbing shared by the API application and its tests."""

from fastapi import FastAPI, Request

from shared.logging import add_context, clear_context


def resolve_domain(route_map: dict, path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in route_map.items():
        if path.startswith(prefix):
            return domain
    return None


def install_domain_context(app: FastAPI, route_map: dict) -> None:
    """Push the matching Protean domain context around each request."""

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        domain = resolve_domain(route_map, request.url.path)
        if domain is None:
            # Health check, docs and the like
            return await call_next(request)

        add_context(domain=domain.name, method=request.method, path=request.url.path)
        try:
            with domain.domain_context():
                return await call_next(request)
        finally:
            clear_context()
