"""
Static front-end serving with client-side routing fallback.
"""

from __future__ import annotations

from starlette.exceptions import HTTPException
from starlette.routing import Match, Route
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

INDEX_DOCUMENT = "index.html"


def is_backend_path(path: str) -> bool:
    """API and health-check paths are never answered with the front-end."""
    return path.startswith("/api") or path == "/health"


def _allowed_methods(scope: Scope) -> set[str]:
    """Methods of app routes whose path matches but whose method did not."""
    methods: set[str] = set()
    router = getattr(scope.get("app"), "router", None)
    for route in getattr(router, "routes", []):
        if not isinstance(route, Route):
            continue
        match, _ = route.matches(scope)
        if match == Match.PARTIAL and route.methods:
            methods |= route.methods
    return methods


class SinglePageStaticFiles(StaticFiles):
    """
    Serves files from the bundle directory, answering unknown paths with
    ``index.html`` so the front-end router can handle them.
    """

    async def get_response(self, path: str, scope: Scope):
        if is_backend_path(scope["path"]):
            # A mount at "/" fully matches every path, so a known API path
            # reached with the wrong method ends up here instead of a 405.
            allowed = _allowed_methods(scope)
            if allowed:
                raise HTTPException(
                    status_code=405,
                    detail="Method Not Allowed",
                    headers={"Allow": ", ".join(sorted(allowed))},
                )
            raise HTTPException(status_code=404, detail="Not Found")
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
        return await super().get_response(INDEX_DOCUMENT, scope)
