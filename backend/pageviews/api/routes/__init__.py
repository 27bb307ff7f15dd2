"""Route Modules — one file per endpoint family.

Invariants:
    - Each module defines its own APIRouter with route_class=AnyMethodRoute
    - Reserved paths (/_realtime, /_healthcheck) match exactly and accept every method
    - analytics.router holds a catch-all and MUST be included last (see main.py)
    - No request is rejected by routing for its method: unlisted verbs
      (TRACE, PROPFIND, ...) reach the handler and get its 400 {"error": ...}

Design Decisions:
    - Explicit registration in main.py over auto-discovery (ADR: ExMA anti-pattern)
    - Custom route_class instead of a 405 exception handler: the handler's
      all → path → method precedence holds for every verb
"""

from fastapi.routing import APIRoute
from starlette.routing import Match

# Methods declared on the routes; AnyMethodRoute also dispatches any other verb.
ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}


class AnyMethodRoute(APIRoute):
    """APIRoute that dispatches every HTTP method to its endpoint."""

    def matches(self, scope):
        match, child_scope = super().matches(scope)
        if match == Match.PARTIAL:
            match = Match.FULL
        return match, child_scope

    async def handle(self, scope, receive, send):
        await self.app(scope, receive, send)
