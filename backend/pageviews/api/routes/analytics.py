"""Analytics Route — catch-all endpoint that counts, records and exports page views.

Invariants:
    - Precedence: ?all=true export → path check → OPTIONS preflight → method check → count/record
    - ?all=true ignores the path requirement ("/" exports every page)
    - The count is read BEFORE the append: incrementing hits report count + 1
    - ?inc=false never appends; the literal "false" is the only opt-out
    - A malformed POST body is logged and treated as "no meta", never a 500
    - Any storage failure is logged with its cause and surfaced as 500 "Internal server error."
    - Every response, errors included, carries Access-Control-Allow-Origin: *

Design Decisions:
    - Query strings parsed by core/query_params.py instead of typed Query():
      bounds use leading-integer parsing, which Pydantic int coercion rejects
    - Storage failures re-raised as StorageError (not retried) so the global
      handler shapes the response
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse

from pageviews.api.dependencies import get_view_counter
from pageviews.api.routes import ALL_METHODS, CORS_HEADERS, AnyMethodRoute
from pageviews.core.domain_types import is_page_path, now_ms
from pageviews.core.errors import (
    MissingPathError, StorageError, UnsupportedMethodError,
)
from pageviews.core.query_params import (
    parse_time_window, should_increment, wants_all,
)
from pageviews.schemas.views import (
    ExportResponse, PageViewsOut, ViewCountResponse,
)
from pageviews.services.view_counter import ViewCounter

logger = logging.getLogger(__name__)
router = APIRouter(tags=["analytics"], route_class=AnyMethodRoute)

_COUNTING_METHODS = ("GET", "POST")
_PREFLIGHT_HEADERS = {**CORS_HEADERS, "Access-Control-Allow-Headers": "content-type"}


async def read_meta(request: Request):
    """Return body["meta"] from a JSON body, or None if it cannot be read."""
    try:
        body = await request.json()
    except ValueError as exc:
        logger.warning(
            f"Failed parsing meta: {exc}",
            extra={"pathname": request.url.path},
        )
        return None
    if not isinstance(body, dict):
        logger.warning(
            f"Failed parsing meta: expected a JSON object, got {type(body).__name__}",
            extra={"pathname": request.url.path},
        )
        return None
    return body.get("meta")


@router.api_route("/{pathname:path}", methods=ALL_METHODS)
async def track_page(
    request: Request, counter: ViewCounter = Depends(get_view_counter),
):
    """Count a page view, read a count, or export all views."""
    pathname = request.url.path
    query = request.query_params
    window = parse_time_window(query.get("before"), query.get("after"))

    if wants_all(query.get("all")):
        return await _export(counter, pathname, window)

    if not is_page_path(pathname):
        raise MissingPathError(headers=CORS_HEADERS)

    if request.method == "OPTIONS":
        return Response(
            status_code=status.HTTP_204_NO_CONTENT, headers=_PREFLIGHT_HEADERS,
        )

    if request.method not in _COUNTING_METHODS:
        raise UnsupportedMethodError(request.method, headers=CORS_HEADERS)

    increment = should_increment(query.get("inc"))
    try:
        current = await counter.current_count(pathname, window)
        meta = await read_meta(request) if request.method == "POST" else None
        if increment:
            await counter.record_view(pathname, meta)
    except Exception as exc:
        logger.error(
            f"Failed to count view: {exc}",
            exc_info=True, extra={"pathname": pathname},
        )
        raise StorageError("count", headers=CORS_HEADERS) from exc

    body = ViewCountResponse(views=current + 1 if increment else current)
    return JSONResponse(content=body.model_dump(), headers=CORS_HEADERS)


async def _export(counter: ViewCounter, pathname: str, window) -> JSONResponse:
    try:
        pages = await counter.export(pathname, window)
    except Exception as exc:
        logger.error(
            f"Failed to export views: {exc}",
            exc_info=True, extra={"pathname": pathname},
        )
        raise StorageError("export", headers=CORS_HEADERS) from exc

    body = ExportResponse(
        data=[PageViewsOut.from_domain(p) for p in pages], time=now_ms(),
    )
    return JSONResponse(
        content=body.model_dump(exclude_none=True), headers=CORS_HEADERS,
    )
