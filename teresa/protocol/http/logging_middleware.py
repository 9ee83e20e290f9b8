from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Callable, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "x-request-id"
_GAMES_PREFIX = "/api/games/"


def game_id_from_path(path: str) -> Optional[str]:
    """Return the session id in ``/api/games/<id>/...`` paths, if any."""
    if not path.startswith(_GAMES_PREFIX):
        return None
    game_id = path[len(_GAMES_PREFIX):].split("/", 1)[0]
    return game_id or None


def level_for_status(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestIDLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and echo its ID in ``x-request-id``.

    The ID comes from the client's header when present, otherwise a UUID4.
    Failed requests log at WARNING (4xx) or ERROR (5xx).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        fields: Dict[str, Any] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        game_id = game_id_from_path(request.url.path)
        if game_id is not None:
            fields["game_id"] = game_id

        started = time.perf_counter()
        response = await call_next(request)
        fields["status_code"] = response.status_code
        fields["duration_ms"] = int((time.perf_counter() - started) * 1000)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.log(level_for_status(response.status_code), "request_done", extra=fields)
        return response
