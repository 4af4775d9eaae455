"""Outermost middleware: last-resort Problem Details for the simulation API.

Routes already turn their own failures into ``HTTPException``; this catches
whatever escapes them (an enum value the engine rejects, a bug in a
formula) so a client never sees a bare traceback. Every response carries an
``X-Correlation-ID``, reusing the caller's when one was sent.
"""

import uuid

from fastapi import Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from archsim.infrastructure.api.schemas.error_schema import ProblemDetails, status_text
from archsim.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Maps uncaught exceptions to application/problem+json responses."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request failed",
                correlation_id=correlation_id,
                path=request.url.path,
                method=request.method,
                error=str(exc),
                exc_info=exc,
            )
            return self._problem_response(
                self._to_problem(exc, request.url.path, correlation_id)
            )

        response.headers[CORRELATION_HEADER] = correlation_id
        return response

    @staticmethod
    def _to_problem(exc: Exception, path: str, correlation_id: str) -> ProblemDetails:
        """HTTPException keeps its status, ValueError is the caller's fault, the rest is ours."""
        if isinstance(exc, HTTPException):
            status_code = exc.status_code
            detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
            problem_type = "about:blank"
        elif isinstance(exc, ValueError):
            status_code = status.HTTP_400_BAD_REQUEST
            detail = str(exc)
            problem_type = "https://httpstatuses.com/400"
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            detail = "An unexpected error occurred"
            problem_type = "https://httpstatuses.com/500"

        return ProblemDetails(
            type=problem_type,
            title=status_text(status_code),
            status=status_code,
            detail=detail,
            instance=path,
            correlation_id=correlation_id,
        )

    @staticmethod
    def _problem_response(problem: ProblemDetails) -> JSONResponse:
        return JSONResponse(
            status_code=problem.status,
            content=problem.model_dump(exclude_none=True),
            media_type="application/problem+json",
            headers={CORRELATION_HEADER: problem.correlation_id or ""},
        )
