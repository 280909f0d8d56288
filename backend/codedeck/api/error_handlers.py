"""Error Handlers — render CodeDeck errors, request validation failures, and crashes as JSON.

Invariants:
    - CodeDeckError → its own http_status and to_response() envelope
    - RequestValidationError → 400 VALIDATION_ERROR with one detail per offending field
    - Anything else → 500 INTERNAL_ERROR, no exception text in the body
    - 4xx logged at WARNING, 5xx at ERROR
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from codedeck.core.errors import CodeDeckError, ErrorSeverity

logger = logging.getLogger(__name__)


def _envelope(
    code: str, message: str, category: str, severity: ErrorSeverity, **extra,
) -> dict:
    return {
        "error": {
            "code": code,
            "message": message,
            "category": category,
            "severity": severity.value,
            **extra,
        },
    }


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(CodeDeckError)
    async def codedeck_error_handler(request: Request, exc: CodeDeckError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"{exc.code} on {request.url.path}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "operation": exc.context.operation,
                "problem_id": exc.context.problem_id,
                "commit_hash": exc.context.commit_hash,
            },
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        details = [
            {
                "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ]
        logger.warning(
            f"Rejected request to {request.url.path}: "
            + ", ".join(d["field"] or "body" for d in details),
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_envelope(
                "VALIDATION_ERROR", "Invalid request data", "validation",
                ErrorSeverity.ERROR, details=details,
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__} on {request.url.path}",
            exc_info=True, extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_envelope(
                "INTERNAL_ERROR", "An unexpected error occurred", "internal",
                ErrorSeverity.CRITICAL,
            ),
        )
