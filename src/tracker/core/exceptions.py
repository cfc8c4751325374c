"""Domain error taxonomy and the HTTP exception handlers that translate it."""

from uuid import UUID

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.tracker.core.logging import get_logger

logger = get_logger(__name__)


class TrackerError(Exception):
    """Base class for errors raised by the hierarchy and membership core."""


class NotFoundError(TrackerError):
    """A project or organization required as a precondition does not exist."""

    def __init__(self, entity: str, entity_id: UUID | str, org_id: UUID | None = None):
        self.entity = entity
        self.entity_id = entity_id
        self.org_id = org_id
        super().__init__(f"{entity.capitalize()} {entity_id} not found")


class CycleViolationError(TrackerError):
    """Reparenting would make a project its own ancestor."""

    def __init__(self, project_id: UUID, new_parent_id: UUID):
        self.project_id = project_id
        self.new_parent_id = new_parent_id
        super().__init__(
            f"Cannot move project {project_id} under {new_parent_id}: "
            "the new parent is the project itself or one of its descendants"
        )


class TransactionFailure(TrackerError):
    """A multi-statement operation could not be applied consistently and was rolled back."""


def _error_body(detail: str) -> dict[str, str | None]:
    return {"detail": detail, "request_id": correlation_id.get()}


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that include request_id in responses."""

    @app.exception_handler(StarletteHTTPException)
    async def starlette_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.detail))

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_body(str(exc)),
        )

    @app.exception_handler(CycleViolationError)
    async def cycle_violation_handler(request: Request, exc: CycleViolationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_error_body(str(exc)),
        )

    @app.exception_handler(TransactionFailure)
    async def transaction_failure_handler(
        request: Request, exc: TransactionFailure
    ) -> JSONResponse:
        logger.error(
            "Transaction rolled back",
            error=str(exc),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body("Operation failed and was rolled back"),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error",
                "request_id": request_id,
            },
        )
