"""FastAPI application exposing fixtures, predictions, points and results."""

from __future__ import annotations

import sqlite3
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Iterator

from fastapi import Body, Depends, FastAPI, Path, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.schemas import (
    ErrorResponse,
    FixtureOut,
    PointsOut,
    PredictionViewOut,
    PredictionOut,
    ResultOut,
    SubmissionOut,
)
from src.application.services.fixtures_service import FixtureCatalog
from src.application.services.lifecycle_service import FixtureLifecycleService
from src.application.services.predictions_service import PredictionsService
from src.application.validation import MAX_ID, parse_prediction, parse_result
from src.config.settings import Settings
from src.db.connection import connect, init_database
from src.domain.errors import (
    FixtureNotFoundError,
    InvalidInputError,
    PredictionLockedError,
    StorageError,
    TippspielError,
)
from src.domain.value_objects.enums import SubmissionOutcome
from src.logging_config import get_logger

logger = get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

_STATUS_BY_ERROR: dict[type[TippspielError], int] = {
    InvalidInputError: status.HTTP_400_BAD_REQUEST,
    FixtureNotFoundError: status.HTTP_404_NOT_FOUND,
    PredictionLockedError: status.HTTP_409_CONFLICT,
}


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _error_response(
    request: Request,
    http_status: int,
    code: str,
    message: str,
    fields: list[str] | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=code, message=message, fields=fields or [], request_id=_request_id(request)
    )
    return JSONResponse(status_code=http_status, content=body.model_dump())


def _add_request_tagging(app: FastAPI) -> None:
    """Give every request an id, echo it back and log one access line per request."""

    @app.middleware("http")
    async def _tag_request(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "Request handled",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round((time.perf_counter() - started) * 1000, 1),
            },
        )
        return response


def _add_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(TippspielError)
    async def _domain_error(request: Request, exc: TippspielError) -> JSONResponse:
        if isinstance(exc, StorageError):
            logger.error(
                "Request failed on storage",
                extra={
                    "request_id": _request_id(request),
                    "method": request.method,
                    "path": request.url.path,
                },
            )
            return _error_response(
                request, status.HTTP_500_INTERNAL_SERVER_ERROR, exc.code, "Internal server error"
            )
        http_status = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        fields = exc.fields if isinstance(exc, InvalidInputError) else []
        logger.info(
            "Request rejected",
            extra={
                "request_id": _request_id(request),
                "path": request.url.path,
                "error": exc.code,
                "reason": exc.message,
            },
        )
        return _error_response(request, http_status, exc.code, exc.message, fields)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = sorted({str(err["loc"][-1]) for err in exc.errors() if err.get("loc")})
        return _error_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            InvalidInputError.code,
            "Request could not be parsed",
            fields,
        )


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        from src.config.settings import settings as default_settings

        settings = default_settings
    cfg = settings

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        conn = connect(cfg.db_path)
        try:
            init_database(conn, seed=cfg.seed_demo_data)
        finally:
            conn.close()
        logger.info("API ready", extra={"db_path": str(cfg.db_path)})
        yield

    app = FastAPI(title="Tippspiel", lifespan=lifespan)
    app.state.settings = cfg
    _add_request_tagging(app)
    _add_exception_handlers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(cfg.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )

    def get_conn() -> Iterator[sqlite3.Connection]:
        conn = connect(cfg.db_path, check_same_thread=False)
        try:
            yield conn
        finally:
            conn.close()

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/fixtures", response_model=list[FixtureOut])
    def list_fixtures(conn: sqlite3.Connection = Depends(get_conn)) -> list[FixtureOut]:
        return [FixtureOut.from_fixture(f) for f in FixtureCatalog(conn).list_all()]

    @app.post("/api/predictions", response_model=SubmissionOut)
    def submit_prediction(
        response: Response,
        payload: dict[str, Any] = Body(...),
        conn: sqlite3.Connection = Depends(get_conn),
    ) -> SubmissionOut:
        cmd = parse_prediction(payload, default_user_id=cfg.default_user_id)
        result = PredictionsService(conn).submit_prediction(
            cmd.fixture_id, cmd.user_id, cmd.predicted_home, cmd.predicted_away
        )
        if result.outcome is SubmissionOutcome.CREATED:
            response.status_code = status.HTTP_201_CREATED
            message = "Prediction saved"
        else:
            message = "Prediction updated"
        return SubmissionOut(
            message=message,
            outcome=result.outcome.value,
            prediction=PredictionOut.from_prediction(result.prediction),
        )

    @app.get("/api/users/{user_id}/predictions", response_model=list[PredictionViewOut])
    def list_user_predictions(
        user_id: int = Path(..., ge=1, le=MAX_ID),
        conn: sqlite3.Connection = Depends(get_conn),
    ) -> list[PredictionViewOut]:
        views = PredictionsService(conn).list_for_user(user_id)
        return [PredictionViewOut.from_view(v) for v in views]

    @app.get("/api/users/{user_id}/points", response_model=PointsOut)
    def user_points(
        user_id: int = Path(..., ge=1, le=MAX_ID),
        conn: sqlite3.Connection = Depends(get_conn),
    ) -> PointsOut:
        return PointsOut(user_id=user_id, points=PredictionsService(conn).total_points(user_id))

    @app.put("/api/admin/fixtures/{fixture_id}/result", response_model=ResultOut)
    def submit_result(
        fixture_id: str,
        payload: dict[str, Any] = Body(...),
        conn: sqlite3.Connection = Depends(get_conn),
    ) -> ResultOut:
        cmd = parse_result(fixture_id, payload)
        summary = FixtureLifecycleService(conn).submit_result(
            cmd.fixture_id, cmd.home_score, cmd.away_score
        )
        return ResultOut.from_summary(summary)

    return app
