"""FastAPI server that exposes quiz authoring and submission endpoints."""

from __future__ import annotations

import logging
import secrets
from threading import Thread

from fastapi import Depends, FastAPI, File, Header, Query, Request, Response, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from quiz_guard.constants.about import APP_NAME, APP_VERSION
from quiz_guard.constants.network_constants import TEACHER_TOKEN_HEADER
from quiz_guard.core.config import Settings
from quiz_guard.core.errors import (
    QuizNotFoundError,
    QuizValidationError,
    StoreError,
    SubmissionError,
)
from quiz_guard.core.quiz_manager import QuizManager
from quiz_guard.server.schemas import (
    AttemptOut,
    QuizOut,
    QuizPayload,
    ScoreboardRowOut,
    SubmissionOut,
    SubmissionPayload,
)

logger = logging.getLogger(__name__)

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    if first.get("type") == "missing" and not location:
        return "Missing required fields"
    if location:
        return f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    return f"Invalid request: {first.get('msg', 'invalid value')}"


def _install_error_handlers(app: FastAPI) -> None:
    """Map domain errors onto ``{"error": message}`` bodies."""

    @app.exception_handler(QuizValidationError)
    async def validation_error_handler(request: Request, exc: QuizValidationError):
        return _error(400, exc.message)

    @app.exception_handler(SubmissionError)
    async def submission_error_handler(request: Request, exc: SubmissionError):
        return _error(400, str(exc))

    @app.exception_handler(QuizNotFoundError)
    async def not_found_handler(request: Request, exc: QuizNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        # Already logged with its cause by the store.
        return _error(500, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _token_matches(settings: Settings, presented: str | None) -> bool:
    if settings.teacher_token is None or presented is None:
        return False
    return secrets.compare_digest(settings.teacher_token.encode(), presented.encode())


def _teacher_dependencies(settings: Settings):
    def require_author(
        token: str | None = Header(default=None, alias=TEACHER_TOKEN_HEADER),
    ) -> None:
        """Writes are open until a teacher token is configured."""
        if settings.teacher_token is None:
            return
        if not _token_matches(settings, token):
            raise StarletteHTTPException(status_code=401, detail="Teacher token required")

    def require_teacher(
        token: str | None = Header(default=None, alias=TEACHER_TOKEN_HEADER),
    ) -> None:
        """Answer keys and results are only ever shown to an authenticated teacher."""
        if not _token_matches(settings, token):
            raise StarletteHTTPException(status_code=403, detail="Teacher access required")

    return require_author, require_teacher


def create_api_app(quiz_manager: QuizManager, settings: Settings | None = None) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    settings = settings or Settings()
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    _install_error_handlers(app)

    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)
    require_author, require_teacher = _teacher_dependencies(settings)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/quiz", response_model=list[QuizOut], response_model_exclude_none=True)
    def list_quizzes(manager: QuizManager = Depends(quiz_manager_dep)) -> list[QuizOut]:
        return [QuizOut.from_quiz(quiz) for quiz in manager.list_quizzes()]

    @app.post(
        "/quiz",
        status_code=201,
        response_model=QuizOut,
        response_model_exclude_none=True,
        dependencies=[Depends(require_author)],
    )
    def create_quiz(
        payload: QuizPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> QuizOut:
        quiz = manager.create_quiz(payload.to_draft())
        return QuizOut.from_quiz(quiz, reveal_answers=True)

    @app.post(
        "/quiz/import",
        status_code=201,
        response_model=QuizOut,
        response_model_exclude_none=True,
        dependencies=[Depends(require_author)],
    )
    def import_quiz(
        file: UploadFile = File(...),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> QuizOut:
        data = file.file.read()
        quiz = manager.import_quiz(data, file.filename or "")
        return QuizOut.from_quiz(quiz, reveal_answers=True)

    @app.get("/quiz/{quiz_id}", response_model=QuizOut, response_model_exclude_none=True)
    def get_quiz(
        quiz_id: str,
        reveal_answers: bool = Query(default=False, alias="revealAnswers"),
        token: str | None = Header(default=None, alias=TEACHER_TOKEN_HEADER),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> QuizOut:
        if reveal_answers and not _token_matches(settings, token):
            raise StarletteHTTPException(status_code=403, detail="Teacher access required")
        quiz = manager.get_quiz(quiz_id)
        return QuizOut.from_quiz(quiz, reveal_answers=reveal_answers)

    @app.put(
        "/quiz/{quiz_id}",
        response_model=QuizOut,
        response_model_exclude_none=True,
        dependencies=[Depends(require_author)],
    )
    def update_quiz(
        quiz_id: str,
        payload: QuizPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> QuizOut:
        quiz = manager.update_quiz(quiz_id, payload.to_draft())
        return QuizOut.from_quiz(quiz, reveal_answers=True)

    @app.delete("/quiz/{quiz_id}", dependencies=[Depends(require_author)])
    def delete_quiz(
        quiz_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, str]:
        manager.delete_quiz(quiz_id)
        return {"message": "Quiz deleted successfully"}

    @app.post("/quiz/{quiz_id}/submit", response_model=SubmissionOut)
    def submit_attempt(
        quiz_id: str,
        payload: SubmissionPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> SubmissionOut:
        answers = None
        if payload.answers is not None:
            answers = [answer.to_answer() for answer in payload.answers]
        receipt = manager.submit_attempt(
            quiz_id,
            payload.student_id,
            answers,
            started_at=payload.started_at,
        )
        return SubmissionOut.from_result(receipt.result, receipt.attempt)

    @app.get("/quiz/{quiz_id}/export", dependencies=[Depends(require_teacher)])
    def export_quiz(
        quiz_id: str,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> Response:
        data = manager.export_quiz(quiz_id)
        return Response(
            content=data,
            media_type=_XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="quiz-{quiz_id}.xlsx"'},
        )

    @app.get(
        "/quiz/{quiz_id}/attempts",
        response_model=list[AttemptOut],
        dependencies=[Depends(require_teacher)],
    )
    def list_attempts(
        quiz_id: str,
        student_id: str | None = Query(default=None, alias="studentId"),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[AttemptOut]:
        return [AttemptOut.from_attempt(a) for a in manager.list_attempts(quiz_id, student_id)]

    @app.get(
        "/quiz/{quiz_id}/scoreboard",
        response_model=list[ScoreboardRowOut],
        dependencies=[Depends(require_teacher)],
    )
    def get_scoreboard(
        quiz_id: str,
        limit: int | None = Query(default=None, ge=1),
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> list[ScoreboardRowOut]:
        return [ScoreboardRowOut.from_row(row) for row in manager.get_scoreboard(quiz_id, limit)]

    return app


def start_api_server(quiz_manager: QuizManager, settings: Settings) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager, settings)
    config = uvicorn.Config(
        app=app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    logger.info("API server listening on %s:%d", settings.host, settings.port)
    return thread


def serve(quiz_manager: QuizManager, settings: Settings) -> None:
    """Run the API server in the foreground, without the teacher console."""
    app = create_api_app(quiz_manager, settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
