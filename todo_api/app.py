import logging

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .models import ErrorMessage, Health, Message, Todo, TodoInput, TodoUpdate
from .store import NotFoundError, TodoStore, ValidationError
from .utils import Settings, load_settings, parse_todo_id, setup_logging

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> TodoStore:
    return request.app.state.store


@router.get("/health", status_code=200)
def health() -> Health:
    return Health()


@router.get("/api/todos", status_code=200)
def get_todos(store: TodoStore = Depends(get_store)) -> list[Todo]:
    return store.list_all()


@router.post("/api/todos", status_code=201, responses={400: {"model": ErrorMessage}})
def create_todo(data: TodoInput | None = None, store: TodoStore = Depends(get_store)) -> Todo:
    return store.create(data.title if data else None)


@router.put("/api/todos/{todo_id}", status_code=200, responses={404: {"model": ErrorMessage}})
def update_todo(
    todo_id: str,
    data: TodoUpdate | None = None,
    store: TodoStore = Depends(get_store),
) -> Todo:
    return store.update(parse_todo_id(todo_id), data.title if data else None)


@router.patch("/api/todos/{todo_id}/toggle", status_code=200, responses={404: {"model": ErrorMessage}})
def toggle_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> Todo:
    return store.toggle(parse_todo_id(todo_id))


@router.delete("/api/todos/{todo_id}", status_code=200, responses={404: {"model": ErrorMessage}})
def delete_todo(todo_id: str, store: TodoStore = Depends(get_store)) -> Message:
    store.delete(parse_todo_id(todo_id))
    return Message(message="Todo deleted successfully")


# ---------- Error Handlers ----------
def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorMessage(error=message).model_dump())


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return _error(400, str(exc))


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    logger.warning("Todo %s not found (%s %s)", exc.todo_id, request.method, request.url.path)
    return _error(404, str(exc))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Invalid request body for %s %s: %s", request.method, request.url.path, exc.errors())
    return _error(400, "Invalid request body")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")


def create_app(settings: Settings | None = None, store: TodoStore | None = None) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(title="Todo API")
    app.state.store = store if store is not None else TodoStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(router)
    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    setup_logging(settings.log_level)
    logger.info("Starting todo API on %s:%d", settings.host, settings.port)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
