import logging
import threading
from datetime import datetime, timezone

from .models import Todo
from .utils import Err, validate_title

logger = logging.getLogger(__name__)

TODO_NOT_FOUND = "Todo not found"
TITLE_NOT_STRING = "Title must be a string"


class ValidationError(Exception):
    pass


class NotFoundError(Exception):
    def __init__(self, todo_id: int | None, message: str = TODO_NOT_FOUND) -> None:
        super().__init__(message)
        self.todo_id = todo_id


class TodoStore:
    """In-memory todo collection for one running application.

    Todos are kept in insertion order, keyed by id. Ids come from a counter that
    only grows, so a deleted id is never handed out again. Every operation runs
    under a lock because FastAPI serves sync endpoints from a thread pool.
    Returned todos are copies; mutate them through the store.
    """

    def __init__(self) -> None:
        self._todos: dict[int, Todo] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._todos)

    def list_all(self) -> list[Todo]:
        with self._lock:
            return [todo.model_copy() for todo in self._todos.values()]

    def create(self, title: object) -> Todo:
        result = validate_title(title)
        if isinstance(result, Err):
            raise ValidationError(result.reason)

        with self._lock:
            todo = Todo(
                id=self._next_id,
                title=result.value,
                completed=False,
                created_at=datetime.now(timezone.utc),
            )
            self._todos[todo.id] = todo
            self._next_id += 1
        logger.info("Created todo %d", todo.id)
        return todo.model_copy()

    def update(self, todo_id: int | None, title: object = None) -> Todo:
        # The title is stored as sent: no trimming, empty strings allowed.
        with self._lock:
            todo = self._get(todo_id)
            if title is not None:
                if not isinstance(title, str):
                    raise ValidationError(TITLE_NOT_STRING)
                todo.title = title
            updated = todo.model_copy()
        logger.info("Updated todo %d", updated.id)
        return updated

    def toggle(self, todo_id: int | None) -> Todo:
        with self._lock:
            todo = self._get(todo_id)
            todo.completed = not todo.completed
            toggled = todo.model_copy()
        logger.info("Toggled todo %d (completed=%s)", toggled.id, toggled.completed)
        return toggled

    def delete(self, todo_id: int | None) -> None:
        with self._lock:
            self._get(todo_id)
            del self._todos[todo_id]
        logger.info("Deleted todo %d", todo_id)

    def _get(self, todo_id: int | None) -> Todo:
        todo = self._todos.get(todo_id) if todo_id is not None else None
        if todo is None:
            raise NotFoundError(todo_id)
        return todo
