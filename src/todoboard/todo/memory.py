import logging
from typing import Iterable, List, Optional

from todoboard.errors import NotFound
from todoboard.label.entities import Label
from todoboard.label.repository import LabelRepository
from todoboard.rwlock import ReadWriteLock
from todoboard.todo.entities import CreateTodo, TodoEntity, UpdateTodo
from todoboard.todo.repository import TodoRepository

logger = logging.getLogger(__name__)


class InMemoryTodoRepository(TodoRepository):
    """
    Process-local todo store for tests and the memory backend.

    Todos are kept as nested entities in a dict guarded by a reader/writer
    lock: find and all share it, create, update and delete hold it
    exclusively. Returned entities are copies, never the stored objects.

    Labels come either from a fixed snapshot or from a live
    LabelRepository. With a live repository, labels deleted after being
    attached are hidden on read and on the entity returned by create and
    update. The label store is always read outside the todo guard; the two
    guards are never held together.
    """

    def __init__(
        self,
        label_repository: Optional[LabelRepository] = None,
        labels: Iterable[Label] = (),
    ):
        self._store: dict[int, TodoEntity] = {}
        self._lock = ReadWriteLock()
        self._last_id = 0
        self._label_repository = label_repository
        self._labels = tuple(labels)

    def _current_labels(self) -> dict[int, Label]:
        labels = self._label_repository.all() if self._label_repository else self._labels
        return {label.id: label for label in labels}

    def resolve_labels(self, ids: Iterable[int]) -> list[Label]:
        """Map label ids to labels in the given order, dropping unknown ids."""
        known = self._current_labels()
        ids = list(ids)
        labels = [known[id] for id in ids if id in known]
        if len(labels) != len(ids):
            logger.debug("Dropped %d unknown label id(s)", len(ids) - len(labels))
        return labels

    def _visible(self, todo: TodoEntity, known: dict[int, Label]) -> TodoEntity:
        todo = todo.copy()
        todo.labels = [label for label in todo.labels if label.id in known]
        return todo

    def create(self, payload: CreateTodo) -> TodoEntity:
        labels = self.resolve_labels(payload.label_ids)
        with self._lock.write():
            self._last_id += 1
            todo = TodoEntity(id=self._last_id, text=payload.text, labels=labels)
            self._store[todo.id] = todo

        logger.debug("Created todo %s", todo.id)
        return self._visible(todo, self._current_labels())

    def find(self, id: int) -> TodoEntity:
        known = self._current_labels()
        with self._lock.read():
            todo = self._store.get(id)
            if todo is None:
                raise NotFound(id)
            return self._visible(todo, known)

    def all(self) -> List[TodoEntity]:
        known = self._current_labels()
        with self._lock.read():
            todos = sorted(self._store.values(), key=lambda todo: todo.id, reverse=True)
            return [self._visible(todo, known) for todo in todos]

    def update(self, id: int, payload: UpdateTodo) -> TodoEntity:
        labels = None
        if payload.label_ids is not None:
            labels = self.resolve_labels(payload.label_ids)

        known = self._current_labels()
        with self._lock.write():
            current = self._store.get(id)
            if current is None:
                raise NotFound(id)
            todo = TodoEntity(
                id=id,
                text=payload.text if payload.text is not None else current.text,
                completed=payload.completed if payload.completed is not None else current.completed,
                labels=labels if labels is not None else self._visible(current, known).labels,
            )
            self._store[id] = todo

        logger.debug("Updated todo %s", id)
        return self._visible(todo, self._current_labels())

    def delete(self, id: int) -> None:
        with self._lock.write():
            if self._store.pop(id, None) is None:
                raise NotFound(id)

        logger.debug("Deleted todo %s", id)
