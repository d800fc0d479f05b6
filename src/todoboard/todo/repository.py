import logging
from abc import ABC, abstractmethod
from typing import List

import psycopg

from todoboard import db
from todoboard.errors import NotFound
from todoboard.todo.entities import CreateTodo, TodoEntity, UpdateTodo
from todoboard.todo.rows import fold_entities

logger = logging.getLogger(__name__)

INT4_MIN, INT4_MAX = -(2**31), 2**31 - 1


class TodoRepository(ABC):
    """
    Storage contract for todos and their label associations.

    find, update and delete raise NotFound(id) for an unknown todo. Label
    ids that don't resolve to an existing label are dropped, not rejected.
    """

    @abstractmethod
    def create(self, payload: CreateTodo) -> TodoEntity: ...

    @abstractmethod
    def find(self, id: int) -> TodoEntity: ...

    @abstractmethod
    def all(self) -> List[TodoEntity]: ...

    @abstractmethod
    def update(self, id: int, payload: UpdateTodo) -> TodoEntity: ...

    @abstractmethod
    def delete(self, id: int) -> None: ...


SELECT_TODOS_WITH_LABELS = """
    SELECT todos.id, todos.text, todos.completed,
           labels.id AS label_id, labels.name AS label_name
    FROM todos
    LEFT OUTER JOIN todo_labels ON todo_labels.todo_id = todos.id
    LEFT OUTER JOIN labels ON labels.id = todo_labels.label_id
"""


class PostgresTodoRepository(TodoRepository):
    """
    Repository for todo data access.
    Encapsulates all SQL and queries for the todos and todo_labels tables.
    """

    def create(self, payload: CreateTodo) -> TodoEntity:
        """Create a new todo bound to the labels in payload.label_ids."""
        with db.transaction() as cur:
            cur.execute(
                """
                INSERT INTO todos (text, completed)
                VALUES (%s, false)
                RETURNING id
                """,
                (payload.text,),
            )
            id = cur.fetchone()["id"]
            self._insert_labels(cur, id, payload.label_ids)
            todo = self._find(cur, id)

        logger.debug("Created todo %s with labels %s", id, [l.id for l in todo.labels])
        return todo

    def find(self, id: int) -> TodoEntity:
        """Get a todo with its labels by ID."""
        with db.transaction() as cur:
            return self._find(cur, id)

    def all(self) -> List[TodoEntity]:
        """List all todos, most recently created first."""
        rows = db.fetch_all(
            SELECT_TODOS_WITH_LABELS + " ORDER BY todos.id DESC, todo_labels.id ASC"
        )
        return fold_entities(rows)

    def update(self, id: int, payload: UpdateTodo) -> TodoEntity:
        """
        Overwrite the fields present in payload and keep the others.

        When payload.label_ids is given the todo's labels are replaced as a
        whole, an empty list clearing them.
        """
        with db.transaction() as cur:
            cur.execute("SELECT id, text, completed FROM todos WHERE id = %s FOR UPDATE", (id,))
            current = cur.fetchone()
            if current is None:
                raise NotFound(id)

            cur.execute(
                "UPDATE todos SET text = %s, completed = %s WHERE id = %s",
                (
                    payload.text if payload.text is not None else current["text"],
                    payload.completed if payload.completed is not None else current["completed"],
                    id,
                ),
            )
            if payload.label_ids is not None:
                cur.execute("DELETE FROM todo_labels WHERE todo_id = %s", (id,))
                self._insert_labels(cur, id, payload.label_ids)
            todo = self._find(cur, id)

        logger.debug("Updated todo %s", id)
        return todo

    def delete(self, id: int) -> None:
        """Delete a todo and its label associations."""
        with db.transaction() as cur:
            cur.execute("DELETE FROM todo_labels WHERE todo_id = %s", (id,))
            cur.execute("DELETE FROM todos WHERE id = %s RETURNING id", (id,))
            if cur.fetchone() is None:
                raise NotFound(id)

        logger.debug("Deleted todo %s", id)

    def _find(self, cur: psycopg.Cursor, id: int) -> TodoEntity:
        cur.execute(
            SELECT_TODOS_WITH_LABELS + " WHERE todos.id = %s ORDER BY todo_labels.id ASC",
            (id,),
        )
        todos = fold_entities(cur.fetchall())
        if not todos:
            raise NotFound(id)
        return todos[0]

    def _insert_labels(self, cur: psycopg.Cursor, todo_id: int, label_ids: list[int]) -> None:
        # Unknown ids fall out of the join; requested order is kept. Ids
        # outside the serial (int4) range can't name a label.
        requested = [i for i in label_ids if INT4_MIN <= i <= INT4_MAX]
        inserted = 0
        if requested:
            cur.execute(
                """
                INSERT INTO todo_labels (todo_id, label_id)
                SELECT %s, labels.id
                FROM unnest(%s::integer[]) WITH ORDINALITY AS requested(label_id, position)
                JOIN labels ON labels.id = requested.label_id
                ORDER BY requested.position
                """,
                (todo_id, requested),
            )
            inserted = cur.rowcount
        if inserted != len(label_ids):
            logger.debug(
                "Dropped %d unknown label id(s) for todo %s",
                len(label_ids) - inserted,
                todo_id,
            )
