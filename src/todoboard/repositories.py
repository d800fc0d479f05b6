"""
Backend selection.

Builds the todo and label repositories for the configured backend:
"postgres" for the relational store, "memory" for the process-local one.
"""

from todoboard.config import config
from todoboard.label import InMemoryLabelRepository, LabelRepository, PostgresLabelRepository
from todoboard.todo import InMemoryTodoRepository, PostgresTodoRepository, TodoRepository


def build_repositories(backend: str = None) -> tuple[TodoRepository, LabelRepository]:
    backend = backend or config.repository_backend
    if backend == "postgres":
        return PostgresTodoRepository(), PostgresLabelRepository()
    if backend == "memory":
        labels = InMemoryLabelRepository()
        return InMemoryTodoRepository(label_repository=labels), labels
    raise ValueError(f"Unknown repository backend: {backend}")
