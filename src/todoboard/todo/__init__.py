"""
Todo

This package provides todo entities, the row folding used by the
relational backend, and the todo repositories.
"""

from todoboard.todo.entities import CreateTodo, Todo, TodoEntity, UpdateTodo
from todoboard.todo.memory import InMemoryTodoRepository
from todoboard.todo.repository import PostgresTodoRepository, TodoRepository
from todoboard.todo.rows import fold_entities

__all__ = [
    "CreateTodo",
    "InMemoryTodoRepository",
    "PostgresTodoRepository",
    "Todo",
    "TodoEntity",
    "TodoRepository",
    "UpdateTodo",
    "fold_entities",
]
