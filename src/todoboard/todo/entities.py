from dataclasses import dataclass, field, replace
from typing import List, Optional

from pydantic import BaseModel, Field, StrictBool, StrictInt

from todoboard.label.entities import Label

TEXT_MAX_LENGTH = 100


@dataclass
class TodoEntity:
    id: int
    text: str
    completed: bool = False
    labels: list[Label] = field(default_factory=list)

    def copy(self) -> "TodoEntity":
        """Return a copy that shares no mutable state with this entity."""
        return replace(self, labels=list(self.labels))


Todo = TodoEntity


class CreateTodo(BaseModel):
    """Schema for creating a todo, e.g. {"text": ..., "label_ids": [1, 2]}."""

    text: str = Field(..., min_length=1, max_length=TEXT_MAX_LENGTH)
    label_ids: List[StrictInt] = Field(default_factory=list)


class UpdateTodo(BaseModel):
    """Schema for a partial update of a todo.

    Fields left as None keep their current value. An empty ``label_ids``
    list removes every label from the todo.
    """

    text: Optional[str] = Field(None, min_length=1, max_length=TEXT_MAX_LENGTH)
    completed: Optional[StrictBool] = None
    label_ids: Optional[List[StrictInt]] = None
