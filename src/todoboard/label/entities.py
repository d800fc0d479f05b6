from dataclasses import dataclass

from pydantic import BaseModel, Field

NAME_MAX_LENGTH = 20


@dataclass(frozen=True)
class Label:
    id: int
    name: str


class CreateLabel(BaseModel):
    """Schema for creating a label."""

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
