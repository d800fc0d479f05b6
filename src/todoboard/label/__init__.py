"""
Label

This package provides the label entity and its repositories.
"""

from todoboard.label.entities import CreateLabel, Label
from todoboard.label.memory import InMemoryLabelRepository
from todoboard.label.repository import LabelRepository, PostgresLabelRepository

__all__ = [
    "CreateLabel",
    "InMemoryLabelRepository",
    "Label",
    "LabelRepository",
    "PostgresLabelRepository",
]
