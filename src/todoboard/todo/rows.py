"""
Folding of flat todo/label join rows into nested entities.

The relational repository reads todos with a LEFT JOIN through the
todo_labels association table, which yields one row per (todo, label)
pair and a single row with NULL label columns for a todo without labels.
fold_entities() collapses those rows back into one TodoEntity per todo.
"""

from typing import Any, Iterable, Mapping

from todoboard.label.entities import Label
from todoboard.todo.entities import TodoEntity


def fold_entities(rows: Iterable[Mapping[str, Any]]) -> list[TodoEntity]:
    """
    Fold join rows into TodoEntity objects.

    Each row carries the todo columns (id, text, completed) plus an
    optional (label_id, label_name) pair. Entities are returned in the
    order their id is first seen, and each entity's labels in the order
    their rows appear. Rows for one todo need not be contiguous. Repeated
    labels are kept as-is. The input is not modified.

    Args:
        rows: Mappings with keys id, text, completed, label_id, label_name

    Returns:
        List of TodoEntity, empty if rows is empty
    """
    entities: list[TodoEntity] = []
    by_id: dict[int, TodoEntity] = {}

    for row in rows:
        label = None
        if row["label_id"] is not None:
            assert row["label_name"] is not None, (
                f"label {row['label_id']} of todo {row['id']} has no name"
            )
            label = Label(id=row["label_id"], name=row["label_name"])

        entity = by_id.get(row["id"])
        if entity is None:
            entity = TodoEntity(id=row["id"], text=row["text"], completed=row["completed"])
            by_id[entity.id] = entity
            entities.append(entity)

        if label is not None:
            entity.labels.append(label)

    return entities
