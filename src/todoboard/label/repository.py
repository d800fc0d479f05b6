import logging
from abc import ABC, abstractmethod
from typing import List

from todoboard import db
from todoboard.errors import Duplicate, NotFound, Unexpected
from todoboard.label.entities import Label

logger = logging.getLogger(__name__)


class LabelRepository(ABC):
    """
    Storage contract for labels.

    Implementations must raise Duplicate(existing_id) when a label with the
    same name exists, and NotFound(id) when deleting an unknown label.
    """

    @abstractmethod
    def create(self, name: str) -> Label: ...

    @abstractmethod
    def all(self) -> List[Label]:
        """Return every label ordered by ascending id."""

    @abstractmethod
    def delete(self, id: int) -> None: ...


class PostgresLabelRepository(LabelRepository):
    """
    Repository for label data access.
    Encapsulates all SQL and queries for the labels table.
    """

    def create(self, name: str) -> Label:
        """
        Create a new label.

        The unique index on labels.name is the only duplicate check: a
        conflicting insert does nothing, and the existing label's id is then
        read back in the same transaction to report it.
        """
        with db.transaction() as cur:
            cur.execute(
                """
                INSERT INTO labels (name)
                VALUES (%s)
                ON CONFLICT (name) DO NOTHING
                RETURNING id, name
                """,
                (name,),
            )
            row = cur.fetchone()
            if row is None:
                cur.execute("SELECT id FROM labels WHERE name = %s", (name,))
                existing = cur.fetchone()
                if existing is None:
                    raise Unexpected(f"label {name!r} was removed while being created")
                raise Duplicate(existing["id"])

        logger.debug("Created label %s (%r)", row["id"], row["name"])
        return Label(**row)

    def all(self) -> List[Label]:
        """List all labels."""
        rows = db.fetch_all("SELECT id, name FROM labels ORDER BY id ASC")
        return [Label(**row) for row in rows]

    def delete(self, id: int) -> None:
        """Delete a label. Its todo associations are removed by the cascade."""
        row = db.fetch_one("DELETE FROM labels WHERE id = %s RETURNING id", (id,))
        if row is None:
            raise NotFound(id)
        logger.debug("Deleted label %s", id)
