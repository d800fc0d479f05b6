import logging
from typing import List

from todoboard.errors import Duplicate, NotFound
from todoboard.label.entities import Label
from todoboard.label.repository import LabelRepository
from todoboard.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)


class InMemoryLabelRepository(LabelRepository):
    """
    Process-local label store for tests and the memory backend.

    The name check and the insert happen under one write guard, so two
    concurrent creates of the same name can never both succeed.
    """

    def __init__(self):
        self._store: dict[int, Label] = {}
        self._lock = ReadWriteLock()
        self._last_id = 0

    def create(self, name: str) -> Label:
        with self._lock.write():
            for label in self._store.values():
                if label.name == name:
                    raise Duplicate(label.id)
            self._last_id += 1
            label = Label(id=self._last_id, name=name)
            self._store[label.id] = label

        logger.debug("Created label %s (%r)", label.id, label.name)
        return label

    def all(self) -> List[Label]:
        with self._lock.read():
            return sorted(self._store.values(), key=lambda label: label.id)

    def delete(self, id: int) -> None:
        with self._lock.write():
            if self._store.pop(id, None) is None:
                raise NotFound(id)

        logger.debug("Deleted label %s", id)
