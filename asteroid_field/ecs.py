"""
Entity Store
=============
Minimal entity-component store. Entities are integer IDs; components
are plain dataclasses stored in one dict per component type.
"""

from typing import Any, Dict, Iterator, Optional, Set, Tuple, Type, TypeVar
import logging


logger = logging.getLogger(__name__)

C = TypeVar('C')


class World:
    """
    Owns every entity of one game session.

    Destruction is deferred: ``destroy`` only marks the entity, and
    ``flush`` removes marked entities and their components. Marked
    entities are already invisible to ``query``.
    """

    def __init__(self):
        self._next_id: int = 0
        self._alive: Set[int] = set()
        self._doomed: Set[int] = set()
        self._stores: Dict[Type, Dict[int, Any]] = {}

    def spawn(self, *components: Any) -> int:
        """Create an entity carrying the given components."""
        entity_id = self._next_id
        self._next_id += 1
        self._alive.add(entity_id)
        for component in components:
            self.add(entity_id, component)
        return entity_id

    def add(self, entity_id: int, component: Any) -> None:
        """Attach (or replace) a component."""
        self._stores.setdefault(type(component), {})[entity_id] = component

    def get(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Component of the given type, or None."""
        return self._stores.get(component_type, {}).get(entity_id)

    def destroy(self, entity_id: int) -> None:
        """Mark an entity for removal at the next flush."""
        if entity_id in self._alive:
            self._doomed.add(entity_id)

    def flush(self) -> int:
        """Remove marked entities. Returns how many were removed."""
        removed = 0
        for entity_id in self._doomed:
            if entity_id not in self._alive:
                continue
            self._alive.discard(entity_id)
            for store in self._stores.values():
                store.pop(entity_id, None)
            removed += 1
        self._doomed.clear()
        return removed

    def clear(self) -> None:
        """Drop every entity. IDs keep increasing so stale IDs never alias."""
        self._alive.clear()
        self._doomed.clear()
        self._stores.clear()

    def is_alive(self, entity_id: int) -> bool:
        return entity_id in self._alive and entity_id not in self._doomed

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Yield ``(entity_id, comp1, comp2, ...)`` for live entities
        holding every requested component type.

        Entities are yielded in creation order so systems behave the
        same way on every run with the same seed.
        """
        if not component_types:
            return
        stores = [self._stores.get(ct) for ct in component_types]
        if any(store is None for store in stores):
            return

        smallest = min(stores, key=len)
        for entity_id in sorted(smallest):
            if entity_id in self._doomed:
                continue
            if not all(entity_id in store for store in stores):
                continue
            yield (entity_id,) + tuple(store[entity_id] for store in stores)

    def count(self, *component_types: Type) -> int:
        """Number of live entities holding all the given component types."""
        return sum(1 for _ in self.query(*component_types))

    def __len__(self) -> int:
        return len(self._alive) - len(self._doomed & self._alive)
