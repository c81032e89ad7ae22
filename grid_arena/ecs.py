"""
Entity-Component-System Core
=============================
Integer entity IDs with one component dict per component type.

Component stores are plain dicts, so iteration follows creation order.
Destroyed entities are hidden from every query immediately and purged
by process_dead_entities() at the end of the frame, which keeps
removal during iteration safe: nothing is skipped, nothing is visited
twice, and the survivors keep their relative order.
"""

from typing import Dict, Set, Type, TypeVar, Optional, Iterator, Tuple, Any


C = TypeVar('C')


class World:
    """
    Owns every entity of a session and their components.
    """

    def __init__(self):
        self._next_entity_id: int = 0
        self._entities: Set[int] = set()
        self._components: Dict[Type, Dict[int, Any]] = {}
        self._dead_entities: Set[int] = set()  # Marked for removal

    def create_entity(self) -> int:
        """Create a new entity and return its ID."""
        entity_id = self._next_entity_id
        self._next_entity_id += 1
        self._entities.add(entity_id)
        return entity_id

    def destroy_entity(self, entity_id: int) -> None:
        """Mark an entity for destruction. It stops matching queries at once."""
        if entity_id in self._entities:
            self._dead_entities.add(entity_id)

    def process_dead_entities(self) -> None:
        """Remove all entities marked for destruction."""
        for entity_id in self._dead_entities:
            self._entities.discard(entity_id)
            for component_store in self._components.values():
                component_store.pop(entity_id, None)
        self._dead_entities.clear()

    def add_component(self, entity_id: int, component: Any) -> None:
        """Add a component to an entity."""
        component_type = type(component)
        if component_type not in self._components:
            self._components[component_type] = {}
        self._components[component_type][entity_id] = component

    def get_component(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Get a component for an entity, or None if not found."""
        if component_type in self._components:
            return self._components[component_type].get(entity_id)
        return None

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Query for live entities that have ALL specified component types.

        Yields tuples of (entity_id, component1, component2, ...) in
        creation order. The candidate list is snapshotted up front, so
        entities created mid-iteration are not visited; entities
        destroyed mid-iteration are skipped when their turn comes.
        """
        if not component_types:
            return

        stores = []
        for component_type in component_types:
            store = self._components.get(component_type)
            if store is None:
                return
            stores.append(store)

        candidates = [
            entity_id for entity_id in stores[0]
            if all(entity_id in store for store in stores[1:])
        ]

        for entity_id in candidates:
            if not self.is_alive(entity_id):
                continue
            yield (entity_id,) + tuple(store[entity_id] for store in stores)

    def count(self, *component_types: Type) -> int:
        """Number of live entities that have all specified components."""
        return sum(1 for _ in self.query(*component_types))

    def entity_count(self) -> int:
        """Return the number of live entities."""
        return len(self._entities) - len(self._dead_entities)

    def is_alive(self, entity_id: int) -> bool:
        """Check if an entity is alive (exists and not marked for death)."""
        return entity_id in self._entities and entity_id not in self._dead_entities
