# diamant/core/registry.py

"""
Read-only component registry.

The registry is constructed explicitly and passed to the resolver and the
reconciliation engine, so both can be exercised against small fake tables.
Keys are stored lowercase; callers are expected to lower-case ids before
lookup, but lookup() normalises as well.
"""

from typing import Dict, Iterable, Iterator, List, Optional

from diamant.core.models import ComponentDefinition
from diamant.core.exceptions import RegistryDefinitionError, DependencyCycleError

# ==============================================================
# COMPONENT REGISTRY CLASS
# ==============================================================

class ComponentRegistry:
    """Static mapping from component id to its definition."""

    def __init__(self, definitions: Iterable[ComponentDefinition]):
        self._components: Dict[str, ComponentDefinition] = {}
        for definition in definitions:
            if definition.id in self._components:
                raise RegistryDefinitionError(f"duplicate component id '{definition.id}'")
            self._components[definition.id] = definition

        self._validate_dependencies()
        self._validate_acyclic()

    def all_ids(self) -> List[str]:
        """All component ids in registration order."""
        return list(self._components.keys())

    def lookup(self, component_id: str) -> Optional[ComponentDefinition]:
        """Return the definition for an id, or None if the id is unknown."""
        return self._components.get(component_id.lower())

    def dependents_of(self, component_ids: Iterable[str]) -> List[str]:
        """Ids of every component that directly depends on one of component_ids."""
        targets = set(component_ids)
        return [
            cid for cid, definition in self._components.items()
            if targets.intersection(definition.internal_dependencies)
        ]

    def __contains__(self, component_id: object) -> bool:
        return isinstance(component_id, str) and component_id.lower() in self._components

    def __iter__(self) -> Iterator[ComponentDefinition]:
        return iter(self._components.values())

    def __len__(self) -> int:
        return len(self._components)

    def _validate_dependencies(self) -> None:
        for definition in self._components.values():
            for dep in definition.internal_dependencies:
                if dep not in self._components:
                    raise RegistryDefinitionError(
                        f"component '{definition.id}' depends on unknown component '{dep}'"
                    )

    def _validate_acyclic(self) -> None:
        # Depth-first search with three colours; a grey node reached again closes a cycle.
        WHITE, GREY, BLACK = 0, 1, 2
        colour: Dict[str, int] = {cid: WHITE for cid in self._components}

        for root in self._components:
            if colour[root] != WHITE:
                continue
            path: List[str] = [root]
            stack = [(root, iter(self._components[root].internal_dependencies))]
            colour[root] = GREY
            while stack:
                node, deps = stack[-1]
                dep = next(deps, None)
                if dep is None:
                    colour[node] = BLACK
                    stack.pop()
                    path.pop()
                    continue
                if colour[dep] == GREY:
                    raise DependencyCycleError(path[path.index(dep):] + [dep])
                if colour[dep] == WHITE:
                    colour[dep] = GREY
                    path.append(dep)
                    stack.append((dep, iter(self._components[dep].internal_dependencies)))
