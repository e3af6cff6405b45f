# diamant/core/resolver.py

"""
Dependency closure over the component registry.

Resolution never raises for unknown ids: they are collected on the result
so that batch commands can keep going with the valid subset.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from diamant.core.console import ConsoleAware, Console
from diamant.core.registry import ComponentRegistry

# ==============================================================
# TYPE DEFINITIONS
# ==============================================================

@dataclass
class ResolvedSet:
    """Requested components plus their transitive internal dependencies."""
    ids: List[str] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)
    package_dependencies: List[str] = field(default_factory=list)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self.ids

    def __iter__(self):
        return iter(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

# ==============================================================
# DEPENDENCY RESOLVER CLASS
# ==============================================================

class DependencyResolver(ConsoleAware):
    """Expands requested component ids into the full set to install."""

    def __init__(self, registry: ComponentRegistry, console: Optional[Console] = None, verbose: bool = False):
        super().__init__(console, verbose)
        self.registry = registry

    def resolve(self, requested: Sequence[str]) -> ResolvedSet:
        """
        Compute the transitive closure of requested over internal dependencies.

        Ids are lower-cased before lookup. The returned ids are in first-visit
        order: requested ids in input order, each followed by the
        dependencies it pulled in.

        Args:
            requested: Component ids as typed by the user

        Returns:
            ResolvedSet with the found ids, the unknown inputs (original
            spelling, once each) and the package dependency union
        """
        result = ResolvedSet()
        visited: set[str] = set()
        unknown_seen: set[str] = set()

        # LIFO worklist; pushing in reverse keeps requested ids in input order.
        worklist: List[str] = list(reversed(list(requested)))
        while worklist:
            raw = worklist.pop()
            component_id = raw.strip().lower()
            if component_id in visited:
                continue

            definition = self.registry.lookup(component_id)
            if definition is None:
                if component_id not in unknown_seen:
                    unknown_seen.add(component_id)
                    result.unknown.append(raw)
                    self.log(f"[yellow]Unknown component:[/] {raw}")
                continue

            visited.add(component_id)
            result.ids.append(component_id)
            self.log(f"[dim]resolved[/] {component_id}")

            for dep in reversed(definition.internal_dependencies):
                if dep not in visited:
                    worklist.append(dep)

        result.package_dependencies = self.package_dependencies_for(result.ids)
        return result

    def package_dependencies_for(self, component_ids: Iterable[str]) -> List[str]:
        """Union of package dependencies, duplicates removed, first-seen order."""
        deps: List[str] = []
        for component_id in component_ids:
            definition = self.registry.lookup(component_id)
            if definition is None:
                continue
            for dep in definition.dependencies:
                if dep not in deps:
                    deps.append(dep)
        return deps
