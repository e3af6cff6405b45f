# diamant/core/reconcile.py

"""
Reconciliation of the registry against a project's manifest and files.

The engine classifies components (unknown, missing on disk, unmodified,
modified) and builds add/remove/update plans. Plans are side-effect free;
the execute_* methods perform the file writes/deletes and manifest updates.
Confirmation is left to the caller.

File operations are not transactional: if writing file N of a component
fails, files 1..N-1 stay written, the manifest entry for that component is
not added, and the error propagates to abort the command.
"""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from diamant.core.console import ConsoleAware, Console
from diamant.core.registry import ComponentRegistry
from diamant.core.resolver import DependencyResolver
from diamant.core.manifest import ManifestStore
from diamant.core.filesystem import FileSystem, LocalFileSystem, TemplateStore
from diamant.core.transform import ContentTransform
from diamant.core.exceptions import FileOperationError
from diamant.core.models import (
    ComponentDefinition,
    ComponentState,
    ComponentStatus,
    DiamantManifest,
    DiffSummary,
)

# ==============================================================
# LINE DIFF
# ==============================================================

def _opcodes(expected: str, local: str):
    matcher = difflib.SequenceMatcher(None, expected.splitlines(), local.splitlines(), autojunk=False)
    return matcher, matcher.get_opcodes()

def diff_summary(expected: str, local: str) -> DiffSummary:
    """
    Count added and removed line blocks going from expected to local.

    A block is a maximal run of added-only or removed-only lines; a replaced
    run counts as one removed and one added block.
    """
    summary = DiffSummary()
    _, opcodes = _opcodes(expected, local)
    for tag, _i1, _i2, _j1, _j2 in opcodes:
        if tag in ("insert", "replace"):
            summary.added_blocks += 1
        if tag in ("delete", "replace"):
            summary.removed_blocks += 1
    return summary

def diff_lines(expected: str, local: str) -> List[Tuple[str, str]]:
    """Changed lines as ("-", line) for template-only and ("+", line) for local-only, blank lines skipped."""
    matcher, opcodes = _opcodes(expected, local)
    a, b = matcher.a, matcher.b
    lines: List[Tuple[str, str]] = []
    for tag, i1, i2, j1, j2 in opcodes:
        if tag in ("delete", "replace"):
            lines.extend(("-", line) for line in a[i1:i2] if line)
        if tag in ("insert", "replace"):
            lines.extend(("+", line) for line in b[j1:j2] if line)
    return lines

# ==============================================================
# PLAN TYPES
# ==============================================================

@dataclass
class AddPlan:
    """Resolved components split by whether their main file already exists."""
    requested: List[str]
    resolved: List[str]
    existing: List[str]
    new: List[str]
    unknown: List[str] = field(default_factory=list)

    def needs_confirmation(self, overwrite: bool) -> bool:
        return bool(self.existing) and not overwrite

    def actions(self, overwrite: bool) -> List[str]:
        """Components to copy: everything when overwriting, otherwise only the new ones."""
        return list(self.resolved) if overwrite else list(self.new)

    def is_dependency(self, component_id: str) -> bool:
        return component_id not in self.requested

@dataclass
class AddResult:
    installed: List[str]
    written: List[Path]
    package_dependencies: List[str]

@dataclass
class RemovePlan:
    to_remove: List[str]
    not_installed: List[str] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)
    dependents: List[str] = field(default_factory=list)

@dataclass
class UpdatePlan:
    modified: List[str]
    unmodified: List[str] = field(default_factory=list)
    missing: List[str] = field(default_factory=list)
    unknown: List[str] = field(default_factory=list)

@dataclass
class ComponentDiff:
    status: ComponentStatus
    lines: List[Tuple[str, str]] = field(default_factory=list)

# ==============================================================
# RECONCILIATION ENGINE CLASS
# ==============================================================

class ReconciliationEngine(ConsoleAware):
    """Compares desired component state with a project and applies changes."""

    def __init__(
        self,
        registry: ComponentRegistry,
        manifest_store: ManifestStore,
        templates: TemplateStore,
        transform: ContentTransform,
        filesystem: Optional[FileSystem] = None,
        console: Optional[Console] = None,
        verbose: bool = False,
    ):
        super().__init__(console, verbose)
        self.registry = registry
        self.manifest_store = manifest_store
        self.templates = templates
        self.transform = transform
        self.fs: FileSystem = filesystem if filesystem is not None else LocalFileSystem()
        self.resolver = DependencyResolver(registry, console, verbose)
        self._manifest: Optional[DiamantManifest] = None

    @classmethod
    def for_project(
        cls,
        project_dir: Path,
        registry: ComponentRegistry,
        templates: Optional[TemplateStore] = None,
        console: Optional[Console] = None,
        verbose: bool = False,
    ) -> "ReconciliationEngine":
        """Engine for a project, reading its manifest once to build the transform."""
        store = ManifestStore(project_dir, console, verbose)
        manifest = store.read()
        engine = cls(
            registry,
            store,
            templates or TemplateStore(),
            ContentTransform.for_project(project_dir, manifest.aliases),
            console=console,
            verbose=verbose,
        )
        engine._manifest = manifest
        return engine

    @property
    def manifest(self) -> DiamantManifest:
        if self._manifest is None:
            self._manifest = self.manifest_store.read()
        return self._manifest

    @property
    def components_dir(self) -> Path:
        return self.manifest_store.project_dir / self.manifest.aliases.components

    # ----------------------------------------------------------
    # Shared classification
    # ----------------------------------------------------------

    def component_path(self, definition: ComponentDefinition, file: Optional[str] = None) -> Path:
        return self.components_dir / (file or definition.main_file)

    def expected_content(self, file: str) -> str:
        """Template content as it should appear in the project."""
        return self.transform.apply(self.templates.read_template(file))

    def is_on_disk(self, definition: ComponentDefinition) -> bool:
        return self.fs.file_exists(self.component_path(definition))

    def classify(self, component_id: str) -> ComponentStatus:
        """Classify one component against the project files (main file only)."""
        normalized = component_id.lower()
        definition = self.registry.lookup(normalized)
        if definition is None:
            return ComponentStatus(id=component_id, state=ComponentState.UNKNOWN)

        local_path = self.component_path(definition)
        if not self.fs.file_exists(local_path):
            return ComponentStatus(id=normalized, state=ComponentState.MISSING_ON_DISK, definition=definition)

        expected = self.expected_content(definition.main_file)
        local = self.fs.read_file(local_path)
        if expected.strip() == local.strip():
            return ComponentStatus(id=normalized, state=ComponentState.PRESENT_UNMODIFIED, definition=definition)

        return ComponentStatus(
            id=normalized,
            state=ComponentState.PRESENT_MODIFIED,
            definition=definition,
            diff=diff_summary(expected, local),
        )

    # ----------------------------------------------------------
    # Add
    # ----------------------------------------------------------

    def plan_add(self, requested: Sequence[str]) -> AddPlan:
        """Resolve requested ids and split them by presence on disk (manifest ignored)."""
        resolved = self.resolver.resolve(requested)
        existing: List[str] = []
        new: List[str] = []
        for component_id in resolved.ids:
            definition = self.registry.lookup(component_id)
            if definition is None:
                continue
            if self.is_on_disk(definition):
                existing.append(component_id)
            else:
                new.append(component_id)

        self.log(f"add plan: {len(new)} new, {len(existing)} existing, {len(resolved.unknown)} unknown")
        return AddPlan(
            requested=[r.strip().lower() for r in requested],
            resolved=resolved.ids,
            existing=existing,
            new=new,
            unknown=resolved.unknown,
        )

    def execute_add(self, component_ids: Sequence[str]) -> AddResult:
        """Copy every file of every component (full overwrite) and mark each installed."""
        written: List[Path] = []
        installed: List[str] = []
        for component_id in component_ids:
            definition = self.registry.lookup(component_id)
            if definition is None:
                continue
            for file in definition.files:
                dest = self.component_path(definition, file)
                self.fs.write_file(dest, self.expected_content(file))
                written.append(dest)
                self.log(f"[dim]copied[/] {file} → {dest}")
            self.manifest_store.add_installed(definition.id)
            installed.append(definition.id)

        self._manifest = None
        return AddResult(
            installed=installed,
            written=written,
            package_dependencies=self.resolver.package_dependencies_for(installed),
        )

    # ----------------------------------------------------------
    # Remove
    # ----------------------------------------------------------

    def plan_remove(self, requested: Sequence[str]) -> RemovePlan:
        """Validate ids, keep those on disk, and list installed components that depend on them."""
        plan = RemovePlan(to_remove=[])
        for raw in requested:
            definition = self.registry.lookup(raw.strip())
            if definition is None:
                if raw not in plan.unknown:
                    plan.unknown.append(raw)
                continue
            if definition.id in plan.to_remove or definition.id in plan.not_installed:
                continue
            if self.is_on_disk(definition):
                plan.to_remove.append(definition.id)
            else:
                plan.not_installed.append(definition.id)

        installed = self.manifest.installed_components
        plan.dependents = [
            cid for cid in self.registry.dependents_of(plan.to_remove)
            if cid in installed and cid not in plan.to_remove
        ]
        return plan

    def execute_remove(self, component_ids: Sequence[str]) -> List[Path]:
        """Delete every file of each component, then drop it from the manifest."""
        deleted: List[Path] = []
        for component_id in component_ids:
            definition = self.registry.lookup(component_id)
            if definition is None:
                continue
            for file in definition.files:
                path = self.component_path(definition, file)
                self.fs.delete_file(path)
                deleted.append(path)
                self.log(f"[dim]deleted[/] {path}")
            self.manifest_store.remove_installed(definition.id)

        self._manifest = None
        return deleted

    # ----------------------------------------------------------
    # Update
    # ----------------------------------------------------------

    def plan_update(self, requested: Sequence[str]) -> UpdatePlan:
        """Find components whose local copy differs from the template. Defaults to all installed."""
        candidates = list(requested) or list(self.manifest.installed_components)
        plan = UpdatePlan(modified=[])
        seen: set[str] = set()
        for raw in candidates:
            status = self.classify(raw.strip())
            if status.id in seen:
                continue
            seen.add(status.id)
            if status.state == ComponentState.UNKNOWN:
                plan.unknown.append(raw)
            elif status.state == ComponentState.MISSING_ON_DISK:
                plan.missing.append(status.id)
            elif status.state == ComponentState.PRESENT_MODIFIED:
                plan.modified.append(status.id)
            else:
                plan.unmodified.append(status.id)
        return plan

    def execute_update(self, component_ids: Sequence[str]) -> List[Path]:
        """Overwrite every file of each component with the template. Local edits are lost."""
        written: List[Path] = []
        for component_id in component_ids:
            definition = self.registry.lookup(component_id)
            if definition is None:
                continue
            for file in definition.files:
                dest = self.component_path(definition, file)
                self.fs.write_file(dest, self.expected_content(file))
                written.append(dest)
                self.log(f"[dim]updated[/] {dest}")
        return written

    # ----------------------------------------------------------
    # Diff (read-only)
    # ----------------------------------------------------------

    def diff_report(self) -> List[ComponentStatus]:
        """
        Status of every component listed as installed in the manifest.

        A component whose template or local file cannot be read gets the
        ERROR state; the remaining components are still classified.
        """
        statuses: List[ComponentStatus] = []
        for component_id in self.manifest.installed_components:
            try:
                statuses.append(self.classify(component_id))
            except FileOperationError as e:
                self.log(f"[red]could not compare[/] {component_id}: {e}")
                statuses.append(ComponentStatus(
                    id=component_id,
                    state=ComponentState.ERROR,
                    definition=self.registry.lookup(component_id),
                    error=str(e),
                ))
        return statuses

    def diff_component(self, component_id: str) -> ComponentDiff:
        """Detailed line diff between the template and the local copy."""
        status = self.classify(component_id)
        if status.state != ComponentState.PRESENT_MODIFIED or status.definition is None:
            return ComponentDiff(status=status)

        expected = self.expected_content(status.definition.main_file)
        local = self.fs.read_file(self.component_path(status.definition))
        return ComponentDiff(status=status, lines=diff_lines(expected, local))
