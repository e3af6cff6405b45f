# diamant/core/models.py

"""
Core models for the Diamant component CLI.

This module contains the component definition, the persisted project
manifest (diamant.json) and the transient reconciliation types.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, List, Tuple, Any

from pydantic import (
    BaseModel,
    Field,
    field_validator,
    model_validator,
    ConfigDict,
)

# ==============================================================
# COMPONENT DEFINITION
# ==============================================================

class ComponentDefinition(BaseModel):
    """A component shipped with the CLI: metadata plus its template files."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(
        ...,
        min_length=1,
        pattern=r"^[a-z0-9\-]+$",
        description="Unique lowercase registry key"
    )
    name: str = Field(..., description="Human-readable display name")
    description: str = Field(default="", description="Short component description")
    dependencies: Tuple[str, ...] = Field(
        default=(),
        description="Third-party packages the component imports"
    )
    internal_dependencies: Tuple[str, ...] = Field(
        default=(),
        description="Other components this one requires"
    )
    files: Tuple[str, ...] = Field(
        ...,
        min_length=1,
        description="Template file names, relative to the components template root"
    )

    @model_validator(mode="after")
    def validate_no_self_dependency(self) -> "ComponentDefinition":
        if self.id in self.internal_dependencies:
            raise ValueError(f"component '{self.id}' cannot depend on itself")
        return self

    @property
    def main_file(self) -> str:
        """First file of the component; its presence decides 'installed on disk'."""
        return self.files[0]

# ==============================================================
# MANIFEST (diamant.json)
# ==============================================================

class TailwindPaths(BaseModel):
    """Styling paths, passed through untouched."""
    model_config = ConfigDict(extra="allow")

    config: str = Field(default="tailwind.config.js")
    css: str = Field(default="src/app/globals.css")

class Aliases(BaseModel):
    """Install locations relative to the project root."""
    model_config = ConfigDict(extra="allow")

    components: str = Field(default="src/components/ui")
    utils: str = Field(default="src/lib")

    @field_validator("components", "utils")
    @classmethod
    def validate_relative(cls, v: str) -> str:
        v = v.strip().replace("\\", "/").rstrip("/")
        if not v:
            raise ValueError("alias path cannot be empty")
        return v

class DiamantManifest(BaseModel):
    """
    Diamant project manifest.

    Persisted as diamant.json at the project root. Always written as a
    whole document.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    schema_: Optional[str] = Field(default=None, alias="$schema")
    typescript: bool = Field(default=True)
    tailwind: TailwindPaths = Field(default_factory=TailwindPaths)
    aliases: Aliases = Field(default_factory=Aliases)
    installed_components: List[str] = Field(
        default_factory=list,
        alias="installedComponents"
    )

    @field_validator("installed_components", mode="before")
    @classmethod
    def normalize_installed(cls, v: Any) -> List[str]:
        """Keep installedComponents sorted and unique."""
        if v is None:
            return []
        if not isinstance(v, list):
            raise ValueError("installedComponents must be a list")
        for item in v:
            if not isinstance(item, str):
                raise ValueError("installedComponents entries must be strings")
        return sorted(set(v))

    def is_installed(self, component_id: str) -> bool:
        return component_id in self.installed_components

    def to_document(self) -> dict:
        """Dump with the on-disk key names."""
        return self.model_dump(by_alias=True, exclude_none=True)

# ==============================================================
# RECONCILIATION TYPES
# ==============================================================

class ComponentState(str, Enum):
    """State of one component against the registry and the project files."""
    UNKNOWN = "unknown"
    MISSING_ON_DISK = "missing_on_disk"
    PRESENT_UNMODIFIED = "present_unmodified"
    PRESENT_MODIFIED = "present_modified"
    ERROR = "error"

class DiffSummary(BaseModel):
    """Counts of added/removed line blocks between template and local file."""
    added_blocks: int = 0
    removed_blocks: int = 0

    @property
    def is_empty(self) -> bool:
        return self.added_blocks == 0 and self.removed_blocks == 0

class ComponentStatus(BaseModel):
    """Classification result for a single component id."""
    id: str
    state: ComponentState
    definition: Optional[ComponentDefinition] = None
    diff: Optional[DiffSummary] = None
    error: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.definition.name if self.definition else self.id
