# diamant/core/transform.py

"""
Import path rewriting for copied components.

Templates import the class-name helper as "../../lib/utils". When a file is
copied into a project (or compared against the project's copy) that import
is rewritten to wherever the project keeps its utils module.
"""

from __future__ import annotations

import json
import re
from enum import Enum
from pathlib import Path

from diamant.core.models import Aliases

TEMPLATE_UTILS_IMPORT = re.compile(r"""from\s+["']\.\./\.\./lib/utils["']""")

class ProjectType(str, Enum):
    NEXTJS = "nextjs"
    VITE = "vite"
    CRA = "cra"
    UNKNOWN = "unknown"

def detect_project_type(project_dir: Path) -> ProjectType:
    """Guess the React toolchain from package.json dependencies."""
    package_json = Path(project_dir) / "package.json"
    if not package_json.is_file():
        return ProjectType.UNKNOWN

    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return ProjectType.UNKNOWN
    if not isinstance(data, dict):
        return ProjectType.UNKNOWN

    deps = {}
    for key in ("dependencies", "devDependencies"):
        section = data.get(key)
        if isinstance(section, dict):
            deps.update(section)

    if "next" in deps:
        return ProjectType.NEXTJS
    if "vite" in deps:
        return ProjectType.VITE
    if "react-scripts" in deps:
        return ProjectType.CRA
    return ProjectType.UNKNOWN

def utils_import_path(project_type: ProjectType, aliases: Aliases) -> str:
    """
    Import specifier for the utils module as seen from the components directory.

    Create React App has no path alias, so a relative path is built by
    climbing out of the components directory; every other toolchain uses
    the "@/" alias for "src/".
    """
    if project_type == ProjectType.CRA:
        components_depth = len(aliases.components.split("/"))
        utils_parts = aliases.utils.split("/")
        up_path = "../" * (components_depth - 1)
        return up_path + "/".join(utils_parts[1:]) + "/utils"

    return re.sub(r"^src/", "@/", aliases.utils) + "/utils"

# ==============================================================
# CONTENT TRANSFORM CLASS
# ==============================================================

class ContentTransform:
    """Rewrites the template utils import to a fixed project import path."""

    def __init__(self, import_path: str):
        self.import_path = import_path

    @classmethod
    def for_project(cls, project_dir: Path, aliases: Aliases) -> "ContentTransform":
        return cls(utils_import_path(detect_project_type(project_dir), aliases))

    def apply(self, content: str) -> str:
        replacement = f'from "{self.import_path}"'
        return TEMPLATE_UTILS_IMPORT.sub(lambda _: replacement, content)
