# diamant/core/manifest.py

"""
Access to a project's diamant.json.

Every mutation is a full read-modify-write of the document. There is no
locking: one diamant process per project root at a time.
"""

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from diamant.core.console import ConsoleAware, Console
from diamant.core.models import DiamantManifest, Aliases, TailwindPaths
from diamant.core.exceptions import ManifestNotFoundError, ManifestLoadError

MANIFEST_FILE = "diamant.json"

NEXT_CONFIG_FILES = ("next.config.js", "next.config.ts", "next.config.mjs")
TAILWIND_CONFIG_FILES = (
    "tailwind.config.ts",
    "tailwind.config.js",
    "tailwind.config.mjs",
    "tailwind.config.cjs",
)

# ==============================================================
# MANIFEST STORE CLASS
# ==============================================================

class ManifestStore(ConsoleAware):
    """Reads and writes diamant.json for one project."""

    def __init__(self, project_dir: Path, console: Optional[Console] = None, verbose: bool = False):
        super().__init__(console, verbose)
        self.project_dir: Path = Path(project_dir)
        self.path: Path = self.project_dir / MANIFEST_FILE

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> DiamantManifest:
        """
        Load and validate diamant.json.

        Raises:
            ManifestNotFoundError: No diamant.json in the project
            ManifestLoadError: Invalid JSON or invalid manifest shape
        """
        if not self.exists():
            raise ManifestNotFoundError(str(self.project_dir))

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ManifestLoadError(str(self.path), str(e))

        if not isinstance(data, dict):
            raise ManifestLoadError(str(self.path), "Manifest must be a JSON object")

        try:
            manifest = DiamantManifest.model_validate(data)
        except ValidationError as e:
            raise ManifestLoadError(str(self.path), str(e))

        self.log(f"[dim]loaded[/] {self.path} ({len(manifest.installed_components)} installed)")
        return manifest

    def read_or_none(self) -> Optional[DiamantManifest]:
        """Like read(), but None for a missing or unreadable manifest."""
        try:
            return self.read()
        except (ManifestNotFoundError, ManifestLoadError):
            return None

    def write(self, manifest: DiamantManifest) -> None:
        """Replace diamant.json with the full document."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        content = json.dumps(manifest.to_document(), indent=2, ensure_ascii=False) + "\n"
        self.path.write_text(content, encoding="utf-8")
        self.log(f"[dim]wrote[/] {self.path}")

    def add_installed(self, component_id: str) -> bool:
        """Record component_id as installed. Returns False (no write) if already there."""
        manifest = self.read()
        if manifest.is_installed(component_id):
            return False

        manifest.installed_components = sorted(manifest.installed_components + [component_id])
        self.write(manifest)
        return True

    def remove_installed(self, component_id: str) -> bool:
        """Drop component_id from the installed list. Returns False (no write) if absent."""
        manifest = self.read()
        if not manifest.is_installed(component_id):
            return False

        manifest.installed_components = [c for c in manifest.installed_components if c != component_id]
        self.write(manifest)
        return True

# ==============================================================
# DEFAULTS
# ==============================================================

def default_manifest(
    project_dir: Path,
    typescript: Optional[bool] = None,
    components: Optional[str] = None,
    utils: Optional[str] = None,
    css: Optional[str] = None,
) -> DiamantManifest:
    """Initial manifest for a project, with paths guessed from its layout."""
    project_dir = Path(project_dir)
    has_src_dir = (project_dir / "src").is_dir()
    is_nextjs = any((project_dir / name).exists() for name in NEXT_CONFIG_FILES)

    if typescript is None:
        typescript = (project_dir / "tsconfig.json").exists()

    if css is None:
        if is_nextjs:
            css = "src/app/globals.css" if has_src_dir else "app/globals.css"
        else:
            css = "src/index.css" if has_src_dir else "index.css"

    tailwind_config = next(
        (name for name in TAILWIND_CONFIG_FILES if (project_dir / name).exists()),
        "tailwind.config.js",
    )

    return DiamantManifest(
        typescript=typescript,
        tailwind=TailwindPaths(config=tailwind_config, css=css),
        aliases=Aliases(
            components=components or ("src/components/ui" if has_src_dir else "components/ui"),
            utils=utils or ("src/lib" if has_src_dir else "lib"),
        ),
        installed_components=[],
    )
