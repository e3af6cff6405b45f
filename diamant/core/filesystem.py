# diamant/core/filesystem.py

"""
Filesystem primitives used by the reconciliation engine.

Project files go through LocalFileSystem, template files through
TemplateStore. Both wrap OSError in FileOperationError so the commands can
report the failing path.
"""

from pathlib import Path
from typing import Optional, Protocol

from diamant.core.file_reading import read_source_file_smart
from diamant.core.global_config import get_templates_dir
from diamant.core.exceptions import FileOperationError, TemplatesNotFoundError

class FileSystem(Protocol):
    def file_exists(self, path: Path) -> bool: ...
    def read_file(self, path: Path) -> str: ...
    def write_file(self, path: Path, content: str) -> None: ...
    def delete_file(self, path: Path) -> None: ...

# ==============================================================
# LOCAL FILESYSTEM CLASS
# ==============================================================

class LocalFileSystem:
    """Reads and writes files in the consumer project."""

    def file_exists(self, path: Path) -> bool:
        return Path(path).is_file()

    def read_file(self, path: Path) -> str:
        try:
            return read_source_file_smart(Path(path))
        except OSError as e:
            raise FileOperationError("read", str(path), e.strerror or str(e))

    def write_file(self, path: Path, content: str) -> None:
        """Write content, creating parent directories as needed."""
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise FileOperationError("write", str(path), e.strerror or str(e))

    def delete_file(self, path: Path) -> None:
        """Delete a file; missing files are ignored."""
        path = Path(path)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise FileOperationError("delete", str(path), e.strerror or str(e))

# ==============================================================
# TEMPLATE STORE CLASS
# ==============================================================

class TemplateStore:
    """Source-of-truth component files, addressed by ComponentDefinition.files names."""

    def __init__(self, templates_dir: Optional[Path] = None):
        self.templates_dir: Path = Path(templates_dir) if templates_dir else get_templates_dir()

    def template_path(self, name: str) -> Path:
        if not self.templates_dir.is_dir():
            raise TemplatesNotFoundError(str(self.templates_dir))
        return self.templates_dir / name

    def read_template(self, name: str) -> str:
        path = self.template_path(name)
        if not path.is_file():
            raise FileOperationError("read template", str(path), "file not found")
        try:
            return read_source_file_smart(path)
        except OSError as e:
            raise FileOperationError("read template", str(path), e.strerror or str(e))
