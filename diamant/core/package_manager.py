# diamant/core/package_manager.py

"""
Installing the npm packages that components import.

The engine only computes the package set; this module runs the project's
package manager for it.
"""

import shlex
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence

from diamant.core.console import ConsoleAware, Console
from diamant.core.global_config import get_package_manager

LOCKFILES = (
    ("bun.lockb", "bun"),
    ("bun.lock", "bun"),
    ("pnpm-lock.yaml", "pnpm"),
    ("yarn.lock", "yarn"),
    ("package-lock.json", "npm"),
)

def detect_package_manager(project_dir: Path) -> str:
    """Configured package manager, else the one whose lockfile is present, else npm."""
    configured = get_package_manager()
    if configured:
        return configured

    for lockfile, manager in LOCKFILES:
        if (Path(project_dir) / lockfile).exists():
            return manager
    return "npm"

def install_command(manager: str, packages: Sequence[str], dev: bool = False) -> List[str]:
    """Argument vector that installs packages with the given manager."""
    if manager == "npm":
        cmd = ["npm", "install"]
        if dev:
            cmd.append("--save-dev")
    else:
        cmd = [manager, "add"]
        if dev:
            cmd.append("-D")
    return cmd + list(packages)

# ==============================================================
# PACKAGE INSTALLER CLASS
# ==============================================================

class PackageInstaller(ConsoleAware):
    """Runs the package manager in the consumer project."""

    def __init__(self, project_dir: Path, console: Optional[Console] = None, verbose: bool = False):
        super().__init__(console, verbose)
        self.project_dir = Path(project_dir)

    def install(self, packages: Sequence[str], dev: bool = False) -> bool:
        """
        Install packages. Returns False if the command failed or was not found;
        the caller only warns in that case.
        """
        if not packages:
            return True

        manager = detect_package_manager(self.project_dir)
        cmd = install_command(manager, packages, dev)
        self.log(f"[dim]running[/] {shlex.join(cmd)}")

        try:
            completed = subprocess.run(
                cmd,
                cwd=self.project_dir,
                capture_output=True,
                text=True,
                check=False,
            )
        except OSError as e:
            self.log(f"[red]{manager} could not be started:[/] {e}")
            return False

        if completed.returncode != 0:
            self.log(f"[red]{manager} exited with code {completed.returncode}[/]")
            if completed.stderr:
                self.log(completed.stderr.strip())
            return False
        return True
