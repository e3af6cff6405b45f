# diamant/commands/init.py

"""
Diamant init command: create diamant.json and the class-name utility that
every component imports.

Tailwind installation and theme CSS are left to the project.
"""

from typing import Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.prompt import Prompt
from jinja2 import Template

from diamant.core.console import ConsoleAware, Confirm, rich_confirm
from diamant.core.manifest import ManifestStore, default_manifest
from diamant.core.models import DiamantManifest
from diamant.core.package_manager import PackageInstaller
from diamant.core.exceptions import DiamantError, FileOperationError
from diamant.core.filesystem import LocalFileSystem

UTILS_DEPENDENCIES = ["clsx", "tailwind-merge"]

TEMPLATE_UTILS = """{% if typescript %}import { type ClassValue, clsx } from "clsx";{% else %}import { clsx } from "clsx";{% endif %}
import { twMerge } from "tailwind-merge";

export function cn(...inputs{% if typescript %}: ClassValue[]{% endif %}){% if typescript %}: string{% endif %} {
  return twMerge(clsx(inputs));
}
"""

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def init_command(
    project_dir: Path,
    console: Console,
    verbose: bool,
    yes: bool = False,
    typescript: Optional[bool] = None,
    css: Optional[str] = None,
    components: Optional[str] = None,
    utils: Optional[str] = None,
    skip_install: bool = False,
    confirm: Confirm = rich_confirm,
) -> Optional[DiamantManifest]:
    """Command wrapper for init command. Returns None if cancelled."""
    console_awr = ConsoleAware(console=console, verbose=verbose)
    store = ManifestStore(project_dir, console, verbose)

    console_awr.print("[bold]✨ Initializing Diamant UI[/bold]\n")

    if store.exists() and not yes:
        if not confirm("Diamant is already initialized. Overwrite configuration?", False):
            console_awr.print("[yellow]Initialization cancelled.[/yellow]")
            return None

    manifest = default_manifest(project_dir, typescript, components, utils, css)

    if not yes:
        manifest.aliases.components = Prompt.ask(
            "Where should components be installed?", default=manifest.aliases.components
        )
        manifest.aliases.utils = Prompt.ask(
            "Where should the utils file be created?", default=manifest.aliases.utils
        )
        manifest.tailwind.css = Prompt.ask(
            "Where is your global CSS file?", default=manifest.tailwind.css
        )
        # Re-run alias validation on the answers
        manifest = DiamantManifest.model_validate(manifest.to_document())

    if skip_install:
        console_awr.print(f"📦 Install manually: [cyan]{' '.join(UTILS_DEPENDENCIES)}[/cyan]")
    else:
        installer = PackageInstaller(project_dir, console=console, verbose=verbose)
        if installer.install(UTILS_DEPENDENCIES):
            console_awr.print("[green]✓ Dependencies installed[/green]")
        else:
            console_awr.warn("Some dependencies may need manual installation")

    ext = ".ts" if manifest.typescript else ".js"
    utils_file = project_dir / manifest.aliases.utils / f"utils{ext}"
    LocalFileSystem().write_file(utils_file, Template(TEMPLATE_UTILS).render(typescript=manifest.typescript))
    console_awr.print(f"[green]✓ Created {manifest.aliases.utils}/utils{ext}[/green]")

    store.write(manifest)
    console_awr.print("[green]✓ Created diamant.json[/green]")

    console_awr.print("\n[bold green]✨ Diamant initialized successfully![/bold green]\n")
    console_awr.print("Next steps:")
    console_awr.print("[cyan]  diamant add button[/cyan] - Add a button component")
    console_awr.print("[cyan]  diamant list[/cyan] - View all available components")
    return manifest


def register(app):
    """Register the init command with the main Typer app."""

    @app.command()
    def init(
        yes: Optional[bool] = typer.Option(
            False,
            "--yes",
            "-y",
            help="Skip confirmation prompts"
        ),
        typescript: Optional[bool] = typer.Option(
            None,
            "--typescript/--no-typescript",
            help="Use TypeScript (default: auto-detect)"
        ),
        css: Optional[str] = typer.Option(
            None,
            "--css",
            help="Path to your global CSS file"
        ),
        components: Optional[str] = typer.Option(
            None,
            "--components",
            help="Path to install components"
        ),
        utils: Optional[str] = typer.Option(
            None,
            "--utils",
            help="Path where the utils file is created"
        ),
        skip_install: Optional[bool] = typer.Option(
            False,
            "--skip-install",
            help="Do not run the package manager"
        ),
        project_dir: Optional[Path] = typer.Option(
            None,
            "--project-dir",
            "-d",
            help="Project directory (default: current directory)"
        ),
        verbose: Optional[bool] = typer.Option(
            False,
            "--verbose",
            help="Show detailed output"
        )
    ):
        """Initialize Diamant in your project."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_path = Path(project_dir).resolve() if project_dir is not None else Path.cwd()
            init_command(
                project_path,
                console,
                True if verbose else False,
                yes=bool(yes),
                typescript=typescript,
                css=css,
                components=components,
                utils=utils,
                skip_install=bool(skip_install),
            )
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Init cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except FileOperationError as e:
            console_awr.print(f"\n[bold red]❌ File operation failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except DiamantError as e:
            console_awr.print(f"\n[bold red]❌ Init failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
