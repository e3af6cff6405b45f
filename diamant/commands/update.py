# diamant/commands/update.py

"""
Diamant update command: bring locally modified components back to the
bundled version. This overwrites local changes.
"""

from typing import List, Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.markup import escape

from diamant.core.components import default_registry
from diamant.core.console import ConsoleAware, Confirm, rich_confirm
from diamant.core.reconcile import ReconciliationEngine
from diamant.core.exceptions import DiamantError, ManifestNotFoundError, ManifestLoadError, FileOperationError

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def update_command(
    components: List[str],
    project_dir: Path,
    console: Console,
    verbose: bool,
    yes: bool = False,
    confirm: Confirm = rich_confirm,
) -> List[str]:
    """Command wrapper for update command. Returns the updated component ids."""
    console_awr = ConsoleAware(console=console, verbose=verbose)
    engine = ReconciliationEngine.for_project(project_dir, default_registry(), console=console, verbose=verbose)

    if not components and not engine.manifest.installed_components:
        console_awr.print("[yellow]No components to update. Install some components first.[/yellow]")
        console_awr.print("Run [cyan]diamant add <component>[/cyan] to add components.")
        return []

    plan = engine.plan_update(components)

    if plan.unknown:
        console_awr.warn(f"Unknown components skipped: {escape(', '.join(plan.unknown))}")
    if plan.missing:
        console_awr.warn(f"Not found on disk, skipped: {', '.join(plan.missing)}")
        console_awr.print(f"Run [cyan]diamant add {' '.join(plan.missing)}[/cyan] to restore them.\n")

    if not plan.modified:
        console_awr.print("[green]✓ All components are up to date![/green]")
        return []

    console_awr.print("[bold]📦 Components with available updates:[/bold]\n")
    for component_id in plan.modified:
        console_awr.print(f"   [yellow]~[/yellow] {engine.registry.lookup(component_id).name}") # type: ignore
    console_awr.print("")

    if not yes:
        if not confirm(
            f"Update {len(plan.modified)} component(s)? This will overwrite local changes.",
            True,
        ):
            console_awr.print("[yellow]Update cancelled.[/yellow]")
            return []

    engine.execute_update(plan.modified)
    console_awr.print(f"[bold green]✓ Updated {len(plan.modified)} component(s)[/bold green]")
    return plan.modified


def register(app):
    """Register the update command with the main Typer app."""

    @app.command()
    def update(
        components: Optional[List[str]] = typer.Argument(
            None,
            help="Components to update (all installed if empty)"
        ),
        yes: Optional[bool] = typer.Option(
            False,
            "--yes",
            "-y",
            help="Skip confirmation prompts"
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
        """Update components to the latest version."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_path = Path(project_dir).resolve() if project_dir is not None else Path.cwd()
            update_command(
                components or [],
                project_path,
                console=console,
                verbose=True if verbose else False,
                yes=bool(yes),
            )
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Update cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except ManifestNotFoundError:
            console_awr.print("\n[bold red]✗ Diamant is not initialized in this project.[/bold red]")
            console_awr.print("Run [cyan]diamant init[/cyan] first.")
            console_awr.print("")
            raise typer.Exit(code=1)

        except ManifestLoadError as e:
            console_awr.print(f"\n[bold red]❌ Invalid diamant.json:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except FileOperationError as e:
            console_awr.print(f"\n[bold red]❌ File operation failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except DiamantError as e:
            console_awr.print(f"\n[bold red]❌ Update failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
