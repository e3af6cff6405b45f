# diamant/commands/remove.py

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

def remove_command(
    components: List[str],
    project_dir: Path,
    console: Console,
    verbose: bool,
    yes: bool = False,
    confirm: Confirm = rich_confirm,
) -> List[str]:
    """Command wrapper for remove command. Returns the removed component ids."""
    console_awr = ConsoleAware(console=console, verbose=verbose)
    engine = ReconciliationEngine.for_project(project_dir, default_registry(), console=console, verbose=verbose)
    registry = engine.registry

    plan = engine.plan_remove(components)

    if plan.unknown:
        console_awr.warn("Unknown components:")
        for name in plan.unknown:
            console_awr.print(f"   - {escape(name)}")
        console_awr.print("")

    if not plan.to_remove and not plan.not_installed:
        console_awr.print("[yellow]No valid components to remove.[/yellow]")
        return []

    if plan.not_installed:
        console_awr.print("[dim]Not installed, skipped:[/dim]")
        for component_id in plan.not_installed:
            console_awr.print(f"   [dim]- {registry.lookup(component_id).name}[/dim]") # type: ignore
        console_awr.print("")

    if not plan.to_remove:
        console_awr.print("[yellow]None of the specified components are installed.[/yellow]")
        return []

    if plan.dependents:
        console_awr.warn("The following components depend on components being removed and will likely break:")
        for component_id in plan.dependents:
            console_awr.print(f"   - {registry.lookup(component_id).name}") # type: ignore
        console_awr.print("")

    if not yes:
        console_awr.print("[bold]🗑️  The following components will be removed:[/bold]\n")
        for component_id in plan.to_remove:
            console_awr.print(f"   - {registry.lookup(component_id).name}") # type: ignore
        console_awr.print("")

        if not confirm("Are you sure you want to remove these components?", False):
            console_awr.print("[yellow]Removal cancelled.[/yellow]")
            return []

    engine.execute_remove(plan.to_remove)
    console_awr.print(f"[bold green]✓ Removed {len(plan.to_remove)} component(s)[/bold green]")
    return plan.to_remove


def register(app):
    """Register the remove command with the main Typer app."""

    @app.command()
    def remove(
        components: List[str] = typer.Argument(
            ...,
            help="Components to remove"
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
        """Remove components from your project."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_path = Path(project_dir).resolve() if project_dir is not None else Path.cwd()
            remove_command(
                components,
                project_path,
                console=console,
                verbose=True if verbose else False,
                yes=bool(yes),
            )
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Remove cancelled by user.[/bold yellow]")
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
            console_awr.print(f"\n[bold red]❌ Remove failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
