# diamant/commands/list.py

from typing import List, Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.table import Table

from diamant.core.components import default_registry
from diamant.core.console import ConsoleAware
from diamant.core.manifest import ManifestStore
from diamant.core.exceptions import DiamantError

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def list_command(project_dir: Path, installed_only: bool, console: Console, verbose: bool) -> List[str]:
    """Command wrapper for list command. Returns the ids shown."""
    console_awr = ConsoleAware(console=console, verbose=verbose)
    registry = default_registry()

    # A missing or broken manifest shows everything as not installed.
    manifest = ManifestStore(project_dir, console, verbose).read_or_none()
    installed = manifest.installed_components if manifest else []

    all_ids = registry.all_ids()
    to_show = [cid for cid in all_ids if cid in installed] if installed_only else all_ids

    if not to_show:
        if installed_only:
            console_awr.print("[yellow]No components installed yet.[/yellow]\n")
            console_awr.print("Run [cyan]diamant add <component>[/cyan] to add components.")
        else:
            console_awr.print("[yellow]No components available.[/yellow]")
        return []

    title = "📦 Installed Components" if installed_only else "✨ Available Diamant Components"
    table = Table(title=title, show_header=True, header_style="bold cyan", title_justify="left")
    table.add_column("", justify="center")
    table.add_column("Component")
    table.add_column("Description", style="dim")
    table.add_column("Requires", style="dim")

    for component_id in to_show:
        definition = registry.lookup(component_id)
        is_installed = component_id in installed
        status = "[green]●[/]" if is_installed else "[dim]○[/]"
        name = definition.name if is_installed else f"[bright_black]{definition.name}[/]" # type: ignore
        requires = ", ".join(definition.internal_dependencies + definition.dependencies) # type: ignore
        table.add_row(status, name, definition.description, requires or "—") # type: ignore

    if console:
        console.print(table)
    console_awr.print("")

    if not installed_only:
        installed_count = len([cid for cid in installed if cid in registry])
        console_awr.print(f"[dim]   {installed_count}/{len(all_ids)} components installed[/dim]")
        console_awr.print("[dim]   Legend:[/dim] [green]●[/] installed  [dim]○[/] not installed")
        console_awr.print("")

    console_awr.print("[dim]Usage:[/dim]")
    console_awr.print("[cyan]   diamant add button dialog[/cyan][dim] - Add specific components[/dim]")
    console_awr.print("[cyan]   diamant add --all[/cyan][dim] - Add all components[/dim]")
    return to_show


def register(app):
    """Register the list command with the main Typer app."""

    @app.command(name="list")
    def list_(
        installed: Optional[bool] = typer.Option(
            False,
            "--installed",
            "-i",
            help="Show only installed components"
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
        """List all available components."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_path = Path(project_dir).resolve() if project_dir is not None else Path.cwd()
            list_command(project_path, bool(installed), console, True if verbose else False)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  List cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except DiamantError as e:
            console_awr.print(f"\n[bold red]❌ List failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
