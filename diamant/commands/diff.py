# diamant/commands/diff.py

from typing import List, Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.markup import escape

from diamant.core.components import default_registry
from diamant.core.console import ConsoleAware
from diamant.core.models import ComponentState, ComponentStatus
from diamant.core.reconcile import ReconciliationEngine
from diamant.core.exceptions import DiamantError, ManifestNotFoundError, ManifestLoadError, FileOperationError

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def _show_component_diff(engine: ReconciliationEngine, component: str, console_awr: ConsoleAware) -> ComponentStatus:
    result = engine.diff_component(component)
    status = result.status

    if status.state == ComponentState.UNKNOWN:
        console_awr.print(f"[red]✗ Unknown component: {escape(component)}[/red]")
        console_awr.print("Run [cyan]diamant list[/cyan] to see available components.")
    elif status.state == ComponentState.MISSING_ON_DISK:
        console_awr.warn(f'Component "{status.display_name}" is not installed.')
        console_awr.print(f"Run [cyan]diamant add {status.id}[/cyan] to install it.")
    elif status.state == ComponentState.PRESENT_UNMODIFIED:
        console_awr.print(f"[green]✓ {status.display_name} is up to date.[/green]")
    else:
        console_awr.print(f"[bold]📄 Diff for {status.display_name}:[/bold]\n")
        if not result.lines:
            console_awr.print("[dim](whitespace-only changes)[/dim]")
        for sign, line in result.lines:
            colour = "green" if sign == "+" else "red"
            console_awr.print(f"[{colour}]{sign} {escape(line)}[/{colour}]")
        console_awr.print("")
        console_awr.print("[dim]Legend:[/dim] [green]+ your changes[/green] | [red]- latest version[/red]")
    return status


def _show_summary(engine: ReconciliationEngine, console_awr: ConsoleAware) -> List[ComponentStatus]:
    statuses = engine.diff_report()
    if not statuses:
        console_awr.print("[yellow]No components installed.[/yellow]")
        return statuses

    console_awr.print("[bold]📋 Component Status:[/bold]\n")
    for status in statuses:
        name = escape(status.display_name)
        if status.state == ComponentState.UNKNOWN:
            console_awr.print(f"   [red]?[/red] {name} [dim](unknown component)[/dim]")
        elif status.state == ComponentState.MISSING_ON_DISK:
            console_awr.print(f"   [red]✗[/red] {name} [dim](missing)[/dim]")
        elif status.state == ComponentState.PRESENT_UNMODIFIED:
            console_awr.print(f"   [green]✓[/green] {name} [dim](up to date)[/dim]")
        elif status.state == ComponentState.ERROR:
            console_awr.print(f"   [red]![/red] {name} [dim](error reading)[/dim]")
            console_awr.log(escape(status.error or ""))
        else:
            diff = status.diff
            counts = f"+{diff.added_blocks} -{diff.removed_blocks} blocks" if diff else "modified"
            console_awr.print(f"   [yellow]~[/yellow] {name} [dim]({counts})[/dim]")
    console_awr.print("")

    if any(s.state == ComponentState.PRESENT_MODIFIED for s in statuses):
        console_awr.print("[dim]Run[/dim] [cyan]diamant diff <component>[/cyan] [dim]to see detailed changes.[/dim]")
    return statuses


def diff_command(component: Optional[str], project_dir: Path, console: Console, verbose: bool):
    """Command wrapper for diff command."""
    console_awr = ConsoleAware(console=console, verbose=verbose)
    engine = ReconciliationEngine.for_project(project_dir, default_registry(), console=console, verbose=verbose)

    if component:
        return _show_component_diff(engine, component, console_awr)
    return _show_summary(engine, console_awr)


def register(app):
    """Register the diff command with the main Typer app."""

    @app.command()
    def diff(
        component: Optional[str] = typer.Argument(
            None,
            help="Component to diff (summary of all installed components if empty)"
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
        """Show differences between local and latest component versions."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_path = Path(project_dir).resolve() if project_dir is not None else Path.cwd()
            diff_command(component, project_path, console, True if verbose else False)
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Diff cancelled by user.[/bold yellow]")
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
            console_awr.print(f"\n[bold red]❌ Error reading files:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except DiamantError as e:
            console_awr.print(f"\n[bold red]❌ Diff failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
