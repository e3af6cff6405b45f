# diamant/commands/add.py

"""
Diamant add command: copy components (and the components they depend on)
into the project and record them in diamant.json.
"""

from typing import List, Optional
from pathlib import Path
import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.markup import escape

from diamant.core.components import default_registry
from diamant.core.console import ConsoleAware, Confirm, rich_confirm
from diamant.core.reconcile import ReconciliationEngine, AddResult
from diamant.core.package_manager import PackageInstaller
from diamant.core.exceptions import DiamantError, ManifestNotFoundError, ManifestLoadError, FileOperationError, InvalidUsageError

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def _select_components(engine: ReconciliationEngine, console_awr: ConsoleAware) -> List[str]:
    """Show the catalogue and ask for a comma-separated selection."""
    console_awr.print("[bold]Available components:[/bold]\n")
    for definition in engine.registry:
        marker = "[green]●[/green]" if engine.manifest.is_installed(definition.id) else "[dim]○[/dim]"
        console_awr.print(f"   {marker} {definition.id:<14} [dim]{definition.description}[/dim]")
    console_awr.print("")
    answer = Prompt.ask("Components to add (comma separated)", default="")
    return [name.strip() for name in answer.replace(" ", ",").split(",") if name.strip()]


def add_command(
    components: List[str],
    project_dir: Path,
    console: Console,
    verbose: bool,
    yes: bool = False,
    all_components: bool = False,
    overwrite: bool = False,
    skip_install: bool = False,
    confirm: Confirm = rich_confirm,
) -> Optional[AddResult]:
    """Command wrapper for add command. Returns None when nothing was added."""
    console_awr = ConsoleAware(console=console, verbose=verbose)
    engine = ReconciliationEngine.for_project(project_dir, default_registry(), console=console, verbose=verbose)

    if all_components:
        if components:
            raise InvalidUsageError("Pass component names or --all, not both.")
        components = engine.registry.all_ids()

    if not components:
        components = _select_components(engine, console_awr)
        if not components:
            console_awr.print("[yellow]No components selected.[/yellow]")
            return None

    plan = engine.plan_add(components)

    if plan.unknown:
        console_awr.warn("Unknown components:")
        for name in plan.unknown:
            console_awr.print(f"   - {escape(name)}")
        console_awr.print("")

    if not plan.resolved:
        console_awr.print("[yellow]No valid components to add.[/yellow]")
        console_awr.print("Run [cyan]diamant list[/cyan] to see available components.")
        return None

    if plan.needs_confirmation(overwrite):
        console_awr.warn("The following components already exist:")
        for component_id in plan.existing:
            console_awr.print(f"   - {engine.registry.lookup(component_id).name}") # type: ignore
        console_awr.print("")

        if not yes:
            if confirm("Overwrite existing components?", False):
                overwrite = True
            elif not plan.new:
                console_awr.print("[yellow]No new components to add.[/yellow]")
                return None

    to_add = plan.actions(overwrite)
    if not to_add:
        console_awr.print("[green]✓ All components are already installed.[/green]")
        return None

    console_awr.print("[bold]✨ Adding components:[/bold]\n")
    for component_id in to_add:
        definition = engine.registry.lookup(component_id)
        symbol = "[yellow]~[/yellow]" if component_id in plan.existing else "[green]+[/green]"
        suffix = " [dim](dependency)[/dim]" if plan.is_dependency(component_id) else ""
        console_awr.print(f"   {symbol} {definition.name}{suffix}") # type: ignore
    console_awr.print("")

    packages = engine.resolver.package_dependencies_for(to_add)
    if packages:
        if skip_install:
            console_awr.print(f"📦 Install manually: [cyan]{' '.join(packages)}[/cyan]")
        else:
            installer = PackageInstaller(project_dir, console=console, verbose=verbose)
            if installer.install(packages):
                console_awr.print(f"[green]✓ Installed {', '.join(packages)}[/green]")
            else:
                console_awr.warn(f"Some dependencies may need manual installation: {' '.join(packages)}")

    result = engine.execute_add(to_add)

    console_awr.print(f"\n[bold green]✨ Added {len(result.installed)} component(s)[/bold green]")
    console_awr.print(f"Components are located in: [cyan]{engine.manifest.aliases.components}[/cyan]")
    return result


def register(app):
    """Register the add command with the main Typer app."""

    @app.command()
    def add(
        components: Optional[List[str]] = typer.Argument(
            None,
            help="Components to add"
        ),
        yes: Optional[bool] = typer.Option(
            False,
            "--yes",
            "-y",
            help="Skip confirmation prompts"
        ),
        all_components: Optional[bool] = typer.Option(
            False,
            "--all",
            "-a",
            help="Add all components"
        ),
        overwrite: Optional[bool] = typer.Option(
            False,
            "--overwrite",
            help="Overwrite existing components"
        ),
        skip_install: Optional[bool] = typer.Option(
            False,
            "--skip-install",
            help="Do not run the package manager for component dependencies"
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
        """Add components to your project."""

        console: Console = Console(log_path=False)
        console_awr = ConsoleAware(console=console, verbose=True if verbose else False)

        try:
            console_awr.print("")
            project_path = Path(project_dir).resolve() if project_dir is not None else Path.cwd()
            add_command(
                components or [],
                project_path,
                console=console,
                verbose=True if verbose else False,
                yes=bool(yes),
                all_components=bool(all_components),
                overwrite=bool(overwrite),
                skip_install=bool(skip_install),
            )
            console_awr.print("")

        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Add cancelled by user.[/bold yellow]")
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
            console_awr.print("[dim]Files written before the failure were left in place.[/dim]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except DiamantError as e:
            console_awr.print(f"\n[bold red]❌ Add failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
