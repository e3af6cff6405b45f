# diamant/commands/global_config.py

from typing import Optional
from pathlib import Path
import typer
from rich.console import Console

from diamant.core.console import ConsoleAware
from diamant.core.exceptions import DiamantError
from diamant.core.global_config import (
    get_global_dir,
    get_templates_dir,
    get_package_manager,
    set_global,
)

PACKAGE_MANAGERS = ("npm", "pnpm", "yarn", "bun")

# ==============================================================
# COMMAND WRAPPER
# ==============================================================

def globalconfig_command(
        package_manager: Optional[str],
        templates_dir: Optional[Path],
        console: Console
    ):
    """Command wrapper for globalconfig command."""
    console_awr = ConsoleAware(console=console, verbose=False)

    if package_manager:
        if package_manager not in PACKAGE_MANAGERS:
            raise DiamantError(
                f"Unsupported package manager '{package_manager}'. "
                f"Choose one of: {', '.join(PACKAGE_MANAGERS)}"
            )
        set_global("package_manager", package_manager)
        console_awr.print(f"📦 [green]Package manager set[/green] → [cyan]{package_manager}[/cyan]")

    if templates_dir:
        set_global("templates", {"dir": str(templates_dir.resolve())})
        console_awr.print(f"📁 [green]Templates directory set[/green] → [cyan]{templates_dir.resolve()}[/cyan]")

    console_awr.print("")
    console_awr.print(f"⚙️  [bold cyan]Global configuration[/] ({get_global_dir() / 'config.yaml'}):")
    console_awr.print(f"   → Package manager: [cyan]{get_package_manager() or 'auto-detect'}[/cyan]")
    console_awr.print(f"   → Templates directory: [cyan]{get_templates_dir()}[/cyan]")


def register(app: typer.Typer):

    @app.command()
    def globalconfig(
        package_manager: Optional[str] = typer.Option(
            None,
            "--package-manager",
            help="Package manager used to install component dependencies (npm, pnpm, yarn, bun)"
        ),
        templates_dir: Optional[Path] = typer.Option(
            None,
            "--templates-dir",
            help="Use component templates from this directory instead of the bundled ones"
        ),
    ):
        """Configure Diamant CLI defaults."""
        console = Console(log_path=False)

        console_awr = ConsoleAware(console=console, verbose=False)

        try:
            console_awr.print("")
            globalconfig_command(package_manager, templates_dir, console)
            console_awr.print("")
        except KeyboardInterrupt:
            console_awr.print("\n[bold yellow]⚠️  Global config setting cancelled by user.[/bold yellow]")
            console_awr.print("")
            raise typer.Exit(code=1)

        except DiamantError as e:
            console_awr.print(f"\n[bold red]❌ Global config setting failed:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)

        except Exception as e:
            console_awr.print(f"\n[bold red]❌ Unexpected error:[/bold red] {e}")
            console_awr.print("")
            raise typer.Exit(code=1)
