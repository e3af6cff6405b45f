from typing import Optional, Protocol, Any

class Console(Protocol):
    """Abstract interface for console output."""
    def print(self, *objects: Any) -> None:
        ...

    def log(self, *objects: Any) -> None:
        ...

class Confirm(Protocol):
    """Interactive yes/no question, injected into commands."""
    def __call__(self, message: str, default: bool) -> bool:
        ...

def rich_confirm(message: str, default: bool) -> bool:
    """Ask a yes/no question on the terminal."""
    from rich.prompt import Confirm as RichConfirm
    return RichConfirm.ask(message, default=default)

class ConsoleAware:
    """Base class for classes that need console output functionality."""
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console
        self.verbose = verbose

    def print(self, msg: str) -> None:
        if self.console:
            self.console.print(msg)

    def log(self, msg: str) -> None:
        if self.console and self.verbose:
            self.console.log(msg)

    def warn(self, msg: str) -> None:
        self.print(f"[bold yellow]⚠️  {msg}[/bold yellow]")
