"""
Console helpers shared by the CLI handlers.
"""

from rich.console import Console


console = Console()
err_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print a single fatal-error line to stderr."""
    err_console.print(f"[bold red]Error:[/] {message}", highlight=False)
