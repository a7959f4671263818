"""model-class-builder - Main entry point."""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from .commands import generate
from .config import settings

app = typer.Typer(
    name="model-class-builder",
    help="Generate Python dataclasses from database tables and queries",
    add_completion=False,
)

# Add subcommands
app.add_typer(generate.app, name="generate")

console = Console()


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Database URL: {'Configured' if settings.database_url else 'Not set'}")
    console.print(f"  Namespace: {settings.namespace or 'Not set'}")
    console.print(f"  Size attributes: {'Yes' if settings.include_attributes else 'No'}")
    console.print(f"  Output directory: {settings.output_dir}")
    console.print(f"  Log level: {settings.log_level}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log catalog queries and batch progress"),
):
    """
    model-class-builder - Generate Python dataclasses from database schemas.

    Examples:

        model-class-builder generate table sales orders --url sqlite:///shop.db

        model-class-builder generate query "SELECT id, name FROM customers" --class-name CustomerRow

        model-class-builder generate all ./models --database shop.duckdb
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


if __name__ == "__main__":
    app()
