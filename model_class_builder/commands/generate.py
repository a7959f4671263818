"""Generation commands - create dataclass modules from database metadata."""

from typing import Optional
import typer
from rich.console import Console
from rich.table import Table
from sqlalchemy.engine import Connection

from ..config import settings
from ..database import resolve_database_url, open_engine
from ..engine import ModelClassBuilder, save_class
from ..errors import ModelBuilderError

app = typer.Typer(help="Generate model classes from database tables and queries")
console = Console()

URL_OPTION = typer.Option(None, "--url", "-u", help="SQLAlchemy database URL (or MODELGEN_DATABASE_URL env)")
DATABASE_OPTION = typer.Option(None, "--database", "-d", help="Path to a SQLite or .duckdb database file")
NAMESPACE_OPTION = typer.Option(None, "--namespace", "-n", help="Namespace named in the module docstring")
ATTRIBUTES_OPTION = typer.Option(
    None, "--attributes/--no-attributes",
    help="Emit max-length metadata on bounded string fields (default from settings)",
)


def _builder(conn: Connection, namespace: Optional[str], attributes: Optional[bool]) -> ModelClassBuilder:
    return ModelClassBuilder(
        conn,
        namespace=namespace or settings.namespace,
        include_attributes=settings.include_attributes if attributes is None else attributes,
    )


def _write_or_print(content: str, output: Optional[str]):
    """Save generated code to a file, or print it unformatted to stdout."""
    if output:
        path = save_class(content, output)
        console.print(f"[green]Saved {path}[/green]")
    else:
        # Plain echo so rich markup never touches the generated code
        typer.echo(content, nl=False)


@app.command("table")
def generate_table(
    schema: str = typer.Argument(..., help="Schema containing the table"),
    table: str = typer.Argument(..., help="Table (or view) name"),
    class_name: Optional[str] = typer.Option(None, "--class-name", "-c", help="Class name (default: table name)"),
    inner: bool = typer.Option(False, "--inner", help="Emit the bare class without module header"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
    namespace: Optional[str] = NAMESPACE_OPTION,
    attributes: Optional[bool] = ATTRIBUTES_OPTION,
    url: Optional[str] = URL_OPTION,
    database: Optional[str] = DATABASE_OPTION,
):
    """Generate a dataclass for one table."""
    try:
        engine = open_engine(resolve_database_url(url, database, settings.database_url))
        try:
            with engine.connect() as conn:
                builder = _builder(conn, namespace, attributes)
                if inner:
                    content = builder.inner_class_from_table(schema, table, class_name)
                else:
                    content = builder.outer_class_from_table(schema, table, class_name)
        finally:
            engine.dispose()
        _write_or_print(content, output)
    except ModelBuilderError as e:
        console.print(f"[red]Error generating {schema}.{table}: {e.message}[/red]")
        raise typer.Exit(1)


@app.command("query")
def generate_query(
    query: str = typer.Argument(..., help="SELECT statement describing the result set"),
    class_name: str = typer.Option(..., "--class-name", "-c", help="Class name"),
    inner: bool = typer.Option(False, "--inner", help="Emit the bare class without module header"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write to this file instead of stdout"),
    namespace: Optional[str] = NAMESPACE_OPTION,
    attributes: Optional[bool] = ATTRIBUTES_OPTION,
    url: Optional[str] = URL_OPTION,
    database: Optional[str] = DATABASE_OPTION,
):
    """Generate a dataclass for the result set of a query.

    The query is described, never run for its rows. Key and constraint
    comments are not available for queries.
    """
    try:
        engine = open_engine(resolve_database_url(url, database, settings.database_url))
        try:
            with engine.connect() as conn:
                builder = _builder(conn, namespace, attributes)
                if inner:
                    content = builder.inner_class_from_query(query, class_name)
                else:
                    content = builder.outer_class_from_query(query, class_name)
        finally:
            engine.dispose()
        _write_or_print(content, output)
    except ModelBuilderError as e:
        console.print(f"[red]Error generating {class_name}: {e.message}[/red]")
        raise typer.Exit(1)


@app.command("all")
def generate_all(
    output_dir: Optional[str] = typer.Argument(None, help="Directory for generated modules (default from settings)"),
    namespace: Optional[str] = NAMESPACE_OPTION,
    attributes: Optional[bool] = ATTRIBUTES_OPTION,
    url: Optional[str] = URL_OPTION,
    database: Optional[str] = DATABASE_OPTION,
):
    """Generate one module per table, skipping files that already exist."""
    target = output_dir or settings.output_dir
    try:
        engine = open_engine(resolve_database_url(url, database, settings.database_url))
        try:
            with engine.connect() as conn:
                result = _builder(conn, namespace, attributes).generate_all_classes(target)
        finally:
            engine.dispose()
    except ModelBuilderError as e:
        console.print(f"[red]Batch generation stopped: {e.message}[/red]")
        raise typer.Exit(1)

    table = Table(title=f"Generated modules in {target}")
    table.add_column("File", style="cyan")
    table.add_column("Status", style="green")
    for path in result.written:
        table.add_row(str(path), "written")
    for path in result.skipped:
        table.add_row(str(path), "[yellow]skipped[/yellow]")

    console.print(table)
    console.print(f"[green]{len(result.written)} written, {len(result.skipped)} skipped[/green]")
