"""Command-line interface for Suitcase."""

import json
import logging
import sys
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from .config import CONFIG_FILENAME, Config
from .exceptions import CollectionNotEmptyError, SuitcaseError
from .formats import FormatType
from .store import Store

# Exit codes
EXIT_OK = 0
EXIT_STORE_ERROR = 1
EXIT_BAD_USAGE = 2
EXIT_IO_ERROR = 4

app = typer.Typer()
console = Console()

_state = {"verbose": False}


@app.callback()
def main_options(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
) -> None:
    """Keyed document store backed by plain files."""
    _state["verbose"] = verbose


def load_config(path: Path | None) -> Config:
    """Load the project configuration, exiting if there is no project."""
    config_path = (path or Path.cwd()) / CONFIG_FILENAME
    if not config_path.exists():
        console.print(
            f"[red]Suitcase project not found at {config_path.parent}[/red]"
        )
        raise typer.Exit(EXIT_BAD_USAGE)

    try:
        config = Config(config_path)
        configure_logging(config)
    except ValueError as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(EXIT_BAD_USAGE) from e

    return config


def configure_logging(config: Config) -> None:
    """Apply the configured log level and format to the root logger."""
    logging.basicConfig(format=config.log_format)
    logging.getLogger().setLevel(
        logging.DEBUG if _state["verbose"] else config.log_level
    )


def get_store(config: Config, collection: str | None = None) -> Store:
    """Get store instance from configuration."""
    store = Store.from_config(config)
    if collection is not None:
        store.set_collection(collection)
    return store


def _fail(action: str, error: Exception) -> typer.Exit:
    """Report a failed command and build the matching exit."""
    if isinstance(error, SuitcaseError):
        detail = f" ({error.error})" if error.error else ""
        console.print(f"[red]Failed to {action}: {error}{detail}[/red]")
        return typer.Exit(EXIT_STORE_ERROR)
    if isinstance(error, ValueError):
        console.print(f"[red]Failed to {action}: {error}[/red]")
        return typer.Exit(EXIT_BAD_USAGE)

    console.print(f"[red]Failed to {action}: {error}[/red]")
    return typer.Exit(EXIT_IO_ERROR)


@app.command()
def init(
    path: Path | None = typer.Option(
        None, "--path", help="Path to initialize (default: current directory)"
    ),
    format_type: FormatType = typer.Option(
        FormatType.JSON, "--format", help="Serialization format for items"
    ),
    force: bool = typer.Option(
        False, "--force", help="Overwrite existing configuration"
    ),
) -> None:
    """Initialize a Suitcase project."""
    try:
        target_path = path or Path.cwd()
        config_path = target_path / CONFIG_FILENAME
        data_path = target_path / "data"

        if config_path.exists() and not force:
            console.print(
                "[red]Suitcase already initialized. Use --force to overwrite.[/red]"
            )
            raise typer.Exit(EXIT_BAD_USAGE)

        data_path.mkdir(parents=True, exist_ok=True)

        config_content = f"""# Suitcase Configuration

[store]
# Directory holding one sub-directory per collection
root_path = "data"

# Item format: json, xml, yaml or csv
format = "{format_type.value}"

[logging]
# Default log level
level = "WARNING"

# Log format
format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
"""
        config_path.write_text(config_content, encoding="utf-8")

        console.print(f"[green]Suitcase initialized in {target_path}[/green]")
        console.print(f"[blue]Configuration: {config_path}[/blue]")
        console.print(f"[blue]Data: {data_path}[/blue]")

    except typer.Exit:
        raise
    except OSError as e:
        raise _fail("initialize", e) from e


@app.command()
def save(
    collection: str = typer.Argument(..., help="Collection name"),
    key: str = typer.Argument(..., help="Item key"),
    data: str = typer.Argument(..., help="Item as a JSON object, or '-' for stdin"),
    path: Path | None = typer.Option(None, "--path", help="Path to Suitcase project"),
) -> None:
    """Save an item, creating or overwriting it."""
    config = load_config(path)

    raw = sys.stdin.read() if data == "-" else data
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON data: {e}[/red]")
        raise typer.Exit(EXIT_BAD_USAGE) from e

    try:
        store = get_store(config, collection)
        store.save(key, value)
        console.print(
            f"[green]Saved '{key}' to {store.get_file_path(key)}[/green]"
        )
    except (SuitcaseError, OSError, ValueError) as e:
        raise _fail("save item", e) from e


@app.command()
def read(
    collection: str = typer.Argument(..., help="Collection name"),
    key: str = typer.Argument(..., help="Item key"),
    path: Path | None = typer.Option(None, "--path", help="Path to Suitcase project"),
) -> None:
    """Print an item as JSON."""
    config = load_config(path)

    try:
        value = get_store(config, collection).read(key)
    except (SuitcaseError, OSError, ValueError) as e:
        raise _fail("read item", e) from e

    console.print_json(json.dumps(value))


@app.command("list")
def list_items(
    collection: str = typer.Argument(..., help="Collection name"),
    path: Path | None = typer.Option(None, "--path", help="Path to Suitcase project"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List every item in a collection."""
    config = load_config(path)

    try:
        items = get_store(config, collection).read_all()
    except (SuitcaseError, OSError, ValueError) as e:
        raise _fail("list items", e) from e

    if json_output:
        console.print_json(json.dumps(items))
        return

    table = Table(title=f"Collection: {collection}")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for item_key, value in items.items():
        table.add_row(item_key, _summarize(value))

    console.print(table)
    console.print(f"\nTotal: {len(items)} items")


@app.command()
def delete(
    collection: str = typer.Argument(..., help="Collection name"),
    key: str = typer.Argument(..., help="Item key"),
    path: Path | None = typer.Option(None, "--path", help="Path to Suitcase project"),
) -> None:
    """Delete an item."""
    config = load_config(path)

    try:
        get_store(config, collection).delete(key)
    except (SuitcaseError, OSError, ValueError) as e:
        raise _fail("delete item", e) from e

    console.print(f"[green]Deleted '{key}' from '{collection}'[/green]")


@app.command()
def clear(
    collection: str = typer.Argument(..., help="Collection name"),
    path: Path | None = typer.Option(None, "--path", help="Path to Suitcase project"),
) -> None:
    """Delete every item in a collection, keeping the collection."""
    config = load_config(path)

    try:
        get_store(config, collection).delete_all()
    except (SuitcaseError, OSError, ValueError) as e:
        raise _fail("clear collection", e) from e

    console.print(f"[green]Cleared '{collection}'[/green]")


@app.command()
def drop(
    collection: str = typer.Argument(..., help="Collection name"),
    path: Path | None = typer.Option(None, "--path", help="Path to Suitcase project"),
    force: bool = typer.Option(
        False, "--force", help="Drop the collection even if it holds items"
    ),
) -> None:
    """Delete a collection."""
    config = load_config(path)

    try:
        get_store(config).delete_collection(collection, empty=force)
    except CollectionNotEmptyError as e:
        console.print(
            f"[yellow]Collection '{collection}' is not empty. "
            "Use --force to drop it with its items.[/yellow]"
        )
        raise typer.Exit(EXIT_STORE_ERROR) from e
    except (SuitcaseError, OSError, ValueError) as e:
        raise _fail("drop collection", e) from e

    console.print(f"[green]Dropped '{collection}'[/green]")


def _summarize(value: Any, width: int = 60) -> str:
    text = json.dumps(value, ensure_ascii=False)
    return text if len(text) <= width else text[: width - 3] + "..."


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
