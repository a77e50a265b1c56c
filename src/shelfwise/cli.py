"""Command-line interface for shelfwise.

Built with Typer for commands and Rich for beautiful output.
"""

from datetime import date
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import configure_logging, get_config
from .db import get_db
from .db.schemas import BookCreate
from .readingorder import BookRecord, ReadingOrderManager, ReadingOrderMode
from .series import SeriesBookSource, SeriesCreate, SeriesManager
from .settings import SettingKey, SettingsManager

# Create the main app
app = typer.Typer(
    name="shelfwise",
    help="Keep the books of your series in reading order.",
    no_args_is_help=True,
)

# Create sub-apps for command groups
book_app = typer.Typer(help="Manage books in the library.")
app.add_typer(book_app, name="book")

series_app = typer.Typer(help="Manage series and their books.")
app.add_typer(series_app, name="series")

order_app = typer.Typer(help="Change the reading order of a series.")
app.add_typer(order_app, name="order")

settings_app = typer.Typer(help="View and change settings.")
app.add_typer(settings_app, name="settings")

# Rich console for pretty output
console = Console()


@app.callback()
def main_callback() -> None:
    """Keep the books of your series in reading order."""
    configure_logging(get_config().log_level)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def get_order_manager() -> ReadingOrderManager:
    """Build a reading order manager over the local database."""
    db = get_db()
    return ReadingOrderManager(SeriesManager(db), SeriesBookSource(db))


def format_date(value: Optional[date]) -> str:
    """Format an optional date for display."""
    return value.strftime("%Y-%m-%d") if value else "-"


def format_ordered_table(
    books: list[BookRecord], title: str, show_dates: bool = True
) -> Table:
    """Create a rich table of books in reading order."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Title", style="green", no_wrap=False, max_width=40)
    if show_dates:
        table.add_column("Published", justify="center")
    table.add_column("Timeline", justify="center")
    table.add_column("ID", style="dim")

    for i, book in enumerate(books, 1):
        row = [str(i), book.title]
        if show_dates:
            row.append(format_date(book.publication_date))
        row.append(
            f"{book.chronological_position:g}"
            if book.chronological_position is not None
            else "-"
        )
        row.append(book.id)
        table.add_row(*row)

    return table


# ============================================================================
# Book Commands
# ============================================================================


@book_app.command("add")
def book_add(
    title: str = typer.Argument(..., help="Book title"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Author"),
    published: Optional[str] = typer.Option(
        None, "--published", "-p", help="Publication date (YYYY-MM-DD)"
    ),
    chrono: Optional[float] = typer.Option(
        None, "--chrono", "-c", help="Position on the in-story timeline"
    ),
) -> None:
    """Add a book to the library."""
    try:
        book_data = BookCreate(
            title=title,
            author=author,
            publication_date=published,
            chronological_position=chrono,
        )
    except ValidationError as e:
        print_error(f"Invalid book: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    book = get_db().create_book(book_data)
    print_success(f"Added: {book.title}")
    print_info(f"ID: {book.id}")


@book_app.command("list")
def book_list(
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Max books to show"),
) -> None:
    """List books in the library."""
    db = get_db()
    books = db.get_all_books()

    if not books:
        print_info("No books found.")
        return

    if limit is None:
        limit = SettingsManager(db).get(SettingKey.ITEMS_PER_PAGE)

    table = Table(title="Books", show_header=True, header_style="bold magenta")
    table.add_column("Title", style="cyan", no_wrap=False, max_width=40)
    table.add_column("Author", style="green", max_width=25)
    table.add_column("Published", justify="center")
    table.add_column("ID", style="dim")

    for book in books[:limit]:
        table.add_row(
            book.title,
            book.author or "-",
            format_date(book.get_publication_date()),
            book.id,
        )

    console.print(table)
    if len(books) > limit:
        print_info(f"Showing {limit} of {len(books)} books")


# ============================================================================
# Series Commands
# ============================================================================


@series_app.command("create")
def series_create(
    name: str = typer.Argument(..., help="Series name"),
    author: Optional[str] = typer.Option(None, "--author", "-a", help="Author"),
    order: Optional[ReadingOrderMode] = typer.Option(
        None, "--order", "-o", help="Reading order (defaults to the configured default)"
    ),
) -> None:
    """Create a new series."""
    db = get_db()

    if order is None:
        order = SettingsManager(db).get(SettingKey.DEFAULT_READING_ORDER)

    series = SeriesManager(db).create_series(
        SeriesCreate(name=name, author=author, reading_order=order)
    )
    print_success(f"Created series: {series.name} ({series.reading_order} order)")
    print_info(f"ID: {series.id}")


@series_app.command("list")
def series_list(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Search in name"),
    tracked: bool = typer.Option(False, "--tracked", help="Only tracked series"),
) -> None:
    """List series."""
    db = get_db()
    limit = SettingsManager(db).get(SettingKey.ITEMS_PER_PAGE)
    series_list = SeriesManager(db).list_series(
        search=search, is_tracked=True if tracked else None, limit=limit
    )

    if not series_list:
        print_info("No series found.")
        return

    table = Table(title="Series", show_header=True, header_style="bold magenta")
    table.add_column("Name", style="cyan")
    table.add_column("Author", style="green")
    table.add_column("Books", justify="right")
    table.add_column("Order", style="yellow")
    table.add_column("ID", style="dim")

    for s in series_list:
        table.add_row(s.name or "-", s.author or "-", str(len(s.book_ids)), s.reading_order, s.id)

    console.print(table)


@series_app.command("add-book")
def series_add_book(
    series_id: str = typer.Argument(..., help="Series ID"),
    book_id: str = typer.Argument(..., help="Book ID"),
) -> None:
    """Add a book to a series."""
    db = get_db()

    if not db.get_book(book_id):
        print_error(f"Book not found: {book_id}")
        raise typer.Exit(1)

    series = SeriesManager(db).add_book(series_id, book_id)
    if series is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    print_success(f"Series {series.name} now has {len(series.book_ids)} book(s)")


@series_app.command("remove-book")
def series_remove_book(
    series_id: str = typer.Argument(..., help="Series ID"),
    book_id: str = typer.Argument(..., help="Book ID"),
) -> None:
    """Remove a book from a series."""
    series = SeriesManager(get_db()).remove_book(series_id, book_id)
    if series is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    print_success(f"Series {series.name} now has {len(series.book_ids)} book(s)")


@series_app.command("show")
def series_show(
    series_id: str = typer.Argument(..., help="Series ID"),
) -> None:
    """Show the books of a series in reading order."""
    db = get_db()
    ordered = get_order_manager().get_ordered_series(series_id)
    if ordered is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    if not ordered.books:
        print_info(f"{ordered.series.name} has no books yet.")
        return

    show_dates = SettingsManager(db).get(SettingKey.SHOW_PUBLICATION_DATES)
    title = f"{ordered.series.name} ({ordered.series.reading_order} order)"
    console.print(format_ordered_table(ordered.books, title=title, show_dates=show_dates))


# ============================================================================
# Reading Order Commands
# ============================================================================


@order_app.command("mode")
def order_mode(
    series_id: str = typer.Argument(..., help="Series ID"),
    mode: ReadingOrderMode = typer.Argument(..., help="Reading order mode"),
) -> None:
    """Change the reading order mode of a series."""
    series = get_order_manager().change_mode(series_id, mode)
    if series is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    print_success(f"{series.name} now uses {series.reading_order} order")


@order_app.command("move")
def order_move(
    series_id: str = typer.Argument(..., help="Series ID"),
    book_id: str = typer.Argument(..., help="Book ID"),
    position: int = typer.Argument(..., help="New position (1 = first)"),
) -> None:
    """Move a book to a new position in the custom order."""
    series = get_order_manager().reorder_book(series_id, book_id, position - 1)
    if series is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    final = series.custom_order.index(book_id) + 1
    print_success(f"Moved {book_id} to position {final} in {series.name}")


@order_app.command("set")
def order_set(
    series_id: str = typer.Argument(..., help="Series ID"),
    book_ids: List[str] = typer.Argument(..., help="Book IDs in reading order"),
) -> None:
    """Replace the custom order of a series."""
    series = get_order_manager().update_custom_order(series_id, book_ids)
    if series is None:
        print_error(f"Series not found: {series_id}")
        raise typer.Exit(1)

    print_success(f"Saved custom order of {len(book_ids)} book(s) for {series.name}")


# ============================================================================
# Settings Commands
# ============================================================================


@settings_app.command("show")
def settings_show() -> None:
    """Show all settings."""
    manager = SettingsManager(get_db())

    table = Table(title="Settings", show_header=True, header_style="bold magenta")
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")
    table.add_column("Default", style="dim")
    table.add_column("Description")

    for key in SettingKey:
        setting = manager.describe(key)
        table.add_row(
            key.value,
            _display_value(setting.value),
            _display_value(setting.default_value),
            setting.description or "",
        )

    console.print(table)

    custom = manager.list_custom()
    if custom:
        console.print("\n[bold]Custom settings:[/bold]")
        for key, value in custom.items():
            console.print(f"  {key} = {value!r}")


@settings_app.command("set")
def settings_set(
    key: str = typer.Argument(..., help="Setting key"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change a setting."""
    manager = SettingsManager(get_db())
    try:
        new_value = manager.set(key, value)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_success(f"{key} = {_display_value(new_value)}")


def _display_value(value) -> str:
    """Format a setting value for display."""
    if isinstance(value, ReadingOrderMode):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"shelfwise version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
