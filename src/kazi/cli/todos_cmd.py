"""Direct todo list commands (no LLM involved)."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from kazi.config.loader import ConfigError, database_path, load_config
from kazi.todos.schema import Todo
from kazi.todos.store import StorageError, TodoStore

console = Console()


def _open_store(config_path: str | None) -> TodoStore:
    """Open the configured todo store, exiting with status 1 on failure."""
    try:
        config = load_config(Path(config_path) if config_path else None)
        return TodoStore(database_path(config))
    except (ConfigError, StorageError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)


def render_todos(todos: list[Todo], title: str = "Todos") -> Table:
    """Render todos as a Rich table."""
    table = Table(title=title)
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Todo")
    table.add_column("Updated", style="dim")

    for todo in todos:
        table.add_row(str(todo.id), escape(todo.todo), todo.updated_at.strftime("%Y-%m-%d %H:%M"))

    return table


def list_todos(config_path: str | None = None) -> None:
    store = _open_store(config_path)
    todos = store.list()
    if not todos:
        console.print("[dim]No todos yet.[/dim]")
        return
    console.print(render_todos(todos))


def add_todo(text: str, config_path: str | None = None) -> None:
    store = _open_store(config_path)
    todo_id = store.create(text)
    console.print(f"[green]✓[/green] Created todo {todo_id}")


def delete_todo(todo_id: int, config_path: str | None = None) -> None:
    store = _open_store(config_path)
    if store.delete(todo_id) is None:
        console.print(f"[red]No todo with id {todo_id}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Deleted todo {todo_id}")


def update_todo(todo_id: int, text: str, config_path: str | None = None) -> None:
    store = _open_store(config_path)
    if store.update(todo_id, text) is None:
        console.print(f"[red]No todo with id {todo_id}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]✓[/green] Updated todo {todo_id}")
    todo = store.get(todo_id)
    if todo is not None:
        console.print(render_todos([todo], title="Updated todo"))


def search_todos(query: str, config_path: str | None = None) -> None:
    store = _open_store(config_path)
    todos = store.search(query)
    if not todos:
        console.print(f"[dim]No todos matching '{escape(query)}'.[/dim]")
        return
    console.print(render_todos(todos, title=f"Todos matching '{escape(query)}'"))
