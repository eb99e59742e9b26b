"""Main CLI application using Typer."""

import logging

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from kazi import __version__

# Create Typer app
app = typer.Typer(
    name="kazi",
    help="Kazi - manage your todo list by chatting with an LLM",
    no_args_is_help=True,
)

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route log records through Rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Kazi - manage your todo list by chatting with an LLM."""
    load_dotenv()
    setup_logging(verbose)


@app.command()
def version():
    """Show kazi version."""
    console.print(f"kazi version {__version__}")


@app.command()
def chat(
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.kazi/kazi.yaml)",
    ),
    show_steps: bool = typer.Option(
        False, "--show-steps", "-s", help="Print plans, actions and observations"
    ),
):
    """Start interactive chat session."""
    from kazi.cli.chat import chat_command

    chat_command(config_path=config_path, show_steps=show_steps)


# Todo commands
todos_app = typer.Typer(help="Work with the todo list directly")
app.add_typer(todos_app, name="todos")


@todos_app.command("list")
def todos_list(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """List all todos."""
    from kazi.cli.todos_cmd import list_todos

    list_todos(config_path=config_path)


@todos_app.command("add")
def todos_add(
    text: str = typer.Argument(..., help="Todo text"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Add a todo."""
    from kazi.cli.todos_cmd import add_todo

    add_todo(text, config_path=config_path)


@todos_app.command("delete")
def todos_delete(
    todo_id: int = typer.Argument(..., help="Todo id"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Delete a todo by id."""
    from kazi.cli.todos_cmd import delete_todo

    delete_todo(todo_id, config_path=config_path)


@todos_app.command("update")
def todos_update(
    todo_id: int = typer.Argument(..., help="Todo id"),
    text: str = typer.Argument(..., help="New todo text"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Replace the text of a todo."""
    from kazi.cli.todos_cmd import update_todo

    update_todo(todo_id, text, config_path=config_path)


@todos_app.command("search")
def todos_search(
    query: str = typer.Argument(..., help="Text to look for (case-insensitive)"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to config file"),
):
    """Search todos by text."""
    from kazi.cli.todos_cmd import search_todos

    search_todos(query, config_path=config_path)


if __name__ == "__main__":
    app()
