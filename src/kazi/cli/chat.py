"""Interactive chat REPL command."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

import typer
from rich.console import Console
from rich.text import Text
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm

from kazi.agent.errors import MalformedReplyError
from kazi.agent.loop import ConversationEngine
from kazi.agent.messages import ActionMessage, PlanMessage, StructuredMessage
from kazi.cli.todos_cmd import render_todos
from kazi.config.loader import ConfigError, database_path, load_config, resolve_api_key
from kazi.llm.factory import create_llm_client
from kazi.todos.store import StorageError, TodoStore
from kazi.tools.todos import create_todo_tools

if TYPE_CHECKING:
    from kazi.config.schema import KaziConfig

console = Console()
logger = logging.getLogger(__name__)

PROMPT = ">> "


def chat_command(config_path: str | None = None, show_steps: bool = False) -> None:
    """Start interactive chat session.

    Args:
        config_path: Optional path to config file
        show_steps: Print plans, actions and observations while the model works
    """
    path = Path(config_path) if config_path else None
    try:
        config = load_config(path)
    except Exception as e:
        console.print(f"[red]Failed to load config: {escape(str(e))}[/red]")
        return

    # Fail fast before touching the terminal loop
    try:
        api_key = resolve_api_key(config)
        store = TodoStore(database_path(config))
    except (ConfigError, StorageError) as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    console.print(
        Panel.fit(
            f"[bold blue]kazi chat[/bold blue]\n"
            f"Model: {config.model.backend} / {config.model.name}\n"
            f"Todos: {store.db_path}\n"
            f"Type /help for commands, /exit to quit",
            border_style="blue",
        )
    )

    asyncio.run(_async_chat(config, api_key, store, show_steps))


async def _async_chat(
    config: KaziConfig, api_key: str | None, store: TodoStore, show_steps: bool
) -> None:
    """Async chat loop.

    Args:
        config: Kazi configuration
        api_key: Model provider secret
        store: Todo store the tools act on
        show_steps: Print intermediate steps
    """
    llm = create_llm_client(config, api_key)
    engine = ConversationEngine(
        llm=llm,
        registry=create_todo_tools(store),
        max_steps=config.agent.max_steps,
        max_history_tokens=config.agent.max_history_tokens,
        strict_dispatch=config.agent.strict_dispatch,
        on_step=_print_step if show_steps else None,
    )

    try:
        while True:
            try:
                user_input = console.input(f"\n[bold cyan]{PROMPT}[/bold cyan]")

                if not user_input.strip():
                    continue

                if user_input.startswith("/"):
                    if _handle_slash_command(user_input, config, engine, store):
                        break
                    continue

                with console.status("[bold green]Thinking...[/bold green]", spinner="dots"):
                    response = await engine.handle(user_input)

                console.print("\n[bold green]🤖[/bold green]")
                # Shown as-is: no markup, emoji or Markdown interpretation
                console.print(Text(response))

            except MalformedReplyError as e:
                logger.debug("Unparseable model reply: %r", e.raw)
                console.print(f"\n[red]The model sent an invalid reply: {escape(str(e))}[/red]")
            except KeyboardInterrupt:
                console.print("\n[yellow]Interrupted[/yellow]")
                if Confirm.ask("Exit chat?", default=False):
                    break
            except EOFError:
                break
            except Exception as e:
                logger.debug("Request failed", exc_info=True)
                console.print(f"\n[red]Error: {escape(str(e))}[/red]")
    finally:
        await llm.close()

    console.print("\n[cyan]Goodbye![/cyan]")


def _print_step(message: StructuredMessage) -> None:
    """Show an intermediate step of the engine."""
    if isinstance(message, PlanMessage):
        console.print(f"[dim]💭 {escape(message.plan)}[/dim]")
    elif isinstance(message, ActionMessage):
        args = ", ".join(json.dumps(arg) for arg in message.input)
        console.print(f"[dim]⚙  {escape(message.function)}({escape(args)})[/dim]")
    else:
        observation = json.dumps(message.model_dump(mode="json")["observation"])
        console.print(f"[dim]👁  {escape(observation)}[/dim]")


def _handle_slash_command(
    command: str,
    config: KaziConfig,
    engine: ConversationEngine,
    store: TodoStore,
) -> bool:
    """Handle slash commands.

    Args:
        command: Command string starting with /
        config: Current configuration
        engine: Running conversation engine
        store: Todo store

    Returns:
        True if should exit chat loop
    """
    cmd = command.lower().strip()

    if cmd in ("/exit", "/quit", "/q"):
        return True

    elif cmd == "/help":
        console.print("\n[bold]Available commands:[/bold]")
        console.print("  /help      - Show this help")
        console.print("  /exit      - Exit chat")
        console.print("  /clear     - Clear screen")
        console.print("  /todos     - Show the todo list")
        console.print("  /history   - Show the conversation transcript")
        console.print("  /model     - Show current model")

    elif cmd == "/clear":
        console.clear()

    elif cmd == "/todos":
        todos = store.list()
        if todos:
            console.print(render_todos(todos))
        else:
            console.print("[dim]No todos yet.[/dim]")

    elif cmd == "/history":
        entries = engine.transcript.entries
        console.print(f"\n[bold]Transcript:[/bold] {len(entries)} messages")
        for entry in entries:
            console.print(f"  [cyan]{entry.role:>5}[/cyan] {escape(entry.message.model_dump_json())}")

    elif cmd == "/model":
        console.print(f"\n[cyan]Backend:[/cyan] {config.model.backend}")
        console.print(f"[cyan]Current model:[/cyan] {config.model.name}")
        console.print(f"[cyan]Temperature:[/cyan] {config.model.temperature}")
        console.print(f"[cyan]Max steps:[/cyan] {config.agent.max_steps}")

    else:
        console.print(f"[red]Unknown command: {escape(command)}[/red]")
        console.print("Type /help for available commands")

    return False
