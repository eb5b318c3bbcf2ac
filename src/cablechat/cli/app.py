"""Main CLI application using Typer."""
import asyncio

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from ..events import EventDecoder
from ..transcript import TranscriptLog
from ..transport import ReadError
from .providers import get_backlog, get_server_config, get_transport, require_token

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="cablechat",
    help="Terminal client for ActionCable chat rooms",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()


@app.command()
def join(
    room: str = typer.Argument(
        None,
        help="Room to join; omit to be prompted"
    ),
    token: str = typer.Option(
        None,
        "--token",
        "-t",
        help="Auth token (default: CABLECHAT_TOKEN)"
    ),
    host: str = typer.Option(
        None,
        "--host",
        help="Server host and port (default: CABLECHAT_HOST)"
    ),
    secure: bool = typer.Option(
        None,
        "--secure/--insecure",
        help="Use wss/https"
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug, info, warning, error)"
    ),
):
    """Join a room in the terminal UI."""
    from ..ui import run_textual_tui

    auth = require_token(token, console)
    config = get_server_config(host, secure)
    transport = get_transport(config)
    backlog = get_backlog(config)

    return_code = asyncio.run(run_textual_tui(
        transport=transport,
        backlog=backlog,
        token=auth,
        room=room,
        log_level=log_level,
    ))
    if return_code:
        raise typer.Exit(code=return_code)


@app.command()
def history(
    room: str = typer.Argument(..., help="Room whose backlog to show"),
    token: str = typer.Option(
        None,
        "--token",
        "-t",
        help="Auth token (default: CABLECHAT_TOKEN)"
    ),
    host: str = typer.Option(
        None,
        "--host",
        help="Server host and port (default: CABLECHAT_HOST)"
    ),
    limit: int = typer.Option(
        50,
        "--limit",
        "-n",
        min=1,
        help="Show at most this many of the newest lines"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Print decoder and HTTP tracing"
    ),
):
    """Print a room's backlog as it renders in the transcript."""
    auth = require_token(token, console)
    config = get_server_config(host)

    def _trace(level: str, component: str, message: str) -> None:
        console.print(f"{level.upper():<7} [{component}] {message}", style="dim", markup=False, highlight=False)

    async def _history():
        backlog = get_backlog(config)
        decoder = EventDecoder()
        if verbose:
            decoder.set_debug_callback(_trace)
            if hasattr(backlog, "set_debug_callback"):
                backlog.set_debug_callback(_trace)
        try:
            payload = await backlog.fetch(room, auth)
        except ReadError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(code=1)
        finally:
            await backlog.close()

        transcript = TranscriptLog()
        transcript.reset(decoder.decode_backlog(payload))

        if not len(transcript):
            console.print(f"[yellow]No messages in {escape(room)}[/yellow]")
            return

        table = Table(title=f"{escape(room)} ({len(transcript)} messages)")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Line")

        lines = transcript.lines
        start = max(0, len(lines) - limit)
        for index, line in enumerate(lines[start:], start + 1):
            table.add_row(str(index), Text(line.text))

        console.print(table)

    asyncio.run(_history())


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
