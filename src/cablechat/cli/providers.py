"""Provider factory functions for CLI.

Centralizes creation of the server config, transport and backlog source
from environment variables. Hides configuration details from command
implementations.
"""

import os
from typing import Any

from rich.console import Console

from ..transport import BacklogClient, ServerConfig, StaticBacklog, create_transport

# Default console for output
_console = Console()

_TRUE_VALUES = ("1", "true", "yes", "on")


def get_server_config(host: str | None = None, secure: bool | None = None) -> ServerConfig:
    """Create the server config; explicit arguments win over the environment.

    Environment variables:
        CABLECHAT_HOST: Server host and port (default: localhost:3000)
        CABLECHAT_SECURE: Use wss/https (default: false)
        CABLECHAT_OPEN_TIMEOUT: Seconds to wait for the dial (default: none)
    """
    if secure is None:
        secure = os.getenv("CABLECHAT_SECURE", "false").strip().lower() in _TRUE_VALUES
    open_timeout = os.getenv("CABLECHAT_OPEN_TIMEOUT")
    return ServerConfig(
        host=host or os.getenv("CABLECHAT_HOST", "localhost:3000"),
        secure=secure,
        open_timeout=float(open_timeout) if open_timeout else None,
    )


def require_token(token: str | None = None, console: Console | None = None) -> str:
    """Get the auth token, exiting if none is configured.

    Environment variables:
        CABLECHAT_TOKEN: Auth token sent as the Authorization header

    Raises:
        SystemExit: If no token is given or configured
    """
    import typer

    con = console or _console
    token = token or os.getenv("CABLECHAT_TOKEN")
    if not token:
        con.print("[red]Error: no auth token; pass --token or set CABLECHAT_TOKEN[/red]")
        raise typer.Exit(code=1)
    return token


def get_transport_type() -> str:
    """Environment variables:
        CABLECHAT_TRANSPORT: cable (default) or memory for offline runs
    """
    return os.getenv("CABLECHAT_TRANSPORT", "cable").lower()


def get_transport(config: ServerConfig) -> Any:
    """Create the transport selected by CABLECHAT_TRANSPORT."""
    transport_type = get_transport_type()
    if transport_type == "cable":
        return create_transport("cable", config=config)
    return create_transport(transport_type)


def get_backlog(config: ServerConfig) -> Any:
    """Create the backlog source matching the selected transport."""
    if get_transport_type() == "memory":
        return StaticBacklog()
    return BacklogClient(config)
