"""Factory for creating chat transports."""

from typing import Any

from .base import ChatTransport


def create_transport(
    transport: str = "cable",
    **kwargs: Any
) -> ChatTransport:
    """Create a chat transport.

    Args:
        transport: Transport type ("cable" or "memory")
        **kwargs: Transport-specific configuration

    Returns:
        ChatTransport instance

    Raises:
        ValueError: If transport type is not supported
    """
    if transport == "cable":
        from .cable import CableTransport
        return CableTransport(**kwargs)

    elif transport == "memory":
        from .in_memory import InMemoryTransport
        return InMemoryTransport(**kwargs)

    raise ValueError(
        f"Unsupported transport: {transport}. "
        f"Supported transports: cable, memory"
    )
