"""Command line interface for cablechat."""
