"""CLI subcommands for modgate."""
