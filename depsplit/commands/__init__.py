"""CLI subcommands for depsplit."""
