"""Command line entry points: the TUI launcher, one-shot replies and a config check."""
