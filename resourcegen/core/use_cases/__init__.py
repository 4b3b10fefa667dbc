"""Use cases — the vertical slices invoked by the CLI."""
