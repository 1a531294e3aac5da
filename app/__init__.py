"""Command line entrypoint."""
