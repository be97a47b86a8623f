"""Command-line interface for gopin."""
