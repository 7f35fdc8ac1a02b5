"""Command-line interface for bldt."""
