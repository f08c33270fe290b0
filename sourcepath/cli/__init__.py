"""Command-line interface for sourcepath."""
