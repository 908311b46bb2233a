"""Command-line interface for nitrocli."""
