"""Handlers for the nitrocli commands."""
