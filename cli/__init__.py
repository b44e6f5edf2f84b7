"""Command-line interface for mailthread."""
