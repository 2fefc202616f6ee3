"""Command-line interface for visitsched."""
