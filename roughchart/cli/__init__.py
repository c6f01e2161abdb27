"""CLI module for roughchart."""
