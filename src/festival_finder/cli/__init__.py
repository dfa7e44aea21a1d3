"""Command-line interface for festival_finder."""
