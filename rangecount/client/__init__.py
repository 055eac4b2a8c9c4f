"""Command-line client and report formatting."""
