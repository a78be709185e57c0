"""Command-line interface for Markstrip."""
