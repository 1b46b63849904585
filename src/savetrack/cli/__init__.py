"""Command-line interface for savetrack."""
