"""Command-line interface for the Dou Dizhu engine."""
