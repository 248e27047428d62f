"""Command-line interface for AniQueue."""
