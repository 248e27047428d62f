"""Core matching logic: normalization, aliases, and the matching engine."""
