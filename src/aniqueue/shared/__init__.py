"""Shared building blocks: errors, logging, constants, and protocols."""
