"""Command implementations and console helpers for the relgen CLI."""
