"""Shared helpers for the Lambda entrypoints."""
