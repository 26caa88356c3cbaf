"""Shared utilities: logging setup and error types."""
