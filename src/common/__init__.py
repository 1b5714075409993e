"""Shared helpers: logging setup and HTTP access."""
