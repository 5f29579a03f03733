"""Logging helpers and the store lock."""
