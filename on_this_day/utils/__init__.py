"""Logging, configuration and persistence helpers."""
