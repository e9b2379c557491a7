"""Helpers for local commands, service state and configuration."""
