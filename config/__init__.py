"""Linter configuration."""
