"""Shared helpers used across pullcount subpackages."""
