"""Shared helpers for the scriptgate test-suite."""
