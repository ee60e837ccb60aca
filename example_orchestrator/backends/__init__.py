"""Execution backends for compiled examples."""
