"""Build firmware examples and run them against execution backends."""
