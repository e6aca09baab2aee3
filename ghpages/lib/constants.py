"""Shared constants for ghpages."""

# CLI exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1  # Publish failed (git error, hook error)
EXIT_CONFIG = 2  # Bad options or environment
