"""Publish a directory of files to a git branch."""

__version__ = "0.1.0"
