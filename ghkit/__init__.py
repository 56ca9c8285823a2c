"""Command-line tools for GitHub issues, pull requests and local branch cleanup."""

__version__ = "0.1.0"
