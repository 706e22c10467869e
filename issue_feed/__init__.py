"""Build a publishable JSON feed from structured GitHub issues."""

__version__ = "0.1.0"
