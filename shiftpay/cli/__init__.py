"""Shift Pay CLI package."""
