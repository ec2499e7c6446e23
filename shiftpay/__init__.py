"""Shift Pay - shift tracking pay and withholding calculations."""

__version__ = "0.3.0"
