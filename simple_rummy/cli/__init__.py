"""Command line interface for Simple Rummy."""

from .main import app, main

__all__ = ["app", "main"]
