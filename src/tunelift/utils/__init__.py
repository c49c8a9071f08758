"""Utility functions shared across the application."""

from .text import pluralise

__all__ = ["pluralise"]
