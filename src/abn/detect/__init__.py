"""Locate ABNs in free text."""

from .regex_backend import RegexBackend, Span

__all__ = ["RegexBackend", "Span"]
