"""Newswire - RSS/Atom feed polling and normalization engine."""

__version__ = "0.1.0"
