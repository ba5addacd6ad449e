"""Discover Go benchmark functions in two versions of a code base and record their results."""

__version__ = "0.1.0"