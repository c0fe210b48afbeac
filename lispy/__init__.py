"""Lispy: an integer calculator with S-expression syntax."""

__version__ = "0.0.3"
