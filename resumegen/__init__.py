"""Static site generator for a single-page resume website."""

__version__ = "1.0.0"
