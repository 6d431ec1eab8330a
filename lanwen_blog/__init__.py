"""Static site generator for a personal markdown blog."""

__version__ = "0.3.0"
