"""Room lighting analysis for plant placement."""

__version__ = "0.1.0"
