"""Investigation Board: interactive force-directed graph of case entities."""

__version__ = "0.1.0"
