"""doclens - structured documentation extraction from declaration comments."""

__version__ = "0.1.0"
