"""Species index over the New York City street tree census."""

__version__ = "0.1.0"
