"""Chat and news assistant backend."""

__version__ = "0.1.0"
