"""FLTR: log timeline normalization, filtering and annotation."""

__version__ = "0.1.0"
