"""FLTR command-line interface."""
