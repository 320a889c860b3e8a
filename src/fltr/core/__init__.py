"""Core timeline state, filtering and ingestion."""
