"""Domain models and extractors."""
