"""Domain models, values, errors and settings."""
