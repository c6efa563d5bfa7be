"""Core utilities: domain exceptions and logging setup."""
