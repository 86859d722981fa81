"""Configuration — section models, settings, and logging."""
