"""Configuration — models, discovery, settings, and logging setup."""
