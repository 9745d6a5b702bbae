"""Configuration: section models, settings, discovery, and logging."""
