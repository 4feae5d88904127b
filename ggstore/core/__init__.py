"""Configuration, container and shared helpers."""
