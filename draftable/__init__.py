"""Draft, scheduled and published lifecycle for Django models."""

__version__ = "1.0.0"
