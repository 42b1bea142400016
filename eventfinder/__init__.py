"""eventfinder: event listing and smart search service."""

__version__ = "0.1.0"
