"""sizeup - find what is eating your disk."""

__version__ = "0.1.0"
