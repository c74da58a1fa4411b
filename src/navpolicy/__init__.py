"""Navigation policy engine for a single-site embedded-browser shell."""

__version__ = "0.1.0"
