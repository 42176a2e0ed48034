"""Version information for slackreader."""

__version__ = "0.2.0"
