"""DOWNHILL: a top-down skiing game."""

__version__ = "0.1.0"
