class DownhillError(Exception):
    """Base class for errors raised by DOWNHILL."""


class AssetLoadError(DownhillError):
    """Raised when sprites cannot be loaded; the game must not start."""
