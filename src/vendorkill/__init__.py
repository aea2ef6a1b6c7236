"""vendorkill - find and delete composer vendor directories."""

__version__ = "0.1.0"
