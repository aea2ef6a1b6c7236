"""Exceptions raised by vendorkill."""


class VendorKillError(Exception):
    """Base class for fatal vendorkill errors."""


class InvalidRoot(VendorKillError):
    """Raised when the search root is missing or not a directory."""

    def __init__(self, path: str, reason: str = "does not exist"):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid search path {path}: {reason}")


class ScanFailed(VendorKillError):
    """Raised when the search root itself cannot be traversed."""

    def __init__(self, path: str, error: OSError):
        self.path = path
        self.error = error
        super().__init__(f"Could not scan {path}: {error.strerror or error}")


class ConfigError(VendorKillError):
    """Raised for invalid configuration values."""


class InvalidSelection(VendorKillError):
    """Raised when a selection does not address catalog entries."""
