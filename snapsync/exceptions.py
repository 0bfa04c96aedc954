"""Custom exceptions for the SnapSync interpolation engine."""


class SnapSyncError(Exception):
    """Base exception for all SnapSync errors."""

    pass


class ConfigurationError(SnapSyncError):
    """Error in interpolation engine configuration."""

    pass
