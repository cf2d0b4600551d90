"""
sbcleans.exceptions - Custom exception classes.

All sbcleans-specific exceptions inherit from CleansError.
"""


class CleansError(Exception):
    """Base exception for all sbcleans errors."""

    pass


class ConfigError(CleansError):
    """Configuration loading or validation error."""

    pass


class FilenameError(CleansError):
    """Export filename does not follow the naming contract."""

    pass


class HostError(CleansError):
    """Storyboard host call failed or is unavailable."""

    pass


class ExportError(CleansError):
    """Movie or conformation export error."""

    pass


class ValidationError(CleansError):
    """Destination or environment validation error."""

    pass


class PipelineError(CleansError):
    """A pipeline step ran without the result of an earlier step."""

    pass
