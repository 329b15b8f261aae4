"""
Exceptions raised at the boundaries of the app spec package.

The validator itself never raises for an invalid configuration; these are
used by the decoding, loading and convenience helpers around it.
"""

from typing import Any, Dict, List


class AppSpecError(Exception):
    """Base exception for application configuration errors."""
    pass


class ConfigDecodeError(AppSpecError, ValueError):
    """Raised when raw data cannot be decoded into the configuration schema."""

    def __init__(self, errors: List[Dict[str, Any]]):
        self.errors = errors
        details = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in errors
        )
        super().__init__(f"Invalid application configuration: {details}")


class InvalidAppConfigError(AppSpecError, ValueError):
    """Raised when a decoded configuration fails validation."""

    def __init__(self, report):
        self.report = report
        lines = "\n".join(f"  {line}" for line in report.lines())
        super().__init__(
            f"Application configuration has {len(report)} violation(s):\n{lines}"
        )


class ConfigFileError(AppSpecError):
    """Raised when a configuration file cannot be read."""
    pass
