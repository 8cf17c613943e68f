"""Exception types for configuration handling."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are missing or malformed."""

    @classmethod
    def invalid_value(cls, param_name: str, value, reason: str = "") -> "ConfigurationError":
        """Create error for invalid value."""
        msg = f"Invalid value for {param_name}: {value!r}"
        if reason:
            msg += f". {reason}"
        return cls(msg)

    @classmethod
    def missing_path(cls, param_name: str, path) -> "ConfigurationError":
        """Create error for a configured path that does not exist."""
        return cls(f"{param_name} points to a missing location: {path}")


__all__ = ["ConfigurationError"]
