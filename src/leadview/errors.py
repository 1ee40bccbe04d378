"""Exception types raised by leadview."""

from typing import Iterable, Optional


class LeadviewError(Exception):
    """Base class for leadview errors."""


class UnknownFieldError(LeadviewError, KeyError):
    """Raised when a field name is not part of the record schema."""

    def __init__(self, field_name: str, schema_fields: Optional[Iterable[str]] = None):
        self.field_name = field_name
        self.schema_fields = list(schema_fields or [])
        message = f"Unknown field: {field_name!r}"
        if self.schema_fields:
            message += f" (expected one of: {', '.join(self.schema_fields)})"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError repr-quotes its argument
        return self.args[0]


class ConfigError(LeadviewError, ValueError):
    """Raised when a view config file has an invalid structure."""


class LeadFileError(LeadviewError, ValueError):
    """Raised when a lead file cannot be parsed."""


class FieldCapabilityError(LeadviewError, ValueError):
    """Raised when a field exists but cannot be filtered, sorted or searched."""

    def __init__(self, field_name: str, capability: str, allowed: Optional[Iterable[str]] = None):
        self.field_name = field_name
        self.capability = capability
        self.allowed = list(allowed or [])
        message = f"Field {field_name!r} is not {capability}"
        if self.allowed:
            message += f" (expected one of: {', '.join(self.allowed)})"
        super().__init__(message)
