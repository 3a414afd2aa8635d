from __future__ import annotations


class DescriptorError(ValueError):
    """Base class for module descriptor errors."""


class InvalidDescriptor(DescriptorError):
    """Raised when a module descriptor cannot be constructed."""


class MissingRequiredField(DescriptorError):
    """Raised when a module document lacks a required (parseable) field."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
