# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Diagnostics raised by the accessor generation engine."""

from gusket.model import Location


class DiagnosticError(RuntimeError):
    """Represent a terminal diagnostic attributed to a source location.

    Args:
        message: Human readable description of the failure.
        location: Location of the offending construct.
    """

    def __init__(self, message: str, location: Location) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


class UnsupportedShapeError(DiagnosticError):
    """Represent a record shape that cannot receive accessors."""


class UnsupportedDirectiveError(DiagnosticError):
    """Represent an unknown or malformed generation directive."""
