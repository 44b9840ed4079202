"""
Fiscal code error taxonomy.

Every failure raised by the builder, the validator or a place resolver is a
subclass of FiscalCodeError, so callers can catch the whole family at once
or a single kind.
"""

from typing import Optional


class FiscalCodeError(ValueError):
    """Base class for fiscal code errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        """
        Args:
            message: Human readable description of the failure
            field: Name of the offending input field, if any
        """
        super().__init__(message)
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"{self.field}: {self.message}"
        return self.message


class InvalidName(FiscalCodeError):
    """Surname or given name has no usable letters."""


class InvalidDate(FiscalCodeError):
    """Birth date out of range or not a calendar date."""


class InvalidSex(FiscalCodeError):
    """Sex value not recognized."""


class UnknownPlace(FiscalCodeError):
    """Birthplace or place code not known to the resolver."""


class InvalidBaseCode(FiscalCodeError):
    """Checksum input is not 15 characters of [A-Z0-9]."""


class InvalidLength(FiscalCodeError):
    """Candidate code is not 16 characters long."""


class MalformedStructure(FiscalCodeError):
    """Candidate code segments do not match the expected character classes."""


class ChecksumMismatch(FiscalCodeError):
    """Check character does not match the recomputed one."""


class OmocodiaUnsupported(FiscalCodeError):
    """Candidate code looks like an omocodia variant, which is not resolved."""


class PlaceLookupError(FiscalCodeError):
    """Place service unreachable or answering with an error; the place may exist."""


class InvalidInputFile(FiscalCodeError):
    """Batch input file lacks required columns."""
