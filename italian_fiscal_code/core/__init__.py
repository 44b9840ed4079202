"""Core fiscal code framework."""

# Import main classes for easier access
from .data_models import (
    Sex,
    BirthDate,
    Place,
    PersonalData,
    ValidationRule,
    ValidationResult,
    DecodedFiscalCode,
    SessionStatistics
)
from .errors import (
    FiscalCodeError,
    InvalidName,
    InvalidDate,
    InvalidSex,
    UnknownPlace,
    InvalidBaseCode,
    InvalidLength,
    MalformedStructure,
    ChecksumMismatch,
    OmocodiaUnsupported,
    PlaceLookupError,
    InvalidInputFile
)

__all__ = [
    'Sex',
    'BirthDate',
    'Place',
    'PersonalData',
    'ValidationRule',
    'ValidationResult',
    'DecodedFiscalCode',
    'SessionStatistics',
    'FiscalCodeError',
    'InvalidName',
    'InvalidDate',
    'InvalidSex',
    'UnknownPlace',
    'InvalidBaseCode',
    'InvalidLength',
    'MalformedStructure',
    'ChecksumMismatch',
    'OmocodiaUnsupported',
    'PlaceLookupError',
    'InvalidInputFile'
]
