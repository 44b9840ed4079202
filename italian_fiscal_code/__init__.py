"""
Italian Fiscal Code

Build, validate and decode Italian fiscal codes (codice fiscale).
Omocodia codes are detected and reported, never generated or decoded.
"""

__version__ = "1.0.0"

from .core.data_models import Sex, BirthDate, Place, PersonalData, ValidationRule, ValidationResult
from .core.errors import FiscalCodeError
from .core.code_builder import CodeBuilder, build_fiscal_code, make_personal_data
from .core.code_validator import CodeValidator, validate_fiscal_code
from .places.resolver import PlaceResolver, InMemoryPlaceResolver
from .places.belfiore import BelfioreDatabase

__all__ = [
    'Sex',
    'BirthDate',
    'Place',
    'PersonalData',
    'ValidationRule',
    'ValidationResult',
    'FiscalCodeError',
    'CodeBuilder',
    'build_fiscal_code',
    'make_personal_data',
    'CodeValidator',
    'validate_fiscal_code',
    'PlaceResolver',
    'InMemoryPlaceResolver',
    'BelfioreDatabase'
]
