"""
Fiscal Code Validator

Checks a candidate fiscal code segment by segment and against its check
character, and decodes valid codes back into their components.

Validation is diagnostic: every violated rule is reported, not only the
first one. Decoding is strict and raises the first typed error.

Omocodia codes (issued to holders of colliding codes, with some digits
replaced by letters) are not resolved: they are reported as
OMOCODIA_UNSUPPORTED instead of being accepted or decoded.
"""

import logging
import re
from datetime import date
from typing import List, Optional

from .data_models import DecodedFiscalCode, ValidationResult, ValidationRule
from .errors import (
    ChecksumMismatch,
    InvalidLength,
    MalformedStructure,
    OmocodiaUnsupported,
    UnknownPlace
)
from ..places.resolver import PlaceResolver
from ..utils.checksum import compute_check_character
from ..utils.date_sex import MONTH_BY_LETTER, decode_date_sex
from ..utils.normalizers import clean_code

CODE_LENGTH = 16

# Letters substituted for the digits 0-9 in omocodia codes
OMOCODIA_LETTERS = 'LMNPQRSTUV'

# 0-based positions of the seven digits (year, day, place number)
DIGIT_POSITIONS = (6, 7, 9, 10, 12, 13, 14)

_ALPHANUMERIC = re.compile(r'^[A-Z0-9]*\Z')
_LETTERS = re.compile(r'^[A-Z]+\Z')
_DIGITS = re.compile(r'^[0-9]+\Z')
_PLACE = re.compile(r'^[A-Z][0-9]{3}\Z')


def _is_valid_day(segment: str) -> bool:
    if not _DIGITS.match(segment):
        return False
    day = int(segment)
    return 1 <= day <= 31 or 41 <= day <= 71


def _is_omocodia_candidate(code: str) -> bool:
    """True if any digit position holds an omocodia substitution letter."""
    return any(
        position < len(code) and code[position] in OMOCODIA_LETTERS
        for position in DIGIT_POSITIONS
    )


class CodeValidator:
    """Validates and decodes fiscal codes."""

    def __init__(self, place_resolver: Optional[PlaceResolver] = None):
        """
        Args:
            place_resolver: Optional resolver for reverse place lookups;
                without it the place segment is only checked for shape
        """
        self.place_resolver = place_resolver
        self.logger = logging.getLogger(__name__)

    def _structural_violations(self, code: str) -> List[ValidationRule]:
        """Check each segment against its character class."""
        violations = []

        if not _ALPHANUMERIC.match(code):
            violations.append(ValidationRule.INVALID_CHARACTERS)
        if not _LETTERS.match(code[0:3]):
            violations.append(ValidationRule.SURNAME_CODE)
        if not _LETTERS.match(code[3:6]):
            violations.append(ValidationRule.NAME_CODE)
        if not _DIGITS.match(code[6:8]):
            violations.append(ValidationRule.YEAR)
        if code[8] not in MONTH_BY_LETTER:
            violations.append(ValidationRule.MONTH)
        if not _is_valid_day(code[9:11]):
            violations.append(ValidationRule.DAY)
        if not _PLACE.match(code[11:15]):
            violations.append(ValidationRule.PLACE_CODE)
        if not _LETTERS.match(code[15]):
            violations.append(ValidationRule.CHECK_CHARACTER)

        return violations

    def validate(self, candidate: str) -> ValidationResult:
        """
        Validate a candidate fiscal code.

        Args:
            candidate: Code to check; case, whitespace and separators are ignored

        Returns:
            ValidationResult with every violated rule listed in details

        Raises:
            MalformedStructure: if candidate is not a string
            PlaceLookupError: if the resolver could not perform the reverse lookup
        """
        if not isinstance(candidate, str):
            raise MalformedStructure(
                f"fiscal code must be a string, got {type(candidate).__name__}", field='fiscal_code')

        code = clean_code(candidate)

        # Wrong length: no segment or checksum analysis
        if len(code) != CODE_LENGTH:
            self.logger.debug(f"INVALID_CODE - '{code}' has length {len(code)}")
            return ValidationResult(
                candidate=code,
                is_well_formed=False,
                checksum_matches=False,
                details=[ValidationRule.INVALID_LENGTH]
            )

        details = self._structural_violations(code)

        if _is_omocodia_candidate(code):
            details.append(ValidationRule.OMOCODIA_UNSUPPORTED)

        expected_check = None
        checksum_matches = False
        if _ALPHANUMERIC.match(code[:15]):
            expected_check = compute_check_character(code[:15])
            checksum_matches = expected_check == code[15]
        if not checksum_matches:
            details.append(ValidationRule.CHECKSUM_MISMATCH)

        # Reverse lookup only for a well-shaped place segment; lookup failures propagate
        if (self.place_resolver is not None
                and ValidationRule.PLACE_CODE not in details
                and ValidationRule.OMOCODIA_UNSUPPORTED not in details):
            try:
                self.place_resolver.reverse(code[11:15])
            except UnknownPlace:
                self.logger.warning(f"UNKNOWN_PLACE - '{code[11:15]}' in '{code}', possible omocodia code")
                details.append(ValidationRule.OMOCODIA_UNSUPPORTED)

        is_well_formed = all(rule is ValidationRule.CHECKSUM_MISMATCH for rule in details)

        result = ValidationResult(
            candidate=code,
            is_well_formed=is_well_formed,
            checksum_matches=checksum_matches,
            details=details,
            expected_check=expected_check
        )

        if not result.is_valid:
            self.logger.debug(
                f"INVALID_CODE - '{code}' - {', '.join(rule.value for rule in details)}")

        return result

    def is_valid(self, candidate: str) -> bool:
        """Return True if candidate is well formed and its check character matches."""
        if not isinstance(candidate, str):
            return False
        return self.validate(candidate).is_valid

    def decode(self, candidate: str, reference_date: Optional[date] = None) -> DecodedFiscalCode:
        """
        Decode a fiscal code into its components.

        Args:
            candidate: Fiscal code; spaces and separators are ignored
            reference_date: Date used to pick the birth century (default: today)

        Returns:
            DecodedFiscalCode; place is filled in when a resolver is set

        Raises:
            InvalidLength: not 16 characters
            OmocodiaUnsupported: omocodia code, or place code not resolvable
            MalformedStructure: segment with the wrong character class
            ChecksumMismatch: check character does not match
            InvalidDate: date segment is not a calendar date
            PlaceLookupError: if the resolver could not perform the reverse lookup
        """
        if not isinstance(candidate, str):
            raise MalformedStructure(
                f"fiscal code must be a string, got {type(candidate).__name__}", field='fiscal_code')

        code = clean_code(candidate)
        if len(code) != CODE_LENGTH:
            raise InvalidLength(
                f"fiscal code must be {CODE_LENGTH} characters, got {len(code)}", field='fiscal_code')

        if _is_omocodia_candidate(code):
            raise OmocodiaUnsupported(
                f"'{code}' has letters in digit positions (omocodia code)", field='fiscal_code')

        violations = self._structural_violations(code)
        if violations:
            raise MalformedStructure(
                f"'{code}' violates {', '.join(rule.value for rule in violations)}", field='fiscal_code')

        expected_check = compute_check_character(code[:15])
        if expected_check != code[15]:
            raise ChecksumMismatch(
                f"check character is '{code[15]}', expected '{expected_check}'", field='fiscal_code')

        birth_date, sex = decode_date_sex(code[6:11], reference_date)

        place = None
        if self.place_resolver is not None:
            try:
                place = self.place_resolver.reverse(code[11:15])
            except UnknownPlace as e:
                raise OmocodiaUnsupported(
                    f"place code '{code[11:15]}' does not resolve (possible omocodia code)",
                    field='place_code'
                ) from e

        return DecodedFiscalCode(
            surname_code=code[0:3],
            name_code=code[3:6],
            birth_date=birth_date,
            sex=sex,
            place_code=code[11:15],
            check_character=code[15],
            place=place
        )


def validate_fiscal_code(candidate: str, place_resolver: Optional[PlaceResolver] = None) -> ValidationResult:
    """Validate a fiscal code with a one-off CodeValidator."""
    return CodeValidator(place_resolver).validate(candidate)
