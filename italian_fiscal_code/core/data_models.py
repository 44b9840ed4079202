"""
Fiscal Code Data Models

This module defines the value types shared by the builder, the validator,
the place resolvers and the batch service.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, NamedTuple, Optional, Any


class Sex(Enum):
    """Sex as encoded in the day-of-birth segment."""
    MALE = "M"
    FEMALE = "F"


class ValidationRule(Enum):
    """Identifiers of the rules a candidate fiscal code can violate."""
    INVALID_LENGTH = "INVALID_LENGTH"              # not 16 characters
    INVALID_CHARACTERS = "INVALID_CHARACTERS"      # outside [A-Z0-9]
    SURNAME_CODE = "SURNAME_CODE"                  # chars 1-3 not letters
    NAME_CODE = "NAME_CODE"                        # chars 4-6 not letters
    YEAR = "YEAR"                                  # chars 7-8 not digits
    MONTH = "MONTH"                                # char 9 not a month letter
    DAY = "DAY"                                    # chars 10-11 not 01-31 / 41-71
    PLACE_CODE = "PLACE_CODE"                      # chars 12-15 not letter + 3 digits
    CHECK_CHARACTER = "CHECK_CHARACTER"            # char 16 not a letter
    CHECKSUM_MISMATCH = "CHECKSUM_MISMATCH"        # char 16 != recomputed
    OMOCODIA_UNSUPPORTED = "OMOCODIA_UNSUPPORTED"  # digit substituted / place unresolvable


class BirthDate(NamedTuple):
    """Birth date as supplied by the caller; validated by the encoder."""
    year: int
    month: int
    day: int

    @classmethod
    def from_date(cls, value: date) -> 'BirthDate':
        return cls(value.year, value.month, value.day)


@dataclass(frozen=True)
class Place:
    """A municipality or foreign country with its Belfiore code."""
    code: str
    name: str
    province: str = ""

    @property
    def is_foreign(self) -> bool:
        """Foreign countries use the Z prefix and province 'EE'."""
        return self.code.startswith('Z')


@dataclass(frozen=True)
class PersonalData:
    """Input for the code builder."""
    surname: str
    given_name: str
    birth_date: BirthDate
    sex: Sex
    birthplace: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'surname': self.surname,
            'given_name': self.given_name,
            'dob': f"{self.birth_date.year:04d}-{self.birth_date.month:02d}-{self.birth_date.day:02d}",
            'sex': self.sex.value,
            'birthplace': self.birthplace
        }


@dataclass
class ValidationResult:
    """Outcome of validating a candidate fiscal code."""
    candidate: str
    is_well_formed: bool
    checksum_matches: bool
    details: List[ValidationRule] = field(default_factory=list)
    expected_check: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return self.is_well_formed and self.checksum_matches

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'candidate': self.candidate,
            'is_well_formed': self.is_well_formed,
            'checksum_matches': self.checksum_matches,
            'details': [rule.value for rule in self.details],
            'expected_check': self.expected_check
        }


@dataclass
class DecodedFiscalCode:
    """Components recovered from a valid fiscal code."""
    surname_code: str
    name_code: str
    birth_date: date
    sex: Sex
    place_code: str
    check_character: str
    place: Optional[Place] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'surname_code': self.surname_code,
            'name_code': self.name_code,
            'birth_date': self.birth_date.isoformat(),
            'sex': self.sex.value,
            'place_code': self.place_code,
            'place_name': self.place.name if self.place else None,
            'province': self.place.province if self.place else None,
            'check_character': self.check_character
        }


@dataclass
class SessionStatistics:
    """Statistics for a batch processing session."""
    total_processed: int = 0
    built: int = 0
    build_failures: int = 0

    # Supplied codes checked against the built ones
    codes_checked: int = 0
    codes_matching: int = 0
    codes_mismatching: int = 0
    codes_unchecked: int = 0

    error_counts: Dict[str, int] = field(default_factory=dict)

    def record_error(self, error_kind: str) -> None:
        self.build_failures += 1
        self.error_counts[error_kind] = self.error_counts.get(error_kind, 0) + 1

    def get_success_rate(self) -> float:
        """Calculate the share of rows that produced a code."""
        if self.total_processed == 0:
            return 0.0
        return self.built / self.total_processed
