"""
Fiscal Code Builder

Assembles the 16-character fiscal code from personal data:
surname code + given-name code + date/sex segment + place code + check.
"""

import logging
from typing import Optional

from .data_models import PersonalData
from ..places.resolver import PlaceResolver
from ..places.belfiore import get_default_database
from ..utils.normalizers import normalize_date, normalize_sex
from ..utils.name_reducer import reduce_surname, reduce_given_name
from ..utils.date_sex import encode_date_sex
from ..utils.checksum import compute_check_character


def make_personal_data(surname: str,
                       given_name: str,
                       dob: str,
                       sex: str,
                       birthplace: str) -> PersonalData:
    """
    Build PersonalData from raw text fields.

    Args:
        surname: Surname
        given_name: Given name
        dob: Birth date (YYYY-MM-DD, DD/MM/YYYY, YYYY/MM/DD or DD-MM-YYYY)
        sex: 'M'/'F' or a common spelling ('MASCHIO', 'FEMALE', ...)
        birthplace: Place name or Belfiore code

    Returns:
        PersonalData

    Raises:
        InvalidDate, InvalidSex: if dob or sex cannot be parsed
    """
    return PersonalData(
        surname=surname,
        given_name=given_name,
        birth_date=normalize_date(dob),
        sex=normalize_sex(sex),
        birthplace=birthplace
    )


class CodeBuilder:
    """Builds fiscal codes; the first failing step aborts the build."""

    def __init__(self, place_resolver: Optional[PlaceResolver] = None):
        """
        Args:
            place_resolver: Birthplace lookup (default: bundled Belfiore database)
        """
        self.place_resolver = place_resolver if place_resolver is not None else get_default_database()
        self.logger = logging.getLogger(__name__)

    def build_base(self, data: PersonalData) -> str:
        """Compute the first 15 characters."""
        birth_date = data.birth_date
        return (
            reduce_surname(data.surname)
            + reduce_given_name(data.given_name)
            + encode_date_sex(birth_date.year, birth_date.month, birth_date.day, data.sex)
            + self.place_resolver.resolve(data.birthplace)
        )

    def build(self, data: PersonalData) -> str:
        """
        Build the fiscal code.

        Args:
            data: Personal data of the holder

        Returns:
            16-character uppercase fiscal code

        Raises:
            InvalidName, InvalidDate, UnknownPlace: from the failing component
        """
        base = self.build_base(data)
        code = base + compute_check_character(base)

        self.logger.debug(f"BUILT: {data.given_name} {data.surname} -> {code}")
        return code


def build_fiscal_code(data: PersonalData, place_resolver: Optional[PlaceResolver] = None) -> str:
    """Build a fiscal code with a one-off CodeBuilder."""
    return CodeBuilder(place_resolver).build(data)
