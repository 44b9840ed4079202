"""
String and date normalization utilities for fiscal code computation.

This module provides the normalization functions used to turn free-form
caller input (names typed with accents, dates in several formats, sex
spelled in Italian or English) into the canonical values the encoders expect.
"""

import re
import unicodedata
from datetime import datetime

from ..core.data_models import BirthDate, Sex
from ..core.errors import InvalidDate, InvalidSex


def normalize_name(name: str) -> str:
    """
    Normalize a name to the uppercase Latin letters it contains.

    Accents and other diacritical marks are removed, then every character
    that is not A-Z (spaces, apostrophes, hyphens, digits) is dropped.

    Args:
        name: Input surname or given name

    Returns:
        Uppercase letters only, possibly empty
    """
    if not name:
        return ""

    decomposed = unicodedata.normalize('NFKD', name)
    stripped = ''.join(c for c in decomposed if not unicodedata.combining(c))

    return re.sub(r'[^A-Z]', '', stripped.upper())


def normalize_date(date_str: str) -> BirthDate:
    """
    Parse a birth date string.

    Supports the formats commonly found in Italian registries and forms:
    - YYYY-MM-DD (ISO format)
    - DD/MM/YYYY (Italian format)
    - YYYY/MM/DD (Alternative ISO)
    - DD-MM-YYYY

    Args:
        date_str: Input date string

    Returns:
        Parsed BirthDate

    Raises:
        InvalidDate: if no format matches
    """
    if not date_str or not date_str.strip():
        raise InvalidDate("birth date is empty", field='birth_date')

    formats = ['%Y-%m-%d', '%d/%m/%Y', '%Y/%m/%d', '%d-%m-%Y']

    for fmt in formats:
        try:
            dt = datetime.strptime(date_str.strip(), fmt)
            return BirthDate(dt.year, dt.month, dt.day)
        except ValueError:
            continue

    raise InvalidDate(f"unrecognized birth date '{date_str}'", field='birth_date')


def normalize_sex(sex: str) -> Sex:
    """
    Normalize a sex string to the Sex enum.

    Args:
        sex: Input sex string

    Returns:
        Sex.MALE or Sex.FEMALE

    Raises:
        InvalidSex: if the value is not recognized
    """
    if isinstance(sex, Sex):
        return sex

    sex_normalized = (sex or "").upper().strip()

    # Map common variations to standard values
    male_variants = ['M', 'MALE', 'MASCHIO', 'UOMO', 'MAN']
    female_variants = ['F', 'FEMALE', 'FEMMINA', 'DONNA', 'WOMAN']

    if sex_normalized in male_variants:
        return Sex.MALE
    elif sex_normalized in female_variants:
        return Sex.FEMALE

    raise InvalidSex(f"unrecognized sex '{sex}'", field='sex')


def clean_code(code: str) -> str:
    """
    Clean and normalize a fiscal code typed by a person.

    Args:
        code: Input fiscal code

    Returns:
        Code with no whitespace or separators, uppercase
    """
    if not code:
        return ""

    cleaned = re.sub(r'\s+', '', code.upper())

    # Remove common separators
    cleaned = cleaned.replace('-', '').replace('_', '')

    return cleaned
