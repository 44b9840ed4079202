"""
Birth date and sex segment (characters 7-11).

The segment is the last two digits of the year, one month letter and the
day of birth, with 40 added to the day for women.
"""

import calendar
import re
from datetime import date
from typing import Optional, Tuple

from ..core.data_models import Sex
from ..core.errors import InvalidDate

# One letter per calendar month, January first.
MONTH_LETTERS = 'ABCDEHLMPRST'

MONTH_BY_LETTER = {letter: month for month, letter in enumerate(MONTH_LETTERS, 1)}

FEMALE_DAY_OFFSET = 40

# ASCII digits only: str.isdigit() also accepts superscripts and other scripts
_SEGMENT = re.compile(r'^[0-9]{2}.[0-9]{2}\Z')


def validate_birth_date(year: int, month: int, day: int) -> None:
    """
    Check that year, month and day form a real calendar date.

    Raises:
        InvalidDate: month outside 1-12, day outside the month, or
            year outside 1-9999
    """
    if not 1 <= year <= 9999:
        raise InvalidDate(f"year {year} out of range", field='birth_date')

    if not 1 <= month <= 12:
        raise InvalidDate(f"month {month} out of range 1-12", field='birth_date')

    days_in_month = calendar.monthrange(year, month)[1]
    if not 1 <= day <= days_in_month:
        raise InvalidDate(
            f"day {day} out of range for {year:04d}-{month:02d} (1-{days_in_month})",
            field='birth_date'
        )


def encode_date_sex(year: int, month: int, day: int, sex: Sex) -> str:
    """
    Encode birth date and sex into five characters.

    Args:
        year: Full year (e.g. 1985)
        month: Month 1-12
        day: Day of month
        sex: Sex of the person

    Returns:
        'YYMDD', e.g. '85D15' (male) or '85D55' (female)

    Raises:
        InvalidDate: if the date is not valid
    """
    validate_birth_date(year, month, day)

    encoded_day = day + FEMALE_DAY_OFFSET if sex is Sex.FEMALE else day

    return f"{year % 100:02d}{MONTH_LETTERS[month - 1]}{encoded_day:02d}"


def decode_date_sex(segment: str, reference_date: Optional[date] = None) -> Tuple[date, Sex]:
    """
    Decode the five-character date and sex segment.

    The code only carries two year digits: the century is chosen so that
    the birth year is the latest one not after the reference date.

    Args:
        segment: Characters 7-11 of a fiscal code
        reference_date: Date used to pick the century (default: today)

    Returns:
        (birth date, sex)

    Raises:
        InvalidDate: if the segment does not encode a valid date
    """
    segment = segment.upper()
    if not _SEGMENT.match(segment):
        raise InvalidDate(f"malformed date segment '{segment}'", field='birth_date')

    month = MONTH_BY_LETTER.get(segment[2])
    if month is None:
        raise InvalidDate(f"invalid month letter '{segment[2]}'", field='birth_date')

    encoded_day = int(segment[3:])
    if encoded_day > FEMALE_DAY_OFFSET:
        sex = Sex.FEMALE
        day = encoded_day - FEMALE_DAY_OFFSET
    else:
        sex = Sex.MALE
        day = encoded_day

    reference = reference_date or date.today()
    two_digits = int(segment[:2])
    year = (reference.year // 100) * 100 + two_digits
    if year > reference.year:
        year -= 100

    validate_birth_date(year, month, day)

    return date(year, month, day), sex
