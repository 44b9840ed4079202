"""
Surname and given-name codes.

Both codes are three letters built from the consonants of the name, topped
up with its vowels and finally with 'X' when the name is too short.
"""

from typing import List, Tuple

from .normalizers import normalize_name
from ..core.errors import InvalidName

VOWELS = 'AEIOU'
PADDING = 'X'
CODE_LENGTH = 3


def split_letters(name: str) -> Tuple[List[str], List[str]]:
    """
    Split a name into its consonants and vowels, keeping their order.

    Args:
        name: Input name (any case, accents allowed)

    Returns:
        (consonants, vowels)
    """
    letters = normalize_name(name)
    consonants = [c for c in letters if c not in VOWELS]
    vowels = [c for c in letters if c in VOWELS]
    return consonants, vowels


def _compose(consonants: List[str], vowels: List[str]) -> str:
    code = (consonants + vowels)[:CODE_LENGTH]
    return ''.join(code).ljust(CODE_LENGTH, PADDING)


def reduce_surname(surname: str) -> str:
    """
    Compute the surname code (characters 1-3).

    Args:
        surname: Surname, compound surnames allowed ("De Luca", "D'Angelo")

    Returns:
        Three uppercase letters

    Raises:
        InvalidName: if the surname contains no letters
    """
    consonants, vowels = split_letters(surname)
    if not consonants and not vowels:
        raise InvalidName(f"no letters in '{surname}'", field='surname')

    return _compose(consonants, vowels)


def reduce_given_name(given_name: str) -> str:
    """
    Compute the given-name code (characters 4-6).

    Args:
        given_name: Given name, multiple names allowed ("Maria Grazia")

    Returns:
        Three uppercase letters

    Raises:
        InvalidName: if the given name contains no letters
    """
    consonants, vowels = split_letters(given_name)
    if not consonants and not vowels:
        raise InvalidName(f"no letters in '{given_name}'", field='given_name')

    # Given names with four or more consonants take the 1st, 3rd and 4th one
    # (DM 23/12/1976), so "Michele" is MHL and not MCH as a surname would be.
    if len(consonants) >= 4:
        consonants = [consonants[0], consonants[2], consonants[3]]

    return _compose(consonants, vowels)
