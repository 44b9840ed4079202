"""
Check character (character 16).

Each of the first 15 characters is converted with the odd or even table
depending on its 1-based position; the sum modulo 26 selects a letter.
Tables as published in DM 12/03/1974.
"""

import re

from ..core.errors import InvalidBaseCode

BASE_LENGTH = 15

ODD_VALUES = {
    '0': 1, '1': 0, '2': 5, '3': 7, '4': 9, '5': 13, '6': 15, '7': 17, '8': 19, '9': 21,
    'A': 1, 'B': 0, 'C': 5, 'D': 7, 'E': 9, 'F': 13, 'G': 15, 'H': 17, 'I': 19, 'J': 21,
    'K': 2, 'L': 4, 'M': 18, 'N': 20, 'O': 11, 'P': 3, 'Q': 6, 'R': 8, 'S': 12, 'T': 14,
    'U': 16, 'V': 10, 'W': 22, 'X': 25, 'Y': 24, 'Z': 23
}

EVEN_VALUES = {
    '0': 0, '1': 1, '2': 2, '3': 3, '4': 4, '5': 5, '6': 6, '7': 7, '8': 8, '9': 9,
    'A': 0, 'B': 1, 'C': 2, 'D': 3, 'E': 4, 'F': 5, 'G': 6, 'H': 7, 'I': 8, 'J': 9,
    'K': 10, 'L': 11, 'M': 12, 'N': 13, 'O': 14, 'P': 15, 'Q': 16, 'R': 17, 'S': 18, 'T': 19,
    'U': 20, 'V': 21, 'W': 22, 'X': 23, 'Y': 24, 'Z': 25
}

CHECK_LETTERS = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

_BASE_PATTERN = re.compile(r'^[A-Z0-9]{15}\Z')


def compute_check_character(base: str) -> str:
    """
    Compute the check character of a 15-character base code.

    Args:
        base: First 15 characters of a fiscal code (case-insensitive)

    Returns:
        The check letter

    Raises:
        InvalidBaseCode: if base is not 15 characters of [A-Z0-9]
    """
    if not isinstance(base, str) or len(base) != BASE_LENGTH:
        raise InvalidBaseCode(
            f"base code must be {BASE_LENGTH} characters, got {base!r}", field='base_code')

    base = base.upper()
    if not _BASE_PATTERN.match(base):
        raise InvalidBaseCode(
            f"base code '{base}' contains characters outside A-Z0-9", field='base_code')

    total = 0
    for position, char in enumerate(base, 1):
        if position % 2 == 1:
            total += ODD_VALUES[char]
        else:
            total += EVEN_VALUES[char]

    return CHECK_LETTERS[total % 26]
