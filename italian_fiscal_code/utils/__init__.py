"""Encoding utilities for the fiscal code segments."""

# Import key functions for easier access
from .normalizers import normalize_name, normalize_date, normalize_sex, clean_code
from .name_reducer import reduce_surname, reduce_given_name
from .date_sex import encode_date_sex, decode_date_sex, MONTH_LETTERS
from .checksum import compute_check_character

__all__ = [
    'normalize_name',
    'normalize_date',
    'normalize_sex',
    'clean_code',
    'reduce_surname',
    'reduce_given_name',
    'encode_date_sex',
    'decode_date_sex',
    'MONTH_LETTERS',
    'compute_check_character'
]
