import unittest

from italian_fiscal_code.core.data_models import BirthDate, Sex
from italian_fiscal_code.core.errors import InvalidDate, InvalidSex
from italian_fiscal_code.utils.normalizers import (
    clean_code,
    normalize_date,
    normalize_name,
    normalize_sex,
)


class TestNormalizeName(unittest.TestCase):
    """Test the normalize_name function, especially accent removal."""

    def test_accent_removal(self):
        """Test that accents and diacritical marks are properly removed."""
        self.assertEqual(normalize_name("Niccolò"), "NICCOLO")
        self.assertEqual(normalize_name("Nicolò"), "NICOLO")
        self.assertEqual(normalize_name("José"), "JOSE")
        self.assertEqual(normalize_name("François"), "FRANCOIS")
        self.assertEqual(normalize_name("Müller"), "MULLER")

    def test_spaces_and_apostrophes(self):
        """Test that spaces, apostrophes and hyphens are removed."""
        self.assertEqual(normalize_name("D'Angelo"), "DANGELO")
        self.assertEqual(normalize_name("De Luca"), "DELUCA")
        self.assertEqual(normalize_name("Jean-Claude"), "JEANCLAUDE")

    def test_digits_removed(self):
        self.assertEqual(normalize_name("Rossi2"), "ROSSI")

    def test_empty(self):
        self.assertEqual(normalize_name(""), "")
        self.assertEqual(normalize_name("   "), "")


class TestNormalizeDate(unittest.TestCase):
    """Test birth date parsing."""

    def test_formats(self):
        expected = BirthDate(1985, 4, 15)
        self.assertEqual(normalize_date("1985-04-15"), expected)
        self.assertEqual(normalize_date("15/04/1985"), expected)
        self.assertEqual(normalize_date("1985/04/15"), expected)
        self.assertEqual(normalize_date("15-04-1985"), expected)
        self.assertEqual(normalize_date(" 1985-04-15 "), expected)

    def test_invalid(self):
        for value in ["", "not a date", "1985-02-30", "32/01/1985"]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidDate):
                    normalize_date(value)


class TestNormalizeSex(unittest.TestCase):
    """Test sex normalization."""

    def test_variants(self):
        for value in ["M", "m", "Male", "MASCHIO", " uomo "]:
            self.assertIs(normalize_sex(value), Sex.MALE)
        for value in ["F", "female", "Femmina", "DONNA"]:
            self.assertIs(normalize_sex(value), Sex.FEMALE)

    def test_enum_passthrough(self):
        self.assertIs(normalize_sex(Sex.FEMALE), Sex.FEMALE)

    def test_unrecognized(self):
        for value in ["", "X", None]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidSex) as ctx:
                    normalize_sex(value)
                self.assertEqual(ctx.exception.field, 'sex')


class TestCleanCode(unittest.TestCase):

    def test_clean(self):
        self.assertEqual(clean_code(" rssmra 85d15 h501t "), "RSSMRA85D15H501T")
        self.assertEqual(clean_code("RSSMRA-85D15-H501T"), "RSSMRA85D15H501T")
        self.assertEqual(clean_code(""), "")


if __name__ == '__main__':
    unittest.main()
