"""
Tests for the place resolvers: in-memory, Belfiore CSV and remote HTTP.
"""

import csv
import shutil
import tempfile
import unittest
from pathlib import Path
from typing import List
from unittest.mock import Mock, patch

import requests

from italian_fiscal_code.core.data_models import Place
from italian_fiscal_code.core.errors import PlaceLookupError, UnknownPlace
from italian_fiscal_code.places.belfiore import BelfioreDatabase, get_default_database
from italian_fiscal_code.places.remote import RemotePlaceResolver
from italian_fiscal_code.places.resolver import (
    BELFIORE_PATTERN,
    InMemoryPlaceResolver,
    is_belfiore_code,
    split_province,
)


class TestHelpers(unittest.TestCase):

    def test_is_belfiore_code(self):
        self.assertTrue(is_belfiore_code('H501'))
        self.assertTrue(is_belfiore_code(' z404 '))
        self.assertFalse(is_belfiore_code('Roma'))
        self.assertFalse(is_belfiore_code('H50M'))
        self.assertFalse(is_belfiore_code(''))

    def test_pattern_rejects_trailing_newline(self):
        self.assertIsNone(BELFIORE_PATTERN.match('H501\n'))
        self.assertIsNotNone(BELFIORE_PATTERN.match('H501'))

    def test_split_province(self):
        self.assertEqual(split_province('Samone (TO)'), ('Samone', 'TO'))
        self.assertEqual(split_province('Roma'), ('Roma', None))


class TestInMemoryPlaceResolver(unittest.TestCase):
    """Test cases for InMemoryPlaceResolver."""

    def setUp(self):
        self.resolver = InMemoryPlaceResolver([
            Place('H501', 'Roma', 'RM'),
            Place('H223', "Reggio nell'Emilia", 'RE'),
            Place('H753', 'Samone', 'TN'),
            Place('H754', 'Samone', 'TO'),
            Place('Z404', "Stati Uniti d'America", 'EE'),
        ])

    def test_resolve_by_name(self):
        self.assertEqual(self.resolver.resolve('Roma'), 'H501')
        self.assertEqual(self.resolver.resolve('ROMA'), 'H501')
        self.assertEqual(self.resolver.resolve("reggio nell emilia"), 'H223')

    def test_resolve_by_code(self):
        self.assertEqual(self.resolver.resolve('h501'), 'H501')

    def test_resolve_homonyms_needs_province(self):
        with self.assertRaises(UnknownPlace):
            self.resolver.resolve('Samone')
        self.assertEqual(self.resolver.resolve('Samone (TO)'), 'H754')
        self.assertEqual(self.resolver.resolve('Samone (tn)'), 'H753')

    def test_resolve_unknown(self):
        for identifier in ['Atlantide', 'Z999', '', '   ']:
            with self.subTest(identifier=identifier):
                with self.assertRaises(UnknownPlace) as ctx:
                    self.resolver.resolve(identifier)
                self.assertEqual(ctx.exception.field, 'birthplace')

    def test_reverse(self):
        place = self.resolver.reverse('z404')
        self.assertEqual(place.name, "STATI UNITI D'AMERICA")
        self.assertTrue(place.is_foreign)
        self.assertFalse(self.resolver.reverse('H501').is_foreign)

    def test_reverse_unknown(self):
        with self.assertRaises(UnknownPlace) as ctx:
            self.resolver.reverse('Z999')
        self.assertEqual(ctx.exception.field, 'place_code')

    def test_add_invalid_code(self):
        with self.assertRaises(UnknownPlace):
            self.resolver.add(Place('ROMA', 'Roma', 'RM'))

    def test_len(self):
        self.assertEqual(len(self.resolver), 5)

    def test_duplicate_row_still_resolves(self):
        self.resolver.add(Place('H501', 'Roma', 'RM'))
        self.assertEqual(self.resolver.resolve('Roma'), 'H501')
        self.assertEqual(len(self.resolver), 5)

    def test_readding_code_replaces_old_name(self):
        self.resolver.add(Place('H501', 'Roma Capitale', 'RM'))

        self.assertEqual(self.resolver.resolve('Roma Capitale'), 'H501')
        self.assertEqual(self.resolver.reverse('H501').name, 'ROMA CAPITALE')
        with self.assertRaises(UnknownPlace):
            self.resolver.resolve('Roma')


class TestBelfioreDatabase(unittest.TestCase):
    """Test cases for the CSV-backed database."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _create_temp_csv(self, rows: List[List[str]]) -> str:
        filepath = Path(self.temp_dir) / 'belfiore.csv'
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(['code', 'province', 'name'])
            writer.writerows(rows)
        return str(filepath)

    def test_load_csv(self):
        path = self._create_temp_csv([
            ['H501', 'RM', 'ROMA'],
            ['F205', 'MI', 'MILANO'],
            ['', 'XX', 'SENZA CODICE'],
            ['A001', 'XX', ''],
        ])
        database = BelfioreDatabase(path)

        self.assertEqual(len(database), 2)
        self.assertEqual(database.resolve('Milano'), 'F205')
        self.assertEqual(database.get_info('roma').province, 'RM')
        self.assertEqual(database.lookup_belfiore('f205').name, 'MILANO')
        self.assertIsNone(database.get_info('Senza Codice'))
        self.assertIsNone(database.lookup_belfiore('A001'))

    def test_duplicate_rows(self):
        path = self._create_temp_csv([
            ['H501', 'RM', 'ROMA'],
            ['H501', 'RM', 'Roma'],
            ['F205', 'MI', 'MILANO'],
        ])
        database = BelfioreDatabase(path)

        self.assertEqual(len(database), 2)
        self.assertEqual(database.resolve('Roma'), 'H501')

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            BelfioreDatabase(Path(self.temp_dir) / 'missing.csv')

    def test_bundled_database(self):
        database = get_default_database()
        self.assertIs(database, get_default_database())
        self.assertEqual(database.resolve('Roma'), 'H501')
        self.assertEqual(database.resolve('Milano'), 'F205')
        self.assertEqual(database.resolve("Stati Uniti d'America"), 'Z404')
        self.assertEqual(database.reverse('L219').name, 'TORINO')


class TestRemotePlaceResolver(unittest.TestCase):
    """Test cases for the HTTP resolver, with the session mocked."""

    def setUp(self):
        patcher = patch('italian_fiscal_code.places.remote.requests.Session')
        self.mock_session_class = patcher.start()
        self.addCleanup(patcher.stop)

        self.session = Mock()
        self.session.headers = {}
        self.mock_session_class.return_value = self.session

        self.resolver = RemotePlaceResolver('https://places.example.org/api/', timeout=5)

    def _response(self, status_code=200, payload=None):
        response = Mock()
        response.status_code = status_code
        response.json.return_value = payload or {}
        if status_code >= 400:
            response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} error")
        return response

    def test_resolve_by_name(self):
        self.session.get.return_value = self._response(
            payload={'code': 'h501', 'name': 'Roma', 'province': 'RM'})

        self.assertEqual(self.resolver.resolve('Roma'), 'H501')
        self.session.get.assert_called_once_with(
            'https://places.example.org/api/places',
            params={'name': 'Roma'},
            timeout=5,
            verify=True
        )

    def test_resolve_by_code_uses_reverse_endpoint(self):
        self.session.get.return_value = self._response(
            payload={'code': 'H501', 'name': 'ROMA', 'province': 'RM'})

        self.assertEqual(self.resolver.resolve('h501'), 'H501')
        self.assertEqual(self.session.get.call_args[0][0], 'https://places.example.org/api/places/H501')

    def test_reverse(self):
        self.session.get.return_value = self._response(
            payload={'code': 'Z404', 'name': "Stati Uniti d'America", 'province': 'EE'})

        place = self.resolver.reverse('Z404')
        self.assertEqual(place, Place('Z404', "STATI UNITI D'AMERICA", 'EE'))

    def test_not_found(self):
        self.session.get.return_value = self._response(status_code=404)
        with self.assertRaises(UnknownPlace) as ctx:
            self.resolver.reverse('Z999')
        self.assertEqual(ctx.exception.field, 'place_code')

    def test_resolve_code_not_found_names_birthplace(self):
        self.session.get.return_value = self._response(status_code=404)
        with self.assertRaises(UnknownPlace) as ctx:
            self.resolver.resolve('Z999')
        self.assertEqual(ctx.exception.field, 'birthplace')

    def test_server_error(self):
        self.session.get.return_value = self._response(status_code=500)
        with self.assertRaises(PlaceLookupError) as ctx:
            self.resolver.resolve('Roma')
        self.assertNotIsInstance(ctx.exception, UnknownPlace)
        self.assertEqual(ctx.exception.field, 'birthplace')

    def test_server_error_on_reverse(self):
        self.session.get.return_value = self._response(status_code=503)
        with self.assertRaises(PlaceLookupError) as ctx:
            self.resolver.reverse('H501')
        self.assertEqual(ctx.exception.field, 'place_code')

    def test_connection_error(self):
        self.session.get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(PlaceLookupError) as ctx:
            self.resolver.resolve('Roma')
        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_timeout(self):
        self.session.get.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(PlaceLookupError):
            self.resolver.reverse('H501')

    def test_invalid_payload(self):
        self.session.get.return_value = self._response(payload={'code': 'ROMA'})
        with self.assertRaises(PlaceLookupError):
            self.resolver.resolve('Roma')

    def test_payload_not_an_object(self):
        self.session.get.return_value = self._response(payload=['H501'])
        with self.assertRaises(PlaceLookupError):
            self.resolver.reverse('H501')

    def test_empty_identifier(self):
        with self.assertRaises(UnknownPlace):
            self.resolver.resolve(' ')
        self.session.get.assert_not_called()

    def test_token_header(self):
        RemotePlaceResolver('https://places.example.org', token='abc123')
        self.assertEqual(self.session.headers['Authorization'], 'Bearer abc123')

    @patch('italian_fiscal_code.places.remote.urllib3.disable_warnings')
    def test_insecure_disables_warnings(self, mock_disable):
        resolver = RemotePlaceResolver('https://places.example.org', verify=False)
        mock_disable.assert_called_once()

        self.session.get.return_value = self._response(payload={'code': 'H501', 'name': 'ROMA'})
        resolver.resolve('Roma')
        self.assertFalse(self.session.get.call_args[1]['verify'])


if __name__ == '__main__':
    unittest.main()
