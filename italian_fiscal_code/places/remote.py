"""
Place resolver backed by a remote HTTP lookup service.

The service is expected to answer:

    GET {base_url}/places?name=<name>   -> {"code": "H501", "name": "ROMA", "province": "RM"}
    GET {base_url}/places/<code>        -> same payload

with 404 when the place is unknown. Any other failure (connection error,
timeout, 5xx, unparseable payload) raises PlaceLookupError: the place may
well exist, the service just could not say.
"""

import logging
from typing import Any, Dict, Optional

import requests
import urllib3
from urllib3.exceptions import InsecureRequestWarning

from .resolver import PlaceResolver, is_belfiore_code
from ..core.data_models import Place
from ..core.errors import PlaceLookupError, UnknownPlace

DEFAULT_TIMEOUT = 10

logger = logging.getLogger(__name__)


class RemotePlaceResolver(PlaceResolver):
    """Resolve places by calling an HTTP JSON service."""

    def __init__(self,
                 base_url: str,
                 timeout: float = DEFAULT_TIMEOUT,
                 verify: bool = True,
                 token: Optional[str] = None):
        """
        Args:
            base_url: Service root, e.g. https://places.example.org/api
            timeout: Per-request timeout in seconds
            verify: Verify TLS certificates
            token: Optional bearer token
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.verify = verify
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

        if not verify:
            # Self-signed internal services
            urllib3.disable_warnings(InsecureRequestWarning)

    def _get(self, path: str, params: Optional[Dict[str, str]] = None, field: str = 'birthplace') -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, params=params, timeout=self.timeout, verify=self.verify)
        except requests.RequestException as e:
            logger.error(f"PLACE_LOOKUP_FAILED - {url}: {e}")
            raise PlaceLookupError(f"place lookup failed: {e}", field=field) from e

        if response.status_code == 404:
            raise UnknownPlace(f"unknown place ({url})", field=field)

        try:
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"PLACE_LOOKUP_FAILED - {url}: status {response.status_code}")
            raise PlaceLookupError(f"place lookup failed: {e}", field=field) from e

    def _to_place(self, payload: Any, field: str) -> Place:
        if not isinstance(payload, dict):
            raise PlaceLookupError(f"service returned {type(payload).__name__}, expected an object", field=field)
        code = str(payload.get('code', '')).strip().upper()
        if not is_belfiore_code(code):
            raise PlaceLookupError(f"service returned invalid code '{code}'", field=field)
        return Place(
            code=code,
            name=str(payload.get('name', '')).strip().upper(),
            province=str(payload.get('province', '')).strip().upper()
        )

    def resolve(self, identifier: str) -> str:
        if not identifier or not identifier.strip():
            raise UnknownPlace("birthplace is empty", field='birthplace')

        if is_belfiore_code(identifier):
            return self._lookup_code(identifier, 'birthplace').code

        payload = self._get('/places', params={'name': identifier.strip()})
        return self._to_place(payload, 'birthplace').code

    def _lookup_code(self, code: str, field: str) -> Place:
        code = (code or '').strip().upper()
        payload = self._get(f"/places/{code}", field=field)
        return self._to_place(payload, field)

    def reverse(self, code: str) -> Place:
        return self._lookup_code(code, 'place_code')
