"""Birthplace to Belfiore code resolvers."""

from .resolver import PlaceResolver, InMemoryPlaceResolver, is_belfiore_code
from .belfiore import BelfioreDatabase, get_default_database, DEFAULT_BELFIORE_FILE
from .remote import RemotePlaceResolver

__all__ = [
    'PlaceResolver',
    'InMemoryPlaceResolver',
    'is_belfiore_code',
    'BelfioreDatabase',
    'get_default_database',
    'DEFAULT_BELFIORE_FILE',
    'RemotePlaceResolver'
]
