"""
Place resolution.

The builder and the validator only know the PlaceResolver interface: turn a
birthplace into its four-character Belfiore code, and turn a code back into
a Place. Where the places come from is up to the implementation.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from ..core.data_models import Place
from ..core.errors import UnknownPlace
from ..utils.normalizers import normalize_name

BELFIORE_PATTERN = re.compile(r'^[A-Z][0-9]{3}\Z')

# "Samone (TO)" -> ("Samone", "TO")
_PROVINCE_SUFFIX = re.compile(r'^(?P<name>.*?)\s*\((?P<province>[A-Za-z]{2})\)\s*$')

logger = logging.getLogger(__name__)


def is_belfiore_code(value: str) -> bool:
    """Check whether value has the shape of a Belfiore code (e.g. H501)."""
    return bool(value) and bool(BELFIORE_PATTERN.match(value.strip().upper()))


def split_province(identifier: str) -> Tuple[str, Optional[str]]:
    """Split an optional '(PR)' province suffix off a place name."""
    match = _PROVINCE_SUFFIX.match(identifier or "")
    if not match:
        return identifier, None
    return match.group('name'), match.group('province').upper()


class PlaceResolver(ABC):
    """Lookup contract between the fiscal code core and a place database."""

    @abstractmethod
    def resolve(self, identifier: str) -> str:
        """
        Resolve a birthplace to its Belfiore code.

        Args:
            identifier: Municipality or country name, or a Belfiore code

        Returns:
            Four-character uppercase code

        Raises:
            UnknownPlace: if no entry exists
            PlaceLookupError: if the lookup itself could not be performed
        """

    @abstractmethod
    def reverse(self, code: str) -> Place:
        """
        Look up the place a Belfiore code belongs to.

        Raises:
            UnknownPlace: if the code is not known
            PlaceLookupError: if the lookup itself could not be performed
        """


class InMemoryPlaceResolver(PlaceResolver):
    """Resolver backed by a list of places held in memory."""

    def __init__(self, places: Iterable[Place] = ()):
        self._by_code: Dict[str, Place] = {}
        self._by_name: Dict[str, List[Place]] = {}
        for place in places:
            self.add(place)

    def __len__(self) -> int:
        return len(self._by_code)

    def add(self, place: Place) -> None:
        """Register a place under its code and its normalized name."""
        code = place.code.strip().upper()
        if not is_belfiore_code(code):
            raise UnknownPlace(f"invalid Belfiore code '{place.code}'", field='birthplace')

        place = Place(code=code, name=place.name.strip().upper(), province=place.province.strip().upper())

        # A code maps to one place: re-adding it replaces the old name entry
        previous = self._by_code.get(code)
        if previous is not None:
            logger.debug(f"DUPLICATE_PLACE - {code}: '{previous.name}' replaced by '{place.name}'")
            key = normalize_name(previous.name)
            remaining = [p for p in self._by_name.get(key, []) if p.code != code]
            if remaining:
                self._by_name[key] = remaining
            else:
                self._by_name.pop(key, None)

        self._by_code[code] = place
        self._by_name.setdefault(normalize_name(place.name), []).append(place)

    def get_info(self, name: str) -> Optional[Place]:
        """
        Find a place by name.

        Matching ignores case, accents, spaces and apostrophes. A '(PR)'
        suffix selects among homonymous municipalities of different
        provinces; without it, an ambiguous name yields None.
        """
        name, province = split_province(name)
        candidates = self._by_name.get(normalize_name(name), [])
        if province:
            candidates = [p for p in candidates if p.province == province]

        if len(candidates) != 1:
            if len(candidates) > 1:
                logger.warning(
                    f"AMBIGUOUS_PLACE - '{name}' matches {len(candidates)} places: "
                    f"{', '.join(p.code for p in candidates)}"
                )
            return None
        return candidates[0]

    def lookup_belfiore(self, code: str) -> Optional[Place]:
        """Find a place by Belfiore code."""
        return self._by_code.get((code or "").strip().upper())

    def resolve(self, identifier: str) -> str:
        if not identifier or not identifier.strip():
            raise UnknownPlace("birthplace is empty", field='birthplace')

        if is_belfiore_code(identifier):
            place = self.lookup_belfiore(identifier)
        else:
            place = self.get_info(identifier)

        if place is None:
            raise UnknownPlace(f"unknown place '{identifier}'", field='birthplace')
        return place.code

    def reverse(self, code: str) -> Place:
        place = self.lookup_belfiore(code)
        if place is None:
            raise UnknownPlace(f"unknown place code '{code}'", field='place_code')
        return place
