"""Postcode vs. free-text region classification for search locations.

Rightmove search URLs carry a ``locationIdentifier`` of the form
``POSTCODE^<id>`` or ``REGION^<id>``. Which namespace applies depends on the
shape of the location string; the numeric id itself normally comes from
Rightmove's own typeahead lookup, which this package does not call.
"""

from __future__ import annotations

import logging
import re
from enum import Enum

# one or two letters, one digit, optional letter/digit, optional space, digit, two letters
POSTCODE_RE = re.compile(r"[A-Z]{1,2}\d[A-Z\d]?\s?\d[A-Z]{2}", re.I)


class LocationKind(str, Enum):
    POSTCODE = "POSTCODE"
    REGION = "REGION"


def classify_location(location: str) -> LocationKind:
    if POSTCODE_RE.fullmatch((location or "").strip()):
        return LocationKind.POSTCODE
    return LocationKind.REGION


class LocationResolver:
    """Maps a location string to a Rightmove ``locationIdentifier`` value."""

    def identifier(self, location: str, kind: LocationKind) -> str:
        raise NotImplementedError


class PlaceholderLocationResolver(LocationResolver):
    """Returns fixed ids per namespace.

    NOT a real lookup: every postcode resolves to ``POSTCODE^360286`` and
    every region to ``REGION^1000``, so live searches only hit the right area
    by accident. Plug a real ``LocationResolver`` into ``SearchUrlBuilder``
    for production traffic.
    """

    PLACEHOLDER_IDS = {
        LocationKind.POSTCODE: "360286",
        LocationKind.REGION: "1000",
    }

    def identifier(self, location: str, kind: LocationKind) -> str:
        ident = f"{kind.value}^{self.PLACEHOLDER_IDS[kind]}"
        logging.warning(f"Placeholder location id {ident} used for {location!r}; results may not match the location")
        return ident
