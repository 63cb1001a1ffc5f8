"""Search-parameter to Rightmove URL compilation.

Term order is fixed so the same ``SearchParams`` always yields the same
string:

  searchLocation, useLocationIdentifier, locationIdentifier, buy,
  minPrice, maxPrice, propertyTypes, minBedrooms, radius, sortType,
  index, _includeSSTC
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple
from urllib.parse import quote, quote_plus, urlencode

from .config import Settings
from .locations import LocationResolver, PlaceholderLocationResolver, classify_location
from .models import Number, SearchParams

SEARCH_PATH = "/property-for-sale/find.html"

PROPERTY_TYPE_TERMS = {
    "houses": "detached,semi-detached,terraced",
    "flats": "flats",
    "bungalows": "bungalow",
    "land": "land",
    "commercial": "commercial",
    "other": "",
}

# characters encodeURIComponent leaves alone
_URI_COMPONENT_SAFE = "-_.!~*'()"


def format_number(value: Number) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def format_radius(radius: Optional[Number]) -> str:
    """Render the radius term with exactly one decimal digit (``1`` -> ``1.0``)."""
    if radius is None:
        return "0.0"
    return str(Decimal(str(radius)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _encode(terms: List[Tuple[str, str]]) -> str:
    # '+' is the location join character and must survive encoding
    return "&".join(f"{k}={quote_plus(v, safe='+')}" for k, v in terms)


class SearchUrlBuilder:
    def __init__(self, settings: Settings, resolver: Optional[LocationResolver] = None) -> None:
        self.settings = settings
        self.resolver = resolver or PlaceholderLocationResolver()

    def search_terms(self, params: SearchParams) -> List[Tuple[str, str]]:
        terms: List[Tuple[str, str]] = []

        location = params.location or ""
        terms.append(("searchLocation", "+".join(location.split())))
        terms.append(("useLocationIdentifier", "true"))
        kind = classify_location(location)
        terms.append(("locationIdentifier", self.resolver.identifier(location, kind)))

        terms.append(("buy", "For sale"))

        if params.min_price is not None:
            terms.append(("minPrice", format_number(params.min_price)))
        if params.max_price is not None:
            terms.append(("maxPrice", format_number(params.max_price)))
        if params.property_type is not None:
            terms.append(("propertyTypes", PROPERTY_TYPE_TERMS.get(params.property_type, "")))
        if params.bedrooms is not None:
            terms.append(("minBedrooms", format_number(params.bedrooms)))

        terms.append(("radius", format_radius(params.radius)))

        if params.sort_type is not None:
            terms.append(("sortType", format_number(params.sort_type)))
        if params.index is not None:
            terms.append(("index", format_number(params.index)))

        terms.append(("_includeSSTC", "on"))
        return terms

    def build(self, params: SearchParams) -> str:
        return f"{self.settings.base_url}{SEARCH_PATH}?{_encode(self.search_terms(params))}"

    def build_manual(self, params: SearchParams) -> str:
        """Short search URL meant for pasting into a browser and refining by hand."""
        terms = [("searchLocation", params.location)]
        if params.min_price is not None:
            terms.append(("minPrice", format_number(params.min_price)))
        if params.max_price is not None:
            terms.append(("maxPrice", format_number(params.max_price)))
        if params.radius is not None:
            terms.append(("radius", format_number(params.radius)))
        return f"{self.settings.base_url}{SEARCH_PATH}?{urlencode(terms)}"

    def property_url(self, property_id: str) -> str:
        return f"{self.settings.base_url}/properties/{quote(property_id, safe='')}"

    def statistics_url(self, location: str) -> str:
        return f"{self.settings.base_url}/house-prices/{quote(location, safe=_URI_COMPONENT_SAFE)}.html"
