"""Named tool dispatch: argument validation, fetch + parse pipeline, result envelope.

``ToolRouter.dispatch`` never raises. Every outcome is either ``Success``
carrying the serialized record or ``Failure`` carrying an ``ErrorKind`` and
a human-readable message.
"""

from __future__ import annotations

import copy
import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from .config import Settings
from .errors import ErrorKind, InvalidArguments, ToolError, UnknownTool
from .http_client import HttpClient
from .locations import LocationResolver
from .models import PROPERTY_TYPES, RADIUS_CHOICES, SORT_TYPES, SearchParams
from .parsers import DetailParser, ListingParser, StatisticsParser, make_soup
from .urls import SearchUrlBuilder

Fetcher = Callable[[str], str]

TOOL_SCHEMAS: List[Dict[str, Any]] = [
    {
        "name": "search_properties",
        "description": "Search for properties on Rightmove",
        "inputSchema": {
            "type": "object",
            "properties": {
                "location": {
                    "type": "string",
                    "description": "Location to search (e.g., 'London', 'Manchester', 'SW1A 1AA')",
                },
                "minPrice": {"type": "number", "description": "Minimum price filter"},
                "maxPrice": {"type": "number", "description": "Maximum price filter"},
                "propertyType": {
                    "type": "string",
                    "enum": list(PROPERTY_TYPES),
                    "description": "Type of property to search for",
                },
                "bedrooms": {"type": "number", "description": "Number of bedrooms"},
                "radius": {
                    "type": "number",
                    "description": "Search radius in miles (0.25, 0.5, 1, 3, 5, 10, 15, 20, 30, 40)",
                },
                "sortType": {
                    "type": "number",
                    "enum": list(SORT_TYPES),
                    "description": "Sort order: 1=highest price, 2=lowest price, 6=newest listed, 10=oldest listed",
                },
                "index": {
                    "type": "number",
                    "description": "Starting index for pagination (0, 24, 48, etc.)",
                },
            },
            "required": ["location"],
        },
    },
    {
        "name": "get_property_details",
        "description": "Get detailed information about a specific property",
        "inputSchema": {
            "type": "object",
            "properties": {
                "propertyId": {"type": "string", "description": "The property ID from Rightmove"},
            },
            "required": ["propertyId"],
        },
    },
    {
        "name": "get_area_statistics",
        "description": "Get price statistics and market data for an area",
        "inputSchema": {
            "type": "object",
            "properties": {
                "location": {"type": "string", "description": "Location to get statistics for"},
            },
            "required": ["location"],
        },
    },
]

# ---------- Result envelope ----------

@dataclass
class Success:
    payload: Dict[str, Any]
    is_error = False

    def to_response(self) -> Dict[str, Any]:
        text = json.dumps(self.payload, indent=2, ensure_ascii=False)
        return {"content": [{"type": "text", "text": text}], "isError": False}


@dataclass
class Failure:
    kind: ErrorKind
    message: str
    is_error = True

    def to_response(self) -> Dict[str, Any]:
        return {"content": [{"type": "text", "text": self.message}], "isError": True}


ToolResult = Union[Success, Failure]

# ---------- Argument coercion ----------

def require_str(args: Mapping[str, Any], key: str, allow_int: bool = False) -> str:
    val = args.get(key)
    if val is None:
        raise InvalidArguments(f"Missing required argument: {key}")
    if allow_int and isinstance(val, int) and not isinstance(val, bool):
        val = str(val)
    if not isinstance(val, str):
        raise InvalidArguments(f"Argument '{key}' must be a string")
    if not val.strip():
        raise InvalidArguments(f"Argument '{key}' must not be empty")
    return val.strip()


def optional_number(args: Mapping[str, Any], key: str) -> Optional[Union[int, float]]:
    val = args.get(key)
    if val is None:
        return None
    if isinstance(val, bool):
        raise InvalidArguments(f"Argument '{key}' must be a number")
    if isinstance(val, str):
        try:
            val = float(val.strip())
        except ValueError:
            raise InvalidArguments(f"Argument '{key}' must be a number") from None
    if not isinstance(val, (int, float)):
        raise InvalidArguments(f"Argument '{key}' must be a number")
    # ints are never nan or inf, and huge ones overflow float()
    if isinstance(val, float) and (math.isnan(val) or math.isinf(val)):
        raise InvalidArguments(f"Argument '{key}' must be a finite number")
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    if val < 0:
        raise InvalidArguments(f"Argument '{key}' must not be negative")
    return val


def optional_int(args: Mapping[str, Any], key: str) -> Optional[int]:
    val = optional_number(args, key)
    if val is not None and not isinstance(val, int):
        raise InvalidArguments(f"Argument '{key}' must be a whole number")
    return val


def parse_search_params(args: Mapping[str, Any], page_size: int) -> SearchParams:
    params = SearchParams(
        location=require_str(args, "location"),
        min_price=optional_number(args, "minPrice"),
        max_price=optional_number(args, "maxPrice"),
        bedrooms=optional_int(args, "bedrooms"),
        radius=optional_number(args, "radius"),
        sort_type=optional_int(args, "sortType"),
        index=optional_int(args, "index"),
    )

    if params.min_price is not None and params.max_price is not None and params.min_price > params.max_price:
        raise InvalidArguments("minPrice must not be greater than maxPrice")

    property_type = args.get("propertyType")
    if property_type is not None:
        if property_type not in PROPERTY_TYPES:
            raise InvalidArguments(f"propertyType must be one of: {', '.join(PROPERTY_TYPES)}")
        params.property_type = property_type

    if params.radius is not None and params.radius not in RADIUS_CHOICES:
        raise InvalidArguments(f"radius must be one of: {', '.join(str(r) for r in RADIUS_CHOICES)}")
    if params.sort_type is not None and params.sort_type not in SORT_TYPES:
        raise InvalidArguments(f"sortType must be one of: {', '.join(str(s) for s in SORT_TYPES)}")
    if params.index is not None and params.index % page_size:
        raise InvalidArguments(f"index must be a multiple of the page size ({page_size})")
    return params

# ---------- Router ----------

class ToolRouter:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        fetch: Optional[Fetcher] = None,
        resolver: Optional[LocationResolver] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.urls = SearchUrlBuilder(self.settings, resolver)
        self.fetch = fetch or HttpClient(self.settings).get_html
        self._handlers = {
            "search_properties": (self.search_properties, "searching properties"),
            "get_property_details": (self.get_property_details, "fetching property details"),
            "get_area_statistics": (self.get_area_statistics, "fetching area statistics"),
        }

    def list_tools(self) -> List[Dict[str, Any]]:
        return copy.deepcopy(TOOL_SCHEMAS)

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        entry = self._handlers.get(name)
        if entry is None:
            err = UnknownTool(name)
            logging.warning(f"Unknown tool requested: {name!r}")
            return Failure(err.kind, err.message)
        handler, action = entry

        logging.info(f"Dispatching {name}")
        try:
            if arguments is None:
                arguments = {}
            if not isinstance(arguments, Mapping):
                raise InvalidArguments("Tool arguments must be an object")
            payload = handler(arguments)
        except ToolError as e:
            logging.warning(f"{name} failed ({e.kind.value}): {e.message}")
            return Failure(e.kind, f"Error {action}: {e.message}")
        except Exception as e:
            logging.warning(f"{name} failed while parsing: {e}")
            return Failure(ErrorKind.EXTRACTION_FAILURE, f"Error {action}: {e}")
        return Success(payload)

    def search_properties(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        params = parse_search_params(args, self.settings.page_size)
        search_url = self.urls.build(params)
        html = self.fetch(search_url)
        results = ListingParser(self.settings.base_url).parse(make_soup(html))
        logging.info(f"search_properties: {len(results.properties)} listings ({results.total_results or 'no count'})")
        return {
            "totalResults": results.total_results,
            "properties": [p.to_dict() for p in results.properties],
            "searchParams": dict(args),
            "searchUrl": search_url,
            "manualSearchUrl": self.urls.build_manual(params),
        }

    def get_property_details(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        property_id = require_str(args, "propertyId", allow_int=True)
        url = self.urls.property_url(property_id)
        html = self.fetch(url)
        detail = DetailParser(self.settings.base_url).parse(make_soup(html), property_id)
        detail.url = url
        return detail.to_dict()

    def get_area_statistics(self, args: Mapping[str, Any]) -> Dict[str, Any]:
        location = require_str(args, "location")
        url = self.urls.statistics_url(location)
        html = self.fetch(url)
        stats = StatisticsParser(self.settings.base_url).parse(make_soup(html), location)
        stats.url = url
        return stats.to_dict()
