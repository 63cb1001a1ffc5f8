"""Value records passed between the URL builder, the parsers and the router.

Every record is created per call and thrown away afterwards. ``to_dict()``
renders the camelCase keys used on the wire and drops optional fields that
were not found in the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

Number = Union[int, float]

PROPERTY_TYPES = ("houses", "flats", "bungalows", "land", "commercial", "other")
SORT_TYPES = (1, 2, 6, 10)  # 1=highest price, 2=lowest price, 6=newest listed, 10=oldest listed
RADIUS_CHOICES = (0.0, 0.25, 0.5, 1, 3, 5, 10, 15, 20, 30, 40)


def _compact(d: Dict[str, Any], optional: tuple) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if not (k in optional and v is None)}


@dataclass
class SearchParams:
    location: str
    min_price: Optional[Number] = None
    max_price: Optional[Number] = None
    property_type: Optional[str] = None
    bedrooms: Optional[int] = None
    radius: Optional[Number] = None
    sort_type: Optional[int] = None
    index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        d = {
            "location": self.location,
            "minPrice": self.min_price,
            "maxPrice": self.max_price,
            "propertyType": self.property_type,
            "bedrooms": self.bedrooms,
            "radius": self.radius,
            "sortType": self.sort_type,
            "index": self.index,
        }
        return {k: v for k, v in d.items() if v is not None}


@dataclass
class PropertyListing:
    id: str
    title: str
    price: str = ""
    address: str = ""
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    property_type: str = ""
    description: str = ""
    image_url: Optional[str] = None
    url: str = ""
    agent: str = ""
    date_added: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "title": self.title,
                "price": self.price,
                "address": self.address,
                "bedrooms": self.bedrooms,
                "bathrooms": self.bathrooms,
                "propertyType": self.property_type,
                "description": self.description,
                "imageUrl": self.image_url,
                "url": self.url,
                "agent": self.agent,
                "dateAdded": self.date_added,
            },
            ("bedrooms", "bathrooms", "imageUrl", "dateAdded"),
        )


@dataclass
class SearchResults:
    total_results: str = ""
    properties: List[PropertyListing] = field(default_factory=list)


@dataclass
class AgentInfo:
    name: str = ""
    phone: str = ""
    address: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "phone": self.phone, "address": self.address}


@dataclass
class PropertyDetail:
    id: str
    title: str = ""
    price: str = ""
    address: str = ""
    description: str = ""
    key_features: List[str] = field(default_factory=list)
    floorplan: Optional[str] = None
    images: List[str] = field(default_factory=list)
    agent: AgentInfo = field(default_factory=AgentInfo)
    property_details: Dict[str, str] = field(default_factory=dict)
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "title": self.title,
                "price": self.price,
                "address": self.address,
                "description": self.description,
                "keyFeatures": list(self.key_features),
                "floorplan": self.floorplan,
                "images": list(self.images),
                "agent": self.agent.to_dict(),
                "propertyDetails": dict(self.property_details),
                "url": self.url,
            },
            ("floorplan",),
        )


@dataclass
class AreaStatistics:
    location: str
    average_prices: Dict[str, str] = field(default_factory=dict)
    price_changes: Dict[str, str] = field(default_factory=dict)
    sales_volume: str = ""
    time_on_market: str = ""
    url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "location": self.location,
            "averagePrices": dict(self.average_prices),
            "priceChanges": dict(self.price_changes),
            "salesVolume": self.sales_volume,
            "timeOnMarket": self.time_on_market,
            "url": self.url,
        }
