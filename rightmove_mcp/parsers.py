"""
Rightmove HTML parsers
----------------------

Three parsers, one per page kind, each driven by a fixed selector table:

- ``ListingParser``     search results page -> ``SearchResults``
- ``DetailParser``      /properties/<id>    -> ``PropertyDetail``
- ``StatisticsParser``  /house-prices/...   -> ``AreaStatistics``

Rightmove's markup drifts (the detail page uses generated class names), so
a selector that matches nothing is never an error: the field falls back to
an empty string/list/dict, or ``None`` for fields that are optional.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .models import AgentInfo, AreaStatistics, PropertyDetail, PropertyListing, SearchResults

# =========================
# Selector tables
# =========================

LISTING_CARD = ".l-searchResult"
LISTING_RESULT_COUNT = ".searchHeader-resultCount"
LISTING_LINK = "a"
LISTING_TEXT_FIELDS = {
    "title": ".propertyCard-title",
    "price": ".propertyCard-priceValue",
    "address": ".propertyCard-address",
    "property_type": ".propertyCard-type",
    "description": ".propertyCard-description",
    "agent": ".propertyCard-contactsItem-company",
    "date_added": ".propertyCard-branchSummary-addedOrReduced span",
}
LISTING_IMAGE = (".propertyCard-img img", ("src", "data-lazy-src"))

DETAIL_TEXT_FIELDS = {
    "title": "h1",
    "price": "._1gfnqJ3Vtd1z40MlC0MzXu span",
    "address": ".WJG_W5-Y4EEYYiG-9-6KJ",
    "description": "#property-description .STw8udCxUaBUMfOOZu0iL._3nPVD8y1gPjYEgMtf6xC2l",
}
DETAIL_AGENT_FIELDS = {
    "name": "._2E1qBJkWUYMJYHfYJzUb_r",
    "phone": 'a[href^="tel:"]',
    "address": "._2w3iWfHdXvgf4aKdCEOD-Z",
}
DETAIL_FLOORPLAN = ("._2ZNXb7csRmW8bV_GFGUUgK img", ("src", "data-src"))
DETAIL_KEY_FEATURES = ".lIhZ24u1NjKWbswEMIUYFS li"
DETAIL_GALLERY = ("._2yl-M5w4_W7_bPcyZsS8aH img", ("src", "data-src"))
DETAIL_ROWS = ("._1u12RxIYGO3uXgeJyApCVH", "dt", "dd")

STATS_DATA_CELL = ".ksc_table-data-cell"
STATS_HEADER_CLASS = "ksc_table-header-cell"
STATS_PRICE_CHANGES = ".ksc_price-changes"
STATS_TEXT_FIELDS = {
    "sales_volume": ".ksc_sales-volume",
    "time_on_market": ".ksc_time-on-market",
}

PROPERTY_LINK_RE = re.compile(r"/property-(\d+)\.html")
BED_RE = re.compile(r"(\d+)\s*bed", re.I)
BATH_RE = re.compile(r"(\d+)\s*bath", re.I)

# =========================
# Helpers
# =========================

def make_soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "html.parser")

def clean_text(s: Optional[str]) -> str:
    if not s:
        return ""
    return re.sub(r"\s+", " ", s).strip()

def node_text(node: Optional[Tag]) -> str:
    if node is None:
        return ""
    return clean_text(node.get_text(" ", strip=True))

def select_text(root: Tag, selector: str) -> str:
    return node_text(root.select_one(selector))

def first_attr(node: Optional[Tag], attrs: Sequence[str]) -> Optional[str]:
    """Value of the first non-empty attribute in ``attrs`` (primary, then lazy-load)."""
    if node is None:
        return None
    for attr in attrs:
        val = node.get(attr)
        if val and str(val).strip():
            return str(val).strip()
    return None

def extract_first_int(regex, text):
    if not text:
        return None
    m = regex.search(text)
    return int(m.group(1)) if m else None

def pair_cells(pairs: Iterable[Tuple[str, str]]) -> Dict[str, str]:
    """Build a label -> value mapping; blank pairs are skipped, later labels win."""
    out: Dict[str, str] = {}
    for label, value in pairs:
        if label and value:
            out[label] = value
    return out

# =========================
# Parsers
# =========================

class BaseParser:
    NAME: str = "base"

    def __init__(self, base_url: str = "") -> None:
        self.base_url = base_url


class ListingParser(BaseParser):
    NAME = "listing"

    def parse(self, soup: BeautifulSoup) -> SearchResults:
        cards = soup.select(LISTING_CARD)
        logging.debug(f"{self.NAME}: found {len(cards)} cards with '{LISTING_CARD}'")

        listings: List[PropertyListing] = []
        for card in cards:
            item = self._parse_card(card)
            if item:
                listings.append(item)
            else:
                logging.debug(f"{self.NAME}: dropped card without id/title")

        return SearchResults(
            total_results=select_text(soup, LISTING_RESULT_COUNT),
            properties=listings,
        )

    def _parse_card(self, card: Tag) -> Optional[PropertyListing]:
        fields = {name: select_text(card, sel) for name, sel in LISTING_TEXT_FIELDS.items()}

        link = card.select_one(LISTING_LINK)
        href = first_attr(link, ("href",)) or ""
        m = PROPERTY_LINK_RE.search(href)
        property_id = m.group(1) if m else ""
        if not property_id or not fields["title"]:
            return None

        blob = f"{fields['title']} {fields['description']}"
        img_sel, img_attrs = LISTING_IMAGE

        return PropertyListing(
            id=property_id,
            title=fields["title"],
            price=fields["price"],
            address=fields["address"],
            bedrooms=extract_first_int(BED_RE, blob),
            bathrooms=extract_first_int(BATH_RE, blob),
            property_type=fields["property_type"],
            description=fields["description"],
            image_url=first_attr(card.select_one(img_sel), img_attrs),
            url=urljoin(self.base_url + "/", href),
            agent=fields["agent"],
            date_added=fields["date_added"] or None,
        )


class DetailParser(BaseParser):
    NAME = "detail"

    def parse(self, soup: BeautifulSoup, property_id: str) -> PropertyDetail:
        fields = {name: select_text(soup, sel) for name, sel in DETAIL_TEXT_FIELDS.items()}
        agent = AgentInfo(**{name: select_text(soup, sel) for name, sel in DETAIL_AGENT_FIELDS.items()})
        plan_sel, plan_attrs = DETAIL_FLOORPLAN

        detail = PropertyDetail(
            id=property_id,
            title=fields["title"],
            price=fields["price"],
            address=fields["address"],
            description=fields["description"],
            key_features=self._key_features(soup),
            floorplan=first_attr(soup.select_one(plan_sel), plan_attrs),
            images=self._images(soup),
            agent=agent,
            property_details=self._property_details(soup),
        )
        logging.debug(
            f"{self.NAME}: {property_id} -> {len(detail.key_features)} features, "
            f"{len(detail.images)} images, {len(detail.property_details)} detail rows"
        )
        return detail

    def _key_features(self, soup: BeautifulSoup) -> List[str]:
        features = [node_text(li) for li in soup.select(DETAIL_KEY_FEATURES)]
        return [f for f in features if f]

    def _images(self, soup: BeautifulSoup) -> List[str]:
        sel, attrs = DETAIL_GALLERY
        images: List[str] = []
        for img in soup.select(sel):
            src = first_attr(img, attrs)
            if src and src not in images:
                images.append(src)
        return images

    def _property_details(self, soup: BeautifulSoup) -> Dict[str, str]:
        row_sel, label_sel, value_sel = DETAIL_ROWS
        return pair_cells(
            (select_text(row, label_sel), select_text(row, value_sel))
            for row in soup.select(row_sel)
        )


class StatisticsParser(BaseParser):
    NAME = "statistics"

    def parse(self, soup: BeautifulSoup, location: str) -> AreaStatistics:
        averages: List[Tuple[str, str]] = []
        changes: List[Tuple[str, str]] = []
        for cell in soup.select(STATS_DATA_CELL):
            pair = (self._header_label(cell), node_text(cell))
            if cell.find_parent(class_=STATS_PRICE_CHANGES.lstrip(".")):
                changes.append(pair)
            else:
                averages.append(pair)

        fields = {name: select_text(soup, sel) for name, sel in STATS_TEXT_FIELDS.items()}
        return AreaStatistics(
            location=location,
            average_prices=pair_cells(averages),
            price_changes=pair_cells(changes),
            sales_volume=fields["sales_volume"],
            time_on_market=fields["time_on_market"],
        )

    @staticmethod
    def _header_label(cell: Tag) -> str:
        # only the element immediately before the cell counts as its header
        prev = cell.find_previous_sibling()
        if prev is None or STATS_HEADER_CLASS not in (prev.get("class") or []):
            return ""
        return node_text(prev)
